"""
Calculation result models.

Contains DTOs returned by the ETc pipeline and the cross-validator.
Results are frozen; each request builds a fresh instance.
"""

from dataclasses import dataclass, asdict, field
from datetime import date
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from .crop import GrowthStage
from .weather import InputIssue


class Confidence(str, Enum):
    """Confidence tier of a reference ET estimate."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    def lowered(self, steps: int = 1) -> "Confidence":
        """Drop the tier by ``steps``, never below LOW."""
        order = [Confidence.LOW, Confidence.MEDIUM, Confidence.HIGH]
        index = max(0, order.index(self) - steps)
        return order[index]


class RadiationSource(str, Enum):
    """Which input the solar radiation term was resolved from."""

    MEASURED = "measured"
    LUX = "lux"
    SUNSHINE = "sunshine"
    TEMPERATURE = "temperature"

    @property
    def confidence(self) -> Confidence:
        if self in (RadiationSource.MEASURED, RadiationSource.LUX):
            return Confidence.HIGH
        if self is RadiationSource.SUNSHINE:
            return Confidence.MEDIUM
        return Confidence.LOW


@dataclass(frozen=True)
class ReferenceETComponents:
    """Reference ET with the intermediate FAO-56 values."""

    eto: float  # mm/day
    confidence: Confidence
    radiation_source: RadiationSource

    # Temperature, pressure and wind
    tmean: float  # °C
    pressure: float  # kPa
    gamma: float  # Psychrometric constant (kPa/°C)
    delta: float  # Slope of vapor pressure curve (kPa/°C)
    u2: float  # Wind speed at 2m (m/s)

    # Vapor pressure
    es: float  # Mean saturation vapor pressure (kPa)
    ea: float  # Actual vapor pressure (kPa)
    vpd: float  # Vapor pressure deficit (kPa)

    # Radiation (MJ m⁻² day⁻¹)
    ra: float
    rs: float
    rso: float
    rns: float
    rnl: float
    rn: float
    daylight_hours: float

    radiation_term: float  # mm/day
    aerodynamic_term: float  # mm/day
    issues: Tuple[InputIssue, ...] = ()


@dataclass(frozen=True)
class IrrigationRecommendation:
    """Advisory irrigation schedule for the day."""

    should_irrigate: bool
    duration: float  # hours
    frequency: str
    notes: Tuple[str, ...] = ()
    cycles: int = 1
    water_volume: float = 0.0  # liters


@dataclass(frozen=True)
class ETcResult:
    """Result of the ETc and irrigation-need calculation."""

    date: date
    growth_stage: GrowthStage
    eto: float  # mm/day
    kc: float
    etc: float  # mm/day
    irrigation_need: float  # mm/day
    irrigation_recommendation: IrrigationRecommendation
    confidence: Confidence
    radiation_source: RadiationSource
    issues: Tuple[InputIssue, ...] = ()
    components: Optional[ReferenceETComponents] = field(default=None, compare=False)

    def to_dict(self, include_components: bool = False) -> Dict[str, Any]:
        """JSON-friendly representation."""
        data = asdict(self)
        data["date"] = self.date.isoformat()
        data["growth_stage"] = self.growth_stage.value
        data["confidence"] = self.confidence.value
        data["radiation_source"] = self.radiation_source.value
        data["irrigation_recommendation"]["notes"] = list(
            self.irrigation_recommendation.notes
        )
        data["issues"] = [asdict(issue) for issue in self.issues]
        if include_components and self.components is not None:
            components = data["components"]
            components["confidence"] = self.components.confidence.value
            components["radiation_source"] = self.components.radiation_source.value
            components.pop("issues", None)
        else:
            data.pop("components")
        return data


@dataclass(frozen=True)
class ValidationResult:
    """Comparison of computed ETo against an external reference ETo."""

    computed_eto: float  # mm/day
    reference_eto: float  # mm/day
    difference: float  # mm/day
    percentage_error: float  # %
    is_accurate: bool
    recommendation: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
