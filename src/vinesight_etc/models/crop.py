"""
Crop and farm profile models.

Growth stages, irrigation methods and soil types are closed enumerations;
parsing an unknown value raises ConfigurationError rather than guessing.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

from ..core import constants
from ..core.exceptions import ConfigurationError


def _normalize(value: str) -> str:
    return value.strip().lower().replace("-", "_").replace(" ", "_")


class GrowthStage(str, Enum):
    """Grape phenological stage."""

    DORMANT = "dormant"
    BUDBREAK = "budbreak"
    FLOWERING = "flowering"
    FRUIT_SET = "fruit_set"
    VERAISON = "veraison"
    HARVEST = "harvest"
    POST_HARVEST = "post_harvest"

    @classmethod
    def parse(cls, value: Union[str, "GrowthStage"]) -> "GrowthStage":
        """
        Resolve a growth stage from its name.

        Accepts the canonical names plus the 'bud_break' spelling and
        hyphen/space separated variants.

        Raises:
            ConfigurationError: If the stage is not supported
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise ConfigurationError(
                f"Unsupported growth stage: {value!r}", component="growth_stage"
            )
        key = _normalize(value)
        key = _STAGE_ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            supported = ", ".join(stage.value for stage in cls)
            raise ConfigurationError(
                f"Unsupported growth stage: {value!r} (supported: {supported})",
                component="growth_stage"
            )

    @property
    def description(self) -> str:
        return _STAGE_INFO[self][0]

    @property
    def season(self) -> Tuple[int, ...]:
        """Calendar months (1-12) typical for this stage; display only."""
        return _STAGE_INFO[self][1]


_STAGE_ALIASES = {
    "bud_break": "budbreak",
    "postharvest": "post_harvest",
    "fruitset": "fruit_set",
}

_STAGE_INFO = {
    GrowthStage.DORMANT: ("Dormant season - minimal water needs", (12, 1, 2)),
    GrowthStage.BUDBREAK: ("Early season - buds swelling and breaking", (3,)),
    GrowthStage.FLOWERING: ("Flowering stage - moderate water needs", (4,)),
    GrowthStage.FRUIT_SET: ("Fruit development - peak water needs", (5, 6)),
    GrowthStage.VERAISON: ("Ripening stage - reducing water stress", (7, 8)),
    GrowthStage.HARVEST: ("Harvest time - controlled irrigation", (9, 10)),
    GrowthStage.POST_HARVEST: ("Post-harvest recovery and storage", (11,)),
}


class IrrigationMethod(str, Enum):
    """Irrigation delivery system."""

    DRIP = "drip"
    SPRINKLER = "sprinkler"
    SURFACE = "surface"

    @classmethod
    def parse(cls, value: Union[str, "IrrigationMethod"]) -> "IrrigationMethod":
        """
        Raises:
            ConfigurationError: If the method is not supported
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(_normalize(value))
        except (ValueError, AttributeError):
            raise ConfigurationError(
                f"Unsupported irrigation method: {value!r}", component="irrigation_method"
            )


class SoilType(str, Enum):
    """Soil texture class."""

    SANDY = "sandy"
    LOAMY = "loamy"
    CLAY = "clay"

    @classmethod
    def parse(cls, value: Union[str, "SoilType"]) -> "SoilType":
        """
        Raises:
            ConfigurationError: If the soil type is not supported
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(_normalize(value))
        except (ValueError, AttributeError):
            raise ConfigurationError(
                f"Unsupported soil type: {value!r}", component="soil_type"
            )


@dataclass(frozen=True)
class FarmProfile:
    """Irrigation system and soil of the block being scheduled."""

    irrigation_method: IrrigationMethod = IrrigationMethod.DRIP
    soil_type: SoilType = SoilType.LOAMY
    field_area: float = constants.DEFAULT_FIELD_AREA  # m²
    discharge_rate: Optional[float] = None  # L/h, overrides the method default
