"""
Irrigation need module.

Turns crop evapotranspiration into a net irrigation depth and an advisory
schedule.

Unit convention:
    gross depth (mm) = net need (mm) / application efficiency
    volume (L)       = gross depth (mm) x field area (m²)   [1 mm on 1 m² = 1 L]
    duration (h)     = volume (L) / system discharge rate (L/h)
"""

import logging
from typing import Dict, List, Optional, Sequence

from ..core import constants
from ..core.exceptions import ConfigurationError
from ..models import (
    WeatherObservation,
    GrowthStage,
    IrrigationMethod,
    SoilType,
    FarmProfile,
    Confidence,
    InputIssue,
    IrrigationRecommendation,
)

FREQUENCY_BY_STAGE: Dict[GrowthStage, str] = {
    GrowthStage.DORMANT: "only if soil is dry (monthly check)",
    GrowthStage.BUDBREAK: "every 5-7 days",
    GrowthStage.FLOWERING: "every 3-4 days",
    GrowthStage.FRUIT_SET: "every 2 days",
    GrowthStage.VERAISON: "every 3 days",
    GrowthStage.HARVEST: "every 5-7 days",
    GrowthStage.POST_HARVEST: "weekly",
}

STAGE_NOTES: Dict[GrowthStage, str] = {
    GrowthStage.DORMANT: "Dormant season - irrigation rarely required",
    GrowthStage.FLOWERING: "Critical growth stage - maintain consistent moisture",
    GrowthStage.FRUIT_SET: "Critical growth stage - maintain consistent moisture",
    GrowthStage.VERAISON: "Veraison stage - controlled water stress improves fruit quality",
    GrowthStage.HARVEST: "Harvest time - keep irrigation light to protect sugar concentration",
}

SOIL_CYCLES: Dict[SoilType, int] = {
    SoilType.SANDY: 2,
    SoilType.LOAMY: 1,
    SoilType.CLAY: 1,
}

NO_IRRIGATION_FREQUENCY = "as needed"


class IrrigationNeedCalculator:
    """Derive irrigation need, run duration and advisory notes."""

    def __init__(
        self,
        discharge_rates: Optional[Dict[str, float]] = None,
        application_efficiency: Optional[Dict[str, float]] = None,
        high_eto_threshold: float = constants.HIGH_ETO_THRESHOLD,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize calculator.

        Args:
            discharge_rates: System discharge rate per method name (L/h)
            application_efficiency: Application efficiency per method name (0-1]
            high_eto_threshold: ETo above which a high-demand note is added (mm/day)
            logger: Logger instance
        """
        self.discharge_rates = dict(discharge_rates or constants.DEFAULT_DISCHARGE_RATES)
        self.application_efficiency = dict(
            application_efficiency or constants.DEFAULT_APPLICATION_EFFICIENCY
        )
        self.high_eto_threshold = high_eto_threshold
        self.logger = logger or logging.getLogger(__name__)

    @staticmethod
    def calculate_etc(eto: float, kc: float) -> float:
        """Crop evapotranspiration ETc = ETo x Kc (mm/day)."""
        return eto * kc

    @staticmethod
    def calculate_irrigation_need(etc: float, rainfall: float) -> float:
        """
        Net irrigation need after effective rainfall.

        Effective rainfall is the full daily rainfall; there is no carry-over
        between days.

        Args:
            etc: Crop evapotranspiration (mm/day)
            rainfall: Daily rainfall (mm)

        Returns:
            Irrigation need (mm), never negative
        """
        return max(0.0, etc - max(0.0, rainfall))

    def calculate_duration(self, irrigation_need: float, farm: FarmProfile) -> float:
        """
        Run time needed to apply ``irrigation_need`` over the field.

        Args:
            irrigation_need: Net irrigation depth (mm)
            farm: Farm profile (method, area, optional discharge override)

        Returns:
            Duration (hours)

        Raises:
            ConfigurationError: If the method is unknown or the discharge rate
                                or efficiency is not positive
        """
        return self.calculate_volume(irrigation_need, farm) / self._discharge_rate(farm)

    def calculate_volume(self, irrigation_need: float, farm: FarmProfile) -> float:
        """Gross water volume (L) to apply ``irrigation_need`` over the field."""
        method = IrrigationMethod.parse(farm.irrigation_method)
        efficiency = self.application_efficiency.get(method.value)
        if efficiency is None or not 0 < efficiency <= 1:
            raise ConfigurationError(
                f"Invalid application efficiency for {method.value}: {efficiency!r}",
                component="irrigation"
            )
        if farm.field_area <= 0:
            raise ConfigurationError(
                f"Field area must be positive, got {farm.field_area}",
                component="irrigation"
            )
        return irrigation_need / efficiency * farm.field_area

    def recommend(
        self,
        irrigation_need: float,
        eto: float,
        growth_stage: GrowthStage,
        weather: WeatherObservation,
        farm: Optional[FarmProfile] = None,
        confidence: Confidence = Confidence.HIGH,
        issues: Sequence[InputIssue] = ()
    ) -> IrrigationRecommendation:
        """
        Build the advisory irrigation recommendation.

        Args:
            irrigation_need: Net irrigation need (mm)
            eto: Reference evapotranspiration (mm/day)
            growth_stage: Current growth stage
            weather: Observation the need was computed from
            farm: Farm profile (defaults: drip, loamy, 1 ha)
            confidence: Confidence of the ETo estimate
            issues: Input adjustments made by the ETo engine

        Returns:
            IrrigationRecommendation
        """
        farm = farm or FarmProfile()
        method = IrrigationMethod.parse(farm.irrigation_method)
        soil = SoilType.parse(farm.soil_type)
        # Discharge problems must surface even on days without irrigation
        self._discharge_rate(farm)

        should_irrigate = round(irrigation_need, 2) > 0

        if should_irrigate:
            water_volume = self.calculate_volume(irrigation_need, farm)
            duration = self.calculate_duration(irrigation_need, farm)
            cycles = SOIL_CYCLES[soil]
            frequency = self._frequency(growth_stage, soil, irrigation_need, method)
        else:
            water_volume = 0.0
            duration = 0.0
            cycles = 0
            frequency = NO_IRRIGATION_FREQUENCY

        notes = self._notes(
            should_irrigate, eto, growth_stage, weather, method, soil, confidence, issues
        )

        self.logger.debug(
            f"Irrigation need {irrigation_need:.2f} mm -> irrigate={should_irrigate}, "
            f"duration={duration:.2f}h, volume={water_volume:.0f}L, cycles={cycles}"
        )

        return IrrigationRecommendation(
            should_irrigate=should_irrigate,
            duration=round(duration, 2),
            frequency=frequency,
            notes=tuple(notes),
            cycles=cycles,
            water_volume=round(water_volume, 1)
        )

    def _discharge_rate(self, farm: FarmProfile) -> float:
        method = IrrigationMethod.parse(farm.irrigation_method)
        rate = farm.discharge_rate
        if rate is None:
            rate = self.discharge_rates.get(method.value)
        if rate is None or rate <= 0:
            raise ConfigurationError(
                f"Discharge rate for {method.value} must be positive, got {rate!r}",
                component="irrigation"
            )
        return rate

    @staticmethod
    def _frequency(
        growth_stage: GrowthStage,
        soil: SoilType,
        irrigation_need: float,
        method: IrrigationMethod
    ) -> str:
        frequency = FREQUENCY_BY_STAGE[growth_stage]
        if (
            growth_stage is GrowthStage.FRUIT_SET
            and method is IrrigationMethod.DRIP
            and irrigation_need > constants.HIGH_DEMAND_THRESHOLD
        ):
            frequency = "daily"

        if soil is SoilType.SANDY:
            frequency += ", split into shorter, more frequent cycles"
        elif soil is SoilType.CLAY:
            frequency += ", as fewer, longer cycles"
        return frequency

    def _notes(
        self,
        should_irrigate: bool,
        eto: float,
        growth_stage: GrowthStage,
        weather: WeatherObservation,
        method: IrrigationMethod,
        soil: SoilType,
        confidence: Confidence,
        issues: Sequence[InputIssue]
    ) -> List[str]:
        notes: List[str] = []

        if not should_irrigate:
            if weather.rainfall > 0:
                notes.append("No irrigation needed - rainfall exceeded crop demand")
            else:
                notes.append("No irrigation needed - crop water demand is negligible")

        stage_note = STAGE_NOTES.get(growth_stage)
        if stage_note:
            notes.append(stage_note)

        if eto > self.high_eto_threshold:
            notes.append("High evapotranspiration day - monitor soil moisture")

        if weather.relative_humidity > constants.HIGH_HUMIDITY_THRESHOLD:
            notes.append("High humidity - monitor for disease risk")

        if weather.wind_speed > constants.HIGH_WIND_THRESHOLD:
            if method is IrrigationMethod.SPRINKLER:
                notes.append("Windy conditions - expect sprinkler drift, prefer calm hours")
            else:
                notes.append("Windy conditions - may increase water loss")

        if should_irrigate:
            if soil is SoilType.SANDY:
                notes.append("Sandy soil - use shorter, more frequent irrigation cycles")
            elif soil is SoilType.CLAY:
                notes.append("Clay soil - use longer, less frequent irrigation cycles")

        if confidence is Confidence.LOW:
            notes.append(
                "Low confidence estimate - add solar radiation or sunshine hours for accuracy"
            )

        for issue in issues:
            notes.append(f"Input adjusted - {issue.message}")

        return notes
