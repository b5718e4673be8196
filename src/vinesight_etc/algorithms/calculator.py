"""
ETc calculator facade for vineyard irrigation advice.

This module wires the reference ET engine, the crop coefficient resolver and
the irrigation need calculator into a single pure call. Every caller (CLI,
services, other applications) goes through this one implementation.
"""

import logging
from dataclasses import replace
from typing import Optional, Union, TYPE_CHECKING

from ..core import constants
from ..models import (
    WeatherObservation,
    Location,
    GrowthStage,
    IrrigationMethod,
    SoilType,
    FarmProfile,
    ETcResult,
    ValidationResult,
)
from .penman_monteith import PenmanMonteithCalculator
from .crop_coefficient import CropCoefficientResolver
from .irrigation import IrrigationNeedCalculator
from .cross_validation import CrossValidator

if TYPE_CHECKING:
    from ..core.config import Config


class ETcCalculator:
    """
    High-level calculator for crop evapotranspiration and irrigation need.

    Holds only configuration; each call works on its own inputs and returns
    a new result, so one instance is safe to share between threads.
    """

    def __init__(
        self,
        reference_et: Optional[PenmanMonteithCalculator] = None,
        crop_coefficients: Optional[CropCoefficientResolver] = None,
        irrigation: Optional[IrrigationNeedCalculator] = None,
        validator: Optional[CrossValidator] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize ETc calculator.

        Args:
            reference_et: Reference ET engine
            crop_coefficients: Crop coefficient resolver
            irrigation: Irrigation need calculator
            validator: Cross-validator for external reference ETo
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.reference_et = reference_et or PenmanMonteithCalculator(logger=self.logger)
        self.crop_coefficients = crop_coefficients or CropCoefficientResolver(logger=self.logger)
        self.irrigation = irrigation or IrrigationNeedCalculator(logger=self.logger)
        self.validator = validator or CrossValidator(logger=self.logger)

    @classmethod
    def from_config(
        cls,
        config: "Config",
        logger: Optional[logging.Logger] = None
    ) -> "ETcCalculator":
        """
        Build a calculator from application configuration.

        Args:
            config: Application configuration
            logger: Logger instance

        Returns:
            Configured ETcCalculator
        """
        logger = logger or logging.getLogger(__name__)
        return cls(
            reference_et=PenmanMonteithCalculator(
                albedo=config.albedo,
                strict=config.strict_validation,
                logger=logger
            ),
            crop_coefficients=CropCoefficientResolver(logger=logger),
            irrigation=IrrigationNeedCalculator(
                discharge_rates=config.discharge_rates,
                application_efficiency=config.application_efficiency,
                high_eto_threshold=config.high_eto_threshold,
                logger=logger
            ),
            validator=CrossValidator(
                tolerance_pct=config.validation_tolerance_pct,
                logger=logger
            ),
            logger=logger
        )

    def calculate(
        self,
        weather: WeatherObservation,
        growth_stage: Union[str, GrowthStage],
        location: Optional[Location] = None,
        irrigation_method: Optional[Union[str, IrrigationMethod]] = None,
        soil_type: Optional[Union[str, SoilType]] = None,
        farm: Optional[FarmProfile] = None
    ) -> ETcResult:
        """
        Calculate ETc, irrigation need and the irrigation recommendation.

        Args:
            weather: Daily weather observation
            growth_stage: Grape growth stage (enum or name)
            location: Site location (defaults applied when omitted)
            irrigation_method: Overrides the farm profile's method
            soil_type: Overrides the farm profile's soil type
            farm: Farm profile (area, discharge rate)

        Returns:
            ETcResult

        Raises:
            ConfigurationError: Unknown growth stage, method or soil type
            InvalidInputError: Impossible readings with strict validation on
        """
        # Resolve every enumerated input before any computation
        stage = GrowthStage.parse(growth_stage)
        farm = self._resolve_farm(farm, irrigation_method, soil_type)

        try:
            components = self.reference_et.calculate_with_components(weather, location)
            kc = self.crop_coefficients.get_crop_coefficient(stage)

            etc = self.irrigation.calculate_etc(components.eto, kc)
            rainfall = max(0.0, weather.rainfall)
            irrigation_need = self.irrigation.calculate_irrigation_need(etc, rainfall)

            recommendation = self.irrigation.recommend(
                irrigation_need=irrigation_need,
                eto=components.eto,
                growth_stage=stage,
                weather=replace(weather, rainfall=rainfall),
                farm=farm,
                confidence=components.confidence,
                issues=components.issues
            )
        except Exception as e:
            self.logger.error(f"Error calculating ETc for {weather.date}: {e}")
            raise

        self.logger.info(
            f"ETc {weather.date.isoformat()} [{stage.value}]: ETo={components.eto:.2f}, "
            f"Kc={kc:.2f}, ETc={etc:.2f}, need={irrigation_need:.2f} mm "
            f"({components.confidence.value} confidence)"
        )

        return ETcResult(
            date=weather.date,
            growth_stage=stage,
            eto=components.eto,
            kc=kc,
            etc=etc,
            irrigation_need=irrigation_need,
            irrigation_recommendation=recommendation,
            confidence=components.confidence,
            radiation_source=components.radiation_source,
            issues=components.issues,
            components=components
        )

    def validate_against_reference(
        self,
        computed_eto: float,
        reference_eto: Optional[float]
    ) -> Optional[ValidationResult]:
        """
        Cross-validate a computed ETo; None when no reference is available.
        """
        return self.validator.validate(computed_eto, reference_eto)

    @staticmethod
    def _resolve_farm(
        farm: Optional[FarmProfile],
        irrigation_method: Optional[Union[str, IrrigationMethod]],
        soil_type: Optional[Union[str, SoilType]]
    ) -> FarmProfile:
        farm = farm or FarmProfile()
        return replace(
            farm,
            irrigation_method=IrrigationMethod.parse(
                irrigation_method if irrigation_method is not None else farm.irrigation_method
            ),
            soil_type=SoilType.parse(
                soil_type if soil_type is not None else farm.soil_type
            )
        )


_default_calculator: Optional[ETcCalculator] = None


def _get_default_calculator() -> ETcCalculator:
    global _default_calculator
    if _default_calculator is None:
        _default_calculator = ETcCalculator()
    return _default_calculator


def compute_irrigation_advice(
    weather: WeatherObservation,
    growth_stage: Union[str, GrowthStage],
    location: Optional[Location] = None,
    irrigation_method: Optional[Union[str, IrrigationMethod]] = None,
    soil_type: Optional[Union[str, SoilType]] = None,
    farm: Optional[FarmProfile] = None
) -> ETcResult:
    """
    Compute ETo, Kc, ETc, irrigation need and advice with default settings.

    See ETcCalculator.calculate().
    """
    return _get_default_calculator().calculate(
        weather=weather,
        growth_stage=growth_stage,
        location=location,
        irrigation_method=irrigation_method,
        soil_type=soil_type,
        farm=farm
    )


def validate_against_reference(
    computed_eto: float,
    reference_eto: Optional[float],
    tolerance_pct: float = constants.VALIDATION_TOLERANCE_PCT
) -> Optional[ValidationResult]:
    """
    Compare a computed ETo with an external reference ETo.

    Returns None when the reference is unavailable.
    """
    return CrossValidator(tolerance_pct=tolerance_pct).validate(computed_eto, reference_eto)
