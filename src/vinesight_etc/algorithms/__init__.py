"""
Calculation algorithms for vineyard ETc estimation.

Provides the FAO-56 reference ET engine, solar radiation fallbacks, grape
crop coefficients, irrigation need and cross-validation against a
reference ETo.
"""

from .radiation import SolarRadiationCalculator, RadiationEstimate
from .penman_monteith import PenmanMonteithCalculator
from .crop_coefficient import CropCoefficientResolver, StageRequirement, GRAPE_KC_VALUES
from .irrigation import IrrigationNeedCalculator
from .cross_validation import CrossValidator
from .growth_stage import infer_growth_stage
from .calculator import ETcCalculator, compute_irrigation_advice, validate_against_reference

__all__ = [
    "SolarRadiationCalculator",
    "RadiationEstimate",
    "PenmanMonteithCalculator",
    "CropCoefficientResolver",
    "StageRequirement",
    "GRAPE_KC_VALUES",
    "IrrigationNeedCalculator",
    "CrossValidator",
    "infer_growth_stage",
    "ETcCalculator",
    "compute_irrigation_advice",
    "validate_against_reference",
]
