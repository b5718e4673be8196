"""
Data models for vineyard ETc estimation.

Contains DTOs for weather input, crop/farm profile and calculation results.
"""

from .weather import WeatherObservation, Location, InputIssue
from .crop import GrowthStage, IrrigationMethod, SoilType, FarmProfile
from .results import (
    Confidence,
    RadiationSource,
    ReferenceETComponents,
    IrrigationRecommendation,
    ETcResult,
    ValidationResult,
)

__all__ = [
    "WeatherObservation",
    "Location",
    "InputIssue",
    "GrowthStage",
    "IrrigationMethod",
    "SoilType",
    "FarmProfile",
    "Confidence",
    "RadiationSource",
    "ReferenceETComponents",
    "IrrigationRecommendation",
    "ETcResult",
    "ValidationResult",
]
