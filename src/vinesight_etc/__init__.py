"""
VineSight ETc: vineyard crop evapotranspiration and irrigation advice.

This package estimates daily reference evapotranspiration with the FAO-56
Penman-Monteith method, scales it by grape crop coefficients and turns the
result into an irrigation recommendation.
"""

__version__ = "0.1.0"
__description__ = "Vineyard ETc and irrigation advice based on FAO-56 Penman-Monteith"


def __getattr__(name):
    """Lazy import to avoid importing dependencies when not needed."""
    if name == "IrrigationAdvisorApp":
        from .main import IrrigationAdvisorApp
        return IrrigationAdvisorApp
    if name in ("compute_irrigation_advice", "validate_against_reference", "ETcCalculator"):
        from . import algorithms
        return getattr(algorithms, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "IrrigationAdvisorApp",
    "ETcCalculator",
    "compute_irrigation_advice",
    "validate_against_reference",
]
