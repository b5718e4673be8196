"""
Exception hierarchy for vineyard ETc estimation.

Missing optional inputs (e.g. no solar radiation) are never errors; they are
handled by the radiation fallback chain.
"""

from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ..models import InputIssue


class VineSightError(Exception):
    """Base exception for all vinesight_etc errors."""

    def __init__(self, message: str, component: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.component = component

    def __str__(self) -> str:
        if self.component:
            return f"{self.message} [Component: {self.component}]"
        return self.message


class ConfigurationError(VineSightError):
    """Unsupported growth stage, irrigation method, soil type or config value."""
    pass


class InvalidInputError(VineSightError):
    """
    Physically impossible weather or location readings.

    Only raised in strict mode; by default such readings are clamped and
    reported as input issues on the result.
    """

    def __init__(
        self,
        message: str,
        issues: Optional[List["InputIssue"]] = None,
        component: Optional[str] = None
    ):
        super().__init__(message, component=component)
        self.issues = issues or []


class WeatherFetchError(VineSightError):
    """External weather data could not be fetched or parsed."""
    pass
