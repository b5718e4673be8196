"""
Core utilities for vineyard ETc estimation.

Provides configuration management, constants, errors and date helpers.
"""

from .config import Config
from . import constants
from .date_utils import DateUtils
from .exceptions import (
    VineSightError,
    ConfigurationError,
    InvalidInputError,
    WeatherFetchError,
)

__all__ = [
    "Config",
    "constants",
    "DateUtils",
    "VineSightError",
    "ConfigurationError",
    "InvalidInputError",
    "WeatherFetchError",
]
