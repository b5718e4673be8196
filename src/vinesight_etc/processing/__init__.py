"""
Data processing module for vineyard ETc estimation.

Provides unit conversion and validation of weather inputs.
"""

from .converter import UnitConverter
from .validator import InputValidator

__all__ = [
    "UnitConverter",
    "InputValidator",
]
