"""
Weather and location data models.

Contains DTOs for the daily weather observation and site location used by the
reference evapotranspiration engine.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core import constants


@dataclass(frozen=True)
class WeatherObservation:
    """Normalized daily weather observation."""

    date: date
    temperature_max: float  # °C
    temperature_min: float  # °C
    relative_humidity: float  # Mean relative humidity (%)
    wind_speed: float  # m/s at wind_height
    rainfall: float = 0.0  # mm
    solar_radiation: Optional[float] = None  # MJ/m²/day
    solar_radiation_lux: Optional[float] = None  # daily mean illuminance (lux)
    sunshine_hours: Optional[float] = None  # hours of bright sunshine
    wind_height: float = constants.STANDARD_WIND_HEIGHT  # m

    @property
    def has_radiation_input(self) -> bool:
        """True when any direct or sunshine-based radiation input is present."""
        return any(
            value is not None
            for value in (self.solar_radiation, self.solar_radiation_lux, self.sunshine_hours)
        )


@dataclass(frozen=True)
class Location:
    """Site location for astronomical and pressure terms."""

    latitude: float = constants.DEFAULT_LATITUDE
    longitude: float = constants.DEFAULT_LONGITUDE
    elevation: Optional[float] = None  # m above sea level
    coastal: bool = False

    @property
    def resolved_elevation(self) -> float:
        """Elevation with the default applied when absent."""
        if self.elevation is None:
            return constants.DEFAULT_ELEVATION
        return self.elevation


@dataclass(frozen=True)
class InputIssue:
    """A reading that was adjusted to keep the calculation physically valid."""

    field: str
    original: float
    adjusted: float
    message: str
