"""
Input validation module.

Farm users type weather readings by hand, so impossible values are clamped
to the nearest valid bound and reported as issues instead of aborting the
calculation. Strict callers can use validate_observation() to reject them.
"""

import logging
from dataclasses import replace
from typing import List, Optional, Tuple

from ..core import constants
from ..models import WeatherObservation, Location, InputIssue

MIN_WIND_HEIGHT = 0.5  # m, below this the log wind profile is meaningless
MAX_SUNSHINE_HOURS = 24.0


class InputValidator:
    """Validate and sanitize weather observations and locations."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize input validator.

        Args:
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    def validate_observation(
        self,
        weather: WeatherObservation,
        location: Location
    ) -> Tuple[bool, List[str]]:
        """
        Check an observation and location for physically impossible values.

        Args:
            weather: Daily weather observation
            location: Site location

        Returns:
            Tuple of (is_valid, list_of_errors)
        """
        _, _, issues = self.sanitize(weather, location)
        errors = [issue.message for issue in issues]
        return len(errors) == 0, errors

    def sanitize(
        self,
        weather: WeatherObservation,
        location: Location
    ) -> Tuple[WeatherObservation, Location, List[InputIssue]]:
        """
        Clamp impossible readings to valid bounds.

        Args:
            weather: Daily weather observation
            location: Site location

        Returns:
            Tuple of (weather, location, issues) where weather and location are
            new instances when anything was adjusted
        """
        issues: List[InputIssue] = []
        changes = {}

        if weather.temperature_max < weather.temperature_min:
            issues.append(InputIssue(
                field="temperature_max",
                original=weather.temperature_max,
                adjusted=weather.temperature_min,
                message=(
                    f"temperature_max ({weather.temperature_max}) was below "
                    f"temperature_min ({weather.temperature_min}); values swapped"
                )
            ))
            changes["temperature_max"] = weather.temperature_min
            changes["temperature_min"] = weather.temperature_max

        humidity = self._clamp(
            weather.relative_humidity, constants.HUMIDITY_MIN, constants.HUMIDITY_MAX
        )
        if humidity != weather.relative_humidity:
            issues.append(self._clamp_issue("relative_humidity", weather.relative_humidity, humidity))
            changes["relative_humidity"] = humidity

        for field_name in ("wind_speed", "rainfall", "solar_radiation", "solar_radiation_lux"):
            value = getattr(weather, field_name)
            if value is not None and value < 0:
                issues.append(self._clamp_issue(field_name, value, 0.0))
                changes[field_name] = 0.0

        if weather.sunshine_hours is not None:
            sunshine = self._clamp(weather.sunshine_hours, 0.0, MAX_SUNSHINE_HOURS)
            if sunshine != weather.sunshine_hours:
                issues.append(self._clamp_issue("sunshine_hours", weather.sunshine_hours, sunshine))
                changes["sunshine_hours"] = sunshine

        if weather.wind_height < MIN_WIND_HEIGHT:
            issues.append(InputIssue(
                field="wind_height",
                original=weather.wind_height,
                adjusted=constants.STANDARD_WIND_HEIGHT,
                message=(
                    f"wind_height {weather.wind_height} m is not a valid anemometer "
                    f"height; using {constants.STANDARD_WIND_HEIGHT} m"
                )
            ))
            changes["wind_height"] = constants.STANDARD_WIND_HEIGHT

        latitude = self._clamp(
            location.latitude, -constants.LATITUDE_LIMIT, constants.LATITUDE_LIMIT
        )
        if latitude != location.latitude:
            issues.append(self._clamp_issue("latitude", location.latitude, latitude))
            location = replace(location, latitude=latitude)

        if changes:
            weather = replace(weather, **changes)

        for issue in issues:
            self.logger.warning(f"Input adjusted: {issue.message}")

        return weather, location, issues

    @staticmethod
    def _clamp(value: float, lower: float, upper: float) -> float:
        return max(lower, min(upper, value))

    @staticmethod
    def _clamp_issue(field_name: str, original: float, adjusted: float) -> InputIssue:
        return InputIssue(
            field=field_name,
            original=original,
            adjusted=adjusted,
            message=f"{field_name} {original} is out of range; clamped to {adjusted}"
        )
