"""
Unit conversion module.

Converts the units weather providers and field sensors report into the units
the ETc pipeline expects (°C, m/s, MJ/m²/day, hours). Unknown units are
logged and passed through unchanged.
"""

import logging
from typing import Dict, Optional

from ..core import constants

# Factor from the given unit to MJ/m²/day (daily totals or daily means)
RADIATION_TO_MJ_DAY: Dict[str, float] = {
    "mj/m²": 1.0,
    "mj/m2": 1.0,
    "mj/m²/day": 1.0,
    "mj/m2/day": 1.0,
    "mj": 1.0,
    "w/m²": constants.WATT_M2_TO_MJ_DAY,
    "w/m2": constants.WATT_M2_TO_MJ_DAY,
    "wm-2": constants.WATT_M2_TO_MJ_DAY,
    "wh/m²": constants.WH_M2_TO_MJ,
    "wh/m2": constants.WH_M2_TO_MJ,
    "kwh/m²": constants.WH_M2_TO_MJ * 1000,
    "kwh/m2": constants.WH_M2_TO_MJ * 1000,
    "lux": constants.WATT_M2_TO_MJ_DAY / constants.LUX_PER_WATT_M2,
    "lx": constants.WATT_M2_TO_MJ_DAY / constants.LUX_PER_WATT_M2,
}

# Factor from the given unit to m/s
WIND_TO_MS: Dict[str, float] = {
    "m/s": 1.0,
    "ms": 1.0,
    "km/h": constants.KMH_TO_MS,
    "kmh": constants.KMH_TO_MS,
    "kph": constants.KMH_TO_MS,
    "mph": 0.44704,
    "mi/h": 0.44704,
    "kn": 0.514444,
    "kt": 0.514444,
    "knots": 0.514444,
}

# Factor from the given unit to hours
DURATION_TO_HOURS: Dict[str, float] = {
    "h": 1.0,
    "hr": 1.0,
    "hrs": 1.0,
    "hour": 1.0,
    "hours": 1.0,
    "min": 1 / 60.0,
    "mins": 1 / 60.0,
    "minute": 1 / 60.0,
    "minutes": 1 / 60.0,
    "s": 1 / constants.SECONDS_PER_HOUR,
    "sec": 1 / constants.SECONDS_PER_HOUR,
    "secs": 1 / constants.SECONDS_PER_HOUR,
    "second": 1 / constants.SECONDS_PER_HOUR,
    "seconds": 1 / constants.SECONDS_PER_HOUR,
}

TEMPERATURE_ALIASES: Dict[str, str] = {
    "celsius": "c", "c": "c", "°c": "c",
    "fahrenheit": "f", "f": "f", "°f": "f",
    "kelvin": "k", "k": "k",
}


def _unit_key(unit: str) -> str:
    return unit.strip().lower().replace(" ", "")


class UnitConverter:
    """Convert weather readings to the units used by the ETc pipeline."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    @staticmethod
    def lux_to_mj_per_day(lux: float) -> float:
        """
        Convert daily mean illuminance to daily solar radiation.

        Uses 1 W/m² ≈ 110 lux for sunlight, then W/m² × 0.0864 = MJ/m²/day.

        Args:
            lux: Daily mean illuminance (lux)

        Returns:
            Solar radiation (MJ/m²/day)
        """
        return lux / constants.LUX_PER_WATT_M2 * constants.WATT_M2_TO_MJ_DAY

    @staticmethod
    def mj_per_day_to_lux(mj_per_day: float) -> float:
        """Inverse of lux_to_mj_per_day."""
        return mj_per_day / constants.WATT_M2_TO_MJ_DAY * constants.LUX_PER_WATT_M2

    def convert_radiation(self, value: float, from_unit: str) -> float:
        """
        Convert a daily radiation value to MJ/m²/day.

        Args:
            value: Radiation value
            from_unit: Source unit (MJ/m², W/m² daily mean, Wh/m², kWh/m², lux)

        Returns:
            Radiation in MJ/m²/day
        """
        unit = _unit_key(from_unit)
        if unit in ("lux", "lx"):
            return self.lux_to_mj_per_day(value)
        return value * self._factor(RADIATION_TO_MJ_DAY, from_unit, "radiation", "MJ/m²/day")

    def convert_temperature(self, value: float, from_unit: str, to_unit: str = "celsius") -> float:
        """
        Convert temperature between Celsius, Fahrenheit and Kelvin.

        Args:
            value: Temperature value
            from_unit: Source unit
            to_unit: Target unit (default Celsius)

        Returns:
            Converted temperature value
        """
        source = TEMPERATURE_ALIASES.get(_unit_key(from_unit))
        target = TEMPERATURE_ALIASES.get(_unit_key(to_unit))
        if source is None or target is None:
            self.logger.warning(
                f"Unknown temperature unit '{from_unit}' -> '{to_unit}', value unchanged"
            )
            return value
        if source == target:
            return value

        if source == "f":
            celsius = (value - 32) * 5 / 9
        elif source == "k":
            celsius = value - 273.15
        else:
            celsius = value

        if target == "f":
            return celsius * 9 / 5 + 32
        if target == "k":
            return celsius + 273.15
        return celsius

    def convert_wind_speed(self, value: float, from_unit: str, to_unit: str = "m/s") -> float:
        """
        Convert wind speed between m/s, km/h, mph and knots.

        Args:
            value: Wind speed value
            from_unit: Source unit
            to_unit: Target unit (default m/s)

        Returns:
            Converted wind speed value
        """
        to_ms = self._factor(WIND_TO_MS, from_unit, "wind speed", "m/s")
        from_ms = self._factor(WIND_TO_MS, to_unit, "wind speed", "m/s")
        return value * to_ms / from_ms

    def convert_to_hours(self, value: float, from_unit: str) -> float:
        """Convert a duration (e.g. sunshine duration in seconds) to hours."""
        return value * self._factor(DURATION_TO_HOURS, from_unit, "time", "hours")

    def _factor(self, table: Dict[str, float], unit: str, quantity: str, assumed: str) -> float:
        factor = table.get(_unit_key(unit))
        if factor is None:
            self.logger.warning(f"Unknown {quantity} unit '{unit}', assuming {assumed}")
            return 1.0
        return factor
