"""
Solar radiation module.

Solar geometry (FAO-56 eqs. 21-25, 34) and the incoming shortwave radiation
resolution chain used by the reference ET engine:

1. Measured solar radiation (MJ/m²/day)
2. Illuminance (lux) converted to MJ/m²/day
3. Sunshine hours via the Ångström-Prescott relation
4. Temperature range via the Hargreaves radiation formula
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional, Tuple

from ..core import constants
from ..models import WeatherObservation, Location, RadiationSource
from ..processing import UnitConverter


@dataclass(frozen=True)
class RadiationEstimate:
    """Resolved incoming solar radiation and the astronomy behind it."""

    rs: float  # Solar radiation (MJ m⁻² day⁻¹)
    ra: float  # Extraterrestrial radiation (MJ m⁻² day⁻¹)
    daylight_hours: float  # Maximum possible sunshine duration N (hours)
    source: RadiationSource


class SolarRadiationCalculator:
    """Resolve daily solar radiation from the best available input."""

    def __init__(
        self,
        a: float = constants.ANGSTROM_A,
        b: float = constants.ANGSTROM_B,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize calculator.

        Args:
            a: Ångström-Prescott coefficient a (default 0.25)
            b: Ångström-Prescott coefficient b (default 0.50)
            logger: Logger instance
        """
        self.a = a
        self.b = b
        self.logger = logger or logging.getLogger(__name__)

    def resolve(
        self,
        weather: WeatherObservation,
        location: Location,
        day_number: int
    ) -> RadiationEstimate:
        """
        Resolve solar radiation using the best available input.

        Args:
            weather: Daily weather observation (already sanitized)
            location: Site location
            day_number: Day of year (1-365/366)

        Returns:
            RadiationEstimate with the source used
        """
        ra, daylight_hours, _ = self.calculate_extraterrestrial_radiation(
            location.latitude, day_number
        )

        if weather.solar_radiation is not None:
            self.logger.debug(f"Using measured solar radiation: {weather.solar_radiation:.2f} MJ/m²/day")
            return RadiationEstimate(
                rs=weather.solar_radiation,
                ra=ra,
                daylight_hours=daylight_hours,
                source=RadiationSource.MEASURED
            )

        if weather.solar_radiation_lux is not None:
            rs = UnitConverter.lux_to_mj_per_day(weather.solar_radiation_lux)
            self.logger.debug(
                f"Converted {weather.solar_radiation_lux:.0f} lux to {rs:.2f} MJ/m²/day"
            )
            return RadiationEstimate(
                rs=rs, ra=ra, daylight_hours=daylight_hours, source=RadiationSource.LUX
            )

        if weather.sunshine_hours is not None:
            rs = self.calculate_from_sunshine_hours(weather.sunshine_hours, ra, daylight_hours)
            self.logger.debug(
                f"Solar radiation from {weather.sunshine_hours:.2f}h sunshine "
                f"(N={daylight_hours:.2f}h): {rs:.2f} MJ/m²/day"
            )
            return RadiationEstimate(
                rs=rs, ra=ra, daylight_hours=daylight_hours, source=RadiationSource.SUNSHINE
            )

        rs = self.calculate_from_temperature_range(
            weather.temperature_max, weather.temperature_min, ra, coastal=location.coastal
        )
        self.logger.warning(
            "No radiation or sunshine input; using temperature-based estimate "
            f"(Hargreaves): {rs:.2f} MJ/m²/day"
        )
        return RadiationEstimate(
            rs=rs, ra=ra, daylight_hours=daylight_hours, source=RadiationSource.TEMPERATURE
        )

    def calculate_from_sunshine_hours(
        self,
        sunshine_hours: float,
        ra: float,
        daylight_hours: float
    ) -> float:
        """
        Solar radiation from sunshine duration (Ångström-Prescott, FAO-56 eq. 35).

        Rs = (a + b * n/N) * Ra, with n limited to [0, N].

        Args:
            sunshine_hours: Actual sunshine hours n
            ra: Extraterrestrial radiation (MJ/m²/day)
            daylight_hours: Maximum possible sunshine hours N

        Returns:
            Solar radiation (MJ/m²/day)
        """
        if daylight_hours <= 0:
            return 0.0
        n = max(0.0, min(sunshine_hours, daylight_hours))
        return (self.a + self.b * n / daylight_hours) * ra

    @staticmethod
    def calculate_from_temperature_range(
        t_max: float,
        t_min: float,
        ra: float,
        coastal: bool = False
    ) -> float:
        """
        Solar radiation from temperature range (Hargreaves, FAO-56 eq. 50).

        Rs = kRs * sqrt(Tmax - Tmin) * Ra

        Args:
            t_max: Maximum temperature (°C)
            t_min: Minimum temperature (°C)
            ra: Extraterrestrial radiation (MJ/m²/day)
            coastal: True if location is coastal

        Returns:
            Solar radiation (MJ/m²/day)
        """
        krs = constants.HARGREAVES_KRS_COASTAL if coastal else constants.HARGREAVES_KRS_INTERIOR
        return krs * math.sqrt(max(0.0, t_max - t_min)) * ra

    @staticmethod
    def calculate_clear_sky_radiation(ra: float, elevation: float) -> float:
        """Clear sky solar radiation Rso (FAO-56 eq. 37)."""
        return (constants.CLEAR_SKY_COEF + constants.ALTITUDE_FACTOR * elevation) * ra

    @staticmethod
    def calculate_solar_declination(day_number: int) -> float:
        """
        Calculate solar declination for a given day of the year.

        Args:
            day_number: Julian day of the year (1-365/366)

        Returns:
            Solar declination (radians)
        """
        return constants.SOLAR_DECLINATION_AMPLITUDE * math.sin(
            (2 * math.pi / constants.DAYS_PER_YEAR) * day_number
            - constants.SOLAR_DECLINATION_PHASE
        )

    @staticmethod
    def calculate_sunset_hour_angle(latitude: float, day_number: int) -> float:
        """
        Sunset hour angle in radians (FAO-56 eq. 25).

        The argument is limited to [-1, 1] so polar night gives 0 and polar
        day gives pi instead of a math domain error.
        """
        phi = math.radians(latitude)
        solar_decl = SolarRadiationCalculator.calculate_solar_declination(day_number)
        x = -math.tan(phi) * math.tan(solar_decl)
        return math.acos(max(-1.0, min(1.0, x)))

    @staticmethod
    def calculate_extraterrestrial_radiation(
        latitude: float,
        day_number: int
    ) -> Tuple[float, float, float]:
        """
        Calculate extraterrestrial radiation and related parameters.

        Args:
            latitude: Latitude (degrees)
            day_number: Julian day of the year (1-365/366)

        Returns:
            Tuple of (Ra, N, omega_s):
                - Ra: Extraterrestrial radiation (MJ m⁻² day⁻¹)
                - N: Daylight hours (hours)
                - omega_s: Sunset hour angle (radians)
        """
        phi = math.radians(latitude)
        solar_decl = SolarRadiationCalculator.calculate_solar_declination(day_number)

        # Inverse relative distance Earth-Sun
        dr = 1 + constants.EARTH_ORBIT_ECCENTRICITY * math.cos(
            2 * math.pi * day_number / constants.DAYS_PER_YEAR
        )

        omega_s = SolarRadiationCalculator.calculate_sunset_hour_angle(latitude, day_number)

        ra = (24 * 60 / math.pi) * constants.SOLAR_CONSTANT * dr * (
            omega_s * math.sin(phi) * math.sin(solar_decl) +
            math.cos(phi) * math.cos(solar_decl) * math.sin(omega_s)
        )

        n_max = (24 / math.pi) * omega_s

        return max(0.0, ra), n_max, omega_s
