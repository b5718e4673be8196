"""
FAO-56 Penman-Monteith reference evapotranspiration module.

Computes daily grass-reference evapotranspiration (ETo) from a single daily
weather observation. Missing solar radiation is resolved through the
fallback chain in the radiation module; the confidence of the estimate
follows the radiation source and drops one tier when inputs had to be
clamped. With temperature as the only radiation input, ETo comes from the
Hargreaves equation instead of Penman-Monteith.

Reference:
    Allen, R.G., Pereira, L.S., Raes, D. and Smith, M. (1998). Crop
    evapotranspiration - Guidelines for computing crop water requirements.
    FAO Irrigation and drainage paper 56. FAO, Rome.
"""

import logging
import math
from typing import Optional, Tuple

from ..core import constants
from ..core.exceptions import InvalidInputError
from ..core.date_utils import DateUtils
from ..models import (
    WeatherObservation,
    Location,
    RadiationSource,
    ReferenceETComponents,
)
from ..processing import InputValidator
from .radiation import SolarRadiationCalculator

# Rs/Rso bounds for the longwave cloudiness factor
MIN_RELATIVE_SHORTWAVE = 0.3
MAX_RELATIVE_SHORTWAVE = 1.0


class PenmanMonteithCalculator:
    """
    Calculator for reference evapotranspiration using FAO-56 Penman-Monteith.

    Stateless apart from its coefficients, so one instance can serve
    concurrent requests.
    """

    def __init__(
        self,
        albedo: float = constants.DEFAULT_ALBEDO,
        strict: bool = False,
        radiation_calc: Optional[SolarRadiationCalculator] = None,
        validator: Optional[InputValidator] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize reference ET calculator.

        Args:
            albedo: Reference surface albedo (0.23 for grass)
            strict: Raise InvalidInputError instead of clamping impossible readings
            radiation_calc: Solar radiation resolver
            validator: Input validator
            logger: Logger instance
        """
        self.albedo = albedo
        self.strict = strict
        self.logger = logger or logging.getLogger(__name__)
        self.radiation_calc = radiation_calc or SolarRadiationCalculator(logger=self.logger)
        self.validator = validator or InputValidator(logger=self.logger)

    def calculate_eto(
        self,
        weather: WeatherObservation,
        location: Optional[Location] = None
    ) -> float:
        """
        Calculate daily reference evapotranspiration.

        Args:
            weather: Daily weather observation
            location: Site location (defaults applied when omitted)

        Returns:
            ETo (mm/day)
        """
        return self.calculate_with_components(weather, location).eto

    def calculate_with_components(
        self,
        weather: WeatherObservation,
        location: Optional[Location] = None
    ) -> ReferenceETComponents:
        """
        Calculate reference ET with detailed intermediate components.

        Args:
            weather: Daily weather observation
            location: Site location (defaults applied when omitted)

        Returns:
            ReferenceETComponents containing ETo, confidence and all
            intermediate values

        Raises:
            InvalidInputError: In strict mode, for physically impossible readings
        """
        location = location or Location()

        weather, location, issues = self.validator.sanitize(weather, location)
        if issues and self.strict:
            raise InvalidInputError(
                "; ".join(issue.message for issue in issues),
                issues=issues,
                component="reference_et"
            )

        day_number = DateUtils.day_of_year(weather.date)
        elevation = location.resolved_elevation

        # SECTION 1: Pressure and psychrometric constant
        pressure = self._calculate_atmospheric_pressure(elevation)
        gamma = self._calculate_psychrometric_constant(pressure)

        # SECTION 2: Vapor pressure
        tmean = (weather.temperature_max + weather.temperature_min) / 2
        es, ea, vpd = self._calculate_vapor_pressures(
            weather.temperature_max, weather.temperature_min, weather.relative_humidity
        )
        delta = self._calculate_slope_vapor_pressure_curve(tmean)

        # SECTION 3: Wind
        u2 = self._adjust_wind_speed(weather.wind_speed, weather.wind_height)

        # SECTION 4: Radiation
        radiation = self.radiation_calc.resolve(weather, location, day_number)
        rso = self.radiation_calc.calculate_clear_sky_radiation(radiation.ra, elevation)
        rns, rnl, rn = self._calculate_net_radiation(
            radiation.rs, rso, weather.temperature_max, weather.temperature_min, ea
        )

        # SECTION 5: Penman-Monteith (G = 0 for daily steps)
        if radiation.source is RadiationSource.TEMPERATURE:
            # Temperature-only input: Hargreaves ETo (FAO-56 eq. 52)
            radiation_term = self._calculate_hargreaves_eto(
                weather.temperature_max, weather.temperature_min, radiation.ra
            )
            aerodynamic_term = 0.0
        else:
            denominator = delta + gamma * (1 + constants.PM_WIND_COEF * u2)
            radiation_term = constants.PM_RADIATION_COEF * delta * rn / denominator
            aerodynamic_term = (
                gamma * (constants.PM_AERODYNAMIC_COEF / (tmean + 273)) * u2 * vpd
            ) / denominator
        eto = max(0.0, radiation_term + aerodynamic_term)

        confidence = radiation.source.confidence.lowered(1 if issues else 0)

        self.logger.debug(
            f"ETo={eto:.2f} mm/day (Rn={rn:.2f}, VPD={vpd:.3f}, u2={u2:.2f}, "
            f"source={radiation.source.value}, confidence={confidence.value})"
        )

        return ReferenceETComponents(
            eto=eto,
            confidence=confidence,
            radiation_source=radiation.source,
            tmean=tmean,
            pressure=pressure,
            gamma=gamma,
            delta=delta,
            u2=u2,
            es=es,
            ea=ea,
            vpd=vpd,
            ra=radiation.ra,
            rs=radiation.rs,
            rso=rso,
            rns=rns,
            rnl=rnl,
            rn=rn,
            daylight_hours=radiation.daylight_hours,
            radiation_term=radiation_term,
            aerodynamic_term=aerodynamic_term,
            issues=tuple(issues)
        )

    @staticmethod
    def _calculate_atmospheric_pressure(elevation: float) -> float:
        """
        Atmospheric pressure from elevation (FAO-56 eq. 7).

        Args:
            elevation: Elevation above sea level (m)

        Returns:
            Pressure (kPa)
        """
        return constants.SEA_LEVEL_PRESSURE * (
            (constants.PRESSURE_REFERENCE_TEMP - constants.PRESSURE_LAPSE_RATE * elevation)
            / constants.PRESSURE_REFERENCE_TEMP
        ) ** constants.PRESSURE_EXPONENT

    @staticmethod
    def _calculate_psychrometric_constant(pressure: float) -> float:
        """Psychrometric constant γ in kPa/°C (FAO-56 eq. 8)."""
        return constants.PSYCHROMETRIC_COEF * pressure

    @staticmethod
    def _calculate_saturation_vapor_pressure(temperature: float) -> float:
        """
        Saturation vapor pressure at a given temperature (FAO-56 eq. 11).

        Args:
            temperature: Temperature (°C)

        Returns:
            Saturation vapor pressure (kPa)
        """
        return constants.TETENS_A * math.exp(
            (constants.TETENS_B * temperature) / (temperature + constants.TETENS_C)
        )

    @staticmethod
    def _calculate_vapor_pressures(
        t_max: float,
        t_min: float,
        relative_humidity: float
    ) -> Tuple[float, float, float]:
        """
        Calculate vapor pressure parameters from mean relative humidity.

        Args:
            t_max: Maximum temperature (°C)
            t_min: Minimum temperature (°C)
            relative_humidity: Mean relative humidity (%)

        Returns:
            Tuple of (es, ea, vpd) in kPa
        """
        es = (
            PenmanMonteithCalculator._calculate_saturation_vapor_pressure(t_max) +
            PenmanMonteithCalculator._calculate_saturation_vapor_pressure(t_min)
        ) / 2

        # FAO-56 eq. 19
        ea = es * relative_humidity / 100
        vpd = max(0.0, es - ea)

        return es, ea, vpd

    @staticmethod
    def _calculate_slope_vapor_pressure_curve(t_mean: float) -> float:
        """
        Slope of the saturation vapor pressure curve (FAO-56 eq. 13).

        Args:
            t_mean: Mean temperature (°C)

        Returns:
            Slope Δ (kPa/°C)
        """
        es_tmean = PenmanMonteithCalculator._calculate_saturation_vapor_pressure(t_mean)
        return (constants.SLOPE_COEF * es_tmean) / ((t_mean + constants.TETENS_C) ** 2)

    @staticmethod
    def _adjust_wind_speed(wind_speed: float, height: float) -> float:
        """
        Reduce wind speed measured at ``height`` to 2 m (FAO-56 eq. 47).

        Args:
            wind_speed: Wind speed at measurement height (m/s)
            height: Measurement height above ground (m)

        Returns:
            Wind speed at 2 m (m/s)
        """
        if math.isclose(height, constants.STANDARD_WIND_HEIGHT):
            return wind_speed
        return wind_speed * constants.WIND_PROFILE_A / math.log(
            constants.WIND_PROFILE_B * height - constants.WIND_PROFILE_C
        )

    def _calculate_net_radiation(
        self,
        rs: float,
        rso: float,
        t_max: float,
        t_min: float,
        ea: float
    ) -> Tuple[float, float, float]:
        """
        Calculate net radiation components (FAO-56 eqs. 38-40).

        Args:
            rs: Solar radiation (MJ m⁻² day⁻¹)
            rso: Clear sky solar radiation (MJ m⁻² day⁻¹)
            t_max: Maximum temperature (°C)
            t_min: Minimum temperature (°C)
            ea: Actual vapor pressure (kPa)

        Returns:
            Tuple of (Rns, Rnl, Rn) in MJ m⁻² day⁻¹
        """
        rns = (1 - self.albedo) * rs

        if rso > 0:
            relative_shortwave = rs / rso
        else:
            relative_shortwave = MIN_RELATIVE_SHORTWAVE
        relative_shortwave = max(
            MIN_RELATIVE_SHORTWAVE, min(MAX_RELATIVE_SHORTWAVE, relative_shortwave)
        )

        tmax_k4 = (t_max + constants.KELVIN_OFFSET) ** 4
        tmin_k4 = (t_min + constants.KELVIN_OFFSET) ** 4

        rnl = (
            constants.STEFAN_BOLTZMANN * (tmax_k4 + tmin_k4) / 2 *
            (constants.NLW_CONST_1 - constants.NLW_CONST_2 * math.sqrt(ea)) *
            (constants.NLW_CONST_3 * relative_shortwave - constants.NLW_CONST_4)
        )

        rn = rns - rnl

        return rns, rnl, rn

    @staticmethod
    def _calculate_hargreaves_eto(t_max: float, t_min: float, ra: float) -> float:
        """
        Temperature-only reference ET (Hargreaves, FAO-56 eq. 52).

        ETo = 0.0023 * (Tmean + 17.8) * sqrt(Tmax - Tmin) * 0.408 * Ra

        Used when no radiation or sunshine input exists. Non-decreasing in
        Tmax once clamped at zero.

        Args:
            t_max: Maximum temperature (°C)
            t_min: Minimum temperature (°C)
            ra: Extraterrestrial radiation (MJ m⁻² day⁻¹)

        Returns:
            ETo (mm/day), not below zero
        """
        t_mean = (t_max + t_min) / 2
        eto = (
            constants.HARGREAVES_ETO_COEF *
            (t_mean + constants.HARGREAVES_TEMP_OFFSET) *
            math.sqrt(max(0.0, t_max - t_min)) *
            constants.PM_RADIATION_COEF * ra
        )
        return max(0.0, eto)
