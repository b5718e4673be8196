"""
Weather retrieval service.

Fetches daily weather (a single day or a multi-day forecast) from the
external provider and normalises each day into a WeatherObservation plus the
provider's reference ETo for cross-validation.
"""

import logging
from dataclasses import dataclass, replace
from datetime import date, timedelta
from typing import Dict, Any, List, Optional, TYPE_CHECKING

import requests  # type: ignore

from ..core import constants
from ..core.exceptions import WeatherFetchError
from ..models import WeatherObservation, Location
from ..processing import UnitConverter

if TYPE_CHECKING:
    from ..api import OpenMeteoAPI

RADIATION_FIELDS = ("solar_radiation", "solar_radiation_lux", "sunshine_hours")


@dataclass(frozen=True)
class FetchedWeather:
    """Weather for one day as reported by the provider."""

    observation: WeatherObservation
    reference_eto: Optional[float]  # provider FAO-56 ET0 (mm/day)
    elevation: Optional[float]  # provider grid-cell elevation (m)


class WeatherService:
    """Service to fetch and normalise daily weather for a farm."""

    def __init__(
        self,
        api_client: "OpenMeteoAPI",
        converter: Optional[UnitConverter] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize weather service.

        Args:
            api_client: Weather provider API client
            converter: Unit converter
            logger: Logger instance
        """
        self.api_client = api_client
        self.logger = logger or logging.getLogger(__name__)
        self.converter = converter or UnitConverter(logger=self.logger)

    def fetch_daily_weather(self, location: Location, target_date: date) -> FetchedWeather:
        """
        Fetch the daily observation for a location and date.

        Args:
            location: Farm location
            target_date: Day to fetch

        Returns:
            FetchedWeather

        Raises:
            WeatherFetchError: On network/HTTP failure, an unexpected response
                or a response without the requested day
        """
        response = self._request(location, target_date, target_date)
        fetched = self._parse_response(response, [target_date])[0]

        self.logger.info(
            f"Fetched weather for {target_date.isoformat()}: "
            f"Tmax={fetched.observation.temperature_max:.1f}°C, "
            f"Tmin={fetched.observation.temperature_min:.1f}°C, "
            f"RH={fetched.observation.relative_humidity:.0f}%, "
            f"reference ETo={fetched.reference_eto}"
        )
        return fetched

    def fetch_forecast(
        self,
        location: Location,
        start_date: date,
        days: int = constants.DEFAULT_FORECAST_DAYS
    ) -> List[FetchedWeather]:
        """
        Fetch consecutive daily observations starting at ``start_date``.

        Args:
            location: Farm location
            start_date: First forecast day
            days: Number of days (1-16)

        Returns:
            One FetchedWeather per day, in date order

        Raises:
            ValueError: If days is outside 1-16
            WeatherFetchError: On network/HTTP failure, an unexpected response
                or a response missing any requested day
        """
        if not 1 <= days <= constants.MAX_FORECAST_DAYS:
            raise ValueError(
                f"Forecast days must be between 1 and {constants.MAX_FORECAST_DAYS}, got {days}"
            )

        wanted = [start_date + timedelta(days=offset) for offset in range(days)]
        response = self._request(location, wanted[0], wanted[-1])
        forecast = self._parse_response(response, wanted)

        self.logger.info(
            f"Fetched {len(forecast)}-day forecast "
            f"{wanted[0].isoformat()}..{wanted[-1].isoformat()}"
        )
        return forecast

    def merge_manual(
        self,
        fetched: FetchedWeather,
        manual_overrides: Dict[str, Any]
    ) -> WeatherObservation:
        """
        Overlay manually entered values on a fetched observation.

        Manual values always win. A manual radiation input replaces all
        fetched radiation inputs, and a manual wind speed is taken at 2 m
        unless a height is given with it.

        Args:
            fetched: Provider observation
            manual_overrides: Field name to value; None values are ignored

        Returns:
            Merged WeatherObservation
        """
        overrides = {
            key: value for key, value in manual_overrides.items() if value is not None
        }
        unknown = set(overrides) - set(WeatherObservation.__dataclass_fields__)
        if unknown:
            raise ValueError(f"Unknown weather fields: {', '.join(sorted(unknown))}")

        if any(field_name in overrides for field_name in RADIATION_FIELDS):
            for field_name in RADIATION_FIELDS:
                overrides.setdefault(field_name, None)

        if "wind_speed" in overrides:
            overrides.setdefault("wind_height", constants.STANDARD_WIND_HEIGHT)

        if overrides:
            self.logger.debug(f"Manual overrides: {sorted(overrides)}")
        return replace(fetched.observation, **overrides)

    def _request(self, location: Location, start_date: date, end_date: date) -> Dict[str, Any]:
        try:
            return self.api_client.get_daily_forecast(
                latitude=location.latitude,
                longitude=location.longitude,
                start_date=start_date,
                end_date=end_date
            )
        except requests.exceptions.RequestException as e:
            raise WeatherFetchError(
                f"Weather request failed for {start_date.isoformat()}: {e}",
                component="weather_service"
            ) from e

    def _parse_response(self, response: Dict[str, Any], days: List[date]) -> List[FetchedWeather]:
        try:
            times = list(response["daily"]["time"])
        except (KeyError, TypeError) as e:
            raise WeatherFetchError(
                f"Unexpected weather response: {e}", component="weather_service"
            ) from e

        missing = [day.isoformat() for day in days if day.isoformat() not in times]
        if missing:
            raise WeatherFetchError(
                f"Weather response has no data for {', '.join(missing)}",
                component="weather_service"
            )

        parsed = []
        for day in days:
            try:
                parsed.append(self._parse_day(response, times.index(day.isoformat()), day))
            except (KeyError, IndexError, TypeError, ValueError) as e:
                raise WeatherFetchError(
                    f"Unexpected weather response for {day.isoformat()}: {e}",
                    component="weather_service"
                ) from e
        return parsed

    def _parse_day(self, response: Dict[str, Any], index: int, day: date) -> FetchedWeather:
        daily = response["daily"]
        units = response.get("daily_units", {})

        def value(name: str) -> Optional[float]:
            raw = daily.get(name)
            if raw is None or raw[index] is None:
                return None
            return float(raw[index])

        def required(name: str) -> float:
            result = value(name)
            if result is None:
                raise ValueError(f"missing daily value '{name}'")
            return result

        def temperature(name: str) -> float:
            return self.converter.convert_temperature(required(name), units.get(name, "°C"))

        solar_radiation = value("shortwave_radiation_sum")
        if solar_radiation is not None:
            solar_radiation = self.converter.convert_radiation(
                solar_radiation, units.get("shortwave_radiation_sum", "MJ/m²")
            )

        sunshine_hours = value("sunshine_duration")
        if sunshine_hours is not None:
            sunshine_hours = self.converter.convert_to_hours(
                sunshine_hours, units.get("sunshine_duration", "s")
            )

        wind_speed = self.converter.convert_wind_speed(
            required("wind_speed_10m_max"), units.get("wind_speed_10m_max", "m/s")
        )

        observation = WeatherObservation(
            date=day,
            temperature_max=temperature("temperature_2m_max"),
            temperature_min=temperature("temperature_2m_min"),
            relative_humidity=required("relative_humidity_2m_mean"),
            wind_speed=wind_speed,
            rainfall=value("precipitation_sum") or 0.0,
            solar_radiation=solar_radiation,
            sunshine_hours=sunshine_hours,
            wind_height=constants.PROVIDER_WIND_HEIGHT
        )

        elevation = response.get("elevation")
        return FetchedWeather(
            observation=observation,
            reference_eto=value("et0_fao_evapotranspiration"),
            elevation=float(elevation) if elevation is not None else None
        )
