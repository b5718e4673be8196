"""
Daily forecast operations for the Open-Meteo API.

Retrieves daily aggregates (temperature, humidity, wind, rain, radiation,
sunshine) together with the provider's own FAO-56 ET0 for one location.
"""

import logging
from datetime import date
from typing import List, Dict, Any, Optional

DAILY_PARAMETERS: List[str] = [
    "temperature_2m_max",
    "temperature_2m_min",
    "relative_humidity_2m_mean",
    "wind_speed_10m_max",
    "precipitation_sum",
    "shortwave_radiation_sum",
    "sunshine_duration",
    "et0_fao_evapotranspiration",
]


class ForecastAPI:
    """Mixin for Open-Meteo forecast operations."""

    # Type hints for attributes provided by APIClient base class
    logger: logging.Logger

    def get(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """Method provided by APIClient base class."""
        ...

    def get_daily_forecast(
        self,
        latitude: float,
        longitude: float,
        start_date: date,
        end_date: Optional[date] = None
    ) -> Dict[str, Any]:
        """
        Get daily weather aggregates for a location.

        Args:
            latitude: Latitude in decimal degrees
            longitude: Longitude in decimal degrees
            start_date: First day to fetch
            end_date: Last day to fetch (defaults to start_date)

        Returns:
            Raw response; daily values are parallel lists under ``daily``

        Example response:
            {
                "latitude": 19.07,
                "longitude": 72.88,
                "elevation": 14.0,
                "daily_units": {"shortwave_radiation_sum": "MJ/m²", ...},
                "daily": {
                    "time": ["2024-05-01"],
                    "temperature_2m_max": [33.1],
                    "sunshine_duration": [36120.5],
                    "et0_fao_evapotranspiration": [5.42],
                    ...
                }
            }
        """
        end_date = end_date or start_date
        self.logger.info(  # type: ignore
            f"Fetching daily forecast for ({latitude:.4f}, {longitude:.4f}) "
            f"{start_date.isoformat()}..{end_date.isoformat()}"
        )

        params = {
            "latitude": latitude,
            "longitude": longitude,
            "daily": ",".join(DAILY_PARAMETERS),
            "wind_speed_unit": "ms",
            "timezone": "auto",
            "start_date": start_date.isoformat(),
            "end_date": end_date.isoformat(),
        }

        return self.get("/v1/forecast", params=params)  # type: ignore
