"""
Business logic services for vineyard ETc estimation.

Services orchestrate API operations and provide higher-level functionality.
"""

from .weather_service import WeatherService, FetchedWeather

__all__ = [
    "WeatherService",
    "FetchedWeather",
]
