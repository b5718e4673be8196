"""
API layer for the Open-Meteo weather service.

Provides the low-level HTTP client and the daily forecast endpoint.
"""

import logging
from typing import Optional

from .client import APIClient
from .forecast import ForecastAPI, DAILY_PARAMETERS


class OpenMeteoAPI(ForecastAPI, APIClient):
    """Unified client for the Open-Meteo API."""

    def __init__(
        self,
        base_url: str = "https://api.open-meteo.com",
        timeout: int = 30,
        max_retries: int = 3,
        verify_ssl: bool = True,
        logger: Optional[logging.Logger] = None
    ):
        super().__init__(
            base_url=base_url,
            timeout=timeout,
            max_retries=max_retries,
            verify_ssl=verify_ssl,
            logger=logger
        )


__all__ = [
    "APIClient",
    "ForecastAPI",
    "OpenMeteoAPI",
    "DAILY_PARAMETERS",
]
