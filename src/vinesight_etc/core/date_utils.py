"""
Date and timezone utilities.

Resolves the farm-local calendar date used for a calculation. The
calculation itself never reads the clock; callers resolve the date here and
pass it in explicitly.
"""

import logging
from datetime import date, datetime
from typing import Optional, Union

import pytz
from pytz.tzinfo import BaseTzInfo


class DateUtils:
    """Utilities for date and timezone handling."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize date utilities.

        Args:
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    @staticmethod
    def parse_timezone(timezone_str: str) -> BaseTzInfo:
        """
        Parse timezone string to pytz timezone object.

        Args:
            timezone_str: Timezone string (e.g., 'Asia/Kolkata', 'UTC')

        Returns:
            pytz timezone object

        Raises:
            ValueError: If timezone is invalid
        """
        try:
            return pytz.timezone(timezone_str)
        except pytz.exceptions.UnknownTimeZoneError:
            raise ValueError(f"Invalid timezone: {timezone_str}")

    def get_local_date(
        self,
        timezone_str: str,
        reference_time: Optional[datetime] = None
    ) -> date:
        """
        Get the calendar date at the farm for a reference instant.

        Args:
            timezone_str: Farm timezone string
            reference_time: Reference time (defaults to now in UTC; naive
                            values are assumed to be UTC)

        Returns:
            Local calendar date
        """
        tz = self.parse_timezone(timezone_str)

        if reference_time is None:
            reference_time = datetime.now(pytz.UTC)
        elif reference_time.tzinfo is None:
            reference_time = pytz.UTC.localize(reference_time)

        local_time = reference_time.astimezone(tz)

        self.logger.debug(
            f"Reference time: {reference_time.isoformat()} -> "
            f"Local time: {local_time.isoformat()}"
        )

        return local_time.date()

    @staticmethod
    def parse_date(value: Union[str, date, datetime]) -> date:
        """
        Parse a calendar date.

        Args:
            value: 'YYYY-MM-DD' string, date or datetime

        Returns:
            Date object

        Raises:
            ValueError: If the string is not a valid ISO date
        """
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        try:
            return datetime.strptime(value.strip(), "%Y-%m-%d").date()
        except ValueError:
            raise ValueError(f"Invalid date format: {value}. Use YYYY-MM-DD")

    @staticmethod
    def day_of_year(value: Union[date, datetime]) -> int:
        """Julian day of the year (1-365/366)."""
        return value.timetuple().tm_yday
