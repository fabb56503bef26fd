# src/rpiforecast/utils/time.py
"""Time and date handling utilities."""

from __future__ import annotations

from datetime import UTC, datetime
from zoneinfo import ZoneInfo


class TimeUtils:
    """Time-related utility functions.

    Forecast slices carry UNIX timestamps in UTC; these helpers turn them
    into aware datetimes and format them for the display layer.
    """

    @staticmethod
    def epoch_to_datetime(timestamp: int) -> datetime:
        """Convert UNIX timestamp to UTC datetime with timezone information.

        Args:
            timestamp: UNIX timestamp (seconds since epoch)

        Returns:
            Timezone-aware datetime object in UTC
        """
        return datetime.fromtimestamp(timestamp, tz=UTC)

    @staticmethod
    def to_local_datetime(timestamp: int, timezone_name: str | None = None) -> datetime:
        """Convert POSIX timestamp to local datetime.

        Args:
            timestamp: POSIX timestamp
            timezone_name: IANA timezone name, system local time if omitted

        Returns:
            Localized datetime object
        """
        if timezone_name:
            return datetime.fromtimestamp(timestamp, tz=ZoneInfo(timezone_name))
        return datetime.fromtimestamp(timestamp, tz=UTC).astimezone()

    @staticmethod
    def format_datetime(dt: datetime, format_string: str) -> str:
        return dt.strftime(format_string)
