"""Timestamp parsing and clock for the push workflow.

Both are injected into the orchestrator so tests can supply deterministic
instants. Every instant handed to the sync check is timezone-aware; naive
values are interpreted in ``default_tz`` (UTC unless told otherwise).
"""

from datetime import datetime, tzinfo, UTC
from typing import Optional, Union


class TimestampParser:
    """Parses ISO 8601 timestamps into timezone-aware datetimes.

    Handles:
        - 2024-01-15T10:30:00Z
        - 2024-01-15T10:30:00+00:00
        - 2024-01-15T10:30:00.123Z
        - 2024-01-15 10:30:00 (naive, interpreted in default_tz)

    Example:
        >>> parse = TimestampParser()
        >>> parse("2024-01-01T00:00:00Z")
        datetime.datetime(2024, 1, 1, 0, 0, tzinfo=datetime.timezone.utc)
        >>> parse(None) is None
        True
    """

    FALLBACK_FORMATS = (
        "%Y-%m-%dT%H:%M:%S",
        "%Y-%m-%dT%H:%M:%S.%f",
        "%Y-%m-%d %H:%M:%S",
    )

    def __init__(self, default_tz: tzinfo = UTC):
        self.default_tz = default_tz

    def __call__(self, value: Union[str, datetime, None]) -> Optional[datetime]:
        """Parse a timestamp.

        Args:
            value: ISO 8601 string, datetime, or None/empty for "absent"

        Returns:
            Timezone-aware datetime, or None when the value is absent

        Raises:
            ValueError: If a non-empty string cannot be parsed
        """
        if value is None:
            return None

        if isinstance(value, datetime):
            return self._aware(value)

        timestamp_str = str(value).strip()
        if not timestamp_str:
            return None

        if timestamp_str.endswith('Z'):
            timestamp_str = timestamp_str[:-1] + '+00:00'

        try:
            return self._aware(datetime.fromisoformat(timestamp_str))
        except ValueError:
            for fmt in self.FALLBACK_FORMATS:
                try:
                    return self._aware(datetime.strptime(timestamp_str, fmt))
                except ValueError:
                    continue

        raise ValueError(f"Cannot parse timestamp: {value}")

    def _aware(self, dt: datetime) -> datetime:
        if dt.tzinfo is None:
            return dt.replace(tzinfo=self.default_tz)
        return dt


def utc_now() -> datetime:
    """Default clock: the current instant in UTC."""
    return datetime.now(UTC)
