"""
Duration value object.
Turns an elapsed interval into the hour/minute figures shown on reports.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from timesheet.domain.models.base import InvalidInterval, ValidationError

_MINUTE = timedelta(minutes=1)


def format_minutes(total_minutes: int) -> str:
    """Format a whole number of minutes as 'H:MM h' (e.g. 75 -> '1:15 h')."""
    if total_minutes < 0:
        raise ValidationError("Minutes cannot be negative", "total_minutes")
    hours, minutes = divmod(total_minutes, 60)
    return f"{hours}:{minutes:02d} h"


@dataclass(frozen=True)
class Duration:
    """Elapsed time of a half-open interval."""

    elapsed: timedelta

    def __post_init__(self):
        if self.elapsed < timedelta(0):
            raise ValidationError("Duration cannot be negative", "elapsed")

    @classmethod
    def zero(cls) -> "Duration":
        return cls(timedelta(0))

    @classmethod
    def from_timedelta(cls, elapsed: timedelta) -> "Duration":
        return cls(elapsed)

    @property
    def total_minutes(self) -> int:
        """Whole elapsed minutes, seconds are dropped."""
        return self.elapsed // _MINUTE

    @property
    def hours(self) -> int:
        """Whole elapsed hours."""
        return self.total_minutes // 60

    @property
    def minutes_remainder(self) -> int:
        """Minutes of the unfinished hour (e.g. 15 for 1:15 h)."""
        return self.total_minutes % 60

    @property
    def decimal_hours(self) -> float:
        """Whole elapsed minutes in hours as an unrounded float (e.g. 0.75)."""
        return self.total_minutes / 60

    @property
    def formatted(self) -> str:
        """Elapsed time as 'H:MM h'."""
        return format_minutes(self.total_minutes)

    def __add__(self, other: "Duration") -> "Duration":
        if not isinstance(other, Duration):
            return NotImplemented
        return Duration(self.elapsed + other.elapsed)

    def __str__(self) -> str:
        return self.formatted


def calculate_duration(start: datetime, end: datetime) -> Duration:
    """
    Compute the duration between two instants.

    Raises:
        InvalidInterval: if end lies before start
    """
    if end < start:
        raise InvalidInterval(start, end)
    # Measured in UTC so offset changes inside the interval are counted
    if start.tzinfo is not None and end.tzinfo is not None:
        return Duration(end.astimezone(timezone.utc) - start.astimezone(timezone.utc))
    return Duration(end - start)
