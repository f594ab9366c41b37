"""Closed time ranges used for booking and maintenance windows."""

import datetime as dt
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .errors import InvalidRangeError


def ensure_utc(value: dt.datetime) -> dt.datetime:
    """Return an aware UTC datetime (naive values are taken as UTC)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=dt.UTC)
    return value.astimezone(dt.UTC)


def parse_instant(value: str | dt.datetime) -> dt.datetime:
    """Parse an ISO-8601 string (or pass through a datetime) as UTC.

    Raises:
        InvalidRangeError: If the value is not a valid ISO-8601 instant.
    """
    if isinstance(value, dt.datetime):
        return ensure_utc(value)
    if isinstance(value, dt.date):
        return dt.datetime(value.year, value.month, value.day, tzinfo=dt.UTC)
    try:
        return ensure_utc(dt.datetime.fromisoformat(value))
    except (TypeError, ValueError) as e:
        raise InvalidRangeError(details={"value": str(value)}) from e


class Interval(BaseModel):
    """A closed time range with overlap-testing semantics.

    Two overlap rules exist on purpose. `overlaps` ignores touching endpoints
    and is what the reservation committer uses; `overlaps_inclusive` treats a
    shared endpoint as a clash and is what the availability check uses.
    """

    model_config = ConfigDict(strict=True, frozen=True)

    start: dt.datetime = Field(..., description="Start instant (UTC)")
    end: dt.datetime = Field(..., description="End instant (UTC)")

    @field_validator("start", "end")
    @classmethod
    def _normalize_utc(cls, v: dt.datetime) -> dt.datetime:
        return ensure_utc(v)

    @model_validator(mode="after")
    def _check_order(self) -> Self:
        if self.start >= self.end:
            raise InvalidRangeError(
                details={"start": self.start.isoformat(), "end": self.end.isoformat()}
            )
        return self

    @classmethod
    def parse(
        cls,
        start: str | dt.datetime,
        end: str | dt.datetime,
    ) -> "Interval":
        """Build an interval from ISO-8601 strings or datetimes.

        Raises:
            InvalidRangeError: For malformed dates or end <= start.
        """
        return cls(start=parse_instant(start), end=parse_instant(end))

    def overlaps(self, other: "Interval") -> bool:
        """Strict overlap: touching endpoints do not count."""
        return self.start < other.end and self.end > other.start

    def overlaps_inclusive(self, other: "Interval") -> bool:
        """Inclusive overlap: touching endpoints count as overlapping."""
        return self.start <= other.end and self.end >= other.start

    def duration_hours(self) -> float:
        """Elapsed time in hours.

        Raises:
            InvalidRangeError: If the duration is not positive.
        """
        hours = (self.end - self.start).total_seconds() / 3600
        if hours <= 0:
            raise InvalidRangeError(
                details={"start": self.start.isoformat(), "end": self.end.isoformat()}
            )
        return hours

    def shifted(self, days: int) -> Self:
        """Return a copy moved by a whole number of days."""
        delta = dt.timedelta(days=days)
        return self.model_copy(update={"start": self.start + delta, "end": self.end + delta})

    def as_interval(self) -> "Interval":
        """Strip any extra fields (span subclasses) down to a plain Interval."""
        return Interval(start=self.start, end=self.end)


class ReservedSpan(Interval):
    """An interval held for a confirmed booking."""

    booking_id: str = Field(..., description="Owning booking ID")


class MaintenanceSpan(Interval):
    """An interval during which the car is out of service."""

    reason: str = Field(default="", description="Free-text maintenance reason")
