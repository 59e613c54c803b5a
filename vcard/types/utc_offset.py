"""Library for parsing and encoding UTC-OFFSET values."""

from __future__ import annotations

import datetime
import re
from dataclasses import dataclass

UTC_OFFSET_REGEX = re.compile(r"^([-+])?([0-9]{1,2})(:?([0-9]{2}))?$")


@dataclass(frozen=True)
class UtcOffset:
    """Contains an offset from UTC to local time.

    The hour carries the sign and the minute is always positive, e.g. -5:30
    is `UtcOffset(hour=-5, minute=30)`. An offset of less than an hour west
    of UTC has no signed hour and sets `negative`, e.g. -0:30 is
    `UtcOffset(hour=0, minute=30, negative=True)`.
    """

    hour: int
    minute: int = 0
    negative: bool = False

    def __post_init__(self) -> None:
        if self.hour < 0:
            object.__setattr__(self, "negative", True)
        elif self.negative and self.hour > 0:
            object.__setattr__(self, "hour", -self.hour)

    @classmethod
    def parse(cls, value: str) -> UtcOffset:
        """Parse a UTC offset in either basic (-0500) or extended (-05:00) format."""
        if not (match := UTC_OFFSET_REGEX.fullmatch(value.strip())):
            raise ValueError(f"Expected value to match UTC-OFFSET pattern: {value}")
        sign, hours, _, minutes = match.groups()
        return UtcOffset(hour=int(hours), minute=int(minutes or 0), negative=sign == "-")

    @classmethod
    def from_timedelta(cls, offset: datetime.timedelta) -> UtcOffset:
        """Create a UTC offset from a time delta, dropping any seconds."""
        total_minutes = int(offset.total_seconds() // 60)
        hours, minutes = divmod(abs(total_minutes), 60)
        return UtcOffset(hour=hours, minute=minutes, negative=total_minutes < 0)

    def to_timedelta(self) -> datetime.timedelta:
        """Return the offset as a time delta."""
        delta = datetime.timedelta(hours=abs(self.hour), minutes=self.minute)
        if self.negative:
            return -delta
        return delta

    def format(self, extended: bool = False) -> str:
        """Serialize as a UTC-OFFSET value in basic or extended format."""
        sign = "-" if self.negative else "+"
        separator = ":" if extended else ""
        return f"{sign}{abs(self.hour):02}{separator}{self.minute:02}"

    def __str__(self) -> str:
        return self.format(extended=False)
