"""The TZ property, the timezone of the person.

The value is a UTC offset, free text such as an IANA timezone identifier, or
both. Which of the two is written depends on the version of the format, see
`vcard.transcoders.timezone`.
"""

from __future__ import annotations

import datetime
from typing import Optional

from .. import util
from ..types.utc_offset import UtcOffset
from .base import VCardProperty

__all__ = [
    "Timezone",
]


class Timezone(VCardProperty):
    """The timezone of the person."""

    offset: Optional[UtcOffset] = None
    """The offset from UTC."""

    text: Optional[str] = None
    """Free text describing the timezone, e.g. `America/New_York`."""

    @classmethod
    def from_timezone_id(cls, timezone_id: str) -> Timezone:
        """Create a timezone from an IANA identifier and its current offset."""
        return cls(text=timezone_id, offset=util.offset_for_timezone_id(timezone_id))

    def resolve_offset(self) -> UtcOffset | None:
        """Return the offset, resolving the text as a timezone identifier if needed."""
        if self.offset is not None:
            return self.offset
        if self.text:
            return util.offset_for_timezone_id(self.text)
        return None

    def to_tzinfo(self) -> datetime.tzinfo | None:
        """Return a tzinfo for this timezone, preferring the timezone database."""
        if self.text and (tzinfo := util.timezone_for_id(self.text)) is not None:
            return tzinfo
        if self.offset is None:
            return None
        if self.text:
            return datetime.timezone(self.offset.to_timedelta(), self.text)
        return datetime.timezone(self.offset.to_timedelta())
