"""Utility methods used by multiple components."""

from __future__ import annotations

import datetime
from importlib import metadata
import logging
import zoneinfo

from .types.utc_offset import UtcOffset

__all__ = [
    "now_factory",
    "prodid_factory",
    "offset_for_timezone_id",
    "timezone_for_id",
]

_LOGGER = logging.getLogger(__name__)

PRODID = "github.com/vcard/vcard"
try:
    VERSION = metadata.version("vcard")
except metadata.PackageNotFoundError:
    VERSION = "0.0.0"


def now_factory() -> datetime.datetime:
    """Factory method for the current time to facilitate mocking."""
    return datetime.datetime.now(tz=datetime.UTC)


def prodid_factory() -> str:
    """Return the product identifier written by this library, to facilitate mocking."""
    return f"-//{PRODID}//{VERSION}//EN"


def timezone_for_id(timezone_id: str) -> zoneinfo.ZoneInfo | None:
    """Return the timezone for an IANA identifier, or None if it is unknown."""
    try:
        return zoneinfo.ZoneInfo(timezone_id)
    except (zoneinfo.ZoneInfoNotFoundError, ValueError):
        _LOGGER.debug("Unable to resolve timezone identifier %s", timezone_id)
        return None


def offset_for_timezone_id(timezone_id: str) -> UtcOffset | None:
    """Resolve an IANA timezone identifier to its current offset from UTC.

    Returns None when the identifier is not in the timezone database.
    """
    if (tzinfo := timezone_for_id(timezone_id)) is None:
        return None
    if (offset := now_factory().astimezone(tzinfo).utcoffset()) is None:
        return None
    return UtcOffset.from_timedelta(offset)
