"""Data-type tags for vCard property values.

The data type describes the wire-level shape of a value (e.g. TEXT vs
UTC-OFFSET vs URI). It is declared in the VALUE parameter in the text and
xCard dialects and is a positional field in jCard.
"""

from __future__ import annotations

import enum
from typing import Self

from .version import VCardVersion

__all__ = [
    "VCardDataType",
]

_V2_1 = frozenset({VCardVersion.V2_1})
_V3_0_UP = frozenset({VCardVersion.V3_0, VCardVersion.V4_0})
_V4_0 = frozenset({VCardVersion.V4_0})
_ALL = frozenset(VCardVersion)


class VCardDataType(str, enum.Enum):
    """Value types, using the lower-case names written in jCard and xCard."""

    URL = "url"
    CONTENT_ID = "content-id"
    BINARY = "binary"
    URI = "uri"
    TEXT = "text"
    DATE = "date"
    TIME = "time"
    DATE_TIME = "date-time"
    DATE_AND_OR_TIME = "date-and-or-time"
    TIMESTAMP = "timestamp"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    FLOAT = "float"
    UTC_OFFSET = "utc-offset"
    LANGUAGE_TAG = "language-tag"

    @classmethod
    def find(cls, name: str | None) -> Self | None:
        """Return the data type with the specified name, ignoring case."""
        if not name:
            return None
        try:
            return cls(name.strip().lower())
        except ValueError:
            return None

    @property
    def supported_versions(self) -> frozenset[VCardVersion]:
        """Return the versions in which this data type may be declared."""
        return DATA_TYPE_VERSIONS[self]


DATA_TYPE_VERSIONS: dict[VCardDataType, frozenset[VCardVersion]] = {
    VCardDataType.URL: _V2_1,
    VCardDataType.CONTENT_ID: _V2_1,
    VCardDataType.BINARY: frozenset({VCardVersion.V3_0}),
    VCardDataType.URI: _V3_0_UP,
    VCardDataType.TEXT: _ALL,
    VCardDataType.DATE: _V3_0_UP,
    VCardDataType.TIME: _V3_0_UP,
    VCardDataType.DATE_TIME: _V3_0_UP,
    VCardDataType.DATE_AND_OR_TIME: _V4_0,
    VCardDataType.TIMESTAMP: _V4_0,
    VCardDataType.BOOLEAN: _V3_0_UP,
    VCardDataType.INTEGER: _V3_0_UP,
    VCardDataType.FLOAT: _V3_0_UP,
    VCardDataType.UTC_OFFSET: _ALL,
    VCardDataType.LANGUAGE_TAG: _V4_0,
}
