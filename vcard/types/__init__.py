"""Library for vCard value types, versions and data-type tags."""

from .data_types import VCardDataType
from .jcard_value import JCardValue
from .utc_offset import UtcOffset
from .version import ALL_VERSIONS, VCardVersion

__all__ = [
    "ALL_VERSIONS",
    "JCardValue",
    "UtcOffset",
    "VCardDataType",
    "VCardVersion",
]
