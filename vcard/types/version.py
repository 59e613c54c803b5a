"""Protocol versions of the vCard text format."""

from __future__ import annotations

import enum
from typing import Self

__all__ = [
    "VCardVersion",
    "ALL_VERSIONS",
]

XCARD_NAMESPACE = "urn:ietf:params:xml:ns:vcard-4.0"


class VCardVersion(str, enum.Enum):
    """The three incompatible versions of the vCard format.

    Versions are ordered, so `VCardVersion.V2_1 < VCardVersion.V4_0`.
    """

    V2_1 = "2.1"
    """Legacy version from the versit consortium."""

    V3_0 = "3.0"
    """Intermediate version, rfc2426."""

    V4_0 = "4.0"
    """Current version, rfc6350. The xCard and jCard dialects use this version."""

    @classmethod
    def parse(cls, value: str) -> Self | None:
        """Return the version with the specified version string."""
        try:
            return cls(value.strip())
        except ValueError:
            return None

    @property
    def xml_namespace(self) -> str | None:
        """Return the xCard namespace, only defined for the current version."""
        if self is VCardVersion.V4_0:
            return XCARD_NAMESPACE
        return None

    def _ordinal(self) -> int:
        return list(VCardVersion).index(self)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, VCardVersion):
            return NotImplemented
        return self._ordinal() < other._ordinal()

    def __le__(self, other: object) -> bool:
        if not isinstance(other, VCardVersion):
            return NotImplemented
        return self._ordinal() <= other._ordinal()

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, VCardVersion):
            return NotImplemented
        return self._ordinal() > other._ordinal()

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, VCardVersion):
            return NotImplemented
        return self._ordinal() >= other._ordinal()


ALL_VERSIONS: frozenset[VCardVersion] = frozenset(VCardVersion)
