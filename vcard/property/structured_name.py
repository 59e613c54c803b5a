"""The N property, the components of a person's name."""

from __future__ import annotations

from typing import Optional

from pydantic import Field

from .base import VCardProperty

__all__ = [
    "StructuredName",
]


class StructuredName(VCardProperty):
    """The individual components of the name of the person."""

    family: Optional[str] = None
    """The family (last) name."""

    given: Optional[str] = None
    """The given (first) name."""

    additional: list[str] = Field(default_factory=list)
    """Additional (middle) names."""

    prefixes: list[str] = Field(default_factory=list)
    """Honorific prefixes, e.g. `Dr.`."""

    suffixes: list[str] = Field(default_factory=list)
    """Honorific suffixes, e.g. `Jr.`."""

    def is_empty(self) -> bool:
        """Return True if no component of the name is set."""
        return not any(
            (self.family, self.given, self.additional, self.prefixes, self.suffixes)
        )
