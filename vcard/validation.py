"""Library for the result of validating a vCard.

Validation never blocks reading or writing. It is an advisory report of the
properties that will not be represented faithfully in a particular version
of the format, grouped by the offending property.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from .property.base import VCardProperty

__all__ = [
    "WarningsGroup",
    "ValidationWarnings",
]


@dataclass
class WarningsGroup:
    """The warnings of a single property, or of the whole document."""

    prop: VCardProperty | None
    """The offending property, or None for warnings about the vCard itself."""

    messages: list[str] = field(default_factory=list)
    """Human readable warning messages."""

    def __str__(self) -> str:
        name = type(self.prop).__name__ if self.prop is not None else "vCard"
        return "\n".join(f"[{name}] {message}" for message in self.messages)


class ValidationWarnings:
    """An ordered report of warnings, grouped by property."""

    def __init__(self) -> None:
        """Initialize ValidationWarnings."""
        self._groups: list[WarningsGroup] = []

    def add(self, prop: VCardProperty | None, messages: list[str]) -> None:
        """Record the warnings of a property, omitting properties with no warnings."""
        if not messages:
            return
        self._groups.append(WarningsGroup(prop=prop, messages=list(messages)))

    def by_property(self, property_class: type[VCardProperty]) -> list[WarningsGroup]:
        """Return the groups for properties of the specified class."""
        return [
            group
            for group in self._groups
            if group.prop is not None and isinstance(group.prop, property_class)
        ]

    def document_warnings(self) -> list[str]:
        """Return the warnings about the vCard as a whole."""
        return [
            message
            for group in self._groups
            if group.prop is None
            for message in group.messages
        ]

    def is_empty(self) -> bool:
        """Return True if there are no warnings."""
        return not self._groups

    def __iter__(self) -> Iterator[WarningsGroup]:
        return iter(self._groups)

    def __len__(self) -> int:
        return len(self._groups)

    def __bool__(self) -> bool:
        return bool(self._groups)

    def __str__(self) -> str:
        return "\n".join(str(group) for group in self._groups)
