"""Base class for all properties in a vCard.

A property is a single logical field of a contact such as a name, a photo or
a timezone. Every property carries an optional group label and a set of
parameters in addition to its own typed value. How a property is written to
and read from each dialect is the concern of its transcoder, not the
property itself.
"""

from __future__ import annotations

import enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..parameters import Pid, VCardParameters
from ..types.version import ALL_VERSIONS, VCardVersion

__all__ = [
    "VCardProperty",
]


class VCardProperty(BaseModel):
    """A property of a vCard."""

    model_config = ConfigDict(
        validate_assignment=True,
        arbitrary_types_allowed=True,
    )

    group: Optional[str] = None
    """Label used to group related properties together, e.g. `item1`."""

    parameters: VCardParameters = Field(default_factory=VCardParameters)
    """Parameters attached to the property."""

    @classmethod
    def supported_versions(cls) -> frozenset[VCardVersion]:
        """Return the versions of the format this property exists in."""
        return ALL_VERSIONS

    @property
    def pref(self) -> int | None:
        """Return the preference of this property among its siblings, 1 is highest."""
        return self.parameters.pref

    @property
    def alt_id(self) -> str | None:
        """Return the identifier grouping alternative representations."""
        return self.parameters.alt_id

    @property
    def pids(self) -> list[Pid]:
        """Return the property identifiers used for synchronization."""
        return self.parameters.pids

    @property
    def types(self) -> list[str]:
        """Return the TYPE parameter values."""
        return self.parameters.types

    def add_type(self, value: str | enum.Enum) -> None:
        """Add a TYPE parameter value, either a string or a parameter enum."""
        if isinstance(value, enum.Enum):
            value = value.value
        self.parameters.add_type(value)

    def remove_type(self, value: str | enum.Enum) -> None:
        """Remove a TYPE parameter value."""
        if isinstance(value, enum.Enum):
            value = value.value
        self.parameters.remove_type(value)
