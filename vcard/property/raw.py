"""A property that has no dedicated transcoder.

Extended (`X-`) properties and any standard property that is not part of
the catalogue are preserved verbatim so they can be written back out.
"""

from __future__ import annotations

from typing import Optional

from ..types.data_types import VCardDataType
from .base import VCardProperty

__all__ = [
    "RawProperty",
]


class RawProperty(VCardProperty):
    """A property preserved with its literal wire name and value."""

    name: str
    """The property name, as it appeared on the wire."""

    value: Optional[str] = None
    """The literal value of the property."""

    data_type: Optional[VCardDataType] = None
    """The declared data type of the value, if known."""
