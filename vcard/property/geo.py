"""The GEO property, the global position of the person."""

from __future__ import annotations

from typing import Optional

from .base import VCardProperty

__all__ = [
    "Geo",
]


class Geo(VCardProperty):
    """Information related to the global position of the person."""

    latitude: Optional[float] = None
    """Latitude in decimal degrees, between -90 and 90."""

    longitude: Optional[float] = None
    """Longitude in decimal degrees, between -180 and 180."""
