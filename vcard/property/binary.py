"""Properties whose value is either a URL or inline binary content.

Setting one kind of value clears the other. Both kinds carry an optional
content type describing the format of the data, e.g. `ImageType.JPEG`.
"""

from __future__ import annotations

from typing import ClassVar, Optional

from ..parameter_values import ImageType, KeyType, MediaTypeParameter, MediaTypes, SoundType
from .base import VCardProperty

__all__ = [
    "BinaryProperty",
    "Photo",
    "Logo",
    "Sound",
]


class BinaryProperty(VCardProperty):
    """A property holding a URL or inline binary data."""

    media_types: ClassVar[type[MediaTypes]] = MediaTypes
    """The table of well-known content types for this property."""

    url: Optional[str] = None
    """A reference to the data, mutually exclusive with `data`."""

    data: Optional[bytes] = None
    """The inline data, mutually exclusive with `url`."""

    content_type: Optional[MediaTypeParameter] = None
    """The format of the data."""

    def set_url(self, url: str, content_type: MediaTypeParameter | None = None) -> None:
        """Reference the data by URL, clearing any inline data."""
        self.data = None
        self.url = url
        self.content_type = content_type

    def set_data(
        self, data: bytes, content_type: MediaTypeParameter | None = None
    ) -> None:
        """Store the data inline, clearing any URL."""
        self.url = None
        self.data = data
        self.content_type = content_type


class Photo(BinaryProperty):
    """An image of the person."""

    media_types = ImageType


class Logo(BinaryProperty):
    """The logo of the organization the person belongs to."""

    media_types = ImageType


class Sound(BinaryProperty):
    """A sound, such as the pronunciation of the name of the person."""

    media_types = SoundType


class Key(BinaryProperty):
    """A public key or certificate of the person, e.g. for encrypting email."""

    media_types = KeyType
