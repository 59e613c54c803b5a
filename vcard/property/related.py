"""The RELATED property, another entity the person is related to."""

from __future__ import annotations

from typing import Optional

from ..types.version import VCardVersion
from .base import VCardProperty

__all__ = [
    "Related",
]


class Related(VCardProperty):
    """A relationship to another entity, as a URI or free text."""

    uri: Optional[str] = None
    """A reference to the related entity, mutually exclusive with `text`."""

    text: Optional[str] = None
    """A description of the related entity, mutually exclusive with `uri`."""

    @classmethod
    def supported_versions(cls) -> frozenset[VCardVersion]:
        return frozenset({VCardVersion.V4_0})

    def set_uri(self, uri: str) -> None:
        """Reference the related entity by URI, clearing any text."""
        self.text = None
        self.uri = uri

    def set_uri_email(self, email: str) -> None:
        """Reference the related entity by email address."""
        self.set_uri(f"mailto:{email}")

    def set_uri_telephone(self, telephone: str) -> None:
        """Reference the related entity by telephone number."""
        self.set_uri(f"tel:{telephone}")

    def set_text(self, text: str) -> None:
        """Describe the related entity with text, clearing any URI."""
        self.uri = None
        self.text = text
