"""The AGENT property, someone who acts on behalf of the person."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

from ..types.version import VCardVersion
from .base import VCardProperty

if TYPE_CHECKING:
    from ..vcard import VCard

__all__ = [
    "Agent",
]


class Agent(VCardProperty):
    """A person acting on behalf of the person, as a URL or an embedded vCard."""

    url: Optional[str] = None
    """A reference to the agent, mutually exclusive with `vcard`."""

    vcard: Optional[Any] = None
    """The embedded vCard of the agent, mutually exclusive with `url`."""

    @classmethod
    def supported_versions(cls) -> frozenset[VCardVersion]:
        return frozenset({VCardVersion.V2_1, VCardVersion.V3_0})

    def set_url(self, url: str) -> None:
        """Reference the agent by URL, clearing any embedded vCard."""
        self.vcard = None
        self.url = url

    def set_vcard(self, vcard: VCard) -> None:
        """Embed the vCard of the agent, clearing any URL."""
        self.url = None
        self.vcard = vcard
