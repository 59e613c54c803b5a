"""Properties whose value is a single text or URI string."""

from __future__ import annotations

import re
from typing import Optional

from ..types.version import VCardVersion
from .base import VCardProperty

__all__ = [
    "TextProperty",
    "UriProperty",
    "FormattedName",
    "Note",
    "Title",
    "Role",
    "Uid",
    "Mailer",
    "ProductId",
    "Kind",
    "Language",
    "Email",
    "Telephone",
    "Url",
    "Impp",
    "Member",
]

_URI_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*:.")


def is_uri(value: str) -> bool:
    """Return True if the value starts with a URI scheme."""
    return bool(_URI_SCHEME_RE.match(value))


class TextProperty(VCardProperty):
    """A property whose value is text."""

    value: Optional[str] = None
    """The text value of the property."""


class UriProperty(VCardProperty):
    """A property whose value is a URI."""

    uri: Optional[str] = None
    """The URI value of the property."""


class FormattedName(TextProperty):
    """The formatted text of the name of the person, e.g. `Mr. John Doe`."""


class Note(TextProperty):
    """Supplemental information or a comment about the contact."""


class Title(TextProperty):
    """The position or job of the person."""


class Role(TextProperty):
    """The function the person plays within an organization."""


class Uid(TextProperty):
    """A globally unique identifier for the vCard."""


class Mailer(TextProperty):
    """The email client the person uses."""

    @classmethod
    def supported_versions(cls) -> frozenset[VCardVersion]:
        return frozenset({VCardVersion.V2_1, VCardVersion.V3_0})


class ProductId(TextProperty):
    """Identifies the software that created the vCard."""

    @classmethod
    def supported_versions(cls) -> frozenset[VCardVersion]:
        return frozenset({VCardVersion.V3_0, VCardVersion.V4_0})


KIND_INDIVIDUAL = "individual"
KIND_GROUP = "group"
KIND_ORG = "org"
KIND_LOCATION = "location"


class Kind(TextProperty):
    """The kind of entity the vCard represents, e.g. `individual` or `group`."""

    @classmethod
    def supported_versions(cls) -> frozenset[VCardVersion]:
        return frozenset({VCardVersion.V4_0})

    @property
    def is_group(self) -> bool:
        """Return True if the vCard represents a group of contacts."""
        return (self.value or "").lower() == KIND_GROUP


class Language(TextProperty):
    """A language the person speaks, as a language tag, e.g. `en-US`."""

    @classmethod
    def supported_versions(cls) -> frozenset[VCardVersion]:
        return frozenset({VCardVersion.V4_0})


class Email(TextProperty):
    """An email address."""


class Telephone(TextProperty):
    """A telephone number, either text or a `tel:` URI."""


class Url(UriProperty):
    """A website associated with the person."""


# Instant messaging protocols, and how to build a link in an html page.
_IMPP_HTML_LINKS = {
    "aim": ("goim?screenname=", ""),
    "icq": ("message?uin=", ""),
    "msnim": ("chat?contact=", ""),
    "ymsgr": ("sendim?", ""),
    "xmpp": ("", "?message"),
}

_IMPP_HTML_LINK_RES = [
    (
        "aim",
        re.compile(r"^aim:(?:goim|addbuddy)\?.*?screenname=([^&]+)", re.IGNORECASE),
    ),
    (
        "ymsgr",
        re.compile(r"^ymsgr:(?:sendim|addfriend|sendfile|call)\?([^&]+)", re.IGNORECASE),
    ),
    ("skype", re.compile(r"^skype:([^?]+)", re.IGNORECASE)),
    (
        "msnim",
        re.compile(r"^msnim:(?:chat|add|voice|video)\?contact=([^&]+)", re.IGNORECASE),
    ),
    ("xmpp", re.compile(r"^xmpp:([^?]+)", re.IGNORECASE)),
    ("icq", re.compile(r"^icq:message\?uin=(\d+)", re.IGNORECASE)),
    ("sip", re.compile(r"^sip:(.+)", re.IGNORECASE)),
    ("irc", re.compile(r"^irc:(.+)", re.IGNORECASE)),
]


class Impp(UriProperty):
    """An instant messaging handle, e.g. `aim:johndoe`."""

    @classmethod
    def supported_versions(cls) -> frozenset[VCardVersion]:
        return frozenset({VCardVersion.V3_0, VCardVersion.V4_0})

    @classmethod
    def from_handle(cls, protocol: str, handle: str) -> Impp:
        """Create a handle for the specified protocol."""
        return cls(uri=f"{protocol}:{handle}")

    @classmethod
    def aim(cls, handle: str) -> Impp:
        """Create an AOL Instant Messenger handle."""
        return cls.from_handle("aim", handle)

    @classmethod
    def icq(cls, handle: str) -> Impp:
        """Create an ICQ handle."""
        return cls.from_handle("icq", handle)

    @classmethod
    def irc(cls, handle: str) -> Impp:
        """Create an IRC handle."""
        return cls.from_handle("irc", handle)

    @classmethod
    def msn(cls, handle: str) -> Impp:
        """Create a Microsoft Messenger handle."""
        return cls.from_handle("msnim", handle)

    @classmethod
    def sip(cls, handle: str) -> Impp:
        """Create a SIP handle."""
        return cls.from_handle("sip", handle)

    @classmethod
    def skype(cls, handle: str) -> Impp:
        """Create a Skype handle."""
        return cls.from_handle("skype", handle)

    @classmethod
    def xmpp(cls, handle: str) -> Impp:
        """Create an XMPP (Jabber) handle."""
        return cls.from_handle("xmpp", handle)

    @classmethod
    def yahoo(cls, handle: str) -> Impp:
        """Create a Yahoo! Messenger handle."""
        return cls.from_handle("ymsgr", handle)

    @property
    def protocol(self) -> str | None:
        """Return the messaging protocol, the URI scheme."""
        if not self.uri or ":" not in self.uri:
            return None
        return self.uri.split(":", 1)[0]

    @property
    def handle(self) -> str | None:
        """Return the handle, the URI without its scheme."""
        if not self.uri or ":" not in self.uri:
            return None
        return self.uri.split(":", 1)[1]

    def html_link(self) -> str | None:
        """Return the link an html page uses to start a conversation with this handle."""
        if (protocol := self.protocol) is None or (handle := self.handle) is None:
            return None
        prefix, suffix = _IMPP_HTML_LINKS.get(protocol.lower(), ("", ""))
        return f"{protocol}:{prefix}{handle}{suffix}"

    @classmethod
    def parse_html_link(cls, link: str) -> str | None:
        """Parse the handle URI out of a messaging link in an html page."""
        for protocol, regex in _IMPP_HTML_LINK_RES:
            if match := regex.match(link):
                return f"{protocol}:{match.group(1)}"
        if link.lower().startswith("irc://"):
            return link
        return None


class Member(UriProperty):
    """A member of the group this vCard represents."""

    @classmethod
    def supported_versions(cls) -> frozenset[VCardVersion]:
        return frozenset({VCardVersion.V4_0})
