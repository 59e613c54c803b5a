"""Enumerated parameter values and the versions in which they are legal.

Many parameter values only exist in some versions of the format, for example
the telephone TYPE `bbs` was dropped in 4.0 and `textphone` was added. These
rules are kept in a single static table keyed by (property name, parameter
name, value) so that the generic validation pass can check any property
without property-specific code.
"""

from __future__ import annotations

from dataclasses import dataclass
import enum
from typing import Self

from .types.data_types import VCardDataType
from .types.version import VCardVersion

__all__ = [
    "Encoding",
    "TelephoneType",
    "EmailType",
    "AddressType",
    "RelatedType",
    "MediaTypeParameter",
    "ImageType",
    "SoundType",
    "KeyType",
    "PARAMETER_VALUE_VERSIONS",
    "lookup_versions",
]

_V2_1 = frozenset({VCardVersion.V2_1})
_V3_0 = frozenset({VCardVersion.V3_0})
_V4_0 = frozenset({VCardVersion.V4_0})
_V2_1_V3_0 = frozenset({VCardVersion.V2_1, VCardVersion.V3_0})
_V3_0_V4_0 = frozenset({VCardVersion.V3_0, VCardVersion.V4_0})
_ALL = frozenset(VCardVersion)


class Encoding(str, enum.Enum):
    """Values of the ENCODING parameter."""

    QUOTED_PRINTABLE = "quoted-printable"
    BASE64 = "base64"
    EIGHT_BIT = "8bit"
    SEVEN_BIT = "7bit"
    B = "b"

    @classmethod
    def find(cls, value: str | None) -> Self | None:
        """Return the encoding with the specified name, ignoring case."""
        if not value:
            return None
        try:
            return cls(value.lower())
        except ValueError:
            return None


class TelephoneType(str, enum.Enum):
    """Values of the TYPE parameter of the TEL property."""

    BBS = "bbs"
    CAR = "car"
    CELL = "cell"
    FAX = "fax"
    HOME = "home"
    ISDN = "isdn"
    MODEM = "modem"
    MSG = "msg"
    PAGER = "pager"
    PCS = "pcs"
    PREF = "pref"
    TEXT = "text"
    TEXTPHONE = "textphone"
    VIDEO = "video"
    VOICE = "voice"
    WORK = "work"


class EmailType(str, enum.Enum):
    """Values of the TYPE parameter of the EMAIL property."""

    AOL = "aol"
    APPLELINK = "applelink"
    ATTMAIL = "attmail"
    CIS = "cis"
    EWORLD = "eworld"
    INTERNET = "internet"
    IBMMAIL = "ibmmail"
    MCIMAIL = "mcimail"
    POWERSHARE = "powershare"
    PRODIGY = "prodigy"
    TLX = "tlx"
    X400 = "x400"
    PREF = "pref"
    HOME = "home"
    WORK = "work"


class AddressType(str, enum.Enum):
    """Values of the TYPE parameter of the ADR and LABEL properties."""

    HOME = "home"
    WORK = "work"
    DOM = "dom"
    INTL = "intl"
    POSTAL = "postal"
    PARCEL = "parcel"
    PREF = "pref"


class RelatedType(str, enum.Enum):
    """Values of the TYPE parameter of the RELATED property."""

    ACQUAINTANCE = "acquaintance"
    AGENT = "agent"
    CHILD = "child"
    COLLEAGUE = "colleague"
    CONTACT = "contact"
    CO_RESIDENT = "co-resident"
    CO_WORKER = "co-worker"
    CRUSH = "crush"
    DATE = "date"
    EMERGENCY = "emergency"
    FRIEND = "friend"
    KIN = "kin"
    ME = "me"
    MET = "met"
    MUSE = "muse"
    NEIGHBOR = "neighbor"
    PARENT = "parent"
    SIBLING = "sibling"
    SPOUSE = "spouse"
    SWEETHEART = "sweetheart"


_ENCODING_VERSIONS = {
    Encoding.QUOTED_PRINTABLE: _V2_1,
    Encoding.BASE64: _V2_1,
    Encoding.EIGHT_BIT: _V2_1,
    Encoding.SEVEN_BIT: _V2_1,
    Encoding.B: _V3_0,
}

_TELEPHONE_TYPE_VERSIONS = {
    TelephoneType.BBS: _V2_1_V3_0,
    TelephoneType.CAR: _V2_1_V3_0,
    TelephoneType.ISDN: _V2_1_V3_0,
    TelephoneType.MODEM: _V2_1_V3_0,
    TelephoneType.MSG: _V2_1_V3_0,
    TelephoneType.PCS: _V3_0,
    TelephoneType.PREF: _V2_1_V3_0,
    TelephoneType.TEXT: _V4_0,
    TelephoneType.TEXTPHONE: _V4_0,
}

_EMAIL_TYPE_VERSIONS = {
    EmailType.AOL: _V2_1,
    EmailType.APPLELINK: _V2_1,
    EmailType.ATTMAIL: _V2_1,
    EmailType.CIS: _V2_1,
    EmailType.EWORLD: _V2_1,
    EmailType.INTERNET: _V2_1_V3_0,
    EmailType.IBMMAIL: _V2_1,
    EmailType.MCIMAIL: _V2_1,
    EmailType.POWERSHARE: _V2_1,
    EmailType.PRODIGY: _V2_1,
    EmailType.TLX: _V2_1,
    EmailType.X400: _V2_1_V3_0,
    EmailType.PREF: _V2_1_V3_0,
    EmailType.HOME: _V3_0_V4_0,
    EmailType.WORK: _V3_0_V4_0,
}

_ADDRESS_TYPE_VERSIONS = {
    AddressType.DOM: _V2_1_V3_0,
    AddressType.INTL: _V2_1_V3_0,
    AddressType.POSTAL: _V2_1_V3_0,
    AddressType.PARCEL: _V2_1_V3_0,
    AddressType.PREF: _V2_1_V3_0,
}

# The 2.1 VALUE parameter has a few values that are not data types.
_LEGACY_VALUE_VERSIONS = {
    "inline": _V2_1,
    "cid": _V2_1,
}


def _build_table() -> dict[tuple[str | None, str, str], frozenset[VCardVersion]]:
    """Build the (property name, parameter name, value) -> versions table."""
    table: dict[tuple[str | None, str, str], frozenset[VCardVersion]] = {}
    for encoding in Encoding:
        table[(None, "ENCODING", encoding.value)] = _ENCODING_VERSIONS[encoding]
    for data_type in VCardDataType:
        table[(None, "VALUE", data_type.value)] = data_type.supported_versions
    for value, versions in _LEGACY_VALUE_VERSIONS.items():
        table[(None, "VALUE", value)] = versions
    type_tables: list[tuple[str, type[enum.Enum], dict]] = [
        ("TEL", TelephoneType, _TELEPHONE_TYPE_VERSIONS),
        ("EMAIL", EmailType, _EMAIL_TYPE_VERSIONS),
        ("ADR", AddressType, _ADDRESS_TYPE_VERSIONS),
        ("LABEL", AddressType, _ADDRESS_TYPE_VERSIONS),
    ]
    for property_name, enum_type, versions_table in type_tables:
        for member in enum_type:
            table[(property_name, "TYPE", member.value)] = versions_table.get(
                member, _ALL
            )
    for related_type in RelatedType:
        table[("RELATED", "TYPE", related_type.value)] = _V4_0
    return table


PARAMETER_VALUE_VERSIONS = _build_table()


def lookup_versions(
    property_name: str | None, parameter: str, value: str
) -> frozenset[VCardVersion] | None:
    """Return the versions a parameter value is legal in, or None if unknown.

    A property specific entry takes precedence over a generic one.
    """
    parameter = parameter.upper()
    value = value.lower()
    if property_name is not None:
        key = (property_name.upper(), parameter, value)
        if (versions := PARAMETER_VALUE_VERSIONS.get(key)) is not None:
            return versions
    return PARAMETER_VALUE_VERSIONS.get((None, parameter, value))


@dataclass(frozen=True)
class MediaTypeParameter:
    """The sub-type marker of a binary property, e.g. the format of an image.

    Versions 2.1 and 3.0 write the `value` in the TYPE parameter while 4.0
    uses the `media_type` in the MEDIATYPE parameter or the data URI.
    """

    value: str
    media_type: str | None = None
    extension: str | None = None


class MediaTypes:
    """Base class for a table of well-known media type markers."""

    @classmethod
    def all(cls) -> list[MediaTypeParameter]:
        """Return all of the well-known markers in this table."""
        return [
            value for value in vars(cls).values() if isinstance(value, MediaTypeParameter)
        ]

    @classmethod
    def find(cls, value: str | None) -> MediaTypeParameter | None:
        """Find a well-known marker by its TYPE value."""
        if not value:
            return None
        value = value.lower()
        for param in cls.all():
            if param.value.lower() == value:
                return param
        return None

    @classmethod
    def find_by_media_type(cls, media_type: str | None) -> MediaTypeParameter | None:
        """Find a well-known marker by its media type, e.g. `image/png`."""
        if not media_type:
            return None
        media_type = media_type.lower()
        for param in cls.all():
            if param.media_type and param.media_type.lower() == media_type:
                return param
        return None

    @classmethod
    def find_by_extension(cls, extension: str | None) -> MediaTypeParameter | None:
        """Find a well-known marker by file extension, without the dot."""
        if not extension:
            return None
        extension = extension.lower()
        for param in cls.all():
            if param.extension and param.extension.lower() == extension:
                return param
        return None

    @classmethod
    def get(cls, value: str) -> MediaTypeParameter:
        """Return the marker for a TYPE value, creating one if unknown."""
        if param := cls.find(value):
            return param
        return MediaTypeParameter(value=value)

    @classmethod
    def get_by_media_type(cls, media_type: str) -> MediaTypeParameter:
        """Return the marker for a media type, creating one if unknown."""
        if param := cls.find_by_media_type(media_type):
            return param
        _, _, sub_type = media_type.partition("/")
        return MediaTypeParameter(value=sub_type.upper(), media_type=media_type)


class ImageType(MediaTypes):
    """Formats of the PHOTO and LOGO properties."""

    GIF = MediaTypeParameter("GIF", "image/gif", "gif")
    JPEG = MediaTypeParameter("JPEG", "image/jpeg", "jpg")
    PNG = MediaTypeParameter("PNG", "image/png", "png")
    BMP = MediaTypeParameter("BMP", "image/bmp", "bmp")
    TIFF = MediaTypeParameter("TIFF", "image/tiff", "tiff")


class SoundType(MediaTypes):
    """Formats of the SOUND property."""

    AAC = MediaTypeParameter("AAC", "audio/aac", "aac")
    MIDI = MediaTypeParameter("MIDI", "audio/midi", "mid")
    MP3 = MediaTypeParameter("MP3", "audio/mp3", "mp3")
    MPEG = MediaTypeParameter("MPEG", "audio/mpeg", "mpeg")
    OGG = MediaTypeParameter("OGG", "audio/ogg", "ogg")
    WAV = MediaTypeParameter("WAV", "audio/wav", "wav")


class KeyType(MediaTypes):
    """Formats of the KEY property."""

    PGP = MediaTypeParameter("PGP", "application/pgp-keys", "pgp")
    GPG = MediaTypeParameter("GPG", "application/gpg", "gpg")
    X509 = MediaTypeParameter("X509", "application/x509", None)
