"""Library of vCard properties, one model per property kind."""

from .agent import Agent
from .base import VCardProperty
from .binary import BinaryProperty, Key, Logo, Photo, Sound
from .geo import Geo
from .raw import RawProperty
from .related import Related
from .structured_name import StructuredName
from .text import (
    Email,
    FormattedName,
    Impp,
    Kind,
    Language,
    Mailer,
    Member,
    Note,
    ProductId,
    Role,
    Telephone,
    TextProperty,
    Title,
    Uid,
    UriProperty,
    Url,
)
from .timezone import Timezone

__all__ = [
    "Agent",
    "BinaryProperty",
    "Email",
    "FormattedName",
    "Geo",
    "Impp",
    "Key",
    "Kind",
    "Language",
    "Logo",
    "Mailer",
    "Member",
    "Note",
    "Photo",
    "ProductId",
    "RawProperty",
    "Related",
    "Role",
    "Sound",
    "StructuredName",
    "Telephone",
    "TextProperty",
    "Timezone",
    "Title",
    "Uid",
    "UriProperty",
    "Url",
    "VCardProperty",
]
