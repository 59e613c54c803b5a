"""Transcoders for properties whose value is a URL or inline binary data.

The value is either a reference to the data or the data itself, and both
carry a marker for the format of the data.

| Version | url | data |
|---|---|---|
| 2.1 | `VALUE=URL`, `TYPE` | base64, `ENCODING=BASE64`, `TYPE` |
| 3.0 | `VALUE=URI`, `TYPE` | base64, `ENCODING=B`, `TYPE` |
| 4.0 | `VALUE=URI`, `MEDIATYPE` | `data:<media type>;base64,<data>`, `VALUE=URI` |
"""

from __future__ import annotations

import base64
import binascii
import logging
import re
from typing import TYPE_CHECKING
from urllib.parse import unquote_to_bytes

from ..compat import binary_compat
from ..exceptions import CannotParseError, MissingXmlElementsError
from ..parameter_values import Encoding, MediaTypeParameter
from ..parameters import ENCODING, MEDIATYPE, TYPE, VCardParameters
from ..parsing.hcard_element import HCardElement
from ..parsing.xcard_element import XCardElement
from ..property.binary import BinaryProperty, Key, Logo, Photo, Sound
from ..property.text import is_uri
from ..types.data_types import VCardDataType
from ..types.jcard_value import JCardValue
from ..types.version import VCardVersion
from .base import ParseContext, T_PROPERTY, TranscoderBase
from .catalogue import BUILTIN_TRANSCODERS

if TYPE_CHECKING:
    from ..vcard import VCard

__all__ = [
    "BinaryPropertyTranscoder",
    "PhotoTranscoder",
    "LogoTranscoder",
    "SoundTranscoder",
    "KeyTranscoder",
]

_LOGGER = logging.getLogger(__name__)

DATA_URI_RE = re.compile(
    r"^data:(?P<media_type>[^,;]*)(?P<params>(?:;[^,;]*)*?)(?P<base64>;base64)?,(?P<data>.*)$",
    re.IGNORECASE | re.DOTALL,
)
DEFAULT_MEDIA_TYPE = "application/octet-stream"

# Encoding written with inline data, keyed by version.
_DATA_ENCODINGS: dict[VCardVersion, Encoding | None] = {
    VCardVersion.V2_1: Encoding.BASE64,
    VCardVersion.V3_0: Encoding.B,
    VCardVersion.V4_0: None,
}

# VALUE written with a url, keyed by version.
_URL_DATA_TYPES: dict[VCardVersion, VCardDataType] = {
    VCardVersion.V2_1: VCardDataType.URL,
    VCardVersion.V3_0: VCardDataType.URI,
    VCardVersion.V4_0: VCardDataType.URI,
}

# Tag name and attribute holding the location of the data in hCard.
_HTML_URL_ATTRIBUTES = {
    "img": "src",
    "a": "href",
    "object": "data",
    "source": "src",
    "audio": "src",
    "embed": "src",
}


def decode_base64(value: str) -> bytes:
    """Decode base64 data, raising `ValueError` when it is malformed."""
    if binary_compat.is_lenient_base64_enabled():
        value = "".join(value.split())
        value += "=" * (-len(value) % 4)
    try:
        return base64.b64decode(value, validate=True)
    except binascii.Error as err:
        raise ValueError(f"Value was not valid base64: {err}") from err


def data_uri(data: bytes, media_type: str | None) -> str:
    """Build a base64 data URI."""
    payload = base64.b64encode(data).decode("ascii")
    return f"data:{media_type or DEFAULT_MEDIA_TYPE};base64,{payload}"


def parse_data_uri(value: str) -> tuple[str | None, bytes]:
    """Return the media type and data of a data URI."""
    if not (match := DATA_URI_RE.match(value)):
        raise ValueError(f"Value was not a valid data URI: {value}")
    payload = match.group("data")
    if match.group("base64"):
        data = decode_base64(payload)
    else:
        data = unquote_to_bytes(payload)
    return (match.group("media_type") or None, data)


class BinaryPropertyTranscoder(TranscoderBase[T_PROPERTY]):
    """Reads and writes a URL or inline binary data."""

    def default_data_type(self, version: VCardVersion) -> VCardDataType | None:
        if version is VCardVersion.V2_1:
            return None
        if version is VCardVersion.V3_0:
            return VCardDataType.BINARY
        return VCardDataType.URI

    def data_type(
        self, prop: BinaryProperty, version: VCardVersion
    ) -> VCardDataType | None:
        if prop.url is not None:
            return _URL_DATA_TYPES[version]
        return self.default_data_type(version)

    def _prepare_parameters(
        self,
        prop: BinaryProperty,
        parameters: VCardParameters,
        version: VCardVersion,
        vcard: VCard | None,
    ) -> None:
        content_type = prop.content_type
        parameters.remove_all(MEDIATYPE)
        parameters.encoding = None
        if prop.url is not None:
            parameters.value = _URL_DATA_TYPES[version]
        elif prop.data is not None and version is VCardVersion.V4_0:
            parameters.value = VCardDataType.URI
        else:
            parameters.value = None
        if prop.data is not None:
            parameters.encoding = _DATA_ENCODINGS[version]

        if version is VCardVersion.V4_0:
            if prop.url is not None and content_type and content_type.media_type:
                parameters.media_type = content_type.media_type
            if content_type is not None:
                parameters.remove_type(content_type.value)
            return
        if content_type is not None and not parameters.has_type(content_type.value):
            parameters.add_type(content_type.value)

    def write_text(self, prop: BinaryProperty, version: VCardVersion) -> str:
        if prop.url is not None:
            return prop.url
        if prop.data is None:
            return ""
        if version is VCardVersion.V4_0:
            media_type = prop.content_type.media_type if prop.content_type else None
            return data_uri(prop.data, media_type)
        return base64.b64encode(prop.data).decode("ascii")

    def _content_type(self, parameters: VCardParameters) -> MediaTypeParameter | None:
        """Consume the TYPE and MEDIATYPE parameters."""
        media_types = self.property_class.media_types
        content_type = None
        if media_type := parameters.media_type:
            content_type = media_types.get_by_media_type(media_type)
        parameters.remove_all(MEDIATYPE)
        types = parameters.remove_all(TYPE)
        if content_type is None and types:
            content_type = media_types.get(types[0])
        return content_type

    def _from_data_uri(
        self, value: str, content_type: MediaTypeParameter | None
    ) -> BinaryProperty:
        try:
            media_type, data = parse_data_uri(value)
        except ValueError as err:
            raise CannotParseError(
                "Unable to parse data URI", detailed_error=str(err)
            ) from err
        if media_type:
            content_type = self.property_class.media_types.get_by_media_type(media_type)
        prop = self.property_class()
        prop.set_data(data, content_type)
        return prop

    def _from_url(self, value: str, content_type: MediaTypeParameter | None) -> BinaryProperty:
        prop = self.property_class()
        prop.set_url(value, content_type)
        return prop

    def parse_text(
        self,
        value: str,
        data_type: VCardDataType | None,
        parameters: VCardParameters,
        context: ParseContext,
    ) -> BinaryProperty:
        content_type = self._content_type(parameters)
        parameters.remove_all(ENCODING)
        value = value.strip()
        if not value:
            return self.property_class(content_type=content_type)
        if value.lower().startswith("data:"):
            return self._from_data_uri(value, content_type)
        if data_type in (VCardDataType.URL, VCardDataType.URI, VCardDataType.CONTENT_ID):
            return self._from_url(value, content_type)
        try:
            data = decode_base64(value)
        except ValueError as err:
            if is_uri(value):
                _LOGGER.debug("Treating value that is not base64 as a URL: %s", value)
                return self._from_url(value, content_type)
            raise CannotParseError(
                "Unable to parse binary data", detailed_error=str(err)
            ) from err
        prop = self.property_class()
        prop.set_data(data, content_type)
        return prop

    def write_json(self, prop: BinaryProperty) -> JCardValue:
        return JCardValue.single(self.write_text(prop, VCardVersion.V4_0))

    def parse_json(
        self,
        value: JCardValue,
        data_type: VCardDataType | None,
        parameters: VCardParameters,
        context: ParseContext,
    ) -> BinaryProperty:
        return self.parse_text(value.as_single(), data_type, parameters, context)

    def write_xml(self, prop: BinaryProperty, element: XCardElement) -> None:
        element.append(VCardDataType.URI.value, self.write_text(prop, VCardVersion.V4_0))

    def parse_xml(
        self,
        element: XCardElement,
        parameters: VCardParameters,
        context: ParseContext,
    ) -> BinaryProperty:
        if (value := element.first(VCardDataType.URI.value)) is None:
            raise MissingXmlElementsError(VCardDataType.URI.value)
        return self.parse_text(value, VCardDataType.URI, parameters, context)

    def parse_html(self, element: HCardElement, context: ParseContext) -> BinaryProperty:
        media_types = self.property_class.media_types
        content_type = None
        if media_type := element.attr("type"):
            content_type = media_types.get_by_media_type(media_type)
        if (attribute := _HTML_URL_ATTRIBUTES.get(element.tag_name)) is not None:
            value = element.abs_url(attribute)
        else:
            value = element.value()
        if value.lower().startswith("data:"):
            return self._from_data_uri(value, content_type)
        if content_type is None and "." in value:
            content_type = media_types.find_by_extension(value.rsplit(".", 1)[-1])
        return self._from_url(value, content_type)

    def validate(
        self, prop: BinaryProperty, version: VCardVersion, vcard: VCard | None
    ) -> list[str]:
        if prop.url is None and prop.data is None:
            return ["Property has neither a URL nor binary data associated with it."]
        return []


@BUILTIN_TRANSCODERS.register
class PhotoTranscoder(BinaryPropertyTranscoder[Photo]):
    """Reads and writes the PHOTO property."""

    property_name = "PHOTO"
    property_class = Photo


@BUILTIN_TRANSCODERS.register
class LogoTranscoder(BinaryPropertyTranscoder[Logo]):
    """Reads and writes the LOGO property."""

    property_name = "LOGO"
    property_class = Logo


@BUILTIN_TRANSCODERS.register
class SoundTranscoder(BinaryPropertyTranscoder[Sound]):
    """Reads and writes the SOUND property."""

    property_name = "SOUND"
    property_class = Sound


@BUILTIN_TRANSCODERS.register
class KeyTranscoder(BinaryPropertyTranscoder[Key]):
    """Reads and writes the KEY property."""

    property_name = "KEY"
    property_class = Key
