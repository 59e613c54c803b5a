"""Transcoders for properties whose value is a single text or URI string."""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

from ..exceptions import CannotParseError, MissingXmlElementsError
from ..parameters import VCardParameters
from ..parsing.hcard_element import HCardElement
from ..parsing.xcard_element import XCardElement
from ..property.text import (
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
    is_uri,
)
from ..types import text
from ..types.data_types import VCardDataType
from ..types.jcard_value import JCardValue
from ..types.version import VCardVersion
from .base import ParseContext, TranscoderBase
from .catalogue import BUILTIN_TRANSCODERS

if TYPE_CHECKING:
    from ..vcard import VCard

__all__ = [
    "TextPropertyTranscoder",
    "UriPropertyTranscoder",
]

T_TEXT = TypeVar("T_TEXT", bound=TextProperty)
T_URI = TypeVar("T_URI", bound=UriProperty)

MAILTO = "mailto:"
TEL = "tel:"


class TextPropertyTranscoder(TranscoderBase[T_TEXT]):
    """Reads and writes a property whose value is escaped text."""

    def write_text(self, prop: T_TEXT, version: VCardVersion) -> str:
        return text.escape(prop.value or "", version)

    def parse_text(
        self,
        value: str,
        data_type: VCardDataType | None,
        parameters: VCardParameters,
        context: ParseContext,
    ) -> T_TEXT:
        return self.property_class(value=text.unescape(value))

    def write_json(self, prop: T_TEXT) -> JCardValue:
        return JCardValue.single(prop.value or "")

    def write_xml(self, prop: T_TEXT, element: XCardElement) -> None:
        data_type = self.data_type(prop, VCardVersion.V4_0) or VCardDataType.TEXT
        element.append(data_type.value, prop.value or "")

    def parse_xml(
        self,
        element: XCardElement,
        parameters: VCardParameters,
        context: ParseContext,
    ) -> T_TEXT:
        names = [VCardDataType.TEXT.value]
        data_type = self.default_data_type(VCardVersion.V4_0)
        if data_type not in (None, VCardDataType.TEXT):
            names.insert(0, data_type.value)
        if (value := element.first(*names)) is None:
            raise MissingXmlElementsError(*names)
        return self.property_class(value=value)


class UriPropertyTranscoder(TranscoderBase[T_URI]):
    """Reads and writes a property whose value is a URI."""

    def default_data_type(self, version: VCardVersion) -> VCardDataType | None:
        if version is VCardVersion.V2_1:
            return VCardDataType.URL
        return VCardDataType.URI

    def write_text(self, prop: T_URI, version: VCardVersion) -> str:
        return text.escape(prop.uri or "", version)

    def parse_text(
        self,
        value: str,
        data_type: VCardDataType | None,
        parameters: VCardParameters,
        context: ParseContext,
    ) -> T_URI:
        return self.property_class(uri=text.unescape(value) or None)

    def write_json(self, prop: T_URI) -> JCardValue:
        return JCardValue.single(prop.uri or "")

    def write_xml(self, prop: T_URI, element: XCardElement) -> None:
        element.append(VCardDataType.URI.value, prop.uri or "")

    def parse_xml(
        self,
        element: XCardElement,
        parameters: VCardParameters,
        context: ParseContext,
    ) -> T_URI:
        if (value := element.first(VCardDataType.URI.value)) is None:
            raise MissingXmlElementsError(VCardDataType.URI.value)
        return self.parse_text(
            text.escape(value, VCardVersion.V4_0), None, parameters, context
        )

    def parse_html(self, element: HCardElement, context: ParseContext) -> T_URI:
        if element.tag_name == "a" and (href := element.abs_url("href")):
            return self.property_class(uri=href)
        return super().parse_html(element, context)


@BUILTIN_TRANSCODERS.register
class FormattedNameTranscoder(TextPropertyTranscoder[FormattedName]):
    """Transcoder for the FN property."""

    property_name = "FN"
    property_class = FormattedName


@BUILTIN_TRANSCODERS.register
class NoteTranscoder(TextPropertyTranscoder[Note]):
    """Transcoder for the NOTE property."""

    property_name = "NOTE"
    property_class = Note


@BUILTIN_TRANSCODERS.register
class TitleTranscoder(TextPropertyTranscoder[Title]):
    """Transcoder for the TITLE property."""

    property_name = "TITLE"
    property_class = Title


@BUILTIN_TRANSCODERS.register
class RoleTranscoder(TextPropertyTranscoder[Role]):
    """Transcoder for the ROLE property."""

    property_name = "ROLE"
    property_class = Role


@BUILTIN_TRANSCODERS.register
class UidTranscoder(TextPropertyTranscoder[Uid]):
    """Transcoder for the UID property.

    Version 4.0 defaults to a URI value such as `urn:uuid:...`.
    """

    property_name = "UID"
    property_class = Uid

    def default_data_type(self, version: VCardVersion) -> VCardDataType | None:
        if version is VCardVersion.V4_0:
            return VCardDataType.URI
        return VCardDataType.TEXT

    def data_type(self, prop: Uid, version: VCardVersion) -> VCardDataType | None:
        if version is VCardVersion.V4_0 and not is_uri(prop.value or ""):
            return VCardDataType.TEXT
        return self.default_data_type(version)


@BUILTIN_TRANSCODERS.register
class MailerTranscoder(TextPropertyTranscoder[Mailer]):
    """Transcoder for the MAILER property."""

    property_name = "MAILER"
    property_class = Mailer


@BUILTIN_TRANSCODERS.register
class ProductIdTranscoder(TextPropertyTranscoder[ProductId]):
    """Transcoder for the PRODID property."""

    property_name = "PRODID"
    property_class = ProductId


@BUILTIN_TRANSCODERS.register
class KindTranscoder(TextPropertyTranscoder[Kind]):
    """Transcoder for the KIND property."""

    property_name = "KIND"
    property_class = Kind


@BUILTIN_TRANSCODERS.register
class LanguageTranscoder(TextPropertyTranscoder[Language]):
    """Transcoder for the LANG property."""

    property_name = "LANG"
    property_class = Language

    def default_data_type(self, version: VCardVersion) -> VCardDataType | None:
        return VCardDataType.LANGUAGE_TAG


@BUILTIN_TRANSCODERS.register
class EmailTranscoder(TextPropertyTranscoder[Email]):
    """Transcoder for the EMAIL property."""

    property_name = "EMAIL"
    property_class = Email

    def parse_html(self, element: HCardElement, context: ParseContext) -> Email:
        href = element.attr("href") if element.tag_name == "a" else ""
        if href.lower().startswith(MAILTO):
            address = href[len(MAILTO) :].split("?", 1)[0]
        else:
            address = element.value()
        prop = Email(value=address)
        for value in element.types():
            prop.add_type(value)
        return prop


@BUILTIN_TRANSCODERS.register
class TelephoneTranscoder(TextPropertyTranscoder[Telephone]):
    """Transcoder for the TEL property.

    Version 4.0 may write the number as a `tel:` URI.
    """

    property_name = "TEL"
    property_class = Telephone

    def data_type(self, prop: Telephone, version: VCardVersion) -> VCardDataType | None:
        if version is VCardVersion.V4_0 and (prop.value or "").lower().startswith(TEL):
            return VCardDataType.URI
        return VCardDataType.TEXT

    def write_text(self, prop: Telephone, version: VCardVersion) -> str:
        if self.data_type(prop, version) is VCardDataType.URI:
            return prop.value or ""
        return super().write_text(prop, version)

    def parse_text(
        self,
        value: str,
        data_type: VCardDataType | None,
        parameters: VCardParameters,
        context: ParseContext,
    ) -> Telephone:
        if data_type is VCardDataType.URI:
            return Telephone(value=value)
        return super().parse_text(value, data_type, parameters, context)

    def parse_xml(
        self,
        element: XCardElement,
        parameters: VCardParameters,
        context: ParseContext,
    ) -> Telephone:
        if (value := element.first(VCardDataType.TEXT.value, VCardDataType.URI.value)) is None:
            raise MissingXmlElementsError(VCardDataType.TEXT.value, VCardDataType.URI.value)
        return Telephone(value=value)

    def parse_html(self, element: HCardElement, context: ParseContext) -> Telephone:
        href = element.attr("href") if element.tag_name == "a" else ""
        if href.lower().startswith(TEL):
            number = href[len(TEL) :]
        else:
            number = element.value()
        prop = Telephone(value=number)
        for value in element.types():
            prop.add_type(value)
        return prop


@BUILTIN_TRANSCODERS.register
class UrlTranscoder(UriPropertyTranscoder[Url]):
    """Transcoder for the URL property."""

    property_name = "URL"
    property_class = Url


@BUILTIN_TRANSCODERS.register
class ImppTranscoder(UriPropertyTranscoder[Impp]):
    """Transcoder for the IMPP property.

    The value must be a URI with a scheme naming the messaging protocol.
    """

    property_name = "IMPP"
    property_class = Impp

    def parse_text(
        self,
        value: str,
        data_type: VCardDataType | None,
        parameters: VCardParameters,
        context: ParseContext,
    ) -> Impp:
        if not (uri := text.unescape(value)):
            return Impp()
        if not is_uri(uri):
            raise CannotParseError(f"Value is not a valid URI: {uri}")
        return Impp(uri=uri)

    def parse_html(self, element: HCardElement, context: ParseContext) -> Impp:
        link = element.attr("href") if element.tag_name == "a" else element.value()
        if (uri := Impp.parse_html_link(link)) is None:
            raise CannotParseError(f"Unable to parse instant messaging link: {link}")
        return Impp(uri=uri)


@BUILTIN_TRANSCODERS.register
class MemberTranscoder(UriPropertyTranscoder[Member]):
    """Transcoder for the MEMBER property."""

    property_name = "MEMBER"
    property_class = Member

    def validate(
        self, prop: Member, version: VCardVersion, vcard: VCard | None
    ) -> list[str]:
        if vcard is None:
            return []
        kind = vcard.get_property(Kind)
        if kind is None or not kind.is_group:
            return [
                'The value of the KIND property must be set to "group" in order '
                "to add MEMBER properties to the vCard."
            ]
        return []
