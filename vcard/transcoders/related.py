"""Transcoder for the RELATED property."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..exceptions import MissingXmlElementsError
from ..parameters import VCardParameters
from ..parsing.hcard_element import HCardElement
from ..parsing.xcard_element import XCardElement
from ..property.related import Related
from ..property.text import is_uri
from ..types import text
from ..types.data_types import VCardDataType
from ..types.jcard_value import JCardValue
from ..types.version import VCardVersion
from .base import ParseContext, TranscoderBase
from .catalogue import BUILTIN_TRANSCODERS

if TYPE_CHECKING:
    from ..vcard import VCard

__all__ = [
    "RelatedTranscoder",
]


@BUILTIN_TRANSCODERS.register
class RelatedTranscoder(TranscoderBase[Related]):
    """Reads and writes a related entity as a URI or with `VALUE=text`."""

    property_name = "RELATED"
    property_class = Related

    def default_data_type(self, version: VCardVersion) -> VCardDataType | None:
        return VCardDataType.URI

    def data_type(self, prop: Related, version: VCardVersion) -> VCardDataType | None:
        if prop.text is not None:
            return VCardDataType.TEXT
        return VCardDataType.URI

    def write_text(self, prop: Related, version: VCardVersion) -> str:
        if prop.uri is not None:
            return prop.uri
        if prop.text is not None:
            return text.escape(prop.text, version)
        return ""

    def parse_text(
        self,
        value: str,
        data_type: VCardDataType | None,
        parameters: VCardParameters,
        context: ParseContext,
    ) -> Related:
        prop = Related()
        if data_type is VCardDataType.TEXT:
            prop.set_text(text.unescape(value))
        elif value:
            prop.set_uri(value)
        return prop

    def write_json(self, prop: Related) -> JCardValue:
        return JCardValue.single(prop.uri or prop.text or "")

    def parse_json(
        self,
        value: JCardValue,
        data_type: VCardDataType | None,
        parameters: VCardParameters,
        context: ParseContext,
    ) -> Related:
        prop = Related()
        single = value.as_single()
        if data_type is VCardDataType.TEXT:
            prop.set_text(single)
        elif single:
            prop.set_uri(single)
        return prop

    def write_xml(self, prop: Related, element: XCardElement) -> None:
        if prop.text is not None:
            element.append(VCardDataType.TEXT.value, prop.text)
        else:
            element.append(VCardDataType.URI.value, prop.uri or "")

    def parse_xml(
        self,
        element: XCardElement,
        parameters: VCardParameters,
        context: ParseContext,
    ) -> Related:
        prop = Related()
        if (value := element.first(VCardDataType.URI.value)) is not None:
            if value:
                prop.set_uri(value)
        elif (value := element.first(VCardDataType.TEXT.value)) is not None:
            prop.set_text(value)
        else:
            raise MissingXmlElementsError(
                VCardDataType.URI.value, VCardDataType.TEXT.value
            )
        return prop

    def parse_html(self, element: HCardElement, context: ParseContext) -> Related:
        prop = Related()
        value = element.abs_url("href") if element.tag_name == "a" else element.value()
        if is_uri(value):
            prop.set_uri(value)
        elif value:
            prop.set_text(value)
        return prop

    def validate(
        self, prop: Related, version: VCardVersion, vcard: VCard | None
    ) -> list[str]:
        if prop.uri is None and prop.text is None:
            return ["Property has neither a URI nor a text value associated with it."]
        return []
