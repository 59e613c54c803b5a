"""Transcoder for the AGENT property.

The agent is a URL or a complete vCard. Version 3.0 escapes the nested
vCard into the value while 2.1 writes it as a nested `BEGIN:VCARD` block
after the property. Decoding a nested vCard is the job of the reader, so
this transcoder raises `EmbeddedVCardError` with the raw content.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..exceptions import EmbeddedVCardError, SkipMeError
from ..parameters import VCardParameters
from ..parsing.hcard_element import HCardElement
from ..parsing.xcard_element import XCardElement
from ..property.agent import Agent
from ..types import text
from ..types.data_types import VCardDataType
from ..types.jcard_value import JCardValue
from ..types.version import VCardVersion
from .base import ParseContext, TranscoderBase
from .catalogue import BUILTIN_TRANSCODERS

if TYPE_CHECKING:
    from ..vcard import VCard

__all__ = [
    "AgentTranscoder",
]

VCARD_CLASS = "vcard"
BEGIN_VCARD = "BEGIN:VCARD"


@BUILTIN_TRANSCODERS.register
class AgentTranscoder(TranscoderBase[Agent]):
    """Reads and writes an agent as a URL or an embedded vCard."""

    property_name = "AGENT"
    property_class = Agent

    def default_data_type(self, version: VCardVersion) -> VCardDataType | None:
        return None

    def data_type(self, prop: Agent, version: VCardVersion) -> VCardDataType | None:
        if prop.url is None:
            return None
        if version is VCardVersion.V2_1:
            return VCardDataType.URL
        return VCardDataType.URI

    def _write(self, prop: Agent) -> str:
        if prop.url is not None:
            return prop.url
        if prop.vcard is not None:
            raise EmbeddedVCardError(vcard=prop.vcard)
        raise SkipMeError()

    def write_text(self, prop: Agent, version: VCardVersion) -> str:
        return self._write(prop)

    def parse_text(
        self,
        value: str,
        data_type: VCardDataType | None,
        parameters: VCardParameters,
        context: ParseContext,
    ) -> Agent:
        prop = Agent()
        if data_type in (VCardDataType.URL, VCardDataType.URI):
            prop.set_url(value)
            return prop
        if BEGIN_VCARD in value.upper():
            raise EmbeddedVCardError(prop=prop, embedded=text.unescape(value))
        if not value:
            raise EmbeddedVCardError(prop=prop, embedded=None)
        prop.set_url(value)
        return prop

    def write_json(self, prop: Agent) -> JCardValue:
        return JCardValue.single(self._write(prop))

    def parse_json(
        self,
        value: JCardValue,
        data_type: VCardDataType | None,
        parameters: VCardParameters,
        context: ParseContext,
    ) -> Agent:
        prop = Agent()
        prop.set_url(value.as_single())
        return prop

    def write_xml(self, prop: Agent, element: XCardElement) -> None:
        element.append(VCardDataType.URI.value, self._write(prop))

    def parse_xml(
        self,
        element: XCardElement,
        parameters: VCardParameters,
        context: ParseContext,
    ) -> Agent:
        prop = Agent()
        value = element.first(VCardDataType.URI.value, VCardDataType.TEXT.value)
        prop.set_url(value if value is not None else element.text())
        return prop

    def parse_html(self, element: HCardElement, context: ParseContext) -> Agent:
        prop = Agent()
        if element.has_class(VCARD_CLASS):
            raise EmbeddedVCardError(prop=prop, embedded=element)
        if nested := element.children_with_class(VCARD_CLASS):
            raise EmbeddedVCardError(prop=prop, embedded=nested[0])
        if element.tag_name == "a" and (href := element.abs_url("href")):
            prop.set_url(href)
        else:
            prop.set_url(element.value())
        return prop

    def validate(
        self, prop: Agent, version: VCardVersion, vcard: VCard | None
    ) -> list[str]:
        warnings = []
        if prop.url is None and prop.vcard is None:
            warnings.append("Property has neither a URL nor an embedded vCard.")
        if prop.vcard is not None:
            nested = prop.vcard.validate(version)
            for group in nested:
                for message in group.messages:
                    warnings.append(f"Problem with agent vCard: {message}")
        return warnings
