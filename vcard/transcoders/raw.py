"""Transcoder for properties that have no dedicated transcoder."""

from __future__ import annotations

from ..parameters import VCardParameters
from ..parsing.hcard_element import HCardElement
from ..parsing.xcard_element import XCardElement
from ..property.raw import RawProperty
from ..types.data_types import VCardDataType
from ..types.jcard_value import JCardValue
from ..types.version import VCardVersion
from .base import ParseContext, TranscoderBase

__all__ = [
    "RawPropertyTranscoder",
]


class RawPropertyTranscoder(TranscoderBase[RawProperty]):
    """Reads and writes the literal value of a property with any name.

    Unlike the other transcoders this one is created per property name and
    is not part of the built-in catalogue. Decoding never fails.
    """

    property_class = RawProperty

    def __init__(self, property_name: str) -> None:
        """Initialize RawPropertyTranscoder."""
        self.property_name = property_name.upper()

    def default_data_type(self, version: VCardVersion) -> VCardDataType | None:
        return None

    def data_type(self, prop: RawProperty, version: VCardVersion) -> VCardDataType | None:
        return prop.data_type

    def write_text(self, prop: RawProperty, version: VCardVersion) -> str:
        return prop.value or ""

    def parse_text(
        self,
        value: str,
        data_type: VCardDataType | None,
        parameters: VCardParameters,
        context: ParseContext,
    ) -> RawProperty:
        return RawProperty(name=self.property_name, value=value, data_type=data_type)

    def write_json(self, prop: RawProperty) -> JCardValue:
        return JCardValue.single(prop.value or "")

    def parse_json(
        self,
        value: JCardValue,
        data_type: VCardDataType | None,
        parameters: VCardParameters,
        context: ParseContext,
    ) -> RawProperty:
        if len(value.values) == 1 and not isinstance(value.values[0], list):
            raw = value.as_single()
        else:
            raw = ",".join(value.as_multi())
        return RawProperty(name=self.property_name, value=raw, data_type=data_type)

    def write_xml(self, prop: RawProperty, element: XCardElement) -> None:
        name = prop.data_type.value if prop.data_type is not None else "unknown"
        element.append(name, prop.value or "")

    def parse_xml(
        self,
        element: XCardElement,
        parameters: VCardParameters,
        context: ParseContext,
    ) -> RawProperty:
        if (child := element.first_child()) is None:
            return RawProperty(name=self.property_name, value=element.text())
        name, value = child
        return RawProperty(
            name=self.property_name,
            value=value,
            data_type=VCardDataType.find(name),
        )

    def parse_html(self, element: HCardElement, context: ParseContext) -> RawProperty:
        return RawProperty(name=self.property_name, value=element.value())
