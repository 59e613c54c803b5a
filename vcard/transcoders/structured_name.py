"""Transcoder for the N property."""

from __future__ import annotations

from ..parameters import VCardParameters
from ..parsing.hcard_element import HCardElement
from ..parsing.xcard_element import XCardElement
from ..property.structured_name import StructuredName
from ..types import text
from ..types.data_types import VCardDataType
from ..types.jcard_value import JCardValue
from ..types.version import VCardVersion
from .base import ParseContext, TranscoderBase
from .catalogue import BUILTIN_TRANSCODERS

__all__ = [
    "StructuredNameTranscoder",
]

# Element names used by xCard and class names used by hCard, in value order.
_XML_NAMES = ("surname", "given", "additional", "prefix", "suffix")
_HTML_NAMES = (
    "family-name",
    "given-name",
    "additional-name",
    "honorific-prefix",
    "honorific-suffix",
)


def _components(prop: StructuredName) -> list[list[str]]:
    return [
        [prop.family] if prop.family else [],
        [prop.given] if prop.given else [],
        prop.additional,
        prop.prefixes,
        prop.suffixes,
    ]


def _from_components(components: list[list[str]]) -> StructuredName:
    components = components + [[]] * (5 - len(components))
    family, given, additional, prefixes, suffixes = components[:5]
    return StructuredName(
        family=",".join(family) or None,
        given=",".join(given) or None,
        additional=additional,
        prefixes=prefixes,
        suffixes=suffixes,
    )


@BUILTIN_TRANSCODERS.register
class StructuredNameTranscoder(TranscoderBase[StructuredName]):
    """Reads and writes the components of a name, e.g. `Doe;John;;Dr.;`."""

    property_name = "N"
    property_class = StructuredName

    def write_text(self, prop: StructuredName, version: VCardVersion) -> str:
        return text.join_structured(_components(prop), version)

    def parse_text(
        self,
        value: str,
        data_type: VCardDataType | None,
        parameters: VCardParameters,
        context: ParseContext,
    ) -> StructuredName:
        return _from_components(text.split_structured(value))

    def write_json(self, prop: StructuredName) -> JCardValue:
        return JCardValue.structured(_components(prop))

    def parse_json(
        self,
        value: JCardValue,
        data_type: VCardDataType | None,
        parameters: VCardParameters,
        context: ParseContext,
    ) -> StructuredName:
        return _from_components(value.as_structured())

    def write_xml(self, prop: StructuredName, element: XCardElement) -> None:
        for name, values in zip(_XML_NAMES, _components(prop)):
            if values:
                element.append_all(name, values)
            else:
                element.append(name, "")

    def parse_xml(
        self,
        element: XCardElement,
        parameters: VCardParameters,
        context: ParseContext,
    ) -> StructuredName:
        return _from_components(
            [[value for value in element.all(name) if value] for name in _XML_NAMES]
        )

    def parse_html(self, element: HCardElement, context: ParseContext) -> StructuredName:
        return _from_components(
            [element.values_by_class(name) for name in _HTML_NAMES]
        )
