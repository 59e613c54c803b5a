"""The contract implemented by every property transcoder.

A transcoder converts one kind of property to and from each dialect (plain
text, xCard, jCard and hCard) in each version of the format. There is one
stateless transcoder instance per property kind.

Decode operations receive the declared data type from the VALUE parameter
(already removed from the parameters), the parameters of the property and a
`ParseContext` for warnings. A transcoder removes any parameters it consumes,
such as the ENCODING of binary data, and the reader attaches whatever
remains to the decoded property.

Decode operations raise `CannotParseError` when the value does not match the
grammar of the version. Encode operations may raise `SkipMeError` to omit a
property from the output, or `EmbeddedVCardError` when the value is a nested
vCard that the writer must handle.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import TYPE_CHECKING, Generic, Protocol, TypeVar

from ..exceptions import MissingXmlElementsError
from ..parameters import PREF, VCardParameters
from ..property.base import VCardProperty
from ..types import text
from ..types.data_types import VCardDataType
from ..types.jcard_value import JCardValue
from ..types.version import VCardVersion

if TYPE_CHECKING:
    from ..parsing.hcard_element import HCardElement
    from ..parsing.xcard_element import XCardElement
    from ..vcard import VCard

__all__ = [
    "ParseContext",
    "Transcoder",
    "TranscoderBase",
]

_LOGGER = logging.getLogger(__name__)

T_PROPERTY = TypeVar("T_PROPERTY", bound=VCardProperty)


@dataclass
class ParseContext:
    """State passed to decode operations."""

    version: VCardVersion
    """The version of the content being decoded."""

    warnings: list[str] = field(default_factory=list)
    """Problems found while decoding that did not prevent decoding."""

    def add_warning(self, message: str) -> None:
        """Record a problem with the value being decoded."""
        _LOGGER.debug("Parse warning: %s", message)
        self.warnings.append(message)


class Transcoder(Protocol):
    """Defines the protocol implemented by property transcoders."""

    property_name: str
    """The wire name of the property, e.g. `TZ`."""

    property_class: type[VCardProperty]
    """The property model this transcoder reads and writes."""

    def supported_versions(self, prop: VCardProperty) -> frozenset[VCardVersion]:
        """Return the versions the property can be written in."""

    def default_data_type(self, version: VCardVersion) -> VCardDataType | None:
        """Return the data type of the value when no VALUE parameter is present."""

    def data_type(
        self, prop: VCardProperty, version: VCardVersion
    ) -> VCardDataType | None:
        """Return the data type of the value that will be written."""

    def prepare_parameters(
        self, prop: VCardProperty, version: VCardVersion, vcard: VCard | None
    ) -> VCardParameters:
        """Return the exact parameters to write with the property."""

    def write_text(self, prop: VCardProperty, version: VCardVersion) -> str:
        """Encode the value of the property for a plain text vCard."""

    def parse_text(
        self,
        value: str,
        data_type: VCardDataType | None,
        parameters: VCardParameters,
        context: ParseContext,
    ) -> VCardProperty:
        """Decode a value from a plain text vCard."""

    def write_xml(self, prop: VCardProperty, element: XCardElement) -> None:
        """Encode the value of the property into an xCard element."""

    def parse_xml(
        self,
        element: XCardElement,
        parameters: VCardParameters,
        context: ParseContext,
    ) -> VCardProperty:
        """Decode a value from an xCard element."""

    def write_json(self, prop: VCardProperty) -> JCardValue:
        """Encode the value of the property for a jCard."""

    def parse_json(
        self,
        value: JCardValue,
        data_type: VCardDataType | None,
        parameters: VCardParameters,
        context: ParseContext,
    ) -> VCardProperty:
        """Decode a value from a jCard."""

    def parse_html(self, element: HCardElement, context: ParseContext) -> VCardProperty:
        """Decode a value from an hCard element."""

    def validate(
        self, prop: VCardProperty, version: VCardVersion, vcard: VCard | None
    ) -> list[str]:
        """Return warnings about the value of the property in the version."""


class TranscoderBase(Generic[T_PROPERTY]):
    """Default behavior shared by the transcoders in this library.

    Subclasses implement `write_text` and `parse_text` at a minimum. The
    jCard, xCard and hCard defaults are built on the plain text codec of
    version 4.0 (3.0 for hCard) with the value escaped or unescaped as
    needed.
    """

    property_name: str
    property_class: type[T_PROPERTY]

    def supported_versions(self, prop: T_PROPERTY) -> frozenset[VCardVersion]:
        return prop.supported_versions()

    def default_data_type(self, version: VCardVersion) -> VCardDataType | None:
        return VCardDataType.TEXT

    def data_type(self, prop: T_PROPERTY, version: VCardVersion) -> VCardDataType | None:
        return self.default_data_type(version)

    def prepare_parameters(
        self, prop: T_PROPERTY, version: VCardVersion, vcard: VCard | None
    ) -> VCardParameters:
        """Return the parameters to write, with a derived VALUE parameter.

        VALUE is written only when the data type differs from the default of
        the version, and is never copied from the stored parameters.
        """
        parameters = prop.parameters.copy()
        data_type = self.data_type(prop, version)
        if data_type is not None and data_type != self.default_data_type(version):
            parameters.value = data_type
        else:
            parameters.value = None
        self._prepare_pref(prop, parameters, version, vcard)
        self._prepare_parameters(prop, parameters, version, vcard)
        return parameters

    def _prepare_parameters(
        self,
        prop: T_PROPERTY,
        parameters: VCardParameters,
        version: VCardVersion,
        vcard: VCard | None,
    ) -> None:
        """Hook for subclasses to adjust the parameters to write."""

    def _prepare_pref(
        self,
        prop: T_PROPERTY,
        parameters: VCardParameters,
        version: VCardVersion,
        vcard: VCard | None,
    ) -> None:
        """Convert between the PREF parameter and the legacy `TYPE=pref` marker.

        Versions 2.1 and 3.0 mark only the most preferred property of a kind
        with `TYPE=pref` while 4.0 ranks each property with PREF.
        """
        if version is VCardVersion.V4_0:
            if parameters.has_type("pref"):
                parameters.remove_type("pref")
                if PREF not in parameters:
                    parameters.pref = 1
            return
        if (pref := parameters.pref) is None:
            return
        parameters.remove_all(PREF)
        siblings = vcard.get_properties(type(prop)) if vcard is not None else [prop]
        ranks = [sibling.pref for sibling in siblings if sibling.pref is not None]
        if ranks and pref == min(ranks) and not parameters.has_type("pref"):
            parameters.add_type("pref")

    def write_text(self, prop: T_PROPERTY, version: VCardVersion) -> str:
        raise NotImplementedError

    def parse_text(
        self,
        value: str,
        data_type: VCardDataType | None,
        parameters: VCardParameters,
        context: ParseContext,
    ) -> T_PROPERTY:
        raise NotImplementedError

    def write_json(self, prop: T_PROPERTY) -> JCardValue:
        return JCardValue.single(text.unescape(self.write_text(prop, VCardVersion.V4_0)))

    def parse_json(
        self,
        value: JCardValue,
        data_type: VCardDataType | None,
        parameters: VCardParameters,
        context: ParseContext,
    ) -> T_PROPERTY:
        return self.parse_text(
            text.escape(value.as_single(), VCardVersion.V4_0),
            data_type,
            parameters,
            context,
        )

    def write_xml(self, prop: T_PROPERTY, element: XCardElement) -> None:
        data_type = self.data_type(prop, VCardVersion.V4_0)
        element.append(
            data_type.value if data_type is not None else "unknown",
            text.unescape(self.write_text(prop, VCardVersion.V4_0)),
        )

    def parse_xml(
        self,
        element: XCardElement,
        parameters: VCardParameters,
        context: ParseContext,
    ) -> T_PROPERTY:
        data_type = self.default_data_type(VCardVersion.V4_0)
        name = data_type.value if data_type is not None else "unknown"
        if (value := element.first(name)) is None:
            raise MissingXmlElementsError(name)
        return self.parse_text(
            text.escape(value, VCardVersion.V4_0), None, parameters, context
        )

    def parse_html(self, element: HCardElement, context: ParseContext) -> T_PROPERTY:
        return self.parse_text(
            text.escape(element.value(), VCardVersion.V3_0),
            None,
            VCardParameters(),
            context,
        )

    def validate(
        self, prop: T_PROPERTY, version: VCardVersion, vcard: VCard | None
    ) -> list[str]:
        return []

