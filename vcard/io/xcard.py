"""Library for reading and writing xCards, the XML dialect of vCard (rfc6351).

An xCard document is always version 4.0:

  <vcards xmlns="urn:ietf:params:xml:ns:vcard-4.0">
    <vcard>
      <fn><text>John Doe</text></fn>
      <group name="item1">
        <tel>
          <parameters><type><text>work</text></type></parameters>
          <uri>tel:+1-555-555-1234</uri>
        </tel>
      </group>
    </vcard>
  </vcards>

The document is written when the writer is closed.
"""

from __future__ import annotations

import logging
import os
from typing import IO
from xml.etree import ElementTree

from ..exceptions import EmbeddedVCardError, SkipMeError, VCardParseError
from ..parameters import GEO, LANGUAGE, PREF, TZ, VCardParameters
from ..parsing.xcard_element import XCARD_QNP, XCardElement, local_name
from ..property.base import VCardProperty
from ..transcoders import ParseContext, Transcoder, TranscoderRegistry
from ..types.data_types import VCardDataType
from ..types.version import XCARD_NAMESPACE, VCardVersion
from ..vcard import VCard
from .base import StreamReader, StreamWriter, read_input

__all__ = [
    "XCardReader",
    "XCardWriter",
]

_LOGGER = logging.getLogger(__name__)

VCARDS_TAG = XCARD_QNP + "vcards"
VCARD_TAG = XCARD_QNP + "vcard"
GROUP_TAG = XCARD_QNP + "group"
PARAMETERS_TAG = XCARD_QNP + "parameters"
GROUP_NAME_ATTR = "name"

# Serialize the xCard namespace as the default namespace
ElementTree.register_namespace("", XCARD_NAMESPACE)

# Data type of the value elements of each parameter, text when not listed.
_PARAMETER_DATA_TYPES: dict[str, VCardDataType] = {
    PREF: VCardDataType.INTEGER,
    LANGUAGE: VCardDataType.LANGUAGE_TAG,
    GEO: VCardDataType.URI,
    TZ: VCardDataType.URI,
}


def _parameters_element(parameters: VCardParameters) -> ElementTree.Element:
    result = ElementTree.Element(PARAMETERS_TAG)
    for name, values in parameters.items():
        data_type = _PARAMETER_DATA_TYPES.get(name, VCardDataType.TEXT)
        param = ElementTree.SubElement(result, XCARD_QNP + name.lower())
        for value in values:
            ElementTree.SubElement(param, XCARD_QNP + data_type.value).text = value
    return result


class XCardWriter(StreamWriter):
    """Writes vCards as an xCard document."""

    target_version = VCardVersion.V4_0

    def __init__(
        self,
        stream: IO[str] | str | os.PathLike[str],
        *,
        add_prodid: bool = True,
        version_strict: bool = True,
        indent: bool = False,
        registry: TranscoderRegistry | None = None,
    ) -> None:
        """Initialize XCardWriter."""
        super().__init__(
            stream,
            add_prodid=add_prodid,
            version_strict=version_strict,
            registry=registry,
        )
        self.indent = indent
        self._root = ElementTree.Element(VCARDS_TAG)

    def write(self, vcard: VCard) -> None:
        """Add a vCard to the document."""
        version = self.target_version
        properties = self.properties_to_write(vcard, version)
        # Attached to the document only once every property was encoded
        vcard_element = ElementTree.Element(VCARD_TAG)
        group_element: ElementTree.Element | None = None
        for prop in properties:
            transcoder = self.registry.transcoder_for_property(prop)
            element = XCardElement.create(transcoder.property_name)
            parameters = transcoder.prepare_parameters(prop, version, vcard)
            # The data type is the name of the value element in xCard
            parameters.value = None
            if parameters:
                element.element.append(_parameters_element(parameters))
            try:
                transcoder.write_xml(prop, element)
            except SkipMeError:
                _LOGGER.debug("Skipping property %s", transcoder.property_name)
                continue
            except EmbeddedVCardError:
                _LOGGER.debug("Skipping embedded vCard in %s", transcoder.property_name)
                continue

            if prop.group is None:
                vcard_element.append(element.element)
                group_element = None
                continue
            if group_element is None or group_element.get(GROUP_NAME_ATTR) != prop.group:
                group_element = ElementTree.SubElement(
                    vcard_element, GROUP_TAG, {GROUP_NAME_ATTR: prop.group}
                )
            group_element.append(element.element)
        self._root.append(vcard_element)

    def tostring(self) -> str:
        """Serialize the vCards written so far."""
        if self.indent:
            ElementTree.indent(self._root)
        return ElementTree.tostring(self._root, encoding="unicode")

    def _finish(self) -> None:
        self._stream.write(self.tostring())


def _read_parameters(element: ElementTree.Element) -> VCardParameters:
    parameters = VCardParameters()
    for params in element.findall(PARAMETERS_TAG):
        for param in params:
            name = local_name(param.tag)
            for value in param:
                parameters.add(name, value.text or "")
    return parameters


class XCardReader(StreamReader):
    """Reads vCards from an xCard document."""

    def __init__(
        self,
        content: str | IO[str] | os.PathLike[str],
        registry: TranscoderRegistry | None = None,
    ) -> None:
        """Initialize XCardReader.

        Raises VCardParseError if the content is not well formed XML.
        """
        super().__init__(registry)
        try:
            root = ElementTree.fromstring(read_input(content))
        except ElementTree.ParseError as err:
            raise VCardParseError(
                "Failed to parse xCard contents", detailed_error=str(err)
            ) from err
        if root.tag == VCARD_TAG:
            self._vcards = [root]
        else:
            self._vcards = list(root.iter(VCARD_TAG))
        self._pos = 0

    def read_next(self) -> VCard | None:
        """Read the next vCard, or None when there are no more."""
        if self._pos >= len(self._vcards):
            return None
        vcard_element = self._vcards[self._pos]
        self._pos += 1
        context = ParseContext(version=VCardVersion.V4_0)
        vcard = VCard(version=VCardVersion.V4_0)
        for child in vcard_element:
            if not isinstance(child.tag, str) or not child.tag.startswith(XCARD_QNP):
                continue
            if child.tag == GROUP_TAG:
                group = child.get(GROUP_NAME_ATTR)
                for grouped in child:
                    if isinstance(grouped.tag, str) and grouped.tag.startswith(XCARD_QNP):
                        self._read_property(grouped, group, vcard, context)
            else:
                self._read_property(child, None, vcard, context)
        self.warnings = context.warnings
        return vcard

    def _read_property(
        self,
        element: ElementTree.Element,
        group: str | None,
        vcard: VCard,
        context: ParseContext,
    ) -> None:
        xcard_element = XCardElement(element)

        def decode(
            transcoder: Transcoder,
            data_type: VCardDataType | None,
            parameters: VCardParameters,
            context: ParseContext,
        ) -> VCardProperty:
            return transcoder.parse_xml(xcard_element, parameters, context)

        prop = self.decode_property(
            xcard_element.name,
            group,
            None,
            _read_parameters(element),
            context,
            decode,
        )
        if prop is not None:
            vcard.add(prop)
