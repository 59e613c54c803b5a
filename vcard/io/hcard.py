"""Library for reading hCards, vCards embedded in html as a microformat.

Every element with the class `vcard` is a vCard and its descendants are
properties named by their class, e.g. `<span class="fn">John Doe</span>`.
A `vcard` element nested inside an `agent` element is the vCard of the agent.
hCard is read only and the result is a version 3.0 vCard.
"""

from __future__ import annotations

from collections.abc import Iterator
import logging
import os
from typing import IO

from lxml import etree, html

from ..exceptions import EmbeddedVCardError, VCardParseError
from ..parameters import VCardParameters
from ..parsing.hcard_element import HCardElement
from ..property.base import VCardProperty
from ..transcoders import ParseContext, Transcoder, TranscoderRegistry
from ..types.data_types import VCardDataType
from ..types.version import VCardVersion
from ..vcard import VCard
from .base import StreamReader, read_input

__all__ = [
    "HCardReader",
]

_LOGGER = logging.getLogger(__name__)

VCARD_CLASS = "vcard"

# Class names that are not property names.
_IGNORED_CLASSES = frozenset({VCARD_CLASS, "value", "type"})


def _class_names(element: html.HtmlElement) -> list[str]:
    return (element.get("class") or "").split()


def _is_element(node: object) -> bool:
    return isinstance(getattr(node, "tag", None), str)


class HCardReader(StreamReader):
    """Reads the vCards of an html page."""

    def __init__(
        self,
        content: str | IO[str] | os.PathLike[str],
        base_url: str | None = None,
        registry: TranscoderRegistry | None = None,
    ) -> None:
        """Initialize HCardReader.

        The base url is used to resolve relative links, such as the url of a
        photo.
        """
        super().__init__(registry)
        self.base_url = base_url
        try:
            root = html.document_fromstring(read_input(content))
        except (etree.ParserError, ValueError) as err:
            raise VCardParseError(
                "Failed to parse hCard contents", detailed_error=str(err)
            ) from err
        self._vcards = [
            element
            for element in root.iter()
            if _is_element(element)
            and VCARD_CLASS in _class_names(element)
            and not any(
                VCARD_CLASS in _class_names(ancestor) for ancestor in element.iterancestors()
            )
        ]
        self._pos = 0

    def read_next(self) -> VCard | None:
        """Read the next vCard, or None when there are no more."""
        if self._pos >= len(self._vcards):
            return None
        element = self._vcards[self._pos]
        self._pos += 1
        context = ParseContext(version=VCardVersion.V3_0)
        vcard = self._read_vcard(element, context)
        self.warnings = context.warnings
        return vcard

    def _read_vcard(self, root: html.HtmlElement, context: ParseContext) -> VCard:
        vcard = VCard(version=VCardVersion.V3_0)
        for element, name in self._property_elements(root):
            prop = self._read_property(element, name, context)
            if prop is not None:
                vcard.add(prop)
        return vcard

    def _property_elements(
        self, root: html.HtmlElement
    ) -> Iterator[tuple[html.HtmlElement, str]]:
        """Find the property elements of a vCard, skipping nested vCards."""
        for child in root:
            if not _is_element(child):
                continue
            classes = _class_names(child)
            for class_name in classes:
                if class_name in _IGNORED_CLASSES:
                    continue
                if self.registry.find_transcoder(class_name) is not None:
                    yield (child, class_name)
            if VCARD_CLASS in classes:
                continue
            yield from self._property_elements(child)

    def _read_property(
        self, element: html.HtmlElement, name: str, context: ParseContext
    ) -> VCardProperty | None:
        hcard_element = HCardElement(element, self.base_url)

        def decode(
            transcoder: Transcoder,
            data_type: VCardDataType | None,
            parameters: VCardParameters,
            context: ParseContext,
        ) -> VCardProperty:
            return transcoder.parse_html(hcard_element, context)

        def embedded(err: EmbeddedVCardError) -> VCard | None:
            if not isinstance(err.embedded, HCardElement):
                return None
            nested_context = ParseContext(version=VCardVersion.V3_0)
            nested = self._read_vcard(err.embedded.element, nested_context)
            for warning in nested_context.warnings:
                context.add_warning(f"Problem with agent vCard: {warning}")
            return nested

        return self.decode_property(name, None, None, None, context, decode, embedded)
