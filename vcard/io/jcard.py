"""Library for reading and writing jCards, the JSON dialect of vCard (rfc7095).

A jCard is always version 4.0 and is written as:

  ["vcard", [["version", {}, "text", "4.0"], [name, {params}, datatype, value...]]]

The group of a property is written as the `group` parameter and the data
type is `unknown` when it is not known.
"""

from __future__ import annotations

import json
import logging
import os
from typing import IO, Any

from ..exceptions import EmbeddedVCardError, SkipMeError, VCardParseError
from ..parameters import VCardParameters
from ..property.base import VCardProperty
from ..transcoders import ParseContext, Transcoder, TranscoderRegistry
from ..types.data_types import VCardDataType
from ..types.jcard_value import JCardValue
from ..types.version import VCardVersion
from ..vcard import VCard
from .base import StreamReader, StreamWriter, read_input

__all__ = [
    "JCardRawWriter",
    "JCardReader",
    "JCardWriter",
]

_LOGGER = logging.getLogger(__name__)

VCARD = "vcard"
VERSION = "version"
GROUP = "group"
UNKNOWN = "unknown"
INDENT = 2


class JCardRawWriter:
    """Writes the JSON framing of jCards to a stream.

    Each vCard is written as a single JSON value when it ends. When
    `wrap_in_array` is set all of the vCards are enclosed in a JSON array,
    which is closed by `close_json_stream`.
    """

    def __init__(
        self, stream: IO[str], wrap_in_array: bool = False, indent: bool = False
    ) -> None:
        """Initialize JCardRawWriter."""
        self._stream = stream
        self.wrap_in_array = wrap_in_array
        self.indent = indent
        self._properties: list[list[Any]] | None = None
        self._started = False
        self._closed = False

    def write_start_vcard(self) -> None:
        """Start a new vCard."""
        if self._properties is not None:
            raise ValueError("Previous vCard was not ended")
        self._properties = []

    def write_property(
        self,
        group: str | None,
        name: str,
        parameters: VCardParameters,
        data_type: VCardDataType | None,
        value: JCardValue,
    ) -> None:
        """Add a property to the current vCard."""
        if self._properties is None:
            raise ValueError("No vCard was started")
        params: dict[str, Any] = {}
        if group:
            params[GROUP] = group
        for param_name, values in parameters.items():
            params[param_name.lower()] = values[0] if len(values) == 1 else values
        self._properties.append(
            [
                name.lower(),
                params,
                data_type.value if data_type is not None else UNKNOWN,
                *value.values,
            ]
        )

    def abandon_vcard(self) -> None:
        """Discard the current vCard without writing it."""
        self._properties = None

    def write_end_vcard(self) -> None:
        """End the current vCard and write it to the stream."""
        if self._properties is None:
            raise ValueError("No vCard was started")
        document = [VCARD, self._properties]
        self._properties = None
        if self.indent:
            content = json.dumps(document, indent=INDENT, ensure_ascii=False)
        else:
            content = json.dumps(document, separators=(",", ":"), ensure_ascii=False)
        if self.wrap_in_array:
            self._stream.write("," if self._started else "[")
        self._started = True
        self._stream.write(content)

    def close_json_stream(self) -> None:
        """End the JSON output, without closing the stream."""
        if self._closed:
            return
        self._closed = True
        if self.wrap_in_array:
            self._stream.write("]" if self._started else "[]")

    def flush(self) -> None:
        """Flush the underlying stream."""
        self._stream.flush()


class JCardWriter(StreamWriter):
    """Writes vCards as jCards.

    Properties that are not supported in version 4.0 are omitted unless
    `version_strict` is False, and embedded vCards are always omitted.
    """

    target_version = VCardVersion.V4_0

    def __init__(
        self,
        stream: IO[str] | str | os.PathLike[str],
        wrap_in_array: bool = False,
        *,
        add_prodid: bool = True,
        version_strict: bool = True,
        indent: bool = False,
        registry: TranscoderRegistry | None = None,
    ) -> None:
        """Initialize JCardWriter."""
        super().__init__(
            stream,
            add_prodid=add_prodid,
            version_strict=version_strict,
            registry=registry,
        )
        self._writer = JCardRawWriter(self._stream, wrap_in_array, indent)

    @property
    def indent(self) -> bool:
        """Return True if the JSON is pretty-printed."""
        return self._writer.indent

    @indent.setter
    def indent(self, value: bool) -> None:
        self._writer.indent = value

    def write(self, vcard: VCard) -> None:
        """Write a vCard to the stream."""
        version = self.target_version
        properties = self.properties_to_write(vcard, version)
        self._writer.write_start_vcard()
        self._writer.write_property(
            None,
            VERSION,
            VCardParameters(),
            VCardDataType.TEXT,
            JCardValue.single(version.value),
        )
        try:
            for prop in properties:
                self._write_property(vcard, prop, version)
        except Exception:
            self._writer.abandon_vcard()
            raise
        self._writer.write_end_vcard()

    def _write_property(
        self, vcard: VCard, prop: VCardProperty, version: VCardVersion
    ) -> None:
        transcoder = self.registry.transcoder_for_property(prop)
        try:
            value = transcoder.write_json(prop)
        except SkipMeError:
            _LOGGER.debug("Skipping property %s", transcoder.property_name)
            return
        except EmbeddedVCardError:
            _LOGGER.debug("Skipping embedded vCard in %s", transcoder.property_name)
            return
        parameters = transcoder.prepare_parameters(prop, version, vcard)
        # The data type is a field of its own in jCard
        parameters.value = None
        self._writer.write_property(
            prop.group,
            transcoder.property_name,
            parameters,
            transcoder.data_type(prop, version),
            value,
        )

    def close_json_stream(self) -> None:
        """End the JSON output, without closing the stream."""
        self._writer.close_json_stream()

    def _finish(self) -> None:
        self._writer.close_json_stream()


def _parameters(params: Any) -> tuple[str | None, VCardParameters]:
    """Return the group and parameters of a jCard property."""
    if not isinstance(params, dict):
        raise VCardParseError(f"Expected jCard parameters to be an object: {params}")
    group = None
    parameters = VCardParameters()
    for name, values in params.items():
        if name.lower() == GROUP:
            group = str(values)
            continue
        for value in values if isinstance(values, list) else [values]:
            parameters.add(name, str(value))
    return (group, parameters)


class JCardReader(StreamReader):
    """Reads vCards from jCard JSON.

    The content may be a single jCard or an array of jCards.
    """

    def __init__(
        self,
        content: str | IO[str] | os.PathLike[str],
        registry: TranscoderRegistry | None = None,
    ) -> None:
        """Initialize JCardReader.

        Raises VCardParseError if the content is not valid JSON.
        """
        super().__init__(registry)
        try:
            document = json.loads(read_input(content))
        except json.JSONDecodeError as err:
            raise VCardParseError(
                "Failed to parse jCard contents", detailed_error=str(err)
            ) from err
        if isinstance(document, list) and document and document[0] == VCARD:
            self._documents = [document]
        elif isinstance(document, list):
            self._documents = document
        else:
            raise VCardParseError("Expected jCard content to be an array")
        self._pos = 0

    def read_next(self) -> VCard | None:
        """Read the next vCard, or None when there are no more."""
        if self._pos >= len(self._documents):
            return None
        document = self._documents[self._pos]
        self._pos += 1
        if (
            not isinstance(document, list)
            or len(document) != 2
            or document[0] != VCARD
            or not isinstance(document[1], list)
        ):
            raise VCardParseError(
                "Expected a jCard of the form [\"vcard\", [...]]",
                detailed_error=json.dumps(document),
            )
        context = ParseContext(version=VCardVersion.V4_0)
        vcard = VCard(version=VCardVersion.V4_0)
        for item in document[1]:
            if not isinstance(item, list) or len(item) < 3:
                context.add_warning(f"Skipping malformed jCard property: {item}")
                continue
            name, params, data_type_name, *values = item
            if str(name).lower() == VERSION:
                continue
            group, parameters = _parameters(params)
            data_type = VCardDataType.find(str(data_type_name))
            jcard_value = JCardValue(values=values)

            def decode(
                transcoder: Transcoder,
                data_type: VCardDataType | None,
                parameters: VCardParameters,
                context: ParseContext,
                value: JCardValue = jcard_value,
            ) -> VCardProperty:
                return transcoder.parse_json(value, data_type, parameters, context)

            prop = self.decode_property(
                str(name), group, data_type, parameters, context, decode
            )
            if prop is not None:
                vcard.add(prop)
        self.warnings = context.warnings
        return vcard
