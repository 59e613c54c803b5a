"""Library for reading and writing plain text vCards (.vcf files).

This is an example of reading every vCard in a file:

```python
from pathlib import Path
from vcard.io.text import VCardTextReader

reader = VCardTextReader(Path("contacts.vcf"))
for vcard in reader:
    print(vcard.get_property(FormattedName))
```

A vCard is written in the version of the `VCard` unless the writer is
created with a target version.
"""

from __future__ import annotations

import logging
import os
import quopri
from typing import IO

from ..exceptions import EmbeddedVCardError, SkipMeError, VCardParseError
from ..parameter_values import Encoding
from ..parameters import CHARSET, ENCODING, VCardParameters
from ..parsing.component import ParsedComponent, fold, parse_content, version_of
from ..parsing.const import (
    ATTR_AGENT,
    ATTR_BEGIN,
    ATTR_END,
    ATTR_VERSION,
    COMPONENT_VCARD,
    CRLF,
)
from ..parsing.property import (
    ParsedProperty,
    ParsedPropertyParameter,
    decode_parameter_value,
)
from ..property.base import VCardProperty
from ..transcoders import ParseContext, Transcoder, TranscoderRegistry
from ..types import text
from ..types.data_types import VCardDataType
from ..types.version import VCardVersion
from ..vcard import VCard
from .base import StreamReader, StreamWriter, read_input

__all__ = [
    "VCardTextReader",
    "VCardTextWriter",
]

_LOGGER = logging.getLogger(__name__)

DEFAULT_CHARSET = "utf-8"


class VCardTextWriter(StreamWriter):
    """Writes vCards as plain text.

    Embedded vCards of the AGENT property are nested after the property in
    version 2.1, escaped into the value in version 3.0, and omitted in 4.0.
    """

    def __init__(
        self,
        stream: IO[str] | str | os.PathLike[str],
        version: VCardVersion | None = None,
        *,
        add_prodid: bool = True,
        version_strict: bool = True,
        registry: TranscoderRegistry | None = None,
        fold_lines: bool = True,
    ) -> None:
        """Initialize VCardTextWriter."""
        super().__init__(
            stream,
            add_prodid=add_prodid,
            version_strict=version_strict,
            registry=registry,
        )
        self.version = version
        """The version to write, or None to use the version of each vCard."""

        self.fold_lines = fold_lines

    def write(self, vcard: VCard) -> None:
        """Write a vCard to the stream."""
        version = self.version or vcard.version
        lines = self._encode(vcard, version, add_prodid=self.add_prodid)
        self._stream.write(CRLF.join(lines) + CRLF)

    def _encode(
        self, vcard: VCard, version: VCardVersion, add_prodid: bool
    ) -> list[str]:
        lines = [f"{ATTR_BEGIN}:{COMPONENT_VCARD}", f"{ATTR_VERSION}:{version.value}"]
        for prop in self.properties_to_write(vcard, version, add_prodid=add_prodid):
            transcoder = self.registry.transcoder_for_property(prop)
            nested: list[str] | None = None
            try:
                value = transcoder.write_text(prop, version)
            except SkipMeError:
                _LOGGER.debug("Skipping property %s", transcoder.property_name)
                continue
            except EmbeddedVCardError as err:
                if version is VCardVersion.V4_0 or err.vcard is None:
                    _LOGGER.debug("Skipping embedded vCard in %s", transcoder.property_name)
                    continue
                nested = self._encode(err.vcard, version, add_prodid=False)
                if version is VCardVersion.V2_1:
                    value = ""
                else:
                    value = text.escape(CRLF.join(nested) + CRLF, version)
                    nested = None

            parameters = transcoder.prepare_parameters(prop, version, vcard)
            contentline = ParsedProperty(
                name=transcoder.property_name,
                value=value,
                params=[
                    ParsedPropertyParameter(name=name, values=values)
                    for name, values in parameters.items()
                ]
                or None,
                group=prop.group,
            ).encode(version)
            lines.extend(fold(contentline) if self.fold_lines else [contentline])
            if nested is not None:
                lines.extend(nested)
        lines.append(f"{ATTR_END}:{COMPONENT_VCARD}")
        return lines


def _decode_quoted_printable(
    value: str, parameters: VCardParameters, context: ParseContext
) -> str:
    """Decode a quoted-printable value, consuming the ENCODING and CHARSET."""
    charset = parameters.charset or DEFAULT_CHARSET
    parameters.remove_all(ENCODING)
    parameters.remove_all(CHARSET)
    data = quopri.decodestring(value.encode("utf-8"))
    try:
        return data.decode(charset)
    except LookupError:
        context.add_warning(f"Unknown character set {charset}, using {DEFAULT_CHARSET}")
        return data.decode(DEFAULT_CHARSET, errors="replace")
    except UnicodeDecodeError as err:
        context.add_warning(f"Unable to decode quoted-printable value as {charset}: {err}")
        return data.decode(charset, errors="replace")


class VCardTextReader(StreamReader):
    """Reads vCards from plain text.

    A vCard without a VERSION property is read as version 2.1.
    """

    def __init__(
        self,
        content: str | IO[str] | os.PathLike[str],
        registry: TranscoderRegistry | None = None,
    ) -> None:
        """Initialize VCardTextReader.

        Raises VCardParseError if the BEGIN and END lines are unbalanced.
        """
        super().__init__(registry)
        components = parse_content(read_input(content))
        self._components = [
            component for component in components if component.name == COMPONENT_VCARD
        ]
        self._pos = 0

    def read_next(self) -> VCard | None:
        """Read the next vCard, or None when there are no more."""
        if self._pos >= len(self._components):
            return None
        component = self._components[self._pos]
        self._pos += 1
        context = ParseContext(version=version_of(component))
        vcard = self._read_component(component, context)
        self.warnings = context.warnings
        return vcard

    def _read_component(self, component: ParsedComponent, context: ParseContext) -> VCard:
        version = context.version
        for warning in component.warnings:
            context.add_warning(warning)
        vcard = VCard(version=version)
        for parsed in component.properties:
            if parsed.name == ATTR_VERSION:
                continue
            parameters = VCardParameters(
                [
                    (param.name, decode_parameter_value(value, version))
                    for param in parsed.params or ()
                    for value in param.values
                ]
            )
            value = parsed.value
            if parameters.encoding is Encoding.QUOTED_PRINTABLE:
                value = _decode_quoted_printable(value, parameters, context)
            data_type = parameters.value
            parameters.value = None

            def decode(
                transcoder: Transcoder,
                data_type: VCardDataType | None,
                parameters: VCardParameters,
                context: ParseContext,
                value: str = value,
            ) -> VCardProperty:
                return transcoder.parse_text(value, data_type, parameters, context)

            def embedded(
                err: EmbeddedVCardError, parsed: ParsedProperty = parsed
            ) -> VCard | None:
                return self._read_embedded(err, parsed, context)

            prop = self.decode_property(
                parsed.name,
                parsed.group,
                data_type,
                parameters,
                context,
                decode,
                embedded,
            )
            if prop is not None:
                vcard.add(prop)
        return vcard

    def _read_embedded(
        self, err: EmbeddedVCardError, parsed: ParsedProperty, context: ParseContext
    ) -> VCard | None:
        """Read the vCard nested in an AGENT property."""
        if isinstance(err.embedded, str):
            try:
                reader = VCardTextReader(err.embedded, self.registry)
            except VCardParseError as parse_err:
                context.add_warning(f"Problem with agent vCard: {parse_err.message}")
                return None
            nested = reader.read_next()
            for warning in reader.warnings:
                context.add_warning(f"Problem with agent vCard: {warning}")
            return nested
        if parsed.embedded is not None and parsed.name == ATTR_AGENT:
            nested_context = ParseContext(version=version_of(parsed.embedded))
            nested = self._read_component(parsed.embedded, nested_context)
            for warning in nested_context.warnings:
                context.add_warning(f"Problem with agent vCard: {warning}")
            return nested
        return None
