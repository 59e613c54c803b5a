"""Behavior shared by the readers and writers of every dialect.

A writer owns its output stream until it is closed. When created from a
path the writer opens the file and closes it again, while a stream passed
in by the caller is left open.

This is an example of writing a vCard as a jCard:

```python
from vcard import VCard
from vcard.io.jcard import JCardWriter
from vcard.property import FormattedName

vcard = VCard()
vcard.add(FormattedName(value="John Doe"))
with JCardWriter("contact.json") as writer:
    writer.write(vcard)
```
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
import logging
import os
import pathlib
from typing import IO, Any, Self

from ..exceptions import CannotParseError, EmbeddedVCardError
from ..parameters import VCardParameters
from ..property.base import VCardProperty
from ..property.raw import RawProperty
from ..property.text import ProductId
from ..transcoders import ParseContext, Transcoder, TranscoderRegistry
from ..types.data_types import VCardDataType
from ..types.version import VCardVersion
from ..util import prodid_factory
from ..vcard import VCard

__all__ = [
    "StreamReader",
    "StreamWriter",
]

_LOGGER = logging.getLogger(__name__)

LEGACY_PRODID = "X-PRODID"

DecodeFn = Callable[
    [Transcoder, VCardDataType | None, VCardParameters, ParseContext], VCardProperty
]
EmbeddedFn = Callable[[EmbeddedVCardError], VCard | None]


def open_output(stream: IO[str] | str | os.PathLike[str]) -> tuple[IO[str], bool]:
    """Return the stream to write to and whether it was opened here."""
    if isinstance(stream, (str, os.PathLike)):
        return (pathlib.Path(stream).open("w", encoding="utf-8", newline=""), True)
    return (stream, False)


def read_input(content: str | IO[str] | os.PathLike[str]) -> str:
    """Return the content to read from a string, stream or path."""
    if isinstance(content, str):
        return content
    if isinstance(content, os.PathLike):
        return pathlib.Path(content).read_text(encoding="utf-8")
    return content.read()


class StreamWriter:
    """Base class for writers of one dialect.

    Subclasses implement `write`, using `properties_to_write` for the
    properties of each vCard.
    """

    def __init__(
        self,
        stream: IO[str] | str | os.PathLike[str],
        *,
        add_prodid: bool = True,
        version_strict: bool = True,
        registry: TranscoderRegistry | None = None,
    ) -> None:
        """Initialize StreamWriter."""
        self._stream, self._owns_stream = open_output(stream)
        self.add_prodid = add_prodid
        """Replace any PRODID with one naming this library."""

        self.version_strict = version_strict
        """Omit properties that are not supported by the target version."""

        self.registry = registry if registry is not None else TranscoderRegistry()
        self._closed = False

    def register_transcoder(self, transcoder: Transcoder) -> None:
        """Register a transcoder for a custom property."""
        self.registry.register(transcoder)

    def properties_to_write(
        self, vcard: VCard, version: VCardVersion, add_prodid: bool | None = None
    ) -> list[VCardProperty]:
        """Return the properties of the vCard that will be written in the version.

        Raises `TranscoderNotFoundError` before anything is written when a
        property has no transcoder.
        """
        if add_prodid is None:
            add_prodid = self.add_prodid
        result: list[VCardProperty] = []
        for prop in vcard:
            if add_prodid and (
                isinstance(prop, ProductId)
                or (isinstance(prop, RawProperty) and prop.name.upper() == LEGACY_PRODID)
            ):
                continue
            transcoder = self.registry.transcoder_for_property(prop)
            if self.version_strict and version not in transcoder.supported_versions(prop):
                _LOGGER.debug(
                    "Skipping %s not supported in version %s",
                    type(prop).__name__,
                    version.value,
                )
                continue
            result.append(prop)
        if add_prodid:
            if version is VCardVersion.V2_1:
                result.append(RawProperty(name=LEGACY_PRODID, value=prodid_factory()))
            else:
                result.append(ProductId(value=prodid_factory()))
        return result

    def write(self, vcard: VCard) -> None:
        """Write a vCard to the stream."""
        raise NotImplementedError

    def flush(self) -> None:
        """Flush the underlying stream."""
        self._stream.flush()

    def _finish(self) -> None:
        """Hook for subclasses to end the document before closing."""

    def close(self) -> None:
        """Finish the output and close the stream if it was opened by this writer."""
        if self._closed:
            return
        self._closed = True
        try:
            self._finish()
        finally:
            if self._owns_stream:
                self._stream.close()
            else:
                self._stream.flush()

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


class StreamReader:
    """Base class for readers of one dialect.

    Problems with individual properties do not stop reading. They are
    recorded in `warnings`, which holds the warnings of the last vCard read.
    """

    def __init__(self, registry: TranscoderRegistry | None = None) -> None:
        """Initialize StreamReader."""
        self.registry = registry if registry is not None else TranscoderRegistry()
        self.warnings: list[str] = []

    def register_transcoder(self, transcoder: Transcoder) -> None:
        """Register a transcoder for a custom property."""
        self.registry.register(transcoder)

    def read_next(self) -> VCard | None:
        """Read the next vCard, or None when there are no more."""
        raise NotImplementedError

    def read_all(self) -> list[VCard]:
        """Read all remaining vCards."""
        return list(self)

    def __iter__(self) -> Iterator[VCard]:
        while (vcard := self.read_next()) is not None:
            yield vcard

    def decode_property(
        self,
        name: str,
        group: str | None,
        data_type: VCardDataType | None,
        parameters: VCardParameters | None,
        context: ParseContext,
        decode: DecodeFn,
        embedded: EmbeddedFn | None = None,
    ) -> VCardProperty | None:
        """Decode a single property, returning None if it was skipped.

        The parameters left over by the transcoder and the group are attached
        to the result. When `parameters` is None the transcoder is responsible
        for the parameters of the result.
        """
        transcoder = self.registry.transcoder_for_name(name)
        decode_parameters = parameters if parameters is not None else VCardParameters()
        try:
            prop = decode(transcoder, data_type, decode_parameters, context)
        except CannotParseError as err:
            _LOGGER.debug("Unable to parse property %s: %s", name, err.message)
            message = f'Property "{name}" could not be parsed and was skipped: {err.message}'
            if err.detailed_error:
                message = f"{message} ({err.detailed_error})"
            context.add_warning(message)
            return None
        except EmbeddedVCardError as err:
            prop = err.prop
            if embedded is None:
                context.add_warning(
                    f'Property "{name}" has an embedded vCard which is not supported.'
                )
            elif (nested := embedded(err)) is not None:
                prop.set_vcard(nested)
            else:
                context.add_warning(
                    f'Property "{name}" has an embedded vCard that could not be read.'
                )
        prop.group = group
        if parameters is not None:
            prop.parameters = parameters
        return prop
