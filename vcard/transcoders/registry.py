"""Library for resolving a property to the transcoder that reads and writes it.

A `TranscoderRegistry` is an explicit object that readers and writers are
configured with, so that differently configured registries can coexist in
one process. Custom transcoders registered on an instance take precedence
over the built-in catalogue.
"""

from __future__ import annotations

import logging

from ..exceptions import TranscoderNotFoundError
from ..property.base import VCardProperty
from ..property.raw import RawProperty
from .base import Transcoder
from .catalogue import BUILTIN_TRANSCODERS, TranscoderCatalogue
from .raw import RawPropertyTranscoder

__all__ = [
    "TranscoderRegistry",
]

_LOGGER = logging.getLogger(__name__)


class TranscoderRegistry:
    """Maps property names and property classes to transcoders.

    The registry is not synchronized. Register any custom transcoders before
    sharing it between threads.
    """

    def __init__(self, builtins: TranscoderCatalogue = BUILTIN_TRANSCODERS) -> None:
        """Initialize TranscoderRegistry."""
        self._builtins = builtins
        self._builtins_by_class = {
            transcoder.property_class: transcoder for transcoder in builtins
        }
        self._by_name: dict[str, Transcoder] = {}
        self._by_class: dict[type[VCardProperty], Transcoder] = {}

    def register(self, transcoder: Transcoder) -> None:
        """Register a custom transcoder, replacing any with the same name."""
        name = transcoder.property_name.upper()
        if name in self._by_name or self._builtins.get(name) is not None:
            _LOGGER.debug("Overriding transcoder for property %s", name)
        self._by_name[name] = transcoder
        self._by_class[transcoder.property_class] = transcoder

    def unregister(self, transcoder: Transcoder) -> None:
        """Remove a custom transcoder."""
        name = transcoder.property_name.upper()
        if self._by_name.get(name) is transcoder:
            del self._by_name[name]
        if self._by_class.get(transcoder.property_class) is transcoder:
            del self._by_class[transcoder.property_class]

    def find_transcoder(self, name: str) -> Transcoder | None:
        """Return the transcoder for the property name, or None if it is not known."""
        if (transcoder := self._by_name.get(name.upper())) is not None:
            return transcoder
        return self._builtins.get(name)

    def transcoder_for_name(self, name: str) -> Transcoder:
        """Return the transcoder for a wire property name.

        Unknown names are read as a `RawProperty`, so this never fails.
        """
        if (transcoder := self.find_transcoder(name)) is not None:
            return transcoder
        _LOGGER.debug("No transcoder for property %s, reading as raw property", name)
        return RawPropertyTranscoder(name)

    def transcoder_for_class(self, property_class: type[VCardProperty]) -> Transcoder:
        """Return the transcoder for a property class.

        Raises `TranscoderNotFoundError` if the class was never registered, which
        is a setup mistake rather than bad data.
        """
        if (transcoder := self._by_class.get(property_class)) is not None:
            return transcoder
        if (transcoder := self._builtins_by_class.get(property_class)) is not None:
            return transcoder
        raise TranscoderNotFoundError(
            f"No transcoder found for property class {property_class.__name__}"
        )

    def transcoder_for_property(self, prop: VCardProperty) -> Transcoder:
        """Return the transcoder that writes the property."""
        if isinstance(prop, RawProperty) and type(prop) not in self._by_class:
            return RawPropertyTranscoder(prop.name)
        return self.transcoder_for_class(type(prop))

    def has_transcoder(self, prop: VCardProperty) -> bool:
        """Return True if there is a transcoder that can write the property."""
        try:
            self.transcoder_for_property(prop)
        except TranscoderNotFoundError:
            return False
        return True
