"""The catalogue of transcoders built into this library.

Transcoder classes register themselves with the `BUILTIN_TRANSCODERS`
catalogue using a decorator. The catalogue is populated when
`vcard.transcoders` is imported and is not modified afterwards; custom
transcoders are registered with a `TranscoderRegistry` instead.
"""

from __future__ import annotations

from collections.abc import Iterator
import logging
from typing import TypeVar

from .base import Transcoder

__all__ = [
    "BUILTIN_TRANSCODERS",
    "TranscoderCatalogue",
]

_LOGGER = logging.getLogger(__name__)

T_TYPE = TypeVar("T_TYPE", bound=type)


class TranscoderCatalogue:
    """A read-mostly collection of transcoders keyed by property name."""

    def __init__(self) -> None:
        """Initialize TranscoderCatalogue."""
        self._items: dict[str, Transcoder] = {}

    def register(self, cls: T_TYPE) -> T_TYPE:
        """Decorator that adds an instance of the transcoder class to the catalogue."""
        transcoder = cls()
        self._items[transcoder.property_name.upper()] = transcoder
        return cls

    def get(self, name: str) -> Transcoder | None:
        """Return the transcoder for the property name, ignoring case."""
        return self._items.get(name.upper())

    def __iter__(self) -> Iterator[Transcoder]:
        return iter(self._items.values())

    def __len__(self) -> int:
        return len(self._items)


BUILTIN_TRANSCODERS: TranscoderCatalogue = TranscoderCatalogue()
