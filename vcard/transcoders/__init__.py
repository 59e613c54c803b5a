"""Library for reading and writing the value of each kind of property.

Importing this package registers the built-in transcoders in the
`BUILTIN_TRANSCODERS` catalogue.
"""

from . import agent, binary, geo, related, structured_name, text, timezone
from .base import ParseContext, Transcoder, TranscoderBase
from .catalogue import BUILTIN_TRANSCODERS, TranscoderCatalogue
from .raw import RawPropertyTranscoder
from .registry import TranscoderRegistry

__all__ = [
    "BUILTIN_TRANSCODERS",
    "ParseContext",
    "RawPropertyTranscoder",
    "Transcoder",
    "TranscoderBase",
    "TranscoderCatalogue",
    "TranscoderRegistry",
    "agent",
    "binary",
    "geo",
    "related",
    "structured_name",
    "text",
    "timezone",
]
