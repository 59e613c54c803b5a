"""Readers and writers for each dialect of vCard."""

from .hcard import HCardReader
from .jcard import JCardReader, JCardWriter
from .text import VCardTextReader, VCardTextWriter
from .xcard import XCardReader, XCardWriter

__all__ = [
    "HCardReader",
    "JCardReader",
    "JCardWriter",
    "VCardTextReader",
    "VCardTextWriter",
    "XCardReader",
    "XCardWriter",
]
