"""
.. include:: ../README.md
"""

from .vcard import VCard

__all__ = [
    "VCard",
    "compat",
    "exceptions",
    "io",
    "parameter_values",
    "parameters",
    "property",
    "transcoders",
    "types",
    "util",
    "validation",
]
