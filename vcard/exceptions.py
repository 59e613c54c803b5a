"""Exceptions for vcard library."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .vcard import VCard


class VCardError(Exception):
    """Base exception for all vcard errors."""


class VCardParseError(VCardError):
    """Exception raised when a document cannot be parsed at all.

    This is reserved for structural problems with the whole stream, such as
    unbalanced BEGIN/END lines or malformed JSON and XML. Problems with
    individual property values are reported as warnings by the readers.

    The 'message' attribute contains a human-readable message about the
    error that occurred. The 'detailed_error' attribute can provide additional
    information about the error, such as the offending line.
    """

    def __init__(self, message: str, *, detailed_error: str | None = None) -> None:
        """Initialize the VCardParseError with a message."""
        super().__init__(message)
        self.message = message
        self.detailed_error = detailed_error


class CannotParseError(VCardError):
    """Exception raised when a property value does not match its grammar.

    Decoding of that single property is aborted. Readers catch this, record
    a warning and continue with the rest of the document.
    """

    def __init__(self, message: str, *, detailed_error: str | None = None) -> None:
        """Initialize the CannotParseError with a message."""
        super().__init__(message)
        self.message = message
        self.detailed_error = detailed_error


class MissingXmlElementsError(CannotParseError):
    """Exception raised when an xCard property has none of the expected children."""

    def __init__(self, *elements: str) -> None:
        """Initialize the MissingXmlElementsError with the expected element names."""
        self.elements = list(elements)
        names = ", ".join(f"<{element}>" for element in elements)
        super().__init__(
            f"Property value could not be found, expected one of: {names}"
        )


class SkipMeError(VCardError):
    """Exception raised by a transcoder to omit a property from the output.

    This is not an error condition: writers silently drop the property.
    """


class EmbeddedVCardError(VCardError):
    """Exception raised when a property value is itself a vCard.

    When writing, `vcard` is the nested document that the dialect may not be
    able to represent. When reading, `prop` is the partially built property
    and `embedded` is the raw nested content (text or element) that the
    reader is responsible for parsing and injecting.
    """

    def __init__(
        self,
        *,
        vcard: VCard | None = None,
        prop: Any = None,
        embedded: Any = None,
    ) -> None:
        """Initialize the EmbeddedVCardError."""
        super().__init__("Property value is an embedded vCard")
        self.vcard = vcard
        self.prop = prop
        self.embedded = embedded


class TranscoderNotFoundError(VCardError):
    """Exception raised when no transcoder is registered for a property class.

    This indicates a setup mistake by the caller (a custom property class
    that was never registered) rather than bad input data.
    """
