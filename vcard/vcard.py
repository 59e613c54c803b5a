"""A vCard document, an ordered collection of properties about one entity."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
import logging
import re
from typing import TYPE_CHECKING, TypeVar

from .property.base import VCardProperty
from .property.raw import RawProperty
from .property.structured_name import StructuredName
from .property.text import FormattedName
from .types.version import VCardVersion
from .validation import ValidationWarnings

if TYPE_CHECKING:
    from .transcoders.registry import TranscoderRegistry

__all__ = [
    "VCard",
]

_LOGGER = logging.getLogger(__name__)

_GROUP_RE = re.compile(r"^[A-Za-z0-9-]+$")

T_PROPERTY = TypeVar("T_PROPERTY", bound=VCardProperty)


class VCard:
    """A single contact.

    The version is the version the vCard was read as, or should be written
    as by default. Writers may be asked to target a different version.
    """

    def __init__(
        self,
        properties: Iterable[VCardProperty] | None = None,
        version: VCardVersion = VCardVersion.V3_0,
    ) -> None:
        """Initialize VCard."""
        self.version = version
        self.properties: list[VCardProperty] = list(properties or ())

    def add(self, prop: VCardProperty) -> None:
        """Append a property."""
        self.properties.append(prop)

    def remove(self, prop: VCardProperty) -> None:
        """Remove a property instance."""
        self.properties = [existing for existing in self.properties if existing is not prop]

    def get_properties(self, property_class: type[T_PROPERTY]) -> list[T_PROPERTY]:
        """Return all properties of the specified class, in document order."""
        return [prop for prop in self.properties if isinstance(prop, property_class)]

    def get_property(self, property_class: type[T_PROPERTY]) -> T_PROPERTY | None:
        """Return the first property of the specified class."""
        for prop in self.properties:
            if isinstance(prop, property_class):
                return prop
        return None

    def get_raw_properties(self, name: str) -> list[RawProperty]:
        """Return the raw properties with the specified name, ignoring case."""
        return [
            prop
            for prop in self.get_properties(RawProperty)
            if prop.name.upper() == name.upper()
        ]

    def validate(
        self,
        version: VCardVersion | None = None,
        registry: TranscoderRegistry | None = None,
    ) -> ValidationWarnings:
        """Check this vCard for problems when written as the specified version."""
        from .transcoders.registry import TranscoderRegistry

        if version is None:
            version = self.version
        if registry is None:
            registry = TranscoderRegistry()
        result = ValidationWarnings()

        document_warnings = []
        if version is not VCardVersion.V2_1 and self.get_property(FormattedName) is None:
            document_warnings.append(
                f"A FormattedName property is required in version {version.value}."
            )
        if version is not VCardVersion.V4_0 and self.get_property(StructuredName) is None:
            document_warnings.append(
                f"A StructuredName property is required in version {version.value}."
            )
        result.add(None, document_warnings)

        for prop in self.properties:
            transcoder = registry.transcoder_for_property(prop)
            messages = []
            if version not in transcoder.supported_versions(prop):
                versions = ", ".join(
                    sorted(item.value for item in transcoder.supported_versions(prop))
                )
                messages.append(
                    f"Property is not supported in version {version.value}, "
                    f"only in: {versions}"
                )
            if prop.group is not None and not _GROUP_RE.match(prop.group):
                messages.append(f"Group name contains illegal characters: {prop.group}")
            messages.extend(prop.parameters.validate(version, transcoder.property_name))
            messages.extend(transcoder.validate(prop, version, self))
            result.add(prop, messages)
        _LOGGER.debug("Validated vCard as %s with %d warnings", version.value, len(result))
        return result

    def __iter__(self) -> Iterator[VCardProperty]:
        return iter(self.properties)

    def __len__(self) -> int:
        return len(self.properties)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VCard):
            return NotImplemented
        return self.version == other.version and self.properties == other.properties

    def __repr__(self) -> str:
        return f"VCard(version={self.version.value!r}, properties={self.properties!r})"
