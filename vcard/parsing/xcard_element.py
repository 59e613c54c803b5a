"""Helper for reading and writing the value elements of an xCard property.

In xCard (rfc6351) each property is an element and its value is held in child
elements named after the data type, e.g.

  <tz><text>America/New_York</text></tz>

Elements are namespaced using the `{namespace}name` notation of ElementTree.
"""

from __future__ import annotations

from collections.abc import Iterable
from xml.etree import ElementTree

from ..types.version import XCARD_NAMESPACE

__all__ = [
    "XCARD_QNP",
    "XCardElement",
    "local_name",
]

XCARD_QNP = f"{{{XCARD_NAMESPACE}}}"


def local_name(tag: str) -> str:
    """Return the tag name without its namespace."""
    if tag.startswith("{"):
        return tag.split("}", 1)[1]
    return tag


class XCardElement:
    """Wraps the element of a single xCard property."""

    def __init__(self, element: ElementTree.Element) -> None:
        """Initialize XCardElement."""
        self.element = element

    @classmethod
    def create(cls, name: str) -> XCardElement:
        """Create a new property element with the specified property name."""
        return cls(ElementTree.Element(XCARD_QNP + name.lower()))

    @property
    def name(self) -> str:
        """Return the property name of the element."""
        return local_name(self.element.tag)

    def append(self, name: str, value: str | None) -> ElementTree.Element:
        """Add a value element, e.g. `<text>value</text>`."""
        child = ElementTree.SubElement(self.element, XCARD_QNP + name)
        child.text = value if value else None
        return child

    def append_all(self, name: str, values: Iterable[str]) -> None:
        """Add a value element for each value."""
        for value in values:
            self.append(name, value)

    def _children(self, *names: str) -> Iterable[ElementTree.Element]:
        for child in self.element:
            if not isinstance(child.tag, str):
                continue
            if child.tag.startswith("{") and not child.tag.startswith(XCARD_QNP):
                continue
            if local_name(child.tag) == "parameters":
                continue
            if not names or local_name(child.tag) in names:
                yield child

    def first(self, *names: str) -> str | None:
        """Return the text of the first value element with one of the names.

        An empty element has the value "" and a missing element is None.
        """
        for child in self._children(*names):
            return child.text or ""
        return None

    def all(self, name: str) -> list[str]:
        """Return the text of every value element with the name."""
        return [child.text or "" for child in self._children(name)]

    def first_child(self) -> tuple[str, str] | None:
        """Return the name and text of the first value element of any name."""
        for child in self._children():
            return local_name(child.tag), child.text or ""
        return None

    def text(self) -> str:
        """Return the text directly inside the property element."""
        return (self.element.text or "").strip()
