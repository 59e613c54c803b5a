"""Helper for extracting property values from an hCard html element.

hCard is a microformat where properties are html elements marked with class
names, e.g. `<span class="tel"><span class="type">work</span> 555-1234</span>`.
The value of an element is its visible text with these rules:

* An `abbr` element with a `title` uses the title.
* If descendants have the class `value`, only their text is used.
* Text of elements with the class `type` is excluded.
* Text of `del` elements is excluded.
* A `br` element is a line break.
"""

from __future__ import annotations

from urllib.parse import urljoin

from lxml import html

__all__ = [
    "HCardElement",
]

VALUE_CLASS = "value"
TYPE_CLASS = "type"


def _class_names(element: html.HtmlElement) -> list[str]:
    return (element.get("class") or "").split()


def _is_element(node: object) -> bool:
    """Return True for elements, False for comments and processing instructions."""
    return isinstance(getattr(node, "tag", None), str)


class HCardElement:
    """Wraps an html element that represents an hCard property."""

    def __init__(self, element: html.HtmlElement, base_url: str | None = None) -> None:
        """Initialize HCardElement."""
        self.element = element
        self.base_url = base_url

    @property
    def tag_name(self) -> str:
        """Return the lower case tag name."""
        return self.element.tag.lower()

    def attr(self, name: str) -> str:
        """Return the value of an attribute, or empty if it is not set."""
        return self.element.get(name) or ""

    def class_names(self) -> list[str]:
        """Return the class names of the element."""
        return _class_names(self.element)

    def has_class(self, name: str) -> bool:
        """Return True if the element has the class name."""
        return name in self.class_names()

    def abs_url(self, name: str) -> str:
        """Return the value of a URL attribute, resolved against the page URL."""
        value = self.attr(name)
        if not value or self.base_url is None:
            return value
        return urljoin(self.base_url, value)

    def value(self) -> str:
        """Return the value of the element, see the module docstring."""
        return _element_value(self.element)

    def values_by_class(self, class_name: str) -> list[str]:
        """Return the value of every descendant with the class name."""
        return [
            _element_value(child)
            for child in self.element.iterdescendants()
            if _is_element(child) and class_name in _class_names(child)
        ]

    def first_value(self, class_name: str) -> str | None:
        """Return the value of the first descendant with the class name."""
        if values := self.values_by_class(class_name):
            return values[0]
        return None

    def types(self) -> list[str]:
        """Return the lower case text of the `type` descendants."""
        return [value.lower() for value in self.values_by_class(TYPE_CLASS)]

    def children_with_class(self, class_name: str) -> list[HCardElement]:
        """Return descendants with the class name."""
        return [
            HCardElement(child, self.base_url)
            for child in self.element.iterdescendants()
            if _is_element(child) and class_name in _class_names(child)
        ]


def _element_value(element: html.HtmlElement) -> str:
    """Return the value of an element per the hCard rules."""
    if element.tag == "abbr" and (title := element.get("title")) is not None:
        return title.strip()
    value_elements = _outermost_value_elements(element)
    if not value_elements:
        return _visible_text(element).strip()
    parts = []
    for value_element in value_elements:
        if value_element.tag == "abbr" and (title := value_element.get("title")):
            parts.append(title)
        else:
            parts.append(_visible_text(value_element))
    return "".join(parts).strip()


def _outermost_value_elements(element: html.HtmlElement) -> list[html.HtmlElement]:
    """Find descendants with the `value` class that are not inside another one."""
    result = []
    for child in element:
        if not _is_element(child):
            continue
        if VALUE_CLASS in _class_names(child):
            result.append(child)
        else:
            result.extend(_outermost_value_elements(child))
    return result


def _visible_text(element: html.HtmlElement) -> str:
    """Return the text of the element excluding `del` and `type` elements."""
    parts = [element.text or ""]
    for child in element:
        if _is_element(child):
            if child.tag == "br":
                parts.append("\n")
            elif child.tag != "del" and TYPE_CLASS not in _class_names(child):
                parts.append(_visible_text(child))
        parts.append(child.tail or "")
    return "".join(parts)
