"""Library for jCard property values.

A jCard property is a JSON array of `[name, {params}, datatype, value...]`.
The trailing values may be a single value, multiple values, or a single
structured value (a nested array whose components may themselves be
arrays). This class captures those shapes independent of JSON encoding.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

__all__ = [
    "JCardValue",
]


@dataclass
class JCardValue:
    """The value portion of a jCard property."""

    values: list[Any] = field(default_factory=list)

    @classmethod
    def single(cls, value: Any) -> JCardValue:
        """Create a value holding a single JSON value."""
        return cls(values=[value])

    @classmethod
    def multi(cls, values: Sequence[Any]) -> JCardValue:
        """Create a value holding multiple JSON values."""
        return cls(values=list(values))

    @classmethod
    def structured(cls, components: Sequence[Sequence[Any] | Any]) -> JCardValue:
        """Create a structured value.

        A component with a single value is written as that value and an
        empty component is written as an empty string, per rfc7095.
        """
        result: list[Any] = []
        for component in components:
            if isinstance(component, (list, tuple)):
                if not component:
                    result.append("")
                elif len(component) == 1:
                    result.append(component[0])
                else:
                    result.append(list(component))
            else:
                result.append("" if component is None else component)
        return cls(values=[result])

    def as_single(self) -> str:
        """Return the value as a single string, empty if there is no value."""
        if not self.values:
            return ""
        first = self.values[0]
        while isinstance(first, list):
            if not first:
                return ""
            first = first[0]
        if first is None:
            return ""
        if isinstance(first, bool):
            return "true" if first else "false"
        return str(first)

    def as_multi(self) -> list[str]:
        """Return the values as a list of strings."""
        result = []
        for value in self.values:
            if isinstance(value, list):
                result.extend(str(item) for item in value if item is not None)
            elif value is not None:
                result.append(str(value))
        return result

    def as_structured(self) -> list[list[str]]:
        """Return the value as a list of components, each a list of strings."""
        if not self.values:
            return []
        values = self.values
        if len(values) == 1 and isinstance(values[0], list):
            values = values[0]
        result = []
        for component in values:
            if isinstance(component, list):
                result.append([str(item) for item in component if item != ""])
            elif component is None or component == "":
                result.append([])
            else:
                result.append([str(component)])
        return result
