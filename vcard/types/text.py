"""Library for escaping and unescaping TEXT values.

Escaping rules vary by version: version 2.1 has no comma escaping since
commas are not a list delimiter there, while 3.0 and 4.0 escape backslash,
comma and semicolon. Newlines are always written as a `\\n` sequence.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from .version import VCardVersion

UNESCAPE_CHAR = {"\\\\": "\\", "\\;": ";", "\\,": ",", "\\N": "\n", "\\n": "\n"}

_ESCAPE_LEGACY = {"\\": "\\\\", ";": "\\;", "\n": "\\n"}
_ESCAPE = {"\\": "\\\\", ",": "\\,", ";": "\\;", "\n": "\\n"}


def escape(value: str, version: VCardVersion = VCardVersion.V4_0) -> str:
    """Serialize text as a vCard TEXT value for the specified version."""
    table = _ESCAPE_LEGACY if version is VCardVersion.V2_1 else _ESCAPE
    value = value.replace("\r\n", "\n").replace("\r", "\n")
    return "".join(table.get(char, char) for char in value)


def unescape(value: str) -> str:
    """Parse a vCard TEXT value, resolving any backslash escape sequences."""
    if "\\" not in value:
        return value
    result = []
    pos = 0
    while pos < len(value):
        pair = value[pos : pos + 2]
        if (replacement := UNESCAPE_CHAR.get(pair)) is not None:
            result.append(replacement)
            pos += 2
            continue
        result.append(value[pos])
        pos += 1
    return "".join(result)


def _split_unescaped(value: str, delimiter: str) -> list[str]:
    """Split on a delimiter that is not preceded by a backslash escape."""
    parts = []
    current: list[str] = []
    escaped = False
    for char in value:
        if escaped:
            current.append(char)
            escaped = False
        elif char == "\\":
            current.append(char)
            escaped = True
        elif char == delimiter:
            parts.append("".join(current))
            current = []
        else:
            current.append(char)
    parts.append("".join(current))
    return parts


def split_structured(value: str) -> list[list[str]]:
    """Parse a structured value into components, each a list of values.

    For example `Doe;John;Paul,Ringo;;` becomes
    `[["Doe"], ["John"], ["Paul", "Ringo"], [], []]`.
    """
    components = []
    for component in _split_unescaped(value, ";"):
        if not component:
            components.append([])
            continue
        components.append(
            [unescape(item) for item in _split_unescaped(component, ",")]
        )
    return components


def join_structured(
    components: Sequence[Iterable[str]], version: VCardVersion = VCardVersion.V4_0
) -> str:
    """Serialize components as a structured value, see `split_structured`."""
    return ";".join(
        ",".join(escape(item, version) for item in component)
        for component in components
    )
