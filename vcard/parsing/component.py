"""Library for handling the BEGIN/END structure of plain text vCards.

Components created here have no semantic meaning, but hold all the
contentlines of each vCard so they can be decoded by the transcoders.
"""

from __future__ import annotations

from collections.abc import Generator
from dataclasses import dataclass, field
import logging
import re
import textwrap

from ..exceptions import VCardParseError
from ..types.version import VCardVersion
from .const import (
    ATTR_AGENT,
    ATTR_BEGIN,
    ATTR_END,
    ATTR_VERSION,
    FOLD,
    FOLD_INDENT,
    FOLD_LEN,
)
from .property import ParsedProperty, parse_contentlines

__all__ = [
    "ParsedComponent",
    "parse_content",
    "fold",
    "unfolded_lines",
    "version_of",
]

_LOGGER = logging.getLogger(__name__)

FOLD_RE = re.compile(FOLD, flags=re.MULTILINE)
LINES_RE = re.compile(r"\r?\n")
_QUOTED_PRINTABLE_RE = re.compile(r"^[^:]*;[^:]*QUOTED-PRINTABLE[^:]*:", re.IGNORECASE)


@dataclass
class ParsedComponent:
    """A BEGIN/END block and its contentlines."""

    name: str
    properties: list[ParsedProperty] = field(default_factory=list)
    components: list[ParsedComponent] = field(default_factory=list)

    warnings: list[str] = field(default_factory=list)
    """Malformed lines that were skipped."""

    def get_property(self, name: str) -> ParsedProperty | None:
        """Return the first property with the specified name."""
        for prop in self.properties:
            if prop.name == name.upper():
                return prop
        return None


def fold(contentline: str) -> list[str]:
    """Fold a contentline into lines of at most 75 characters."""
    return textwrap.wrap(
        contentline,
        width=FOLD_LEN,
        subsequent_indent=FOLD_INDENT,
        drop_whitespace=False,
        replace_whitespace=False,
        expand_tabs=False,
        break_on_hyphens=False,
    ) or [contentline]


def parse_content(content: str) -> list[ParsedComponent]:
    """Parse content into components of raw contentlines.

    This walks through each line and uses a stack to associate properties with
    the current component. A version 2.1 vCard nested in an AGENT property is
    attached to that property.
    """
    stack: list[ParsedComponent] = [ParsedComponent(name="stream")]
    # The property that preceded each open component, to find nested AGENTs
    preceding: list[ParsedProperty | None] = [None]
    last_property: ParsedProperty | None = None
    for result in parse_contentlines(unfolded_lines(content)):
        if isinstance(result, VCardParseError):
            _LOGGER.debug("Skipping malformed line: %s", result.detailed_error)
            stack[-1].warnings.append(f"{result.message}: {result.detailed_error}")
            continue
        prop = result
        if prop.name == ATTR_BEGIN:
            stack.append(ParsedComponent(name=prop.value.strip().upper()))
            preceding.append(last_property)
            last_property = None
            continue
        if prop.name == ATTR_END:
            if len(stack) == 1:
                raise VCardParseError(
                    f"Unexpected '{ATTR_END}:{prop.value}' without '{ATTR_BEGIN}'"
                )
            component = stack.pop()
            agent = preceding.pop()
            if prop.value.strip().upper() != component.name:
                raise VCardParseError(
                    f"Unexpected '{ATTR_END}:{prop.value}', expected {ATTR_END}:{component.name}"
                )
            parent = stack[-1]
            if (
                agent is not None
                and agent.name == ATTR_AGENT
                and agent.embedded is None
                and parent.properties
                and parent.properties[-1] is agent
            ):
                agent.embedded = component
            else:
                parent.components.append(component)
            last_property = None
            continue
        if len(stack) == 1:
            _LOGGER.debug("Ignoring property outside of a component: %s", prop.name)
            continue
        stack[-1].properties.append(prop)
        last_property = prop

    if len(stack) > 1:
        raise VCardParseError(
            f"Unexpected end of content, expected {ATTR_END}:{stack[-1].name}"
        )
    return stack[0].components


def unfolded_lines(content: str) -> Generator[str, None, None]:
    """Read content and unfold lines.

    Quoted-printable values of version 2.1 continue onto the next line after
    a trailing `=` soft line break.
    """
    content = FOLD_RE.sub("", content)
    pending: str | None = None
    for line in LINES_RE.split(content):
        if pending is not None:
            line = pending + line
            pending = None
        if line.endswith("=") and _QUOTED_PRINTABLE_RE.match(line):
            pending = line[:-1]
            continue
        yield line
    if pending is not None:
        yield pending


def version_of(component: ParsedComponent) -> VCardVersion:
    """Return the version of a vCard component, 2.1 when it is missing."""
    if (prop := component.get_property(ATTR_VERSION)) is not None:
        if (version := VCardVersion.parse(prop.value)) is not None:
            return version
        _LOGGER.debug("Unknown version %s, reading as 2.1", prop.value)
    return VCardVersion.V2_1
