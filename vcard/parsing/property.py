"""Library for handling vCard contentlines.

A contentline is a single unfolded line of a plain text vCard made of an
optional group, a name, parameters and a value. This layer only splits the
line into its parts and does not attempt to interpret the value.

For example, given a content line of:

  item1.TEL;TYPE=work,voice:+1-555-555-1234

This library would create a ParsedProperty object with this structure:

  ParsedProperty(
    name='TEL',
    value='+1-555-555-1234',
    group='item1',
    params=[
        ParsedPropertyParameter(
            name='TYPE',
            values=['work', 'voice']
        )
    ]
  )

Version 2.1 also allows parameters without a name, e.g. `TEL;HOME;VOICE:`,
whose name is inferred from the value.
"""

from __future__ import annotations

from collections.abc import Generator, Iterable, Sequence
from dataclasses import dataclass
import re
from typing import TYPE_CHECKING, Optional

from ..exceptions import VCardParseError
from ..parameter_values import Encoding
from ..parameters import ENCODING, TYPE, VALUE
from ..types.data_types import VCardDataType
from ..types.version import VCardVersion

if TYPE_CHECKING:
    from .component import ParsedComponent

__all__ = [
    "ParsedProperty",
    "ParsedPropertyParameter",
    "parse_contentlines",
]

# Characters that should be encoded in quotes
_UNSAFE_CHAR_RE = re.compile(r"[,:;]")
_RE_NAME = re.compile("[A-Za-z0-9-]+")
_NAME_DELIMITERS = (";", ":")
_PARAM_DELIMITERS = (",", ";", ":")
_QUOTE = '"'

# Legacy VALUE values that are not data types.
_LEGACY_VALUES = ("inline", "cid")

# Circumflex escapes in parameter values of version 4.0 (rfc6868).
_CARET_DECODE_RE = re.compile(r"\^(.)")
_CARET_DECODE = {"n": "\n", "^": "^", "'": '"'}


def _find_first(
    line: str, chars: Sequence[str], start: int | None = None
) -> int | None:
    """Find the earliest occurrence of any of the given characters in the line."""
    earliest: int | None = None
    for char in chars:
        pos = line.find(char, start)
        if pos != -1 and (earliest is None or pos < earliest):
            earliest = pos
    return earliest


def nameless_parameter_name(value: str) -> str:
    """Return the name of a version 2.1 parameter that was written without one."""
    if Encoding.find(value) is not None:
        return ENCODING
    if VCardDataType.find(value) is not None or value.lower() in _LEGACY_VALUES:
        return VALUE
    return TYPE


def decode_parameter_value(value: str, version: VCardVersion) -> str:
    """Decode the circumflex escapes of a version 4.0 parameter value."""
    if version is not VCardVersion.V4_0:
        return value
    return _CARET_DECODE_RE.sub(
        lambda match: _CARET_DECODE.get(match.group(1), match.group(0)), value
    )


def encode_parameter_value(value: str, version: VCardVersion) -> str:
    """Encode a parameter value, quoting or escaping it as the version allows."""
    if version is VCardVersion.V4_0:
        value = value.replace("^", "^^").replace("\r\n", "^n").replace("\n", "^n")
        value = value.replace(_QUOTE, "^'")
    elif version is VCardVersion.V3_0:
        value = value.replace(_QUOTE, "'").replace("\r\n", " ").replace("\n", " ")
    if version is not VCardVersion.V2_1 and _UNSAFE_CHAR_RE.search(value):
        return f'"{value}"'
    return value


@dataclass
class ParsedPropertyParameter:
    """A vCard property parameter."""

    name: str
    values: list[str]


@dataclass
class ParsedProperty:
    """A vCard contentline."""

    name: str
    value: str
    params: Optional[list[ParsedPropertyParameter]] = None
    group: Optional[str] = None

    embedded: Optional[ParsedComponent] = None
    """A nested version 2.1 vCard that follows an AGENT property."""

    def get_parameter_value(self, name: str) -> str | None:
        """Return the first value of the parameter with the specified name."""
        for param in self.params or ():
            if param.name.upper() == name.upper() and param.values:
                return param.values[0]
        return None

    def encode(self, version: VCardVersion) -> str:
        """Encode the contentline for the version."""
        result = []
        if self.group:
            result.append(f"{self.group}.")
        result.append(self.name.upper())
        for parameter in self.params or ():
            name = parameter.name.upper()
            values = [encode_parameter_value(value, version) for value in parameter.values]
            if version is VCardVersion.V2_1:
                # Version 2.1 repeats the parameter and omits the TYPE name
                for value in values:
                    result.append(f";{value}" if name == TYPE else f";{name}={value}")
            else:
                result.append(f";{name}={','.join(values)}")
        result.append(":")
        result.append(self.value)
        return "".join(result)

    @classmethod
    def from_contentline(cls, contentline: str) -> ParsedProperty:
        """Decode a ParsedProperty from a contentline.

        Will raise a VCardParseError on failure.
        """
        return _parse_line(contentline)


def _parse_line(line: str) -> ParsedProperty:
    """Parse a single property line."""

    # parse GROUP and NAME
    if (name_end_pos := _find_first(line, _NAME_DELIMITERS)) is None:
        raise VCardParseError(
            f"Invalid property line, expected {_NAME_DELIMITERS} after property name",
            detailed_error=line,
        )
    group, _, property_name = line[0:name_end_pos].strip().rpartition(".")
    has_params = line[name_end_pos] == ";"
    pos = name_end_pos + 1
    line_len = len(line)

    # parse PARAMS if any
    params: list[ParsedPropertyParameter] = []
    if has_params:
        delimiter: str | None = None
        while delimiter != ":":
            if pos >= line_len:
                raise VCardParseError(
                    "Unexpected end of line. Expected parameter or ':'",
                    detailed_error=line,
                )
            equals_pos = line.find("=", pos)
            end_pos = _find_first(line, _NAME_DELIMITERS, pos)
            if end_pos is None:
                raise VCardParseError(
                    "Unexpected end of line: missing ':' after parameters.",
                    detailed_error=line,
                )
            if equals_pos == -1 or equals_pos > end_pos:
                # A nameless parameter, allowed by version 2.1
                value = line[pos:end_pos].strip()
                if value:
                    params.append(
                        ParsedPropertyParameter(
                            name=nameless_parameter_name(value), values=[value]
                        )
                    )
                delimiter = line[end_pos]
                pos = end_pos + 1
                continue

            param_name = line[pos:equals_pos].strip()
            pos = equals_pos + 1

            # parse one or more comma-separated PARAM-VALUES
            param_values: list[str] = []
            delimiter = None
            while delimiter is None or delimiter == ",":
                if pos >= line_len:
                    raise VCardParseError(
                        "Unexpected end of line. Expected parameter value or delimiter.",
                        detailed_error=line,
                    )
                if line[pos] == _QUOTE:
                    if (end_quote_pos := line.find(_QUOTE, pos + 1)) == -1:
                        raise VCardParseError(
                            "Unexpected end of line: unclosed quoted parameter value.",
                            detailed_error=line,
                        )
                    param_values.append(line[pos + 1 : end_quote_pos])
                    pos = end_quote_pos + 1
                else:
                    if (value_end_pos := _find_first(line, _PARAM_DELIMITERS, pos)) is None:
                        raise VCardParseError(
                            "Unexpected end of line: missing parameter value delimiter.",
                            detailed_error=line,
                        )
                    param_values.append(line[pos:value_end_pos])
                    pos = value_end_pos

                if pos >= line_len:
                    raise VCardParseError(
                        f"Unexpected end of line after parameter value. Expected {_PARAM_DELIMITERS}.",
                        detailed_error=line,
                    )
                if (delimiter := line[pos]) not in _PARAM_DELIMITERS:
                    raise VCardParseError(
                        f"Expected {_PARAM_DELIMITERS} after parameter value, got '{delimiter}'",
                        detailed_error=line,
                    )
                pos += 1

            if not _RE_NAME.fullmatch(param_name):
                raise VCardParseError(
                    f"Invalid parameter name '{param_name}'", detailed_error=line
                )
            params.append(ParsedPropertyParameter(name=param_name.upper(), values=param_values))

    if not _RE_NAME.fullmatch(property_name):
        raise VCardParseError(
            f"Invalid property name '{property_name}'", detailed_error=line
        )

    return ParsedProperty(
        name=property_name.upper(),
        value=line[pos:],
        params=params if params else None,
        group=group or None,
    )


def parse_contentlines(
    contentlines: Iterable[str],
) -> Generator[ParsedProperty | VCardParseError, None, None]:
    """Parse contentlines into ParsedProperty objects.

    A malformed line is yielded as a VCardParseError so the caller can record
    it and continue with the next line.
    """
    for contentline in contentlines:
        if not contentline.strip():
            continue
        try:
            yield ParsedProperty.from_contentline(contentline)
        except VCardParseError as err:
            yield err
