"""Transcoder for the TZ property.

The value of TZ changed shape between versions. Version 2.1 only allows a
UTC offset, 3.0 allows an offset or text with `VALUE=text`, and 4.0 prefers
text such as an IANA timezone identifier with `VALUE=utc-offset` for an
offset. The tables below decide what is written and how a value is read
for each version.
"""

from __future__ import annotations

import enum
import logging
from typing import TYPE_CHECKING

from ..compat import timezone_compat
from ..exceptions import CannotParseError, MissingXmlElementsError
from ..parameters import VCardParameters
from ..parsing.hcard_element import HCardElement
from ..parsing.xcard_element import XCardElement
from ..property.timezone import Timezone
from ..types import text
from ..types.data_types import VCardDataType
from ..types.jcard_value import JCardValue
from ..types.utc_offset import UtcOffset
from ..types.version import VCardVersion
from .base import ParseContext, TranscoderBase
from .catalogue import BUILTIN_TRANSCODERS

if TYPE_CHECKING:
    from ..vcard import VCard

__all__ = [
    "TimezoneTranscoder",
]

_LOGGER = logging.getLogger(__name__)

_V2_1 = VCardVersion.V2_1
_V3_0 = VCardVersion.V3_0
_V4_0 = VCardVersion.V4_0
_TEXT = VCardDataType.TEXT
_UTC_OFFSET = VCardDataType.UTC_OFFSET

# Data type written, keyed by (version, has text, has offset).
_DATA_TYPES: dict[tuple[VCardVersion, bool, bool], VCardDataType] = {
    (_V2_1, False, False): _UTC_OFFSET,
    (_V2_1, True, False): _UTC_OFFSET,
    (_V2_1, False, True): _UTC_OFFSET,
    (_V2_1, True, True): _UTC_OFFSET,
    (_V3_0, False, False): _UTC_OFFSET,
    (_V3_0, True, False): _TEXT,
    (_V3_0, False, True): _UTC_OFFSET,
    (_V3_0, True, True): _UTC_OFFSET,
    (_V4_0, False, False): _TEXT,
    (_V4_0, True, False): _TEXT,
    (_V4_0, False, True): _UTC_OFFSET,
    (_V4_0, True, True): _TEXT,
}

_DEFAULT_DATA_TYPES: dict[VCardVersion, VCardDataType] = {
    _V2_1: _UTC_OFFSET,
    _V3_0: _UTC_OFFSET,
    _V4_0: _TEXT,
}


class _DecodePolicy(enum.Enum):
    """How a plain text value is interpreted."""

    OFFSET = "offset"
    """The value must be a UTC offset."""

    TEXT = "text"
    """The value is free text."""

    OFFSET_OR_TEXT = "offset-or-text"
    """Try a UTC offset, then fall back to text silently."""

    OFFSET_OR_TEXT_WITH_WARNING = "offset-or-text-with-warning"
    """Try a UTC offset, then fall back to text with a warning."""


# Keyed by (version, declared data type), falling back to (version, None).
_DECODE_POLICIES: dict[tuple[VCardVersion, VCardDataType | None], _DecodePolicy] = {
    (_V2_1, None): _DecodePolicy.OFFSET,
    (_V3_0, _TEXT): _DecodePolicy.TEXT,
    (_V3_0, _UTC_OFFSET): _DecodePolicy.OFFSET_OR_TEXT_WITH_WARNING,
    (_V3_0, None): _DecodePolicy.OFFSET_OR_TEXT_WITH_WARNING,
    (_V4_0, _TEXT): _DecodePolicy.TEXT,
    (_V4_0, _UTC_OFFSET): _DecodePolicy.OFFSET,
    (_V4_0, None): _DecodePolicy.OFFSET_OR_TEXT,
}


def _decode_policy(
    version: VCardVersion, data_type: VCardDataType | None
) -> _DecodePolicy:
    policy = _DECODE_POLICIES.get(
        (version, data_type), _DECODE_POLICIES[(version, None)]
    )
    if (
        policy is _DecodePolicy.OFFSET
        and version is _V2_1
        and timezone_compat.is_lenient_legacy_timezones_enabled()
    ):
        return _DecodePolicy.OFFSET_OR_TEXT_WITH_WARNING
    return policy


def _parse_offset(value: str) -> UtcOffset:
    try:
        return UtcOffset.parse(value)
    except ValueError as err:
        raise CannotParseError(
            f"Unable to parse UTC offset: {value}", detailed_error=str(err)
        ) from err


@BUILTIN_TRANSCODERS.register
class TimezoneTranscoder(TranscoderBase[Timezone]):
    """Reads and writes a timezone as a UTC offset or text."""

    property_name = "TZ"
    property_class = Timezone

    def default_data_type(self, version: VCardVersion) -> VCardDataType | None:
        return _DEFAULT_DATA_TYPES[version]

    def data_type(self, prop: Timezone, version: VCardVersion) -> VCardDataType | None:
        return _DATA_TYPES[(version, prop.text is not None, prop.offset is not None)]

    def _offset(self, prop: Timezone, version: VCardVersion) -> UtcOffset | None:
        if (
            prop.offset is None
            and version is _V2_1
            and timezone_compat.is_timezone_id_offsets_enabled()
        ):
            return prop.resolve_offset()
        return prop.offset

    def write_text(self, prop: Timezone, version: VCardVersion) -> str:
        data_type = self.data_type(prop, version)
        if data_type is _TEXT:
            return text.escape(prop.text or "", version)
        offset = self._offset(prop, version)
        if offset is None:
            if prop.text:
                _LOGGER.debug("Timezone has no UTC offset in %s: %s", version, prop.text)
            return ""
        return offset.format(extended=version is _V3_0)

    def parse_text(
        self,
        value: str,
        data_type: VCardDataType | None,
        parameters: VCardParameters,
        context: ParseContext,
    ) -> Timezone:
        if not value:
            return Timezone()
        policy = _decode_policy(context.version, data_type)
        if policy is _DecodePolicy.TEXT:
            return Timezone(text=text.unescape(value))
        if policy is _DecodePolicy.OFFSET:
            return Timezone(offset=_parse_offset(value))
        try:
            return Timezone(offset=UtcOffset.parse(value))
        except ValueError:
            if policy is _DecodePolicy.OFFSET_OR_TEXT_WITH_WARNING:
                context.add_warning(f"Unable to parse UTC offset. Treating as text: {value}")
            return Timezone(text=text.unescape(value))

    def write_json(self, prop: Timezone) -> JCardValue:
        if self.data_type(prop, _V4_0) is _TEXT:
            return JCardValue.single(prop.text or "")
        return JCardValue.single(prop.offset.format(extended=True) if prop.offset else "")

    def parse_json(
        self,
        value: JCardValue,
        data_type: VCardDataType | None,
        parameters: VCardParameters,
        context: ParseContext,
    ) -> Timezone:
        single = value.as_single()
        if not single:
            return Timezone()
        if data_type is _TEXT:
            return Timezone(text=single)
        try:
            return Timezone(offset=UtcOffset.parse(single))
        except ValueError as err:
            if data_type is _UTC_OFFSET:
                raise CannotParseError(
                    f"Unable to parse UTC offset: {single}", detailed_error=str(err)
                ) from err
            return Timezone(text=single)

    def write_xml(self, prop: Timezone, element: XCardElement) -> None:
        if prop.text is not None:
            element.append(_TEXT.value, prop.text)
        elif prop.offset is not None:
            element.append(_UTC_OFFSET.value, prop.offset.format(extended=False))
        else:
            element.append(_TEXT.value, "")

    def parse_xml(
        self,
        element: XCardElement,
        parameters: VCardParameters,
        context: ParseContext,
    ) -> Timezone:
        if (value := element.first(_TEXT.value)) is not None:
            return Timezone(text=value or None)
        if (value := element.first(_UTC_OFFSET.value)) is not None:
            return Timezone(offset=_parse_offset(value))
        raise MissingXmlElementsError(_TEXT.value, _UTC_OFFSET.value)

    def parse_html(self, element: HCardElement, context: ParseContext) -> Timezone:
        html_context = ParseContext(version=_V3_0, warnings=context.warnings)
        return self.parse_text(
            text.escape(element.value(), _V3_0), None, VCardParameters(), html_context
        )

    def validate(
        self, prop: Timezone, version: VCardVersion, vcard: VCard | None
    ) -> list[str]:
        warnings = []
        if prop.offset is None and prop.text is None:
            warnings.append("Property has no text or offset associated with it.")
        elif version is _V2_1 and prop.offset is None:
            if not (
                timezone_compat.is_timezone_id_offsets_enabled()
                and prop.resolve_offset() is not None
            ):
                warnings.append(
                    "Property requires a UTC offset for its value in version 2.1."
                )
        if prop.offset is not None and not 0 <= prop.offset.minute <= 59:
            warnings.append("Minute offset must be between 0 and 59.")
        return warnings
