"""Transcoder for the GEO property.

Versions 2.1 and 3.0 write the position as `lat;lon` while 4.0 uses a
`geo:` URI (rfc5870), e.g. `geo:37.386013,-122.082932`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..exceptions import CannotParseError, MissingXmlElementsError
from ..parameters import VCardParameters
from ..parsing.hcard_element import HCardElement
from ..parsing.xcard_element import XCardElement
from ..property.geo import Geo
from ..types.data_types import VCardDataType
from ..types.jcard_value import JCardValue
from ..types.version import VCardVersion
from .base import ParseContext, TranscoderBase
from .catalogue import BUILTIN_TRANSCODERS

if TYPE_CHECKING:
    from ..vcard import VCard

__all__ = [
    "GeoTranscoder",
]

GEO_SCHEME = "geo:"


def _format_degrees(value: float) -> str:
    """Format a coordinate with at most six decimal places."""
    result = f"{value:.6f}".rstrip("0").rstrip(".")
    return result if result not in ("", "-0") else "0"


def _geo_uri(prop: Geo) -> str:
    if prop.latitude is None or prop.longitude is None:
        return ""
    return f"{GEO_SCHEME}{_format_degrees(prop.latitude)},{_format_degrees(prop.longitude)}"


def _parse_geo_uri(value: str) -> Geo:
    """Parse a `geo:` URI, ignoring any altitude and URI parameters."""
    coordinates = value[len(GEO_SCHEME) :].split(";", 1)[0]
    parts = coordinates.split(",")
    if len(parts) < 2:
        raise CannotParseError(f"Value was not a valid geo URI: {value}")
    try:
        return Geo(latitude=float(parts[0]), longitude=float(parts[1]))
    except ValueError as err:
        raise CannotParseError(
            f"Value was not a valid geo URI: {value}", detailed_error=str(err)
        ) from err


def _parse_pair(value: str) -> Geo:
    """Parse a `lat;lon` value."""
    parts = value.split(";")
    if len(parts) != 2:
        raise CannotParseError(f"Value was not valid geo lat;long: {value}")
    try:
        return Geo(latitude=float(parts[0]), longitude=float(parts[1]))
    except ValueError as err:
        raise CannotParseError(
            f"Value was not valid geo lat;long: {value}", detailed_error=str(err)
        ) from err


@BUILTIN_TRANSCODERS.register
class GeoTranscoder(TranscoderBase[Geo]):
    """Reads and writes a latitude and longitude."""

    property_name = "GEO"
    property_class = Geo

    def default_data_type(self, version: VCardVersion) -> VCardDataType | None:
        if version is VCardVersion.V4_0:
            return VCardDataType.URI
        return None

    def write_text(self, prop: Geo, version: VCardVersion) -> str:
        if version is VCardVersion.V4_0:
            return _geo_uri(prop)
        if prop.latitude is None or prop.longitude is None:
            return ""
        return f"{_format_degrees(prop.latitude)};{_format_degrees(prop.longitude)}"

    def parse_text(
        self,
        value: str,
        data_type: VCardDataType | None,
        parameters: VCardParameters,
        context: ParseContext,
    ) -> Geo:
        value = value.strip()
        if not value:
            return Geo()
        if value.lower().startswith(GEO_SCHEME):
            return _parse_geo_uri(value)
        return _parse_pair(value.replace("\\;", ";"))

    def write_json(self, prop: Geo) -> JCardValue:
        return JCardValue.single(_geo_uri(prop))

    def parse_json(
        self,
        value: JCardValue,
        data_type: VCardDataType | None,
        parameters: VCardParameters,
        context: ParseContext,
    ) -> Geo:
        return self.parse_text(value.as_single(), data_type, parameters, context)

    def write_xml(self, prop: Geo, element: XCardElement) -> None:
        element.append(VCardDataType.URI.value, _geo_uri(prop))

    def parse_xml(
        self,
        element: XCardElement,
        parameters: VCardParameters,
        context: ParseContext,
    ) -> Geo:
        if (value := element.first(VCardDataType.URI.value)) is None:
            raise MissingXmlElementsError(VCardDataType.URI.value)
        return self.parse_text(value, None, parameters, context)

    def parse_html(self, element: HCardElement, context: ParseContext) -> Geo:
        latitude = element.first_value("latitude")
        longitude = element.first_value("longitude")
        if latitude is None and longitude is None:
            return self.parse_text(element.value(), None, VCardParameters(), context)
        try:
            return Geo(
                latitude=float(latitude) if latitude else None,
                longitude=float(longitude) if longitude else None,
            )
        except ValueError as err:
            raise CannotParseError(
                "Unable to parse latitude or longitude", detailed_error=str(err)
            ) from err

    def validate(self, prop: Geo, version: VCardVersion, vcard: VCard | None) -> list[str]:
        warnings = []
        if prop.latitude is None:
            warnings.append("Latitude is missing.")
        elif not -90 <= prop.latitude <= 90:
            warnings.append("Latitude must be between -90 and 90.")
        if prop.longitude is None:
            warnings.append("Longitude is missing.")
        elif not -180 <= prop.longitude <= 180:
            warnings.append("Longitude must be between -180 and 180.")
        return warnings
