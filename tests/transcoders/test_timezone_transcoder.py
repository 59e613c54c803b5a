"""Tests for the TZ property."""

from xml.etree import ElementTree

from freezegun import freeze_time
from lxml import html
import pytest

from vcard.compat import timezone_compat
from vcard.exceptions import CannotParseError, MissingXmlElementsError
from vcard.parameters import VCardParameters
from vcard.parsing.hcard_element import HCardElement
from vcard.parsing.xcard_element import XCARD_QNP, XCardElement
from vcard.property import Timezone
from vcard.transcoders import ParseContext
from vcard.transcoders.timezone import TimezoneTranscoder
from vcard.types import JCardValue, UtcOffset, VCardDataType, VCardVersion

TRANSCODER = TimezoneTranscoder()
OFFSET = UtcOffset(hour=-5)
TEXT = "America/New_York"


@pytest.mark.parametrize(
    ("prop", "version", "expected_value", "expected_data_type"),
    [
        (Timezone(offset=OFFSET), VCardVersion.V2_1, "-0500", None),
        (Timezone(offset=OFFSET), VCardVersion.V3_0, "-05:00", None),
        (
            Timezone(offset=OFFSET),
            VCardVersion.V4_0,
            "-0500",
            VCardDataType.UTC_OFFSET,
        ),
        (Timezone(text=TEXT), VCardVersion.V2_1, "", None),
        (Timezone(text=TEXT), VCardVersion.V3_0, TEXT, VCardDataType.TEXT),
        (Timezone(text=TEXT), VCardVersion.V4_0, TEXT, None),
        (Timezone(text=TEXT, offset=OFFSET), VCardVersion.V2_1, "-0500", None),
        (Timezone(text=TEXT, offset=OFFSET), VCardVersion.V3_0, "-05:00", None),
        (Timezone(text=TEXT, offset=OFFSET), VCardVersion.V4_0, TEXT, None),
        (Timezone(), VCardVersion.V3_0, "", None),
    ],
)
def test_write_text(
    prop: Timezone,
    version: VCardVersion,
    expected_value: str,
    expected_data_type: VCardDataType | None,
) -> None:
    """Test the value and VALUE parameter written in each version."""
    assert TRANSCODER.write_text(prop, version) == expected_value
    assert TRANSCODER.prepare_parameters(prop, version, None).value is expected_data_type


@pytest.mark.parametrize(
    ("value", "version", "data_type", "expected", "warnings"),
    [
        ("-0500", VCardVersion.V2_1, None, Timezone(offset=OFFSET), 0),
        ("-05:00", VCardVersion.V3_0, None, Timezone(offset=OFFSET), 0),
        ("-05:00", VCardVersion.V3_0, VCardDataType.UTC_OFFSET, Timezone(offset=OFFSET), 0),
        (TEXT, VCardVersion.V3_0, VCardDataType.TEXT, Timezone(text=TEXT), 0),
        (TEXT, VCardVersion.V3_0, None, Timezone(text=TEXT), 1),
        (TEXT, VCardVersion.V3_0, VCardDataType.UTC_OFFSET, Timezone(text=TEXT), 1),
        ("-0500", VCardVersion.V4_0, None, Timezone(offset=OFFSET), 0),
        ("-0500", VCardVersion.V4_0, VCardDataType.UTC_OFFSET, Timezone(offset=OFFSET), 0),
        (TEXT, VCardVersion.V4_0, None, Timezone(text=TEXT), 0),
        (TEXT, VCardVersion.V4_0, VCardDataType.TEXT, Timezone(text=TEXT), 0),
        ("", VCardVersion.V4_0, None, Timezone(), 0),
    ],
)
def test_parse_text(
    value: str,
    version: VCardVersion,
    data_type: VCardDataType | None,
    expected: Timezone,
    warnings: int,
) -> None:
    """Test how a value is interpreted in each version."""
    context = ParseContext(version=version)
    prop = TRANSCODER.parse_text(value, data_type, VCardParameters(), context)
    assert prop == expected
    assert len(context.warnings) == warnings


def test_parse_text_warning_message() -> None:
    """Test the warning when text is found where an offset is expected."""
    context = ParseContext(version=VCardVersion.V3_0)
    TRANSCODER.parse_text(TEXT, None, VCardParameters(), context)
    assert context.warnings == [f"Unable to parse UTC offset. Treating as text: {TEXT}"]


@pytest.mark.parametrize(
    ("value", "version", "data_type"),
    [
        (TEXT, VCardVersion.V2_1, None),
        (TEXT, VCardVersion.V4_0, VCardDataType.UTC_OFFSET),
    ],
)
def test_parse_text_requires_offset(
    value: str, version: VCardVersion, data_type: VCardDataType | None
) -> None:
    """Test versions and data types where only an offset is allowed."""
    with pytest.raises(CannotParseError, match="Unable to parse UTC offset"):
        TRANSCODER.parse_text(
            value, data_type, VCardParameters(), ParseContext(version=version)
        )


def test_lenient_legacy_timezones() -> None:
    """Test reading text in version 2.1 when lenient timezones are enabled."""
    context = ParseContext(version=VCardVersion.V2_1)
    with timezone_compat.enable_lenient_legacy_timezones():
        prop = TRANSCODER.parse_text(TEXT, None, VCardParameters(), context)
    assert prop == Timezone(text=TEXT)
    assert context.warnings == [f"Unable to parse UTC offset. Treating as text: {TEXT}"]


@pytest.mark.parametrize(
    ("frozen_time", "expected"),
    [
        ("2024-01-15 12:00:00", "-0500"),
        ("2024-07-15 12:00:00", "-0400"),
    ],
)
def test_timezone_id_offsets(frozen_time: str, expected: str) -> None:
    """Test writing the current offset of a timezone identifier in version 2.1."""
    prop = Timezone(text=TEXT)
    with freeze_time(frozen_time), timezone_compat.enable_timezone_id_offsets():
        assert TRANSCODER.write_text(prop, VCardVersion.V2_1) == expected
        assert TRANSCODER.validate(prop, VCardVersion.V2_1, None) == []
        # Other versions write the text
        assert TRANSCODER.write_text(prop, VCardVersion.V3_0) == TEXT


def test_json() -> None:
    """Test writing and reading jCard values."""
    assert TRANSCODER.write_json(Timezone(offset=OFFSET)).values == ["-05:00"]
    assert TRANSCODER.write_json(Timezone(text=TEXT)).values == [TEXT]
    assert TRANSCODER.write_json(Timezone()).values == [""]

    context = ParseContext(version=VCardVersion.V4_0)
    params = VCardParameters()
    assert TRANSCODER.parse_json(
        JCardValue.single("-05:00"), VCardDataType.UTC_OFFSET, params, context
    ) == Timezone(offset=OFFSET)
    assert TRANSCODER.parse_json(
        JCardValue.single(TEXT), VCardDataType.TEXT, params, context
    ) == Timezone(text=TEXT)
    assert TRANSCODER.parse_json(
        JCardValue.single(TEXT), None, params, context
    ) == Timezone(text=TEXT)
    with pytest.raises(CannotParseError):
        TRANSCODER.parse_json(
            JCardValue.single(TEXT), VCardDataType.UTC_OFFSET, params, context
        )


def test_xml() -> None:
    """Test writing and reading xCard values."""
    element = XCardElement.create("tz")
    TRANSCODER.write_xml(Timezone(offset=OFFSET), element)
    assert element.first("utc-offset") == "-0500"
    assert element.first("text") is None

    element = XCardElement.create("tz")
    TRANSCODER.write_xml(Timezone(text=TEXT, offset=OFFSET), element)
    assert element.first("text") == TEXT

    context = ParseContext(version=VCardVersion.V4_0)
    element = XCardElement.create("tz")
    ElementTree.SubElement(element.element, XCARD_QNP + "utc-offset").text = "+0100"
    prop = TRANSCODER.parse_xml(element, VCardParameters(), context)
    assert prop == Timezone(offset=UtcOffset(hour=1))

    with pytest.raises(MissingXmlElementsError, match="<text>, <utc-offset>"):
        TRANSCODER.parse_xml(XCardElement.create("tz"), VCardParameters(), context)


@pytest.mark.parametrize(
    ("prop", "version", "expected"),
    [
        (
            Timezone(),
            VCardVersion.V4_0,
            ["Property has no text or offset associated with it."],
        ),
        (
            Timezone(text=TEXT),
            VCardVersion.V2_1,
            ["Property requires a UTC offset for its value in version 2.1."],
        ),
        (Timezone(text=TEXT), VCardVersion.V3_0, []),
        (Timezone(offset=OFFSET), VCardVersion.V2_1, []),
        (
            Timezone(offset=UtcOffset(hour=1, minute=75)),
            VCardVersion.V4_0,
            ["Minute offset must be between 0 and 59."],
        ),
    ],
)
def test_validate(prop: Timezone, version: VCardVersion, expected: list[str]) -> None:
    """Test warnings about timezone values."""
    assert TRANSCODER.validate(prop, version, None) == expected


@freeze_time("2024-01-15 12:00:00")
def test_timezone_helpers() -> None:
    """Test resolving a timezone identifier."""
    prop = Timezone.from_timezone_id(TEXT)
    assert prop.offset == UtcOffset(hour=-5)
    assert prop.text == TEXT
    assert Timezone(text="Not/AZone").resolve_offset() is None
    assert Timezone(offset=UtcOffset(hour=2)).to_tzinfo().utcoffset(None).total_seconds() == 7200
    assert str(Timezone(text=TEXT).to_tzinfo()) == TEXT
    assert Timezone().to_tzinfo() is None


@pytest.mark.parametrize(
    ("markup", "expected", "warnings"),
    [
        ('<abbr class="tz" title="-05:00">EST</abbr>', Timezone(offset=OFFSET), 0),
        (
            r'<span class="tz">Eastern\, Standard\nTime</span>',
            Timezone(text=r"Eastern\, Standard\nTime"),
            1,
        ),
    ],
)
def test_html(markup: str, expected: Timezone, warnings: int) -> None:
    """Test reading hCard values, which are not escaped."""
    context = ParseContext(version=VCardVersion.V3_0)
    prop = TRANSCODER.parse_html(
        HCardElement(html.fragment_fromstring(markup)), context
    )
    assert prop == expected
    assert len(context.warnings) == warnings
