"""Tests for the RELATED property."""

from lxml import html
import pytest

from vcard.exceptions import MissingXmlElementsError
from vcard.parameters import VCardParameters
from vcard.parsing.hcard_element import HCardElement
from vcard.parsing.xcard_element import XCardElement
from vcard.property import Related
from vcard.transcoders import ParseContext
from vcard.transcoders.related import RelatedTranscoder
from vcard.types import JCardValue, VCardDataType, VCardVersion

TRANSCODER = RelatedTranscoder()
CONTEXT = ParseContext(version=VCardVersion.V4_0)


def test_setters() -> None:
    """Test the URI and text are mutually exclusive."""
    prop = Related()
    prop.set_text("Jane")
    prop.set_uri_email("jane@example.com")
    assert prop.uri == "mailto:jane@example.com"
    assert prop.text is None
    prop.set_uri_telephone("+1-555-555-1234")
    assert prop.uri == "tel:+1-555-555-1234"
    prop.set_text("Jane")
    assert prop.uri is None


def test_write_uri() -> None:
    """Test a URI is written without a VALUE parameter."""
    prop = Related(uri="urn:uuid:03a0e51f-d1aa-4385-8a53-e29025acd8af")
    assert TRANSCODER.write_text(prop, VCardVersion.V4_0) == prop.uri
    assert TRANSCODER.prepare_parameters(prop, VCardVersion.V4_0, None).value is None


def test_write_text() -> None:
    """Test text is escaped and written with `VALUE=text`."""
    prop = Related(text="Jane, my sister")
    assert TRANSCODER.write_text(prop, VCardVersion.V4_0) == "Jane\\, my sister"
    params = TRANSCODER.prepare_parameters(prop, VCardVersion.V4_0, None)
    assert params.value is VCardDataType.TEXT


@pytest.mark.parametrize(
    ("value", "data_type", "expected"),
    [
        ("urn:uuid:1234", None, Related(uri="urn:uuid:1234")),
        ("urn:uuid:1234", VCardDataType.URI, Related(uri="urn:uuid:1234")),
        ("Jane\\, my sister", VCardDataType.TEXT, Related(text="Jane, my sister")),
        ("", None, Related()),
    ],
)
def test_parse_text(
    value: str, data_type: VCardDataType | None, expected: Related
) -> None:
    """Test reading a URI or text."""
    assert TRANSCODER.parse_text(value, data_type, VCardParameters(), CONTEXT) == expected


def test_json() -> None:
    """Test jCard values."""
    assert TRANSCODER.write_json(Related(text="Jane, my sister")).values == [
        "Jane, my sister"
    ]
    assert TRANSCODER.parse_json(
        JCardValue.single("Jane"), VCardDataType.TEXT, VCardParameters(), CONTEXT
    ) == Related(text="Jane")
    assert TRANSCODER.parse_json(
        JCardValue.single("urn:uuid:1234"), VCardDataType.URI, VCardParameters(), CONTEXT
    ) == Related(uri="urn:uuid:1234")


def test_xml() -> None:
    """Test xCard values."""
    element = XCardElement.create("related")
    TRANSCODER.write_xml(Related(text="Jane"), element)
    assert element.first("text") == "Jane"
    assert TRANSCODER.parse_xml(element, VCardParameters(), CONTEXT) == Related(text="Jane")

    element = XCardElement.create("related")
    TRANSCODER.write_xml(Related(uri="urn:uuid:1234"), element)
    assert element.first("uri") == "urn:uuid:1234"
    assert TRANSCODER.parse_xml(element, VCardParameters(), CONTEXT) == Related(
        uri="urn:uuid:1234"
    )

    with pytest.raises(MissingXmlElementsError):
        TRANSCODER.parse_xml(XCardElement.create("related"), VCardParameters(), CONTEXT)


def test_parse_html() -> None:
    """Test reading a link or text."""
    element = html.fragment_fromstring(
        '<a class="related" href="http://example.com/jane">Jane</a>'
    )
    assert TRANSCODER.parse_html(HCardElement(element), CONTEXT) == Related(
        uri="http://example.com/jane"
    )
    element = html.fragment_fromstring('<span class="related">Jane</span>')
    assert TRANSCODER.parse_html(HCardElement(element), CONTEXT) == Related(text="Jane")


def test_validate() -> None:
    """Test a property without a value."""
    assert TRANSCODER.validate(Related(), VCardVersion.V4_0, None) == [
        "Property has neither a URI nor a text value associated with it."
    ]
    assert TRANSCODER.validate(Related(text="Jane"), VCardVersion.V4_0, None) == []
