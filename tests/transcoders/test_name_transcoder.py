"""Tests for the N property."""

from lxml import html

from vcard.parameters import VCardParameters
from vcard.parsing.hcard_element import HCardElement
from vcard.parsing.xcard_element import XCardElement
from vcard.property import StructuredName
from vcard.transcoders import ParseContext
from vcard.transcoders.structured_name import StructuredNameTranscoder
from vcard.types import JCardValue, VCardVersion

TRANSCODER = StructuredNameTranscoder()
NAME = StructuredName(
    family="Doe",
    given="John",
    additional=["Paul", "Ringo"],
    prefixes=["Dr."],
    suffixes=["Jr."],
)
CONTEXT = ParseContext(version=VCardVersion.V3_0)


def test_write_text() -> None:
    """Test writing the components of a name."""
    assert TRANSCODER.write_text(NAME, VCardVersion.V3_0) == "Doe;John;Paul,Ringo;Dr.;Jr."
    assert TRANSCODER.write_text(StructuredName(), VCardVersion.V3_0) == ";;;;"
    assert (
        TRANSCODER.write_text(StructuredName(family="O;Brien"), VCardVersion.V4_0)
        == "O\\;Brien;;;;"
    )


def test_parse_text() -> None:
    """Test reading the components of a name."""
    prop = TRANSCODER.parse_text(
        "Doe;John;Paul,Ringo;Dr.;Jr.", None, VCardParameters(), CONTEXT
    )
    assert prop == NAME

    prop = TRANSCODER.parse_text("O\\;Brien;Liam;;;", None, VCardParameters(), CONTEXT)
    assert prop.family == "O;Brien"
    assert prop.given == "Liam"
    assert prop.additional == []


def test_parse_text_missing_components() -> None:
    """Test a value with fewer than five components."""
    prop = TRANSCODER.parse_text("Doe", None, VCardParameters(), CONTEXT)
    assert prop == StructuredName(family="Doe")
    assert not prop.is_empty()
    assert TRANSCODER.parse_text("", None, VCardParameters(), CONTEXT).is_empty()


def test_json() -> None:
    """Test the jCard value is a structured value."""
    assert TRANSCODER.write_json(NAME).values == [
        ["Doe", "John", ["Paul", "Ringo"], "Dr.", "Jr."]
    ]
    assert TRANSCODER.write_json(StructuredName(given="John")).values == [
        ["", "John", "", "", ""]
    ]
    value = JCardValue(values=[["Doe", "John", ["Paul", "Ringo"], "Dr.", "Jr."]])
    assert TRANSCODER.parse_json(value, None, VCardParameters(), CONTEXT) == NAME


def test_xml() -> None:
    """Test the xCard value has an element per component."""
    element = XCardElement.create("n")
    TRANSCODER.write_xml(NAME, element)
    assert element.first("surname") == "Doe"
    assert element.first("given") == "John"
    assert element.all("additional") == ["Paul", "Ringo"]
    assert element.all("prefix") == ["Dr."]
    assert element.all("suffix") == ["Jr."]
    assert TRANSCODER.parse_xml(element, VCardParameters(), CONTEXT) == NAME

    element = XCardElement.create("n")
    TRANSCODER.write_xml(StructuredName(family="Doe"), element)
    assert element.first("given") == ""
    assert TRANSCODER.parse_xml(element, VCardParameters(), CONTEXT) == StructuredName(
        family="Doe"
    )


def test_parse_html() -> None:
    """Test reading the name classes of hCard."""
    element = html.fragment_fromstring(
        '<div class="n">'
        '<span class="honorific-prefix">Dr.</span> '
        '<span class="given-name">John</span> '
        '<span class="additional-name">Paul</span> '
        '<span class="additional-name">Ringo</span> '
        '<span class="family-name">Doe</span> '
        '<span class="honorific-suffix">Jr.</span>'
        "</div>"
    )
    assert TRANSCODER.parse_html(HCardElement(element), CONTEXT) == NAME
