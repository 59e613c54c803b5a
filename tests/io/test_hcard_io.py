"""Tests for reading hCards from html pages."""

import pytest

from vcard import VCard
from vcard.exceptions import VCardParseError
from vcard.io.hcard import HCardReader
from vcard.parameter_values import ImageType
from vcard.property import (
    Agent,
    Email,
    FormattedName,
    Geo,
    Impp,
    Photo,
    StructuredName,
    Telephone,
    Timezone,
    Url,
)
from vcard.types import UtcOffset, VCardVersion

PAGE = """
<html>
  <body>
    <h1>Contacts</h1>
    <div class="vcard">
      <span class="fn">John Doe</span>
      <div class="n">
        <span class="honorific-prefix">Dr.</span>
        <span class="given-name">John</span>
        <span class="family-name">Doe</span>
      </div>
      <a class="email" href="mailto:john@example.com"><span class="type">Work</span> email</a>
      <div class="tel">
        <span class="type">home</span>
        <span class="value">+1-555-555-1234</span>
      </div>
      <img class="photo" src="/images/john.jpg" alt="John" />
      <a class="url" href="/john">Homepage</a>
      <a class="impp" href="aim:goim?screenname=johndoe">Chat</a>
      <span class="geo">
        <span class="latitude">37.386013</span>,
        <span class="longitude">-122.082932</span>
      </span>
      <abbr class="tz" title="-05:00">Eastern</abbr>
      <div class="agent vcard">
        <span class="fn">Jane Doe</span>
      </div>
    </div>
    <div class="vcard">
      <span class="fn">Someone Else</span>
    </div>
  </body>
</html>
"""


def test_read() -> None:
    """Test reading every property of an hCard."""
    reader = HCardReader(PAGE, base_url="http://example.com/contacts/")
    vcard = reader.read_next()
    assert vcard is not None
    assert reader.warnings == []
    assert vcard.version is VCardVersion.V3_0
    assert [type(prop) for prop in vcard] == [
        FormattedName,
        StructuredName,
        Email,
        Telephone,
        Photo,
        Url,
        Impp,
        Geo,
        Timezone,
        Agent,
    ]
    assert vcard.get_property(FormattedName).value == "John Doe"
    assert vcard.get_property(StructuredName) == StructuredName(
        family="Doe", given="John", prefixes=["Dr."]
    )

    email = vcard.get_property(Email)
    assert email.value == "john@example.com"
    assert email.types == ["work"]

    telephone = vcard.get_property(Telephone)
    assert telephone.value == "+1-555-555-1234"
    assert telephone.types == ["home"]

    photo = vcard.get_property(Photo)
    assert photo.url == "http://example.com/images/john.jpg"
    assert photo.content_type == ImageType.JPEG

    assert vcard.get_property(Url).uri == "http://example.com/john"
    assert vcard.get_property(Impp).uri == "aim:johndoe"
    assert vcard.get_property(Geo) == Geo(latitude=37.386013, longitude=-122.082932)
    assert vcard.get_property(Timezone) == Timezone(offset=UtcOffset(hour=-5))

    agent = vcard.get_property(Agent)
    assert agent.url is None
    assert agent.vcard == VCard(properties=[FormattedName(value="Jane Doe")])

    vcard = reader.read_next()
    assert vcard is not None
    assert vcard.properties == [FormattedName(value="Someone Else")]
    assert reader.read_next() is None


def test_relative_links_without_base_url() -> None:
    """Test links are kept as written when there is no page URL."""
    vcard = HCardReader(
        '<div class="vcard"><a class="url" href="/john">Homepage</a></div>'
    ).read_next()
    assert vcard is not None
    assert vcard.get_property(Url).uri == "/john"


def test_read_warnings() -> None:
    """Test a property that cannot be read is skipped with a warning."""
    reader = HCardReader(
        '<div class="vcard">'
        '<span class="fn">John Doe</span>'
        '<span class="geo">somewhere</span>'
        '<div class="agent"><div class="vcard"><span class="geo">nowhere</span></div></div>'
        "</div>"
    )
    vcard = reader.read_next()
    assert vcard is not None
    assert [type(prop) for prop in vcard] == [FormattedName, Agent]
    assert reader.warnings == [
        'Property "geo" could not be parsed and was skipped: '
        "Value was not valid geo lat;long: somewhere",
        'Problem with agent vCard: Property "geo" could not be parsed and was '
        "skipped: Value was not valid geo lat;long: nowhere",
    ]


def test_no_vcards() -> None:
    """Test a page without any hCards."""
    reader = HCardReader("<html><body><p>Nothing here</p></body></html>")
    assert reader.read_all() == []


def test_empty_document() -> None:
    """Test content that cannot be read at all."""
    with pytest.raises(VCardParseError):
        HCardReader("")
