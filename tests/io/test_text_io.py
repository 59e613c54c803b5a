"""Tests for reading and writing plain text vCards."""

import io
import pathlib
from typing import Optional

import pytest

from vcard import VCard
from vcard.exceptions import TranscoderNotFoundError, VCardParseError
from vcard.io.text import VCardTextReader, VCardTextWriter
from vcard.property import (
    Agent,
    Email,
    FormattedName,
    Geo,
    Mailer,
    Note,
    ProductId,
    RawProperty,
    StructuredName,
    Telephone,
    Timezone,
)
from vcard.property.base import VCardProperty
from vcard.types import UtcOffset, VCardVersion

PRODID = "-//example//1.2.3"


class Nickname(VCardProperty):
    """A property that has no transcoder."""

    value: Optional[str] = None


def _work_email() -> Email:
    prop = Email(value="john@example.com")
    prop.add_type("work")
    return prop


def _write(vcard: VCard, version: VCardVersion | None = None, **kwargs) -> str:
    stream = io.StringIO()
    with VCardTextWriter(stream, version, **kwargs) as writer:
        writer.write(vcard)
    return stream.getvalue()


def _read(content: str) -> VCard:
    vcard = VCardTextReader(content).read_next()
    assert vcard is not None
    return vcard


@pytest.fixture(name="vcard")
def mock_vcard() -> VCard:
    """Fixture for a vCard with common properties."""
    return VCard(
        properties=[
            FormattedName(value="John Doe"),
            StructuredName(family="Doe", given="John"),
            _work_email(),
            Note(value="Line one\nLine two"),
        ]
    )


def test_write_3_0(vcard: VCard) -> None:
    """Test writing a version 3.0 vCard."""
    assert _write(vcard) == (
        "BEGIN:VCARD\r\n"
        "VERSION:3.0\r\n"
        "FN:John Doe\r\n"
        "N:Doe;John;;;\r\n"
        "EMAIL;TYPE=work:john@example.com\r\n"
        "NOTE:Line one\\nLine two\r\n"
        f"PRODID:{PRODID}\r\n"
        "END:VCARD\r\n"
    )


def test_write_2_1(vcard: VCard) -> None:
    """Test writing a version 2.1 vCard with a legacy product identifier."""
    vcard.add(Timezone(offset=UtcOffset(hour=-5)))
    assert _write(vcard, VCardVersion.V2_1) == (
        "BEGIN:VCARD\r\n"
        "VERSION:2.1\r\n"
        "FN:John Doe\r\n"
        "N:Doe;John;;;\r\n"
        "EMAIL;work:john@example.com\r\n"
        "NOTE:Line one\\nLine two\r\n"
        "TZ:-0500\r\n"
        f"X-PRODID:{PRODID}\r\n"
        "END:VCARD\r\n"
    )


def test_write_4_0() -> None:
    """Test writing a version 4.0 vCard with derived VALUE parameters."""
    vcard = VCard(
        properties=[
            FormattedName(value="John Doe"),
            Timezone(text="America/New_York"),
            Telephone(value="tel:+1-555-555-1234"),
        ],
        version=VCardVersion.V4_0,
    )
    assert _write(vcard) == (
        "BEGIN:VCARD\r\n"
        "VERSION:4.0\r\n"
        "FN:John Doe\r\n"
        "TZ:America/New_York\r\n"
        "TEL;VALUE=uri:tel:+1-555-555-1234\r\n"
        f"PRODID:{PRODID}\r\n"
        "END:VCARD\r\n"
    )


def test_write_group_and_pref() -> None:
    """Test groups and the most preferred property in version 3.0."""
    first = Email(value="a@example.com", group="item1")
    first.parameters.pref = 2
    second = Email(value="b@example.com")
    second.parameters.pref = 1
    vcard = VCard(properties=[first, second])
    assert _write(vcard, add_prodid=False) == (
        "BEGIN:VCARD\r\n"
        "VERSION:3.0\r\n"
        "item1.EMAIL:a@example.com\r\n"
        "EMAIL;TYPE=pref:b@example.com\r\n"
        "END:VCARD\r\n"
    )


def test_product_id_replaced() -> None:
    """Test an existing product identifier is replaced unless disabled."""
    vcard = VCard(properties=[ProductId(value="-//Other//EN")])
    assert "PRODID:-//Other//EN" not in _write(vcard)
    assert f"PRODID:{PRODID}" in _write(vcard)
    assert "PRODID:-//Other//EN\r\n" in _write(vcard, add_prodid=False)


def test_version_strict() -> None:
    """Test properties that do not exist in the target version."""
    vcard = VCard(properties=[Mailer(value="Outlook")], version=VCardVersion.V4_0)
    assert "MAILER" not in _write(vcard, add_prodid=False)
    assert "MAILER:Outlook\r\n" in _write(vcard, add_prodid=False, version_strict=False)


def test_missing_transcoder() -> None:
    """Test that nothing is written when a property has no transcoder."""
    vcard = VCard(properties=[FormattedName(value="John"), Nickname(value="Johnny")])
    stream = io.StringIO()
    writer = VCardTextWriter(stream)
    with pytest.raises(TranscoderNotFoundError):
        writer.write(vcard)
    assert stream.getvalue() == ""


def test_fold_lines() -> None:
    """Test long contentlines are folded unless disabled."""
    vcard = VCard(properties=[Note(value="x" * 100)])
    lines = _write(vcard, add_prodid=False).split("\r\n")
    assert lines[2] == "NOTE:" + "x" * 70
    assert lines[3] == " " + "x" * 30

    lines = _write(vcard, add_prodid=False, fold_lines=False).split("\r\n")
    assert lines[2] == "NOTE:" + "x" * 100


def test_write_path(tmp_path: pathlib.Path) -> None:
    """Test writing to a file that the writer opens and closes."""
    path = tmp_path / "contact.vcf"
    with VCardTextWriter(path, add_prodid=False) as writer:
        writer.write(VCard(properties=[FormattedName(value="John Doe")]))
        writer.write(VCard(properties=[FormattedName(value="Jane Doe")]))
    assert path.read_bytes() == (
        b"BEGIN:VCARD\r\nVERSION:3.0\r\nFN:John Doe\r\nEND:VCARD\r\n"
        b"BEGIN:VCARD\r\nVERSION:3.0\r\nFN:Jane Doe\r\nEND:VCARD\r\n"
    )


@pytest.mark.parametrize(
    ("version", "expected"),
    [
        (
            VCardVersion.V2_1,
            "BEGIN:VCARD\r\n"
            "VERSION:2.1\r\n"
            "FN:John Doe\r\n"
            "AGENT:\r\n"
            "BEGIN:VCARD\r\n"
            "VERSION:2.1\r\n"
            "FN:Jane Doe\r\n"
            "END:VCARD\r\n"
            "END:VCARD\r\n",
        ),
        (
            VCardVersion.V3_0,
            "BEGIN:VCARD\r\n"
            "VERSION:3.0\r\n"
            "FN:John Doe\r\n"
            "AGENT:BEGIN:VCARD\\nVERSION:3.0\\nFN:Jane Doe\\nEND:VCARD\\n\r\n"
            "END:VCARD\r\n",
        ),
        (
            VCardVersion.V4_0,
            "BEGIN:VCARD\r\n"
            "VERSION:4.0\r\n"
            "FN:John Doe\r\n"
            "END:VCARD\r\n",
        ),
    ],
)
def test_agent_round_trip(version: VCardVersion, expected: str) -> None:
    """Test an embedded agent vCard in each version."""
    nested = VCard(properties=[FormattedName(value="Jane Doe")], version=version)
    vcard = VCard(
        properties=[FormattedName(value="John Doe"), Agent(vcard=nested)],
        version=version,
    )
    content = _write(vcard, add_prodid=False, version_strict=False)
    assert content == expected

    result = _read(content)
    agents = result.get_properties(Agent)
    if version is VCardVersion.V4_0:
        assert agents == []
        return
    assert len(agents) == 1
    assert agents[0].vcard == nested


def test_round_trip(vcard: VCard) -> None:
    """Test a vCard is unchanged after writing and reading it."""
    vcard.add(Timezone(offset=UtcOffset(hour=-5)))
    vcard.add(Geo(latitude=37.386013, longitude=-122.082932))
    assert _read(_write(vcard, add_prodid=False)) == vcard


def test_read() -> None:
    """Test reading properties, groups and parameters."""
    reader = VCardTextReader(
        "BEGIN:VCARD\r\n"
        "VERSION:3.0\r\n"
        "FN:John Doe\r\n"
        "N:Doe;John;;;\r\n"
        "item1.EMAIL;TYPE=work:john@example.com\r\n"
        "X-CUSTOM;X-PARAM=1:custom value\r\n"
        "GEO:37.386013;-122.082932\r\n"
        "END:VCARD\r\n"
    )
    vcard = reader.read_next()
    assert vcard is not None
    assert vcard.version is VCardVersion.V3_0
    assert reader.warnings == []
    assert [type(prop) for prop in vcard] == [
        FormattedName,
        StructuredName,
        Email,
        RawProperty,
        Geo,
    ]
    assert vcard.get_property(FormattedName).value == "John Doe"
    assert vcard.get_property(StructuredName) == StructuredName(family="Doe", given="John")

    email = vcard.get_property(Email)
    assert email.group == "item1"
    assert email.types == ["work"]

    (custom,) = vcard.get_raw_properties("x-custom")
    assert custom.name == "X-CUSTOM"
    assert custom.value == "custom value"
    assert custom.parameters.get("X-PARAM") == "1"

    assert vcard.get_property(Geo) == Geo(latitude=37.386013, longitude=-122.082932)
    assert reader.read_next() is None


def test_read_2_1() -> None:
    """Test version 2.1 quoted-printable values and nameless parameters."""
    vcard = _read(
        "BEGIN:VCARD\r\n"
        "N:Doe;John\r\n"
        "TEL;HOME;VOICE:+1-555-555-1234\r\n"
        "NOTE;ENCODING=QUOTED-PRINTABLE;CHARSET=UTF-8:caf=C3=A9 =\r\n"
        "au lait\r\n"
        "END:VCARD\r\n"
    )
    assert vcard.version is VCardVersion.V2_1
    assert vcard.get_property(StructuredName) == StructuredName(family="Doe", given="John")
    assert vcard.get_property(Telephone).types == ["HOME", "VOICE"]
    note = vcard.get_property(Note)
    assert note.value == "café au lait"
    assert not note.parameters


def test_read_value_parameter() -> None:
    """Test the VALUE parameter is consumed when reading."""
    vcard = _read(
        "BEGIN:VCARD\r\n"
        "VERSION:4.0\r\n"
        "TZ;VALUE=text:America/New_York\r\n"
        "TEL;VALUE=uri:tel:+1-555-555-1234\r\n"
        "NOTE;X-LABEL=say ^'hi^':Hello\r\n"
        "END:VCARD\r\n"
    )
    timezone = vcard.get_property(Timezone)
    assert timezone == Timezone(text="America/New_York")
    assert "VALUE" not in timezone.parameters
    telephone = vcard.get_property(Telephone)
    assert telephone.value == "tel:+1-555-555-1234"
    assert not telephone.parameters
    assert vcard.get_property(Note).parameters.get("X-LABEL") == 'say "hi"'


def test_read_warnings() -> None:
    """Test malformed properties are skipped with a warning for each vCard."""
    reader = VCardTextReader(
        "BEGIN:VCARD\r\n"
        "VERSION:3.0\r\n"
        "GEO:not-a-geo\r\n"
        "BADLINE\r\n"
        "FN:John Doe\r\n"
        "END:VCARD\r\n"
        "BEGIN:VCARD\r\n"
        "VERSION:3.0\r\n"
        "FN:Jane Doe\r\n"
        "END:VCARD\r\n"
    )
    vcard = reader.read_next()
    assert vcard is not None
    assert vcard.get_property(Geo) is None
    assert len(vcard) == 1
    assert len(reader.warnings) == 2
    assert "BADLINE" in reader.warnings[0]
    assert reader.warnings[1] == (
        'Property "GEO" could not be parsed and was skipped: '
        "Value was not valid geo lat;long: not-a-geo"
    )

    vcard = reader.read_next()
    assert vcard is not None
    assert reader.warnings == []


def test_read_all(tmp_path: pathlib.Path) -> None:
    """Test reading every vCard of a file."""
    path = tmp_path / "contacts.vcf"
    path.write_text(
        "BEGIN:VCARD\nVERSION:3.0\nFN:John Doe\nEND:VCARD\n"
        "BEGIN:VCARD\nVERSION:4.0\nFN:Jane Doe\nEND:VCARD\n",
        encoding="utf-8",
    )
    vcards = VCardTextReader(path).read_all()
    assert [vcard.get_property(FormattedName).value for vcard in vcards] == [
        "John Doe",
        "Jane Doe",
    ]
    assert [vcard.version for vcard in vcards] == [VCardVersion.V3_0, VCardVersion.V4_0]

    stream = io.StringIO(path.read_text(encoding="utf-8"))
    assert len(list(VCardTextReader(stream))) == 2


def test_read_agent_warnings() -> None:
    """Test warnings of an embedded agent vCard are prefixed."""
    reader = VCardTextReader(
        "BEGIN:VCARD\r\n"
        "VERSION:3.0\r\n"
        "AGENT:BEGIN:VCARD\\nVERSION:3.0\\nGEO:bad\\nEND:VCARD\\n\r\n"
        "END:VCARD\r\n"
    )
    vcard = reader.read_next()
    assert vcard is not None
    assert vcard.get_property(Agent).vcard is not None
    assert reader.warnings == [
        'Problem with agent vCard: Property "GEO" could not be parsed and was '
        "skipped: Value was not valid geo lat;long: bad"
    ]


@pytest.mark.parametrize(
    "content",
    [
        "BEGIN:VCARD\r\nFN:John Doe\r\n",
        "FN:John Doe\r\nEND:VCARD\r\n",
    ],
)
def test_read_unbalanced(content: str) -> None:
    """Test content that cannot be read at all."""
    with pytest.raises(VCardParseError):
        VCardTextReader(content)
