"""Tests for escaping TEXT values."""

import pytest

from vcard.types import VCardVersion
from vcard.types.text import escape, join_structured, split_structured, unescape


@pytest.mark.parametrize(
    ("version", "expected"),
    [
        (VCardVersion.V2_1, "a,b\\;c\\\\d\\ne"),
        (VCardVersion.V3_0, "a\\,b\\;c\\\\d\\ne"),
        (VCardVersion.V4_0, "a\\,b\\;c\\\\d\\ne"),
    ],
)
def test_escape(version: VCardVersion, expected: str) -> None:
    """Test escaping special characters by version."""
    assert escape("a,b;c\\d\ne", version) == expected


def test_escape_line_endings() -> None:
    """Test that every style of line ending becomes a single escape."""
    assert escape("one\r\ntwo\rthree\nfour") == "one\\ntwo\\nthree\\nfour"


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("plain", "plain"),
        ("a\\,b\\;c", "a,b;c"),
        ("one\\ntwo\\Nthree", "one\ntwo\nthree"),
        ("back\\\\slash", "back\\slash"),
        ("unknown\\x", "unknown\\x"),
        ("trailing\\", "trailing\\"),
    ],
)
def test_unescape(value: str, expected: str) -> None:
    """Test resolving escape sequences."""
    assert unescape(value) == expected


def test_split_structured() -> None:
    """Test splitting a structured value into components."""
    assert split_structured("Doe;John;Paul,Ringo;;") == [
        ["Doe"],
        ["John"],
        ["Paul", "Ringo"],
        [],
        [],
    ]


def test_split_structured_escaped_delimiters() -> None:
    """Test that escaped delimiters do not split the value."""
    assert split_structured("a\\;b;c\\,d") == [["a;b"], ["c,d"]]


def test_join_structured() -> None:
    """Test joining components into a structured value."""
    components = [["O;Brien"], ["John"], [], ["Dr."], ["Jr.", "Esq."]]
    value = join_structured(components)
    assert value == "O\\;Brien;John;;Dr.;Jr.,Esq."
    assert split_structured(value) == components
