"""Tests for UTC-OFFSET values."""

import datetime

import pytest

from vcard.types import UtcOffset


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("-0500", UtcOffset(hour=-5)),
        ("-05:00", UtcOffset(hour=-5)),
        ("+0530", UtcOffset(hour=5, minute=30)),
        ("0100", UtcOffset(hour=1)),
        (" +12:45 ", UtcOffset(hour=12, minute=45)),
        ("-5", UtcOffset(hour=-5)),
        ("-0030", UtcOffset(hour=0, minute=30, negative=True)),
        ("-00:30", UtcOffset(hour=0, minute=30, negative=True)),
    ],
)
def test_parse(value: str, expected: UtcOffset) -> None:
    """Test parsing basic and extended formats."""
    assert UtcOffset.parse(value) == expected


@pytest.mark.parametrize("value", ["", "abc", "-05:0", "+123:00", "05-00"])
def test_parse_invalid(value: str) -> None:
    """Test values that are not UTC offsets."""
    with pytest.raises(ValueError, match="UTC-OFFSET"):
        UtcOffset.parse(value)


def test_format() -> None:
    """Test serializing in basic and extended formats."""
    offset = UtcOffset(hour=-5, minute=30)
    assert offset.format() == "-0530"
    assert offset.format(extended=True) == "-05:30"
    assert str(offset) == "-0530"
    assert UtcOffset(hour=0).format(extended=True) == "+00:00"
    assert UtcOffset(hour=10).format() == "+1000"


def test_timedelta() -> None:
    """Test conversion to and from a time delta."""
    offset = UtcOffset.from_timedelta(datetime.timedelta(hours=-5, minutes=-30))
    assert offset == UtcOffset(hour=-5, minute=30)
    assert offset.to_timedelta() == datetime.timedelta(hours=-5, minutes=-30)

    offset = UtcOffset.from_timedelta(datetime.timedelta(hours=9, seconds=10))
    assert offset == UtcOffset(hour=9)
    assert offset.to_timedelta() == datetime.timedelta(hours=9)


@pytest.mark.parametrize(
    ("value", "basic", "extended", "delta"),
    [
        ("-0030", "-0030", "-00:30", datetime.timedelta(minutes=-30)),
        ("-00:45", "-0045", "-00:45", datetime.timedelta(minutes=-45)),
        ("+0030", "+0030", "+00:30", datetime.timedelta(minutes=30)),
        ("-0000", "-0000", "-00:00", datetime.timedelta(0)),
    ],
)
def test_offset_under_one_hour(
    value: str, basic: str, extended: str, delta: datetime.timedelta
) -> None:
    """Test the sign of an offset of less than an hour is kept."""
    offset = UtcOffset.parse(value)
    assert offset.format() == basic
    assert offset.format(extended=True) == extended
    assert offset.to_timedelta() == delta
    if delta:
        assert UtcOffset.from_timedelta(delta) == offset


def test_negative_hour() -> None:
    """Test the sign may be given by the hour or by the negative flag."""
    assert UtcOffset(hour=-5, minute=30) == UtcOffset(hour=5, minute=30, negative=True)
    assert UtcOffset(hour=-5).negative
    assert not UtcOffset(hour=5).negative
