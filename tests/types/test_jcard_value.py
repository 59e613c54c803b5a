"""Tests for jCard property values."""

from vcard.types import JCardValue


def test_single() -> None:
    """Test a value with a single JSON value."""
    value = JCardValue.single("John Doe")
    assert value.values == ["John Doe"]
    assert value.as_single() == "John Doe"
    assert value.as_multi() == ["John Doe"]


def test_as_single_conversions() -> None:
    """Test reading non-string JSON values as a single string."""
    assert JCardValue().as_single() == ""
    assert JCardValue.single(None).as_single() == ""
    assert JCardValue.single(True).as_single() == "true"
    assert JCardValue.single(1.5).as_single() == "1.5"
    assert JCardValue(values=[[["nested"]]]).as_single() == "nested"
    assert JCardValue(values=[[]]).as_single() == ""


def test_multi() -> None:
    """Test a value with multiple JSON values."""
    value = JCardValue.multi(["home", "work"])
    assert value.values == ["home", "work"]
    assert JCardValue(values=[["a", "b"], "c", None]).as_multi() == ["a", "b", "c"]


def test_structured() -> None:
    """Test a structured value, where single and empty components are flattened."""
    value = JCardValue.structured([["Doe"], ["John"], ["Paul", "Ringo"], [], None])
    assert value.values == [["Doe", "John", ["Paul", "Ringo"], "", ""]]
    assert value.as_structured() == [["Doe"], ["John"], ["Paul", "Ringo"], [], []]


def test_structured_from_flat_values() -> None:
    """Test reading a structured value that was not nested in an array."""
    value = JCardValue(values=["Doe", "John", ""])
    assert value.as_structured() == [["Doe"], ["John"], []]
    assert JCardValue().as_structured() == []
