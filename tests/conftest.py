"""Test fixtures."""

from collections.abc import Generator
from unittest.mock import patch

import pytest

PRODID = "-//example//1.2.3"


@pytest.fixture(autouse=True)
def mock_prodid() -> Generator[None, None, None]:
    """Mock out the prodid used in tests."""
    with patch("vcard.io.base.prodid_factory", return_value=PRODID):
        yield
