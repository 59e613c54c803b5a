"""Compatibility layer for vCards exported by Microsoft Outlook.

This module provides a context manager that can allow invalid vCard files
to be parsed.
"""

import contextlib
from collections.abc import Generator
import logging
import re

from . import binary_compat, timezone_compat


_LOGGER = logging.getLogger(__name__)

# Capture group that extracts the PRODID from the vcf content.
_PRODID_RE = re.compile(r"^(?:X-)?PRODID:(?P<prodid>[^\r\n]+)", re.MULTILINE | re.IGNORECASE)

_OUTLOOK_PRODID = "Microsoft"


def _get_prodid(vcf: str) -> str | None:
    """Extract the PRODID from the vCard content."""
    match = _PRODID_RE.search(vcf)
    if match:
        _LOGGER.debug("Extracted PRODID: %s", match)
        return match.group("prodid")
    return None


@contextlib.contextmanager
def enable_compat_mode(vcf: str) -> Generator[str]:
    """Enable compatibility mode to fix known broken vCard content."""

    prodid = _get_prodid(vcf)
    if prodid and _OUTLOOK_PRODID in prodid:
        _LOGGER.debug("Enabling compatibility mode for Microsoft Outlook")
        with (
            timezone_compat.enable_lenient_legacy_timezones(),
            binary_compat.enable_lenient_base64(),
        ):
            yield vcf
    else:
        _LOGGER.debug("No compatibility mode needed")
        yield vcf
