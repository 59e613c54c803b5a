"""Compatibility layer for timezone values that do not match their version."""

from collections.abc import Generator
import contextlib
import contextvars


_lenient_legacy_timezones = contextvars.ContextVar(
    "lenient_legacy_timezones", default=False
)
_timezone_id_offsets = contextvars.ContextVar("timezone_id_offsets", default=False)


@contextlib.contextmanager
def enable_lenient_legacy_timezones() -> Generator[None]:
    """Context manager to read version 2.1 TZ values that are not UTC offsets as text."""
    token = _lenient_legacy_timezones.set(True)
    try:
        yield
    finally:
        _lenient_legacy_timezones.reset(token)


def is_lenient_legacy_timezones_enabled() -> bool:
    """Check if lenient version 2.1 timezones are enabled."""
    return _lenient_legacy_timezones.get()


@contextlib.contextmanager
def enable_timezone_id_offsets() -> Generator[None]:
    """Context manager to write the current offset of a timezone identifier in 2.1."""
    token = _timezone_id_offsets.set(True)
    try:
        yield
    finally:
        _timezone_id_offsets.reset(token)


def is_timezone_id_offsets_enabled() -> bool:
    """Check if resolving timezone identifiers to offsets is enabled."""
    return _timezone_id_offsets.get()
