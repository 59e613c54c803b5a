"""Compatibility layer for inline binary data with malformed base64."""

from collections.abc import Generator
import contextlib
import contextvars


_lenient_base64 = contextvars.ContextVar("lenient_base64", default=False)


@contextlib.contextmanager
def enable_lenient_base64() -> Generator[None]:
    """Context manager to tolerate whitespace and missing padding in base64 data."""
    token = _lenient_base64.set(True)
    try:
        yield
    finally:
        _lenient_base64.reset(token)


def is_lenient_base64_enabled() -> bool:
    """Check if lenient base64 decoding is enabled."""
    return _lenient_base64.get()
