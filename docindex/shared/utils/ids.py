"""Identifier generation for stored documents."""

from cuid2 import cuid_wrapper

_cuid = cuid_wrapper()


def generate_document_id() -> str:
    """Return a new CUID2 used as document primary key and storage prefix."""
    value = _cuid()
    if not isinstance(value, str):
        raise TypeError(f"Expected str from cuid generator, got {type(value).__name__}")
    return value
