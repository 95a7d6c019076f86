"""Parsing of identifiers taken from request paths."""

from __future__ import annotations

import uuid


class InvalidUUIDError(ValueError):
    """Raised when a value is not a valid UUID."""


def parse_uuid(value: str) -> uuid.UUID:
    """Parse a UUID in any of its common textual forms."""
    if not isinstance(value, str):
        raise InvalidUUIDError(f"failed to parse UUID: expected a string, got {type(value).__name__}")
    try:
        return uuid.UUID(value)
    except ValueError as exc:
        raise InvalidUUIDError(f"failed to parse UUID: {exc}") from exc