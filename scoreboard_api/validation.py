"""Declarative validation of dataclass instances."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from numbers import Number

RULE_KEY = "validate"
"""Key under which a FieldRule is stored in a dataclass field's metadata."""


@dataclass(frozen=True)
class FieldRule:
    """Constraints checked for one dataclass field.

    ``min`` and ``max`` bound the length of strings and collections and the
    value of numbers.
    """

    required: bool = False
    min: int | None = None
    max: int | None = None

    def _failure(self, value: object) -> str | None:
        if self.required and _is_zero(value):
            return "required"
        if value is None:
            return None
        size = _measure(value)
        if size is None:
            return None
        if self.min is not None and size < self.min:
            return "min"
        if self.max is not None and size > self.max:
            return "max"
        return None


class ValidationError(ValueError):
    """Raised when one or more fields break their rules."""

    def __init__(self, struct_name: str, failures: list[tuple[str, str]]) -> None:
        self.struct_name = struct_name
        self.failures = failures
        lines = [
            f"Key: '{struct_name}.{path}' Error:Field validation for "
            f"'{path.rsplit('.', 1)[-1]}' failed on the '{tag}' tag"
            for path, tag in failures
        ]
        super().__init__("\n".join(lines))


def _is_zero(value: object) -> bool:
    if value is None:
        return True
    if isinstance(value, (str, bytes, bool, int, float)):
        return not value
    return False


def _measure(value: object) -> float | None:
    if isinstance(value, Number) and not isinstance(value, complex):
        return value  # type: ignore[return-value]
    try:
        return len(value)  # type: ignore[arg-type]
    except TypeError:
        return None


def _is_instance(obj: object) -> bool:
    return dataclasses.is_dataclass(obj) and not isinstance(obj, type)


def _collect(obj: object, prefix: str) -> list[tuple[str, str]]:
    failures: list[tuple[str, str]] = []
    for field in dataclasses.fields(obj):
        value = getattr(obj, field.name)
        path = f"{prefix}{field.name}"
        rule = field.metadata.get(RULE_KEY)
        if isinstance(rule, FieldRule):
            tag = rule._failure(value)
            if tag is not None:
                failures.append((path, tag))
                continue
        if _is_instance(value):
            failures.extend(_collect(value, f"{path}."))
    return failures


def validate_struct(obj: object) -> object:
    """Check every field rule of a dataclass instance.

    Returns the instance unchanged when it is valid and raises
    ValidationError listing every failing field otherwise.
    """
    if not _is_instance(obj):
        raise TypeError(f"validate_struct expects a dataclass instance, got {type(obj).__name__}")
    failures = _collect(obj, "")
    if failures:
        raise ValidationError(type(obj).__name__, failures)
    return obj