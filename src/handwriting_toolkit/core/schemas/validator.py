"""
Schema Validation Utilities

Validates persisted style records before they are turned into models.

Stored records come from disk and may be hand-edited or written by an older
version, so the store validates before deserializing and fails fast on any
violation instead of rendering with a half-valid style.
"""

from __future__ import annotations

from numbers import Real
from typing import Any


# Schema version constants
STYLE_STORE_SCHEMA_VERSION = 1

STYLE_NUMERIC_FIELDS = (
    "size",
    "line_height",
    "word_spacing",
    "letter_spacing",
    "perturbation",
    "rotation",
    "slant",
    "baseline_shift",
)
NON_NEGATIVE_FIELDS = ("perturbation", "rotation")


class ValidationError(Exception):
    """Raised when data fails schema validation."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []


def validate_style(data: dict[str, Any], *, path: str = "style") -> None:
    """
    Validate a serialized HandwritingStyle.

    Args:
        data: Style dictionary
        path: Location of the style within the enclosing record (for messages)

    Raises:
        ValidationError: If any field has the wrong type or range
    """
    if not isinstance(data, dict):
        raise ValidationError(f"{path} must be an object", path=path)

    errors: list[str] = []
    for name in STYLE_NUMERIC_FIELDS:
        if name not in data:
            continue
        value = data[name]
        if isinstance(value, bool) or not isinstance(value, Real):
            errors.append(f"{path}.{name}: expected number, got {type(value).__name__}")
            continue
        if name in NON_NEGATIVE_FIELDS and value < 0:
            errors.append(f"{path}.{name}: must be >= 0")

    size = data.get("size")
    if isinstance(size, Real) and not isinstance(size, bool) and size <= 0:
        errors.append(f"{path}.size: must be > 0")

    for name in ("font", "color"):
        if name in data and not isinstance(data[name], str):
            errors.append(f"{path}.{name}: expected string")

    if errors:
        raise ValidationError(f"Invalid style: {errors[0]}", path=path, errors=errors)


def validate_style_record(data: dict[str, Any]) -> None:
    """
    Validate a stored StyleProfile record.

    Args:
        data: Profile dictionary as stored

    Raises:
        ValidationError: If data is invalid
    """
    if not isinstance(data, dict):
        raise ValidationError("Style record must be an object")

    missing = [f for f in ("id", "style") if f not in data]
    if missing:
        raise ValidationError(
            f"Missing required fields: {missing}",
            path="",
            errors=[f"Missing field: {f}" for f in missing],
        )

    record_id = data["id"]
    if not isinstance(record_id, str) or not record_id:
        raise ValidationError(f"Invalid id: {record_id!r}", path="id")

    messiness = data.get("messiness_score", 0.1)
    if not isinstance(messiness, Real) or not 0.0 <= messiness <= 1.0:
        raise ValidationError(
            f"Invalid messiness_score: {messiness!r} (must be within [0, 1])",
            path="messiness_score",
        )

    validate_style(data["style"])


def validate_store_document(data: dict[str, Any]) -> None:
    """
    Validate the top-level style store document.

    Raises:
        ValidationError: If the version is unsupported or profiles is malformed
    """
    version = data.get("schema_version")
    if version != STYLE_STORE_SCHEMA_VERSION:
        raise ValidationError(
            f"Unsupported style store schema version: {version} (expected {STYLE_STORE_SCHEMA_VERSION})",
            path="schema_version",
        )
    if not isinstance(data.get("profiles"), dict):
        raise ValidationError("profiles must be an object keyed by id", path="profiles")
