"""
Serialization Utilities

Provides to/from JSON utilities for style records.

- Clean separation: ``serialize_*`` and ``deserialize_*`` functions
- All models have ``to_dict()`` and ``from_dict()`` methods
- Validation via schemas before deserialization
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from ..models.style import HandwritingStyle, StyleProfile
from ..schemas.validator import (
    STYLE_STORE_SCHEMA_VERSION,
    ValidationError,
    validate_store_document,
    validate_style,
    validate_style_record,
)


# ─────────────────────────────────────────────────────────────────────────────
# Style Serialization
# ─────────────────────────────────────────────────────────────────────────────

def serialize_style(style: HandwritingStyle) -> dict[str, Any]:
    """Serialize a HandwritingStyle to a dictionary."""
    return style.to_dict()


def deserialize_style(data: dict[str, Any], *, validate: bool = True) -> HandwritingStyle:
    """
    Deserialize a HandwritingStyle from a dictionary.

    Raises:
        ValidationError: If validate=True and data is invalid
    """
    if validate:
        validate_style(data)
    return HandwritingStyle.from_dict(data)


# ─────────────────────────────────────────────────────────────────────────────
# Profile Serialization
# ─────────────────────────────────────────────────────────────────────────────

def serialize_profile(profile: StyleProfile) -> dict[str, Any]:
    """Serialize a StyleProfile to a dictionary."""
    return profile.to_dict()


def deserialize_profile(data: dict[str, Any], *, validate: bool = True) -> StyleProfile:
    """
    Deserialize a StyleProfile from a dictionary.

    Args:
        data: Dictionary from JSON
        validate: Whether to validate the record first

    Returns:
        StyleProfile instance

    Raises:
        ValidationError: If validate=True and data is invalid
    """
    if validate:
        validate_style_record(data)
    return StyleProfile.from_dict(data)


# ─────────────────────────────────────────────────────────────────────────────
# Store Document Utilities
# ─────────────────────────────────────────────────────────────────────────────

def empty_store_document() -> dict[str, Any]:
    """Create an empty style store document."""
    return {"schema_version": STYLE_STORE_SCHEMA_VERSION, "profiles": {}}


def load_style_file(path: Path, *, validate: bool = True) -> HandwritingStyle:
    """
    Load a single style from a JSON file.

    Accepts either a bare style object or a full profile record
    (the style is taken from its "style" key).

    Raises:
        FileNotFoundError: If file doesn't exist
        ValidationError: If the JSON is malformed or invalid
    """
    if not path.exists():
        raise FileNotFoundError(f"Style file not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Error parsing {path.name}: {e}", path=str(path), errors=[str(e)]) from e

    if isinstance(data, dict) and "style" in data:
        return deserialize_profile(data, validate=validate).style
    return deserialize_style(data, validate=validate)


def save_style_file(style: HandwritingStyle, path: Path) -> None:
    """Save a single style to a JSON file."""
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        json.dump(serialize_style(style), f, indent=2, ensure_ascii=False)


def profiles_from_document(data: dict[str, Any], *, validate: bool = True) -> dict[str, StyleProfile]:
    """Deserialize every profile in a store document, keyed by id."""
    if validate:
        validate_store_document(data)
    return {
        record_id: deserialize_profile(record, validate=validate)
        for record_id, record in data["profiles"].items()
    }
