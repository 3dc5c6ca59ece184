"""
Schemas Package

Validation utilities for persisted style records.
"""

from .validator import (
    validate_style,
    validate_style_record,
    validate_store_document,
    ValidationError,
    STYLE_STORE_SCHEMA_VERSION,
)

__all__ = [
    "validate_style",
    "validate_style_record",
    "validate_store_document",
    "ValidationError",
    "STYLE_STORE_SCHEMA_VERSION",
]
