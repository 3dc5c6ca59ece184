"""
Unit Tests for Schema Validation

Tests for the validator module.
"""

import pytest

from handwriting_toolkit.core.schemas.validator import (
    STYLE_STORE_SCHEMA_VERSION,
    ValidationError,
    validate_store_document,
    validate_style,
    validate_style_record,
)


class TestValidateStyle:
    """Tests for validate_style function."""

    def test_validate_when_valid_then_no_error(self):
        validate_style({"font": "Caveat", "size": 24, "perturbation": 0.5})

    def test_validate_when_empty_then_no_error(self):
        """Every field is optional."""
        validate_style({})

    def test_validate_when_not_object_then_raises(self):
        with pytest.raises(ValidationError, match="object"):
            validate_style(["size", 24])

    def test_validate_when_bool_number_then_raises(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_style({"size": True})

        assert "expected number" in exc_info.value.errors[0]

    def test_validate_when_several_errors_then_all_collected(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_style({"rotation": -1, "perturbation": -2, "color": 5})

        assert len(exc_info.value.errors) == 3

    def test_validate_when_zero_size_then_raises(self):
        with pytest.raises(ValidationError, match="size"):
            validate_style({"size": 0})


class TestValidateStyleRecord:
    """Tests for validate_style_record function."""

    @pytest.fixture
    def valid_record(self) -> dict:
        return {
            "id": "abc",
            "name": "Sample",
            "style": {"size": 24},
            "messiness_score": 0.4,
        }

    def test_validate_when_valid_then_no_error(self, valid_record):
        validate_style_record(valid_record)

    def test_validate_when_missing_id_then_raises(self, valid_record):
        del valid_record["id"]

        with pytest.raises(ValidationError) as exc_info:
            validate_style_record(valid_record)

        assert "Missing field: id" in exc_info.value.errors

    def test_validate_when_empty_id_then_raises(self, valid_record):
        valid_record["id"] = ""

        with pytest.raises(ValidationError, match="Invalid id"):
            validate_style_record(valid_record)

    def test_validate_when_messiness_out_of_range_then_raises(self, valid_record):
        valid_record["messiness_score"] = 2

        with pytest.raises(ValidationError, match="messiness_score"):
            validate_style_record(valid_record)

    def test_validate_when_nested_style_invalid_then_raises(self, valid_record):
        valid_record["style"] = {"size": "large"}

        with pytest.raises(ValidationError):
            validate_style_record(valid_record)


class TestValidateStoreDocument:
    """Tests for validate_store_document function."""

    def test_validate_when_current_version_then_no_error(self):
        validate_store_document({"schema_version": STYLE_STORE_SCHEMA_VERSION, "profiles": {}})

    def test_validate_when_wrong_version_then_raises(self):
        with pytest.raises(ValidationError, match="schema version"):
            validate_store_document({"schema_version": 99, "profiles": {}})

    def test_validate_when_profiles_not_object_then_raises(self):
        with pytest.raises(ValidationError, match="profiles"):
            validate_store_document({"schema_version": STYLE_STORE_SCHEMA_VERSION, "profiles": []})
