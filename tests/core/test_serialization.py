"""
Unit Tests for Serialization Utilities

Tests for style and profile serialization and the style file helpers.
"""

import json
import pytest
from pathlib import Path

from handwriting_toolkit.core.models import HandwritingStyle, StyleProfile
from handwriting_toolkit.core.schemas.validator import ValidationError
from handwriting_toolkit.core.utils.serialization import (
    deserialize_profile,
    deserialize_style,
    empty_store_document,
    load_style_file,
    profiles_from_document,
    save_style_file,
    serialize_profile,
    serialize_style,
)


class TestStyleSerialization:
    """Tests for style serialization/deserialization."""

    def test_serialize_when_style_given_then_returns_dict(self):
        result = serialize_style(HandwritingStyle(size=30))

        assert isinstance(result, dict)
        assert result["size"] == 30

    def test_deserialize_when_invalid_then_raises(self):
        with pytest.raises(ValidationError):
            deserialize_style({"size": "big"})

    def test_deserialize_when_validation_disabled_then_model_validates(self):
        """The model still rejects out-of-range values."""
        with pytest.raises(ValueError):
            deserialize_style({"size": -1}, validate=False)


class TestProfileSerialization:
    """Tests for profile serialization."""

    @pytest.fixture
    def sample_profile(self) -> StyleProfile:
        return StyleProfile(
            id="p1",
            name="Sample",
            style=HandwritingStyle(slant=6.0),
            detected_slant=-6.0,
            detected_stroke_width=3.0,
            messiness_score=0.3,
        )

    def test_deserialize_when_serialized_then_equal(self, sample_profile):
        assert deserialize_profile(serialize_profile(sample_profile)) == sample_profile

    def test_deserialize_when_missing_style_then_raises(self):
        with pytest.raises(ValidationError, match="Missing"):
            deserialize_profile({"id": "p1"})

    def test_profiles_from_document_when_valid_then_keyed_by_id(self, sample_profile):
        document = empty_store_document()
        document["profiles"]["p1"] = serialize_profile(sample_profile)

        profiles = profiles_from_document(document)

        assert profiles == {"p1": sample_profile}


class TestStyleFiles:
    """Tests for load_style_file / save_style_file."""

    def test_load_when_saved_then_equal(self, tmp_path: Path):
        # Arrange
        style = HandwritingStyle(font="DejaVuSans", perturbation=1.5)
        path = tmp_path / "nested" / "style.json"

        # Act
        save_style_file(style, path)
        loaded = load_style_file(path)

        # Assert
        assert loaded == style

    def test_load_when_profile_record_then_style_extracted(self, tmp_path: Path):
        profile = StyleProfile(id="x", name="X", style=HandwritingStyle(size=19))
        path = tmp_path / "profile.json"
        path.write_text(json.dumps(profile.to_dict()), encoding="utf-8")

        assert load_style_file(path).size == 19

    def test_load_when_missing_then_raises(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_style_file(tmp_path / "nope.json")

    def test_load_when_malformed_json_then_raises_validation_error(self, tmp_path: Path):
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(ValidationError, match="bad.json"):
            load_style_file(path)
