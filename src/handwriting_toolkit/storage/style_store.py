"""
Module: storage.style_store

Purpose:
    Persistence of handwriting style profiles keyed by an opaque id.
    The rendering core only needs create/read/update/delete by id; the
    bundled implementation keeps every profile in one locked JSON file.

Key Classes:
    - StyleStore: Protocol for profile stores
    - JsonStyleStore: Single-file JSON store guarded by portalocker
    - StyleNotFoundError: Raised for unknown ids

File format:
    {
      "schema_version": 1,
      "profiles": { "<id>": { "id": ..., "name": ..., "style": {...}, ... } }
    }

Dependencies:
    - storage.file_locking: Locked JSON access
    - core.schemas.validator: Record validation
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Protocol, Union, runtime_checkable

from handwriting_toolkit.core.models.style import StyleProfile
from handwriting_toolkit.core.schemas.validator import validate_store_document, validate_style_record
from handwriting_toolkit.core.utils.serialization import (
    deserialize_profile,
    empty_store_document,
    profiles_from_document,
    serialize_profile,
)

from .file_locking import Document, locked_read_json, locked_update_json

logger = logging.getLogger(__name__)


class StyleNotFoundError(KeyError):
    """No profile with the requested id."""

    def __init__(self, profile_id: str):
        self.profile_id = profile_id
        super().__init__(profile_id)

    def __str__(self) -> str:
        return f"Style profile not found: {self.profile_id}"


@runtime_checkable
class StyleStore(Protocol):
    """CRUD by id over style profiles."""

    def create(self, profile: StyleProfile) -> StyleProfile:
        ...

    def get(self, profile_id: str) -> StyleProfile:
        ...

    def update(self, profile: StyleProfile) -> StyleProfile:
        ...

    def delete(self, profile_id: str) -> None:
        ...

    def list(self) -> List[StyleProfile]:
        ...


class JsonStyleStore:
    """
    Style profiles in one JSON document.

    Every operation takes the file lock, so separate processes may share a
    store. Records are validated on write and on read.

    Example:
        >>> store = JsonStyleStore(Path("styles.json"))
        >>> store.create(profile)
        >>> store.get(profile.id).name
        'my sample'
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def _read(self) -> Document:
        document = locked_read_json(self.path, default=empty_store_document)
        validate_store_document(document)
        return document

    def create(self, profile: StyleProfile) -> StyleProfile:
        """
        Add a new profile.

        Raises:
            ValueError: If a profile with the same id already exists
        """
        record = serialize_profile(profile)
        validate_style_record(record)

        def insert(document: Document) -> Document:
            validate_store_document(document)
            if profile.id in document["profiles"]:
                raise ValueError(f"Style profile already exists: {profile.id}")
            document["profiles"][profile.id] = record
            return document

        locked_update_json(self.path, insert, default=empty_store_document)
        logger.info(f"Created style profile {profile.id} ({profile.name!r})")
        return profile

    def get(self, profile_id: str) -> StyleProfile:
        """Raises StyleNotFoundError for unknown ids."""
        profiles = self._read()["profiles"]
        if profile_id not in profiles:
            raise StyleNotFoundError(profile_id)
        return deserialize_profile(profiles[profile_id])

    def update(self, profile: StyleProfile) -> StyleProfile:
        """Replace an existing profile. Raises StyleNotFoundError if absent."""
        record = serialize_profile(profile)
        validate_style_record(record)

        def replace(document: Document) -> Document:
            validate_store_document(document)
            if profile.id not in document["profiles"]:
                raise StyleNotFoundError(profile.id)
            document["profiles"][profile.id] = record
            return document

        locked_update_json(self.path, replace, default=empty_store_document)
        logger.debug(f"Updated style profile {profile.id}")
        return profile

    def delete(self, profile_id: str) -> None:
        """Remove a profile. Raises StyleNotFoundError if absent."""

        def remove(document: Document) -> Document:
            validate_store_document(document)
            if profile_id not in document["profiles"]:
                raise StyleNotFoundError(profile_id)
            del document["profiles"][profile_id]
            return document

        locked_update_json(self.path, remove, default=empty_store_document)
        logger.info(f"Deleted style profile {profile_id}")

    def list(self) -> List[StyleProfile]:
        """All profiles, sorted by name then id."""
        profiles = profiles_from_document(self._read())
        return sorted(profiles.values(), key=lambda p: (p.name, p.id))
