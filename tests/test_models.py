"""Unit tests for identifiers, records and typed entries"""

import pytest
from pydantic import ValidationError
from uuid import uuid4

from files_manager.models import (
    FileEntry,
    FileRecord,
    FolderEntry,
    ImageEntry,
    ROOT_PARENT_ID,
    StoredEntry,
    entry_from_record,
    new_object_id,
    parse_object_id,
)


class TestObjectIds:
    def test_new_ids_are_unique(self):
        assert new_object_id() != new_object_id()

    def test_parse_accepts_canonical_and_dashed_forms(self):
        value = uuid4()

        assert parse_object_id(value.hex) == value.hex
        assert parse_object_id(str(value)) == value.hex

    @pytest.mark.parametrize("value", [None, "", "abc", "0", "not-an-id", 42])
    def test_parse_rejects_malformed(self, value):
        """Malformed ids read as not found"""
        assert parse_object_id(value) is None


class TestEntries:
    def _record(self, **kwargs) -> FileRecord:
        defaults = {"id": new_object_id(), "user_id": new_object_id(), "name": "x"}
        defaults.update(kwargs)
        return FileRecord(**defaults)

    def test_folder_record_becomes_folder_entry(self):
        entry = entry_from_record(self._record(type="folder"))

        assert isinstance(entry, FolderEntry)
        assert entry.parent_id == ROOT_PARENT_ID
        assert entry.is_root_level
        assert not hasattr(entry, "local_path")

    def test_file_and_image_records_carry_local_path(self):
        file_entry = entry_from_record(self._record(type="file", local_path="/tmp/a"))
        image_entry = entry_from_record(self._record(type="image", local_path="/tmp/b"))

        assert isinstance(file_entry, FileEntry)
        assert isinstance(image_entry, ImageEntry)
        assert isinstance(image_entry, StoredEntry)
        assert image_entry.local_path == "/tmp/b"

    def test_folder_with_local_path_is_rejected(self):
        with pytest.raises(ValidationError):
            entry_from_record(self._record(type="folder", local_path="/tmp/a"))

    def test_file_without_local_path_is_rejected(self):
        with pytest.raises(ValidationError):
            entry_from_record(self._record(type="file"))

    def test_unknown_type_is_rejected(self):
        with pytest.raises(ValidationError):
            entry_from_record(self._record(type="video", local_path="/tmp/a"))

    def test_entries_are_immutable(self):
        entry = entry_from_record(self._record(type="folder"))

        with pytest.raises(ValidationError):
            entry.name = "renamed"
