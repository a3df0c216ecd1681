"""Typed views of file records.

A stored ``FileRecord`` is a flat row; services hand out one of the
variants below instead, so that only files and images carry a blob path.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from files_manager.models.file_record import FileRecord, ROOT_PARENT_ID


class BaseEntry(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str
    user_id: str
    name: str
    is_public: bool = False
    parent_id: str = ROOT_PARENT_ID

    @property
    def is_root_level(self) -> bool:
        return self.parent_id == ROOT_PARENT_ID


class FolderEntry(BaseEntry):
    type: Literal["folder"] = "folder"


class StoredEntry(BaseEntry):
    """Entry backed by a blob on storage"""
    local_path: str


class FileEntry(StoredEntry):
    type: Literal["file"] = "file"


class ImageEntry(StoredEntry):
    type: Literal["image"] = "image"


Entry = Annotated[Union[FolderEntry, FileEntry, ImageEntry], Field(discriminator="type")]

_entry_adapter = TypeAdapter(Entry)


def entry_from_record(record: FileRecord) -> Entry:
    """Build the typed entry for a stored record.

    Raises pydantic.ValidationError when the row breaks the folder/blob
    invariant (a folder with a path, or a file without one).
    """
    data = record.model_dump(exclude={"seq", "created_at"}, exclude_none=True)
    return _entry_adapter.validate_python(data)
