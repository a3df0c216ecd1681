"""Models module"""

from files_manager.models.user import User
from files_manager.models.file_record import FileRecord, FileType, ROOT_PARENT_ID, VALID_FILE_TYPES
from files_manager.models.entry import Entry, FolderEntry, FileEntry, ImageEntry, StoredEntry, entry_from_record
from files_manager.models.object_id import new_object_id, parse_object_id

__all__ = [
    "User",
    "FileRecord",
    "FileType",
    "ROOT_PARENT_ID",
    "VALID_FILE_TYPES",
    "Entry",
    "FolderEntry",
    "FileEntry",
    "ImageEntry",
    "StoredEntry",
    "entry_from_record",
    "new_object_id",
    "parse_object_id",
]
