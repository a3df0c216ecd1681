"""File and folder metadata model"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from sqlmodel import SQLModel, Field
from sqlalchemy import Index

from files_manager.models.object_id import new_object_id

# parentId value of entries living at the top level
ROOT_PARENT_ID = "0"


class FileType(str, Enum):
    """Kinds of entries a user can create"""
    FOLDER = "folder"
    FILE = "file"
    IMAGE = "image"


VALID_FILE_TYPES = [file_type.value for file_type in FileType]


class FileRecord(SQLModel, table=True):
    """Stored metadata for a folder, file or image"""

    __tablename__ = "files"
    __table_args__ = (
        Index("idx_files_owner_parent", "user_id", "parent_id"),
    )

    # Insertion order; listings page over this column
    seq: Optional[int] = Field(default=None, primary_key=True)
    id: str = Field(default_factory=new_object_id, index=True, unique=True)
    user_id: str = Field(index=True)
    name: str
    type: str  # one of VALID_FILE_TYPES
    is_public: bool = Field(default=False)
    parent_id: str = Field(default=ROOT_PARENT_ID, index=True)
    # Blob location, never set for folders
    local_path: Optional[str] = Field(default=None)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
