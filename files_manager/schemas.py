"""Request and response bodies of the HTTP API"""

from typing import Optional, Union

from pydantic import BaseModel

from files_manager.models import Entry, ROOT_PARENT_ID, User


# ---------- Users / Auth ----------

class UserCreate(BaseModel):
    # Optional so that a missing field is reported as "Missing ..." (400)
    email: Optional[str] = None
    password: Optional[str] = None


class UserRead(BaseModel):
    id: str
    email: str

    @classmethod
    def from_user(cls, user: User) -> "UserRead":
        return cls(id=user.id, email=user.email)


class Token(BaseModel):
    token: str


# ---------- Files ----------

class FileCreate(BaseModel):
    name: Optional[str] = None
    type: Optional[str] = None
    data: Optional[str] = None
    parentId: Optional[Union[int, str]] = None
    isPublic: bool = False


class FileRead(BaseModel):
    id: str
    userId: str
    name: str
    type: str
    isPublic: bool
    parentId: Union[int, str]

    @classmethod
    def from_entry(cls, entry: Entry) -> "FileRead":
        return cls(
            id=entry.id,
            userId=entry.user_id,
            name=entry.name,
            type=entry.type,
            isPublic=entry.is_public,
            parentId=0 if entry.parent_id == ROOT_PARENT_ID else entry.parent_id,
        )


# ---------- App ----------

class Status(BaseModel):
    redis: bool
    db: bool


class Stats(BaseModel):
    users: int
    files: int
