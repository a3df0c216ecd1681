"""User account model"""

from datetime import datetime, timezone
from sqlmodel import SQLModel, Field

from files_manager.models.object_id import new_object_id


class User(SQLModel, table=True):
    """Registered user; the password column holds a one-way hash"""

    __tablename__ = "users"

    id: str = Field(default_factory=new_object_id, primary_key=True)
    email: str = Field(index=True, unique=True)
    password: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
