"""Metadata store for users and file records"""

from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from files_manager.database import DatabaseService
from files_manager.exceptions import AlreadyExists, ParentNotFound, ParentNotAFolder
from files_manager.models import (
    Entry,
    FileRecord,
    FileType,
    ROOT_PARENT_ID,
    User,
    entry_from_record,
    parse_object_id,
)
from files_manager.utils.logger import get_logger

logger = get_logger(__name__)


class MetadataStore:
    """Store-level operations on the users and files tables.

    Every method opens its own session, so a single instance is safe to
    share between concurrent requests. Unknown or malformed ids read as
    "not found" (None) rather than raising.
    """

    def __init__(self, database: DatabaseService):
        self.database = database

    # ---------- Users ----------

    async def insert_user(self, email: str, password_hash: str) -> User:
        with self.database.get_session() as session:
            user = User(email=email, password=password_hash)
            session.add(user)
            try:
                session.commit()
            except IntegrityError:
                # Concurrent registration won the unique email index
                session.rollback()
                raise AlreadyExists()
            session.refresh(user)
            logger.info(f"Created user {user.id}")
            return user

    async def find_user_by_email(self, email: str) -> Optional[User]:
        with self.database.get_session() as session:
            statement = select(User).where(User.email == email)
            return session.exec(statement).first()

    async def find_user_by_credentials(self, email: str, password_hash: str) -> Optional[User]:
        with self.database.get_session() as session:
            statement = select(User).where(
                User.email == email,
                User.password == password_hash,
            )
            return session.exec(statement).first()

    async def find_user_by_id(self, user_id: str) -> Optional[User]:
        object_id = parse_object_id(user_id)
        if object_id is None:
            return None
        with self.database.get_session() as session:
            return session.get(User, object_id)

    # ---------- Files ----------

    @staticmethod
    def _require_parent_folder(session: Session, parent_id: str) -> FileRecord:
        """Load the parent record, raising if it is missing or not a folder"""
        object_id = parse_object_id(parent_id)
        if object_id is None:
            raise ParentNotFound()
        parent = session.exec(select(FileRecord).where(FileRecord.id == object_id)).first()
        if parent is None:
            raise ParentNotFound()
        if parent.type != FileType.FOLDER.value:
            raise ParentNotAFolder()
        return parent

    async def check_parent(self, parent_id: str) -> str:
        """Validate a parent id and return its canonical form"""
        if parent_id == ROOT_PARENT_ID:
            return ROOT_PARENT_ID
        with self.database.get_session() as session:
            return self._require_parent_folder(session, parent_id).id

    async def insert_file(self, record: FileRecord) -> Entry:
        """Insert a record, re-checking its parent in the same transaction"""
        with self.database.get_session() as session:
            if record.parent_id != ROOT_PARENT_ID:
                record.parent_id = self._require_parent_folder(session, record.parent_id).id
            session.add(record)
            session.commit()
            session.refresh(record)
            logger.debug(f"Inserted {record.type} {record.id} for user {record.user_id}")
            return entry_from_record(record)

    async def find_file(self, file_id: str, user_id: Optional[str] = None) -> Optional[Entry]:
        """Find a record by id, optionally restricted to an owner"""
        object_id = parse_object_id(file_id)
        if object_id is None:
            return None
        with self.database.get_session() as session:
            statement = select(FileRecord).where(FileRecord.id == object_id)
            if user_id is not None:
                statement = statement.where(FileRecord.user_id == user_id)
            record = session.exec(statement).first()
            return entry_from_record(record) if record else None

    async def list_files(self, user_id: str, parent_id: str, skip: int, limit: int) -> List[Entry]:
        """Owner's records under parent_id, in insertion order"""
        with self.database.get_session() as session:
            statement = (
                select(FileRecord)
                .where(FileRecord.user_id == user_id)
                .where(FileRecord.parent_id == parent_id)
                .order_by(FileRecord.seq)
                .offset(skip)
                .limit(limit)
            )
            return [entry_from_record(record) for record in session.exec(statement).all()]

    async def set_public(self, file_id: str, user_id: str, is_public: bool) -> Optional[Entry]:
        """Update is_public on the record matching both id and owner"""
        object_id = parse_object_id(file_id)
        if object_id is None:
            return None
        with self.database.get_session() as session:
            statement = select(FileRecord).where(
                FileRecord.id == object_id,
                FileRecord.user_id == user_id,
            )
            record = session.exec(statement).first()
            if record is None:
                return None
            record.is_public = is_public
            session.add(record)
            session.commit()
            session.refresh(record)
            logger.info(f"File {record.id} is_public={is_public}")
            return entry_from_record(record)
