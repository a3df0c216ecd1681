"""Database setup and configuration using SQLModel"""

from typing import Dict, Any, Optional
from sqlmodel import SQLModel, create_engine, Session, select
from sqlalchemy import func
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
import os

from files_manager.utils.logger import get_logger
from files_manager.models.user import User
from files_manager.models.file_record import FileRecord

logger = get_logger(__name__)


class DatabaseService:
    """Database service for managing the SQLModel metadata store"""

    def __init__(self, database_url: str):
        self.database_url = database_url
        self.engine: Optional[Engine] = None

    def initialize(self):
        """Initialize database connection and create tables"""
        if self.engine:
            return

        try:
            database_url = self.database_url

            if database_url in ("sqlite://", "sqlite:///:memory:"):
                # One shared connection, otherwise every session sees an empty database
                self.engine = create_engine(
                    "sqlite://",
                    connect_args={"check_same_thread": False},
                    poolclass=StaticPool,
                    echo=False,
                )
            elif database_url.startswith("sqlite:///"):
                path = database_url.replace("sqlite:///", "", 1)
                db_dir = os.path.dirname(path)
                if db_dir and not os.path.exists(db_dir):
                    os.makedirs(db_dir, exist_ok=True)
                    logger.debug(f"Created database directory: {db_dir}")

                self.engine = create_engine(
                    database_url,
                    connect_args={"check_same_thread": False},
                    echo=False,
                    pool_pre_ping=True,
                )

                with self.engine.connect() as conn:
                    # WAL lets the worker process read while the API writes
                    conn.exec_driver_sql("PRAGMA journal_mode=WAL")
                    conn.exec_driver_sql("PRAGMA synchronous=NORMAL")
                    conn.commit()
            else:
                # PostgreSQL, MySQL, etc.
                self.engine = create_engine(
                    database_url,
                    echo=False,
                    pool_pre_ping=True,
                    pool_size=5,
                    max_overflow=10,
                    pool_recycle=3600,
                )

            logger.debug(f"Connecting to database: {database_url.split('/')[-1]}")

            SQLModel.metadata.create_all(self.engine)

            logger.debug("Database initialized successfully")
        except Exception as e:
            logger.error(f"Failed to initialize database: {e}")
            raise

    def get_session(self) -> Session:
        """Get database session"""
        if not self.engine:
            raise RuntimeError("Database not initialized. Call initialize() first.")
        return Session(self.engine)

    def is_alive(self) -> bool:
        """Check whether the database answers a trivial query"""
        if not self.engine:
            return False
        try:
            with self.engine.connect() as conn:
                conn.exec_driver_sql("SELECT 1")
            return True
        except Exception as e:
            logger.error(f"Database health check failed: {e}")
            return False

    def count_users(self) -> int:
        with self.get_session() as session:
            return session.exec(select(func.count()).select_from(User)).one()

    def count_files(self) -> int:
        with self.get_session() as session:
            return session.exec(select(func.count()).select_from(FileRecord)).one()

    def get_stats(self) -> Dict[str, Any]:
        """Get database statistics"""
        return {
            "users": self.count_users(),
            "files": self.count_files(),
        }

    def close(self):
        """Close database connection"""
        if self.engine:
            self.engine.dispose()
            self.engine = None
            logger.debug("Database connection closed")
