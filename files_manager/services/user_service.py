"""User registration"""

from typing import Optional

from files_manager.exceptions import AlreadyExists, MissingField
from files_manager.models import User
from files_manager.services.auth_service import hash_password
from files_manager.services.job_queue import JobQueue, WelcomeJob
from files_manager.services.metadata_store import MetadataStore
from files_manager.utils.logger import get_logger

logger = get_logger(__name__)


class UserService:
    """Creates accounts and schedules the welcome message"""

    def __init__(self, metadata: MetadataStore, user_queue: JobQueue):
        self.metadata = metadata
        self.user_queue = user_queue

    async def register(self, email: Optional[str], password: Optional[str]) -> User:
        if not email:
            raise MissingField("email")
        if not password:
            raise MissingField("password")

        if await self.metadata.find_user_by_email(email):
            raise AlreadyExists()

        user = await self.metadata.insert_user(email, hash_password(password))

        try:
            await self.user_queue.enqueue(WelcomeJob(user_id=user.id))
        except Exception as e:
            # Registration does not depend on the welcome message
            logger.error(f"Failed to enqueue welcome job for user {user.id}: {e}")

        return user
