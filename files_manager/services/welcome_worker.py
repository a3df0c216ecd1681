"""Welcome message for newly registered users"""

from pydantic import ValidationError as PayloadError

from files_manager.exceptions import JobError
from files_manager.services.job_queue import QueuedJob, WelcomeJob
from files_manager.services.metadata_store import MetadataStore
from files_manager.utils.logger import get_logger

logger = get_logger(__name__)


class WelcomeWorker:
    def __init__(self, metadata: MetadataStore):
        self.metadata = metadata

    async def __call__(self, job: QueuedJob):
        await self.process(job)

    async def process(self, job: QueuedJob):
        try:
            payload = WelcomeJob.model_validate(job.data)
        except PayloadError:
            raise JobError("Invalid payload")

        if not payload.user_id:
            raise JobError("Missing userId")

        user = await self.metadata.find_user_by_id(payload.user_id)
        if user is None:
            raise JobError("User not found")

        logger.info(f"Welcome {user.email}!")
