"""Thumbnail generation for uploaded images"""

import asyncio

from pydantic import ValidationError as PayloadError

from files_manager.exceptions import JobError
from files_manager.models import StoredEntry
from files_manager.services.blob_storage import BlobStorage, variant_path
from files_manager.services.file_service import THUMBNAIL_SIZES
from files_manager.services.job_queue import QueuedJob, ThumbnailJob
from files_manager.services.metadata_store import MetadataStore
from files_manager.utils.logger import get_logger
from files_manager.utils.thumbnails import generate_thumbnail

logger = get_logger(__name__)


class ThumbnailWorker:
    """Derives the 500, 250 and 100 pixel wide copies of an image.

    Jobs are never retried: a missing field, an unknown record or a failed
    resize ends the job with a JobError.
    """

    def __init__(self, metadata: MetadataStore, blobs: BlobStorage):
        self.metadata = metadata
        self.blobs = blobs

    async def __call__(self, job: QueuedJob):
        await self.process(job)

    async def process(self, job: QueuedJob):
        try:
            payload = ThumbnailJob.model_validate(job.data)
        except PayloadError:
            raise JobError("Invalid payload")

        if not payload.file_id:
            raise JobError("Missing fileId")
        if not payload.user_id:
            raise JobError("Missing userId")

        entry = await self.metadata.find_file(payload.file_id, user_id=payload.user_id)
        if entry is None or not isinstance(entry, StoredEntry):
            raise JobError("File not found")

        try:
            original = self.blobs.read(entry.local_path)
        except OSError as e:
            raise JobError(f"Cannot read original blob: {e}")

        results = await asyncio.gather(
            *(self._derive(entry.local_path, original, width) for width in THUMBNAIL_SIZES),
            return_exceptions=True,
        )
        errors = [result for result in results if isinstance(result, Exception)]
        if errors:
            raise JobError(f"{len(errors)} of {len(THUMBNAIL_SIZES)} thumbnails failed: {errors[0]}")

        logger.info(f"Thumbnails generated for file {entry.id}")

    async def _derive(self, local_path: str, original: bytes, width: int):
        thumbnail = await asyncio.to_thread(generate_thumbnail, original, width)
        self.blobs.write(variant_path(local_path, width), thumbnail)
