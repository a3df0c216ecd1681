"""Wiring of stores and services"""

from typing import List, Optional

import redis.asyncio as redis

from files_manager.config import Settings
from files_manager.database import DatabaseService
from files_manager.services.auth_service import AccessControl
from files_manager.services.blob_storage import BlobStorage
from files_manager.services.file_service import FileService
from files_manager.services.job_queue import JobQueue, MemoryJobQueue, RedisJobQueue
from files_manager.services.metadata_store import MetadataStore
from files_manager.services.session_store import SessionStore
from files_manager.services.thumbnail_worker import ThumbnailWorker
from files_manager.services.user_service import UserService
from files_manager.services.welcome_worker import WelcomeWorker
from files_manager.services.worker_service import WorkerService
from files_manager.utils.cache import CacheService
from files_manager.utils.logger import get_logger

logger = get_logger(__name__)


class ServiceContainer:
    """Owns the store clients and hands them to the services.

    Nothing connects until connect(); disconnect() releases everything.
    """

    def __init__(self, settings: Settings, redis_client: Optional[redis.Redis] = None):
        self.settings = settings

        self.redis_client = redis_client or redis.Redis(
            host=settings.redis_host,
            port=settings.redis_port,
            password=settings.redis_password,
            db=settings.redis_db,
            decode_responses=True,
        )

        self.database = DatabaseService(settings.database_url)
        self.cache = CacheService(
            host=settings.redis_host,
            port=settings.redis_port,
            password=settings.redis_password,
            db=settings.redis_db,
            client=self.redis_client,
        )
        self.blobs = BlobStorage(settings.folder_path)

        self.file_queue = self._build_queue(settings.file_queue_name)
        self.user_queue = self._build_queue(settings.user_queue_name)

        self.metadata = MetadataStore(self.database)
        self.sessions = SessionStore(self.cache, settings.session_ttl_seconds)
        self.access = AccessControl(self.metadata, self.sessions)
        self.users = UserService(self.metadata, self.user_queue)
        self.files = FileService(
            self.access,
            self.metadata,
            self.blobs,
            self.file_queue,
            page_size=settings.page_size,
        )

    def _build_queue(self, name: str) -> JobQueue:
        if self.settings.job_queue_backend == "memory":
            return MemoryJobQueue(name)
        return RedisJobQueue(self.redis_client, name)

    async def connect(self):
        """Open the database, the cache and the blob directory"""
        self.database.initialize()
        self.blobs.ensure_folder()
        await self.cache.initialize()
        logger.info("Service container connected")

    async def disconnect(self):
        """Release connections; connect() may be called again afterwards"""
        await self.cache.close()
        # Drops pooled connections; the client reconnects on next use
        await self.redis_client.aclose()
        self.database.close()
        logger.info("Service container disconnected")

    def create_workers(self) -> List[WorkerService]:
        """Workers for the thumbnail and welcome queues"""
        timeout = self.settings.worker_poll_timeout
        return [
            WorkerService(self.file_queue, ThumbnailWorker(self.metadata, self.blobs), poll_timeout=timeout),
            WorkerService(self.user_queue, WelcomeWorker(self.metadata), poll_timeout=timeout),
        ]
