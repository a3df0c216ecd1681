"""Job queues between the API and the workers"""

import asyncio
import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional
from uuid import uuid4

import redis.asyncio as redis
from pydantic import BaseModel, ConfigDict, Field

from files_manager.utils.logger import get_logger

logger = get_logger(__name__)


class JobState(str, Enum):
    """Lifecycle of a job as seen by a worker"""
    QUEUED = "queued"
    PROCESSING = "processing"
    DONE = "done"
    FAILED = "failed"


class Job(BaseModel):
    """Base payload; fields stay optional so workers can reject bad jobs"""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class ThumbnailJob(Job):
    file_id: Optional[str] = Field(default=None, alias="fileId")
    user_id: Optional[str] = Field(default=None, alias="userId")


class WelcomeJob(Job):
    user_id: Optional[str] = Field(default=None, alias="userId")


@dataclass
class QueuedJob:
    """A job taken off a queue, before it is parsed by a worker"""
    id: str
    queue: str
    data: Dict[str, Any]
    state: JobState = JobState.QUEUED
    error: Optional[str] = None
    received_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


def encode_job(job: Job) -> str:
    return json.dumps({"id": str(uuid4()), "data": job.to_payload()})


def decode_job(queue_name: str, raw: str) -> QueuedJob:
    """Decode a raw queue item; malformed items become jobs with empty data"""
    try:
        envelope = json.loads(raw)
    except (TypeError, ValueError):
        envelope = None
    if not isinstance(envelope, dict):
        return QueuedJob(id=str(uuid4()), queue=queue_name, data={})
    data = envelope.get("data")
    return QueuedJob(
        id=str(envelope.get("id") or uuid4()),
        queue=queue_name,
        data=data if isinstance(data, dict) else {},
    )


class JobQueue(ABC):
    """Named FIFO of jobs"""

    def __init__(self, name: str):
        self.name = name

    @abstractmethod
    async def enqueue(self, job: Job) -> str:
        """Add a job and return its id"""

    @abstractmethod
    async def dequeue(self, timeout: float) -> Optional[QueuedJob]:
        """Wait up to timeout seconds for the next job"""

    @abstractmethod
    async def size(self) -> int:
        """Number of jobs waiting"""


class RedisJobQueue(JobQueue):
    """Queue backed by a Redis list, shared between processes"""

    def __init__(self, client: redis.Redis, name: str):
        super().__init__(name)
        self.client = client

    async def enqueue(self, job: Job) -> str:
        raw = encode_job(job)
        await self.client.lpush(self.name, raw)
        job_id = json.loads(raw)["id"]
        logger.debug(f"Enqueued job {job_id} on {self.name}")
        return job_id

    async def dequeue(self, timeout: float) -> Optional[QueuedJob]:
        item = await self.client.brpop([self.name], timeout=timeout)
        if not item:
            return None
        _, raw = item
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8")
        return decode_job(self.name, raw)

    async def size(self) -> int:
        return await self.client.llen(self.name)


class MemoryJobQueue(JobQueue):
    """In-process queue for single-process deployments and tests"""

    def __init__(self, name: str):
        super().__init__(name)
        self._queue: asyncio.Queue = asyncio.Queue()

    async def enqueue(self, job: Job) -> str:
        raw = encode_job(job)
        self._queue.put_nowait(raw)
        job_id = json.loads(raw)["id"]
        logger.debug(f"Enqueued job {job_id} on {self.name}")
        return job_id

    async def dequeue(self, timeout: float) -> Optional[QueuedJob]:
        try:
            raw = await asyncio.wait_for(self._queue.get(), timeout=timeout)
        except asyncio.TimeoutError:
            return None
        return decode_job(self.name, raw)

    async def size(self) -> int:
        return self._queue.qsize()
