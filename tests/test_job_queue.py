"""Unit tests for the job queues and the worker loop"""

import asyncio
import json

import pytest
from unittest.mock import AsyncMock

from files_manager.exceptions import JobError
from files_manager.services.job_queue import (
    JobState,
    MemoryJobQueue,
    QueuedJob,
    RedisJobQueue,
    ThumbnailJob,
    WelcomeJob,
    decode_job,
    encode_job,
)
from files_manager.services.worker_service import WorkerService


class TestPayloads:
    def test_thumbnail_job_uses_wire_names(self):
        job = ThumbnailJob(file_id="f1", user_id="u1")

        assert job.to_payload() == {"fileId": "f1", "userId": "u1"}
        assert ThumbnailJob.model_validate({"fileId": "f1", "userId": "u1"}) == job

    def test_absent_fields_are_omitted(self):
        assert WelcomeJob().to_payload() == {}

    def test_envelope(self):
        envelope = json.loads(encode_job(WelcomeJob(user_id="u1")))

        assert envelope["id"]
        assert envelope["data"] == {"userId": "u1"}

    @pytest.mark.parametrize("raw", ["not json", "[]", '{"data": "x"}', "null"])
    def test_malformed_items_decode_to_empty_jobs(self, raw):
        job = decode_job("fileQueue", raw)

        assert job.queue == "fileQueue"
        assert job.data == {}
        assert job.state == JobState.QUEUED


class TestMemoryJobQueue:
    @pytest.mark.asyncio
    async def test_fifo(self):
        queue = MemoryJobQueue("fileQueue")

        first = await queue.enqueue(WelcomeJob(user_id="u1"))
        await queue.enqueue(WelcomeJob(user_id="u2"))

        assert await queue.size() == 2
        job = await queue.dequeue(timeout=1)
        assert job.id == first
        assert job.data == {"userId": "u1"}
        assert (await queue.dequeue(timeout=1)).data == {"userId": "u2"}

    @pytest.mark.asyncio
    async def test_dequeue_timeout(self):
        queue = MemoryJobQueue("fileQueue")

        assert await queue.dequeue(timeout=0.01) is None


class TestRedisJobQueue:
    @pytest.mark.asyncio
    async def test_fifo(self, redis_client):
        queue = RedisJobQueue(redis_client, "fileQueue")

        first = await queue.enqueue(ThumbnailJob(file_id="f1", user_id="u1"))
        await queue.enqueue(ThumbnailJob(file_id="f2", user_id="u1"))

        assert await queue.size() == 2
        job = await queue.dequeue(timeout=1)
        assert job.id == first
        assert job.data == {"fileId": "f1", "userId": "u1"}
        assert (await queue.dequeue(timeout=1)).data["fileId"] == "f2"
        assert await queue.size() == 0

    @pytest.mark.asyncio
    async def test_items_live_in_a_redis_list(self, redis_client):
        queue = RedisJobQueue(redis_client, "userQueue")

        await queue.enqueue(WelcomeJob(user_id="u1"))

        raw = await redis_client.lindex("userQueue", 0)
        assert json.loads(raw)["data"] == {"userId": "u1"}


class TestWorkerService:
    @pytest.mark.asyncio
    async def test_job_done(self):
        queue = MemoryJobQueue("userQueue")
        handler = AsyncMock()
        worker = WorkerService(queue, handler, poll_timeout=0.01)
        await queue.enqueue(WelcomeJob(user_id="u1"))

        job = await worker.process_next()

        assert job.state == JobState.DONE
        handler.assert_awaited_once_with(job)
        status = await worker.get_queue_status()
        assert status["processed"] == 1
        assert status["failed"] == 0
        assert status["last_job"]["state"] == "done"

    @pytest.mark.asyncio
    async def test_job_error_fails_job(self):
        handler = AsyncMock(side_effect=JobError("Missing fileId"))
        worker = WorkerService(MemoryJobQueue("fileQueue"), handler)

        job = await worker.run_job(QueuedJob(id="1", queue="fileQueue", data={}))

        assert job.state == JobState.FAILED
        assert job.error == "Missing fileId"

    @pytest.mark.asyncio
    async def test_unexpected_error_fails_job(self):
        handler = AsyncMock(side_effect=RuntimeError("boom"))
        worker = WorkerService(MemoryJobQueue("fileQueue"), handler)

        job = await worker.run_job(QueuedJob(id="1", queue="fileQueue", data={}))

        assert job.state == JobState.FAILED
        assert job.error == "boom"
        assert (await worker.get_queue_status())["failed"] == 1

    @pytest.mark.asyncio
    async def test_empty_queue(self):
        worker = WorkerService(MemoryJobQueue("fileQueue"), AsyncMock(), poll_timeout=0.01)

        assert await worker.process_next() is None

    @pytest.mark.asyncio
    async def test_start_and_stop(self):
        queue = MemoryJobQueue("userQueue")
        handler = AsyncMock()
        worker = WorkerService(queue, handler, poll_timeout=0.01)

        await worker.start()
        await queue.enqueue(WelcomeJob(user_id="u1"))
        for _ in range(100):
            if handler.await_count:
                break
            await asyncio.sleep(0.01)
        await worker.stop()

        assert handler.await_count == 1
        assert (await worker.get_queue_status())["running"] is False
