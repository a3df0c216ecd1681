"""Queue consumer running job handlers"""

import asyncio
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Dict, Optional

from files_manager.exceptions import JobError
from files_manager.services.job_queue import JobQueue, JobState, QueuedJob
from files_manager.utils.logger import get_logger

logger = get_logger(__name__)

JobHandler = Callable[[QueuedJob], Awaitable[None]]


class WorkerService:
    """Consumes one queue sequentially, reporting each job Done or Failed"""

    def __init__(self, queue: JobQueue, handler: JobHandler, poll_timeout: float = 1.0):
        self.queue = queue
        self.handler = handler
        self.poll_timeout = poll_timeout
        self._running = False
        self._worker_task: Optional[asyncio.Task] = None
        self._processed = 0
        self._failed = 0
        self._last_job: Optional[Dict[str, Any]] = None

    async def start(self):
        """Start the worker loop"""
        if self._running:
            logger.warning(f"Worker for {self.queue.name} is already running")
            return

        self._running = True
        self._worker_task = asyncio.create_task(self._process_queue())
        logger.info(f"Worker started for queue {self.queue.name}")

    async def stop(self):
        """Stop the worker loop"""
        if not self._running:
            return

        self._running = False
        if self._worker_task:
            self._worker_task.cancel()
            try:
                await self._worker_task
            except asyncio.CancelledError:
                pass
            self._worker_task = None

        logger.info(f"Worker stopped for queue {self.queue.name}")

    async def wait(self):
        """Block until the worker loop ends"""
        if self._worker_task:
            await self._worker_task

    async def _process_queue(self):
        while self._running:
            try:
                await self.process_next()
            except asyncio.CancelledError:
                break
            except Exception as e:
                # Queue connectivity problems; keep polling
                logger.error(f"Error reading queue {self.queue.name}: {e}", exc_info=True)
                await asyncio.sleep(self.poll_timeout)

    async def process_next(self, timeout: Optional[float] = None) -> Optional[QueuedJob]:
        """Take one job off the queue and run it; None when the queue stayed empty"""
        job = await self.queue.dequeue(self.poll_timeout if timeout is None else timeout)
        if job is None:
            return None
        await self.run_job(job)
        return job

    async def run_job(self, job: QueuedJob) -> QueuedJob:
        job.state = JobState.PROCESSING
        logger.debug(f"Processing job {job.id} from {job.queue}")

        try:
            await self.handler(job)
        except JobError as e:
            self._fail(job, e.message)
        except Exception as e:
            logger.error(f"Unexpected error in job {job.id}", exc_info=True)
            self._fail(job, str(e))
        else:
            job.state = JobState.DONE
            self._processed += 1
            logger.info(f"Job {job.id} from {job.queue} done")

        self._last_job = {
            "id": job.id,
            "state": job.state.value,
            "error": job.error,
            "finished_at": datetime.now(timezone.utc).isoformat(),
        }
        return job

    def _fail(self, job: QueuedJob, error: str):
        job.state = JobState.FAILED
        job.error = error
        self._failed += 1
        logger.error(f"Job {job.id} from {job.queue} failed: {error}")

    async def get_queue_status(self) -> Dict[str, Any]:
        """
        Get current worker status

        Returns:
            Dict with queue statistics
        """
        return {
            "queue": self.queue.name,
            "queue_size": await self.queue.size(),
            "running": self._running,
            "processed": self._processed,
            "failed": self._failed,
            "last_job": self._last_job,
        }
