"""Worker process consuming the thumbnail and welcome queues"""

import asyncio
import signal
from typing import Optional

from files_manager.config import Settings, settings as default_settings
from files_manager.container import ServiceContainer
from files_manager.utils.logger import get_logger, log_storage_config

logger = get_logger(__name__)


async def run_worker(settings: Optional[Settings] = None, stop_event: Optional[asyncio.Event] = None):
    """Run both queue workers until stop_event is set or a signal arrives"""
    settings = settings or default_settings
    if settings.job_queue_backend == "memory":
        logger.warning("JOB_QUEUE_BACKEND=memory: this worker cannot see jobs queued by the API process")

    stop_event = stop_event or asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, stop_event.set)
        except (NotImplementedError, RuntimeError):
            # Not available on Windows event loops
            pass

    log_storage_config(logger, settings)
    container = ServiceContainer(settings)
    await container.connect()

    workers = container.create_workers()
    for worker in workers:
        await worker.start()

    try:
        await stop_event.wait()
    finally:
        for worker in workers:
            await worker.stop()
        await container.disconnect()


def main():
    asyncio.run(run_worker())


if __name__ == "__main__":
    main()
