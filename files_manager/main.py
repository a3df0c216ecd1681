"""FastAPI application"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from files_manager.config import Settings, settings as default_settings
from files_manager.container import ServiceContainer
from files_manager.exceptions import FilesManagerError
from files_manager.routers import auth, files, status, users
from files_manager.utils.logger import get_logger, log_storage_config

logger = get_logger(__name__)

VERSION = "1.0.0"


def create_app(
    settings: Optional[Settings] = None,
    container: Optional[ServiceContainer] = None,
) -> FastAPI:
    """Build the API around a service container"""
    settings = settings or default_settings
    container = container or ServiceContainer(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.debug(f"Starting Files Manager v{VERSION}")
        log_storage_config(logger, settings)
        await container.connect()

        # An in-process queue is only visible to workers in this process
        workers = container.create_workers() if settings.job_queue_backend == "memory" else []
        for worker in workers:
            await worker.start()

        try:
            yield
        finally:
            logger.debug("Shutting down Files Manager")
            for worker in workers:
                await worker.stop()
            await container.disconnect()

    app = FastAPI(
        title="Files Manager",
        description="Personal file storage with thumbnails",
        version=VERSION,
        lifespan=lifespan,
    )
    app.state.container = container

    @app.exception_handler(FilesManagerError)
    async def files_manager_error_handler(request: Request, exc: FilesManagerError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(request: Request, exc: RequestValidationError):
        logger.debug(f"Rejected request body on {request.url.path}: {exc.errors()}")
        return JSONResponse(status_code=400, content={"error": "Invalid request"})

    app.include_router(status.router)
    app.include_router(auth.router)
    app.include_router(users.router)
    app.include_router(files.router)

    return app


app = create_app()


def run():
    """Serve the API with uvicorn"""
    import uvicorn

    uvicorn.run(app, host=default_settings.host, port=default_settings.port)


if __name__ == "__main__":
    run()
