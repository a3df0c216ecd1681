"""Pytest configuration and shared fixtures"""

import base64
import os
from io import BytesIO
from typing import Generator

import fakeredis
import pytest
from PIL import Image

from files_manager.config import Settings
from files_manager.container import ServiceContainer


@pytest.fixture(autouse=True)
def reset_env_vars() -> Generator[None, None, None]:
    """Reset environment variables before each test"""
    # Store original env vars
    original_env = os.environ.copy()

    # Clear Files Manager env vars
    files_manager_vars = [
        "HOST",
        "PORT",
        "ENVIRONMENT",
        "NODE_ENV",
        "LOG_LEVEL",
        "DATABASE_URL",
        "REDIS_HOST",
        "REDIS_PORT",
        "REDIS_PASSWORD",
        "REDIS_DB",
        "FOLDER_PATH",
        "SESSION_TTL_SECONDS",
        "PAGE_SIZE",
        "JOB_QUEUE_BACKEND",
        "WORKER_POLL_TIMEOUT",
    ]

    for var in files_manager_vars:
        os.environ.pop(var, None)

    yield

    # Restore original env vars
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings for a single process: in-memory SQLite, memory queues, tmp blobs"""
    return Settings(
        _env_file=None,
        database_url="sqlite://",
        folder_path=str(tmp_path / "files"),
        job_queue_backend="memory",
    )


@pytest.fixture
def redis_client():
    """Isolated fake Redis server per test"""
    return fakeredis.FakeAsyncRedis(server=fakeredis.FakeServer(), decode_responses=True)


@pytest.fixture
def container(settings, redis_client) -> Generator[ServiceContainer, None, None]:
    """Service container with its database and blob folder ready"""
    container = ServiceContainer(settings, redis_client=redis_client)
    container.database.initialize()
    container.blobs.ensure_folder()
    yield container
    container.database.close()


def basic_credentials(email: str, password: str) -> str:
    return base64.b64encode(f"{email}:{password}".encode()).decode()


@pytest.fixture
def login(container):
    """Register a user (if needed) and return a session token"""

    async def _login(email: str = "a@x.com", password: str = "pw1") -> str:
        if await container.metadata.find_user_by_email(email) is None:
            await container.users.register(email, password)
        return await container.access.authenticate(basic_credentials(email, password))

    return _login


@pytest.fixture
def png_bytes() -> bytes:
    """An 800x600 PNG image"""
    image = Image.new("RGB", (800, 600), (30, 120, 200))
    output = BytesIO()
    image.save(output, format="PNG")
    return output.getvalue()


@pytest.fixture
def png_base64(png_bytes) -> str:
    return base64.b64encode(png_bytes).decode()
