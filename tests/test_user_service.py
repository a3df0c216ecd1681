"""Unit tests for user registration"""

import pytest
from unittest.mock import AsyncMock

from files_manager.exceptions import AlreadyExists, MissingField
from files_manager.services.auth_service import hash_password
from files_manager.services.job_queue import JobState, QueuedJob


@pytest.mark.asyncio
async def test_register_stores_hashed_password(container):
    user = await container.users.register("a@x.com", "pw1")

    stored = await container.metadata.find_user_by_id(user.id)
    assert stored.email == "a@x.com"
    assert stored.password == hash_password("pw1")
    assert stored.password != "pw1"


@pytest.mark.asyncio
async def test_register_enqueues_welcome_job(container):
    user = await container.users.register("a@x.com", "pw1")

    assert await container.user_queue.size() == 1
    job = await container.user_queue.dequeue(timeout=1)
    assert job.data == {"userId": user.id}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "email,password,message",
    [(None, "pw1", "Missing email"), ("", "pw1", "Missing email"), ("a@x.com", None, "Missing password")],
)
async def test_register_missing_fields(container, email, password, message):
    with pytest.raises(MissingField) as exc_info:
        await container.users.register(email, password)

    assert exc_info.value.message == message
    assert exc_info.value.status_code == 400


@pytest.mark.asyncio
async def test_register_duplicate_email(container):
    await container.users.register("a@x.com", "pw1")

    with pytest.raises(AlreadyExists) as exc_info:
        await container.users.register("a@x.com", "other")

    assert exc_info.value.message == "Already exist"
    assert container.database.count_users() == 1


@pytest.mark.asyncio
async def test_register_survives_enqueue_failure(container):
    """Test that a queue outage does not fail registration"""
    container.users.user_queue = AsyncMock()
    container.users.user_queue.enqueue.side_effect = ConnectionError("queue down")

    user = await container.users.register("a@x.com", "pw1")

    assert await container.metadata.find_user_by_id(user.id) is not None


@pytest.mark.asyncio
async def test_welcome_worker(container):
    await container.users.register("a@x.com", "pw1")
    welcome_worker = container.create_workers()[1]

    job = await welcome_worker.process_next(timeout=1)

    assert job.state == JobState.DONE


@pytest.mark.asyncio
async def test_welcome_worker_rejects_bad_jobs(container):
    welcome_worker = container.create_workers()[1]

    missing = await welcome_worker.run_job(QueuedJob(id="1", queue="userQueue", data={}))
    unknown = await welcome_worker.run_job(
        QueuedJob(id="2", queue="userQueue", data={"userId": "0" * 32})
    )

    assert missing.state == JobState.FAILED
    assert missing.error == "Missing userId"
    assert unknown.state == JobState.FAILED
    assert unknown.error == "User not found"


@pytest.mark.asyncio
async def test_register_race_on_same_email(container):
    """Test that losing a registration race reports Already exist"""
    await container.users.register("a@x.com", "pw1")
    # Both requests passed the email lookup before either inserted
    container.metadata.find_user_by_email = AsyncMock(return_value=None)

    with pytest.raises(AlreadyExists) as exc_info:
        await container.users.register("a@x.com", "pw2")

    assert exc_info.value.status_code == 400
    assert container.database.count_users() == 1
