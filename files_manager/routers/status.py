"""Liveness and statistics endpoints"""

from fastapi import APIRouter

from files_manager.routers.dependencies import ContainerDep
from files_manager.schemas import Stats, Status

router = APIRouter(tags=["status"])


@router.get("/status", response_model=Status)
async def get_status(container: ContainerDep):
    return Status(
        redis=await container.cache.ping(),
        db=container.database.is_alive(),
    )


@router.get("/stats", response_model=Stats)
async def get_stats(container: ContainerDep):
    return Stats(**container.database.get_stats())
