"""File and folder endpoints"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Response

from files_manager.routers.dependencies import ContainerDep, TokenHeader, require_session
from files_manager.schemas import FileCreate, FileRead

router = APIRouter(prefix="/files", tags=["files"])


@router.post(
    "",
    response_model=FileRead,
    status_code=201,
    dependencies=[Depends(require_session)],
)
async def upload(body: FileCreate, container: ContainerDep, x_token: TokenHeader = None):
    entry = await container.files.create_entry(
        x_token,
        name=body.name,
        type=body.type,
        parent_id=body.parentId,
        data=body.data,
        is_public=body.isPublic,
    )
    return FileRead.from_entry(entry)


@router.get("", response_model=List[FileRead])
async def list_files(
    container: ContainerDep,
    x_token: TokenHeader = None,
    parentId: Optional[str] = None,
    page: Optional[str] = None,
):
    entries = await container.files.list_entries(x_token, parent_id=parentId, page=page)
    return [FileRead.from_entry(entry) for entry in entries]


@router.get("/{file_id}", response_model=FileRead)
async def show(file_id: str, container: ContainerDep, x_token: TokenHeader = None):
    entry = await container.files.get_entry(x_token, file_id)
    return FileRead.from_entry(entry)


@router.put("/{file_id}/publish", response_model=FileRead)
async def publish(file_id: str, container: ContainerDep, x_token: TokenHeader = None):
    entry = await container.files.publish(x_token, file_id)
    return FileRead.from_entry(entry)


@router.put("/{file_id}/unpublish", response_model=FileRead)
async def unpublish(file_id: str, container: ContainerDep, x_token: TokenHeader = None):
    entry = await container.files.unpublish(x_token, file_id)
    return FileRead.from_entry(entry)


@router.get("/{file_id}/data")
async def get_data(
    file_id: str,
    container: ContainerDep,
    x_token: TokenHeader = None,
    size: Optional[str] = None,
):
    content, content_type = await container.files.read_content(file_id, size=size, token=x_token)
    return Response(content=content, media_type=content_type)
