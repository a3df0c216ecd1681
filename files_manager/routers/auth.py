"""Login and logout"""

from typing import Annotated, Optional

from fastapi import APIRouter, Header, Response

from files_manager.routers.dependencies import ContainerDep, TokenHeader
from files_manager.schemas import Token

router = APIRouter(tags=["auth"])


@router.get("/connect", response_model=Token)
async def connect(
    container: ContainerDep,
    authorization: Annotated[Optional[str], Header()] = None,
):
    token = await container.access.authenticate_header(authorization)
    return Token(token=token)


@router.get("/disconnect", status_code=204)
async def disconnect(container: ContainerDep, x_token: TokenHeader = None):
    await container.access.end_session(x_token)
    return Response(status_code=204)
