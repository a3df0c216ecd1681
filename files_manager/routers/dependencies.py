"""FastAPI dependencies shared by the routers"""

from typing import Annotated, Optional

from fastapi import Depends, Header, Request

from files_manager.container import ServiceContainer


def get_container(request: Request) -> ServiceContainer:
    return request.app.state.container


ContainerDep = Annotated[ServiceContainer, Depends(get_container)]
TokenHeader = Annotated[Optional[str], Header(alias="X-Token")]


async def require_session(container: ContainerDep, x_token: TokenHeader = None) -> str:
    """Reject calls without a valid session before the request body is validated"""
    return await container.access.resolve_session(x_token)
