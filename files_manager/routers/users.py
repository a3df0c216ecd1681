"""User registration and profile"""

from fastapi import APIRouter

from files_manager.routers.dependencies import ContainerDep, TokenHeader
from files_manager.schemas import UserCreate, UserRead

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=UserRead, status_code=201)
async def create_user(body: UserCreate, container: ContainerDep):
    user = await container.users.register(body.email, body.password)
    return UserRead.from_user(user)


@router.get("/me", response_model=UserRead)
async def get_me(container: ContainerDep, x_token: TokenHeader = None):
    user = await container.access.current_user(x_token)
    return UserRead.from_user(user)
