"""User routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path

from fund_portal.routes.dependencies import get_user_service
from fund_portal.schemas.error import NoLeakNotFoundError
from fund_portal.schemas.user import User
from fund_portal.services.users import UserService

router = APIRouter(prefix="/users", tags=["Users"])


@router.get(
    "/{userId}",
    response_model=User,
    responses={404: {"model": NoLeakNotFoundError}},
)
async def get_user(
    user_id: Annotated[str, Path(alias="userId")],
    service: Annotated[UserService, Depends(get_user_service)],
) -> User:
    return service.get_user(user_id=user_id)
