"""Authentication routes."""

from typing import Annotated

from fastapi import APIRouter, Depends

from fund_portal.routes.dependencies import get_auth_service, get_request_context
from fund_portal.schemas.auth import LoginRequest, LoginResponse, RequestContext
from fund_portal.schemas.error import UnauthenticatedErrorResponse
from fund_portal.schemas.user import User
from fund_portal.services.auth import AuthService

router = APIRouter(tags=["Auth"])


@router.post(
    "/auth/login",
    response_model=LoginResponse,
    responses={401: {"model": UnauthenticatedErrorResponse}},
)
async def login(
    payload: LoginRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> LoginResponse:
    return service.login(email=payload.email, password=payload.password)


@router.get("/me", response_model=User | None)
async def get_me(
    context: Annotated[RequestContext, Depends(get_request_context)],
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> User | None:
    return service.me(identity=context.identity)
