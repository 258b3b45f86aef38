"""API error response schemas."""

from typing import Any
from typing import Literal

from pydantic import BaseModel

from fund_portal.schemas.auth import Role


class ErrorResponse(BaseModel):
    code: str
    message: str
    details: dict[str, Any] | None = None


class UnauthenticatedErrorResponse(BaseModel):
    code: Literal["UNAUTHENTICATED", "INVALID_CREDENTIALS"]
    message: str


class RoleDeniedErrorDetails(BaseModel):
    required_roles: list[Role]
    role: Role


class AccessDeniedErrorResponse(BaseModel):
    code: Literal["ACCESS_DENIED"]
    message: str
    details: RoleDeniedErrorDetails | None = None


class NoLeakNotFoundError(BaseModel):
    code: Literal["RESOURCE_NOT_FOUND"]
    message: str


class InsufficientSharesErrorDetails(BaseModel):
    available_shares: float
    requested_shares: float


class InsufficientSharesError(BaseModel):
    code: Literal["INSUFFICIENT_SHARES"]
    message: str
    details: InsufficientSharesErrorDetails


class NoYieldAvailableError(BaseModel):
    code: Literal["NO_YIELD_AVAILABLE"]
    message: str
