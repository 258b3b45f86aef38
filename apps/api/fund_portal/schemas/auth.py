"""Authentication schemas."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
    ADMIN = "ADMIN"
    MANAGER = "MANAGER"
    INVESTOR = "INVESTOR"
    GUEST = "GUEST"


# Roles a token may carry; GUEST only ever describes the absence of an identity.
TOKEN_ROLES: frozenset[Role] = frozenset({Role.ADMIN, Role.MANAGER, Role.INVESTOR})


class Identity(BaseModel):
    """Resolved principal for the duration of one request."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    role: Role
    name: str | None = None
    email: str | None = None


class RequestContext(BaseModel):
    """Per-request view handed to operation handlers."""

    model_config = ConfigDict(frozen=True)

    identity: Identity | None = None
    correlation_id: str = ""

    @property
    def is_authenticated(self) -> bool:
        return self.identity is not None

    @property
    def role(self) -> Role:
        return self.identity.role if self.identity is not None else Role.GUEST


class LoginRequest(BaseModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class UserView(BaseModel):
    id: str
    role: Role
    name: str | None = None
    email: str | None = None


class LoginResponse(BaseModel):
    token: str
    user: UserView
