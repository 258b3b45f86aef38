"""User API schemas."""

from pydantic import BaseModel

from fund_portal.schemas.auth import Role


class Holding(BaseModel):
    fund_id: str
    fund_name: str | None = None
    shares: float


class User(BaseModel):
    id: str
    name: str | None = None
    email: str | None = None
    role: Role
    holdings: list[Holding] = []
