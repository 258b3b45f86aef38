"""Fund API schemas."""

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, Field


class Fund(BaseModel):
    id: str
    name: str
    chain_id: str
    asset_type: str
    current_nav: float
    previous_nav: float | None = None
    intraday_yield: float
    total_aum: float
    inception_date: date | None = None
    updated_at: datetime


class NavSnapshot(BaseModel):
    id: str
    fund_id: str
    nav: float
    timestamp: datetime
    source: str


class YieldSnapshot(BaseModel):
    id: str
    fund_id: str
    yield_pct: float
    timestamp: datetime


class AuditLog(BaseModel):
    id: str
    actor: str
    action: str
    target: str
    timestamp: datetime
    metadata: dict[str, Any] = Field(default_factory=dict)


class UpdateNavRequest(BaseModel):
    nav: float = Field(gt=0, allow_inf_nan=False)
    source: str = Field(default="system", min_length=1)
