"""Portfolio API schemas."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class Portfolio(BaseModel):
    investor_id: str
    fund_id: str
    fund_name: str | None = None
    shares: float
    accrued_yield: float
    last_yield_withdrawal: datetime | None = None


class MintSharesRequest(BaseModel):
    fund_id: str = Field(min_length=1)
    investor_id: str = Field(min_length=1)
    amount_usd: float = Field(gt=0, allow_inf_nan=False)


class MintSharesResult(BaseModel):
    shares_minted: float
    nav_used: float
    timestamp: datetime


class RedeemSharesRequest(BaseModel):
    fund_id: str = Field(min_length=1)
    investor_id: str = Field(min_length=1)
    shares: float = Field(gt=0, allow_inf_nan=False)


class RedeemSharesResult(BaseModel):
    shares_redeemed: float
    nav_used: float
    amount_usd: float
    timestamp: datetime


class WithdrawYieldRequest(BaseModel):
    fund_id: str = Field(min_length=1)
    investor_id: str = Field(min_length=1)


class WithdrawYieldResult(BaseModel):
    amount: float
    timestamp: datetime


class TransactionType(str, Enum):
    MINT = "MINT"
    REDEEM = "REDEEM"
    YIELD_PAYMENT = "YIELD_PAYMENT"


class Transaction(BaseModel):
    id: str
    type: TransactionType
    date: datetime
    amount: float
    shares: float | None = None
    nav_price: float | None = None
    status: str = "CONFIRMED"
