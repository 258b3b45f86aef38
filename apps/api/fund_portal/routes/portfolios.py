"""Portfolio routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path

from fund_portal.routes.dependencies import get_portfolio_service, get_request_context
from fund_portal.schemas.auth import RequestContext
from fund_portal.schemas.error import (
    AccessDeniedErrorResponse,
    InsufficientSharesError,
    NoLeakNotFoundError,
    NoYieldAvailableError,
    UnauthenticatedErrorResponse,
)
from fund_portal.schemas.portfolio import (
    MintSharesRequest,
    MintSharesResult,
    Portfolio,
    RedeemSharesRequest,
    RedeemSharesResult,
    Transaction,
    WithdrawYieldRequest,
    WithdrawYieldResult,
)
from fund_portal.services.portfolios import PortfolioService

router = APIRouter(tags=["Portfolios"])

_AUTH_RESPONSES = {
    401: {"model": UnauthenticatedErrorResponse},
    403: {"model": AccessDeniedErrorResponse},
}


@router.get(
    "/portfolios/{investorId}/{fundId}",
    response_model=Portfolio,
    responses={**_AUTH_RESPONSES, 404: {"model": NoLeakNotFoundError}},
)
async def get_portfolio(
    investor_id: Annotated[str, Path(alias="investorId")],
    fund_id: Annotated[str, Path(alias="fundId")],
    context: Annotated[RequestContext, Depends(get_request_context)],
    service: Annotated[PortfolioService, Depends(get_portfolio_service)],
) -> Portfolio:
    return service.get_portfolio(identity=context.identity, investor_id=investor_id, fund_id=fund_id)


@router.get("/investors/{investorId}/transactions", response_model=list[Transaction])
async def list_transactions(
    investor_id: Annotated[str, Path(alias="investorId")],
    context: Annotated[RequestContext, Depends(get_request_context)],
    service: Annotated[PortfolioService, Depends(get_portfolio_service)],
) -> list[Transaction]:
    return service.list_transactions(identity=context.identity, investor_id=investor_id)


@router.post(
    "/portfolios/mint",
    response_model=MintSharesResult,
    responses={**_AUTH_RESPONSES, 404: {"model": NoLeakNotFoundError}},
)
async def mint_shares(
    payload: MintSharesRequest,
    context: Annotated[RequestContext, Depends(get_request_context)],
    service: Annotated[PortfolioService, Depends(get_portfolio_service)],
) -> MintSharesResult:
    return service.mint_shares(
        identity=context.identity,
        fund_id=payload.fund_id,
        investor_id=payload.investor_id,
        amount_usd=payload.amount_usd,
    )


@router.post(
    "/portfolios/redeem",
    response_model=RedeemSharesResult,
    responses={
        **_AUTH_RESPONSES,
        404: {"model": NoLeakNotFoundError},
        409: {"model": InsufficientSharesError},
    },
)
async def redeem_shares(
    payload: RedeemSharesRequest,
    context: Annotated[RequestContext, Depends(get_request_context)],
    service: Annotated[PortfolioService, Depends(get_portfolio_service)],
) -> RedeemSharesResult:
    return service.redeem_shares(
        identity=context.identity,
        fund_id=payload.fund_id,
        investor_id=payload.investor_id,
        shares=payload.shares,
    )


@router.post(
    "/portfolios/withdraw-yield",
    response_model=WithdrawYieldResult,
    responses={
        **_AUTH_RESPONSES,
        404: {"model": NoLeakNotFoundError},
        409: {"model": NoYieldAvailableError},
    },
)
async def withdraw_yield(
    payload: WithdrawYieldRequest,
    context: Annotated[RequestContext, Depends(get_request_context)],
    service: Annotated[PortfolioService, Depends(get_portfolio_service)],
) -> WithdrawYieldResult:
    return service.withdraw_yield(
        identity=context.identity,
        fund_id=payload.fund_id,
        investor_id=payload.investor_id,
    )
