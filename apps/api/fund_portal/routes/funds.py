"""Fund routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from fund_portal.routes.dependencies import get_fund_service, get_request_context
from fund_portal.schemas.auth import RequestContext
from fund_portal.schemas.error import (
    AccessDeniedErrorResponse,
    NoLeakNotFoundError,
    UnauthenticatedErrorResponse,
)
from fund_portal.schemas.fund import AuditLog, Fund, NavSnapshot, UpdateNavRequest, YieldSnapshot
from fund_portal.services.funds import FundService

router = APIRouter(prefix="/funds", tags=["Funds"])


@router.get("", response_model=list[Fund])
async def list_funds(service: Annotated[FundService, Depends(get_fund_service)]) -> list[Fund]:
    return service.list_funds()


@router.get(
    "/{fundId}",
    response_model=Fund,
    responses={404: {"model": NoLeakNotFoundError}},
)
async def get_fund(
    fund_id: Annotated[str, Path(alias="fundId")],
    service: Annotated[FundService, Depends(get_fund_service)],
) -> Fund:
    return service.get_fund(fund_id=fund_id)


@router.get("/{fundId}/nav-history", response_model=list[NavSnapshot])
async def get_nav_history(
    fund_id: Annotated[str, Path(alias="fundId")],
    service: Annotated[FundService, Depends(get_fund_service)],
) -> list[NavSnapshot]:
    return service.nav_history(fund_id=fund_id)


@router.get("/{fundId}/yield-history", response_model=list[YieldSnapshot])
async def get_yield_history(
    fund_id: Annotated[str, Path(alias="fundId")],
    service: Annotated[FundService, Depends(get_fund_service)],
) -> list[YieldSnapshot]:
    return service.yield_history(fund_id=fund_id)


@router.get("/{fundId}/audit-logs", response_model=list[AuditLog])
async def get_audit_logs(
    fund_id: Annotated[str, Path(alias="fundId")],
    service: Annotated[FundService, Depends(get_fund_service)],
) -> list[AuditLog]:
    return service.audit_logs(fund_id=fund_id)


@router.post(
    "/{fundId}/nav",
    response_model=NavSnapshot,
    status_code=status.HTTP_201_CREATED,
    responses={
        401: {"model": UnauthenticatedErrorResponse},
        403: {"model": AccessDeniedErrorResponse},
        404: {"model": NoLeakNotFoundError},
    },
)
async def update_nav(
    fund_id: Annotated[str, Path(alias="fundId")],
    payload: UpdateNavRequest,
    context: Annotated[RequestContext, Depends(get_request_context)],
    service: Annotated[FundService, Depends(get_fund_service)],
) -> NavSnapshot:
    return service.update_nav(
        identity=context.identity,
        fund_id=fund_id,
        nav=payload.nav,
        source=payload.source,
    )
