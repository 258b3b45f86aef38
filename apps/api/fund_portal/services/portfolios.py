"""Portfolio service layer: holdings, minting, redemption and yield withdrawal."""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from fund_portal.domain.authorization import describe_actor, enforce, require_can_act_for
from fund_portal.errors import ApiError
from fund_portal.repositories.memory import AuditLogRecord, InMemoryStore, PortfolioRecord
from fund_portal.schemas.auth import Identity
from fund_portal.schemas.portfolio import (
    MintSharesResult,
    Portfolio,
    RedeemSharesResult,
    Transaction,
    TransactionType,
    WithdrawYieldResult,
)

logger = logging.getLogger(__name__)

TRANSACTION_ACTIONS: dict[str, TransactionType] = {
    "MINT": TransactionType.MINT,
    "REDEEM": TransactionType.REDEEM,
    "YIELD_WITHDRAWAL": TransactionType.YIELD_PAYMENT,
}

# Served to callers who may not see the investor's history.
PLACEHOLDER_TRANSACTIONS: tuple[Transaction, ...] = (
    Transaction(
        id="t1",
        type=TransactionType.MINT,
        date=datetime(2023, 4, 1, 10, 30, tzinfo=UTC),
        amount=5000.0,
        shares=51.02,
        nav_price=97.98,
    ),
    Transaction(
        id="t2",
        type=TransactionType.YIELD_PAYMENT,
        date=datetime(2023, 4, 2, 14, 15, tzinfo=UTC),
        amount=120.50,
    ),
    Transaction(
        id="t3",
        type=TransactionType.REDEEM,
        date=datetime(2023, 4, 5, 9, 45, tzinfo=UTC),
        amount=2000.0,
        shares=20.28,
        nav_price=98.61,
    ),
    Transaction(
        id="t4",
        type=TransactionType.MINT,
        date=datetime(2023, 4, 10, 11, 20, tzinfo=UTC),
        amount=10000.0,
        shares=100.87,
        nav_price=99.14,
    ),
)


def _not_found() -> ApiError:
    return ApiError(status_code=404, code="RESOURCE_NOT_FOUND", message="Resource not found")


class PortfolioService:
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    def get_portfolio(self, *, identity: Identity | None, investor_id: str, fund_id: str) -> Portfolio:
        enforce("portfolio", lambda: require_can_act_for(identity, investor_id))

        record = self._store.get_portfolio(investor_id, fund_id)
        if record is None:
            raise _not_found()
        return self._to_portfolio(record)

    def list_transactions(self, *, identity: Identity | None, investor_id: str) -> list[Transaction]:
        if not enforce("investor_transactions", lambda: require_can_act_for(identity, investor_id)):
            return list(PLACEHOLDER_TRANSACTIONS)

        entries = self._store.list_audit_logs_for_actor(investor_id, actions=set(TRANSACTION_ACTIONS))
        return [self._to_transaction(entry) for entry in entries]

    def mint_shares(
        self,
        *,
        identity: Identity | None,
        fund_id: str,
        investor_id: str,
        amount_usd: float,
    ) -> MintSharesResult:
        enforce("mint_shares", lambda: require_can_act_for(identity, investor_id))

        fund = self._store.get_fund(fund_id)
        if fund is None:
            raise _not_found()

        nav = fund.current_nav
        shares_minted = amount_usd / nav
        self._store.upsert_portfolio(investor_id=investor_id, fund_id=fund_id, shares_increment=shares_minted)
        self._store.update_fund(fund_id, total_aum=fund.total_aum + amount_usd)

        timestamp = datetime.now(UTC)
        self._store.create_audit_log(
            actor=investor_id,
            action="MINT",
            target=fund_id,
            timestamp=timestamp,
            metadata={
                "shares_minted": shares_minted,
                "amount_usd": amount_usd,
                "nav_used": nav,
                "performed_by": identity.id if identity else None,
            },
        )
        logger.info(
            "portfolio.minted fund_id=%s actor=%s shares=%.6f nav=%s",
            fund_id,
            describe_actor(identity),
            shares_minted,
            nav,
        )
        return MintSharesResult(shares_minted=shares_minted, nav_used=nav, timestamp=timestamp)

    def redeem_shares(
        self,
        *,
        identity: Identity | None,
        fund_id: str,
        investor_id: str,
        shares: float,
    ) -> RedeemSharesResult:
        enforce("redeem_shares", lambda: require_can_act_for(identity, investor_id))

        portfolio = self._store.get_portfolio(investor_id, fund_id)
        if portfolio is None:
            raise _not_found()
        if portfolio.shares < shares:
            raise ApiError(
                status_code=409,
                code="INSUFFICIENT_SHARES",
                message="Insufficient shares",
                details={"available_shares": portfolio.shares, "requested_shares": shares},
            )

        fund = self._store.get_fund(fund_id)
        if fund is None:
            raise _not_found()

        nav = fund.current_nav
        amount_usd = round(shares * nav, 2)
        self._store.update_portfolio(investor_id, fund_id, shares=portfolio.shares - shares)
        self._store.update_fund(fund_id, total_aum=max(0.0, fund.total_aum - amount_usd))

        timestamp = datetime.now(UTC)
        self._store.create_audit_log(
            actor=investor_id,
            action="REDEEM",
            target=fund_id,
            timestamp=timestamp,
            metadata={
                "shares_redeemed": shares,
                "amount_usd": amount_usd,
                "nav_used": nav,
                "performed_by": identity.id if identity else None,
            },
        )
        logger.info(
            "portfolio.redeemed fund_id=%s actor=%s shares=%.6f amount_usd=%.2f",
            fund_id,
            describe_actor(identity),
            shares,
            amount_usd,
        )
        return RedeemSharesResult(
            shares_redeemed=shares,
            nav_used=nav,
            amount_usd=amount_usd,
            timestamp=timestamp,
        )

    def withdraw_yield(
        self,
        *,
        identity: Identity | None,
        fund_id: str,
        investor_id: str,
    ) -> WithdrawYieldResult:
        enforce("withdraw_yield", lambda: require_can_act_for(identity, investor_id))

        portfolio = self._store.get_portfolio(investor_id, fund_id)
        if portfolio is None:
            raise _not_found()
        if portfolio.accrued_yield <= 0:
            raise ApiError(status_code=409, code="NO_YIELD_AVAILABLE", message="No yield to withdraw")

        amount = portfolio.accrued_yield
        timestamp = datetime.now(UTC)
        self._store.update_portfolio(
            investor_id,
            fund_id,
            accrued_yield=0.0,
            last_yield_withdrawal=timestamp,
        )
        self._store.create_audit_log(
            actor=investor_id,
            action="YIELD_WITHDRAWAL",
            target=fund_id,
            timestamp=timestamp,
            metadata={"amount": amount, "performed_by": identity.id if identity else None},
        )
        logger.info(
            "portfolio.yield_withdrawn fund_id=%s actor=%s amount=%.2f",
            fund_id,
            describe_actor(identity),
            amount,
        )
        return WithdrawYieldResult(amount=amount, timestamp=timestamp)

    def _to_portfolio(self, record: PortfolioRecord) -> Portfolio:
        fund = self._store.get_fund(record.fund_id)
        return Portfolio(
            investor_id=record.investor_id,
            fund_id=record.fund_id,
            fund_name=fund.name if fund else None,
            shares=record.shares,
            accrued_yield=record.accrued_yield,
            last_yield_withdrawal=record.last_yield_withdrawal,
        )

    @staticmethod
    def _to_transaction(entry: AuditLogRecord) -> Transaction:
        kind = TRANSACTION_ACTIONS[entry.action]
        metadata = entry.metadata
        if kind is TransactionType.MINT:
            shares = metadata.get("shares_minted")
        elif kind is TransactionType.REDEEM:
            shares = metadata.get("shares_redeemed")
        else:
            shares = None
        amount = metadata.get("amount_usd", metadata.get("amount", 0.0))
        return Transaction(
            id=entry.id,
            type=kind,
            date=entry.timestamp,
            amount=float(amount),
            shares=shares,
            nav_price=metadata.get("nav_used"),
        )
