"""In-memory repositories used by the API and tests."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from typing import Any
from uuid import uuid4

from fund_portal.schemas.auth import Role


@dataclass(slots=True)
class UserRecord:
    id: str
    name: str
    email: str
    role: Role
    password_hash: str
    created_at: datetime


@dataclass(slots=True)
class FundRecord:
    id: str
    name: str
    chain_id: str
    asset_type: str
    current_nav: float
    intraday_yield: float
    total_aum: float
    updated_at: datetime
    previous_nav: float | None = None
    inception_date: date | None = None


@dataclass(slots=True)
class PortfolioRecord:
    investor_id: str
    fund_id: str
    shares: float
    accrued_yield: float
    updated_at: datetime
    last_yield_withdrawal: datetime | None = None


@dataclass(slots=True)
class NavSnapshotRecord:
    id: str
    fund_id: str
    nav: float
    timestamp: datetime
    source: str


@dataclass(slots=True)
class YieldSnapshotRecord:
    id: str
    fund_id: str
    yield_pct: float
    timestamp: datetime


@dataclass(slots=True)
class AuditLogRecord:
    id: str
    actor: str
    action: str
    target: str
    timestamp: datetime
    metadata: dict[str, Any] = field(default_factory=dict)


def _newest_first(records: list, key: Callable[[Any], datetime]) -> list:
    # Reverse before the stable sort so equal timestamps keep insertion order newest-first.
    return sorted(reversed(records), key=key, reverse=True)


@dataclass(slots=True)
class InMemoryStore:
    """Simple, deterministic persistence layer keyed by entity id."""

    users: dict[str, UserRecord] = field(default_factory=dict)
    funds: dict[str, FundRecord] = field(default_factory=dict)
    portfolios: dict[tuple[str, str], PortfolioRecord] = field(default_factory=dict)
    nav_snapshots: list[NavSnapshotRecord] = field(default_factory=list)
    yield_snapshots: list[YieldSnapshotRecord] = field(default_factory=list)
    audit_logs: list[AuditLogRecord] = field(default_factory=list)
    fund_write_count: int = 0
    portfolio_write_count: int = 0

    def create_user(
        self,
        *,
        user_id: str,
        name: str,
        email: str,
        role: Role,
        password_hash: str,
    ) -> UserRecord:
        user = UserRecord(
            id=user_id,
            name=name,
            email=email,
            role=role,
            password_hash=password_hash,
            created_at=datetime.now(UTC),
        )
        self.users[user.id] = user
        return user

    def get_user(self, user_id: str) -> UserRecord | None:
        return self.users.get(user_id)

    def get_user_by_email(self, email: str) -> UserRecord | None:
        normalized = email.strip().lower()
        for user in self.users.values():
            if user.email.lower() == normalized:
                return user
        return None

    def create_fund(
        self,
        *,
        fund_id: str,
        name: str,
        chain_id: str,
        asset_type: str,
        current_nav: float,
        intraday_yield: float,
        total_aum: float,
        previous_nav: float | None = None,
        inception_date: date | None = None,
    ) -> FundRecord:
        fund = FundRecord(
            id=fund_id,
            name=name,
            chain_id=chain_id,
            asset_type=asset_type,
            current_nav=current_nav,
            previous_nav=previous_nav,
            intraday_yield=intraday_yield,
            total_aum=total_aum,
            inception_date=inception_date,
            updated_at=datetime.now(UTC),
        )
        self.funds[fund.id] = fund
        self.fund_write_count += 1
        return fund

    def get_fund(self, fund_id: str) -> FundRecord | None:
        return self.funds.get(fund_id)

    def list_funds(self) -> list[FundRecord]:
        return sorted(self.funds.values(), key=lambda record: record.id)

    def update_fund(self, fund_id: str, **changes: Any) -> FundRecord | None:
        fund = self.funds.get(fund_id)
        if fund is None:
            return None
        for name, value in changes.items():
            setattr(fund, name, value)
        fund.updated_at = datetime.now(UTC)
        self.fund_write_count += 1
        return fund

    def get_portfolio(self, investor_id: str, fund_id: str) -> PortfolioRecord | None:
        return self.portfolios.get((investor_id, fund_id))

    def list_portfolios_for_investor(self, investor_id: str) -> list[PortfolioRecord]:
        portfolios = [record for record in self.portfolios.values() if record.investor_id == investor_id]
        portfolios.sort(key=lambda record: record.fund_id)
        return portfolios

    def upsert_portfolio(
        self,
        *,
        investor_id: str,
        fund_id: str,
        shares_increment: float,
    ) -> PortfolioRecord:
        now = datetime.now(UTC)
        portfolio = self.portfolios.get((investor_id, fund_id))
        if portfolio is None:
            portfolio = PortfolioRecord(
                investor_id=investor_id,
                fund_id=fund_id,
                shares=shares_increment,
                accrued_yield=0.0,
                updated_at=now,
            )
            self.portfolios[(investor_id, fund_id)] = portfolio
        else:
            portfolio.shares += shares_increment
            portfolio.updated_at = now
        self.portfolio_write_count += 1
        return portfolio

    def update_portfolio(self, investor_id: str, fund_id: str, **changes: Any) -> PortfolioRecord | None:
        portfolio = self.portfolios.get((investor_id, fund_id))
        if portfolio is None:
            return None
        for name, value in changes.items():
            setattr(portfolio, name, value)
        portfolio.updated_at = datetime.now(UTC)
        self.portfolio_write_count += 1
        return portfolio

    def create_nav_snapshot(
        self,
        *,
        fund_id: str,
        nav: float,
        source: str,
        timestamp: datetime | None = None,
    ) -> NavSnapshotRecord:
        snapshot = NavSnapshotRecord(
            id=str(uuid4()),
            fund_id=fund_id,
            nav=nav,
            timestamp=timestamp or datetime.now(UTC),
            source=source,
        )
        self.nav_snapshots.append(snapshot)
        return snapshot

    def list_nav_snapshots(self, fund_id: str) -> list[NavSnapshotRecord]:
        return _newest_first(
            [record for record in self.nav_snapshots if record.fund_id == fund_id],
            key=lambda record: record.timestamp,
        )

    def create_yield_snapshot(
        self,
        *,
        fund_id: str,
        yield_pct: float,
        timestamp: datetime | None = None,
    ) -> YieldSnapshotRecord:
        snapshot = YieldSnapshotRecord(
            id=str(uuid4()),
            fund_id=fund_id,
            yield_pct=yield_pct,
            timestamp=timestamp or datetime.now(UTC),
        )
        self.yield_snapshots.append(snapshot)
        return snapshot

    def list_yield_snapshots(self, fund_id: str) -> list[YieldSnapshotRecord]:
        return _newest_first(
            [record for record in self.yield_snapshots if record.fund_id == fund_id],
            key=lambda record: record.timestamp,
        )

    def create_audit_log(
        self,
        *,
        actor: str,
        action: str,
        target: str,
        metadata: dict[str, Any] | None = None,
        timestamp: datetime | None = None,
    ) -> AuditLogRecord:
        entry = AuditLogRecord(
            id=str(uuid4()),
            actor=actor,
            action=action,
            target=target,
            timestamp=timestamp or datetime.now(UTC),
            metadata=dict(metadata or {}),
        )
        self.audit_logs.append(entry)
        return entry

    def list_audit_logs_for_target(self, target: str) -> list[AuditLogRecord]:
        return _newest_first(
            [record for record in self.audit_logs if record.target == target],
            key=lambda record: record.timestamp,
        )

    def list_audit_logs_for_actor(self, actor: str, actions: set[str] | None = None) -> list[AuditLogRecord]:
        return _newest_first(
            [
                record
                for record in self.audit_logs
                if record.actor == actor and (actions is None or record.action in actions)
            ],
            key=lambda record: record.timestamp,
        )
