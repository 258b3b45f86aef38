"""Fund service layer."""

import logging

from fund_portal.domain.authorization import NAV_WRITER_ROLES, describe_actor, enforce, require_role
from fund_portal.errors import ApiError
from fund_portal.repositories.memory import AuditLogRecord, FundRecord, InMemoryStore
from fund_portal.schemas.auth import Identity
from fund_portal.schemas.fund import AuditLog, Fund, NavSnapshot, YieldSnapshot

logger = logging.getLogger(__name__)


class FundService:
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    def list_funds(self) -> list[Fund]:
        return [self._to_fund(record) for record in self._store.list_funds()]

    def get_fund(self, *, fund_id: str) -> Fund:
        return self._to_fund(self._require_fund(fund_id))

    def nav_history(self, *, fund_id: str) -> list[NavSnapshot]:
        return [
            NavSnapshot(
                id=record.id,
                fund_id=record.fund_id,
                nav=record.nav,
                timestamp=record.timestamp,
                source=record.source,
            )
            for record in self._store.list_nav_snapshots(fund_id)
        ]

    def yield_history(self, *, fund_id: str) -> list[YieldSnapshot]:
        return [
            YieldSnapshot(
                id=record.id,
                fund_id=record.fund_id,
                yield_pct=record.yield_pct,
                timestamp=record.timestamp,
            )
            for record in self._store.list_yield_snapshots(fund_id)
        ]

    def audit_logs(self, *, fund_id: str) -> list[AuditLog]:
        return [self._to_audit_log(record) for record in self._store.list_audit_logs_for_target(fund_id)]

    def update_nav(
        self,
        *,
        identity: Identity | None,
        fund_id: str,
        nav: float,
        source: str = "system",
    ) -> NavSnapshot:
        enforce("update_nav", lambda: require_role(identity, NAV_WRITER_ROLES))

        fund = self._require_fund(fund_id)
        previous_nav = fund.current_nav
        self._store.update_fund(fund_id, current_nav=nav, previous_nav=previous_nav)
        snapshot = self._store.create_nav_snapshot(fund_id=fund_id, nav=nav, source=source)
        # The caller-supplied source labels the snapshot; the audit actor is always the caller.
        self._store.create_audit_log(
            actor=identity.id if identity else source,
            action="NAV_UPDATE",
            target=fund_id,
            timestamp=snapshot.timestamp,
            metadata={
                "previous_nav": previous_nav,
                "new_nav": nav,
                "source": source,
                "performed_by": identity.id if identity else None,
            },
        )
        logger.info(
            "fund.nav_updated fund_id=%s principal_id=%s previous_nav=%s new_nav=%s",
            fund_id,
            describe_actor(identity),
            previous_nav,
            nav,
        )
        return NavSnapshot(
            id=snapshot.id,
            fund_id=snapshot.fund_id,
            nav=snapshot.nav,
            timestamp=snapshot.timestamp,
            source=snapshot.source,
        )

    def _require_fund(self, fund_id: str) -> FundRecord:
        record = self._store.get_fund(fund_id)
        if record is None:
            raise ApiError(status_code=404, code="RESOURCE_NOT_FOUND", message="Resource not found")
        return record

    @staticmethod
    def _to_fund(record: FundRecord) -> Fund:
        return Fund(
            id=record.id,
            name=record.name,
            chain_id=record.chain_id,
            asset_type=record.asset_type,
            current_nav=record.current_nav,
            previous_nav=record.previous_nav,
            intraday_yield=record.intraday_yield,
            total_aum=record.total_aum,
            inception_date=record.inception_date,
            updated_at=record.updated_at,
        )

    @staticmethod
    def _to_audit_log(record: AuditLogRecord) -> AuditLog:
        return AuditLog(
            id=record.id,
            actor=record.actor,
            action=record.action,
            target=record.target,
            timestamp=record.timestamp,
            metadata=record.metadata,
        )
