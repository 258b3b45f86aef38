"""User service layer."""

from fund_portal.errors import ApiError
from fund_portal.repositories.memory import InMemoryStore, UserRecord
from fund_portal.schemas.user import Holding, User


class UserService:
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    def get_user(self, *, user_id: str) -> User:
        record = self._store.get_user(user_id)
        if record is None:
            raise ApiError(status_code=404, code="RESOURCE_NOT_FOUND", message="Resource not found")
        return self._to_user(record)

    def find_user(self, *, user_id: str) -> User | None:
        record = self._store.get_user(user_id)
        return self._to_user(record) if record is not None else None

    def _to_user(self, record: UserRecord) -> User:
        holdings = []
        for portfolio in self._store.list_portfolios_for_investor(record.id):
            fund = self._store.get_fund(portfolio.fund_id)
            holdings.append(
                Holding(
                    fund_id=portfolio.fund_id,
                    fund_name=fund.name if fund else None,
                    shares=portfolio.shares,
                )
            )
        return User(
            id=record.id,
            name=record.name,
            email=record.email,
            role=record.role,
            holdings=holdings,
        )
