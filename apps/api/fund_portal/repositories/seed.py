"""Demo data loaded into the in-memory store at startup."""

from __future__ import annotations

import logging
import math
from datetime import UTC, date, datetime, time, timedelta

from fund_portal.core.passwords import hash_password
from fund_portal.repositories.memory import InMemoryStore
from fund_portal.schemas.auth import Role

logger = logging.getLogger(__name__)

DEMO_FUND_ID = "F1"
HISTORY_DAYS = 30

# (id, name, email, password, role); ids line up with the demo bearer tokens.
DEMO_USERS: tuple[tuple[str, str, str, str, Role], ...] = (
    ("A1", "Admin User", "admin@example.com", "admin123", Role.ADMIN),
    ("I1", "John Investor", "investor@example.com", "investor123", Role.INVESTOR),
    ("M1", "Fund Manager", "manager@example.com", "manager123", Role.MANAGER),
)


def history_points(days: int = HISTORY_DAYS) -> list[tuple[int, float, float]]:
    """Deterministic (day offset, nav, yield) series ending yesterday."""
    points = []
    for index in range(days):
        nav = round(100 + 4.5 * math.sin(index / 4) + index * 0.12, 2)
        yield_pct = round(1.25 + 0.25 * math.cos(index / 5), 4)
        points.append((days - index, nav, yield_pct))
    return points


def seed_demo_store(store: InMemoryStore, *, bcrypt_rounds: int = 12, today: date | None = None) -> InMemoryStore:
    for user_id, name, email, password, role in DEMO_USERS:
        store.create_user(
            user_id=user_id,
            name=name,
            email=email,
            role=role,
            password_hash=hash_password(password, rounds=bcrypt_rounds),
        )

    store.create_fund(
        fund_id=DEMO_FUND_ID,
        name="OnChain Growth Fund",
        chain_id="ETH",
        asset_type="Multi-Strategy",
        current_nav=105.0,
        previous_nav=100.0,
        intraday_yield=1.5,
        total_aum=2_500_000.0,
        inception_date=date(2023, 4, 1),
    )
    store.upsert_portfolio(investor_id="I1", fund_id=DEMO_FUND_ID, shares_increment=100.0)

    midnight = datetime.combine(today or datetime.now(UTC).date(), time.min, tzinfo=UTC)
    for days_ago, nav, yield_pct in history_points():
        timestamp = midnight - timedelta(days=days_ago)
        store.create_nav_snapshot(fund_id=DEMO_FUND_ID, nav=nav, source="system", timestamp=timestamp)
        store.create_yield_snapshot(fund_id=DEMO_FUND_ID, yield_pct=yield_pct, timestamp=timestamp)

    store.create_audit_log(
        actor="system",
        action="NAV_SEED",
        target=DEMO_FUND_ID,
        metadata={"message": "Initial NAV seeded"},
    )

    logger.info(
        "store.seeded users=%s funds=%s nav_points=%s",
        len(store.users),
        len(store.funds),
        len(store.nav_snapshots),
    )
    return store
