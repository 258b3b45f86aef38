"""Coarse role and ownership checks evaluated per operation."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from enum import Enum

from fund_portal.core.logging_safety import principal_tag
from fund_portal.errors import AccessDeniedError, AuthorizationError, UnauthenticatedError
from fund_portal.schemas.auth import Identity, Role

logger = logging.getLogger(__name__)


class OperationPolicy(str, Enum):
    """What an operation does when its authorization check fails."""

    RAISE = "raise"
    FALLBACK = "fallback"


# Reads marked FALLBACK serve placeholder data instead of an error so the
# dashboard stays usable for guests. Everything else surfaces the failure.
OPERATION_POLICIES: dict[str, OperationPolicy] = {
    "me": OperationPolicy.FALLBACK,
    "investor_transactions": OperationPolicy.FALLBACK,
    "portfolio": OperationPolicy.RAISE,
    "update_nav": OperationPolicy.RAISE,
    "mint_shares": OperationPolicy.RAISE,
    "redeem_shares": OperationPolicy.RAISE,
    "withdraw_yield": OperationPolicy.RAISE,
}

NAV_WRITER_ROLES: frozenset[Role] = frozenset({Role.ADMIN, Role.MANAGER})


def policy_for(operation: str) -> OperationPolicy:
    return OPERATION_POLICIES.get(operation, OperationPolicy.RAISE)


def require_authenticated(identity: Identity | None) -> Identity:
    if identity is None:
        raise UnauthenticatedError()
    return identity


def require_role(identity: Identity | None, allowed_roles: Iterable[Role]) -> Identity:
    user = require_authenticated(identity)
    allowed = frozenset(allowed_roles)
    if user.role not in allowed:
        required = sorted(role.value for role in allowed)
        raise AccessDeniedError(
            message=f"Access denied. Required roles: {', '.join(required)}",
            details={"required_roles": required, "role": user.role.value},
        )
    return user


def can_act_for(identity: Identity | None, target_investor_id: str) -> bool:
    if identity is None:
        return False
    return identity.role is Role.ADMIN or identity.id == target_investor_id


def require_can_act_for(identity: Identity | None, target_investor_id: str) -> Identity:
    user = require_authenticated(identity)
    if not can_act_for(user, target_investor_id):
        raise AccessDeniedError(message="Not authorized to act for this investor")
    return user


def enforce(operation: str, check: Callable[[], object]) -> bool:
    """Run ``check`` under the operation's failure policy.

    Returns True when the check passes and False when it fails for a
    FALLBACK operation. RAISE operations propagate the authorization error.
    """
    try:
        check()
    except AuthorizationError as exc:
        if policy_for(operation) is OperationPolicy.FALLBACK:
            logger.info(
                "authz.fallback operation=%s code=%s",
                operation,
                exc.payload.code,
            )
            return False
        logger.warning(
            "authz.denied operation=%s code=%s",
            operation,
            exc.payload.code,
        )
        raise
    return True


def describe_actor(identity: Identity | None) -> str:
    """Stable, non-reversible actor tag for log lines."""
    if identity is None:
        return "guest"
    return principal_tag(identity.id)


__all__ = [
    "NAV_WRITER_ROLES",
    "OPERATION_POLICIES",
    "OperationPolicy",
    "can_act_for",
    "describe_actor",
    "enforce",
    "policy_for",
    "require_authenticated",
    "require_can_act_for",
    "require_role",
]
