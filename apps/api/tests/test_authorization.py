"""Role gate, ownership and per-operation policy tests."""

from __future__ import annotations

import unittest

from fund_portal.domain.authorization import (
    OPERATION_POLICIES,
    OperationPolicy,
    can_act_for,
    enforce,
    policy_for,
    require_authenticated,
    require_can_act_for,
    require_role,
)
from fund_portal.errors import AccessDeniedError, UnauthenticatedError
from fund_portal.schemas.auth import Identity, Role

INVESTOR = Identity(id="I1", role=Role.INVESTOR)
ADMIN = Identity(id="A1", role=Role.ADMIN)
MANAGER = Identity(id="M1", role=Role.MANAGER)


class RoleGateTests(unittest.TestCase):
    def test_missing_identity_is_unauthenticated_for_any_role_set(self) -> None:
        for roles in ([Role.ADMIN], [Role.INVESTOR, Role.MANAGER], list(Role), []):
            with self.subTest(roles=roles):
                with self.assertRaises(UnauthenticatedError) as context:
                    require_role(None, roles)
                self.assertNotIsInstance(context.exception, AccessDeniedError)
                self.assertEqual(context.exception.status_code, 401)
                self.assertEqual(context.exception.payload.code, "UNAUTHENTICATED")

    def test_wrong_role_is_access_denied(self) -> None:
        with self.assertRaises(AccessDeniedError) as context:
            require_role(INVESTOR, [Role.ADMIN])
        self.assertEqual(context.exception.status_code, 403)
        self.assertEqual(context.exception.payload.code, "ACCESS_DENIED")
        self.assertEqual(context.exception.payload.details["required_roles"], ["ADMIN"])

    def test_allowed_role_returns_identity_unchanged(self) -> None:
        self.assertIs(require_role(ADMIN, [Role.ADMIN]), ADMIN)
        self.assertIs(require_role(MANAGER, {Role.ADMIN, Role.MANAGER}), MANAGER)

    def test_require_authenticated(self) -> None:
        self.assertIs(require_authenticated(INVESTOR), INVESTOR)
        with self.assertRaises(UnauthenticatedError):
            require_authenticated(None)


class OwnershipTests(unittest.TestCase):
    def test_can_act_for(self) -> None:
        self.assertTrue(can_act_for(INVESTOR, "I1"))
        self.assertFalse(can_act_for(INVESTOR, "I2"))
        self.assertTrue(can_act_for(ADMIN, "I2"))
        self.assertFalse(can_act_for(MANAGER, "I2"))
        self.assertFalse(can_act_for(None, "I1"))

    def test_require_can_act_for(self) -> None:
        self.assertIs(require_can_act_for(INVESTOR, "I1"), INVESTOR)
        with self.assertRaises(AccessDeniedError):
            require_can_act_for(INVESTOR, "I2")
        with self.assertRaises(UnauthenticatedError):
            require_can_act_for(None, "I1")


class OperationPolicyTests(unittest.TestCase):
    def test_policy_table(self) -> None:
        self.assertIs(OPERATION_POLICIES["me"], OperationPolicy.FALLBACK)
        self.assertIs(OPERATION_POLICIES["investor_transactions"], OperationPolicy.FALLBACK)
        for operation in ("portfolio", "update_nav", "mint_shares", "redeem_shares", "withdraw_yield"):
            with self.subTest(operation=operation):
                self.assertIs(OPERATION_POLICIES[operation], OperationPolicy.RAISE)

    def test_unknown_operations_raise(self) -> None:
        self.assertIs(policy_for("no-such-operation"), OperationPolicy.RAISE)

    def test_enforce_passes_through_successful_checks(self) -> None:
        self.assertTrue(enforce("mint_shares", lambda: require_can_act_for(INVESTOR, "I1")))
        self.assertTrue(enforce("me", lambda: require_authenticated(INVESTOR)))

    def test_enforce_degrades_fallback_operations(self) -> None:
        self.assertFalse(enforce("me", lambda: require_authenticated(None)))
        self.assertFalse(enforce("investor_transactions", lambda: require_can_act_for(INVESTOR, "I2")))

    def test_enforce_raises_for_raise_operations(self) -> None:
        with self.assertRaises(AccessDeniedError):
            enforce("mint_shares", lambda: require_can_act_for(INVESTOR, "I2"))
        with self.assertRaises(UnauthenticatedError):
            enforce("update_nav", lambda: require_role(None, [Role.ADMIN]))
