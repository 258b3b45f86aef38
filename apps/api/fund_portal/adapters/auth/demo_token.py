"""Demo token parser for local development.

Demo tokens are plain, unsigned strings and must never be treated as a
security mechanism.
"""

from __future__ import annotations

from pydantic import ValidationError

from fund_portal.adapters.auth.base import TokenVerifier
from fund_portal.schemas.auth import TOKEN_ROLES, Identity, Role

DEMO_TOKEN_MARKER = "demo_token"

# Checked in order; the first literal found wins over anything else in the token.
_KNOWN_DEMO_IDS: tuple[tuple[str, str, Role], ...] = (
    ("_M1_", "M1", Role.MANAGER),
    ("_I1_", "I1", Role.INVESTOR),
    ("_A1_", "A1", Role.ADMIN),
)

FALLBACK_DEMO_IDENTITY = Identity(
    id="I1",
    role=Role.INVESTOR,
    name="Demo Investor",
    email="investor@example.com",
)


def is_demo_token(token: str) -> bool:
    return DEMO_TOKEN_MARKER in token or token.startswith(f"{DEMO_TOKEN_MARKER}_")


def demo_identity(user_id: str, role: Role) -> Identity:
    """Synthesize the display fields a demo token implies."""
    return Identity(
        id=user_id,
        role=role,
        name=f"Demo {role.value.capitalize()}",
        email=f"{role.value.lower()}@example.com",
    )


class DemoTokenParser(TokenVerifier):
    """Parses ``demo_token_<id>_<ROLE>`` strings.

    Never raises: anything it cannot make sense of yields the fallback
    investor identity.
    """

    def verify_token(self, token: str) -> Identity:
        for marker, user_id, role in _KNOWN_DEMO_IDS:
            if marker in token:
                return demo_identity(user_id, role)

        parts = token.split("_")
        if len(parts) < 3:
            return FALLBACK_DEMO_IDENTITY

        user_id = parts[2]
        role_name = parts[3] if len(parts) >= 4 else Role.INVESTOR.value
        try:
            role = Role(role_name)
        except ValueError:
            return FALLBACK_DEMO_IDENTITY
        if role not in TOKEN_ROLES:
            return FALLBACK_DEMO_IDENTITY

        try:
            return demo_identity(user_id, role)
        except ValidationError:
            return FALLBACK_DEMO_IDENTITY


__all__ = [
    "DEMO_TOKEN_MARKER",
    "DemoTokenParser",
    "FALLBACK_DEMO_IDENTITY",
    "demo_identity",
    "is_demo_token",
]
