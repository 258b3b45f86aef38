"""Bearer token classification and identity resolution."""

from __future__ import annotations

from enum import Enum

from fund_portal.adapters.auth import DemoTokenParser, MalformedTokenError, TokenVerifier, is_demo_token
from fund_portal.adapters.auth.demo_token import demo_identity
from fund_portal.schemas.auth import Identity, Role

_BEARER_PREFIX = "bearer "

# Development-only: unverifiable tokens are matched case-sensitively in this order.
_ROLE_SUBSTRING_PLACEHOLDERS: tuple[tuple[str, str, Role], ...] = (
    ("admin", "admin1", Role.ADMIN),
    ("investor", "investor1", Role.INVESTOR),
    ("manager", "manager1", Role.MANAGER),
)


class TokenShape(str, Enum):
    ABSENT = "absent"
    DEMO = "demo"
    SIGNED = "signed"


class IdentityResolver:
    """Turns a raw ``Authorization`` header into an ``Identity`` or ``None``.

    Total over its input: malformed, expired and foreign tokens all resolve
    to ``None`` (or to a placeholder when ``role_substring_fallback`` is
    enabled) rather than raising.
    """

    def __init__(
        self,
        signed_verifier: TokenVerifier,
        *,
        demo_tokens_enabled: bool = True,
        role_substring_fallback: bool = False,
    ) -> None:
        self._signed_verifier = signed_verifier
        self._demo_parser = DemoTokenParser()
        self._demo_tokens_enabled = demo_tokens_enabled
        self._role_substring_fallback = role_substring_fallback

    @staticmethod
    def extract_token(authorization: str | None) -> str | None:
        text = (authorization or "").strip()
        if text[: len(_BEARER_PREFIX)].lower() == _BEARER_PREFIX:
            text = text[len(_BEARER_PREFIX) :].strip()
        return text or None

    def classify(self, token: str | None) -> TokenShape:
        if not token:
            return TokenShape.ABSENT
        if self._demo_tokens_enabled and is_demo_token(token):
            return TokenShape.DEMO
        return TokenShape.SIGNED

    def resolve(self, authorization: str | None) -> Identity | None:
        return self.resolve_token(self.extract_token(authorization))

    def resolve_token(self, token: str | None) -> Identity | None:
        shape = self.classify(token)
        if shape is TokenShape.ABSENT or token is None:
            return None
        if shape is TokenShape.DEMO:
            return self._demo_parser.verify_token(token)

        try:
            return self._signed_verifier.verify_token(token)
        except MalformedTokenError:
            if self._role_substring_fallback:
                return self._placeholder_for(token)
            return None

    @staticmethod
    def _placeholder_for(token: str) -> Identity | None:
        for needle, user_id, role in _ROLE_SUBSTRING_PLACEHOLDERS:
            if needle in token:
                return demo_identity(user_id, role)
        return None


__all__ = ["IdentityResolver", "TokenShape"]
