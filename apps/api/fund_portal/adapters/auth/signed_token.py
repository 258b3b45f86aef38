"""Signed bearer token codec backed by python-jose."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any

from jose import JWTError, jwt
from pydantic import ValidationError

from fund_portal.adapters.auth.base import MalformedTokenError, TokenVerifier
from fund_portal.schemas.auth import TOKEN_ROLES, Identity, Role

DEFAULT_TOKEN_TTL = timedelta(hours=24)


class SignedTokenCodec(TokenVerifier):
    """Issues and verifies HMAC-signed tokens carrying identity claims."""

    def __init__(
        self,
        secret: str,
        *,
        algorithm: str = "HS256",
        ttl: timedelta = DEFAULT_TOKEN_TTL,
    ) -> None:
        if not secret:
            raise ValueError("Signed token secret must not be empty")
        self._secret = secret
        self._algorithm = algorithm
        self._ttl = ttl

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def issue(self, identity: Identity, *, issued_at: datetime | None = None) -> str:
        issued_at = issued_at or datetime.now(UTC)
        claims: dict[str, Any] = {
            "id": identity.id,
            "role": identity.role.value,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self._ttl).timestamp()),
        }
        if identity.name is not None:
            claims["name"] = identity.name
        if identity.email is not None:
            claims["email"] = identity.email
        return jwt.encode(claims, self._secret, algorithm=self._algorithm)

    def verify_token(self, token: str) -> Identity:
        try:
            claims = jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except JWTError as exc:
            raise MalformedTokenError("Invalid bearer token") from exc

        return self._identity_from_claims(claims)

    @staticmethod
    def _identity_from_claims(claims: dict[str, Any]) -> Identity:
        user_id = str(claims.get("id") or "").strip()
        if not user_id:
            raise MalformedTokenError("Bearer token missing user identity")

        try:
            role = Role(str(claims.get("role") or ""))
        except ValueError as exc:
            raise MalformedTokenError("Bearer token carries an unknown role") from exc
        if role not in TOKEN_ROLES:
            raise MalformedTokenError("Bearer token carries an unknown role")

        name = claims.get("name")
        email = claims.get("email")
        try:
            return Identity(
                id=user_id,
                role=role,
                name=str(name) if name is not None else None,
                email=str(email) if email is not None else None,
            )
        except ValidationError as exc:
            raise MalformedTokenError("Bearer token claims are invalid") from exc


__all__ = ["DEFAULT_TOKEN_TTL", "SignedTokenCodec"]
