"""Login and current-user operations."""

from __future__ import annotations

import logging

from fund_portal.adapters.auth import SignedTokenCodec
from fund_portal.core.logging_safety import email_tag, principal_tag
from fund_portal.core.passwords import verify_password
from fund_portal.domain.authorization import enforce, require_authenticated
from fund_portal.errors import ApiError
from fund_portal.repositories.memory import InMemoryStore
from fund_portal.schemas.auth import Identity, LoginResponse, UserView
from fund_portal.schemas.user import User
from fund_portal.services.users import UserService

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, store: InMemoryStore, codec: SignedTokenCodec) -> None:
        self._store = store
        self._codec = codec

    def login(self, *, email: str, password: str) -> LoginResponse:
        user = self._store.get_user_by_email(email)
        # Same response for unknown email and wrong password.
        if user is None or not verify_password(password, user.password_hash):
            logger.warning(
                "auth.login_rejected email=%s",
                email_tag(email),
            )
            raise ApiError(status_code=401, code="INVALID_CREDENTIALS", message="Invalid credentials")

        identity = Identity(id=user.id, role=user.role, name=user.name, email=user.email)
        token = self._codec.issue(identity)
        logger.info(
            "auth.login_succeeded principal_id=%s role=%s",
            principal_tag(user.id),
            user.role.value,
        )
        return LoginResponse(
            token=token,
            user=UserView(id=user.id, role=user.role, name=user.name, email=user.email),
        )

    def me(self, *, identity: Identity | None) -> User | None:
        """Stored user for the caller; guests get ``None`` rather than an error."""
        if not enforce("me", lambda: require_authenticated(identity)) or identity is None:
            return None

        stored = UserService(self._store).find_user(user_id=identity.id)
        if stored is not None:
            return stored
        return User(id=identity.id, name=identity.name, email=identity.email, role=identity.role)
