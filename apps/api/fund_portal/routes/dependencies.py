"""Dependency wiring for routes."""

from __future__ import annotations

import logging
from typing import Annotated
from uuid import uuid4

from fastapi import Depends, Request, Security
from fastapi.security import APIKeyHeader

from fund_portal.adapters.auth import SignedTokenCodec
from fund_portal.core.config import Settings, get_settings
from fund_portal.core.logging_safety import principal_tag, safe_log_identifier, token_fingerprint
from fund_portal.domain.identity_resolver import IdentityResolver, TokenShape
from fund_portal.repositories.memory import InMemoryStore
from fund_portal.schemas.auth import RequestContext
from fund_portal.services.auth import AuthService
from fund_portal.services.funds import FundService
from fund_portal.services.portfolios import PortfolioService
from fund_portal.services.users import UserService

# Raw header so demo tokens and unprefixed values reach the resolver untouched.
authorization_header = APIKeyHeader(
    name="Authorization",
    auto_error=False,
    scheme_name="bearerToken",
    description="`Bearer <token>`; signed token or development demo token.",
)
logger = logging.getLogger(__name__)


def _request_correlation_id(request: Request) -> str:
    existing = getattr(request.state, "correlation_id", None)
    if isinstance(existing, str) and existing:
        return existing

    correlation_id = request.headers.get("X-Correlation-Id")
    if correlation_id:
        request.state.correlation_id = correlation_id
        return correlation_id

    generated = f"req-{uuid4()}"
    request.state.correlation_id = generated
    return generated


def get_token_codec(settings: Annotated[Settings, Depends(get_settings)]) -> SignedTokenCodec:
    return SignedTokenCodec(
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        ttl=settings.token_ttl,
    )


def get_identity_resolver(
    settings: Annotated[Settings, Depends(get_settings)],
    codec: Annotated[SignedTokenCodec, Depends(get_token_codec)],
) -> IdentityResolver:
    """Resolve the identity resolver from configuration."""
    return IdentityResolver(
        codec,
        demo_tokens_enabled=settings.demo_tokens_enabled,
        role_substring_fallback=settings.role_substring_fallback,
    )


async def get_request_context(
    request: Request,
    authorization: Annotated[str | None, Security(authorization_header)],
    resolver: Annotated[IdentityResolver, Depends(get_identity_resolver)],
) -> RequestContext:
    """Resolve the caller's identity; never rejects the request on its own."""
    correlation_id = _request_correlation_id(request)
    safe_correlation_id = safe_log_identifier(correlation_id, prefix="cid")

    token = resolver.extract_token(authorization)
    shape = resolver.classify(token)
    identity = resolver.resolve_token(token)

    if identity is None:
        logger.info(
            "auth.guest correlation_id=%s method=%s path=%s reason=%s token=%s",
            safe_correlation_id,
            request.method,
            request.url.path,
            "missing_token" if shape is TokenShape.ABSENT else "unverified_token",
            token_fingerprint(token),
        )
    else:
        logger.info(
            "auth.resolved correlation_id=%s method=%s path=%s principal_id=%s role=%s shape=%s",
            safe_correlation_id,
            request.method,
            request.url.path,
            principal_tag(identity.id),
            identity.role.value,
            shape.value,
        )

    context = RequestContext(identity=identity, correlation_id=correlation_id)
    request.state.auth_context = context
    return context


def get_store(request: Request) -> InMemoryStore:
    return request.app.state.store


def get_auth_service(
    store: Annotated[InMemoryStore, Depends(get_store)],
    codec: Annotated[SignedTokenCodec, Depends(get_token_codec)],
) -> AuthService:
    return AuthService(store, codec)


def get_fund_service(store: Annotated[InMemoryStore, Depends(get_store)]) -> FundService:
    return FundService(store)


def get_portfolio_service(store: Annotated[InMemoryStore, Depends(get_store)]) -> PortfolioService:
    return PortfolioService(store)


def get_user_service(store: Annotated[InMemoryStore, Depends(get_store)]) -> UserService:
    return UserService(store)
