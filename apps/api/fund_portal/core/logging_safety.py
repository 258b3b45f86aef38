"""Hashed stand-ins for identifiers, emails and bearer tokens in log lines."""

from __future__ import annotations

import hashlib
from typing import Any

_DIGEST_LENGTH = 12


def _digest(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()[:_DIGEST_LENGTH]


def safe_log_identifier(value: Any, *, prefix: str) -> str:
    """Return a deterministic non-reversible token for log correlation fields."""
    text = str(value or "").strip()
    if not text:
        return f"{prefix}-missing"
    return f"{prefix}-{_digest(text)}"


def principal_tag(user_id: str | None) -> str:
    return safe_log_identifier(user_id, prefix="pid")


def email_tag(email: str | None) -> str:
    # Case-folded so the same mailbox always maps to one tag.
    return safe_log_identifier((email or "").lower(), prefix="em")


def token_fingerprint(token: str | None) -> str:
    """Correlate bearer tokens across log lines without writing them out."""
    return safe_log_identifier(token, prefix="tok")
