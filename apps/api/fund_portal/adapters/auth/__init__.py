"""Auth verifier adapters."""

from .base import MalformedTokenError, TokenVerifier
from .demo_token import DemoTokenParser, is_demo_token
from .signed_token import SignedTokenCodec

__all__ = [
    "DemoTokenParser",
    "MalformedTokenError",
    "SignedTokenCodec",
    "TokenVerifier",
    "is_demo_token",
]
