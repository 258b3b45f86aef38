"""Authentication provider interfaces."""

from abc import ABC, abstractmethod

from fund_portal.errors import MalformedTokenError
from fund_portal.schemas.auth import Identity


class TokenVerifier(ABC):
    """Provider-neutral token verification interface."""

    @abstractmethod
    def verify_token(self, token: str) -> Identity:
        """Verify token and return normalized identity.

        Raises ``MalformedTokenError`` when the token cannot be turned into
        an identity.
        """


__all__ = ["MalformedTokenError", "TokenVerifier"]
