"""Application exception types."""

from fund_portal.schemas.error import ErrorResponse


class ApiError(Exception):
    """Structured API error that maps directly to contract error payloads."""

    def __init__(self, status_code: int, code: str, message: str, details: dict | None = None) -> None:
        self.status_code = status_code
        self.payload = ErrorResponse(code=code, message=message, details=details)
        super().__init__(message)


class UnauthenticatedError(ApiError):
    """No usable identity was resolved for an operation that requires one."""

    def __init__(self, message: str = "You must be logged in to perform this action") -> None:
        super().__init__(status_code=401, code="UNAUTHENTICATED", message=message)


class AccessDeniedError(ApiError):
    """Identity resolved but lacks the required role or ownership."""

    def __init__(self, message: str = "Access denied", details: dict | None = None) -> None:
        super().__init__(status_code=403, code="ACCESS_DENIED", message=message, details=details)


class MalformedTokenError(Exception):
    """Raised by token verifiers; always downgraded to "no identity" by the resolver."""


AuthorizationError = (UnauthenticatedError, AccessDeniedError)


__all__ = [
    "AccessDeniedError",
    "ApiError",
    "AuthorizationError",
    "MalformedTokenError",
    "UnauthenticatedError",
]
