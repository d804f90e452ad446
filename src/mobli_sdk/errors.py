"""Error classes for the Mobli SDK.

Every failure a request or login flow can report has its own class so callers
can tell a bad URL from a missing resource, a network failure or an
application-level error reported by Mobli itself.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the Mobli SDK."""

    # Request errors (1xxx)
    MALFORMED_REQUEST = "REQ_1001"
    RESOURCE_NOT_FOUND = "REQ_1002"

    # Transport errors (2xxx)
    TRANSPORT_ERROR = "NET_2001"

    # Mobli API errors (3xxx)
    VENDOR_ERROR = "API_3001"

    # Login dialog errors (4xxx)
    DIALOG_ERROR = "DLG_4001"
    PERMISSION_DENIED = "DLG_4002"

    # Configuration errors (5xxx)
    INVALID_CONFIG = "CFG_5001"


class MobliSDKError(Exception):
    """Base error for the Mobli SDK with structured error information."""

    def __init__(
        self,
        message: str,
        code: ErrorCode | str,
        *,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code if isinstance(code, str) else code.value
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        return {
            "error": self.message,
            "code": self.code,
            "status_code": self.status_code,
            "details": self.details,
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class MalformedRequestError(MobliSDKError):
    """Base URL and relative path do not form a usable request."""

    def __init__(
        self,
        message: str = "Malformed request URL",
        *,
        url: str | None = None,
    ) -> None:
        super().__init__(
            message,
            ErrorCode.MALFORMED_REQUEST,
            details={"url": url} if url else None,
        )
        self.url = url


class ResourceNotFoundError(MobliSDKError):
    """Requested resource is invalid or does not exist."""

    def __init__(
        self,
        message: str = "Resource not found",
        *,
        url: str | None = None,
    ) -> None:
        super().__init__(
            message,
            ErrorCode.RESOURCE_NOT_FOUND,
            status_code=404,
            details={"url": url} if url else None,
        )
        self.url = url


class TransportError(MobliSDKError):
    """Network or I/O failure while talking to Mobli."""

    def __init__(
        self,
        message: str = "Transport request failed",
        *,
        status_code: int | None = None,
        url: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        details: dict[str, Any] = {}
        if url:
            details["url"] = url
        if cause:
            details["cause"] = str(cause)
        super().__init__(
            message,
            ErrorCode.TRANSPORT_ERROR,
            status_code=status_code,
            details=details,
        )
        self.url = url
        self.__cause__ = cause


class VendorError(MobliSDKError):
    """Mobli reported an application-level failure."""

    def __init__(
        self,
        message: str,
        *,
        error_type: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(
            message,
            ErrorCode.VENDOR_ERROR,
            status_code=status_code,
            details={"error_type": error_type} if error_type else None,
        )
        self.error_type = error_type


class DialogError(MobliSDKError):
    """The login dialog failed to load or navigate."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.DIALOG_ERROR,
        *,
        error_code: int | None = None,
        failing_url: str | None = None,
    ) -> None:
        details: dict[str, Any] = {}
        if error_code is not None:
            details["error_code"] = error_code
        if failing_url:
            details["failing_url"] = failing_url
        super().__init__(message, code, details=details)
        self.error_code = error_code
        self.failing_url = failing_url


class InvalidConfigError(MobliSDKError):
    """Invalid SDK configuration."""

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
    ) -> None:
        super().__init__(
            message,
            ErrorCode.INVALID_CONFIG,
            details={"field": field} if field else None,
        )


# Failures an API request can report to its caller.
REQUEST_ERRORS: tuple[type[MobliSDKError], ...] = (
    MalformedRequestError,
    ResourceNotFoundError,
    TransportError,
    VendorError,
)
