"""Centralized error factory for the Mobli SDK.

Maps httpx responses and exceptions onto the SDK error hierarchy so the
transport and the request executor classify failures the same way.
"""

from __future__ import annotations

from typing import Any

import httpx

from ..errors import (
    REQUEST_ERRORS,
    MalformedRequestError,
    MobliSDKError,
    ResourceNotFoundError,
    TransportError,
    VendorError,
)


class ErrorFactory:
    """Centralized error creation with consistent structure."""

    @staticmethod
    def from_http_response(
        response: httpx.Response,
        *,
        url: str | None = None,
    ) -> MobliSDKError:
        """Create SDK error from an unsuccessful HTTP response.

        Args:
            response: HTTP response object with status >= 400.
            url: Requested URL, for error details.

        Returns:
            ResourceNotFoundError for 404, VendorError when the body carries an
            OAuth-style ``error`` field, TransportError otherwise.
        """
        status = response.status_code
        url = url or str(response.request.url)

        if status == 404:
            return ResourceNotFoundError(f"Resource not found: {url}", url=url)

        details: dict[str, Any] = {}
        try:
            body = response.json()
            if isinstance(body, dict):
                details = body
        except ValueError:
            pass

        error = details.get("error")
        if error:
            if isinstance(error, dict):
                # {"error": {"type": ..., "message": ...}}
                return VendorError(
                    str(error.get("message") or error.get("type") or error),
                    error_type=error.get("type"),
                    status_code=status,
                )
            return VendorError(
                str(details.get("error_description") or error),
                error_type=str(error),
                status_code=status,
            )

        return TransportError(
            f"Request failed with status {status}",
            status_code=status,
            url=url,
        )

    @staticmethod
    def from_exception(
        exc: Exception,
        *,
        url: str | None = None,
    ) -> MobliSDKError:
        """Create SDK error from exception.

        Request errors pass through unchanged. Anything else, including SDK
        errors that a request cannot report, becomes a TransportError.

        Args:
            exc: Original exception.
            url: Requested URL, for error details.

        Returns:
            Appropriate MobliSDKError subclass.
        """
        if isinstance(exc, REQUEST_ERRORS):
            return exc

        if isinstance(exc, (httpx.InvalidURL, httpx.UnsupportedProtocol)):
            error = MalformedRequestError(f"Malformed URL: {exc}", url=url)
            error.__cause__ = exc
            return error

        if isinstance(exc, httpx.HTTPStatusError):
            return ErrorFactory.from_http_response(exc.response, url=url)

        if isinstance(exc, httpx.TimeoutException):
            return TransportError(f"Request timed out: {exc}", url=url, cause=exc)

        if isinstance(exc, httpx.HTTPError):
            return TransportError(f"HTTP error: {exc}", url=url, cause=exc)

        return TransportError(f"Unexpected error: {exc}", url=url, cause=exc)
