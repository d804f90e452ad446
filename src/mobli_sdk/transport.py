"""HTTP transport for the Mobli SDK.

The request executor only depends on the ``Transport`` protocol; the default
implementation is a thin wrapper over ``httpx.Client``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

import httpx

from .core.errors import ErrorFactory
from .errors import MalformedRequestError
from .telemetry import SDK_NAME, SDK_VERSION

if TYPE_CHECKING:
    from .config import MobliConfig

# Verbs whose parameters travel in the query string
QUERY_METHODS = frozenset({"GET", "DELETE", "HEAD"})


class Transport(Protocol):
    """Low-level request sender."""

    def open(self, url: str, http_method: str, params: dict[str, str]) -> str:
        """Send one request and return the response body.

        Raises:
            MalformedRequestError: The URL cannot be requested.
            ResourceNotFoundError: The server answered 404.
            VendorError: The server answered with an OAuth-style error body.
            TransportError: Any other network or HTTP failure.
        """
        ...


@runtime_checkable
class CookieStore(Protocol):
    """Something holding login cookies that logout must clear."""

    def clear_cookies(self) -> None: ...


def create_http_client(config: MobliConfig) -> httpx.Client:
    """Create configured sync HTTP client.

    Args:
        config: SDK configuration.

    Returns:
        Configured httpx.Client.
    """
    return httpx.Client(
        timeout=httpx.Timeout(
            connect=config.connect_timeout,
            read=config.timeout,
            write=config.timeout,
            pool=config.timeout,
        ),
        headers={
            "User-Agent": f"{SDK_NAME}/{SDK_VERSION} Python",
            "Accept": "application/json",
        },
        follow_redirects=True,
    )


class HttpxTransport:
    """Transport backed by an ``httpx.Client``."""

    def __init__(self, client: httpx.Client) -> None:
        self._client = client

    def open(self, url: str, http_method: str, params: dict[str, str]) -> str:
        method = http_method.upper()
        try:
            parsed = httpx.URL(url)
            if parsed.scheme not in ("http", "https") or not parsed.host:
                raise MalformedRequestError(f"Malformed URL: {url}", url=url)

            if method in QUERY_METHODS:
                response = self._client.request(method, url, params=params)
            else:
                response = self._client.request(method, url, data=params)
        except (httpx.InvalidURL, httpx.HTTPError) as e:
            raise ErrorFactory.from_exception(e, url=url) from e

        if response.status_code >= 400:
            raise ErrorFactory.from_http_response(response, url=url)

        return response.text

    def clear_cookies(self) -> None:
        self._client.cookies.clear()

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()
