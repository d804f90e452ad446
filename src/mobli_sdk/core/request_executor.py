"""Synchronous request execution for the Mobli SDK.

Builds each call from a base URL, a relative path, string parameters and a
verb, attaches the session token, and hands it to the transport. Exactly one
attempt is made; retry policy belongs to the caller.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..config import TOKEN
from ..errors import REQUEST_ERRORS, MalformedRequestError
from ..telemetry import get_logger, trace_operation
from ..types import RequestDescriptor
from .errors import ErrorFactory

if TYPE_CHECKING:
    from ..session import TokenStore
    from ..transport import Transport


class RequestExecutor:
    """Blocking API caller shared by the client and the async runner."""

    def __init__(self, session: TokenStore, transport: Transport) -> None:
        """Initialize request executor.

        Args:
            session: Token store to read the access token from.
            transport: Transport that performs the HTTP exchange.
        """
        self._session = session
        self._transport = transport
        self._logger = get_logger()

    def execute(
        self,
        base_url: str,
        relative_path: str,
        params: dict[str, str],
        http_method: str,
    ) -> str:
        """Execute one request and return the raw response body.

        When the session is valid, the access token is written into
        ``params`` before sending, so the caller's dict is modified.

        Args:
            base_url: API or OAuth base URL.
            relative_path: Path appended to ``base_url`` verbatim.
            params: String parameters for the request.
            http_method: HTTP verb, e.g. "GET", "POST", "DELETE".

        Returns:
            Response body as text.

        Raises:
            MalformedRequestError: Invalid verb or URL.
            ResourceNotFoundError: Resource does not exist.
            VendorError: Mobli reported an application error.
            TransportError: Network or I/O failure.
        """
        if not http_method:
            raise MalformedRequestError("HTTP method must be a non-empty string")

        request = RequestDescriptor(base_url, relative_path, params, http_method)

        token = self._session.valid_access_token()
        if token is not None:
            request.params[TOKEN] = token

        with trace_operation(
            "mobli.request",
            attributes={"http.method": request.http_method, "http.url": request.url},
        ):
            self._logger.debug(
                "Sending request",
                method=request.http_method,
                url=request.url,
                authenticated=token is not None,
            )
            try:
                return self._transport.open(request.url, request.http_method, request.params)
            except REQUEST_ERRORS as e:
                self._logger.debug("Request failed", url=request.url, code=e.code)
                raise
            except Exception as e:
                error = ErrorFactory.from_exception(e, url=request.url)
                self._logger.warning(
                    "Transport raised unexpected error",
                    url=request.url,
                    error=str(e),
                )
                raise error from e
