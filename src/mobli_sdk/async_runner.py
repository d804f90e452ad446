"""Asynchronous API requests for the Mobli SDK.

Requests return immediately and run on a bounded thread pool. Each request
produces exactly one RequestResult, handed to the caller's listener on a pool
thread and also set as the returned future's result. Results of concurrent
requests may arrive in any order; code touching UI-bound state must hand the
result back to its own thread.
"""

from __future__ import annotations

from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from typing import TYPE_CHECKING, Any, Self

from pydantic import ValidationError as PydanticValidationError

from .core.auth_builder import AuthorizationBuilder
from .core.errors import ErrorFactory
from .errors import REQUEST_ERRORS
from .models import PublicTokenResponse
from .telemetry import get_logger
from .types import RequestListener, RequestResult

if TYPE_CHECKING:
    from .client import MobliClient


class AsyncMobliRunner:
    """Runs Mobli API requests off the calling thread."""

    def __init__(self, client: MobliClient, *, max_workers: int | None = None) -> None:
        """Initialize the runner.

        Args:
            client: Client whose session and executor the requests use.
            max_workers: Pool size; defaults to ``client.config.max_workers``.
        """
        self.client = client
        self._builder = AuthorizationBuilder(client.config)
        self._pool = ThreadPoolExecutor(
            max_workers=max_workers or client.config.max_workers,
            thread_name_prefix="mobli-request",
        )
        self._logger = get_logger(client_id=client.config.client_id)

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *args: Any) -> None:
        self.shutdown()

    def shutdown(self, wait: bool = True) -> None:
        """Stop accepting requests; optionally wait for in-flight ones."""
        self._pool.shutdown(wait=wait)

    def request(
        self,
        relative_path: str,
        params: dict[str, str] | None = None,
        http_method: str = "GET",
        listener: RequestListener | None = None,
        state: Any = None,
    ) -> Future[RequestResult]:
        """Request a path of the REST API asynchronously.

        See ``request_async`` for the delivery contract.
        """
        return self.request_async(
            self.client.config.api_base_url,
            relative_path,
            params if params is not None else {},
            http_method,
            listener,
            state,
        )

    def request_async(
        self,
        base_url: str,
        relative_path: str,
        params: dict[str, str],
        http_method: str,
        listener: RequestListener | None = None,
        state: Any = None,
    ) -> Future[RequestResult]:
        """Dispatch one request and return without waiting for it.

        Args:
            base_url: API or OAuth base URL.
            relative_path: Path appended to ``base_url`` verbatim.
            params: String parameters; the access token may be added to it.
            http_method: HTTP verb.
            listener: Called once with the result, on a pool thread.
            state: Opaque value returned unchanged in the result.

        Returns:
            Future resolving to the same RequestResult the listener receives.
        """
        return self._submit(base_url, relative_path, params, http_method, listener, state)

    def obtain_public_token(
        self,
        listener: RequestListener | None = None,
        state: Any = None,
    ) -> Future[RequestResult]:
        """Exchange the client credentials for a public (shared) token.

        On success the token in the response body is stored in the session
        when it can be read; the listener gets the unmodified result either
        way.
        """
        return self._submit(
            self.client.config.authorize_base_url,
            self.client.config.public_token_path,
            self._builder.build_client_credentials_request(),
            "POST",
            listener,
            state,
            transform=self._store_public_token,
        )

    def _store_public_token(self, result: RequestResult) -> RequestResult:
        if result.ok and result.response is not None:
            try:
                token = PublicTokenResponse.model_validate_json(result.response)
            except PydanticValidationError:
                self._logger.debug("No public token in response body")
            else:
                self.client.session.set_access_token(token.access_token)
        return result

    def _submit(
        self,
        base_url: str,
        relative_path: str,
        params: dict[str, str],
        http_method: str,
        listener: RequestListener | None,
        state: Any,
        *,
        transform: Callable[[RequestResult], RequestResult] | None = None,
    ) -> Future[RequestResult]:
        def run() -> RequestResult:
            try:
                body = self.client.executor.execute(base_url, relative_path, params, http_method)
                result = RequestResult.success(body, state)
            except REQUEST_ERRORS as e:
                result = RequestResult.failure(e, state)
            except Exception as e:
                result = self._unexpected_failure(e, state, "Request raised unexpected error")

            if transform is not None:
                try:
                    result = transform(result)
                except Exception as e:
                    result = self._unexpected_failure(e, state, "Result handler raised")

            if listener is not None:
                self._notify(listener, result)
            return result

        return self._pool.submit(run)

    def _unexpected_failure(self, exc: Exception, state: Any, event: str) -> RequestResult:
        self._logger.exception(event, error=str(exc))
        return RequestResult.failure(ErrorFactory.from_exception(exc), state)

    def _notify(self, listener: RequestListener, result: RequestResult) -> None:
        try:
            listener(result)
        except Exception:
            self._logger.exception("Request listener raised", outcome=result.outcome.value)
