"""Mobli SDK client.

Main object for interacting with the Mobli API: logs a user in and out,
holds the session, and makes blocking REST requests. Use ``AsyncMobliRunner``
to make requests without blocking the calling thread.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Any, Self

from .auth import AuthFlowCoordinator, AuthState
from .core.request_executor import RequestExecutor
from .session import TokenStore
from .transport import CookieStore, HttpxTransport, create_http_client

if TYPE_CHECKING:
    from .config import MobliConfig
    from .dialog import AlertPresenter, LoginDialog, PermissionChecker
    from .transport import Transport
    from .types import DialogListener


class MobliClient:
    """Blocking Mobli client owning one session."""

    def __init__(
        self,
        config: MobliConfig,
        *,
        transport: Transport | None = None,
        login_dialog: LoginDialog | None = None,
        cookie_store: CookieStore | None = None,
        permission_checker: PermissionChecker | None = None,
        alert_presenter: AlertPresenter | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize client.

        Args:
            config: SDK configuration with the application credentials.
            transport: Request sender; defaults to an httpx-backed transport.
            login_dialog: Presents the login page for ``authorize``.
            cookie_store: Cleared on logout; defaults to the transport when it
                keeps cookies.
            permission_checker: Consulted before opening the login page.
            alert_presenter: Shows user-facing alerts.
            clock: Time source for session expiry.
        """
        self.config = config
        self.session = TokenStore(clock=clock)

        self._owns_transport = transport is None
        self._transport = transport or HttpxTransport(create_http_client(config))
        if cookie_store is None and isinstance(self._transport, CookieStore):
            cookie_store = self._transport

        self.executor = RequestExecutor(self.session, self._transport)
        self.auth = AuthFlowCoordinator(
            config,
            self.session,
            login_dialog=login_dialog,
            cookie_store=cookie_store,
            permission_checker=permission_checker,
            alert_presenter=alert_presenter,
        )

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the HTTP client if this client created it."""
        if self._owns_transport and isinstance(self._transport, HttpxTransport):
            self._transport.close()

    # Session

    @property
    def access_token(self) -> str | None:
        """OAuth 2.0 access token, or None without a session. Treat with care."""
        return self.session.access_token

    @property
    def access_expires(self) -> int:
        """Expiry in ms since the epoch, or 0 if it never expires."""
        return self.session.access_expires

    @property
    def user_id(self) -> str | None:
        return self.session.user_id

    @property
    def client_id(self) -> str:
        return self.config.client_id

    def is_session_valid(self) -> bool:
        return self.session.is_session_valid()

    # Requests

    def request(
        self,
        relative_path: str,
        params: dict[str, str] | None = None,
        http_method: str = "GET",
        *,
        base_url: str | None = None,
    ) -> str:
        """Make a blocking request to the Mobli API.

        Do not call this from a latency-sensitive thread.

        Args:
            relative_path: Path relative to the base URL, e.g. "me".
            params: String parameters, e.g. {"q": "leonardo"}.
            http_method: HTTP verb.
            base_url: Defaults to ``config.api_base_url``.

        Returns:
            Response body, usually JSON text.
        """
        return self.executor.execute(
            base_url if base_url is not None else self.config.api_base_url,
            relative_path,
            params if params is not None else {},
            http_method,
        )

    # Login

    @property
    def auth_state(self) -> AuthState:
        return self.auth.state

    def authorize(
        self,
        listener: DialogListener,
        permissions: Sequence[str] | None = None,
    ) -> None:
        """Log the user in through the login dialog.

        See ``AuthFlowCoordinator.authorize``.
        """
        self.auth.authorize(listener, permissions)

    def dialog(self, params: dict[str, str], listener: DialogListener) -> None:
        self.auth.dialog(params, listener)

    def logout(self) -> None:
        """Invalidate the session and clear login cookies."""
        self.auth.logout()
