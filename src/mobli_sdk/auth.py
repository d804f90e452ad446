"""Interactive login flow for the Mobli SDK.

Drives the OAuth 2.0 implicit grant through a host-supplied login dialog and
writes the resulting token into the session. Dialog callbacks run on whatever
thread the dialog uses to report completion; nothing here starts threads.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import StrEnum
from typing import TYPE_CHECKING

from .config import EXPIRES, TOKEN, USER_ID
from .core.auth_builder import AuthorizationBuilder
from .dialog import GrantedPermissions, LogAlertPresenter, NullCookieStore
from .errors import DialogError, ErrorCode, InvalidConfigError, VendorError
from .telemetry import get_logger, trace_operation
from .types import DialogListener, DialogOutcome, DialogResult

if TYPE_CHECKING:
    from .config import MobliConfig
    from .dialog import AlertPresenter, LoginDialog, PermissionChecker
    from .session import TokenStore
    from .transport import CookieStore

MISSING_TOKEN_MESSAGE = "failed to receive access token"
NO_NETWORK_MESSAGE = "Application requires permission to access the Internet"


class AuthState(StrEnum):
    """Login flow states."""

    IDLE = "idle"
    DIALOG_PRESENTED = "dialog_presented"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELED = "canceled"


class AuthFlowCoordinator:
    """Runs the login dialog and logout against one token store."""

    def __init__(
        self,
        config: MobliConfig,
        session: TokenStore,
        *,
        login_dialog: LoginDialog | None = None,
        cookie_store: CookieStore | None = None,
        permission_checker: PermissionChecker | None = None,
        alert_presenter: AlertPresenter | None = None,
    ) -> None:
        """Initialize the coordinator.

        Args:
            config: SDK configuration.
            session: Token store written on successful login.
            login_dialog: Presents the login page; required for ``dialog``.
            cookie_store: Cleared on logout.
            permission_checker: Consulted before opening the dialog.
            alert_presenter: Shows the missing-permission alert.
        """
        self.config = config
        self._session = session
        self._builder = AuthorizationBuilder(config)
        self._login_dialog = login_dialog
        self._cookie_store = cookie_store or NullCookieStore()
        self._permissions = permission_checker or GrantedPermissions()
        self._alerts = alert_presenter or LogAlertPresenter()
        self._state = AuthState.IDLE
        self._logger = get_logger(client_id=config.client_id)

    @property
    def state(self) -> AuthState:
        return self._state

    def authorize(
        self,
        listener: DialogListener,
        permissions: Sequence[str] | None = None,
    ) -> None:
        """Start the login dialog and store the token it returns.

        Args:
            listener: Receives exactly one DialogResult.
            permissions: Scopes to request, e.g. ["shared", "basic"].
                Defaults to ``config.default_permissions``; an empty list
                sends no scope at all.

        Raises:
            InvalidConfigError: No login dialog was configured.
        """
        if permissions is None:
            permissions = self.config.default_permissions

        self._require_login_dialog()
        params = self._builder.build_scope_params(permissions)
        self._state = AuthState.DIALOG_PRESENTED

        def on_dialog_complete(result: DialogResult) -> None:
            listener(self._finish_login(result))

        self.dialog(params, on_dialog_complete)

    def _finish_login(self, result: DialogResult) -> DialogResult:
        if result.outcome is DialogOutcome.CANCELED:
            self._logger.info("Login canceled")
            self._state = AuthState.CANCELED
            return result

        if result.outcome is not DialogOutcome.COMPLETED:
            self._logger.info("Login failed", error=repr(result.error))
            self._state = AuthState.FAILED
            return result

        valid = self._session.update(
            access_token=result.values.get(TOKEN),
            expires_in=result.values.get(EXPIRES),
            user_id=result.values.get(USER_ID),
        )
        if not valid:
            self._logger.info("Login failed", error=MISSING_TOKEN_MESSAGE)
            self._state = AuthState.FAILED
            return DialogResult.vendor_error(VendorError(MISSING_TOKEN_MESSAGE))

        self._logger.info(
            "Login succeeded",
            user_id=self._session.user_id,
            expires=self._session.access_expires,
        )
        self._state = AuthState.COMPLETED
        return result

    def dialog(self, params: dict[str, str], listener: DialogListener) -> None:
        """Open the login page with the given extra URL parameters.

        When network permission is missing, an alert is shown, no request is
        made and the listener receives a DIALOG_ERROR result.

        Raises:
            InvalidConfigError: No login dialog was configured.
        """
        login_dialog = self._require_login_dialog()
        dialog_params = self._builder.build_dialog_params(
            params, access_token=self._session.valid_access_token()
        )
        url = self._builder.build_dialog_url(dialog_params)

        if not self._permissions.has_network_permission():
            self._alerts.show_alert("Error", NO_NETWORK_MESSAGE)
            listener(
                DialogResult.dialog_error(
                    DialogError(NO_NETWORK_MESSAGE, ErrorCode.PERMISSION_DENIED)
                )
            )
            return

        with trace_operation(
            "mobli.dialog",
            attributes={"dialog.url": self.config.dialog_authorize_url},
        ):
            login_dialog.show(url, self.config.redirect_uri, listener)

    def _require_login_dialog(self) -> LoginDialog:
        if self._login_dialog is None:
            raise InvalidConfigError("A login dialog is required for interactive login")
        return self._login_dialog

    def logout(self) -> None:
        """Clear cookies and drop the session token."""
        self._cookie_store.clear_cookies()
        self._session.clear()
        self._logger.info("Logged out")
