"""Login dialog collaborators.

The SDK does not render a login page itself. A host application supplies a
``LoginDialog`` that opens the authorize URL in a browser or web view, watches
for the redirect back to ``redirect_uri`` and reports the outcome through the
listener, usually via ``outcome_from_redirect``.
"""

from __future__ import annotations

from typing import Protocol
from urllib.parse import parse_qsl, urlsplit

from .errors import VendorError
from .telemetry import get_logger
from .types import DialogListener, DialogResult

# Error values the login page uses when the user declines
ACCESS_DENIED_ERRORS = frozenset({"access_denied", "OAuthAccessDeniedException"})


class LoginDialog(Protocol):
    """Presents the login page and reports exactly one outcome."""

    def show(self, url: str, redirect_uri: str, listener: DialogListener) -> None: ...


class PermissionChecker(Protocol):
    def has_network_permission(self) -> bool: ...


class AlertPresenter(Protocol):
    def show_alert(self, title: str, message: str) -> None: ...


class GrantedPermissions:
    """Permission checker for hosts without a permission model."""

    def has_network_permission(self) -> bool:
        return True


class LogAlertPresenter:
    """Reports alerts as warnings on the SDK logger."""

    def show_alert(self, title: str, message: str) -> None:
        get_logger().warning(message, alert_title=title)


class NullCookieStore:
    def clear_cookies(self) -> None:
        pass


def is_redirect(url: str, redirect_uri: str) -> bool:
    """Whether a navigation target is the app's OAuth redirect."""
    return url.startswith(redirect_uri)


def parse_redirect(url: str) -> dict[str, str]:
    """Merge query and fragment parameters of a redirect URL."""
    parts = urlsplit(url)
    values = dict(parse_qsl(parts.query))
    values.update(parse_qsl(parts.fragment))
    return values


def outcome_from_redirect(url: str) -> DialogResult:
    """Classify the login page's final redirect.

    Args:
        url: Redirect URL carrying ``access_token``/``expires_in``/``user_id``
            or an ``error``.

    Returns:
        COMPLETED with the values, CANCELED when the user declined, or
        VENDOR_ERROR for any other error reported by the login page.
    """
    values = parse_redirect(url)
    error = values.get("error") or values.get("error_type")
    if error is None:
        return DialogResult.completed(values)
    if error in ACCESS_DENIED_ERRORS:
        return DialogResult.canceled()
    return DialogResult.vendor_error(
        VendorError(
            values.get("error_description") or values.get("error_reason") or error,
            error_type=error,
        )
    )
