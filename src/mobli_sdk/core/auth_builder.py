"""Authorization parameter building for the Mobli SDK.

Shared by the login flow and the public token exchange.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING
from urllib.parse import urlencode

from ..config import TOKEN

if TYPE_CHECKING:
    from ..config import MobliConfig


class AuthorizationBuilder:
    """Builds OAuth request parameters and URLs from the SDK config."""

    def __init__(self, config: MobliConfig) -> None:
        self.config = config

    @staticmethod
    def build_scope_params(permissions: Sequence[str]) -> dict[str, str]:
        """Space-joined ``scope``, or nothing when no permissions are asked."""
        if not permissions:
            return {}
        return {"scope": " ".join(permissions)}

    def build_dialog_params(
        self,
        params: dict[str, str],
        access_token: str | None = None,
    ) -> dict[str, str]:
        """Add the implicit-grant parameters to the caller's dialog parameters.

        Args:
            params: Caller parameters (e.g. scope); not modified.
            access_token: Token of a currently valid session, if any.

        Returns:
            New parameter dict.
        """
        dialog_params = dict(params)
        dialog_params["redirect_uri"] = self.config.redirect_uri
        dialog_params["client_id"] = self.config.client_id
        dialog_params["response_type"] = "token"
        if access_token is not None:
            dialog_params[TOKEN] = access_token
        return dialog_params

    def build_dialog_url(self, params: dict[str, str]) -> str:
        return f"{self.config.dialog_authorize_url}?{urlencode(params)}"

    def build_client_credentials_request(self) -> dict[str, str]:
        """Build the shared-token client credentials payload."""
        return {
            "client_id": self.config.client_id,
            "client_secret": self.config.client_secret.get_secret_value(),
            "grant_type": "client_credentials",
            "scope": self.config.public_token_scope,
        }
