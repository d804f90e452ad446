"""Configuration for the Mobli SDK.

Uses Pydantic v2 for validation. Endpoint constants default to the production
Mobli servers; they are overridable only when the config is built, which is
how tests point the SDK at local stubs.
"""

from __future__ import annotations

from typing import Annotated, Any, Self

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SecretStr,
    field_validator,
)

from .errors import InvalidConfigError

# OAuth field names exchanged with the login dialog and the token endpoint
TOKEN = "access_token"
EXPIRES = "expires_in"
USER_ID = "user_id"

REDIRECT_URI_START = "mobli"
REDIRECT_URI_END = "://authorize"
BASIC_PERMISSIONS: tuple[str, ...] = ("basic",)


class TelemetryConfig(BaseModel):
    """Logging and tracing configuration."""

    model_config = ConfigDict(frozen=True)

    enabled: bool = True
    service_name: str = "mobli-sdk"
    trace_requests: bool = True
    log_level: str = "INFO"


class MobliConfig(BaseModel):
    """Main configuration for the Mobli SDK."""

    model_config = ConfigDict(frozen=True, validate_default=True)

    # Required
    client_id: str = Field(..., min_length=1)
    client_secret: SecretStr

    # Endpoints
    api_base_url: str = "https://api.mobli.com/"
    authorize_base_url: str = "https://oauth.mobli.com"
    dialog_authorize_path: str = "/authorize"
    public_token_path: str = "/shared"
    public_token_scope: str = "shared"

    default_permissions: tuple[str, ...] = BASIC_PERMISSIONS

    # HTTP settings
    timeout: Annotated[float, Field(gt=0, le=300)] = 30.0
    connect_timeout: Annotated[float, Field(gt=0, le=60)] = 10.0

    # Async runner pool size
    max_workers: Annotated[int, Field(gt=0, le=64)] = 8

    telemetry: TelemetryConfig = Field(default_factory=TelemetryConfig)

    @field_validator("api_base_url", "authorize_base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Base URLs must be absolute http(s) URLs."""
        if not v.startswith(("http://", "https://")):
            msg = f"Base URL must start with http:// or https://: {v}"
            raise ValueError(msg)
        return v

    @property
    def dialog_authorize_url(self) -> str:
        """Login page the dialog opens."""
        return f"{self.authorize_base_url}{self.dialog_authorize_path}"

    @property
    def public_token_url(self) -> str:
        """Client-credentials endpoint for the shared token."""
        return f"{self.authorize_base_url}{self.public_token_path}"

    @property
    def redirect_uri(self) -> str:
        """Redirect URI registered for this application."""
        return f"{REDIRECT_URI_START}{self.client_id}{REDIRECT_URI_END}"

    def with_overrides(self, **kwargs: Any) -> Self:
        """Create new config with overridden values."""
        data = self.model_dump()
        data["client_secret"] = self.client_secret.get_secret_value()
        data.update(kwargs)
        return self.__class__(**data)

    @classmethod
    def from_env(cls, prefix: str = "MOBLI_") -> Self:
        """Create config from environment variables."""
        import os

        def get_env(key: str, default: Any = None) -> Any:
            return os.environ.get(f"{prefix}{key}", default)

        client_id = get_env("CLIENT_ID")
        if not client_id:
            raise InvalidConfigError(
                f"{prefix}CLIENT_ID environment variable is required",
                field="client_id",
            )

        client_secret = get_env("CLIENT_SECRET")
        if client_secret is None:
            raise InvalidConfigError(
                f"{prefix}CLIENT_SECRET environment variable is required",
                field="client_secret",
            )

        overrides: dict[str, Any] = {}
        for key, field in (
            ("API_BASE_URL", "api_base_url"),
            ("AUTHORIZE_BASE_URL", "authorize_base_url"),
        ):
            value = get_env(key)
            if value:
                overrides[field] = value

        permissions = get_env("PERMISSIONS")
        if permissions is not None:
            overrides["default_permissions"] = tuple(permissions.split())

        return cls(
            client_id=client_id,
            client_secret=client_secret,
            timeout=float(get_env("TIMEOUT", "30.0")),
            max_workers=int(get_env("MAX_WORKERS", "8")),
            **overrides,
        )
