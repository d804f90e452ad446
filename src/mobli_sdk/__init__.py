"""Mobli Python SDK."""

from .async_runner import AsyncMobliRunner
from .auth import AuthFlowCoordinator, AuthState
from .client import MobliClient
from .config import MobliConfig, TelemetryConfig
from .dialog import LoginDialog, outcome_from_redirect
from .errors import (
    DialogError,
    InvalidConfigError,
    MalformedRequestError,
    MobliSDKError,
    ResourceNotFoundError,
    TransportError,
    VendorError,
)
from .session import TokenStore
from .telemetry import SDK_VERSION, configure_telemetry
from .transport import HttpxTransport, Transport
from .types import DialogOutcome, DialogResult, RequestOutcome, RequestResult

__all__ = [
    "AsyncMobliRunner",
    "AuthFlowCoordinator",
    "AuthState",
    "MobliClient",
    "MobliConfig",
    "TelemetryConfig",
    "LoginDialog",
    "outcome_from_redirect",
    "DialogError",
    "InvalidConfigError",
    "MalformedRequestError",
    "MobliSDKError",
    "ResourceNotFoundError",
    "TransportError",
    "VendorError",
    "TokenStore",
    "configure_telemetry",
    "HttpxTransport",
    "Transport",
    "DialogOutcome",
    "DialogResult",
    "RequestOutcome",
    "RequestResult",
]

__version__ = SDK_VERSION
