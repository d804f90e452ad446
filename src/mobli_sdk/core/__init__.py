"""Core components for the Mobli SDK.

Business logic shared by the blocking client and the async runner.
"""

from __future__ import annotations

from .auth_builder import AuthorizationBuilder
from .errors import ErrorFactory
from .request_executor import RequestExecutor

__all__ = [
    "AuthorizationBuilder",
    "ErrorFactory",
    "RequestExecutor",
]
