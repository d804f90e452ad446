"""Result and request types for the Mobli SDK.

Asynchronous requests and login dialogs report their outcome through a single
callable that receives one tagged result, instead of a listener object with a
method per outcome.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from .errors import (
    DialogError,
    MalformedRequestError,
    MobliSDKError,
    ResourceNotFoundError,
    TransportError,
    VendorError,
)


class RequestOutcome(StrEnum):
    """Outcome of a single API request."""

    SUCCESS = "success"
    MALFORMED_REQUEST = "malformed_request"
    NOT_FOUND = "not_found"
    TRANSPORT_ERROR = "transport_error"
    VENDOR_ERROR = "vendor_error"


class DialogOutcome(StrEnum):
    """Outcome of a login dialog."""

    COMPLETED = "completed"
    VENDOR_ERROR = "vendor_error"
    DIALOG_ERROR = "dialog_error"
    CANCELED = "canceled"


@dataclass
class RequestDescriptor:
    """One API call: built per request and discarded afterwards."""

    base_url: str
    relative_path: str
    params: dict[str, str]
    http_method: str

    @property
    def url(self) -> str:
        """Base URL and relative path joined as-is."""
        return self.base_url + self.relative_path


@dataclass(frozen=True)
class RequestResult:
    """Tagged outcome of an API request.

    ``state`` is the caller's correlation value, returned untouched.
    """

    outcome: RequestOutcome
    state: Any = None
    response: str | None = None
    error: MobliSDKError | None = None

    @classmethod
    def success(cls, response: str, state: Any = None) -> RequestResult:
        return cls(RequestOutcome.SUCCESS, state=state, response=response)

    @classmethod
    def failure(cls, error: MobliSDKError, state: Any = None) -> RequestResult:
        """Build the failure variant matching the error's class."""
        return cls(_outcome_for(error), state=state, error=error)

    @property
    def ok(self) -> bool:
        return self.outcome is RequestOutcome.SUCCESS

    def raise_for_error(self) -> str:
        """Return the response body, or raise the carried error."""
        if self.error is not None:
            raise self.error
        return self.response or ""


def _outcome_for(error: MobliSDKError) -> RequestOutcome:
    if isinstance(error, MalformedRequestError):
        return RequestOutcome.MALFORMED_REQUEST
    if isinstance(error, ResourceNotFoundError):
        return RequestOutcome.NOT_FOUND
    if isinstance(error, VendorError):
        return RequestOutcome.VENDOR_ERROR
    if isinstance(error, TransportError):
        return RequestOutcome.TRANSPORT_ERROR
    msg = f"No request outcome for {type(error).__name__}"
    raise TypeError(msg)


@dataclass(frozen=True)
class DialogResult:
    """Tagged outcome of a login dialog."""

    outcome: DialogOutcome
    values: Mapping[str, str] = field(default_factory=dict)
    error: VendorError | DialogError | None = None

    @classmethod
    def completed(cls, values: Mapping[str, str]) -> DialogResult:
        return cls(DialogOutcome.COMPLETED, values=dict(values))

    @classmethod
    def vendor_error(cls, error: VendorError) -> DialogResult:
        return cls(DialogOutcome.VENDOR_ERROR, error=error)

    @classmethod
    def dialog_error(cls, error: DialogError) -> DialogResult:
        return cls(DialogOutcome.DIALOG_ERROR, error=error)

    @classmethod
    def canceled(cls) -> DialogResult:
        return cls(DialogOutcome.CANCELED)

    @property
    def ok(self) -> bool:
        return self.outcome is DialogOutcome.COMPLETED


RequestListener = Callable[[RequestResult], None]
DialogListener = Callable[[DialogResult], None]
