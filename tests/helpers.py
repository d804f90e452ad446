"""Stub collaborators shared by unit and property tests."""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Any

from mobli_sdk.types import DialogListener, DialogResult


class FakeClock:
    """Settable time source, in seconds."""

    def __init__(self, now: float = 1_700_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class StubTransport:
    """Records every call and answers with a canned body or error."""

    def __init__(self, response: str = "{}") -> None:
        self.response = response
        self.error: Exception | None = None
        self.handler: Callable[[str, str, dict[str, str]], str] | None = None
        self.calls: list[tuple[str, str, dict[str, str]]] = []
        self.cookies_cleared = 0
        self._lock = threading.Lock()

    def open(self, url: str, http_method: str, params: dict[str, str]) -> str:
        with self._lock:
            self.calls.append((url, http_method, dict(params)))
        if self.handler is not None:
            return self.handler(url, http_method, params)
        if self.error is not None:
            raise self.error
        return self.response

    def clear_cookies(self) -> None:
        self.cookies_cleared += 1


class FakeLoginDialog:
    """Login dialog that reports a preset result synchronously."""

    def __init__(self, result: DialogResult | None = None) -> None:
        self.result = result
        self.shown: list[tuple[str, str]] = []

    def show(self, url: str, redirect_uri: str, listener: DialogListener) -> None:
        self.shown.append((url, redirect_uri))
        if self.result is not None:
            listener(self.result)


class DeniedPermissions:
    def has_network_permission(self) -> bool:
        return False


class RecordingAlerts:
    def __init__(self) -> None:
        self.alerts: list[tuple[str, str]] = []

    def show_alert(self, title: str, message: str) -> None:
        self.alerts.append((title, message))


class Recorder:
    """Thread-safe listener that stores every result it gets."""

    def __init__(self) -> None:
        self.results: list[Any] = []
        self._lock = threading.Lock()

    def __call__(self, result: Any) -> None:
        with self._lock:
            self.results.append(result)
