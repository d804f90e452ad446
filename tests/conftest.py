"""
Shared test fixtures for Mobli SDK tests.

Provides stub collaborators (transport, login dialog, clock), configuration
and result recorders.
"""

from __future__ import annotations

import pytest

from mobli_sdk.client import MobliClient
from mobli_sdk.config import MobliConfig, TelemetryConfig
from mobli_sdk.session import TokenStore
from tests.helpers import (
    DeniedPermissions,
    FakeClock,
    FakeLoginDialog,
    Recorder,
    RecordingAlerts,
    StubTransport,
)


@pytest.fixture
def base_config() -> MobliConfig:
    """Provide a basic SDK configuration for testing."""
    return MobliConfig(
        client_id="abc",
        client_secret="xyz",
        telemetry=TelemetryConfig(enabled=False),
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(clock: FakeClock) -> TokenStore:
    return TokenStore(clock=clock)


@pytest.fixture
def transport() -> StubTransport:
    return StubTransport()


@pytest.fixture
def login_dialog() -> FakeLoginDialog:
    return FakeLoginDialog()


@pytest.fixture
def client(
    base_config: MobliConfig,
    transport: StubTransport,
    login_dialog: FakeLoginDialog,
    clock: FakeClock,
) -> MobliClient:
    """Client wired to stub collaborators."""
    return MobliClient(
        base_config,
        transport=transport,
        login_dialog=login_dialog,
        clock=clock,
    )


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def denied_permissions() -> DeniedPermissions:
    return DeniedPermissions()


@pytest.fixture
def alerts() -> RecordingAlerts:
    return RecordingAlerts()
