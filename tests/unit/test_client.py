"""Unit tests for the blocking client."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from mobli_sdk import MobliClient, MobliConfig
from mobli_sdk.errors import ResourceNotFoundError
from tests.helpers import StubTransport


class TestRequest:
    def test_defaults_to_api_base_url_and_get(
        self, client: MobliClient, transport: StubTransport
    ) -> None:
        transport.response = '{"id": "me"}'

        assert client.request("me") == '{"id": "me"}'
        assert transport.calls == [("https://api.mobli.com/me", "GET", {})]

    def test_explicit_base_url(self, client: MobliClient, transport: StubTransport) -> None:
        client.request("/shared", {"a": "b"}, "POST", base_url="https://oauth.mobli.com")

        assert transport.calls == [("https://oauth.mobli.com/shared", "POST", {"a": "b"})]

    def test_attaches_token(self, client: MobliClient, transport: StubTransport) -> None:
        client.session.set_access_token("T")

        client.request("me")

        assert transport.calls[0][2] == {"access_token": "T"}

    def test_raises_failures(self, client: MobliClient, transport: StubTransport) -> None:
        transport.error = ResourceNotFoundError()

        with pytest.raises(ResourceNotFoundError):
            client.request("nope")


class TestSessionAccessors:
    def test_accessors_mirror_store(self, client: MobliClient) -> None:
        client.session.update(access_token="T", expires_in="0", user_id="u")

        assert client.access_token == "T"
        assert client.access_expires == 0
        assert client.user_id == "u"
        assert client.client_id == "abc"
        assert client.is_session_valid()


class TestLifecycle:
    def test_context_manager_closes_owned_http_client(self, base_config: MobliConfig) -> None:
        with patch("mobli_sdk.client.create_http_client") as mock_create:
            mock_http = MagicMock()
            mock_create.return_value = mock_http

            with MobliClient(base_config) as client:
                assert client is not None

            mock_http.close.assert_called_once()

    def test_does_not_close_injected_transport(self, base_config: MobliConfig) -> None:
        transport = MagicMock()

        with MobliClient(base_config, transport=transport):
            pass

        transport.close.assert_not_called()
