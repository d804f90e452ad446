"""
Property-based tests for asynchronous dispatch.

For every dispatched request, exactly one result reaches the listener, it
arrives exactly once, and it carries the correlation state given at dispatch.
"""

from __future__ import annotations

from concurrent.futures import wait

from hypothesis import HealthCheck, given, settings, strategies as st

from mobli_sdk.async_runner import AsyncMobliRunner
from mobli_sdk.client import MobliClient
from mobli_sdk.config import MobliConfig
from mobli_sdk.errors import (
    MalformedRequestError,
    ResourceNotFoundError,
    TransportError,
    VendorError,
)
from tests.helpers import Recorder, StubTransport

CONFIG = MobliConfig(client_id="abc", client_secret="xyz")

ERRORS = {
    "ok": None,
    "malformed": MalformedRequestError(),
    "not_found": ResourceNotFoundError(),
    "transport": TransportError(),
    "vendor": VendorError("invalid credentials"),
}

states = st.one_of(
    st.none(),
    st.integers(),
    st.text(max_size=10),
    st.tuples(st.integers(), st.text(max_size=5)),
)
plans = st.lists(
    st.tuples(st.sampled_from(sorted(ERRORS)), states),
    min_size=1,
    max_size=20,
)


class TestDispatchProperties:
    """Property tests for exactly-once delivery."""

    @given(plan=plans)
    @settings(max_examples=50, deadline=None, suppress_health_check=[HealthCheck.too_slow])
    def test_each_request_completes_exactly_once(
        self, plan: list[tuple[str, object]]
    ) -> None:
        transport = StubTransport()

        def handler(url: str, method: str, params: dict[str, str]) -> str:
            error = ERRORS[params["kind"]]
            if error is not None:
                raise error
            return params["index"]

        transport.handler = handler
        client = MobliClient(CONFIG, transport=transport)
        recorders = [Recorder() for _ in plan]

        with AsyncMobliRunner(client, max_workers=4) as runner:
            futures = [
                runner.request(
                    "me",
                    {"kind": kind, "index": str(i)},
                    listener=recorders[i],
                    state=state,
                )
                for i, (kind, state) in enumerate(plan)
            ]
            wait(futures, timeout=10)

        for i, (kind, state) in enumerate(plan):
            assert len(recorders[i].results) == 1
            result = recorders[i].results[0]
            assert result is futures[i].result()
            assert result.state == state
            assert result.ok == (kind == "ok")
            if kind == "ok":
                assert result.response == str(i)
            else:
                assert result.error is ERRORS[kind]

    @given(state=states, body=st.text(max_size=30).filter(lambda b: "access_token" not in b))
    @settings(max_examples=50, deadline=None)
    def test_public_token_always_reports_success(self, state: object, body: str) -> None:
        transport = StubTransport(response=body)
        client = MobliClient(CONFIG, transport=transport)
        client.session.set_access_token("OLD")
        recorder = Recorder()

        with AsyncMobliRunner(client, max_workers=1) as runner:
            result = runner.obtain_public_token(recorder, state).result(10)

        assert recorder.results == [result]
        assert result.ok
        assert result.response == body
        assert result.state == state
        assert client.access_token == "OLD"
