"""Unit tests for HttpRemoteApplier."""

import json
from collections.abc import Callable

import httpx
import pytest

from logflow.domain.models.log_level import LogLevel
from logflow.infrastructure.adapters.http_remote_applier import (
    STANDARD_LOGGERS_PATH,
    HttpRemoteApplier,
)

ENDPOINT = "https://logs.example.com/api/loggers"
ACTUATOR = "https://logs.example.com/actuator/loggers"

Handler = Callable[[httpx.Request], httpx.Response]


class Recorder:
    """MockTransport handler that replays scripted statuses."""

    def __init__(self, statuses: list[int] | None = None) -> None:
        self.statuses = list(statuses or [200])
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status = self.statuses.pop(0) if self.statuses else 500
        return httpx.Response(status, json={})

    @property
    def urls(self) -> list[str]:
        return [str(r.url) for r in self.requests]

    def body(self, index: int) -> dict:
        return json.loads(self.requests[index].content)


def _applier(handler: Handler, endpoint: str = ENDPOINT) -> HttpRemoteApplier:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return HttpRemoteApplier(endpoint, "secret-token", timeout_seconds=2.0, client=client)


class TestCandidates:
    """Tests for candidate endpoint ordering."""

    def test_plain_endpoint_then_standard_path(self) -> None:
        applier = HttpRemoteApplier(ENDPOINT, "t")

        urls = [c.url for c in applier.candidates("order-api", {"configuredLevel": "DEBUG"})]

        assert urls == [ENDPOINT, f"https://logs.example.com{STANDARD_LOGGERS_PATH}"]

    def test_actuator_endpoint_tries_per_service_path_first(self) -> None:
        applier = HttpRemoteApplier(ACTUATOR, "t")
        payload = {"serviceId": "order-api", "configuredLevel": "DEBUG", "duration": 1}

        candidates = applier.candidates("order-api", payload)

        assert candidates[0].url == f"{ACTUATOR}/order-api"
        assert candidates[0].payload == {"configuredLevel": "DEBUG"}
        assert candidates[1].payload == payload

    def test_duplicates_collapsed(self) -> None:
        standard = f"https://logs.example.com{STANDARD_LOGGERS_PATH}"
        applier = HttpRemoteApplier(standard, "t")

        assert [c.url for c in applier.candidates("s", {"configuredLevel": "INFO"})] == [standard]

    def test_missing_endpoint_rejected(self) -> None:
        with pytest.raises(ValueError, match="endpoint"):
            HttpRemoteApplier("  ", "t")


class TestApply:
    """Tests for apply()."""

    @pytest.mark.asyncio
    async def test_success_on_first_candidate(self) -> None:
        recorder = Recorder([200])
        applier = _applier(recorder)

        ok = await applier.apply("order-api", LogLevel.DEBUG, 120_000)

        assert ok is True
        assert recorder.urls == [ENDPOINT]
        assert recorder.body(0) == {
            "serviceId": "order-api",
            "configuredLevel": "DEBUG",
            "duration": 120_000,
        }
        headers = recorder.requests[0].headers
        assert headers["authorization"] == "Bearer secret-token"
        assert headers["x-api-logger"] == "all"
        assert headers["x-requested-with"] == "XMLHttpRequest"

    @pytest.mark.asyncio
    async def test_forbidden_falls_through_to_next(self) -> None:
        recorder = Recorder([403, 204])
        applier = _applier(recorder)

        assert await applier.apply("order-api", LogLevel.TRACE, 1_000) is True
        assert len(recorder.requests) == 2

    @pytest.mark.asyncio
    async def test_all_candidates_failing_returns_false(self) -> None:
        recorder = Recorder([500, 404])
        applier = _applier(recorder)

        assert await applier.apply("order-api", LogLevel.DEBUG, 1_000) is False
        assert len(recorder.requests) == 2

    @pytest.mark.asyncio
    async def test_network_error_returns_false(self) -> None:
        def unreachable(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        applier = _applier(unreachable)

        assert await applier.apply("order-api", LogLevel.DEBUG, 1_000) is False

    @pytest.mark.asyncio
    async def test_no_token_omits_authorization(self) -> None:
        recorder = Recorder([200])
        client = httpx.AsyncClient(transport=httpx.MockTransport(recorder))
        applier = HttpRemoteApplier(ENDPOINT, "", client=client)

        await applier.apply("order-api", LogLevel.DEBUG, 1_000)

        assert "authorization" not in recorder.requests[0].headers


class TestRevert:
    """Tests for revert()."""

    @pytest.mark.asyncio
    async def test_posts_default_level_without_duration(self) -> None:
        recorder = Recorder([200])
        applier = _applier(recorder)

        assert await applier.revert("order-api", LogLevel.ERROR) is True
        assert recorder.body(0) == {"serviceId": "order-api", "configuredLevel": "ERROR"}

    @pytest.mark.asyncio
    async def test_close_is_idempotent(self) -> None:
        applier = _applier(Recorder())

        await applier.close()
        await applier.close()
