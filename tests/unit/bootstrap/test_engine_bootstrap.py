"""Unit tests for engine bootstrap wiring."""

import pytest

from logflow.bootstrap import build_engine, build_remote_applier
from logflow.config.engine_config import TEST_ENGINE_CONFIG
from logflow.infrastructure.adapters.broadcast_channel import BroadcastHub
from logflow.infrastructure.adapters.demo_remote_applier import DemoRemoteApplier
from logflow.infrastructure.adapters.http_remote_applier import HttpRemoteApplier
from logflow.infrastructure.adapters.shared_storage import SharedStorage


class TestBuildRemoteApplier:
    def test_no_endpoint_selects_demo(self) -> None:
        assert isinstance(build_remote_applier(None, None, TEST_ENGINE_CONFIG), DemoRemoteApplier)

    def test_endpoint_selects_http(self) -> None:
        applier = build_remote_applier("https://logs.example.com/api", "t", TEST_ENGINE_CONFIG)
        assert isinstance(applier, HttpRemoteApplier)


class TestBuildEngine:
    """Tests for build_engine()."""

    def test_tabs_share_channel(self) -> None:
        storage, hub = SharedStorage(), BroadcastHub()

        build_engine(storage, hub, config=TEST_ENGINE_CONFIG, tab_id="a")
        build_engine(storage, hub, config=TEST_ENGINE_CONFIG, tab_id="b")

        assert hub.members(TEST_ENGINE_CONFIG.channel_name) == 2

    def test_reads_config_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOGFLOW_CHANNEL_NAME", "custom")
        hub = BroadcastHub()

        engine = build_engine(SharedStorage(), hub, tab_id="a")

        assert engine.tab_id == "a"
        assert hub.members("custom") == 1
