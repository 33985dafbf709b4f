"""Unit tests for structured logging configuration.

Tests the structlog configuration and logging output format.
"""

import json
from collections.abc import Iterator

import pytest
import structlog

from logflow.application.observability.tab_context import tab_scope
from logflow.infrastructure.observability.logging import configure_structlog


@pytest.fixture(autouse=True)
def reset_structlog() -> Iterator[None]:
    """Restore structlog defaults after each test."""
    yield
    structlog.reset_defaults()


def _renderers(kind: type) -> list:
    processors = structlog.get_config().get("processors", [])
    return [p for p in processors if isinstance(p, kind)]


class TestConfigureStructlog:
    """Tests for configure_structlog function."""

    def test_production_renders_json(self) -> None:
        configure_structlog(environment="production")
        assert _renderers(structlog.processors.JSONRenderer)

    def test_development_renders_console(self) -> None:
        configure_structlog(environment="development")
        assert _renderers(structlog.dev.ConsoleRenderer)

    def test_defaults_to_production(self) -> None:
        configure_structlog()
        assert _renderers(structlog.processors.JSONRenderer)


class TestLogOutput:
    """Tests for actual log output format."""

    def test_json_entry_carries_tab_id(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_structlog(environment="production")
        log = structlog.get_logger()

        with tab_scope("tab-a"):
            log.info("override_created", service_id="order-api")

        entry = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert entry["event"] == "override_created"
        assert entry["level"] == "info"
        assert entry["tab_id"] == "tab-a"
        assert entry["service_id"] == "order-api"
        assert "timestamp" in entry

    def test_log_level_env_filters(
        self,
        capsys: pytest.CaptureFixture[str],
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setenv("LOG_LEVEL", "WARNING")
        configure_structlog(environment="production")
        log = structlog.get_logger()

        log.info("hidden")
        log.warning("shown")

        out = capsys.readouterr().out
        assert "hidden" not in out
        assert "shown" in out
