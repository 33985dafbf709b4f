"""Unit tests for ExpiryClock."""

from collections.abc import Callable

import pytest

from logflow.application.services.expiry_clock import (
    ALERT_TITLE,
    IDLE_TITLE,
    ExpiryClock,
)
from logflow.application.services.override_store import OverrideStore
from logflow.domain.events.override_event import TickResult
from logflow.domain.models.override import Override
from tests.helpers import FakeClock


class SteppingClock(FakeClock):
    """Moves forward by ``step_ms`` after every read."""

    def __init__(self, step_ms: int) -> None:
        super().__init__()
        self._step_ms = step_ms

    def now_ms(self) -> int:
        now = super().now_ms()
        self.advance(self._step_ms)
        return now


@pytest.fixture
def expiry_clock(store: OverrideStore, fake_clock: FakeClock) -> ExpiryClock:
    """Create an active ExpiryClock."""
    clock = ExpiryClock(store, fake_clock)
    clock.activate()
    return clock


class TestTick:
    """Tests for tick()."""

    def test_inert_without_session(
        self,
        store: OverrideStore,
        fake_clock: FakeClock,
        make_override: Callable[..., Override],
    ) -> None:
        clock = ExpiryClock(store, fake_clock)
        store.create(make_override(duration_ms=1_000))
        fake_clock.advance(5_000)

        assert clock.tick() is None
        assert len(store) == 1

    def test_removes_expired_and_reports_expiring(
        self,
        expiry_clock: ExpiryClock,
        store: OverrideStore,
        fake_clock: FakeClock,
        make_override: Callable[..., Override],
    ) -> None:
        gone = store.create(make_override("a", duration_ms=60_000))
        soon = store.create(make_override("b", duration_ms=100_000))
        later = store.create(make_override("c", duration_ms=600_000))
        fake_clock.advance(60_000)

        result = expiry_clock.tick()

        assert result is not None
        assert result.now == fake_clock.now_ms()
        assert [o.id for o in result.expired] == [gone.id]
        assert [o.id for o in result.live] == [soon.id, later.id]
        assert result.expiring_ids == frozenset({soon.id})
        assert result.attention_required is True
        assert expiry_clock.tick_count == 1

    def test_listeners_receive_result(
        self,
        expiry_clock: ExpiryClock,
    ) -> None:
        seen: list[TickResult] = []
        expiry_clock.add_listener(seen.append)

        result = expiry_clock.tick()

        assert seen == [result]

    def test_failing_listener_does_not_abort_tick(
        self,
        expiry_clock: ExpiryClock,
        store: OverrideStore,
        fake_clock: FakeClock,
        make_override: Callable[..., Override],
    ) -> None:
        store.create(make_override(duration_ms=1_000))
        fake_clock.advance(1_000)
        seen: list[TickResult] = []

        def broken(_result: TickResult) -> None:
            raise RuntimeError("boom")

        expiry_clock.add_listener(broken)
        expiry_clock.add_listener(seen.append)

        result = expiry_clock.tick()

        assert seen == [result]
        assert len(store) == 0

    def test_expiry_decided_at_reported_now(self) -> None:
        clock = SteppingClock(step_ms=1_000)
        store = OverrideStore(clock)
        override = store.create(
            Override.create(
                service_id="s",
                service_name="S",
                env_id="prod",
                level="DEBUG",
                duration_ms=5_000,
                now=clock.now_ms(),
            )
        )
        expiry_clock = ExpiryClock(store, clock)
        expiry_clock.activate()
        clock.set(override.expiry_time - 1_000)

        result = expiry_clock.tick()

        assert result is not None
        assert result.now == override.expiry_time - 1_000
        assert result.expired == ()
        assert [o.id for o in result.live] == [override.id]

    def test_deactivate_makes_inert(self, expiry_clock: ExpiryClock) -> None:
        expiry_clock.deactivate()
        assert expiry_clock.tick() is None
        assert expiry_clock.active is False


class TestTitle:
    """Tests for the attention title."""

    def test_idle_title(self, expiry_clock: ExpiryClock) -> None:
        expiry_clock.tick()
        assert expiry_clock.title() == IDLE_TITLE
        assert expiry_clock.attention_required is False

    def test_title_alternates_while_attention_required(
        self,
        expiry_clock: ExpiryClock,
        store: OverrideStore,
        make_override: Callable[..., Override],
    ) -> None:
        store.create(make_override("a", duration_ms=30_000))
        store.create(make_override("b", duration_ms=40_000))

        titles = []
        for _ in range(3):
            expiry_clock.tick()
            titles.append(expiry_clock.title())

        assert titles == [ALERT_TITLE, "Tracker Alert (2)", ALERT_TITLE]
        assert expiry_clock.attention_required is True
