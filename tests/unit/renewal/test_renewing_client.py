"""Unit tests for TokenRenewingClient – renewal loop, fallback and shutdown."""
from __future__ import annotations

import threading
from datetime import timedelta
from unittest.mock import MagicMock

import pytest

from vault_renewal.kernel.errors import StoreError
from vault_renewal.kernel.timers import ThreadingTimerFactory
from vault_renewal.renewal import (
    DEFAULT_DUE_TIME,
    RENEW_FACTOR,
    CredentialClient,
    TokenRenewingClient,
    compute_due_time,
)
from vault_renewal.testing.fakes import FakeCredentialClient, ManualTimerFactory, make_credential


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _make(*outcomes, default_due_time: float = 60.0):
    fake = FakeCredentialClient(*outcomes)
    timers = ManualTimerFactory()
    logger = MagicMock()
    client = TokenRenewingClient(
        fake, default_due_time=default_due_time, timer_factory=timers, logger=logger
    )
    return client, fake, timers, logger


def _logged_events(logger: MagicMock, method: str = "info") -> list[str]:
    return [c.args[0] for c in getattr(logger, method).call_args_list]


class _RecordingTimerFactory(ThreadingTimerFactory):
    """Keeps every armed :class:`threading.Timer` for later inspection."""

    def __init__(self) -> None:
        super().__init__()
        self.handles: list[threading.Timer] = []

    def schedule(self, delay, callback, *args):
        handle = super().schedule(delay, callback, *args)
        self.handles.append(handle)
        return handle


# ---------------------------------------------------------------------------
# compute_due_time
# ---------------------------------------------------------------------------


class TestComputeDueTime:
    @pytest.mark.parametrize(
        ("ttl", "expected"),
        [(100, 90), (50, 45), (10, 9), (3600, 3240), (1, 0), (7, 6), (2764800, 2488320)],
    )
    def test_floor_of_ninety_percent(self, ttl: int, expected: int) -> None:
        assert compute_due_time(ttl) == expected

    def test_renew_factor(self) -> None:
        assert RENEW_FACTOR == 0.9

    def test_returns_int(self) -> None:
        assert isinstance(compute_due_time(33), int)

    def test_zero_ttl_is_not_clamped(self) -> None:
        assert compute_due_time(0) == 0


# ---------------------------------------------------------------------------
# Construction / initial cycle
# ---------------------------------------------------------------------------


class TestInitialCycle:
    def test_initial_cycle_only_inspects(self) -> None:
        _, fake, _, _ = _make(make_credential(100))
        assert fake.calls == ["inspect_self"]

    def test_arms_timer_at_ninety_percent(self) -> None:
        client, _, timers, _ = _make(make_credential(100))
        assert len(timers.pending) == 1
        assert timers.pending[0].delay == 90
        assert client.due_time == 90
        assert client.is_scheduled is True

    def test_timer_argument_is_display_id(self) -> None:
        _, _, timers, _ = _make(make_credential(100, accessor="acc-1"))
        assert timers.pending[0].args == ("acc-1",)

    def test_logs_schedule(self) -> None:
        _, _, _, logger = _make(make_credential(100, accessor="acc-1"))
        logger.info.assert_any_call(
            "vault.token_renewal_scheduled",
            token_ref="acc-1",
            ttl=100,
            due_seconds=90,
            due_minutes=1.5,
        )

    def test_default_due_time_is_one_minute(self) -> None:
        client = TokenRenewingClient(
            FakeCredentialClient(make_credential(100)), timer_factory=ManualTimerFactory()
        )
        assert client.default_due_time == DEFAULT_DUE_TIME == 60.0

    def test_accepts_timedelta_default(self) -> None:
        client, *_ = _make(make_credential(100), default_due_time=timedelta(minutes=2))
        assert client.default_due_time == 120.0

    def test_negative_default_due_time_rejected(self) -> None:
        with pytest.raises(ValueError):
            _make(make_credential(100), default_due_time=-1)

    def test_initial_failure_does_not_raise_and_uses_default(self) -> None:
        client, fake, timers, logger = _make(StoreError("vault down"), default_due_time=60.0)
        assert fake.calls == ["inspect_self"]
        assert [t.delay for t in timers.pending] == [60.0]
        assert client.due_time == 60.0
        assert _logged_events(logger, "exception") == ["vault.token_renew_failed"]

    def test_fake_satisfies_protocol(self) -> None:
        assert isinstance(FakeCredentialClient(), CredentialClient)


# ---------------------------------------------------------------------------
# Renewal cycles
# ---------------------------------------------------------------------------


class TestRenewalCycle:
    def test_scenario_a_renews_and_reschedules(self) -> None:
        client, fake, timers, _ = _make(make_credential(100), make_credential(50))

        timers.advance(90)

        assert fake.calls == ["inspect_self", "invalidate", "inspect_self"]
        assert fake.logins == 2
        assert [t.delay for t in timers.pending] == [45]
        assert timers.pending[0].due_at == 135
        assert client.due_time == 45

    def test_nothing_fires_before_due(self) -> None:
        _, fake, timers, _ = _make(make_credential(100))
        timers.advance(89)
        assert fake.calls == ["inspect_self"]

    def test_reset_logged_with_previous_token_ref(self) -> None:
        _, _, timers, logger = _make(
            make_credential(100, accessor="old"), make_credential(50, accessor="new")
        )
        timers.advance(90)
        logger.info.assert_any_call("vault.token_reset", token_ref="old")
        assert timers.pending[0].args == ("new",)

    def test_continues_indefinitely(self) -> None:
        _, fake, timers, _ = _make(make_credential(100))  # re-issues ttl=100 forever
        timers.advance(90 * 5)
        assert fake.logins == 6
        assert len(timers.pending) == 1

    def test_only_one_timer_pending_at_any_time(self) -> None:
        _, _, timers, _ = _make(make_credential(100), make_credential(20), make_credential(10))
        for _ in range(3):
            timers.fire_next()
            assert len(timers.pending) == 1

    def test_previous_timer_released_before_rearm(self) -> None:
        _, _, timers, _ = _make(make_credential(100), make_credential(50))
        first = timers.pending[0]
        timers.advance(90)
        assert first.fired is True
        assert first.cancelled is True
        assert timers.pending[0] is not first


# ---------------------------------------------------------------------------
# Never-expiring credentials
# ---------------------------------------------------------------------------


class TestNeverExpires:
    def test_scenario_b_no_timer_armed(self) -> None:
        client, fake, timers, logger = _make(make_credential(0, creation_ttl=0))
        assert timers.timers == []
        assert client.is_scheduled is False
        assert client.due_time is None
        assert "vault.token_never_expires" in _logged_events(logger)

        timers.advance(10_000)
        assert fake.calls == ["inspect_self"]

        client.shutdown()
        assert client.is_disposed is True

    def test_sentinel_checks_creation_ttl_not_remaining_ttl(self) -> None:
        _, _, timers, _ = _make(make_credential(3600, creation_ttl=0))
        assert timers.timers == []

    def test_non_expiring_after_renewal_stops_loop(self) -> None:
        client, fake, timers, _ = _make(make_credential(100), make_credential(0, creation_ttl=0))
        timers.advance(90)
        assert timers.pending == []
        assert client.is_scheduled is False

        timers.advance(10_000)
        assert fake.calls == ["inspect_self", "invalidate", "inspect_self"]


# ---------------------------------------------------------------------------
# Failure handling
# ---------------------------------------------------------------------------


class TestFailureFallback:
    def test_scenario_c_invalidate_failure_uses_default(self) -> None:
        client, fake, timers, logger = _make(make_credential(10), default_due_time=60.0)
        fake.fail_next_invalidate(StoreError("vault down", operation="invalidate"))

        timers.advance(9)

        assert fake.calls == ["inspect_self", "invalidate"]
        assert [t.delay for t in timers.pending] == [60.0]
        assert client.due_time == 60.0
        assert _logged_events(logger, "exception") == ["vault.token_renew_failed"]

    def test_inspect_failure_uses_default(self) -> None:
        client, fake, timers, _ = _make(make_credential(100), StoreError("boom"), default_due_time=30.0)
        timers.advance(90)
        assert fake.calls == ["inspect_self", "invalidate", "inspect_self"]
        assert [t.delay for t in timers.pending] == [30.0]

    def test_any_exception_is_contained(self) -> None:
        _, _, timers, _ = _make(make_credential(100), RuntimeError("malformed"))
        timers.advance(90)
        assert [t.delay for t in timers.pending] == [60.0]

    def test_self_heals_after_outage(self) -> None:
        client, fake, timers, _ = _make(
            make_credential(100),
            StoreError("down"),
            StoreError("still down"),
            make_credential(200),
        )
        timers.advance(90)
        timers.advance(60)
        timers.advance(60)
        assert fake.logins == 2
        assert client.due_time == 180

    def test_failure_log_carries_last_known_token_ref(self) -> None:
        _, fake, timers, logger = _make(make_credential(100, accessor="acc-9"))
        fake.fail_next_invalidate(StoreError("down", operation="invalidate"))
        timers.advance(90)
        logger.exception.assert_called_once_with(
            "vault.token_renew_failed",
            token_ref="acc-9",
            retry_in_seconds=60.0,
            error_code="store_error",
            operation="invalidate",
        )

    def test_failure_log_without_error_fields_for_foreign_exceptions(self) -> None:
        _, _, timers, logger = _make(make_credential(100, accessor="acc-9"), RuntimeError("bad"))
        timers.advance(90)
        logger.exception.assert_called_once_with(
            "vault.token_renew_failed", token_ref="acc-9", retry_in_seconds=60.0
        )

    def test_zero_due_time_is_armed_as_is(self) -> None:
        client, _, timers, _ = _make(make_credential(1))
        assert timers.pending[0].delay == 0
        assert client.due_time == 0


# ---------------------------------------------------------------------------
# Delegation
# ---------------------------------------------------------------------------


class TestDelegation:
    def test_unknown_attributes_resolve_on_wrapped_client(self) -> None:
        client, fake, _, _ = _make(make_credential(100))
        fake.seed_secret("app/db", "s3cr3t")
        assert client.read_secret("app/db") == "s3cr3t"

    def test_foreground_errors_propagate_unchanged(self) -> None:
        client, _, _, _ = _make(make_credential(100))
        with pytest.raises(StoreError, match="app/missing"):
            client.read_secret("app/missing")

    def test_foreground_calls_do_not_touch_timers(self) -> None:
        client, fake, timers, _ = _make(make_credential(100))
        client.inspect_self()
        assert len(timers.timers) == 1
        assert fake.calls == ["inspect_self", "inspect_self"]

    def test_wrapped_property(self) -> None:
        client, fake, _, _ = _make(make_credential(100))
        assert client.wrapped is fake

    def test_missing_attribute_raises_attribute_error(self) -> None:
        client, _, _, _ = _make(make_credential(100))
        with pytest.raises(AttributeError):
            client.does_not_exist  # noqa: B018

    def test_repr_does_not_leak_token(self) -> None:
        client, _, _, _ = _make(make_credential(100, id="hvs.super-secret"))
        assert "super-secret" not in repr(client)


# ---------------------------------------------------------------------------
# Shutdown
# ---------------------------------------------------------------------------


class TestShutdown:
    def test_cancels_pending_timer(self) -> None:
        client, _, timers, _ = _make(make_credential(100))
        armed = timers.pending[0]
        client.shutdown()
        assert armed.cancelled is True
        assert timers.pending == []
        assert client.is_scheduled is False
        assert client.is_disposed is True

    def test_no_cycle_runs_after_shutdown(self) -> None:
        client, fake, timers, _ = _make(make_credential(100))
        client.shutdown()
        timers.advance(10_000)
        assert fake.calls == ["inspect_self"]

    def test_idempotent(self) -> None:
        client, _, timers, logger = _make(make_credential(100))
        client.shutdown()
        client.shutdown()
        client.shutdown()
        assert timers.pending == []
        assert _logged_events(logger).count("vault.renewal_shutdown") == 1

    def test_context_manager_shuts_down(self) -> None:
        client, _, timers, _ = _make(make_credential(100))
        with client as c:
            assert c is client
        assert client.is_disposed is True
        assert timers.pending == []

    def test_in_flight_cycle_does_not_rearm_after_shutdown(self) -> None:
        fake = FakeCredentialClient(make_credential(100), make_credential(50))
        timers = ManualTimerFactory()
        client = TokenRenewingClient(fake, timer_factory=timers, logger=MagicMock())

        original_inspect = fake.inspect_self

        def inspect_then_shutdown():
            info = original_inspect()
            client.shutdown()  # shutdown lands while the cycle is mid-flight
            return info

        fake.inspect_self = inspect_then_shutdown  # type: ignore[method-assign]
        timers.advance(90)

        assert fake.calls == ["inspect_self", "invalidate", "inspect_self"]
        assert timers.pending == []
        assert client.is_scheduled is False

    def test_concurrent_shutdown_calls(self) -> None:
        client, _, timers, _ = _make(make_credential(100))
        threads = [threading.Thread(target=client.shutdown) for _ in range(16)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert timers.pending == []
        assert client.is_disposed is True


# ---------------------------------------------------------------------------
# Real threading timers
# ---------------------------------------------------------------------------


class TestWithThreadingTimers:
    def test_scenario_d_shutdown_races_firing(self) -> None:
        """Shutdown concurrent with a firing leaves no live timer behind."""
        for _ in range(20):
            cycle_started = threading.Event()
            # due 0: the first renewal fires at once, the second is far out
            fake = FakeCredentialClient(make_credential(1), make_credential(3600))
            original_invalidate = fake.invalidate

            def invalidate(orig=original_invalidate, started=cycle_started):
                started.set()
                orig()

            fake.invalidate = invalidate  # type: ignore[method-assign]
            timers = _RecordingTimerFactory()
            client = TokenRenewingClient(fake, timer_factory=timers, logger=MagicMock())
            assert cycle_started.wait(timeout=2)
            client.shutdown()
            assert client.is_scheduled is False

            # a cycle in flight at shutdown may finish its calls but never re-arms
            for handle in list(timers.handles):
                handle.join(timeout=2)
            assert client.is_scheduled is False
            assert 1 <= len(timers.handles) <= 2
            for handle in timers.handles:
                assert handle.finished.is_set()
                assert not handle.is_alive()
            assert fake.calls[:2] == ["inspect_self", "invalidate"]
            assert len(fake.calls) <= 3

    def test_renews_on_background_thread(self) -> None:
        renewed = threading.Event()
        fake = FakeCredentialClient(make_credential(1), make_credential(3600))
        original_invalidate = fake.invalidate
        seen_threads: list[str] = []

        def invalidate() -> None:
            seen_threads.append(threading.current_thread().name)
            original_invalidate()
            renewed.set()

        fake.invalidate = invalidate  # type: ignore[method-assign]
        client = TokenRenewingClient(fake, logger=MagicMock())
        try:
            assert renewed.wait(timeout=2)
            assert seen_threads[0].startswith("vault-renewal-timer-")
        finally:
            client.shutdown()
