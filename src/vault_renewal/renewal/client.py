"""Renewal – TokenRenewingClient.

Wraps a :class:`~vault_renewal.renewal.port.CredentialClient` and keeps its
credential fresh: every cycle invalidates the held token, inspects the newly
issued one and arms a one-shot timer at 90% of its remaining lifetime.

Usage::

    with TokenRenewingClient(HvacCredentialClient(hvac_client, login)) as vault:
        vault.secrets.kv.v2.read_secret_version(path="app/db")
"""
from __future__ import annotations

import math
import threading
from datetime import timedelta
from typing import Any

from vault_renewal.kernel.errors import BaseError
from vault_renewal.kernel.timers import ThreadingTimerFactory, TimerFactory, TimerHandle
from vault_renewal.observability.logging import get_logger
from vault_renewal.renewal.port import CredentialClient

RENEW_FACTOR = 0.9
DEFAULT_DUE_TIME = 60.0


def compute_due_time(ttl: float) -> int:
    """Seconds to wait before renewing a credential with *ttl* seconds left."""
    return math.floor(ttl * RENEW_FACTOR)


class TokenRenewingClient:
    """Delegating client wrapper with background token renewal.

    Attribute access not defined here resolves on the wrapped client, so the
    wrapper can stand in wherever the client is used.  Foreground calls are
    never serialized against the renewal cycle and their errors propagate
    unchanged.

    The constructor runs the first cycle synchronously (inspection only, no
    invalidation).  Store failures during any cycle are logged and the next
    attempt is armed for *default_due_time* seconds later; they never raise.
    A credential whose creation TTL is ``0`` never expires, so no timer is
    armed for it and the instance stays idle until :meth:`shutdown`.

    Parameters
    ----------
    client:
        The credential-bearing store client to wrap.
    default_due_time:
        Fallback delay (seconds or :class:`~datetime.timedelta`) used after a
        failed cycle.  Defaults to one minute.
    timer_factory:
        Arms the one-shot renewal timers.  Defaults to
        :class:`~vault_renewal.kernel.timers.ThreadingTimerFactory`.
    logger:
        structlog-style logger; defaults to this module's logger.
    """

    def __init__(
        self,
        client: CredentialClient,
        *,
        default_due_time: float | timedelta = DEFAULT_DUE_TIME,
        timer_factory: TimerFactory | None = None,
        logger: Any | None = None,
    ) -> None:
        if isinstance(default_due_time, timedelta):
            default_due_time = default_due_time.total_seconds()
        if default_due_time < 0:
            raise ValueError("default_due_time must be >= 0")
        self._client = client
        self._default_due_time = float(default_due_time)
        self._timers: TimerFactory = timer_factory or ThreadingTimerFactory()
        self._logger = logger or get_logger(__name__)
        self._lock = threading.Lock()
        self._timer: TimerHandle | None = None
        self._disposed = False
        self._due_time: float | None = None
        self._renew(initial_call=True)

    def __getattr__(self, name: str) -> Any:
        try:
            client = self.__dict__["_client"]
        except KeyError:
            raise AttributeError(name) from None
        return getattr(client, name)

    def __enter__(self) -> "TokenRenewingClient":
        return self

    def __exit__(self, *_: Any) -> None:
        self.shutdown()

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(client={self._client!r}, "
            f"due_time={self._due_time!r}, disposed={self._disposed!r})"
        )

    @property
    def wrapped(self) -> CredentialClient:
        return self._client

    @property
    def default_due_time(self) -> float:
        return self._default_due_time

    @property
    def due_time(self) -> float | None:
        """Delay of the most recently armed timer, ``None`` if nothing is armed."""
        with self._lock:
            return self._due_time

    @property
    def is_scheduled(self) -> bool:
        with self._lock:
            return self._timer is not None

    @property
    def is_disposed(self) -> bool:
        with self._lock:
            return self._disposed

    def shutdown(self) -> None:
        """Cancel the pending renewal and stop rescheduling.  Idempotent.

        A cycle already running may finish its store calls but will not arm
        another timer.
        """
        with self._lock:
            if self._disposed:
                return
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            self._due_time = None
            self._disposed = True
        self._logger.info("vault.renewal_shutdown")

    # ------------------------------------------------------------------
    # Renewal cycle
    # ------------------------------------------------------------------

    def _on_timer(self, token_ref: str | None) -> None:
        self._renew(initial_call=False, token_ref=token_ref)

    def _renew(self, initial_call: bool, token_ref: str | None = None) -> None:
        due_time: float | None = self._default_due_time
        try:
            if not initial_call:
                # the wrapped client logs in again on its next store call
                self._client.invalidate()
                self._logger.info("vault.token_reset", token_ref=token_ref)

            info = self._client.inspect_self()
            token_ref = info.display_id

            if info.never_expires:
                self._logger.info("vault.token_never_expires", token_ref=token_ref)
                due_time = None
            else:
                due_time = compute_due_time(info.ttl)
                self._logger.info(
                    "vault.token_renewal_scheduled",
                    token_ref=token_ref,
                    ttl=info.ttl,
                    due_seconds=due_time,
                    due_minutes=round(due_time / 60, 2),
                )
        except Exception as exc:  # noqa: BLE001
            due_time = self._default_due_time
            fields = exc.log_fields() if isinstance(exc, BaseError) else {}
            self._logger.exception(
                "vault.token_renew_failed",
                token_ref=token_ref,
                retry_in_seconds=due_time,
                **fields,
            )
        self._arm(due_time, token_ref)

    def _arm(self, due_time: float | None, token_ref: str | None) -> None:
        with self._lock:
            if self._disposed:
                return
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            self._due_time = due_time
            if due_time is not None:
                self._timer = self._timers.schedule(due_time, self._on_timer, token_ref)


__all__ = ["DEFAULT_DUE_TIME", "RENEW_FACTOR", "TokenRenewingClient", "compute_due_time"]
