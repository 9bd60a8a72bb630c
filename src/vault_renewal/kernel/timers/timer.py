"""Kernel timers – one-shot TimerFactory port and threading implementation."""
from __future__ import annotations

import itertools
import threading
from typing import Any, Callable, Protocol, runtime_checkable

__all__ = ["ThreadingTimerFactory", "TimerFactory", "TimerHandle"]


@runtime_checkable
class TimerHandle(Protocol):
    """Port: an armed one-shot timer."""

    def cancel(self) -> None: ...


@runtime_checkable
class TimerFactory(Protocol):
    """Port: arm a callback to run once after *delay* seconds.

    Implementations never repeat; a callback that wants another run must
    schedule it itself.
    """

    def schedule(self, delay: float, callback: Callable[..., None], *args: Any) -> TimerHandle: ...


class ThreadingTimerFactory:
    """Timer factory backed by :class:`threading.Timer`.

    Each armed timer owns a short-lived thread that sleeps until due, runs the
    callback and exits.  A zero or negative *delay* fires immediately.
    ``cancel()`` on the returned handle is idempotent and harmless after the
    timer has fired.
    """

    def __init__(self, *, daemon: bool = True, name_prefix: str = "vault-renewal") -> None:
        self._daemon = daemon
        self._name_prefix = name_prefix
        self._counter = itertools.count(1)

    def schedule(self, delay: float, callback: Callable[..., None], *args: Any) -> threading.Timer:
        timer = threading.Timer(max(delay, 0.0), callback, args=args)
        timer.daemon = self._daemon
        timer.name = f"{self._name_prefix}-timer-{next(self._counter)}"
        timer.start()
        return timer
