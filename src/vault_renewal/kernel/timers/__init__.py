"""Kernel timers – one-shot timer port + threading implementation."""
from vault_renewal.kernel.timers.timer import ThreadingTimerFactory, TimerFactory, TimerHandle

__all__ = ["ThreadingTimerFactory", "TimerFactory", "TimerHandle"]
