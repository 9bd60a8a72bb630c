"""Testing support – fakes for exercising code built on TokenRenewingClient."""

from vault_renewal.testing.fakes import (
    FakeCredentialClient,
    ManualTimer,
    ManualTimerFactory,
    make_credential,
)

__all__ = [
    "FakeCredentialClient",
    "ManualTimer",
    "ManualTimerFactory",
    "make_credential",
]
