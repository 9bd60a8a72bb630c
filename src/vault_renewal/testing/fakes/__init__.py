"""Testing fakes – in-memory doubles for the credential and timer ports."""
from vault_renewal.testing.fakes.credentials import FakeCredentialClient, make_credential
from vault_renewal.testing.fakes.timers import ManualTimer, ManualTimerFactory

__all__ = [
    "FakeCredentialClient",
    "ManualTimer",
    "ManualTimerFactory",
    "make_credential",
]
