"""Renewal – background credential renewal around a store client."""
from vault_renewal.renewal.port import NEVER_EXPIRES, CredentialClient, CredentialInfo
from vault_renewal.renewal.client import (
    DEFAULT_DUE_TIME,
    RENEW_FACTOR,
    TokenRenewingClient,
    compute_due_time,
)

__all__ = [
    "DEFAULT_DUE_TIME",
    "NEVER_EXPIRES",
    "RENEW_FACTOR",
    "CredentialClient",
    "CredentialInfo",
    "TokenRenewingClient",
    "compute_due_time",
]
