"""Renewal – CredentialInfo and the CredentialClient port."""
from __future__ import annotations

import dataclasses
from typing import Any, Mapping, Protocol, runtime_checkable

from vault_renewal.kernel.errors import StoreError

NEVER_EXPIRES = 0


@dataclasses.dataclass(frozen=True)
class CredentialInfo:
    """Snapshot of the active credential as reported by the store.

    ``creation_ttl`` is the TTL assigned at issuance (``0`` means the
    credential never expires); ``ttl`` is the remaining lifetime in seconds
    at inspection time.
    """

    id: str = dataclasses.field(repr=False)
    creation_ttl: int
    ttl: int
    accessor: str | None = None
    renewable: bool = False

    @property
    def never_expires(self) -> bool:
        return self.creation_ttl == NEVER_EXPIRES

    @property
    def display_id(self) -> str:
        """Loggable handle: the accessor, or a masked id."""
        if self.accessor:
            return self.accessor
        return f"{self.id[:4]}***"

    @classmethod
    def from_lookup(cls, response: Mapping[str, Any]) -> "CredentialInfo":
        """Build from a Vault ``auth/token/lookup-self`` response body."""
        try:
            data = response["data"]
            return cls(
                id=str(data["id"]),
                creation_ttl=int(data["creation_ttl"]),
                ttl=int(data["ttl"]),
                accessor=data.get("accessor") or None,
                renewable=bool(data.get("renewable", False)),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise StoreError(
                "Malformed token lookup response",
                operation="inspect_self",
                cause=exc,
            ) from exc


@runtime_checkable
class CredentialClient(Protocol):
    """Port: inspect and invalidate the credential a store client holds."""

    def inspect_self(self) -> CredentialInfo:
        """Describe the active credential, authenticating first if none is held."""
        ...

    def invalidate(self) -> None:
        """Drop the held credential so the next store call re-authenticates."""
        ...


__all__ = ["NEVER_EXPIRES", "CredentialClient", "CredentialInfo"]
