"""Infrastructure errors — failures talking to the secret store."""

from __future__ import annotations

from typing import Any

from vault_renewal.kernel.errors.base import BaseError


class InfrastructureError(BaseError):
    """Infrastructure / I/O failure."""

    default_code = "infrastructure_error"


class StoreError(InfrastructureError):
    """A secret-store call failed.

    Covers network failures, rejected logins, malformed responses and an
    unavailable store.  ``operation`` names the credential call that failed
    (``"inspect_self"``, ``"invalidate"``, ``"login"``).
    """

    default_code = "store_error"

    def __init__(
        self,
        message: str,
        *,
        operation: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.operation = operation

    def log_fields(self) -> dict[str, Any]:
        fields = super().log_fields()
        if self.operation is not None:
            fields["operation"] = self.operation
        return fields


__all__ = ["InfrastructureError", "StoreError"]
