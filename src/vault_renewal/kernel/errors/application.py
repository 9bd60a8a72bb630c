"""Application-layer errors — misconfiguration and misuse."""

from __future__ import annotations

from vault_renewal.kernel.errors.base import BaseError


class ApplicationError(BaseError):
    """Cross-cutting application-layer concern."""

    default_code = "application_error"


__all__ = ["ApplicationError"]
