"""Kernel errors – BaseError."""

from __future__ import annotations

from typing import Any


class BaseError(Exception):
    """Root of the vault-renewal error hierarchy.

    ``code`` is a stable slug for log queries.  ``cause`` keeps the store or
    transport exception that triggered the error; it is also chained as
    ``__cause__``.
    """

    default_code: str = "base_error"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        if self.cause is None:
            return f"[{self.code}] {self.message}"
        return f"[{self.code}] {self.message} ({type(self.cause).__name__})"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"

    def log_fields(self) -> dict[str, Any]:
        """Fields merged into the log event that reports this error.

        Only the cause's type is included; its text may carry response
        bodies from the store.
        """
        fields: dict[str, Any] = {"error_code": self.code}
        if self.cause is not None:
            fields["error_cause"] = type(self.cause).__name__
        return fields


__all__ = ["BaseError"]
