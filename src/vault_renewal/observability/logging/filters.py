"""Observability – SensitiveFieldsFilter."""
from __future__ import annotations

import re
from typing import Any

DEFAULT_SENSITIVE_FIELDS: frozenset[str] = frozenset({
    "token", "client_token", "vault_token", "x-vault-token", "secret_id",
    "password", "jwt", "authorization",
})

# service, batch and recovery tokens; masked ids such as "hvs.***" do not match
VAULT_TOKEN_PATTERN = re.compile(r"^hv[sbr]\.[\w-]+")


class SensitiveFieldsFilter:
    """structlog processor that keeps Vault credentials out of log events.

    A value is replaced with ``[REDACTED]`` when its key is a sensitive field
    (case-insensitive), or when it is a string shaped like a Vault token.
    Nested dicts, lists and tuples are walked.
    """

    REDACTED = "[REDACTED]"

    def __init__(self, sensitive_fields: frozenset[str] | None = None) -> None:
        fields = DEFAULT_SENSITIVE_FIELDS if sensitive_fields is None else sensitive_fields
        self._fields = frozenset(name.lower() for name in fields)

    def __call__(self, logger: Any, method: str, event_dict: dict[str, Any]) -> dict[str, Any]:  # noqa: ARG002
        return self.redact(event_dict)

    def redact(self, data: dict[str, Any]) -> dict[str, Any]:
        return {
            key: self.REDACTED if str(key).lower() in self._fields else self._scrub(value)
            for key, value in data.items()
        }

    def _scrub(self, value: Any) -> Any:
        if isinstance(value, dict):
            return self.redact(value)
        if isinstance(value, (list, tuple)):
            return type(value)(self._scrub(item) for item in value)
        if isinstance(value, str) and VAULT_TOKEN_PATTERN.match(value):
            return self.REDACTED
        return value


__all__ = ["DEFAULT_SENSITIVE_FIELDS", "VAULT_TOKEN_PATTERN", "SensitiveFieldsFilter"]
