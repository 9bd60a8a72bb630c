"""Observability – structured logging helpers."""
from vault_renewal.observability.logging.filters import (
    DEFAULT_SENSITIVE_FIELDS,
    VAULT_TOKEN_PATTERN,
    SensitiveFieldsFilter,
)
from vault_renewal.observability.logging.factory import JsonLoggerFactory
from vault_renewal.observability.logging.processors import get_logger

__all__ = [
    "DEFAULT_SENSITIVE_FIELDS",
    "JsonLoggerFactory",
    "SensitiveFieldsFilter",
    "VAULT_TOKEN_PATTERN",
    "get_logger",
]
