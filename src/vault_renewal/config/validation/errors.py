"""Config validation – errors raised while reading settings."""
from __future__ import annotations

from vault_renewal.kernel.errors import ApplicationError

REDACTED = "[REDACTED]"


class ConfigError(ApplicationError):
    """Settings could not be loaded or failed validation."""

    default_code = "config_error"


class MissingRequiredSettingError(ConfigError):
    """An environment variable needed by the chosen configuration is unset.

    *required_by* names what needs it, e.g. ``"auth_method=approle"``.
    """

    default_code = "missing_required_setting"

    def __init__(self, setting_name: str, *, required_by: str | None = None) -> None:
        message = f"{setting_name} is not set"
        if required_by:
            message = f"{message} (required by {required_by})"
        super().__init__(message)
        self.setting_name = setting_name
        self.required_by = required_by


class InvalidSettingValueError(ConfigError):
    """A setting is present but unusable.  Secret values never reach the message."""

    default_code = "invalid_setting_value"

    def __init__(self, setting_name: str, value: object, reason: str, *, secret: bool = False) -> None:
        shown = REDACTED if secret else repr(value)
        super().__init__(f"{setting_name}={shown} is invalid: {reason}")
        self.setting_name = setting_name
        self.value = value
        self.reason = reason


__all__ = ["ConfigError", "InvalidSettingValueError", "MissingRequiredSettingError"]
