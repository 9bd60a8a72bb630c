"""Config – 12-factor settings and loaders."""

from vault_renewal.config.settings import DotenvSettingsLoader, EnvSettingsLoader, Settings, SettingsLoader
from vault_renewal.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

__all__ = [
    "ConfigError",
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "Settings",
    "SettingsLoader",
]
