"""Config settings – 12-factor env-based configuration."""
from vault_renewal.config.settings.base import Settings
from vault_renewal.config.settings.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader

__all__ = ["DotenvSettingsLoader", "EnvSettingsLoader", "Settings", "SettingsLoader"]
