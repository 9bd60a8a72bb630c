"""HashiCorp Vault adapter – hvac credential client, login methods and settings."""
from vault_renewal.adapters.vault.auth import (
    AppRoleLogin,
    KubernetesLogin,
    LoginMethod,
    TokenLogin,
    UserpassLogin,
)
from vault_renewal.adapters.vault.client import HvacCredentialClient, create_renewing_client
from vault_renewal.adapters.vault.settings import AUTH_METHODS, VaultSettings

__all__ = [
    "AUTH_METHODS",
    "AppRoleLogin",
    "HvacCredentialClient",
    "KubernetesLogin",
    "LoginMethod",
    "TokenLogin",
    "UserpassLogin",
    "VaultSettings",
    "create_renewing_client",
]
