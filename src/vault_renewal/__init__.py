"""
vault_renewal – keep a Vault client's auth token valid in the background.

Import path convention::

    from vault_renewal.renewal import TokenRenewingClient
    from vault_renewal.adapters.vault import HvacCredentialClient, create_renewing_client
    from vault_renewal.kernel.errors import StoreError
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
