"""HashiCorp Vault adapter – HvacCredentialClient and create_renewing_client."""
from __future__ import annotations

import threading
from typing import Any

from vault_renewal.adapters.vault.auth import LoginMethod
from vault_renewal.adapters.vault.settings import VaultSettings
from vault_renewal.config.settings import EnvSettingsLoader, SettingsLoader
from vault_renewal.kernel.errors import StoreError
from vault_renewal.kernel.timers import TimerFactory
from vault_renewal.observability.logging import get_logger
from vault_renewal.renewal import CredentialInfo, TokenRenewingClient

logger = get_logger(__name__)


def _require_hvac() -> Any:
    try:
        import hvac  # type: ignore[import-untyped]
        return hvac
    except ImportError as exc:
        raise ImportError("Install 'hvac' to use the Vault adapter") from exc


def _store_errors() -> tuple[type[BaseException], ...]:
    import requests

    return (_require_hvac().exceptions.VaultError, requests.exceptions.RequestException)


class HvacCredentialClient:
    """:class:`~vault_renewal.renewal.port.CredentialClient` over an ``hvac.Client``.

    Holds at most one token.  :meth:`invalidate` logs in again and swaps the
    new token in place of the old one, so foreground calls always see either
    the old or the new token.  If that login fails the old token is kept.
    Every other public attribute (``secrets``, ``sys``, ``read``, ...)
    resolves on the hvac client, logging in first when no token is held.
    """

    def __init__(self, client: Any, login: LoginMethod) -> None:
        self._client = client
        self._login = login
        self._lock = threading.RLock()

    def __getattr__(self, name: str) -> Any:
        try:
            client = self.__dict__["_client"]
        except KeyError:
            raise AttributeError(name) from None
        if not name.startswith("_"):
            self.ensure_authenticated()
        return getattr(client, name)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(url={getattr(self._client, 'url', None)!r}, login={self._login!r})"

    @property
    def hvac_client(self) -> Any:
        return self._client

    def ensure_authenticated(self) -> None:
        """Log in unless a token is already held."""
        with self._lock:
            if not self._client.token:
                self._authenticate()

    def inspect_self(self) -> CredentialInfo:
        with self._lock:
            self.ensure_authenticated()
            try:
                response = self._client.auth.token.lookup_self()
            except _store_errors() as exc:
                raise StoreError("Vault token lookup failed", operation="inspect_self", cause=exc) from exc
        return CredentialInfo.from_lookup(response)

    def invalidate(self) -> None:
        """Replace the held token with a freshly issued one.

        The old token stays on the client while the login runs and is put
        back if the login fails, so the caller keeps a usable token until it
        actually expires.
        """
        with self._lock:
            previous = self._client.token
            try:
                self._authenticate()
            except StoreError:
                self._client.token = previous
                raise

    def _authenticate(self) -> None:
        try:
            self._login(self._client)
        except (*_store_errors(), OSError) as exc:
            raise StoreError(
                f"Vault login failed (method={self._login.name})",
                operation="login",
                cause=exc,
            ) from exc
        logger.info("vault.login", method=self._login.name)


def create_renewing_client(
    settings: VaultSettings | None = None,
    *,
    loader: SettingsLoader | None = None,
    timer_factory: TimerFactory | None = None,
) -> TokenRenewingClient:
    """Build an hvac client from *settings* and wrap it for background renewal.

    *settings* defaults to :class:`VaultSettings` loaded by *loader*
    (environment variables unless given).  The returned client has already
    logged in and armed its first renewal, or armed the fallback retry if
    Vault was unreachable.
    """
    if settings is None:
        settings = (loader or EnvSettingsLoader()).load(VaultSettings)
    hvac = _require_hvac()
    client = hvac.Client(
        url=settings.addr,
        namespace=settings.namespace,
        verify=settings.verify,
        timeout=settings.timeout,
    )
    return TokenRenewingClient(
        HvacCredentialClient(client, settings.login_method()),
        default_due_time=settings.renew_default_due,
        timer_factory=timer_factory,
    )


__all__ = ["HvacCredentialClient", "create_renewing_client"]
