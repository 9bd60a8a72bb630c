"""HashiCorp Vault adapter – VaultSettings."""
from __future__ import annotations

import dataclasses

from vault_renewal.adapters.vault.auth import (
    DEFAULT_SERVICE_ACCOUNT_TOKEN,
    AppRoleLogin,
    KubernetesLogin,
    LoginMethod,
    TokenLogin,
    UserpassLogin,
)
from vault_renewal.config.settings import Settings

AUTH_METHODS = ("token", "approle", "userpass", "kubernetes")

_REQUIRED_BY_METHOD: dict[str, tuple[str, ...]] = {
    "token": ("token",),
    "approle": ("role_id",),
    "userpass": ("username", "password"),
    "kubernetes": ("kubernetes_role",),
}


@dataclasses.dataclass
class VaultSettings(Settings):
    """Connection and login settings, read from ``VAULT_*`` variables."""

    _prefix = "VAULT"

    addr: str = "http://127.0.0.1:8200"
    auth_method: str = "token"
    token: str | None = dataclasses.field(default=None, repr=False)
    role_id: str | None = None
    secret_id: str | None = dataclasses.field(default=None, repr=False)
    approle_mount: str = "approle"
    username: str | None = None
    password: str | None = dataclasses.field(default=None, repr=False)
    userpass_mount: str = "userpass"
    kubernetes_role: str | None = None
    kubernetes_jwt_path: str = DEFAULT_SERVICE_ACCOUNT_TOKEN
    kubernetes_mount: str = "kubernetes"
    namespace: str | None = None
    verify: bool = True
    timeout: int = 30
    renew_default_due: float = 60.0

    def _validate(self) -> None:
        self.auth_method = self.auth_method.lower()
        if self.auth_method not in AUTH_METHODS:
            self._reject("auth_method", f"expected one of {', '.join(AUTH_METHODS)}")
        self._require(
            *_REQUIRED_BY_METHOD[self.auth_method],
            required_by=f"auth_method={self.auth_method}",
        )
        if self.renew_default_due < 0:
            self._reject("renew_default_due", "must be >= 0")

    def login_method(self) -> LoginMethod:
        """Build the login method selected by ``auth_method``."""
        if self.auth_method == "approle":
            return AppRoleLogin(self.role_id, self.secret_id, mount_point=self.approle_mount)  # type: ignore[arg-type]
        if self.auth_method == "userpass":
            return UserpassLogin(self.username, self.password, mount_point=self.userpass_mount)  # type: ignore[arg-type]
        if self.auth_method == "kubernetes":
            return KubernetesLogin(
                self.kubernetes_role,  # type: ignore[arg-type]
                jwt_path=self.kubernetes_jwt_path,
                mount_point=self.kubernetes_mount,
            )
        return TokenLogin(self.token)  # type: ignore[arg-type]


__all__ = ["AUTH_METHODS", "VaultSettings"]
