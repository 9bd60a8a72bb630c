"""HashiCorp Vault adapter – login methods.

A login method authenticates an ``hvac.Client`` in place; afterwards
``client.token`` holds the freshly issued token.
"""
from __future__ import annotations

import pathlib
from typing import Any, ClassVar, Protocol, runtime_checkable

DEFAULT_SERVICE_ACCOUNT_TOKEN = "/var/run/secrets/kubernetes.io/serviceaccount/token"


@runtime_checkable
class LoginMethod(Protocol):
    """Port: authenticate an hvac client."""

    name: ClassVar[str]

    def __call__(self, client: Any) -> None: ...


class TokenLogin:
    """Static token.

    Re-login hands back the same token, so renewing it has no effect: the
    token simply expires on schedule.  Only useful for tokens without TTL
    or for development.
    """

    name: ClassVar[str] = "token"

    def __init__(self, token: str) -> None:
        self._token = token

    def __call__(self, client: Any) -> None:
        client.token = self._token

    def __repr__(self) -> str:
        return "TokenLogin(token='***')"


class AppRoleLogin:
    name: ClassVar[str] = "approle"

    def __init__(self, role_id: str, secret_id: str | None = None, mount_point: str = "approle") -> None:
        self.role_id = role_id
        self._secret_id = secret_id
        self.mount_point = mount_point

    def __call__(self, client: Any) -> None:
        client.auth.approle.login(
            role_id=self.role_id,
            secret_id=self._secret_id,
            mount_point=self.mount_point,
        )

    def __repr__(self) -> str:
        return f"AppRoleLogin(role_id={self.role_id!r}, mount_point={self.mount_point!r})"


class UserpassLogin:
    name: ClassVar[str] = "userpass"

    def __init__(self, username: str, password: str, mount_point: str = "userpass") -> None:
        self.username = username
        self._password = password
        self.mount_point = mount_point

    def __call__(self, client: Any) -> None:
        client.auth.userpass.login(
            username=self.username,
            password=self._password,
            mount_point=self.mount_point,
        )

    def __repr__(self) -> str:
        return f"UserpassLogin(username={self.username!r}, mount_point={self.mount_point!r})"


class KubernetesLogin:
    """Service-account JWT login; the JWT is re-read on every login."""

    name: ClassVar[str] = "kubernetes"

    def __init__(
        self,
        role: str,
        jwt_path: str = DEFAULT_SERVICE_ACCOUNT_TOKEN,
        mount_point: str = "kubernetes",
    ) -> None:
        self.role = role
        self.jwt_path = jwt_path
        self.mount_point = mount_point

    def __call__(self, client: Any) -> None:
        jwt = pathlib.Path(self.jwt_path).read_text().strip()
        client.auth.kubernetes.login(role=self.role, jwt=jwt, mount_point=self.mount_point)

    def __repr__(self) -> str:
        return f"KubernetesLogin(role={self.role!r}, jwt_path={self.jwt_path!r})"


__all__ = [
    "DEFAULT_SERVICE_ACCOUNT_TOKEN",
    "AppRoleLogin",
    "KubernetesLogin",
    "LoginMethod",
    "TokenLogin",
    "UserpassLogin",
]
