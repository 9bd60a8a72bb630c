"""Config settings – EnvSettingsLoader, DotenvSettingsLoader."""
from __future__ import annotations

import abc
import dataclasses
import os
from collections.abc import Mapping
from typing import Any, TypeVar

from dotenv import dotenv_values

from vault_renewal.config.settings.base import Settings
from vault_renewal.config.validation import InvalidSettingValueError, MissingRequiredSettingError

T = TypeVar("T", bound=Settings)

_TRUE = frozenset({"1", "true", "yes", "on"})
_FALSE = frozenset({"0", "false", "no", "off"})


class SettingsLoader(abc.ABC):
    """Port: load settings from an external source."""

    @abc.abstractmethod
    def load(self, settings_class: type[T]) -> T: ...


class EnvSettingsLoader(SettingsLoader):
    """Build settings from ``<PREFIX>_<FIELD>`` environment variables.

    Unset variables keep the field default.  Values are coerced to the
    field's ``bool``, ``int`` or ``float`` annotation and passed through as
    strings otherwise.  A value that cannot be coerced raises
    :class:`InvalidSettingValueError` naming the variable.

    *environ* defaults to :data:`os.environ`, read at :meth:`load` time.
    """

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ = environ

    def load(self, settings_class: type[T]) -> T:
        environ = os.environ if self._environ is None else self._environ
        kwargs: dict[str, Any] = {}
        for field in dataclasses.fields(settings_class):
            key = settings_class.env_key(field.name)
            raw = environ.get(key)
            if raw is None:
                if (
                    field.default is dataclasses.MISSING
                    and field.default_factory is dataclasses.MISSING
                ):
                    raise MissingRequiredSettingError(key)
                continue
            kwargs[field.name] = _coerce(key, raw, field.type, secret=not field.repr)
        return settings_class(**kwargs)


def _coerce(key: str, raw: str, type_hint: Any, *, secret: bool) -> Any:
    hint = type_hint if isinstance(type_hint, str) else getattr(type_hint, "__name__", "")
    if hint == "bool":
        value = raw.strip().lower()
        if value in _TRUE:
            return True
        if value in _FALSE:
            return False
        raise InvalidSettingValueError(key, raw, "expected a boolean", secret=secret)
    if hint in ("int", "float"):
        try:
            return int(raw) if hint == "int" else float(raw)
        except ValueError:
            raise InvalidSettingValueError(key, raw, f"expected {hint}", secret=secret) from None
    return raw


class DotenvSettingsLoader(SettingsLoader):
    """Read a ``.env`` file underneath the process environment.

    Process variables win unless *override* is set.  ``os.environ`` itself is
    never modified.
    """

    def __init__(self, env_file: str = ".env", override: bool = False) -> None:
        self._env_file = env_file
        self._override = override

    def load(self, settings_class: type[T]) -> T:
        from_file = {k: v for k, v in dotenv_values(self._env_file).items() if v is not None}
        if self._override:
            environ = {**os.environ, **from_file}
        else:
            environ = {**from_file, **os.environ}
        return EnvSettingsLoader(environ).load(settings_class)


__all__ = ["DotenvSettingsLoader", "EnvSettingsLoader", "SettingsLoader"]
