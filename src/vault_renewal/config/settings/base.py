"""Config settings – Settings base class."""
from __future__ import annotations

import dataclasses
from typing import ClassVar, NoReturn

from vault_renewal.config.validation import InvalidSettingValueError, MissingRequiredSettingError


@dataclasses.dataclass
class Settings:
    """Dataclass settings bound to an environment prefix.

    ``_prefix = "VAULT"`` maps field ``addr`` to ``VAULT_ADDR``.  Fields
    declared with ``repr=False`` hold secrets and are never echoed in
    validation errors.  :meth:`_validate` runs after ``__init__``; subclasses
    build their checks from :meth:`_require` and :meth:`_reject`.
    """

    _prefix: ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    @classmethod
    def env_key(cls, field_name: str) -> str:
        return f"{cls._prefix}_{field_name}".upper().lstrip("_")

    @classmethod
    def is_secret(cls, field_name: str) -> bool:
        return any(f.name == field_name and not f.repr for f in dataclasses.fields(cls))

    def _validate(self) -> None:
        """Override to add cross-field validation."""

    def _require(self, *field_names: str, required_by: str | None = None) -> None:
        for name in field_names:
            if not getattr(self, name):
                raise MissingRequiredSettingError(self.env_key(name), required_by=required_by)

    def _reject(self, field_name: str, reason: str) -> NoReturn:
        raise InvalidSettingValueError(
            self.env_key(field_name),
            getattr(self, field_name),
            reason,
            secret=self.is_secret(field_name),
        )


__all__ = ["Settings"]
