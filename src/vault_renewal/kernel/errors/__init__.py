"""Kernel error hierarchy — public re-export surface.

Hierarchy::

    BaseError
    ├── ApplicationError     (application.py)
    │   └── ConfigError      (config.validation)
    └── InfrastructureError  (infrastructure.py)
        └── StoreError
"""

from vault_renewal.kernel.errors.application import ApplicationError
from vault_renewal.kernel.errors.base import BaseError
from vault_renewal.kernel.errors.infrastructure import InfrastructureError, StoreError

__all__ = [
    "ApplicationError",
    "BaseError",
    "InfrastructureError",
    "StoreError",
]
