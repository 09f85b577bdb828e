"""Kernel error hierarchy — public re-export surface.

Hierarchy::

    BaseError
    ├── ApplicationError     (application.py)
    │   └── ConfigError      (tagcache.config.validation)
    ├── DomainError          (domain.py)
    │   └── ValidationError
    │       └── InvalidLifetimeError
    └── InfrastructureError  (infrastructure.py)
        └── CacheStoreError
"""

from tagcache.kernel.errors.application import ApplicationError
from tagcache.kernel.errors.base import BaseError
from tagcache.kernel.errors.domain import DomainError, InvalidLifetimeError, ValidationError
from tagcache.kernel.errors.infrastructure import CacheStoreError, InfrastructureError

__all__ = [
    "ApplicationError",
    "BaseError",
    "CacheStoreError",
    "DomainError",
    "InfrastructureError",
    "InvalidLifetimeError",
    "ValidationError",
]
