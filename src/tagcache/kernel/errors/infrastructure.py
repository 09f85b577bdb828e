"""Infrastructure errors — faults raised by the backing store."""

from __future__ import annotations

from typing import Any

from tagcache.kernel.errors.base import BaseError


class InfrastructureError(BaseError):
    """I/O failure that is not a contract violation."""

    default_code = "infrastructure_error"


class CacheStoreError(InfrastructureError):
    """The backing store failed while serving a cache operation.

    Raised by the operations whose failures the caller is expected to act
    on (bulk invalidation, touch, listing). The driver exception is kept
    as ``cause`` and chained as ``__cause__``.
    """

    default_code = "cache_store_error"

    def __init__(
        self,
        operation: str,
        message: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message or f"Cache store failed during '{operation}'", **kwargs)
        self.operation = operation


__all__ = ["CacheStoreError", "InfrastructureError"]
