"""Application-layer errors — misuse of the cache contract by its caller."""

from __future__ import annotations

from tagcache.kernel.errors.base import BaseError


class ApplicationError(BaseError):
    """Cross-cutting application-layer concern."""

    default_code = "application_error"


__all__ = ["ApplicationError"]
