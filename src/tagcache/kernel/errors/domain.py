"""Domain errors — values that break the cache record rules."""

from __future__ import annotations

from typing import Any

from tagcache.kernel.errors.base import BaseError


class DomainError(BaseError):
    """Raised when a cache record rule is violated."""

    default_code = "domain_error"


class ValidationError(DomainError):
    """Input does not meet validation rules."""

    default_code = "validation_error"


class InvalidLifetimeError(ValidationError):
    """A lifetime or lifetime extension is negative."""

    default_code = "invalid_lifetime"

    def __init__(self, lifetime: Any, **kwargs: Any) -> None:
        super().__init__(
            f"Lifetime must be a non-negative number of seconds, got {lifetime!r}",
            detail={"lifetime": lifetime},
            **kwargs,
        )
        self.lifetime = lifetime


__all__ = ["DomainError", "InvalidLifetimeError", "ValidationError"]
