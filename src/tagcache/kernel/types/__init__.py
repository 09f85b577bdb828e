"""Kernel types."""
from tagcache.kernel.types.result import Err, Ok, Result

__all__ = ["Err", "Ok", "Result"]
