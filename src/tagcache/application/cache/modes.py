"""Application cache – CleaningMode."""
from __future__ import annotations

from enum import Enum

from tagcache.config.validation import InvalidCleaningModeError

__all__ = ["CleaningMode"]


class CleaningMode(str, Enum):
    """Bulk removal modes understood by ``clean()``.

    The string values match the mode names used by cache frontends, so a
    frontend may pass either the enum member or its plain string.
    """

    ALL = "all"
    OLD = "old"
    MATCHING_TAG = "matchingTag"
    NOT_MATCHING_TAG = "notMatchingTag"
    MATCHING_ANY_TAG = "matchingAnyTag"

    @classmethod
    def parse(cls, mode: "CleaningMode | str") -> "CleaningMode":
        """Return the member for *mode*; unknown modes are a configuration error."""
        if isinstance(mode, cls):
            return mode
        try:
            return cls(mode)
        except ValueError:
            raise InvalidCleaningModeError(mode) from None
