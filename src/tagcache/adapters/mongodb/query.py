"""MongoDB adapter — cleaning mode to filter translation."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from tagcache.adapters.mongodb.codec import FIELD_EXPIRES_AT, FIELD_TAGS
from tagcache.application.cache import CleaningMode


def tag_filter(mode: CleaningMode, tags: list[str]) -> dict[str, Any]:
    """Set-membership filter over the tag array.

    A missing ``t`` field behaves as an empty set: ``$nin`` matches it,
    ``$all`` and ``$in`` do not. An empty *tags* list matches nothing for
    ``$all``/``$in`` and everything for ``$nin``.
    """
    if mode is CleaningMode.MATCHING_TAG:
        return {FIELD_TAGS: {"$all": tags}}
    if mode is CleaningMode.NOT_MATCHING_TAG:
        return {FIELD_TAGS: {"$nin": tags}}
    if mode is CleaningMode.MATCHING_ANY_TAG:
        return {FIELD_TAGS: {"$in": tags}}
    raise ValueError(f"{mode!r} is not a tag mode")


def clean_filter(mode: CleaningMode, tags: list[str], now: datetime) -> dict[str, Any]:
    if mode is CleaningMode.ALL:
        return {}
    if mode is CleaningMode.OLD:
        # $lt on a date never matches null, so infinite records survive.
        return {FIELD_EXPIRES_AT: {"$lt": now}}
    return tag_filter(mode, tags)


__all__ = ["clean_filter", "tag_filter"]
