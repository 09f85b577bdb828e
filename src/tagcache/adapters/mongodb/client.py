"""MongoDB adapter — collection factory."""
from __future__ import annotations

from typing import Any

from tagcache.config import MissingDriverError, MongoCacheSettings
from tagcache.config.settings.mongo import DEFAULT_DBNAME


def _require_motor() -> Any:
    try:
        import motor.motor_asyncio as motor_async
        return motor_async
    except ImportError as exc:
        raise MissingDriverError("motor") from exc


def open_collection(settings: MongoCacheSettings, **client_kwargs: Any) -> Any:
    """Open a motor collection for *settings*.

    The client connects lazily, so this does no I/O. Dates are read back
    timezone-aware (UTC).
    """
    motor_async = _require_motor()
    client_kwargs.setdefault("tz_aware", True)
    client = motor_async.AsyncIOMotorClient(settings.connection_url(), **client_kwargs)
    return client[settings.dbname or DEFAULT_DBNAME][settings.collection]


__all__ = ["open_collection"]
