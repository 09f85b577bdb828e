"""Config settings – MongoCacheSettings."""
from __future__ import annotations

import dataclasses
from urllib.parse import quote_plus

from tagcache.config.settings.base import Settings
from tagcache.config.validation import InvalidSettingValueError

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 27017
DEFAULT_DBNAME = "Db_Cache"
DEFAULT_COLLECTION = "C_Cache"


@dataclasses.dataclass
class MongoCacheSettings(Settings):
    """Connection and behaviour settings for the MongoDB cache backend.

    Environment variables use the ``TAGCACHE_`` prefix, e.g.
    ``TAGCACHE_HOST`` or ``TAGCACHE_INCREMENT_HIT_COUNTER``.

    ``increment_hit_counter`` turns every ``load`` into a find-and-modify,
    which moves read traffic onto the primary. ``default_lifetime`` is used
    when ``save`` receives no explicit lifetime; ``0`` means infinite.
    """

    _prefix: dataclasses.ClassVar[str] = "TAGCACHE"

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    username: str = ""
    password: str = dataclasses.field(default="", repr=False)
    dbname: str = DEFAULT_DBNAME
    collection: str = DEFAULT_COLLECTION
    increment_hit_counter: bool = False
    default_lifetime: int = 0

    def _validate(self) -> None:
        if not 0 < int(self.port) < 65536:
            raise InvalidSettingValueError("port", self.port, "must be between 1 and 65535")
        if not self.collection:
            raise InvalidSettingValueError("collection", self.collection, "must not be empty")
        if self.default_lifetime < 0:
            raise InvalidSettingValueError(
                "default_lifetime", self.default_lifetime, "must be >= 0 (0 means infinite)"
            )

    def connection_url(self) -> str:
        """Assemble the ``mongodb://`` URL for this configuration.

        Credentials are only included when both username and password are
        non-empty, so an environment can discard them by overriding either
        one with an empty string. Empty host or database names fall back to
        the defaults.
        """
        parts = ["mongodb://"]
        if self.username and self.password:
            parts += [quote_plus(self.username), ":", quote_plus(self.password), "@"]
        parts += [
            self.host or DEFAULT_HOST,
            ":",
            str(self.port or DEFAULT_PORT),
            "/",
            self.dbname or DEFAULT_DBNAME,
        ]
        return "".join(parts)


__all__ = [
    "DEFAULT_COLLECTION",
    "DEFAULT_DBNAME",
    "DEFAULT_HOST",
    "DEFAULT_PORT",
    "MongoCacheSettings",
]
