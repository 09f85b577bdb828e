"""Config settings – 12-factor env-based configuration."""
from tagcache.config.settings.base import Settings
from tagcache.config.settings.loaders import EnvSettingsLoader, SettingsLoader
from tagcache.config.settings.mongo import MongoCacheSettings

__all__ = ["EnvSettingsLoader", "MongoCacheSettings", "Settings", "SettingsLoader"]
