"""
CLI Context - Global application context and state management.

This module holds the configuration manager and the persistent store for the
running command, so command modules can reach them without circular imports.
"""

from typing import Optional

from webplayer.core import ConfigManager
from webplayer.core.storage import (
    FavoritesStore,
    JSONFileStore,
    KeyValueStore,
    RecentURLsStore,
)


# Global application state
_config_manager: Optional[ConfigManager] = None
_store: Optional[KeyValueStore] = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    if _config_manager is None:
        raise RuntimeError("Configuration manager not initialized")
    return _config_manager


def set_config_manager(config_manager: ConfigManager) -> None:
    """Set the global configuration manager instance."""
    global _config_manager, _store
    _config_manager = config_manager
    _store = None


def get_store() -> KeyValueStore:
    """Get the persistent store, opening the JSON file on first use."""
    global _store
    if _store is None:
        settings = get_config_manager().settings
        _store = JSONFileStore(settings.storage.store_path)
    return _store


def get_recent_urls() -> RecentURLsStore:
    limit = get_config_manager().settings.storage.recent_urls_limit
    return RecentURLsStore(get_store(), limit=limit)


def get_favorites() -> FavoritesStore:
    return FavoritesStore(get_store())


# Export context functions
__all__ = [
    "get_config_manager",
    "set_config_manager",
    "get_store",
    "get_recent_urls",
    "get_favorites",
]
