"""
Core Layer - Domain models and application services.

This module contains the data models, the tolerant stream decoder, the
debounced query coordinator, persistence and configuration handling that
power the WebPlayer application.
"""

from webplayer.core.config_manager import ConfigManager
from webplayer.core.config_schemas import AppSettings
from webplayer.core.config_defaults import (
    create_default_config_files,
    get_default_settings,
)
from webplayer.core.coordinator import DebouncedQueryCoordinator, SearchState
from webplayer.core.decoder import decode_stream_link, decode_stream_payload
from webplayer.core.exceptions import (
    APIError,
    APIErrorKind,
    ConfigurationError,
    DecodeError,
    DecodeErrorKind,
    NetworkError,
    ScrapeError,
    ScrapeErrorKind,
    SearchError,
    StorageError,
    WebPlayerError,
)
from webplayer.core.models import (
    ContentType,
    DataSource,
    FavoriteItem,
    ScrapedItem,
    StreamLink,
    WatchStatus,
)
from webplayer.core.storage import (
    FavoritesStore,
    JSONFileStore,
    KeyValueStore,
    MemoryStore,
    RecentURLsStore,
)

__all__ = [
    # Data Models
    "ContentType",
    "DataSource",
    "FavoriteItem",
    "ScrapedItem",
    "StreamLink",
    "WatchStatus",
    # Resolution
    "decode_stream_link",
    "decode_stream_payload",
    "DebouncedQueryCoordinator",
    "SearchState",
    # Persistence
    "KeyValueStore",
    "MemoryStore",
    "JSONFileStore",
    "RecentURLsStore",
    "FavoritesStore",
    # Configuration Management
    "ConfigManager",
    "AppSettings",
    "create_default_config_files",
    "get_default_settings",
    # Exceptions
    "WebPlayerError",
    "ConfigurationError",
    "NetworkError",
    "DecodeError",
    "DecodeErrorKind",
    "ScrapeError",
    "ScrapeErrorKind",
    "APIError",
    "APIErrorKind",
    "SearchError",
    "StorageError",
]
