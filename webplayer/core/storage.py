"""
Storage - Key-value persistence for favorites and recent URLs.

Stores are injected at construction time so the favorites and recent-URL
managers can be exercised against an in-memory store in isolation.
"""

import json
import logging
from pathlib import Path
from threading import Lock
from typing import Any, Dict, List, Optional, Protocol, Union

from pydantic import ValidationError

from webplayer.core.exceptions import StorageError
from webplayer.core.models import FavoriteItem, WatchStatus


logger = logging.getLogger(__name__)

FAVORITES_KEY = "favorites"
RECENT_URLS_KEY = "recent_urls"
DEFAULT_RECENT_LIMIT = 10


class KeyValueStore(Protocol):
    """Minimal key-value persistence interface."""

    def get(self, key: str, default: Any = None) -> Any:
        ...

    def set(self, key: str, value: Any) -> None:
        ...


class MemoryStore:
    """Volatile store backed by a dictionary."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._data: Dict[str, Any] = dict(initial or {})

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value


class JSONFileStore:
    """
    Key-value store persisted as a single JSON document.

    Writes go through a temporary file that replaces the original, so a
    crash mid-write never leaves a truncated store behind.
    """

    def __init__(self, path: Union[str, Path]):
        """
        Initialize file store.

        Args:
            path: Location of the JSON document. Parent directories are
                created on demand.
        """
        self.path = Path(path)
        self._lock = Lock()
        self._data: Optional[Dict[str, Any]] = None

    def _load(self) -> Dict[str, Any]:
        if self._data is not None:
            return self._data

        if not self.path.exists():
            self._data = {}
            return self._data

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.warning(f"Invalid store file, starting empty: {e}")
            backup_path = self.path.with_suffix('.json.backup')
            self.path.rename(backup_path)
            logger.info(f"Corrupted store backed up to {backup_path}")
            data = {}
        except OSError as e:
            raise StorageError(f"Failed to read store: {e}", path=str(self.path))

        if not isinstance(data, dict):
            logger.warning("Store file does not contain an object, starting empty")
            data = {}

        self._data = data
        return self._data

    def _save(self, data: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        temp_file = self.path.with_suffix('.tmp')
        try:
            with open(temp_file, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            temp_file.replace(self.path)
        except OSError as e:
            if temp_file.exists():
                temp_file.unlink()
            raise StorageError(f"Failed to save store: {e}", path=str(self.path))

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            return self._load().get(key, default)

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            data = self._load()
            data[key] = value
            self._save(data)
            logger.debug(f"Store key '{key}' saved")


class RecentURLsStore:
    """Most-recent-first list of URLs the user has scraped."""

    def __init__(self, store: KeyValueStore, limit: int = DEFAULT_RECENT_LIMIT, key: str = RECENT_URLS_KEY):
        self.store = store
        self.limit = limit
        self.key = key

    @property
    def urls(self) -> List[str]:
        value = self.store.get(self.key, [])
        if not isinstance(value, list):
            return []
        return [url for url in value if isinstance(url, str)]

    def add(self, url: str) -> List[str]:
        """
        Record a URL at the top of the list.

        An existing identical entry is moved rather than duplicated and the
        list is trimmed to ``limit`` entries.

        Returns:
            The updated list
        """
        urls = [existing for existing in self.urls if existing != url]
        urls.insert(0, url)
        urls = urls[:self.limit]
        self.store.set(self.key, urls)
        return urls

    def clear(self) -> None:
        self.store.set(self.key, [])


class FavoritesStore:
    """Full-record favorites keyed by favorite id, in insertion order."""

    def __init__(self, store: KeyValueStore, key: str = FAVORITES_KEY):
        self.store = store
        self.key = key

    def _load(self) -> List[FavoriteItem]:
        favorites = []
        for raw in self.store.get(self.key, []) or []:
            try:
                favorites.append(FavoriteItem.model_validate(raw))
            except ValidationError as e:
                logger.warning(f"Skipping invalid favorite record: {e}")
        return favorites

    def _save(self, favorites: List[FavoriteItem]) -> None:
        self.store.set(self.key, [item.model_dump(mode='json') for item in favorites])

    def list(self) -> List[FavoriteItem]:
        return self._load()

    def get(self, favorite_id: str) -> Optional[FavoriteItem]:
        for item in self._load():
            if item.id == favorite_id:
                return item
        return None

    def is_favorite(self, favorite_id: str) -> bool:
        return self.get(favorite_id) is not None

    def add(self, item: FavoriteItem) -> None:
        """Add a favorite, replacing any existing record with the same id."""
        favorites = [existing for existing in self._load() if existing.id != item.id]
        favorites.append(item)
        self._save(favorites)
        logger.info(f"Favorite added: {item.id}")

    def remove(self, favorite_id: str) -> bool:
        """Remove a favorite. Returns True if something was removed."""
        favorites = self._load()
        remaining = [item for item in favorites if item.id != favorite_id]
        if len(remaining) == len(favorites):
            return False
        self._save(remaining)
        logger.info(f"Favorite removed: {favorite_id}")
        return True

    def toggle(self, item: FavoriteItem) -> bool:
        """
        Add the item if absent, remove it otherwise.

        Returns:
            True if the item is a favorite after the call
        """
        if self.is_favorite(item.id):
            self.remove(item.id)
            return False
        self.add(item)
        return True

    def update_status(self, favorite_id: str, status: WatchStatus) -> Optional[FavoriteItem]:
        """Change the watch status of an existing favorite."""
        favorites = self._load()
        updated = None
        for index, item in enumerate(favorites):
            if item.id == favorite_id:
                updated = item.model_copy(update={"watch_status": status})
                favorites[index] = updated
                break

        if updated is not None:
            self._save(favorites)
        return updated


__all__ = [
    "FAVORITES_KEY",
    "RECENT_URLS_KEY",
    "DEFAULT_RECENT_LIMIT",
    "KeyValueStore",
    "MemoryStore",
    "JSONFileStore",
    "RecentURLsStore",
    "FavoritesStore",
]
