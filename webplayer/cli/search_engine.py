"""
Search Engine - Source-aware search on top of the API clients.

This module maps a data source name to its API client, wraps upstream
failures into SearchError and exposes the search function the live search
coordinator drives.
"""

import logging
from typing import Any, List, Optional, Union

from webplayer.api import HiAnimeClient, WeebClient
from webplayer.api.models import Anime, WeebSearchResult
from webplayer.core.config_schemas import AppSettings
from webplayer.core.exceptions import APIError, SearchError
from webplayer.core.models import DataSource


logger = logging.getLogger(__name__)

SearchResult = Union[Anime, WeebSearchResult]

SEARCH_SOURCES = (DataSource.OFFICIAL.value, DataSource.WEEB.value)


class SearchEngine:
    """
    Searches one upstream API selected by source name.

    Clients are created lazily from settings and closed with ``close``.
    """

    def __init__(self, settings: AppSettings):
        """
        Initialize search engine.

        Args:
            settings: Application settings providing endpoints and network options
        """
        self.settings = settings
        self._hianime: Optional[HiAnimeClient] = None
        self._weeb: Optional[WeebClient] = None

    @property
    def hianime(self) -> HiAnimeClient:
        if self._hianime is None:
            self._hianime = HiAnimeClient(
                base_url=self.settings.api.hianime_base_url,
                network=self.settings.network,
                rate_limit=self.settings.api.rate_limit,
            )
        return self._hianime

    @property
    def weeb(self) -> WeebClient:
        if self._weeb is None:
            self._weeb = WeebClient(
                base_url=self.settings.api.weeb_base_url,
                network=self.settings.network,
                rate_limit=self.settings.api.rate_limit,
            )
        return self._weeb

    def resolve_source(self, source: Optional[str]) -> DataSource:
        """
        Resolve a user supplied source name.

        Raises:
            SearchError: If the source is not searchable
        """
        name = (source or self.settings.search.default_source).lower()
        if name not in SEARCH_SOURCES:
            raise SearchError(
                f"Unknown source '{name}'. Available sources: {', '.join(SEARCH_SOURCES)}",
                source=name
            )
        return DataSource(name)

    async def search(self, query: str, source: Optional[str] = None) -> List[SearchResult]:
        """
        Search the selected source.

        Args:
            query: Search query string
            source: ``official`` or ``weeb``; defaults to the configured source

        Returns:
            Results in upstream order

        Raises:
            SearchError: If the source is unknown or the upstream call fails
        """
        data_source = self.resolve_source(source)
        logger.info(f"Searching {data_source.value} for '{query}'")

        try:
            if data_source is DataSource.WEEB:
                return list(await self.weeb.search(query))
            return list(await self.hianime.search(query))
        except APIError as e:
            raise SearchError(
                f"Search failed: {e.message}",
                query=query,
                source=data_source.value,
                details=e.details
            ) from e

    def suggestions(self, results: List[Any]) -> List[str]:
        """Titles of the first results, limited by the suggestion setting."""
        limit = self.settings.search.suggestion_limit
        return [result.title for result in results[:limit]]

    async def close(self) -> None:
        for client in (self._hianime, self._weeb):
            if client is not None:
                await client.close()
        self._hianime = None
        self._weeb = None


__all__ = ["SearchEngine", "SearchResult", "SEARCH_SOURCES"]
