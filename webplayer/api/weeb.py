"""
Weeb Client - Client for the AnimePahe based Weeb API.

The Weeb API returns bare JSON: a list of search hits and a full-data object
keyed by the hit's site link.
"""

from typing import List, Optional

import aiohttp

from webplayer.api.base import BaseAPIClient
from webplayer.api.models import WeebFullData, WeebSearchResult
from webplayer.core.config_schemas import NetworkSettings


DEFAULT_WEEB_URL = "https://weebapi.onrender.com"


class WeebClient(BaseAPIClient):
    """Client for Weeb API search and full-data lookups."""

    name = "Weeb API"

    def __init__(
        self,
        base_url: str = DEFAULT_WEEB_URL,
        network: Optional[NetworkSettings] = None,
        rate_limit: float = 0.0,
        session: Optional[aiohttp.ClientSession] = None
    ):
        super().__init__(base_url, network, rate_limit, session)

    async def search(self, query: str) -> List[WeebSearchResult]:
        """
        Search the Weeb API.

        Args:
            query: Free-text query

        Returns:
            Search hits in upstream order

        Raises:
            APIError: INVALID_URL for an empty query, otherwise as raised by
                the transport and decoding layers
        """
        path = f"get_search_results/{self._path_segment(query)}"
        payload = await self._get_json(path)
        return self._validate(List[WeebSearchResult], payload, self.build_url(path))

    async def get_full_data(self, anime_id: str) -> WeebFullData:
        """Fetch synopsis, cover and episode links for a search hit id."""
        path = f"get_full_data/{self._path_segment(anime_id)}"
        payload = await self._get_json(path)
        return self._validate(WeebFullData, payload, self.build_url(path))


__all__ = ["DEFAULT_WEEB_URL", "WeebClient"]
