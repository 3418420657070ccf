"""
HiAnime Client - Client for the HiAnime REST API.

Every endpoint answers with an ``APIResponse`` envelope. The stream endpoint
encodes its link in several shapes, so its payload goes through the tolerant
stream decoder instead of a fixed model.
"""

from typing import Any, List, Optional

import aiohttp

from webplayer.api.base import BaseAPIClient
from webplayer.api.models import (
    Anime,
    AnimeDetails,
    APIResponse,
    Episode,
    HomeData,
    SearchData,
    ServerList,
)
from webplayer.core.config_schemas import NetworkSettings
from webplayer.core.decoder import decode_stream_payload
from webplayer.core.exceptions import APIError, APIErrorKind
from webplayer.core.models import StreamLink


DEFAULT_HIANIME_URL = "https://hi-animeapi.onrender.com/api/v1"

SERVER_TYPES = ("sub", "dub")


class HiAnimeClient(BaseAPIClient):
    """Client for home, search, details, episodes, servers and streams."""

    name = "HiAnime API"

    def __init__(
        self,
        base_url: str = DEFAULT_HIANIME_URL,
        network: Optional[NetworkSettings] = None,
        rate_limit: float = 0.0,
        session: Optional[aiohttp.ClientSession] = None
    ):
        super().__init__(base_url, network, rate_limit, session)

    async def _get_data(self, path: str, params: Optional[dict] = None) -> Any:
        """Fetch an endpoint and unwrap the response envelope."""
        url = self.build_url(path, params)
        payload = await self._get_json(path, params)
        envelope = self._validate(APIResponse[Any], payload, url)

        if not envelope.success:
            raise APIError(
                f"{self.name} reported failure for {path}",
                APIErrorKind.INVALID_RESPONSE,
                url=url,
                details=envelope.data
            )

        return envelope.data

    async def get_home(self) -> HomeData:
        """Fetch the home page sections."""
        data = await self._get_data("home")
        return self._validate(HomeData, data)

    async def search(self, query: str) -> List[Anime]:
        """
        Search anime by keyword.

        Args:
            query: Search keyword

        Returns:
            Matching anime cards in upstream order
        """
        data = await self._get_data("search", {"keyword": query})
        return self._validate(SearchData, data).response

    async def get_details(self, anime_id: str) -> AnimeDetails:
        """Fetch full details of one anime."""
        data = await self._get_data(f"anime/{self._path_segment(anime_id)}")
        return self._validate(AnimeDetails, data)

    async def get_episodes(self, anime_id: str) -> List[Episode]:
        """Fetch the episode list of one anime."""
        data = await self._get_data(f"episodes/{self._path_segment(anime_id)}")
        return self._validate(List[Episode], data)

    async def get_servers(self, episode_id: str) -> ServerList:
        """Fetch the sub and dub servers available for an episode."""
        data = await self._get_data("servers", {"id": episode_id})
        return self._validate(ServerList, data)

    async def get_stream_link(self, episode_id: str, server: str, server_type: str = "sub") -> StreamLink:
        """
        Resolve the playable file of an episode on a given server.

        Args:
            episode_id: Episode identifier
            server: Server name as listed by ``get_servers``
            server_type: ``sub`` or ``dub``

        Returns:
            Resolved stream link

        Raises:
            APIError: On transport, status or envelope failures
            DecodeError: If the stream payload matches no known shape
        """
        if server_type not in SERVER_TYPES:
            raise ValueError(f"server_type must be one of {SERVER_TYPES}, got {server_type!r}")

        data = await self._get_data("stream", {"id": episode_id, "server": server, "type": server_type})
        link = decode_stream_payload(data)
        self.logger.debug(f"Resolved stream for {episode_id} on {server}/{server_type}")
        return link


__all__ = ["DEFAULT_HIANIME_URL", "SERVER_TYPES", "HiAnimeClient"]
