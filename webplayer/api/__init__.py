"""
API Layer - Clients for upstream JSON APIs.

This package contains the shared client plumbing, the response models and
the HiAnime and Weeb API clients.
"""

from webplayer.api.base import BaseAPIClient
from webplayer.api.hianime import HiAnimeClient
from webplayer.api.weeb import WeebClient
from webplayer.api.models import (
    Anime,
    AnimeDetails,
    APIResponse,
    Episode,
    EpisodeInfo,
    HomeData,
    SearchData,
    Server,
    ServerList,
    SpotlightAnime,
    WeebFullData,
    WeebSearchResult,
)

__all__ = [
    "BaseAPIClient",
    "HiAnimeClient",
    "WeebClient",
    "Anime",
    "AnimeDetails",
    "APIResponse",
    "Episode",
    "EpisodeInfo",
    "HomeData",
    "SearchData",
    "Server",
    "ServerList",
    "SpotlightAnime",
    "WeebFullData",
    "WeebSearchResult",
]
