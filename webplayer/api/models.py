"""
API Models - Pydantic models for upstream JSON APIs.

The HiAnime API wraps every payload in a ``{"success": ..., "data": ...}``
envelope and uses camelCase keys; the Weeb API returns bare objects and
lists. Models accept the upstream key names and expose snake_case fields.
"""

from typing import Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field


T = TypeVar("T")


class APIResponse(BaseModel, Generic[T]):
    """Response envelope used by the HiAnime API."""

    success: bool = Field(..., description="Whether the upstream call succeeded")
    data: T = Field(..., description="Endpoint payload")


class EpisodeInfo(BaseModel):
    """Subbed and dubbed episode counts."""

    sub: Optional[int] = None
    dub: Optional[int] = None


class Anime(BaseModel):
    """Anime card as listed on the home and search pages."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    poster: str
    rank: Optional[int] = None
    episodes: Optional[EpisodeInfo] = None


class SpotlightAnime(BaseModel):
    """Featured anime shown at the top of the home page."""

    id: str
    title: str
    poster: str
    rank: int
    duration: Optional[str] = None
    synopsis: Optional[str] = None
    episodes: EpisodeInfo


class HomeData(BaseModel):
    """Sections of the home page."""

    model_config = ConfigDict(populate_by_name=True)

    spotlight: List[SpotlightAnime] = Field(default_factory=list)
    trending: List[Anime] = Field(default_factory=list)
    top_airing: List[Anime] = Field(default_factory=list, alias="topAiring")
    most_popular: List[Anime] = Field(default_factory=list, alias="mostPopular")
    most_favorite: List[Anime] = Field(default_factory=list, alias="mostFavorite")
    latest_episode: List[Anime] = Field(default_factory=list, alias="latestEpisode")

    def sections(self) -> Dict[str, List[Anime]]:
        """Card sections keyed by display name."""
        return {
            "Trending": self.trending,
            "Top Airing": self.top_airing,
            "Most Popular": self.most_popular,
            "Most Favorite": self.most_favorite,
            "Latest Episodes": self.latest_episode,
        }


class SearchData(BaseModel):
    """Search results payload."""

    response: List[Anime] = Field(default_factory=list)


class AnimeDetails(BaseModel):
    """Full information about a single anime."""

    id: str
    title: str
    poster: str
    synopsis: Optional[str] = None
    type: Optional[str] = None
    status: Optional[str] = None
    genres: Optional[List[str]] = None
    episodes: EpisodeInfo


class Episode(BaseModel):
    """Episode entry of an anime."""

    id: str
    title: str


class Server(BaseModel):
    """Streaming server offered for an episode."""

    model_config = ConfigDict(frozen=True)

    id: Optional[str] = None
    name: Optional[str] = None


class ServerList(BaseModel):
    """Servers grouped by audio track."""

    sub: List[Server] = Field(default_factory=list)
    dub: List[Server] = Field(default_factory=list)


class WeebSearchResult(BaseModel):
    """Search hit returned by the Weeb API."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="siteLink", description="Site link used as identifier")
    title: str
    session: str
    cover: str

    @property
    def image_url(self) -> str:
        return self.cover


class WeebFullData(BaseModel):
    """Full anime data returned by the Weeb API."""

    title: str
    cover: str
    synopsis: str
    episodes: Dict[str, str] = Field(default_factory=dict, description="Episode label to link")

    @property
    def image_url(self) -> str:
        return self.cover


# Export all API models
__all__ = [
    "APIResponse",
    "EpisodeInfo",
    "Anime",
    "SpotlightAnime",
    "HomeData",
    "SearchData",
    "AnimeDetails",
    "Episode",
    "Server",
    "ServerList",
    "WeebSearchResult",
    "WeebFullData",
]
