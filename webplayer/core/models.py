"""
Core Data Models - Pydantic models for type safety and validation.

This module defines the core data structures used throughout WebPlayer:
scraped items, resolved stream links, and favorite records. Scraped items
and stream links are immutable value objects created per request.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ContentType(str, Enum):
    """Kind of media an item refers to."""

    ANIME = "anime"
    MOVIES = "movies"


class DataSource(str, Enum):
    """Upstream sources the client can search."""

    OFFICIAL = "official"
    WEEB = "weeb"
    SCRAPE = "scrape"


class WatchStatus(str, Enum):
    """Personal watch status attached to a favorite."""

    PLAN_TO_WATCH = "Plan to Watch"
    WATCHING = "Watching"
    COMPLETED = "Completed"
    ON_HOLD = "On Hold"
    DROPPED = "Dropped"


class ScrapedItem(BaseModel):
    """
    Represents a single item extracted from an HTML page.

    Items have no stable upstream identifier; their identity is positional
    within one scrape result and must not be persisted as a key.
    """

    model_config = ConfigDict(frozen=True)

    title: str = Field(..., min_length=1, description="Visible item title")
    image_url: Optional[str] = Field(None, description="Absolute image URL")
    link: Optional[str] = Field(None, description="Link to the item page")

    @field_validator('title', mode='before')
    @classmethod
    def validate_title(cls, v: str) -> str:
        """Collapse runs of whitespace in the title."""
        if isinstance(v, str):
            return " ".join(v.split())
        return v

    @field_validator('image_url')
    @classmethod
    def validate_image_url(cls, v: Optional[str]) -> Optional[str]:
        """Drop image values that are not absolute http(s) URLs."""
        if not v:
            return None
        try:
            parsed = urlparse(v)
        except ValueError:
            return None
        if parsed.scheme not in ('http', 'https') or not parsed.netloc:
            return None
        return v

    def __str__(self) -> str:
        return self.title

    def __repr__(self) -> str:
        return f"ScrapedItem(title='{self.title}', link='{self.link}')"


class StreamLink(BaseModel):
    """A fully resolved playable file URL."""

    model_config = ConfigDict(frozen=True)

    file: str = Field(..., description="Playable file URL exactly as sent upstream")

    def __str__(self) -> str:
        return self.file


class FavoriteItem(BaseModel):
    """
    A saved favorite with enough data to render it without refetching.

    The id is namespaced by content type (``anime_<mal_id>``,
    ``movie_<tmdb_id>`` or an upstream id) and is the store key.
    """

    id: str = Field(..., min_length=1, description="Stable favorite identifier")
    title: str = Field(..., min_length=1, description="Display title")
    image_url: Optional[str] = Field(None, description="Poster image URL")
    content_type: ContentType = Field(ContentType.ANIME, description="Media kind")
    date_added: datetime = Field(default_factory=datetime.now, description="When it was saved")
    mal_id: Optional[int] = Field(None, description="MyAnimeList id")
    tmdb_id: Optional[int] = Field(None, description="TMDB id")
    watch_status: WatchStatus = Field(WatchStatus.PLAN_TO_WATCH, description="Personal watch status")

    @field_validator('title', mode='before')
    @classmethod
    def validate_title(cls, v: str) -> str:
        """Strip the title before the length check so blank titles are rejected."""
        if isinstance(v, str):
            return v.strip()
        return v

    def __str__(self) -> str:
        return f"{self.title} ({self.watch_status.value})"


# Type aliases for better code readability
ScrapedItemList = List[ScrapedItem]
FavoriteList = List[FavoriteItem]

# Export all models and types
__all__ = [
    "ContentType",
    "DataSource",
    "WatchStatus",
    "ScrapedItem",
    "StreamLink",
    "FavoriteItem",
    "ScrapedItemList",
    "FavoriteList",
]
