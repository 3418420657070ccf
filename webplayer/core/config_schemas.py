"""
Configuration Schemas - Pydantic models for configuration validation.

This module defines the data structures and validation rules for
application settings using Pydantic models.
"""

from pathlib import Path
from typing import Dict, Literal

from pydantic import BaseModel, Field, field_validator


BROWSER_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
BROWSER_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8"


class NetworkSettings(BaseModel):
    """HTTP client configuration shared by the scraper and API clients."""

    timeout: int = Field(
        default=30,
        ge=5,
        le=300,
        description="Network timeout in seconds"
    )
    user_agent: str = Field(
        default=BROWSER_USER_AGENT,
        min_length=1,
        description="User-Agent header sent with every request"
    )
    accept: str = Field(
        default=BROWSER_ACCEPT,
        description="Accept header sent with page requests"
    )
    accept_language: str = Field(
        default="en-US,en;q=0.5",
        description="Accept-Language header"
    )
    max_retries: int = Field(
        default=2,
        ge=0,
        le=10,
        description="Retry attempts for API calls (scraping never retries)"
    )
    retry_delay: float = Field(
        default=1.0,
        ge=0.0,
        le=30.0,
        description="Base delay between API retries in seconds"
    )

    def headers(self) -> Dict[str, str]:
        """Browser-like request headers."""
        return {
            'User-Agent': self.user_agent,
            'Accept': self.accept,
            'Accept-Language': self.accept_language,
        }


class SearchSettings(BaseModel):
    """Search-related configuration settings."""

    quiet_period_ms: int = Field(
        default=500,
        ge=0,
        le=5000,
        description="Input quiet period before a live search is issued"
    )
    suggestion_limit: int = Field(
        default=5,
        ge=1,
        le=50,
        description="Maximum live-search suggestions shown"
    )
    min_query_length: int = Field(
        default=1,
        ge=1,
        le=10,
        description="Minimum search query length"
    )
    default_source: Literal["official", "weeb"] = Field(
        default="official",
        description="API used when no source is given"
    )

    @property
    def quiet_period(self) -> float:
        """Quiet period in seconds."""
        return self.quiet_period_ms / 1000


class APISettings(BaseModel):
    """Upstream API endpoints."""

    hianime_base_url: str = Field(
        default="https://hi-animeapi.onrender.com/api/v1",
        description="Base URL of the HiAnime API"
    )
    weeb_base_url: str = Field(
        default="https://weebapi.onrender.com",
        description="Base URL of the AnimePahe (Weeb) API"
    )
    rate_limit: float = Field(
        default=0.0,
        ge=0.0,
        le=10.0,
        description="Minimum seconds between API requests"
    )

    @field_validator('hianime_base_url', 'weeb_base_url')
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Ensure base URLs are absolute and carry no trailing slash."""
        if not v.startswith(('http://', 'https://')):
            raise ValueError("Base URL must start with http:// or https://")
        return v.rstrip('/')


class StorageSettings(BaseModel):
    """Local persistence settings."""

    data_directory: str = Field(
        default="./data",
        description="Directory holding favorites and recent URLs"
    )
    recent_urls_limit: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Number of recent URLs remembered"
    )

    @property
    def store_path(self) -> Path:
        return Path(self.data_directory).expanduser() / "store.json"


class UISettings(BaseModel):
    """User interface configuration settings."""

    show_banner: bool = Field(
        default=True,
        description="Whether to show the banner on startup"
    )
    color_theme: Literal["default", "dark", "light"] = Field(
        default="default",
        description="Color theme for the CLI interface"
    )


class LoggingSettings(BaseModel):
    """Logging configuration settings."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
        description="Logging level"
    )
    file: str = Field(
        default="",
        description="Log file name (empty disables file logging)"
    )
    max_size: str = Field(
        default="10MB",
        description="Maximum log file size"
    )
    backup_count: int = Field(
        default=3,
        ge=0,
        le=10,
        description="Number of backup log files to keep"
    )

    @field_validator('max_size')
    @classmethod
    def validate_max_size(cls, v: str) -> str:
        """Validate log file size format."""
        import re
        if not re.match(r'^\d+[KMG]?B$', v.upper()):
            raise ValueError("Invalid size format. Use format like '10MB', '1GB'")
        return v.upper()

    @property
    def max_bytes(self) -> int:
        """Parsed ``max_size`` in bytes."""
        size = self.max_size[:-1]
        multipliers = {'K': 1024, 'M': 1024 ** 2, 'G': 1024 ** 3}
        if size and size[-1] in multipliers:
            return int(size[:-1]) * multipliers[size[-1]]
        return int(size)


class AppSettings(BaseModel):
    """Main application settings container."""

    network: NetworkSettings = Field(default_factory=NetworkSettings)
    search: SearchSettings = Field(default_factory=SearchSettings)
    api: APISettings = Field(default_factory=APISettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    ui: UISettings = Field(default_factory=UISettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


# Export all configuration models
__all__ = [
    "BROWSER_USER_AGENT",
    "BROWSER_ACCEPT",
    "NetworkSettings",
    "SearchSettings",
    "APISettings",
    "StorageSettings",
    "UISettings",
    "LoggingSettings",
    "AppSettings",
]
