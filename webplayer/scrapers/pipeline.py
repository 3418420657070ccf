"""
Scrape Pipeline - Fetch, decode, parse and dispatch for arbitrary pages.

This module turns a user supplied URL into a list of scraped items: the page
is fetched with browser-like headers, decoded as strict UTF-8, parsed with
BeautifulSoup and handed to the extraction strategy selected for its host.
Every failure surfaces as a single ScrapeError; nothing is retried.
"""

import asyncio
import logging
from typing import List, Optional
from urllib.parse import urlparse

import aiohttp
from bs4 import BeautifulSoup, ParserRejectedMarkup

from webplayer.core.config_schemas import NetworkSettings
from webplayer.core.exceptions import ScrapeError, ScrapeErrorKind
from webplayer.core.models import ScrapedItem
from webplayer.scrapers.registry import StrategyRegistry, default_registry


logger = logging.getLogger(__name__)

HTML_PARSER = "html.parser"


def normalize_url(raw: str) -> str:
    """
    Normalize user input into a fetchable URL.

    Args:
        raw: URL as typed by the user

    Returns:
        URL with surrounding whitespace removed and a scheme present

    Raises:
        ScrapeError: If no hostname can be derived from the input
    """
    url = (raw or "").strip()
    if url and "://" not in url:
        url = f"https://{url}"

    try:
        hostname = urlparse(url).hostname
    except ValueError as e:
        raise ScrapeError(f"Invalid URL: {raw!r}", ScrapeErrorKind.INVALID_URL, url=raw, details=str(e))

    if not hostname:
        raise ScrapeError(f"Invalid URL: {raw!r}", ScrapeErrorKind.INVALID_URL, url=raw)

    return url


class ScrapePipeline:
    """
    Fetches a page and extracts items with the matching host strategy.

    The HTTP session is created lazily and owned by the pipeline unless one
    is injected, in which case closing it is left to the caller.
    """

    def __init__(
        self,
        network: Optional[NetworkSettings] = None,
        registry: Optional[StrategyRegistry] = None,
        session: Optional[aiohttp.ClientSession] = None
    ):
        """
        Initialize the pipeline.

        Args:
            network: Timeout and header settings
            registry: Strategy registry used for dispatch
            session: Pre-configured HTTP session to use instead of an owned one
        """
        self.network = network or NetworkSettings()
        self.registry = registry or default_registry
        self._session = session
        self._owns_session = session is None

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session with browser-like headers."""
        if self._session is None or (self._owns_session and self._session.closed):
            timeout = aiohttp.ClientTimeout(total=self.network.timeout)
            self._session = aiohttp.ClientSession(
                timeout=timeout,
                headers=self.network.headers()
            )
            self._owns_session = True
        return self._session

    async def scrape(self, url: str) -> List[ScrapedItem]:
        """
        Scrape a page for items.

        Args:
            url: Page URL; a missing scheme defaults to https

        Returns:
            Extracted items, possibly empty

        Raises:
            ScrapeError: On invalid URL, transport failure, empty body or
                undecodable/unparseable content
        """
        url = normalize_url(url)
        body = await self._fetch(url)
        return self.parse(body, url)

    async def _fetch(self, url: str) -> bytes:
        logger.debug(f"Fetching {url}")

        try:
            async with self.session.get(url) as response:
                status = response.status
                body = await response.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning(f"Request to {url} failed: {e!r}")
            raise ScrapeError(
                f"Network request failed for {url}",
                ScrapeErrorKind.NETWORK_FAILURE,
                url=url,
                details=str(e) or type(e).__name__
            )

        logger.debug(f"HTTP {status} from {url} ({len(body)} bytes)")
        ok = 200 <= status < 300

        if not body:
            if not ok:
                raise ScrapeError(
                    f"HTTP {status} with empty response for {url}",
                    ScrapeErrorKind.NETWORK_FAILURE,
                    url=url,
                    details={"status_code": status}
                )
            raise ScrapeError(f"No data received from {url}", ScrapeErrorKind.NO_DATA, url=url)

        if not ok:
            logger.warning(f"HTTP {status} from {url}, processing body anyway")

        return body

    def parse(self, body: bytes, url: str) -> List[ScrapedItem]:
        """
        Parse an already fetched page and extract its items.

        Args:
            body: Raw response body
            url: URL the body came from; used for dispatch and link resolution

        Returns:
            Extracted items, possibly empty

        Raises:
            ScrapeError: If the body is empty, not UTF-8 or rejected by the parser
        """
        if not body:
            raise ScrapeError(f"No data received from {url}", ScrapeErrorKind.NO_DATA, url=url)

        try:
            html = body.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ScrapeError(
                f"Response from {url} is not valid UTF-8",
                ScrapeErrorKind.PARSING_ERROR,
                url=url,
                details=str(e)
            )

        try:
            document = BeautifulSoup(html, HTML_PARSER)
        except ParserRejectedMarkup as e:
            raise ScrapeError(
                f"Could not parse HTML from {url}",
                ScrapeErrorKind.PARSING_ERROR,
                url=url,
                details=str(e)
            )

        hostname = urlparse(url).hostname or ""
        strategy = self.registry.select(hostname)
        items = strategy.extract(document, url)

        logger.info(f"Scraped {len(items)} items from {hostname} using '{strategy.name}'")
        return items

    async def close(self) -> None:
        """Close the owned HTTP session."""
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
            logger.debug("HTTP session closed")
        self._session = None

    async def __aenter__(self) -> "ScrapePipeline":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()


__all__ = ["HTML_PARSER", "normalize_url", "ScrapePipeline"]
