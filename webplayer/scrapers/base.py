"""
Extraction Strategy - Declarative, host-specific HTML extraction.

A strategy is plain data: a host predicate plus an ordered list of selector
sets ("attempts"), each describing one page layout of that host. Attempts run
in order and the first one that yields at least one item wins; later
attempts are never consulted, so one result never mixes two layouts.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from bs4 import BeautifulSoup, Tag

from webplayer.core.models import ScrapedItem
from webplayer.scrapers.common import URLHelper, element_text, first_attribute


logger = logging.getLogger(__name__)

LAZY_IMAGE_ATTRIBUTES = ("data-src", "src")


@dataclass(frozen=True)
class SelectorSet:
    """
    CSS selectors describing one page layout.

    Attributes:
        container: Selector for each item's container element
        title: Sub-selector for the title element; None uses the container
        link: Sub-selector for the element carrying ``href``; None uses the
            container
        image: Sub-selector for the image element; None disables images
        name: Label used in logs
    """

    container: str
    title: Optional[str] = None
    link: Optional[str] = None
    image: Optional[str] = "img"
    name: str = "default"


@dataclass(frozen=True)
class ExtractionStrategy:
    """
    Host-specific extraction rules.

    Attributes:
        name: Strategy identifier
        host_keywords: Substrings identifying the host in a hostname
        attempts: Selector sets tried in order
        link_prefix: Origin that relative links of this host are joined onto;
            None joins onto the page URL
        image_attributes: Image attributes in order of preference
    """

    name: str
    host_keywords: Tuple[str, ...] = ()
    attempts: Tuple[SelectorSet, ...] = ()
    link_prefix: Optional[str] = None
    image_attributes: Tuple[str, ...] = LAZY_IMAGE_ATTRIBUTES

    def matches(self, hostname: str) -> bool:
        """Check whether this strategy handles the given hostname."""
        host = hostname.lower()
        return any(keyword in host for keyword in self.host_keywords)

    def extract(self, document: BeautifulSoup, base_url: str) -> List[ScrapedItem]:
        """
        Extract items from a parsed document.

        Args:
            document: Parsed HTML document
            base_url: URL the document was fetched from

        Returns:
            Items of the first attempt that produced any, else an empty list
        """
        for attempt in self.attempts:
            items = self._run_attempt(document, attempt, base_url)
            logger.debug(f"[{self.name}] attempt '{attempt.name}' found {len(items)} items")
            if items:
                return items

        return []

    def _run_attempt(self, document: BeautifulSoup, attempt: SelectorSet, base_url: str) -> List[ScrapedItem]:
        items = []

        for container in document.select(attempt.container):
            title_elem = container if attempt.title is None else container.select_one(attempt.title)
            title = element_text(title_elem)
            if not title:
                continue

            link_elem = container if attempt.link is None else container.select_one(attempt.link)
            image_elem = container.select_one(attempt.image) if attempt.image else None

            items.append(ScrapedItem(
                title=title,
                link=self.resolve_link(first_attribute(link_elem, ("href",)), base_url),
                image_url=self.resolve_image(image_elem, base_url),
            ))

        return items

    def resolve_link(self, href: Optional[str], base_url: str) -> Optional[str]:
        """Resolve a possibly relative link using the host-specific prefix."""
        if not href:
            return None
        return URLHelper.make_absolute(href, self.link_prefix or base_url)

    def resolve_image(self, element: Optional[Tag], base_url: str) -> Optional[str]:
        """Pick the preferred image attribute and make it absolute."""
        source = first_attribute(element, self.image_attributes)
        if not source:
            return None
        return URLHelper.make_absolute(source, base_url)


__all__ = [
    "LAZY_IMAGE_ATTRIBUTES",
    "SelectorSet",
    "ExtractionStrategy",
]
