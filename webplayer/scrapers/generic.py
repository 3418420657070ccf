"""
Generic Strategy - Best-effort fallback for hosts without dedicated rules.

Every hyperlink on the page is a candidate. Links with too little visible
text or with navigational labels are dropped and the result is capped so an
unstructured page cannot flood the caller.
"""

import logging
from dataclasses import dataclass
from typing import List, Tuple

from bs4 import BeautifulSoup

from webplayer.core.models import ScrapedItem
from webplayer.scrapers.base import ExtractionStrategy
from webplayer.scrapers.common import TextCleaner, element_text


logger = logging.getLogger(__name__)

GENERIC_ITEM_LIMIT = 50
MIN_TITLE_LENGTH = 4
NAVIGATION_TERMS = ("login", "register", "home")


@dataclass(frozen=True)
class GenericStrategy(ExtractionStrategy):
    """Fallback strategy that matches every hostname."""

    name: str = "generic"
    image_attributes: Tuple[str, ...] = ("src", "data-src")
    item_limit: int = GENERIC_ITEM_LIMIT
    min_title_length: int = MIN_TITLE_LENGTH
    denylist: Tuple[str, ...] = NAVIGATION_TERMS

    def matches(self, hostname: str) -> bool:
        return True

    def is_candidate_title(self, title: str) -> bool:
        """Check that a link label looks like content rather than navigation."""
        if len(title) < self.min_title_length:
            return False
        return not TextCleaner.contains_any(title, self.denylist)

    def extract(self, document: BeautifulSoup, base_url: str) -> List[ScrapedItem]:
        items: List[ScrapedItem] = []

        for anchor in document.select("a[href]"):
            title = element_text(anchor)
            if not self.is_candidate_title(title):
                continue

            items.append(ScrapedItem(
                title=title,
                link=self.resolve_link(anchor.get("href"), base_url),
                image_url=self.resolve_image(anchor.select_one("img"), base_url),
            ))

            if len(items) >= self.item_limit:
                break

        logger.debug(f"[{self.name}] found {len(items)} items")
        return items


generic_strategy = GenericStrategy()

__all__ = [
    "GENERIC_ITEM_LIMIT",
    "MIN_TITLE_LENGTH",
    "NAVIGATION_TERMS",
    "GenericStrategy",
    "generic_strategy",
]
