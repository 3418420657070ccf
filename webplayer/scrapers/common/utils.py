"""
Strategy Utilities - Common helpers for extraction strategies.

This module provides the small DOM and URL helpers every extraction
strategy needs: reading attributes that may be missing or list-valued,
normalizing visible text, and resolving relative links.
"""

import re
from typing import Iterable, Optional
from urllib.parse import urljoin, urlparse

from bs4 import Tag


class URLHelper:
    """Utility class for URL manipulation and validation."""

    @staticmethod
    def is_absolute(url: str) -> bool:
        """Check if URL carries both a scheme and a host."""
        try:
            parsed = urlparse(url)
        except ValueError:
            return False
        return bool(parsed.scheme and parsed.netloc)

    @staticmethod
    def make_absolute(url: str, base_url: str) -> Optional[str]:
        """
        Convert relative URL to absolute.

        Returns:
            Absolute URL, or None when the value cannot be parsed as a URL
        """
        try:
            urlparse(url)
            if URLHelper.is_absolute(url):
                return url
            return urljoin(base_url, url)
        except ValueError:
            return None


class TextCleaner:
    """Utility class for cleaning and normalizing text content."""

    @staticmethod
    def normalize(text: Optional[str]) -> str:
        """
        Collapse whitespace runs into single spaces.

        Args:
            text: Raw text

        Returns:
            Normalized text, empty string for None
        """
        if not text:
            return ""
        return re.sub(r'\s+', ' ', text).strip()

    @staticmethod
    def contains_any(text: str, terms: Iterable[str]) -> bool:
        """Case-insensitive substring test against several terms."""
        lowered = text.lower()
        return any(term.lower() in lowered for term in terms)


def element_text(element: Optional[Tag]) -> str:
    """Visible text of an element with whitespace normalized."""
    if element is None:
        return ""
    return TextCleaner.normalize(element.get_text(" "))


def first_attribute(element: Optional[Tag], attributes: Iterable[str]) -> Optional[str]:
    """
    Return the first non-empty attribute value found on an element.

    Args:
        element: Element to inspect
        attributes: Attribute names in order of preference

    Returns:
        Stripped attribute value or None
    """
    if element is None:
        return None

    for attr in attributes:
        value = element.get(attr)
        # Handle case where BeautifulSoup returns a list
        if isinstance(value, list):
            value = value[0] if value else None
        if isinstance(value, str) and value.strip():
            return value.strip()

    return None


# Export utility classes and functions
__all__ = [
    "URLHelper",
    "TextCleaner",
    "element_text",
    "first_attribute",
]
