"""
Common utilities for extraction strategies.

This package contains shared helpers used across the host-specific
strategies and the generic fallback.
"""

from .utils import (
    URLHelper,
    TextCleaner,
    element_text,
    first_attribute,
)

__all__ = [
    "URLHelper",
    "TextCleaner",
    "element_text",
    "first_attribute",
]
