"""
Scrapers - Host-dispatched HTML extraction.

This package contains the extraction strategies for known hosts, the generic
fallback, the registry that dispatches between them and the pipeline that
fetches and parses pages.
"""

from webplayer.scrapers.base import ExtractionStrategy, SelectorSet
from webplayer.scrapers.generic import GenericStrategy
from webplayer.scrapers.pipeline import ScrapePipeline, normalize_url
from webplayer.scrapers.registry import StrategyRegistry, select_strategy

__all__ = [
    "ExtractionStrategy",
    "SelectorSet",
    "GenericStrategy",
    "ScrapePipeline",
    "normalize_url",
    "StrategyRegistry",
    "select_strategy",
]
