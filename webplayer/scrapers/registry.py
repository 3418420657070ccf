"""
Strategy Registry - Hostname-based dispatch to extraction strategies.

Known hosts are matched by case-insensitive keyword containment in list
order. The generic strategy always sits at the end of the list and matches
every hostname, so dispatch never fails.
"""

import logging
from typing import Iterable, List, Optional

from webplayer.scrapers.animepahe import animepahe_strategy
from webplayer.scrapers.base import ExtractionStrategy
from webplayer.scrapers.generic import GenericStrategy, generic_strategy
from webplayer.scrapers.hurawatch import hurawatch_strategy


logger = logging.getLogger(__name__)


class StrategyRegistry:
    """Ordered collection of extraction strategies with a generic fallback."""

    def __init__(
        self,
        strategies: Optional[Iterable[ExtractionStrategy]] = None,
        fallback: Optional[GenericStrategy] = None
    ):
        """
        Initialize the registry.

        Args:
            strategies: Host-specific strategies in match priority order
            fallback: Strategy used when no host-specific one matches
        """
        self._known: List[ExtractionStrategy] = list(strategies or [])
        self._fallback = fallback or generic_strategy

    @property
    def strategies(self) -> List[ExtractionStrategy]:
        """All strategies in dispatch order, fallback last."""
        return [*self._known, self._fallback]

    def register(self, strategy: ExtractionStrategy) -> None:
        """Add a host-specific strategy ahead of the fallback."""
        self._known.append(strategy)
        logger.debug(f"Registered extraction strategy: {strategy.name}")

    def select(self, hostname: str) -> ExtractionStrategy:
        """
        Pick the strategy for a hostname.

        Args:
            hostname: Hostname of the page being scraped

        Returns:
            First matching host-specific strategy, else the fallback
        """
        for strategy in self._known:
            if strategy.matches(hostname):
                return strategy
        return self._fallback


def create_default_registry() -> StrategyRegistry:
    """Registry holding every built-in host strategy."""
    return StrategyRegistry([animepahe_strategy, hurawatch_strategy])


default_registry = create_default_registry()


def select_strategy(hostname: str) -> ExtractionStrategy:
    """Select a strategy from the default registry."""
    return default_registry.select(hostname)


__all__ = [
    "StrategyRegistry",
    "create_default_registry",
    "default_registry",
    "select_strategy",
]
