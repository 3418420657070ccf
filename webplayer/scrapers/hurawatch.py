"""
Hurawatch Strategy - Extraction rules for hurawatch movie and show cards.
"""

from webplayer.scrapers.base import ExtractionStrategy, SelectorSet


HURAWATCH_ORIGIN = "https://hurawatch.cc"

hurawatch_strategy = ExtractionStrategy(
    name="hurawatch",
    host_keywords=("hurawatch",),
    attempts=(
        SelectorSet(
            name="media_cards",
            container="div.flw-item",
            title="h3.film-name a",
            link="h3.film-name a",
            image="img.film-poster-img",
        ),
    ),
    link_prefix=HURAWATCH_ORIGIN,
)

__all__ = ["HURAWATCH_ORIGIN", "hurawatch_strategy"]
