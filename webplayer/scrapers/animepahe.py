"""
AnimePahe Strategy - Extraction rules for animepahe pages.

The home and listing pages render anime cards inside the tab content; the
anime pages render episode thumbnails instead. Cards are tried first.
"""

from webplayer.scrapers.base import ExtractionStrategy, SelectorSet


ANIMEPAHE_ORIGIN = "https://animepahe.ru"

animepahe_strategy = ExtractionStrategy(
    name="animepahe",
    host_keywords=("animepahe",),
    attempts=(
        SelectorSet(
            name="anime_cards",
            container="div.tab-content div.col-12.col-md-6",
            title="h3 a",
            link="h3 a",
            image="img",
        ),
        SelectorSet(
            name="episodes",
            container="div.episode-wrap a",
            title="div.episode-title",
            link=None,
            image="img",
        ),
    ),
    link_prefix=ANIMEPAHE_ORIGIN,
)

__all__ = ["ANIMEPAHE_ORIGIN", "animepahe_strategy"]
