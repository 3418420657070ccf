"""Tests for host extraction strategies and the generic fallback."""

from __future__ import annotations

import pytest
from bs4 import BeautifulSoup

from webplayer.core.models import ScrapedItem
from webplayer.scrapers.animepahe import animepahe_strategy
from webplayer.scrapers.base import ExtractionStrategy, SelectorSet
from webplayer.scrapers.generic import GENERIC_ITEM_LIMIT, generic_strategy
from webplayer.scrapers.hurawatch import hurawatch_strategy


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


class TestAnimePahe:
    def test_listing_cards(self, animepahe_listing_html: str) -> None:
        items = animepahe_strategy.extract(_soup(animepahe_listing_html), "https://animepahe.ru/")

        assert [item.title for item in items] == ["One Piece", "Frieren"]
        assert items[0].link == "https://animepahe.ru/anime/one-piece"
        assert items[1].link == "https://animepahe.ru/anime/frieren"

    def test_prefers_lazy_image(self, animepahe_listing_html: str) -> None:
        items = animepahe_strategy.extract(_soup(animepahe_listing_html), "https://animepahe.ru/")

        assert items[0].image_url == "https://i.animepahe.ru/posters/one.jpg"
        assert items[1].image_url == "https://i.animepahe.ru/posters/frieren.jpg"

    def test_only_secondary_layout(self, animepahe_episodes_html: str) -> None:
        items = animepahe_strategy.extract(
            _soup(animepahe_episodes_html), "https://animepahe.ru/anime/one-piece"
        )

        assert [item.title for item in items] == ["Episode 1", "Episode 2"]
        assert items[0].link == "https://animepahe.ru/play/one-piece/ep-1"
        assert items[0].image_url == "https://i.animepahe.ru/snapshots/ep1.jpg"

    def test_first_matching_layout_wins(
        self, animepahe_listing_html: str, animepahe_episodes_html: str
    ) -> None:
        both = animepahe_listing_html.replace("</body>", animepahe_episodes_html)
        items = animepahe_strategy.extract(_soup(both), "https://animepahe.ru/")

        assert [item.title for item in items] == ["One Piece", "Frieren"]

    def test_relative_links_use_host_prefix(self, animepahe_listing_html: str) -> None:
        items = animepahe_strategy.extract(
            _soup(animepahe_listing_html), "https://mirror.example/some/page"
        )
        assert items[0].link == "https://animepahe.ru/anime/one-piece"


class TestHurawatch:
    def test_cards(self, hurawatch_html: str) -> None:
        items = hurawatch_strategy.extract(_soup(hurawatch_html), "https://hurawatch.cc/home")

        assert [item.title for item in items] == ["Dune: Part Two", "Shogun"]
        assert items[0].link == "https://hurawatch.cc/movie/dune-part-two"
        assert items[0].image_url == "https://img.hurawatch.cc/dune.jpg"
        assert items[1].image_url == "https://img.hurawatch.cc/shogun.jpg"

    def test_no_cards(self) -> None:
        assert hurawatch_strategy.extract(_soup("<div>nothing</div>"), "https://hurawatch.cc") == []


class TestGeneric:
    def test_filters_navigation_and_short_titles(self, generic_html: str) -> None:
        items = generic_strategy.extract(_soup(generic_html), "https://example.com/page")

        assert [item.title for item in items] == ["Arcane Season 2", "Blue Eye Samurai"]

    def test_resolves_against_base_url(self, generic_html: str) -> None:
        items = generic_strategy.extract(_soup(generic_html), "https://example.com/page")

        assert items[0].link == "https://example.com/watch/arcane"
        assert items[0].image_url == "https://example.com/img/arcane.jpg"
        assert items[1].link == "https://cdn.example.org/watch/blue-eye"
        assert items[1].image_url is None

    def test_prefers_src_over_data_src(self) -> None:
        html = '<a href="/x"><img src="/real.jpg" data-src="/lazy.jpg">Some title</a>'
        items = generic_strategy.extract(_soup(html), "https://example.com/")
        assert items[0].image_url == "https://example.com/real.jpg"

    def test_caps_item_count(self) -> None:
        html = "".join(f'<a href="/item/{i}">Item number {i}</a>' for i in range(GENERIC_ITEM_LIMIT + 25))
        items = generic_strategy.extract(_soup(html), "https://example.com/")

        assert len(items) == GENERIC_ITEM_LIMIT
        assert items[-1].title == f"Item number {GENERIC_ITEM_LIMIT - 1}"

    @pytest.mark.parametrize("label", ["HOME page", "Sign in / LOGIN", "Register"])
    def test_denylist_is_case_insensitive(self, label: str) -> None:
        html = f'<a href="/x">{label}</a>'
        assert generic_strategy.extract(_soup(html), "https://example.com/") == []

    def test_matches_everything(self) -> None:
        assert generic_strategy.matches("")
        assert generic_strategy.matches("anything.example")


class TestExtractionStrategy:
    def test_host_match_is_case_insensitive(self) -> None:
        assert animepahe_strategy.matches("www.AnimePahe.ru")
        assert not animepahe_strategy.matches("example.com")

    def test_non_http_images_are_dropped(self) -> None:
        strategy = ExtractionStrategy(
            name="test",
            host_keywords=("test",),
            attempts=(SelectorSet(container="div.card", title="h2", link="a"),),
        )
        html = (
            '<div class="card"><h2>Card</h2><a href="/c">x</a>'
            '<img src="data:image/gif;base64,R0lGOD"></div>'
        )
        items = strategy.extract(_soup(html), "https://test.example/list")

        assert items[0].image_url is None
        assert items[0].link == "https://test.example/c"

    def test_container_without_link(self) -> None:
        strategy = ExtractionStrategy(
            name="test",
            attempts=(SelectorSet(container="li", image=None),),
        )
        items = strategy.extract(_soup("<ul><li>Plain entry</li></ul>"), "https://test.example/")

        assert items[0].title == "Plain entry"
        assert items[0].link is None
        assert items[0].image_url is None


class TestMalformedUrls:
    def test_unparseable_href_keeps_item(self) -> None:
        html = '<a href="/ok">Good title one</a><a href="http://[::1/x">Broken link here</a>'

        items = generic_strategy.extract(_soup(html), "https://example.com/")

        assert [item.title for item in items] == ["Good title one", "Broken link here"]
        assert items[0].link == "https://example.com/ok"
        assert items[1].link is None

    def test_unparseable_lazy_image_is_dropped(self) -> None:
        html = (
            '<div class="tab-content"><div class="col-12 col-md-6">'
            '<img data-src="http://[bad"><h3><a href="/anime/frieren">Frieren</a></h3>'
            '</div></div>'
        )

        items = animepahe_strategy.extract(_soup(html), "https://animepahe.ru/")

        assert items[0].title == "Frieren"
        assert items[0].link == "https://animepahe.ru/anime/frieren"
        assert items[0].image_url is None

    def test_scraped_item_drops_unparseable_image(self) -> None:
        assert ScrapedItem(title="Frieren", image_url="http://[bad").image_url is None
