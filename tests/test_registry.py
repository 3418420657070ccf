"""Tests for hostname-based strategy dispatch."""

from __future__ import annotations

import pytest

from webplayer.scrapers.animepahe import animepahe_strategy
from webplayer.scrapers.base import ExtractionStrategy, SelectorSet
from webplayer.scrapers.generic import GenericStrategy, generic_strategy
from webplayer.scrapers.hurawatch import hurawatch_strategy
from webplayer.scrapers.registry import StrategyRegistry, create_default_registry, select_strategy


class TestSelectStrategy:
    @pytest.mark.parametrize(
        ("hostname", "expected"),
        [
            ("animepahe.ru", "animepahe"),
            ("www.animepahe.com", "animepahe"),
            ("ANIMEPAHE.org", "animepahe"),
            ("hurawatch.cc", "hurawatch"),
            ("m.hurawatch.to", "hurawatch"),
            ("example.com", "generic"),
            ("", "generic"),
        ],
    )
    def test_dispatch(self, hostname: str, expected: str) -> None:
        assert select_strategy(hostname).name == expected

    def test_unknown_host_gets_generic(self) -> None:
        assert isinstance(select_strategy("news.example.org"), GenericStrategy)


class TestStrategyRegistry:
    def test_generic_is_last(self) -> None:
        registry = create_default_registry()
        assert registry.strategies[-1] is generic_strategy
        assert registry.strategies[:2] == [animepahe_strategy, hurawatch_strategy]

    def test_register_goes_before_generic(self) -> None:
        registry = create_default_registry()
        custom = ExtractionStrategy(
            name="custom",
            host_keywords=("custom-host",),
            attempts=(SelectorSet(container="article", title="h2", link="a"),),
        )
        registry.register(custom)

        assert registry.strategies[-2] is custom
        assert registry.strategies[-1] is generic_strategy
        assert registry.select("www.custom-host.net") is custom

    def test_list_order_decides_overlapping_keywords(self) -> None:
        first = ExtractionStrategy(name="first", host_keywords=("shared",))
        second = ExtractionStrategy(name="second", host_keywords=("shared",))
        registry = StrategyRegistry([first, second])

        assert registry.select("shared.example").name == "first"

    def test_empty_registry_falls_back(self) -> None:
        assert StrategyRegistry().select("animepahe.ru") is generic_strategy
