"""End-to-end tests for the command line interface."""

from __future__ import annotations

from pathlib import Path
from typing import List

import pytest
from typer.testing import CliRunner

from webplayer import __version__
from webplayer.api import HiAnimeClient
from webplayer.api.models import Anime
from webplayer.cli.main import app
from webplayer.core.exceptions import ScrapeError, ScrapeErrorKind
from webplayer.core.models import ScrapedItem, StreamLink
from webplayer.scrapers import ScrapePipeline


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def invoke(runner: CliRunner, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Invoke the app with an isolated config directory and data directory."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("COLUMNS", "200")
    config_dir = tmp_path / "config"

    def _invoke(*args: str, input: str = None):
        return runner.invoke(app, ["--config-dir", str(config_dir), "--no-banner", *args], input=input)

    return _invoke


def _cards(*titles: str) -> List[Anime]:
    return [Anime(id=title.lower().replace(" ", "-"), title=title, poster="https://cdn.example/p.jpg")
            for title in titles]


class TestGlobalOptions:
    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_creates_config_directory(self, invoke, tmp_path: Path) -> None:
        result = invoke("recent")

        assert result.exit_code == 0
        assert (tmp_path / "config" / "settings.json").exists()

    def test_boolean_flags_take_no_value(self, invoke) -> None:
        result = invoke("--debug", "recent", "--clear")

        assert result.exit_code == 0
        assert "Recent URL history cleared" in result.output


class TestFavoritesCommands:
    def test_add_list_status_remove(self, invoke, tmp_path: Path) -> None:
        assert invoke("favorites", "add", "anime_21", "One Piece", "--mal-id", "21").exit_code == 0

        listed = invoke("favorites", "list")
        assert "One Piece" in listed.output
        assert "Plan to Watch" in listed.output

        updated = invoke("favorites", "status", "anime_21", "on-hold")
        assert updated.exit_code == 0
        assert "On Hold" in updated.output

        assert invoke("favorites", "remove", "anime_21").exit_code == 0
        assert "No favorites saved yet" in invoke("favorites", "list").output
        assert (tmp_path / "data" / "store.json").exists()

    def test_remove_unknown(self, invoke) -> None:
        result = invoke("favorites", "remove", "missing")

        assert result.exit_code == 1
        assert "No favorite with id" in result.output

    def test_blank_title_rejected(self, invoke) -> None:
        result = invoke("favorites", "add", "anime_1", "  ")

        assert result.exit_code == 1
        assert "No favorites saved yet" in invoke("favorites", "list").output

    def test_invalid_status(self, invoke) -> None:
        result = invoke("favorites", "add", "anime_1", "Cowboy Bebop", "--status", "binge")

        assert result.exit_code != 0


class TestConfigCommands:
    def test_set_and_show(self, invoke) -> None:
        result = invoke("config", "set", "search.suggestion_limit", "3")
        assert result.exit_code == 0

        shown = invoke("config", "show", "search")
        assert "search.suggestion_limit" in shown.output
        assert "network.timeout" not in shown.output

    def test_set_rejects_invalid_value(self, invoke) -> None:
        result = invoke("config", "set", "search.quiet_period_ms", "soon")

        assert result.exit_code == 1

    def test_set_rejects_unknown_key(self, invoke) -> None:
        assert invoke("config", "set", "search.nope", "1").exit_code == 1
        assert invoke("config", "set", "search", "1").exit_code == 1

    def test_reset(self, invoke) -> None:
        invoke("config", "set", "ui.color_theme", "dark")

        assert invoke("config", "reset", "--yes").exit_code == 0
        assert "dark" not in invoke("config", "show", "ui").output


class TestScrapeCommands:
    def test_scrape_records_recent_url(self, invoke, monkeypatch: pytest.MonkeyPatch) -> None:
        async def fake_scrape(self, url):
            return [ScrapedItem(title="Frieren", link="https://animepahe.ru/anime/frieren")]

        monkeypatch.setattr(ScrapePipeline, "scrape", fake_scrape)

        result = invoke("scrape", "animepahe.ru")

        assert result.exit_code == 0
        assert "Frieren" in result.output
        assert "https://animepahe.ru" in invoke("recent").output

    def test_scrape_zero_items(self, invoke, monkeypatch: pytest.MonkeyPatch) -> None:
        async def fake_scrape(self, url):
            return []

        monkeypatch.setattr(ScrapePipeline, "scrape", fake_scrape)

        result = invoke("scrape", "https://example.org")

        assert result.exit_code == 0
        assert "No items found" in result.output

    def test_scrape_failure_still_recorded(self, invoke, monkeypatch: pytest.MonkeyPatch) -> None:
        async def fake_scrape(self, url):
            raise ScrapeError("Connection refused", ScrapeErrorKind.NETWORK_FAILURE, url=url)

        monkeypatch.setattr(ScrapePipeline, "scrape", fake_scrape)

        result = invoke("scrape", "https://down.example")

        assert result.exit_code == 1
        assert "https://down.example" in invoke("recent").output

    def test_recent_clear(self, invoke, monkeypatch: pytest.MonkeyPatch) -> None:
        async def fake_scrape(self, url):
            return []

        monkeypatch.setattr(ScrapePipeline, "scrape", fake_scrape)
        invoke("scrape", "https://example.org")

        assert invoke("recent", "--clear").exit_code == 0
        assert "No recent URLs yet" in invoke("recent").output


class TestSearchCommands:
    def test_search(self, invoke, monkeypatch: pytest.MonkeyPatch) -> None:
        async def fake_search(self, query):
            return _cards("One Piece", "One Punch Man")

        monkeypatch.setattr(HiAnimeClient, "search", fake_search)

        result = invoke("search", "one")

        assert result.exit_code == 0
        assert "One Punch Man" in result.output

    def test_search_no_results(self, invoke, monkeypatch: pytest.MonkeyPatch) -> None:
        async def fake_search(self, query):
            return []

        monkeypatch.setattr(HiAnimeClient, "search", fake_search)

        result = invoke("search", "zzzz")

        assert result.exit_code == 0
        assert "No results found" in result.output

    def test_live_prints_latest_suggestions(self, invoke, monkeypatch: pytest.MonkeyPatch) -> None:
        queries: List[str] = []

        async def fake_search(self, query):
            queries.append(query)
            return _cards("One Piece", "One Piece Film: Red")

        monkeypatch.setattr(HiAnimeClient, "search", fake_search)
        invoke("config", "set", "search.quiet_period_ms", "0")

        result = invoke("live", input="one piece\n")

        assert result.exit_code == 0
        assert "one piece" in result.output
        assert "One Piece Film: Red" in result.output
        assert queries == ["one piece"]

    def test_live_ignores_blank_input(self, invoke, monkeypatch: pytest.MonkeyPatch) -> None:
        async def fake_search(self, query):
            raise AssertionError("blank input must not search")

        monkeypatch.setattr(HiAnimeClient, "search", fake_search)
        invoke("config", "set", "search.quiet_period_ms", "0")

        result = invoke("live", input="   \n")

        assert result.exit_code == 0


class TestStreamCommand:
    def test_prints_file_url(self, invoke, monkeypatch: pytest.MonkeyPatch) -> None:
        async def fake_stream(self, episode_id, server, server_type="sub"):
            assert (episode_id, server, server_type) == ("one-piece-100?ep=2142", "hd-1", "dub")
            return StreamLink(file="https://cdn.example/master.m3u8")

        monkeypatch.setattr(HiAnimeClient, "get_stream_link", fake_stream)

        result = invoke("stream", "one-piece-100?ep=2142", "--server", "hd-1", "--type", "dub")

        assert result.exit_code == 0
        assert "https://cdn.example/master.m3u8" in result.output
