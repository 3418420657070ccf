"""Shared test fixtures for the WebPlayer test suite."""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Union

import pytest

from webplayer.core.config_schemas import NetworkSettings
from webplayer.core.storage import MemoryStore

# ---------------------------------------------------------------------------
# Fake HTTP layer
# ---------------------------------------------------------------------------


class FakeResponse:
    """Minimal stand-in for an aiohttp response used as async context manager."""

    def __init__(self, status: int = 200, body: Union[bytes, str] = b"") -> None:
        self.status = status
        self.body = body.encode("utf-8") if isinstance(body, str) else body

    @classmethod
    def json(cls, data: Any, status: int = 200) -> "FakeResponse":
        return cls(status, json.dumps(data))

    async def read(self) -> bytes:
        return self.body

    async def __aenter__(self) -> "FakeResponse":
        return self

    async def __aexit__(self, *exc: Any) -> bool:
        return False


Outcome = Union[FakeResponse, BaseException]


class FakeSession:
    """Records requested URLs and replays canned outcomes per URL.

    An outcome is a response or an exception to raise. A list of outcomes is
    consumed one per request.
    """

    def __init__(self, responses: Optional[Dict[str, Union[Outcome, List[Outcome]]]] = None) -> None:
        self.responses: Dict[str, Union[Outcome, List[Outcome]]] = dict(responses or {})
        self.requests: List[str] = []
        self.closed = False

    def add(self, url: str, outcome: Union[Outcome, List[Outcome]]) -> None:
        self.responses[url] = outcome

    def get(self, url: str, **kwargs: Any) -> FakeResponse:
        self.requests.append(url)
        if url not in self.responses:
            raise AssertionError(f"Unexpected request: {url}")

        outcome = self.responses[url]
        if isinstance(outcome, list):
            outcome = outcome.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    async def close(self) -> None:
        self.closed = True


@pytest.fixture()
def fake_session() -> FakeSession:
    return FakeSession()


@pytest.fixture()
def network() -> NetworkSettings:
    """Network settings with fast retries."""
    return NetworkSettings(max_retries=1, retry_delay=0.0)


@pytest.fixture()
def memory_store() -> MemoryStore:
    return MemoryStore()


# ---------------------------------------------------------------------------
# HTML fixtures
# ---------------------------------------------------------------------------

ANIMEPAHE_LISTING_HTML = """
<html><body>
<div class="tab-content">
  <div class="col-12 col-md-6">
    <img data-src="https://i.animepahe.ru/posters/one.jpg" src="/placeholder.gif">
    <h3><a href="/anime/one-piece">One   Piece</a></h3>
  </div>
  <div class="col-12 col-md-6">
    <img src="https://i.animepahe.ru/posters/frieren.jpg">
    <h3><a href="https://animepahe.ru/anime/frieren">Frieren</a></h3>
  </div>
  <div class="col-12 col-md-6">
    <img src="https://i.animepahe.ru/posters/blank.jpg">
    <h3><a href="/anime/blank">   </a></h3>
  </div>
</div>
</body></html>
"""

ANIMEPAHE_EPISODES_HTML = """
<html><body>
<div class="episode-wrap">
  <a href="/play/one-piece/ep-1">
    <img data-src="https://i.animepahe.ru/snapshots/ep1.jpg">
    <div class="episode-title">Episode 1</div>
  </a>
</div>
<div class="episode-wrap">
  <a href="/play/one-piece/ep-2">
    <img src="https://i.animepahe.ru/snapshots/ep2.jpg">
    <div class="episode-title">Episode 2</div>
  </a>
</div>
</body></html>
"""

HURAWATCH_HTML = """
<html><body>
<div class="flw-item">
  <img class="film-poster-img" data-src="https://img.hurawatch.cc/dune.jpg" src="/lazy.svg">
  <h3 class="film-name"><a href="/movie/dune-part-two">Dune: Part Two</a></h3>
</div>
<div class="flw-item">
  <img class="film-poster-img" src="https://img.hurawatch.cc/shogun.jpg">
  <h3 class="film-name"><a href="/tv/shogun">Shogun</a></h3>
</div>
</body></html>
"""

GENERIC_HTML = """
<html><body>
<nav>
  <a href="/">Home</a>
  <a href="/login">Login</a>
  <a href="/register">Register now</a>
  <a href="/a">Go</a>
</nav>
<a href="/watch/arcane"><img src="/img/arcane.jpg">Arcane Season 2</a>
<a href="https://cdn.example.org/watch/blue-eye">Blue Eye Samurai</a>
<a href="#"></a>
<a name="anchor">No href here</a>
</body></html>
"""


@pytest.fixture()
def animepahe_listing_html() -> str:
    return ANIMEPAHE_LISTING_HTML


@pytest.fixture()
def animepahe_episodes_html() -> str:
    return ANIMEPAHE_EPISODES_HTML


@pytest.fixture()
def hurawatch_html() -> str:
    return HURAWATCH_HTML


@pytest.fixture()
def generic_html() -> str:
    return GENERIC_HTML
