"""Tests for the HiAnime and Weeb API clients."""

from __future__ import annotations

import aiohttp
import pytest

from webplayer.api import HiAnimeClient, WeebClient
from webplayer.core.config_schemas import NetworkSettings
from webplayer.core.exceptions import APIError, APIErrorKind, DecodeError
from tests.conftest import FakeResponse, FakeSession

HIANIME = "https://hi-animeapi.onrender.com/api/v1"
WEEB = "https://weebapi.onrender.com"

STREAM_URL = f"{HIANIME}/stream?id=one-piece-100%3Fep%3D2142&server=hd-1&type=sub"

ANIME_CARD = {
    "id": "one-piece-100",
    "title": "One Piece",
    "poster": "https://cdn.example/one-piece.jpg",
    "episodes": {"sub": 1122, "dub": 1100},
}


def _envelope(data, success: bool = True) -> FakeResponse:
    return FakeResponse.json({"success": success, "data": data})


@pytest.fixture()
def hianime(fake_session: FakeSession, network: NetworkSettings) -> HiAnimeClient:
    return HiAnimeClient(network=network, session=fake_session)


@pytest.fixture()
def weeb(fake_session: FakeSession, network: NetworkSettings) -> WeebClient:
    return WeebClient(network=network, session=fake_session)


class TestHiAnimeEndpoints:
    async def test_search(self, hianime: HiAnimeClient, fake_session: FakeSession) -> None:
        url = f"{HIANIME}/search?keyword=one+piece"
        fake_session.add(url, _envelope({"response": [ANIME_CARD]}))

        results = await hianime.search("one piece")

        assert fake_session.requests == [url]
        assert [anime.title for anime in results] == ["One Piece"]
        assert results[0].episodes.sub == 1122

    async def test_home_accepts_camel_case_sections(self, hianime: HiAnimeClient, fake_session: FakeSession) -> None:
        fake_session.add(f"{HIANIME}/home", _envelope({
            "spotlight": [dict(ANIME_CARD, rank=1, synopsis="Pirates")],
            "trending": [ANIME_CARD],
            "topAiring": [ANIME_CARD],
        }))

        home = await hianime.get_home()

        assert home.spotlight[0].rank == 1
        assert home.sections()["Top Airing"][0].id == "one-piece-100"
        assert home.sections()["Most Popular"] == []

    async def test_details_and_episodes(self, hianime: HiAnimeClient, fake_session: FakeSession) -> None:
        fake_session.add(f"{HIANIME}/anime/one-piece-100", _envelope(dict(ANIME_CARD, genres=["Action"])))
        fake_session.add(f"{HIANIME}/episodes/one-piece-100", _envelope([
            {"id": "one-piece-100?ep=2142", "title": "Romance Dawn"},
        ]))

        details = await hianime.get_details("one-piece-100")
        episodes = await hianime.get_episodes("one-piece-100")

        assert details.genres == ["Action"]
        assert episodes[0].id == "one-piece-100?ep=2142"

    async def test_ids_are_percent_encoded(self, hianime: HiAnimeClient, fake_session: FakeSession) -> None:
        fake_session.add(f"{HIANIME}/anime/a%2Fb%3Fc", _envelope(dict(ANIME_CARD, id="a/b?c")))
        fake_session.add(f"{HIANIME}/episodes/a%2Fb%3Fc", _envelope([]))

        assert (await hianime.get_details("a/b?c")).id == "a/b?c"
        assert await hianime.get_episodes("a/b?c") == []

    async def test_servers(self, hianime: HiAnimeClient, fake_session: FakeSession) -> None:
        fake_session.add(f"{HIANIME}/servers?id=one-piece-100%3Fep%3D2142", _envelope({
            "sub": [{"id": "4", "name": "hd-1"}],
            "dub": [],
        }))

        servers = await hianime.get_servers("one-piece-100?ep=2142")

        assert servers.sub[0].name == "hd-1"
        assert servers.dub == []

    async def test_unsuccessful_envelope(self, hianime: HiAnimeClient, fake_session: FakeSession) -> None:
        fake_session.add(f"{HIANIME}/home", _envelope("maintenance", success=False))

        with pytest.raises(APIError) as exc_info:
            await hianime.get_home()
        assert exc_info.value.kind is APIErrorKind.INVALID_RESPONSE


class TestStreamLink:
    @pytest.mark.parametrize(
        "data",
        [
            {"streamingLink": {"link": {"file": "https://cdn.example/master.m3u8"}}},
            {"streamingLink": "https://cdn.example/master.m3u8"},
            {"link": {"file": "https://cdn.example/master.m3u8"}},
        ],
        ids=["nested", "string", "direct"],
    )
    async def test_every_shape_resolves(self, hianime: HiAnimeClient, fake_session: FakeSession, data) -> None:
        fake_session.add(STREAM_URL, _envelope(data))

        link = await hianime.get_stream_link("one-piece-100?ep=2142", "hd-1")

        assert link.file == "https://cdn.example/master.m3u8"

    async def test_unknown_shape_raises_decode_error(self, hianime: HiAnimeClient, fake_session: FakeSession) -> None:
        fake_session.add(STREAM_URL, _envelope({"sources": []}))

        with pytest.raises(DecodeError):
            await hianime.get_stream_link("one-piece-100?ep=2142", "hd-1")

    async def test_invalid_server_type(self, hianime: HiAnimeClient, fake_session: FakeSession) -> None:
        with pytest.raises(ValueError):
            await hianime.get_stream_link("x", "hd-1", "raw")
        assert fake_session.requests == []


class TestTransportErrors:
    async def test_retries_then_network_error(self, hianime: HiAnimeClient, fake_session: FakeSession) -> None:
        url = f"{HIANIME}/home"
        fake_session.add(url, [aiohttp.ClientConnectionError("reset"), aiohttp.ClientConnectionError("reset")])

        with pytest.raises(APIError) as exc_info:
            await hianime.get_home()

        assert exc_info.value.kind is APIErrorKind.NETWORK_ERROR
        assert fake_session.requests == [url, url]

    async def test_recovers_after_transient_failure(self, hianime: HiAnimeClient, fake_session: FakeSession) -> None:
        url = f"{HIANIME}/home"
        fake_session.add(url, [aiohttp.ClientConnectionError("reset"), _envelope({})])

        home = await hianime.get_home()

        assert home.trending == []
        assert len(fake_session.requests) == 2

    async def test_http_status_not_retried(self, hianime: HiAnimeClient, fake_session: FakeSession) -> None:
        url = f"{HIANIME}/home"
        fake_session.add(url, FakeResponse(502, "Bad Gateway"))

        with pytest.raises(APIError) as exc_info:
            await hianime.get_home()

        assert exc_info.value.kind is APIErrorKind.INVALID_RESPONSE
        assert exc_info.value.status_code == 502
        assert fake_session.requests == [url]

    async def test_invalid_json(self, hianime: HiAnimeClient, fake_session: FakeSession) -> None:
        fake_session.add(f"{HIANIME}/home", FakeResponse(200, "<html>"))

        with pytest.raises(APIError) as exc_info:
            await hianime.get_home()
        assert exc_info.value.kind is APIErrorKind.DECODING_ERROR

    async def test_unexpected_payload(self, hianime: HiAnimeClient, fake_session: FakeSession) -> None:
        fake_session.add(f"{HIANIME}/search?keyword=x", _envelope({"response": [{"id": 1}]}))

        with pytest.raises(APIError) as exc_info:
            await hianime.search("x")
        assert exc_info.value.kind is APIErrorKind.DECODING_ERROR

    async def test_injected_session_not_closed(self, hianime: HiAnimeClient, fake_session: FakeSession) -> None:
        async with hianime:
            pass
        assert fake_session.closed is False


class TestWeebClient:
    async def test_search_reads_site_link_as_id(self, weeb: WeebClient, fake_session: FakeSession) -> None:
        fake_session.add(f"{WEEB}/get_search_results/one%20piece", FakeResponse.json([
            {
                "siteLink": "https://animepahe.ru/anime/4",
                "title": "One Piece",
                "session": "4",
                "cover": "https://i.animepahe.ru/one.jpg",
            }
        ]))

        results = await weeb.search("one piece")

        assert results[0].id == "https://animepahe.ru/anime/4"
        assert results[0].image_url == "https://i.animepahe.ru/one.jpg"

    async def test_full_data(self, weeb: WeebClient, fake_session: FakeSession) -> None:
        fake_session.add(f"{WEEB}/get_full_data/https%3A%2F%2Fanimepahe.ru%2Fanime%2F4", FakeResponse.json({
            "title": "One Piece",
            "cover": "https://i.animepahe.ru/one.jpg",
            "synopsis": "Pirates.",
            "episodes": {"1": "https://animepahe.ru/play/4/1"},
        }))

        data = await weeb.get_full_data("https://animepahe.ru/anime/4")

        assert data.episodes == {"1": "https://animepahe.ru/play/4/1"}

    async def test_oversized_integer_is_decoding_error(self, weeb: WeebClient, fake_session: FakeSession) -> None:
        fake_session.add(f"{WEEB}/get_search_results/x", FakeResponse(200, "[" + "1" * 5000 + "]"))

        with pytest.raises(APIError) as exc_info:
            await weeb.search("x")
        assert exc_info.value.kind is APIErrorKind.DECODING_ERROR

    async def test_empty_query_rejected(self, weeb: WeebClient, fake_session: FakeSession) -> None:
        with pytest.raises(APIError) as exc_info:
            await weeb.search("   ")

        assert exc_info.value.kind is APIErrorKind.INVALID_URL
        assert fake_session.requests == []
