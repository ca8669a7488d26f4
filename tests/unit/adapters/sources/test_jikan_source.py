"""
Tests pour JikanSource (MyAnimeList).

Utilise respx pour simuler l'API REST Jikan v4.
"""

from datetime import date
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
import respx

from animeta.adapters.api.cache import APICache
from animeta.adapters.api.rate_limit import RateLimiter
from animeta.adapters.sources.jikan import JikanSource, parse_content_rating, parse_duration
from animeta.core.entities.series import DayOfWeek, SeriesEntity
from animeta.core.ports.series_source import SourceNotFoundError, SourceUnavailableError
from animeta.core.value_objects.cancellation import CancellationToken
from animeta.core.value_objects.series_info import TICKS_PER_MINUTE
from tests.fixtures.jikan_responses import (
    JIKAN_ANIME_FULL_RESPONSE,
    JIKAN_SEARCH_EMPTY_RESPONSE,
    JIKAN_SEARCH_RESPONSE,
)

SEARCH_URL = "https://api.jikan.moe/v4/anime"
FULL_URL = "https://api.jikan.moe/v4/anime/1/full"
ANIME = JIKAN_ANIME_FULL_RESPONSE["data"]


@pytest.fixture
def mock_cache() -> MagicMock:
    """Mock APICache for testing."""
    cache = MagicMock(spec=APICache)
    cache.get = AsyncMock(return_value=None)
    cache.set_search = AsyncMock()
    cache.set_details = AsyncMock()
    cache.delete_details = AsyncMock()
    cache.get_fetched_at = AsyncMock(return_value=None)
    return cache


class TestHelpers:
    """Conversions des champs texte de Jikan."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("24 min per ep", 24.0),
            ("1 hr 30 min", 90.0),
            ("2 hr", 120.0),
            ("Unknown", None),
            (None, None),
        ],
    )
    def test_parse_duration(self, value, expected) -> None:
        assert parse_duration(value) == expected

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("PG-13 - Teens 13 or older", "PG-13"),
            ("R+ - Mild Nudity", "R+"),
            ("None", None),
            (None, None),
        ],
    )
    def test_parse_content_rating(self, value, expected) -> None:
        assert parse_content_rating(value) == expected


class TestJikanFetch:
    """Recherche, telechargement et erreurs."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_search_then_fetch(self, mock_cache: MagicMock) -> None:
        search_route = respx.get(SEARCH_URL).mock(return_value=httpx.Response(200, json=JIKAN_SEARCH_RESPONSE))
        full_route = respx.get(FULL_URL).mock(return_value=httpx.Response(200, json=JIKAN_ANIME_FULL_RESPONSE))
        source = JikanSource(mock_cache, RateLimiter(0))
        try:
            info = await source.find_series_info(SeriesEntity(name="Cowboy Bebop"), CancellationToken())
        finally:
            await source.close()

        assert info.name == "Cowboy Bebop"
        assert search_route.calls.last.request.url.params["q"] == "Cowboy Bebop"
        assert full_route.call_count == 1
        mock_cache.set_search.assert_awaited_once_with("jikan:search:Cowboy Bebop", JIKAN_SEARCH_RESPONSE["data"])
        mock_cache.set_details.assert_awaited_once_with("jikan:series:1", ANIME)

    @pytest.mark.asyncio
    @respx.mock
    async def test_known_mal_id_skips_search(self, mock_cache: MagicMock) -> None:
        search_route = respx.get(SEARCH_URL)
        respx.get(FULL_URL).mock(return_value=httpx.Response(200, json=JIKAN_ANIME_FULL_RESPONSE))
        series = SeriesEntity(name="Bebop", provider_ids={"MyAnimeList": "1"})
        source = JikanSource(mock_cache, RateLimiter(0))
        try:
            await source.find_series_info(series, CancellationToken())
        finally:
            await source.close()

        assert not search_route.called

    @pytest.mark.asyncio
    @respx.mock
    async def test_year_breaks_title_ties(self, mock_cache: MagicMock) -> None:
        results = {
            "data": [
                {"mal_id": 10, "title": "Hunter x Hunter", "year": 1999},
                {"mal_id": 11061, "title": "Hunter x Hunter", "year": 2011},
            ]
        }
        respx.get(SEARCH_URL).mock(return_value=httpx.Response(200, json=results))
        source = JikanSource(mock_cache, RateLimiter(0))
        try:
            found = await source._search("Hunter x Hunter", 2011)
        finally:
            await source.close()

        assert found == "11061"

    @pytest.mark.asyncio
    @respx.mock
    async def test_no_match_is_not_found(self, mock_cache: MagicMock) -> None:
        respx.get(SEARCH_URL).mock(return_value=httpx.Response(200, json=JIKAN_SEARCH_EMPTY_RESPONSE))
        source = JikanSource(mock_cache, RateLimiter(0))
        try:
            with pytest.raises(SourceNotFoundError):
                await source.find_series_info(SeriesEntity(name="Inexistant"), CancellationToken())
        finally:
            await source.close()

    @pytest.mark.asyncio
    async def test_series_without_name_or_id_is_not_found(self, mock_cache: MagicMock) -> None:
        with pytest.raises(SourceNotFoundError):
            await JikanSource(mock_cache, RateLimiter(0)).find_series_info(SeriesEntity(), CancellationToken())

    @pytest.mark.asyncio
    @respx.mock
    async def test_404_is_not_found(self, mock_cache: MagicMock) -> None:
        respx.get("https://api.jikan.moe/v4/anime/999999/full").mock(return_value=httpx.Response(404))
        series = SeriesEntity(name="X", provider_ids={"MyAnimeList": "999999"})
        source = JikanSource(mock_cache, RateLimiter(0))
        try:
            with pytest.raises(SourceNotFoundError):
                await source.find_series_info(series, CancellationToken())
        finally:
            await source.close()

    @pytest.mark.asyncio
    @respx.mock
    async def test_gateway_error_is_unavailable(self, mock_cache: MagicMock) -> None:
        respx.get(FULL_URL).mock(return_value=httpx.Response(504))
        series = SeriesEntity(name="X", provider_ids={"MyAnimeList": "1"})
        source = JikanSource(mock_cache, RateLimiter(0))
        try:
            with pytest.raises(SourceUnavailableError):
                await source.find_series_info(series, CancellationToken())
        finally:
            await source.close()

    @pytest.mark.asyncio
    async def test_malformed_document_is_unavailable(self, mock_cache: MagicMock) -> None:
        mock_cache.get.return_value = {"mal_id": 1, "genres": [{"id": 1}]}
        series = SeriesEntity(name="X", provider_ids={"MyAnimeList": "1"})

        with pytest.raises(SourceUnavailableError):
            await JikanSource(mock_cache, RateLimiter(0)).find_series_info(series, CancellationToken())


class TestJikanParsing:
    """Normalisation de la fiche anime/full."""

    @pytest.fixture
    def source(self, mock_cache: MagicMock) -> JikanSource:
        return JikanSource(mock_cache, RateLimiter(0))

    def test_fields(self, source: JikanSource) -> None:
        info = source._parse_document(ANIME, "1")

        assert info.name == "Cowboy Bebop"
        assert info.description == "Crime is timeless."
        assert info.content_rating == "R"
        assert info.runtime_ticks == 24 * TICKS_PER_MINUTE
        assert info.start_date == date(1998, 4, 3)
        assert info.end_date == date(1999, 4, 24)
        assert info.air_time == "01:00"
        assert info.air_days == (DayOfWeek.SATURDAY,)
        assert info.genres == ("Action", "Award Winning", "Sci-Fi")
        assert info.studios == ("Sunrise",)
        assert info.people == ()
        assert info.community_rating == 8.75
        assert info.vote_count == 1000000

    def test_anidb_id_from_external_links(self, source: JikanSource) -> None:
        assert source._parse_document(ANIME, "1").external_providers == {
            "MyAnimeList": "1",
            "AniDB": "23",
        }

    @pytest.mark.parametrize(
        "preference, expected",
        [("romaji", "Cowboy Bebop"), ("english", "Cowboy Bebop (EN)"), ("native", "カウボーイビバップ")],
    )
    def test_title_preference(self, mock_cache: MagicMock, preference: str, expected: str) -> None:
        source = JikanSource(mock_cache, RateLimiter(0), title_preference=preference)
        assert source._parse_document(ANIME, "1").name == expected

    def test_airing_series(self, source: JikanSource) -> None:
        info = source._parse_document(
            {"mal_id": 5, "title": "Ongoing", "aired": {"from": "2026-04-01T00:00:00+00:00", "to": None},
             "broadcast": {"day": None, "time": None}, "score": None},
            "5",
        )

        assert info.end_date is None
        assert info.air_days == ()
        assert info.air_time is None
        assert info.community_rating is None
        assert info.vote_count is None
