"""
Fixtures pytest partagees pour les tests AnimeMeta.

Ce module contient les fixtures communes utilisees dans les tests:
- Instantanes SeriesInfo types pour les trois sources
- Mocks de ISeriesSource
- Settings de test avec chemins temporaires
"""

from datetime import date
from pathlib import Path
from typing import Callable, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest

from animeta.config import Settings
from animeta.core.entities.series import PersonInfo, PersonType, SeriesEntity
from animeta.core.ports.series_source import ISeriesSource
from animeta.core.value_objects.series_info import SeriesInfo


@pytest.fixture
def make_source() -> Callable[..., MagicMock]:
    """
    Fabrique de mocks ISeriesSource.

    La source retourne `info` ou leve `error` a l'appel de find_series_info.
    """

    def _make(
        name: str,
        info: Optional[SeriesInfo] = None,
        error: Optional[BaseException] = None,
    ) -> MagicMock:
        source = MagicMock(spec=ISeriesSource)
        source.provider_name = name
        source.requires_internet = True
        source.find_series_info = AsyncMock(return_value=info, side_effect=error)
        source.needs_refresh = AsyncMock(return_value=False)
        return source

    return _make


@pytest.fixture
def series() -> SeriesEntity:
    """Serie fraichement decouverte par l'hote (titre seul)."""
    return SeriesEntity(id="42", name="Cowboy Bebop")


@pytest.fixture
def anidb_info() -> SeriesInfo:
    """Instantane AniDB (source primaire)."""
    return SeriesInfo(
        name="Cowboy Bebop",
        description="In the year 2071...",
        runtime_ticks=25 * 60 * 10_000_000,
        start_date=date(1998, 4, 3),
        end_date=date(1999, 4, 24),
        genres=("Space", "Science Fiction"),
        studios=("Sunrise",),
        people=(
            PersonInfo("Yamadera Kouichi", "Spike Spiegel", PersonType.ACTOR),
            PersonInfo("Watanabe Shinichirou", "Direction", PersonType.DIRECTOR),
        ),
        community_rating=8.8,
        vote_count=10,
        external_providers={"AniDB": "23", "MyAnimeList": "1"},
    )


@pytest.fixture
def anilist_info() -> SeriesInfo:
    """Instantane AniList (source secondaire)."""
    return SeriesInfo(
        name="Cowboy Bebop (AniList)",
        description="Enter a world in the distant future...",
        runtime_ticks=24 * 60 * 10_000_000,
        start_date=date(1998, 4, 3),
        genres=("Action", "Adventure", "Drama"),
        studios=("Sunrise", "Bandai Visual"),
        community_rating=8.6,
        vote_count=0,
        external_providers={"AniList": "1", "MyAnimeList": "1"},
    )


@pytest.fixture
def mal_info() -> SeriesInfo:
    """Instantane MyAnimeList (source tertiaire)."""
    return SeriesInfo(
        name="Cowboy Bebop (MAL)",
        description="Crime is timeless.",
        content_rating="R",
        air_time="01:00",
        genres=("Action", "Award Winning", "Sci-Fi"),
        studios=("Sunrise",),
        community_rating=8.75,
        vote_count=50,
        external_providers={"MyAnimeList": "1", "AniDB": "23"},
    )


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Settings de test avec chemins temporaires."""
    return Settings(
        cache_dir=tmp_path / "cache",
        log_file=tmp_path / "test.log",
        anidb_client="animetatest",
        anidb_client_version=1,
    )
