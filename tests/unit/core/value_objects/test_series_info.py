"""
Tests pour SeriesInfo et la conversion des durees.
"""

import dataclasses

import pytest

from animeta.core.value_objects.series_info import (
    EMPTY_SERIES_INFO,
    TICKS_PER_MINUTE,
    SeriesInfo,
    minutes_to_ticks,
)


class TestMinutesToTicks:
    """Tests pour minutes_to_ticks."""

    def test_one_minute(self) -> None:
        assert minutes_to_ticks(1) == 600_000_000 == TICKS_PER_MINUTE

    def test_fractional_minutes(self) -> None:
        assert minutes_to_ticks(0.5) == 300_000_000

    @pytest.mark.parametrize("value", [None, 0, -5])
    def test_unknown_duration(self, value) -> None:
        assert minutes_to_ticks(value) is None


class TestSeriesInfo:
    """Tests pour SeriesInfo."""

    def test_empty_snapshot(self) -> None:
        assert EMPTY_SERIES_INFO.name is None
        assert EMPTY_SERIES_INFO.genres == ()
        assert EMPTY_SERIES_INFO.external_providers == {}
        assert EMPTY_SERIES_INFO.vote_count is None

    def test_is_immutable(self) -> None:
        info = SeriesInfo(name="Cowboy Bebop")
        with pytest.raises(dataclasses.FrozenInstanceError):
            info.name = "Trigun"
