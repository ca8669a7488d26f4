"""Tests unitaires pour RateLimiter."""

from unittest.mock import AsyncMock, patch

import pytest

from animeta.adapters.api.rate_limit import RateLimiter


class FakeClock:
    """Horloge monotone pilotee par le test."""

    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


class TestRateLimiter:
    """Tests pour RateLimiter."""

    @pytest.mark.asyncio
    async def test_first_request_does_not_wait(self) -> None:
        limiter = RateLimiter(2.0, clock=FakeClock())

        with patch("animeta.adapters.api.rate_limit.asyncio.sleep", new_callable=AsyncMock) as sleep:
            await limiter.acquire()

        sleep.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_waits_remaining_interval(self) -> None:
        clock = FakeClock()
        limiter = RateLimiter(2.0, clock=clock)

        with patch("animeta.adapters.api.rate_limit.asyncio.sleep", new_callable=AsyncMock) as sleep:
            await limiter.acquire()
            clock.now += 0.5
            await limiter.acquire()

        sleep.assert_awaited_once_with(pytest.approx(1.5))

    @pytest.mark.asyncio
    async def test_no_wait_once_interval_elapsed(self) -> None:
        clock = FakeClock()
        limiter = RateLimiter(2.0, clock=clock)

        with patch("animeta.adapters.api.rate_limit.asyncio.sleep", new_callable=AsyncMock) as sleep:
            await limiter.acquire()
            clock.now += 3.0
            await limiter.acquire()

        sleep.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_async_context_manager(self) -> None:
        clock = FakeClock()
        limiter = RateLimiter(1.0, clock=clock)

        with patch("animeta.adapters.api.rate_limit.asyncio.sleep", new_callable=AsyncMock) as sleep:
            async with limiter as acquired:
                assert acquired is limiter
            async with limiter:
                pass

        sleep.assert_awaited_once_with(pytest.approx(1.0))

    def test_negative_interval_is_clamped(self) -> None:
        assert RateLimiter(-1.0).min_interval == 0.0
