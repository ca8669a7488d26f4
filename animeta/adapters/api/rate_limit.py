"""
Limiteur de debit par source.

Chaque source a son propre limiteur : AniDB exige au moins 2 secondes
entre deux requetes, Jikan tolere environ 3 requetes par seconde.
"""

import asyncio
import time
from typing import Callable


class RateLimiter:
    """
    Garantit un intervalle minimal entre deux requetes d'une meme source.

    Example:
        limiter = RateLimiter(min_interval=2.0)
        async with limiter:
            response = await client.get(url)
    """

    def __init__(
        self,
        min_interval: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Args:
            min_interval: Delai minimal entre deux requetes, en secondes
            clock: Horloge monotone (injectable pour les tests)
        """
        self._min_interval = max(0.0, min_interval)
        self._clock = clock
        self._lock = asyncio.Lock()
        self._last_request: float | None = None

    @property
    def min_interval(self) -> float:
        """Delai minimal entre deux requetes, en secondes."""
        return self._min_interval

    async def acquire(self) -> None:
        """Attend que l'intervalle minimal soit ecoule depuis la requete precedente."""
        async with self._lock:
            if self._last_request is not None:
                wait = self._min_interval - (self._clock() - self._last_request)
                if wait > 0:
                    await asyncio.sleep(wait)
            self._last_request = self._clock()

    async def __aenter__(self) -> "RateLimiter":
        await self.acquire()
        return self

    async def __aexit__(self, *exc_info) -> None:
        return None
