"""
Cache disque des reponses des sources (diskcache).

Une fiche deja telechargee n'est pas redemandee pendant DETAILS_TTL :
AniDB bannit les clients qui redemandent la meme fiche trop souvent.
Les resultats de recherche par titre vivent SEARCH_TTL.

Cles utilisees par les sources :
- "<source>:search:<titre>" pour une recherche
- "<source>:series:<id>" pour une fiche
- "<source>:series:<id>:fetched_at" pour l'instant du telechargement
"""

import asyncio
from datetime import datetime, timezone
from functools import partial
from pathlib import Path
from typing import Any, Callable, Optional, Union

from diskcache import Cache


class APICache:
    """
    Facade asynchrone sur diskcache.

    Les operations disque sont deleguees a l'executor par defaut pour ne
    pas bloquer la boucle d'evenements.

    Example:
        cache = APICache(cache_dir="~/.cache/animeta")
        await cache.set_details("anidb:series:23", xml_document)
        xml_document = await cache.get("anidb:series:23")
    """

    SEARCH_TTL = 24 * 60 * 60  # 86400
    DETAILS_TTL = 7 * 24 * 60 * 60  # 604800

    def __init__(self, cache_dir: Union[str, Path] = ".cache/animeta") -> None:
        self._cache = Cache(str(cache_dir))

    async def _run(self, func: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, partial(func, *args, **kwargs))

    async def get(self, key: str) -> Optional[Any]:
        """Valeur stockee, ou None si absente ou expiree."""
        return await self._run(self._cache.get, key)

    async def set(self, key: str, value: Any, ttl: int) -> None:
        """
        Stocke une valeur picklable pour ttl secondes.

        Args:
            key: Cle (voir les conventions du module)
            value: Reponse brute de la source
            ttl: Duree de vie en secondes
        """
        await self._run(self._cache.set, key, value, expire=ttl)

    async def set_search(self, key: str, value: Any) -> None:
        """Stocke des resultats de recherche par titre."""
        await self.set(key, value, self.SEARCH_TTL)

    async def set_details(self, key: str, value: Any) -> None:
        """Stocke une fiche et l'instant (UTC) de son telechargement."""
        await self.set(key, value, self.DETAILS_TTL)
        await self.set(self._fetched_key(key), datetime.now(timezone.utc), self.DETAILS_TTL)

    async def get_fetched_at(self, key: str) -> Optional[datetime]:
        """Instant du telechargement de la fiche, None si elle n'est plus en cache."""
        return await self.get(self._fetched_key(key))

    async def delete_details(self, key: str) -> None:
        """Supprime une fiche et son horodatage."""
        await self._run(self._cache.delete, key)
        await self._run(self._cache.delete, self._fetched_key(key))

    async def clear(self) -> None:
        """Vide le cache."""
        await self._run(self._cache.clear)

    def close(self) -> None:
        self._cache.close()

    @staticmethod
    def _fetched_key(key: str) -> str:
        return f"{key}:fetched_at"
