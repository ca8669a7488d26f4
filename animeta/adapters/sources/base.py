"""
Socle commun des sources HTTP de metadonnees.

BaseHttpSource factorise ce que les trois sources partagent :
- client httpx unique par source (connection pooling)
- rate limiting propre a la source et retry sur 429
- cache disque des documents de serie
- conversion des erreurs de transport en SourceUnavailableError
- resolution de l'ID de la serie (IDs connus, sinon recherche par titre)

Les sous-classes fournissent la recherche, le telechargement du document
brut et sa normalisation en SeriesInfo.
"""

from abc import abstractmethod
from datetime import date, datetime
from typing import Any, Optional

import httpx
from loguru import logger

from animeta.adapters.api.cache import APICache
from animeta.adapters.api.rate_limit import RateLimiter
from animeta.adapters.api.retry import RateLimitError, request_with_retry
from animeta.core.entities.series import PersonType, SeriesEntity
from animeta.core.ports.series_source import (
    ISeriesSource,
    RefreshState,
    SourceNotFoundError,
    SourceUnavailableError,
)
from animeta.core.value_objects.cancellation import CancellationToken
from animeta.core.value_objects.series_info import SeriesInfo

TITLE_PREFERENCES = ("romaji", "english", "native")

# Mots-cles de poste (minuscules) -> type de personne, premier trouve
_ROLE_KEYWORDS: tuple[tuple[str, Optional[PersonType]], ...] = (
    ("assistant", None),
    ("animation direct", None),
    ("sound direct", None),
    ("episode direct", None),
    ("character design", None),
    ("direct", PersonType.DIRECTOR),
    ("music", PersonType.COMPOSER),
    ("original", PersonType.WRITER),
    ("series composition", PersonType.WRITER),
    ("script", PersonType.WRITER),
    ("producer", PersonType.PRODUCER),
)


def person_type_for_role(role: Optional[str]) -> Optional[PersonType]:
    """
    Type de personne correspondant a un poste de staff, None si non retenu.

    Example:
        person_type_for_role("Director") -> PersonType.DIRECTOR
        person_type_for_role("Assistant Director") -> None
    """
    lowered = (role or "").lower()
    for keyword, person_type in _ROLE_KEYWORDS:
        if keyword in lowered:
            return person_type
    return None


def parse_date(value: Optional[str]) -> Optional[date]:
    """
    Parse une date ISO complete ("2004-04-05" ou "2004-04-05T00:00:00+00:00").

    Les dates partielles ("2004", "2004-04") sont considerees inconnues.
    """
    if not value or len(value) < 10:
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        return None


class BaseHttpSource(ISeriesSource):
    """
    Source de metadonnees accedee en HTTP.

    Attributes:
        BASE_URL: URL de base de l'API de la source
        CACHE_PREFIX: Prefixe des cles de cache de la source
    """

    BASE_URL: str = ""
    CACHE_PREFIX: str = ""

    def __init__(
        self,
        cache: APICache,
        rate_limiter: RateLimiter,
        title_preference: str = "romaji",
        timeout: float = 30.0,
        match_threshold: float = 85.0,
    ) -> None:
        """
        Args:
            cache: Cache partage des documents
            rate_limiter: Limiteur de debit propre a cette source
            title_preference: Titre a rapporter ("romaji", "english", "native")
            timeout: Timeout HTTP en secondes
            match_threshold: Score minimal (0-100) d'une correspondance par titre
        """
        if title_preference not in TITLE_PREFERENCES:
            raise ValueError(f"Preference de titre inconnue: {title_preference}")
        self._cache = cache
        self._rate_limiter = rate_limiter
        self._title_preference = title_preference
        self._timeout = timeout
        self._match_threshold = match_threshold
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Retourne le client HTTP, cree s'il n'existe pas."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.BASE_URL,
                timeout=httpx.Timeout(self._timeout, connect=10.0),
                headers={"User-Agent": "animeta/0.1"},
            )
        return self._client

    async def close(self) -> None:
        """Ferme le client HTTP."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        """
        Requete HTTP rate limitee, avec retry sur 429.

        Raises:
            SourceNotFoundError: Reponse 404
            SourceUnavailableError: Toute autre erreur de transport ou HTTP
        """
        client = await self._get_client()
        try:
            async with self._rate_limiter:
                return await request_with_retry(client, method, url, **kwargs)
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                raise SourceNotFoundError(self.provider_name, f"404 sur {url}") from e
            raise SourceUnavailableError(
                self.provider_name, f"HTTP {e.response.status_code} sur {url}"
            ) from e
        except RateLimitError as e:
            raise SourceUnavailableError(self.provider_name, str(e)) from e
        except httpx.HTTPError as e:
            raise SourceUnavailableError(self.provider_name, f"{type(e).__name__}: {e}") from e

    def _document_key(self, source_id: str) -> str:
        return f"{self.CACHE_PREFIX}:series:{source_id}"

    async def _load_info(self, source_id: str) -> SeriesInfo:
        """
        Document de la serie, depuis le cache ou la source, normalise.

        Un document n'est mis en cache qu'apres une normalisation reussie.
        Une entree de cache illisible est supprimee.

        Raises:
            SourceUnavailableError: Document illisible
        """
        key = self._document_key(source_id)
        document = await self._cache.get(key)
        from_cache = document is not None
        if not from_cache:
            document = await self._fetch_document(source_id)

        try:
            info = self._parse_document(document, source_id)
        except (KeyError, TypeError, ValueError) as e:
            if from_cache:
                await self._cache.delete_details(key)
            raise SourceUnavailableError(
                self.provider_name, f"document illisible pour {source_id}: {e!r}"
            ) from e

        if not from_cache:
            await self._cache.set_details(key, document)
        return info

    async def _resolve_id(
        self,
        series: SeriesEntity,
        cancellation: CancellationToken,
    ) -> Optional[str]:
        """ID de la serie chez la source : ID connu, sinon recherche par titre."""
        known = series.get_provider_id(self.provider_name)
        if known:
            return known
        if not series.name:
            return None
        cancellation.raise_if_cancelled()
        return await self._search(series.name, series.production_year)

    async def find_series_info(
        self,
        series: SeriesEntity,
        cancellation: CancellationToken,
    ) -> SeriesInfo:
        cancellation.raise_if_cancelled()
        source_id = await self._resolve_id(series, cancellation)
        if not source_id:
            raise SourceNotFoundError(self.provider_name, f"aucune correspondance pour {series.name!r}")

        cancellation.raise_if_cancelled()
        info = await self._load_info(source_id)
        logger.debug(f"{self.provider_name} {source_id}: {info.name!r}")
        return info

    async def needs_refresh(self, series: SeriesEntity, state: RefreshState) -> bool:
        source_id = series.get_provider_id(self.provider_name)
        if not source_id or state.last_refreshed_utc is None:
            return False
        fetched_at: Optional[datetime] = await self._cache.get_fetched_at(self._document_key(source_id))
        return fetched_at is not None and fetched_at > state.last_refreshed_utc

    @abstractmethod
    async def _search(self, title: str, year: Optional[int]) -> Optional[str]:
        """Recherche la serie par titre, retourne l'ID de la meilleure correspondance."""
        ...

    @abstractmethod
    async def _fetch_document(self, source_id: str) -> Any:
        """Telecharge le document brut de la serie (serializable pour le cache)."""
        ...

    @abstractmethod
    def _parse_document(self, document: Any, source_id: str) -> SeriesInfo:
        """Normalise le document brut en SeriesInfo."""
        ...
