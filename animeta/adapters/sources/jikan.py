"""
Source MyAnimeList (site de suivi) via l'API REST Jikan v4.

MyAnimeList fait foi pour les genres et, grace a son grand nombre de
membres, fournit en general la note communautaire la mieux etayee.
Jikan expose aussi les liens externes, d'ou l'ID AniDB quand il existe.

Reference API: https://docs.api.jikan.moe/
"""

import re
from typing import Any, Optional

from animeta.adapters.sources.base import BaseHttpSource, parse_date
from animeta.adapters.sources.matching import TitleCandidate, pick_best_match
from animeta.core.entities.series import DayOfWeek
from animeta.core.value_objects.series_info import SeriesInfo, minutes_to_ticks

MYANIMELIST = "MyAnimeList"
ANIDB = "AniDB"

_HOURS = re.compile(r"(\d+)\s*hr")
_MINUTES = re.compile(r"(\d+)\s*min")
_ANIDB_LINK = re.compile(r"anidb\.net/(?:perl-bin/animedb\.pl\?show=anime&aid=|anime/)(\d+)")
# Jikan ajoute "[Written by MAL Rewrite]" a la fin des synopsis
_MAL_REWRITE = re.compile(r"\s*\[Written by MAL Rewrite\]\s*$")


def parse_duration(value: Optional[str]) -> Optional[float]:
    """
    Duree Jikan en minutes.

    Example:
        parse_duration("24 min per ep") -> 24.0
        parse_duration("1 hr 30 min") -> 90.0
        parse_duration("Unknown") -> None
    """
    if not value:
        return None
    hours = _HOURS.search(value)
    minutes = _MINUTES.search(value)
    if not hours and not minutes:
        return None
    return float((int(hours.group(1)) * 60 if hours else 0) + (int(minutes.group(1)) if minutes else 0))


def parse_content_rating(value: Optional[str]) -> Optional[str]:
    """'PG-13 - Teens 13 or older' -> 'PG-13'."""
    if not value or value.lower() == "none":
        return None
    return value.split(" - ", 1)[0].strip() or None


def _start_year(item: dict[str, Any]) -> Optional[int]:
    if item.get("year"):
        return item["year"]
    start = parse_date((item.get("aired") or {}).get("from"))
    return start.year if start else None


class JikanSource(BaseHttpSource):
    """
    Client Jikan pour les fiches MyAnimeList.

    Example:
        source = JikanSource(cache=cache, rate_limiter=RateLimiter(1.0))
        info = await source.find_series_info(series, token)
    """

    BASE_URL = "https://api.jikan.moe/v4"
    CACHE_PREFIX = "jikan"

    @property
    def provider_name(self) -> str:
        return MYANIMELIST

    async def _search(self, title: str, year: Optional[int]) -> Optional[str]:
        cache_key = f"{self.CACHE_PREFIX}:search:{title}"
        results = await self._cache.get(cache_key)
        if results is None:
            response = await self._request("GET", "/anime", params={"q": title, "limit": 10})
            results = response.json().get("data") or []
            await self._cache.set_search(cache_key, results)

        candidates = [
            TitleCandidate(
                id=str(item["mal_id"]),
                titles=tuple(t.get("title") for t in item.get("titles") or [] if t.get("title"))
                or (item.get("title") or "",),
                year=_start_year(item),
            )
            for item in results
        ]
        return pick_best_match(title, candidates, year=year, threshold=self._match_threshold)

    async def _fetch_document(self, source_id: str) -> dict[str, Any]:
        response = await self._request("GET", f"/anime/{source_id}/full")
        return response.json()["data"]

    def _parse_document(self, document: dict[str, Any], source_id: str) -> SeriesInfo:
        aired = document.get("aired") or {}
        broadcast = document.get("broadcast") or {}
        air_day = DayOfWeek.parse(broadcast.get("day"))

        synopsis = document.get("synopsis")
        if synopsis:
            synopsis = _MAL_REWRITE.sub("", synopsis).strip() or None

        score = document.get("score")
        return SeriesInfo(
            name=self._pick_title(document),
            description=synopsis,
            content_rating=parse_content_rating(document.get("rating")),
            runtime_ticks=minutes_to_ticks(parse_duration(document.get("duration"))),
            start_date=parse_date(aired.get("from")),
            end_date=parse_date(aired.get("to")),
            air_time=broadcast.get("time") or None,
            air_days=(air_day,) if air_day else (),
            genres=tuple(g["name"] for g in document.get("genres") or []),
            studios=tuple(s["name"] for s in document.get("studios") or []),
            community_rating=float(score) if score is not None else None,
            vote_count=document.get("scored_by"),
            external_providers=self._parse_providers(document, source_id),
        )

    def _pick_title(self, document: dict[str, Any]) -> Optional[str]:
        if self._title_preference == "english" and document.get("title_english"):
            return document["title_english"]
        if self._title_preference == "native" and document.get("title_japanese"):
            return document["title_japanese"]
        return document.get("title")

    def _parse_providers(self, document: dict[str, Any], source_id: str) -> dict[str, str]:
        providers = {MYANIMELIST: str(document.get("mal_id") or source_id)}
        for link in document.get("external") or []:
            match = _ANIDB_LINK.search(link.get("url") or "")
            if match:
                providers[ANIDB] = match.group(1)
                break
        return providers
