"""
Source AniList (agregateur communautaire) via son API GraphQL.

AniList fait foi pour le synopsis : ses descriptions sont redigees par la
communaute et plus completes que celles d'AniDB. La note est ramenee sur 10
et le nombre de votes est la somme de la distribution des notes.

Reference API: https://anilist.gitbook.io/anilist-apiv2-docs
"""

import re
from typing import Any, Optional

from bs4 import BeautifulSoup

from animeta.adapters.sources.base import (
    BaseHttpSource,
    parse_date,
    person_type_for_role,
)
from animeta.adapters.sources.matching import TitleCandidate, pick_best_match
from animeta.core.entities.series import PersonInfo, PersonType
from animeta.core.ports.series_source import SourceNotFoundError
from animeta.core.value_objects.series_info import SeriesInfo, minutes_to_ticks

ANILIST = "AniList"
MYANIMELIST = "MyAnimeList"

SEARCH_QUERY = """
query ($search: String) {
  Page(perPage: 10) {
    media(search: $search, type: ANIME) {
      id
      title { romaji english native }
      synonyms
      startDate { year }
    }
  }
}
"""

MEDIA_QUERY = """
query ($id: Int) {
  Media(id: $id, type: ANIME) {
    id
    idMal
    title { romaji english native }
    description(asHtml: false)
    startDate { year month day }
    endDate { year month day }
    duration
    genres
    isAdult
    averageScore
    stats { scoreDistribution { score amount } }
    studios { nodes { name isAnimationStudio } }
    staff(perPage: 25) { edges { role node { name { full } } } }
    characters(perPage: 25, sort: [ROLE, RELEVANCE]) {
      edges {
        node { name { full } }
        voiceActors(language: JAPANESE) { name { full } }
      }
    }
  }
}
"""

_BLANK_LINES = re.compile(r"\n{3,}")


def _fuzzy_date(value: Optional[dict[str, Any]]) -> Optional[str]:
    """FuzzyDate AniList -> "YYYY-MM-DD", None si incomplete."""
    if not value or not all(value.get(k) for k in ("year", "month", "day")):
        return None
    return f"{value['year']:04d}-{value['month']:02d}-{value['day']:02d}"


def clean_description(text: Optional[str]) -> Optional[str]:
    """Retire le balisage HTML residuel des descriptions AniList."""
    if not text:
        return None
    cleaned = BeautifulSoup(text, "html.parser").get_text()
    cleaned = _BLANK_LINES.sub("\n\n", cleaned.replace("\r", "")).strip()
    return cleaned or None


class AniListSource(BaseHttpSource):
    """
    Client AniList pour les series anime.

    Example:
        source = AniListSource(cache=cache, rate_limiter=RateLimiter(0.7))
        info = await source.find_series_info(series, token)
        await source.close()
    """

    BASE_URL = "https://graphql.anilist.co"
    CACHE_PREFIX = "anilist"

    @property
    def provider_name(self) -> str:
        return ANILIST

    async def _graphql(self, query: str, variables: dict[str, Any]) -> dict[str, Any]:
        response = await self._request(
            "POST",
            "/",
            json={"query": query, "variables": variables},
            headers={"Accept": "application/json"},
        )
        return response.json().get("data") or {}

    async def _search(self, title: str, year: Optional[int]) -> Optional[str]:
        cache_key = f"{self.CACHE_PREFIX}:search:{title}"
        results = await self._cache.get(cache_key)
        if results is None:
            data = await self._graphql(SEARCH_QUERY, {"search": title})
            results = (data.get("Page") or {}).get("media") or []
            await self._cache.set_search(cache_key, results)

        candidates = [
            TitleCandidate(
                id=str(item["id"]),
                titles=tuple(
                    t for t in (*(item.get("title") or {}).values(), *(item.get("synonyms") or [])) if t
                ),
                year=(item.get("startDate") or {}).get("year"),
            )
            for item in results
        ]
        return pick_best_match(title, candidates, year=year, threshold=self._match_threshold)

    async def _fetch_document(self, source_id: str) -> dict[str, Any]:
        data = await self._graphql(MEDIA_QUERY, {"id": int(source_id)})
        media = data.get("Media")
        if not media:
            raise SourceNotFoundError(self.provider_name, f"media {source_id} absent")
        return media

    def _parse_document(self, document: dict[str, Any], source_id: str) -> SeriesInfo:
        titles = document.get("title") or {}
        name = titles.get(self._title_preference) or titles.get("romaji")

        distribution = (document.get("stats") or {}).get("scoreDistribution") or []
        vote_count = sum(entry.get("amount") or 0 for entry in distribution) or None
        average = document.get("averageScore")
        rating = round(average / 10.0, 1) if average else None

        studio_nodes = (document.get("studios") or {}).get("nodes") or []
        animation_studios = [s["name"] for s in studio_nodes if s.get("isAnimationStudio")]
        studios = animation_studios or [s["name"] for s in studio_nodes]

        providers = {ANILIST: str(document.get("id") or source_id)}
        if document.get("idMal"):
            providers[MYANIMELIST] = str(document["idMal"])

        return SeriesInfo(
            name=name,
            description=clean_description(document.get("description")),
            content_rating="R18+" if document.get("isAdult") else None,
            runtime_ticks=minutes_to_ticks(document.get("duration")),
            start_date=parse_date(_fuzzy_date(document.get("startDate"))),
            end_date=parse_date(_fuzzy_date(document.get("endDate"))),
            genres=tuple(document.get("genres") or ()),
            studios=tuple(studios),
            people=self._parse_people(document),
            community_rating=rating,
            vote_count=vote_count,
            external_providers=providers,
        )

    def _parse_people(self, document: dict[str, Any]) -> tuple[PersonInfo, ...]:
        people: list[PersonInfo] = []

        for edge in (document.get("characters") or {}).get("edges") or []:
            character = ((edge.get("node") or {}).get("name") or {}).get("full")
            for actor in edge.get("voiceActors") or []:
                actor_name = (actor.get("name") or {}).get("full")
                if actor_name:
                    people.append(PersonInfo(actor_name, character, PersonType.ACTOR))

        for edge in (document.get("staff") or {}).get("edges") or []:
            person_type = person_type_for_role(edge.get("role"))
            staff_name = ((edge.get("node") or {}).get("name") or {}).get("full")
            if person_type and staff_name:
                people.append(PersonInfo(staff_name, edge.get("role"), person_type))

        return tuple(people)
