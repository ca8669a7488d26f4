"""
Source AniDB (base de donnees structuree) via l'API HTTP XML.

AniDB fait foi pour le titre, la duree, les dates et le casting. L'API
exige un client enregistre (client/clientver) et bannit les clients qui
depassent une requete toutes les 2 secondes : le cache disque est donc
consulte avant toute requete.

AniDB n'offre pas de recherche par titre en ligne : la serie doit deja
porter son ID AniDB (fourni par l'hote ou par une autre source lors d'un
rafraichissement precedent).

Reference API: https://wiki.anidb.net/HTTP_API_Definition
"""

import re
import xml.etree.ElementTree as ET
from typing import Optional

from loguru import logger

from animeta.adapters.api.cache import APICache
from animeta.adapters.api.rate_limit import RateLimiter
from animeta.adapters.sources.base import (
    BaseHttpSource,
    parse_date,
    person_type_for_role,
)
from animeta.core.entities.series import PersonInfo, PersonType
from animeta.core.ports.series_source import (
    SourceNotFoundError,
    SourceUnavailableError,
)
from animeta.core.value_objects.series_info import SeriesInfo, minutes_to_ticks

ANIDB = "AniDB"
MYANIMELIST = "MyAnimeList"
ANIME_NEWS_NETWORK = "AnimeNewsNetwork"

# Types de ressources externes AniDB
_RESOURCE_PROVIDERS = {"1": ANIME_NEWS_NETWORK, "2": MYANIMELIST}

# Langue AniDB du titre selon la preference
_TITLE_LANGUAGES = {"romaji": "x-jat", "english": "en", "native": "ja"}

# Creators AniDB retenus comme studios
_STUDIO_TYPES = {"Animation Work", "Work"}

# Personnages dont les doubleurs sont retenus
_CAST_CHARACTER_TYPES = {"main character in", "secondary cast in"}

_XML_LANG = "{http://www.w3.org/XML/1998/namespace}lang"
_ANIDB_LINK = re.compile(r"https?://anidb\.net/\S+ \[([^\]]+)\]")

MIN_TAG_WEIGHT = 400
MAX_GENRES = 10


def clean_description(text: Optional[str]) -> Optional[str]:
    """Remplace les liens AniDB 'http://anidb.net/ch123 [Nom]' par 'Nom'."""
    if not text:
        return None
    return _ANIDB_LINK.sub(r"\1", text).strip() or None


class AniDbSource(BaseHttpSource):
    """
    Client AniDB pour les fiches anime.

    Example:
        source = AniDbSource(cache, RateLimiter(2.0), client="animeta", client_version=1)
        info = await source.find_series_info(series, token)
    """

    BASE_URL = "http://api.anidb.net:9001"
    CACHE_PREFIX = "anidb"

    def __init__(
        self,
        cache: APICache,
        rate_limiter: RateLimiter,
        client: Optional[str] = None,
        client_version: int = 1,
        title_preference: str = "romaji",
        timeout: float = 30.0,
    ) -> None:
        """
        Args:
            cache: Cache partage des documents
            rate_limiter: Limiteur de debit AniDB (2s minimum)
            client: Nom du client enregistre aupres d'AniDB
            client_version: Version du client enregistre
            title_preference: Titre a rapporter
            timeout: Timeout HTTP en secondes
        """
        super().__init__(cache, rate_limiter, title_preference=title_preference, timeout=timeout)
        self._client_name = client
        self._client_version = client_version

    @property
    def provider_name(self) -> str:
        return ANIDB

    async def _search(self, title: str, year: Optional[int]) -> Optional[str]:
        logger.debug(f"AniDB: pas de recherche par titre, ID requis pour {title!r}")
        return None

    async def _fetch_document(self, source_id: str) -> str:
        if not self._client_name:
            raise SourceUnavailableError(self.provider_name, "client AniDB non configure")

        response = await self._request(
            "GET",
            "/httpapi",
            params={
                "request": "anime",
                "client": self._client_name,
                "clientver": self._client_version,
                "protover": 1,
                "aid": source_id,
            },
        )
        text = response.text
        # AniDB repond 200 avec un document <error> en cas d'echec
        if text.lstrip().startswith("<error"):
            message = ET.fromstring(text).text or "erreur inconnue"
            if "not found" in message.lower():
                raise SourceNotFoundError(self.provider_name, f"anime {source_id}: {message}")
            raise SourceUnavailableError(self.provider_name, f"anime {source_id}: {message}")
        return text

    def _parse_document(self, document: str, source_id: str) -> SeriesInfo:
        try:
            root = ET.fromstring(document)
        except ET.ParseError as e:
            raise ValueError(f"XML invalide: {e}") from e

        rating = root.find("ratings/permanent")
        vote_count = int(rating.get("count", "0")) if rating is not None else None

        return SeriesInfo(
            name=self._pick_title(root),
            description=clean_description(root.findtext("description")),
            content_rating="R18+" if root.get("restricted") == "true" else None,
            runtime_ticks=minutes_to_ticks(self._episode_length(root)),
            start_date=parse_date(root.findtext("startdate")),
            end_date=parse_date(root.findtext("enddate")),
            genres=self._parse_genres(root),
            studios=tuple(
                n.text.strip()
                for n in root.findall("creators/name")
                if n.get("type") in _STUDIO_TYPES and n.text
            ),
            people=self._parse_people(root),
            community_rating=float(rating.text) if rating is not None and rating.text else None,
            vote_count=vote_count,
            external_providers=self._parse_providers(root, source_id),
        )

    def _pick_title(self, root: ET.Element) -> Optional[str]:
        titles = root.findall("titles/title")
        language = _TITLE_LANGUAGES[self._title_preference]
        for title_type in ("main", "official"):
            for title in titles:
                if title.get(_XML_LANG) == language and title.get("type") == title_type:
                    return title.text
        main = next((t for t in titles if t.get("type") == "main"), None)
        return main.text if main is not None else None

    def _episode_length(self, root: ET.Element) -> Optional[float]:
        """Duree du premier episode regulier (epno type 1), en minutes."""
        for episode in root.findall("episodes/episode"):
            epno = episode.find("epno")
            length = episode.findtext("length")
            if epno is not None and epno.get("type") == "1" and length:
                return float(length)
        return None

    def _parse_genres(self, root: ET.Element) -> tuple[str, ...]:
        """Tags de poids suffisant, du plus au moins pertinent."""
        weighted = []
        for tag in root.findall("tags/tag"):
            weight = int(tag.get("weight", "0"))
            name = tag.findtext("name")
            if name and weight >= MIN_TAG_WEIGHT:
                weighted.append((weight, name.strip().title()))
        weighted.sort(key=lambda item: item[0], reverse=True)
        return tuple(name for _, name in weighted[:MAX_GENRES])

    def _parse_people(self, root: ET.Element) -> tuple[PersonInfo, ...]:
        people: list[PersonInfo] = []

        for character in root.findall("characters/character"):
            if character.get("type") not in _CAST_CHARACTER_TYPES:
                continue
            seiyuu = character.findtext("seiyuu")
            if seiyuu:
                people.append(PersonInfo(seiyuu.strip(), character.findtext("name"), PersonType.ACTOR))

        for creator in root.findall("creators/name"):
            person_type = person_type_for_role(creator.get("type"))
            if person_type and creator.text:
                people.append(PersonInfo(creator.text.strip(), creator.get("type"), person_type))

        return tuple(people)

    def _parse_providers(self, root: ET.Element, source_id: str) -> dict[str, str]:
        providers = {ANIDB: root.get("id") or source_id}
        for resource in root.findall("resources/resource"):
            provider = _RESOURCE_PROVIDERS.get(resource.get("type", ""))
            identifier = resource.findtext("externalentity/identifier")
            if provider and identifier and provider not in providers:
                providers[provider] = identifier.strip()
        return providers
