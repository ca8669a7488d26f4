"""
Instantane normalise des metadonnees d'une source.

Chaque source renvoie un SeriesInfo construit pour un seul rafraichissement
puis jete apres la fusion. Les champs absents valent None, les collections
absentes sont vides : une source qui ne repond pas ne produit aucun
SeriesInfo.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from animeta.core.entities.series import DayOfWeek, PersonInfo

# 1 seconde = 10 000 000 ticks de 100 ns
TICKS_PER_SECOND = 10_000_000
TICKS_PER_MINUTE = 60 * TICKS_PER_SECOND


def minutes_to_ticks(minutes: Optional[float]) -> Optional[int]:
    """Convertit une duree en minutes vers des ticks, None si inconnue."""
    if minutes is None or minutes <= 0:
        return None
    return int(minutes * TICKS_PER_MINUTE)


@dataclass(frozen=True)
class SeriesInfo:
    """
    Metadonnees d'une serie telles que rapportees par une source.

    Attributes:
        name: Titre selon la preference de langue
        description: Synopsis
        content_rating: Classification
        runtime_ticks: Duree d'un episode (ticks de 100 ns)
        start_date: Debut de diffusion
        end_date: Fin de diffusion
        air_time: Heure de diffusion libre
        air_days: Jours de diffusion
        genres: Genres
        studios: Studios
        people: Casting et equipe
        community_rating: Note sur 10
        vote_count: Nombre de votes derriere la note
        external_providers: IDs externes connus de la source
    """

    name: Optional[str] = None
    description: Optional[str] = None
    content_rating: Optional[str] = None
    runtime_ticks: Optional[int] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    air_time: Optional[str] = None
    air_days: tuple[DayOfWeek, ...] = ()
    genres: tuple[str, ...] = ()
    studios: tuple[str, ...] = ()
    people: tuple[PersonInfo, ...] = ()
    community_rating: Optional[float] = None
    vote_count: Optional[int] = None
    external_providers: dict[str, str] = field(default_factory=dict)


EMPTY_SERIES_INFO = SeriesInfo()
