"""
Entite serie TV (anime) cible de la reconciliation.

SeriesEntity est creee par l'hote a la premiere decouverte puis mutee
sur place a chaque cycle de rafraichissement. Elle n'est jamais remplacee.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Optional


class SeriesStatus(str, Enum):
    """Statut de diffusion, toujours derive de la date de fin."""

    CONTINUING = "Continuing"
    ENDED = "Ended"


class DayOfWeek(str, Enum):
    """Jour de diffusion hebdomadaire."""

    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["DayOfWeek"]:
        """
        Convertit un libelle libre ("Saturdays", "sunday") en jour.

        Returns:
            Le jour correspondant, ou None si non reconnu
        """
        prefix = (value or "").strip().lower()[:3]
        if len(prefix) < 3:
            return None
        for day in cls:
            if day.value.lower().startswith(prefix):
                return day
        return None


class PersonType(str, Enum):
    """Type de participation d'une personne a la serie."""

    ACTOR = "Actor"
    DIRECTOR = "Director"
    WRITER = "Writer"
    PRODUCER = "Producer"
    COMPOSER = "Composer"
    GUEST_STAR = "GuestStar"


class MetadataField(str, Enum):
    """
    Champs qu'un utilisateur peut verrouiller.

    Un champ verrouille n'est jamais modifie par un rafraichissement
    automatique. Les champs derives (statut, annee, note) ne sont pas
    verrouillables.
    """

    NAME = "Name"
    OVERVIEW = "Overview"
    OFFICIAL_RATING = "OfficialRating"
    RUNTIME = "Runtime"
    PREMIERE_DATE = "PremiereDate"
    END_DATE = "EndDate"
    AIR_TIME = "AirTime"
    AIR_DAYS = "AirDays"
    CAST = "Cast"
    GENRES = "Genres"
    STUDIOS = "Studios"


@dataclass(frozen=True)
class PersonInfo:
    """
    Personne associee a la serie.

    Attributes:
        name: Nom de la personne
        role: Role tenu (nom du personnage pour un doubleur, poste sinon)
        type: Type de participation
    """

    name: str
    role: Optional[str] = None
    type: PersonType = PersonType.ACTOR


@dataclass
class SeriesEntity:
    """
    Serie persistee par l'hote, mutee sur place par la reconciliation.

    Attributes:
        id: Identifiant interne de l'hote
        name: Titre affiche
        overview: Synopsis
        official_rating: Classification (ex: "PG-13", "TV-14")
        runtime_ticks: Duree d'un episode en unites de 100 ns
        premiere_date: Date de premiere diffusion
        end_date: Date de fin de diffusion
        air_time: Heure de diffusion libre ("23:30")
        air_days: Jours de diffusion
        genres: Genres, dans l'ordre de la source retenue
        studios: Studios d'animation
        people: Casting et equipe
        community_rating: Note communautaire (0-10)
        vote_count: Nombre de votes ayant produit la note
        production_year: Annee de production (derivee si absente)
        status: Statut de diffusion (derive)
        provider_ids: IDs externes par nom de fournisseur
        locked_fields: Champs verrouilles par l'utilisateur
        dont_fetch_meta: Metadonnees verrouillees, seuls les IDs sont fusionnes
        date_modified: Derniere modification par l'utilisateur
        last_refreshed_utc: Horodatage du dernier rafraichissement reussi
    """

    id: Optional[str] = None
    name: Optional[str] = None
    overview: Optional[str] = None
    official_rating: Optional[str] = None
    runtime_ticks: Optional[int] = None
    premiere_date: Optional[date] = None
    end_date: Optional[date] = None
    air_time: Optional[str] = None
    air_days: list[DayOfWeek] = field(default_factory=list)
    genres: list[str] = field(default_factory=list)
    studios: list[str] = field(default_factory=list)
    people: list[PersonInfo] = field(default_factory=list)
    community_rating: Optional[float] = None
    vote_count: Optional[int] = None
    production_year: Optional[int] = None
    status: Optional[SeriesStatus] = None
    provider_ids: dict[str, str] = field(default_factory=dict)
    locked_fields: set[MetadataField] = field(default_factory=set)
    dont_fetch_meta: bool = False
    date_modified: Optional[datetime] = None
    last_refreshed_utc: Optional[datetime] = None

    def is_locked(self, metadata_field: MetadataField) -> bool:
        """Indique si le champ est verrouille par l'utilisateur."""
        return metadata_field in self.locked_fields

    def get_provider_id(self, provider_name: str) -> Optional[str]:
        """Retourne l'ID externe du fournisseur, ou None s'il est inconnu."""
        return self.provider_ids.get(provider_name) or None
