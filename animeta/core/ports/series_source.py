"""
Interface port pour les sources de metadonnees de series.

Chaque source externe (base structuree, agregateur communautaire, site de
suivi) est un adaptateur qui normalise sa reponse en SeriesInfo.
Les echecs d'une source ne sont jamais fatals pour le rafraichissement :
le coordinateur les traite comme "aucune contribution".
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from animeta.core.entities.series import SeriesEntity
from animeta.core.value_objects.cancellation import CancellationToken
from animeta.core.value_objects.series_info import SeriesInfo


class SourceError(Exception):
    """
    Erreur locale a une source.

    Attributes:
        source: Nom du fournisseur concerne
    """

    def __init__(self, source: str, message: str) -> None:
        self.source = source
        super().__init__(f"[{source}] {message}")


class SourceNotFoundError(SourceError):
    """La source ne connait pas la serie demandee."""


class SourceUnavailableError(SourceError):
    """Erreur transitoire : reseau, HTTP, reponse illisible."""


@dataclass(frozen=True)
class RefreshState:
    """
    Etat de rafraichissement tenu par l'hote pour ce fournisseur.

    Attributes:
        last_refreshed_utc: Dernier rafraichissement reussi
        provider_version: Version du fournisseur lors de ce rafraichissement
    """

    last_refreshed_utc: Optional[datetime] = None
    provider_version: Optional[str] = None


class ISeriesSource(ABC):
    """
    Interface d'une source de metadonnees de series.

    Les implementations gerent leur propre transport, cache et rate limiting.
    """

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Nom du fournisseur, utilise comme cle dans provider_ids (ex: 'AniDB')."""
        ...

    @property
    def requires_internet(self) -> bool:
        """Indique si la source a besoin du reseau."""
        return True

    async def close(self) -> None:
        """Libere les ressources de la source (client HTTP)."""
        return None

    @abstractmethod
    async def find_series_info(
        self,
        series: SeriesEntity,
        cancellation: CancellationToken,
    ) -> SeriesInfo:
        """
        Recupere et normalise les metadonnees de la serie.

        Args :
            series : Entite a enrichir (titre et IDs externes servent d'indices)
            cancellation : Jeton d'annulation, a honorer avant chaque requete

        Retourne :
            SeriesInfo normalise

        Raises :
            SourceNotFoundError : Serie inconnue de la source
            SourceUnavailableError : Erreur transitoire
            RefreshCancelledError : Annulation observee pendant l'appel
        """
        ...

    @abstractmethod
    async def needs_refresh(
        self,
        series: SeriesEntity,
        state: RefreshState,
    ) -> bool:
        """
        Indique si les donnees de la source sont plus recentes que le dernier rafraichissement.

        Args :
            series : Entite concernee
            state : Etat de rafraichissement tenu par l'hote

        Retourne :
            True si un rafraichissement apporterait des donnees nouvelles
        """
        ...
