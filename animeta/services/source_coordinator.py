"""
Coordination des appels aux sources de metadonnees.

SourceQueryCoordinator interroge chaque source enregistree, dans l'ordre
d'enregistrement qui est aussi l'ordre de priorite canonique
(primaire, secondaire, tertiaire). L'echec d'une source est journalise
puis ignore : il ne doit jamais empecher les autres sources de repondre.
"""

from dataclasses import dataclass
from typing import Optional, Sequence

from loguru import logger

from animeta.core.entities.series import SeriesEntity
from animeta.core.ports.series_source import (
    ISeriesSource,
    SourceNotFoundError,
    SourceUnavailableError,
)
from animeta.core.value_objects.cancellation import (
    CancellationToken,
    RefreshCancelledError,
)
from animeta.core.value_objects.series_info import SeriesInfo


@dataclass(frozen=True)
class SourceContribution:
    """
    Reponse reussie d'une source.

    Attributes:
        rank: Position de la source dans l'ordre de priorite (0 = primaire)
        source_name: Nom du fournisseur
        info: Instantane normalise
    """

    rank: int
    source_name: str
    info: SeriesInfo


class SourceQueryCoordinator:
    """
    Interroge toutes les sources et collecte leurs contributions.

    Les appels sont sequentiels : l'annulation est verifiee avant le premier
    appel et entre deux appels, jamais pendant un appel en cours.

    Example:
        coordinator = SourceQueryCoordinator([anidb, anilist, mal])
        contributions = await coordinator.query_all(series, token)
    """

    def __init__(self, sources: Sequence[ISeriesSource]) -> None:
        self._sources = tuple(sources)

    @property
    def sources(self) -> tuple[ISeriesSource, ...]:
        """Sources enregistrees, dans l'ordre de priorite."""
        return self._sources

    async def query_all(
        self,
        series: SeriesEntity,
        cancellation: Optional[CancellationToken] = None,
    ) -> list[SourceContribution]:
        """
        Interroge chaque source et retourne les reponses reussies.

        Args:
            series: Serie a enrichir
            cancellation: Jeton d'annulation

        Returns:
            Contributions dans l'ordre de priorite (sources en echec absentes)

        Raises:
            RefreshCancelledError: Annulation observee avant ou entre deux sources
        """
        token = cancellation or CancellationToken()
        contributions: list[SourceContribution] = []

        for rank, source in enumerate(self._sources):
            token.raise_if_cancelled()
            info = await self._query_one(source, series, token)
            if info is not None:
                contributions.append(SourceContribution(rank, source.provider_name, info))

        logger.debug(
            f"{len(contributions)}/{len(self._sources)} sources ont repondu pour {series.name!r}"
        )
        return contributions

    async def _query_one(
        self,
        source: ISeriesSource,
        series: SeriesEntity,
        token: CancellationToken,
    ) -> Optional[SeriesInfo]:
        """Interroge une source ; None si elle n'apporte aucune contribution."""
        try:
            return await source.find_series_info(series, token)
        except RefreshCancelledError:
            raise
        except SourceNotFoundError as e:
            logger.info(f"Serie introuvable: {e}")
        except SourceUnavailableError as e:
            logger.warning(f"Source indisponible: {e}")
        except Exception as e:
            logger.warning(f"Erreur inattendue de {source.provider_name}: {e!r}")
        return None
