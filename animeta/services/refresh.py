"""
Orchestration d'un cycle de rafraichissement d'une serie.

RefreshOrchestrator est le point d'entree appele par l'hote :
sources -> identifiants -> champs -> horodatage.

Responsabilites:
- Verifier l'annulation avant chaque phase
- Fusionner les IDs externes dans tous les cas
- Fusionner les champs sauf si l'utilisateur a verrouille les metadonnees
  (sans aucune source, seuls les champs derives sont recalcules)
- Horodater le rafraichissement, meme si aucune source n'a repondu
"""

from datetime import datetime, timezone
from typing import Callable, Optional

from loguru import logger

from animeta.core.entities.series import SeriesEntity
from animeta.core.ports.series_source import RefreshState
from animeta.core.value_objects.cancellation import CancellationToken
from animeta.services.field_merger import FieldMerger
from animeta.services.identifier_merger import IdentifierMerger
from animeta.services.source_coordinator import SourceQueryCoordinator

# A incrementer quand les regles de fusion changent : force un rafraichissement
PROVIDER_VERSION = "1"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class RefreshOrchestrator:
    """
    Enchaine coordination, fusion des IDs, fusion des champs et horodatage.

    L'hote garantit qu'un seul rafraichissement par serie est en cours ;
    aucun verrou interne n'est pris.

    Example:
        orchestrator = RefreshOrchestrator(coordinator, IdentifierMerger(), FieldMerger())
        await orchestrator.refresh(series, cancellation=token)
    """

    def __init__(
        self,
        coordinator: SourceQueryCoordinator,
        identifier_merger: IdentifierMerger,
        field_merger: FieldMerger,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._coordinator = coordinator
        self._identifier_merger = identifier_merger
        self._field_merger = field_merger
        self._clock = clock

    @property
    def requires_internet(self) -> bool:
        """True si au moins une source a besoin du reseau."""
        return any(source.requires_internet for source in self._coordinator.sources)

    def supports(self, item: object) -> bool:
        """Seules les series sont prises en charge."""
        return isinstance(item, SeriesEntity)

    async def needs_refresh(self, series: SeriesEntity, state: RefreshState) -> bool:
        """
        Indique si la serie merite un rafraichissement.

        Vrai si une source dispose de donnees plus recentes, ou si la regle de
        base s'applique : jamais rafraichie, version du fournisseur differente,
        ou serie modifiee depuis le dernier rafraichissement.
        """
        for source in self._coordinator.sources:
            if await source.needs_refresh(series, state):
                logger.debug(f"{source.provider_name} demande un rafraichissement de {series.name!r}")
                return True

        if state.last_refreshed_utc is None:
            return True
        if state.provider_version != PROVIDER_VERSION:
            return True
        return series.date_modified is not None and series.date_modified > state.last_refreshed_utc

    async def refresh(
        self,
        series: SeriesEntity,
        force: bool = False,
        cancellation: Optional[CancellationToken] = None,
    ) -> bool:
        """
        Rafraichit la serie a partir de toutes les sources.

        Args:
            series: Serie a rafraichir (mutee sur place)
            force: Rafraichissement demande explicitement (sans effet sur l'algorithme)
            cancellation: Jeton d'annulation

        Returns:
            True une fois le rafraichissement termine

        Raises:
            RefreshCancelledError: Annulation observee entre deux phases
        """
        token = cancellation or CancellationToken()
        token.raise_if_cancelled()
        logger.debug(f"Rafraichissement de {series.name!r} (force={force})")

        contributions = await self._coordinator.query_all(series, token)

        self._identifier_merger.merge(
            series.provider_ids,
            [c.info.external_providers for c in contributions],
        )

        token.raise_if_cancelled()

        if series.dont_fetch_meta:
            logger.info(f"Metadonnees verrouillees pour {series.name!r}, seuls les IDs sont fusionnes")
        elif not contributions:
            logger.warning(f"Aucune source n'a repondu pour {series.name!r}, champs derives seulement")
            self._field_merger.apply_derived(series)
        else:
            by_rank = {c.rank: c.info for c in contributions}
            self._field_merger.merge(
                series,
                primary=by_rank.get(0),
                secondary=by_rank.get(1),
                tertiary=by_rank.get(2),
                locked_fields=series.locked_fields,
            )

        series.last_refreshed_utc = self._clock()
        logger.info(
            f"Serie rafraichie: {series.name!r} "
            f"({', '.join(c.source_name for c in contributions) or 'aucune source'})"
        )
        return True
