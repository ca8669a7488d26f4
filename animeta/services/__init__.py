"""
Couche application : coordination des sources et reconciliation.

- SourceQueryCoordinator : interroge les sources, ignore leurs echecs
- IdentifierMerger : union des IDs externes
- FieldMerger : fusion champ par champ selon une table de regles
- RefreshOrchestrator : point d'entree d'un cycle de rafraichissement
"""

from animeta.services.field_merger import FieldMerger
from animeta.services.identifier_merger import IdentifierMerger
from animeta.services.refresh import PROVIDER_VERSION, RefreshOrchestrator
from animeta.services.source_coordinator import (
    SourceContribution,
    SourceQueryCoordinator,
)

__all__ = [
    "FieldMerger",
    "IdentifierMerger",
    "PROVIDER_VERSION",
    "RefreshOrchestrator",
    "SourceContribution",
    "SourceQueryCoordinator",
]
