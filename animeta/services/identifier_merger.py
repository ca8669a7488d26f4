"""
Fusion des identifiants externes contribues par chaque source.
"""

from typing import Iterable, Mapping

from loguru import logger


class IdentifierMerger:
    """
    Union des IDs externes dans provider_ids.

    Les contributions sont parcourues dans l'ordre de priorite des sources ;
    pour une meme cle, la derniere ecriture gagne. Toutes les sources sont
    egalement fiables pour les IDs et aucun verrou ne s'applique.
    """

    def merge(
        self,
        provider_ids: dict[str, str],
        contributions: Iterable[Mapping[str, str]],
    ) -> dict[str, str]:
        """
        Ajoute les IDs contribues (mutation sur place).

        Args:
            provider_ids: IDs actuels de l'entite
            contributions: IDs de chaque source, dans l'ordre de priorite

        Returns:
            Le meme dictionnaire, mis a jour
        """
        for contribution in contributions:
            for provider, provider_id in contribution.items():
                previous = provider_ids.get(provider)
                if previous is not None and previous != provider_id:
                    logger.debug(f"ID {provider} remplace: {previous} -> {provider_id}")
                provider_ids[provider] = provider_id
        return provider_ids
