"""
Ports (interfaces abstraites) definissant les contrats pour les adaptateurs.

Les ports sont les frontieres de l'architecture hexagonale. Ils definissent
ce dont le domaine a besoin du monde exterieur sans specifier
comment ces besoins sont satisfaits.

Ports source : Contrats pour les fournisseurs de metadonnees
- ISeriesSource : Interface d'une source (AniDB, AniList, MyAnimeList)
- RefreshState : Etat de rafraichissement tenu par l'hote
- SourceError, SourceNotFoundError, SourceUnavailableError : Echecs locaux
"""

from animeta.core.ports.series_source import (
    ISeriesSource,
    RefreshState,
    SourceError,
    SourceNotFoundError,
    SourceUnavailableError,
)

__all__ = [
    "ISeriesSource",
    "RefreshState",
    "SourceError",
    "SourceNotFoundError",
    "SourceUnavailableError",
]
