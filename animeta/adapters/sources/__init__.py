"""
Sources de metadonnees anime (adaptateurs de ISeriesSource).

Ordre de priorite canonique, qui est aussi l'ordre d'enregistrement :
- AniDbSource : base structuree (primaire)
- AniListSource : agregateur communautaire (secondaire)
- JikanSource : MyAnimeList, site de suivi (tertiaire)
"""

from animeta.adapters.sources.anidb import AniDbSource
from animeta.adapters.sources.anilist import AniListSource
from animeta.adapters.sources.base import BaseHttpSource
from animeta.adapters.sources.jikan import JikanSource

__all__ = [
    "AniDbSource",
    "AniListSource",
    "BaseHttpSource",
    "JikanSource",
]
