"""
AnimeMeta - Reconciliation des metadonnees d'anime multi-sources.

Ce package interroge plusieurs sources (AniDB, AniList, MyAnimeList),
normalise leurs reponses et les fusionne champ par champ dans une fiche
de serie unique, en respectant les champs verrouilles par l'utilisateur.

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (entites, ports, objets valeur)
- services/ : Couche application (coordination, fusion, rafraichissement)
- adapters/ : Couche infrastructure (clients des sources, cache, CLI)
"""

__version__ = "0.1.0"
