"""
Couche domaine (core).

Contient les entites metier, ports (interfaces abstraites), et objets valeur.
Cette couche n'a AUCUNE dependance vers l'infrastructure (adapters, HTTP, cache).

Sous-packages :
- entities/ : Entite SeriesEntity et enumerations associees
- ports/ : Interface ISeriesSource des sources de metadonnees
- value_objects/ : SeriesInfo, jeton d'annulation
"""
