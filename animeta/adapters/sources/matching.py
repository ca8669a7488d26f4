"""
Selection du meilleur resultat d'une recherche par titre.

Un anime a souvent plusieurs titres (romaji, anglais, natif, synonymes) :
chaque resultat est score sur son meilleur titre.
"""

from dataclasses import dataclass
from typing import Iterable, Optional

from rapidfuzz import fuzz, utils


@dataclass(frozen=True)
class TitleCandidate:
    """
    Resultat de recherche a scorer.

    Attributes:
        id: ID chez la source
        titles: Tous les titres connus du resultat
        year: Annee de debut de diffusion
    """

    id: str
    titles: tuple[str, ...]
    year: Optional[int] = None


def title_score(query: str, title: str) -> float:
    """
    Score de similarite de titre (0-100).

    token_sort_ratio est insensible a l'ordre des mots ; default_process
    normalise casse et ponctuation.
    """
    return fuzz.token_sort_ratio(query, title, processor=utils.default_process)


def pick_best_match(
    query: str,
    candidates: Iterable[TitleCandidate],
    year: Optional[int] = None,
    threshold: float = 85.0,
) -> Optional[str]:
    """
    Retourne l'ID du meilleur candidat au-dessus du seuil.

    A score egal, un candidat de la bonne annee l'emporte, puis l'ordre
    de la source (pertinence).
    """
    best_id: Optional[str] = None
    best_key: tuple[float, int] = (-1.0, 0)

    for candidate in candidates:
        score = max((title_score(query, t) for t in candidate.titles if t), default=0.0)
        if score < threshold:
            continue
        key = (score, 1 if year is not None and candidate.year == year else 0)
        if key > best_key:
            best_id, best_key = candidate.id, key

    return best_id
