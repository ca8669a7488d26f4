"""
Fusion champ par champ des metadonnees de plusieurs sources.

FieldMerger applique une table de regles declarative : chaque champ
verrouillable a une strategie (scalaire ou collection) et un ordre de
candidats propre. L'ordre encode la confiance editoriale :
- la base structuree (primaire) fait foi pour le titre et la duree
- l'agregateur communautaire (secondaire) est prefere pour le synopsis
- le site de suivi (tertiaire) est prefere pour les genres

Strategies:
- SCALAR : premiere valeur non None
- COLLECTION : premiere collection non vide, qui remplace entierement
  la collection de l'entite (jamais d'union element par element)

Les champs derives (statut, annee de production, note communautaire)
sont calcules ensuite, sans tenir compte des verrous.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Callable, Hashable, Iterable, Optional

from loguru import logger

from animeta.core.entities.series import (
    MetadataField,
    PersonInfo,
    SeriesEntity,
    SeriesStatus,
)
from animeta.core.value_objects.series_info import EMPTY_SERIES_INFO, SeriesInfo

ANIMATION_GENRE = "Animation"


class Candidate(str, Enum):
    """Provenance d'une valeur candidate."""

    EXISTING = "existing"
    PRIMARY = "primary"
    SECONDARY = "secondary"
    TERTIARY = "tertiary"


class Strategy(str, Enum):
    """Strategie de resolution d'un champ."""

    SCALAR = "scalar"
    COLLECTION = "collection"


def _casefold_key(value: str) -> Hashable:
    return value.casefold()


def _person_key(person: PersonInfo) -> Hashable:
    return (person.name.casefold(), person.type)


def _join_roles(kept: PersonInfo, duplicate: PersonInfo) -> PersonInfo:
    """Doubleur de plusieurs personnages : les roles sont concatenes."""
    roles = [r for r in (kept.role or "").split(" / ") if r]
    if duplicate.role and duplicate.role not in roles:
        roles.append(duplicate.role)
    return replace(kept, role=" / ".join(roles) or None)


def _identity_key(value: Any) -> Hashable:
    return value


@dataclass(frozen=True)
class FieldRule:
    """
    Regle de resolution d'un champ.

    Attributes:
        field: Champ verrouillable gouverne par la regle
        entity_attr: Attribut de SeriesEntity
        source_attr: Attribut de SeriesInfo
        strategy: SCALAR ou COLLECTION
        order: Ordre des candidats, du plus au moins prioritaire
        unique_key: Cle de dedoublonnage lors de la reconstruction d'une collection
        combine: Fusion d'un doublon dans l'element conserve (defaut: doublon ignore)
    """

    field: MetadataField
    entity_attr: str
    source_attr: str
    strategy: Strategy
    order: tuple[Candidate, ...]
    unique_key: Callable[[Any], Hashable] = _identity_key
    combine: Optional[Callable[[Any, Any], Any]] = None


_P, _S, _T, _E = Candidate.PRIMARY, Candidate.SECONDARY, Candidate.TERTIARY, Candidate.EXISTING

FIELD_RULES: tuple[FieldRule, ...] = (
    FieldRule(MetadataField.NAME, "name", "name", Strategy.SCALAR, (_P, _S, _T, _E)),
    FieldRule(MetadataField.OVERVIEW, "overview", "description", Strategy.SCALAR, (_E, _S, _T, _P)),
    FieldRule(MetadataField.CAST, "people", "people", Strategy.COLLECTION, (_P, _S, _T, _E), _person_key, _join_roles),
    FieldRule(MetadataField.OFFICIAL_RATING, "official_rating", "content_rating", Strategy.SCALAR, (_E, _P, _S, _T)),
    FieldRule(MetadataField.RUNTIME, "runtime_ticks", "runtime_ticks", Strategy.SCALAR, (_P, _E, _S, _T)),
    FieldRule(MetadataField.GENRES, "genres", "genres", Strategy.COLLECTION, (_T, _S, _E, _P), _casefold_key),
    FieldRule(MetadataField.STUDIOS, "studios", "studios", Strategy.COLLECTION, (_P, _S, _T, _E), _casefold_key),
    FieldRule(MetadataField.PREMIERE_DATE, "premiere_date", "start_date", Strategy.SCALAR, (_P, _S, _T, _E)),
    FieldRule(MetadataField.END_DATE, "end_date", "end_date", Strategy.SCALAR, (_P, _S, _T, _E)),
    FieldRule(MetadataField.AIR_TIME, "air_time", "air_time", Strategy.SCALAR, (_P, _S, _T, _E)),
    FieldRule(MetadataField.AIR_DAYS, "air_days", "air_days", Strategy.COLLECTION, (_P, _S, _T, _E)),
)

# Ordre de depart des ex aequo pour la note communautaire
RATING_TIE_BREAK: tuple[Candidate, ...] = (_P, _T, _S)


def first_present(values: Iterable[Any]) -> Optional[Any]:
    """Retourne la premiere valeur non None, ou None."""
    return next((v for v in values if v is not None), None)


def first_non_empty(collections: Iterable[Optional[Iterable[Any]]]) -> list[Any]:
    """Retourne une copie de la premiere collection non vide, ou une liste vide."""
    for collection in collections:
        items = list(collection or ())
        if items:
            return items
    return []


def _unique(
    items: Iterable[Any],
    key: Callable[[Any], Hashable],
    combine: Optional[Callable[[Any, Any], Any]] = None,
) -> list[Any]:
    positions: dict[Hashable, int] = {}
    result: list[Any] = []
    for item in items:
        k = key(item)
        if k in positions:
            if combine is not None:
                result[positions[k]] = combine(result[positions[k]], item)
            continue
        positions[k] = len(result)
        result.append(item)
    return result


class FieldMerger:
    """
    Reconcilie l'etat d'une serie a partir de trois instantanes de sources.

    Fonction totale : une source absente (None) se comporte comme un
    instantane vide, aucune erreur n'est levee pour une donnee manquante.

    Example:
        merger = FieldMerger()
        merger.merge(series, primary=anidb, secondary=anilist, tertiary=mal)
    """

    def __init__(self, rules: tuple[FieldRule, ...] = FIELD_RULES) -> None:
        self._rules = rules

    @property
    def rules(self) -> tuple[FieldRule, ...]:
        """Table de regles appliquee."""
        return self._rules

    def merge(
        self,
        series: SeriesEntity,
        primary: Optional[SeriesInfo] = None,
        secondary: Optional[SeriesInfo] = None,
        tertiary: Optional[SeriesInfo] = None,
        locked_fields: Optional[Iterable[MetadataField]] = None,
    ) -> SeriesEntity:
        """
        Fusionne les sources dans la serie (mutation sur place).

        Args:
            series: Entite cible
            primary: Instantane de la source primaire
            secondary: Instantane de la source secondaire
            tertiary: Instantane de la source tertiaire
            locked_fields: Champs a ne pas toucher (defaut: series.locked_fields)

        Returns:
            La meme entite, mise a jour
        """
        locked = set(series.locked_fields if locked_fields is None else locked_fields)
        sources = {
            Candidate.PRIMARY: primary or EMPTY_SERIES_INFO,
            Candidate.SECONDARY: secondary or EMPTY_SERIES_INFO,
            Candidate.TERTIARY: tertiary or EMPTY_SERIES_INFO,
        }

        for rule in self._rules:
            if rule.field in locked:
                logger.debug(f"Champ verrouille ignore: {rule.field.value}")
                continue
            values = [
                getattr(series, rule.entity_attr)
                if candidate is Candidate.EXISTING
                else getattr(sources[candidate], rule.source_attr)
                for candidate in rule.order
            ]
            if rule.strategy is Strategy.SCALAR:
                setattr(series, rule.entity_attr, first_present(values))
            else:
                self._replace_collection(series, rule, first_non_empty(values))

        self._apply_derived(series, sources)
        return series

    def apply_derived(self, series: SeriesEntity) -> SeriesEntity:
        """
        Calcule uniquement les champs derives, sans appliquer la table de regles.

        Utilise quand aucune source n'a repondu : ni le titre ni les genres
        ne changent, la note existante est conservee.
        """
        self._apply_derived(series, {})
        return series

    def _replace_collection(
        self,
        series: SeriesEntity,
        rule: FieldRule,
        winner: list[Any],
    ) -> None:
        """Vide puis reconstruit la collection a partir du candidat retenu."""
        if rule.field is MetadataField.GENRES:
            winner.append(ANIMATION_GENRE)
        target: list[Any] = getattr(series, rule.entity_attr)
        target.clear()
        target.extend(_unique(winner, rule.unique_key, rule.combine))

    def _apply_derived(
        self,
        series: SeriesEntity,
        sources: dict[Candidate, SeriesInfo],
    ) -> None:
        series.status = SeriesStatus.ENDED if series.end_date is not None else SeriesStatus.CONTINUING

        if series.production_year is None and series.premiere_date is not None:
            series.production_year = series.premiere_date.year

        most_voted = select_most_voted(sources)
        if (most_voted.vote_count or 0) > 0:
            series.community_rating = most_voted.community_rating
            series.vote_count = most_voted.vote_count


def select_most_voted(sources: dict[Candidate, SeriesInfo]) -> SeriesInfo:
    """
    Selectionne la source entiere ayant le plus de votes.

    Les ex aequo sont departages par RATING_TIE_BREAK (primaire, tertiaire,
    secondaire) : max() conserve le premier maximum rencontre.
    """
    ordered = [sources.get(c) or EMPTY_SERIES_INFO for c in RATING_TIE_BREAK]
    return max(ordered, key=lambda info: info.vote_count or 0)
