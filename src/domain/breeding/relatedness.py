"""Shallow relatedness checks used to keep close relatives apart.

Only one generation is inspected: parent/offspring links and shared parents.
Grandparents and deeper ancestry are not walked.
"""

from __future__ import annotations

from itertools import combinations
from typing import Iterable

from src.domain.models.animal import Animal
from src.domain.models.recommendation import RelatedPair

PARENT_CHILD = "parent-child"
HALF_SIBLINGS = "half-siblings"
FULL_SIBLINGS = "full-siblings"


def _is_parent_of(parent: Animal, child: Animal) -> bool:
    return parent.id in (child.sire_id, child.dam_id)


def relationship_kind(a: Animal, b: Animal) -> str | None:
    """Return the relationship between two animals, or None when unrelated.

    Symmetric in its arguments. Callers must not pass the same animal twice.
    """
    if _is_parent_of(a, b) or _is_parent_of(b, a):
        return PARENT_CHILD
    same_sire = a.sire_id is not None and a.sire_id == b.sire_id
    same_dam = a.dam_id is not None and a.dam_id == b.dam_id
    if same_sire and same_dam:
        return FULL_SIBLINGS
    if same_sire or same_dam:
        return HALF_SIBLINGS
    return None


def are_related(a: Animal, b: Animal) -> bool:
    return relationship_kind(a, b) is not None


def find_related_pairs(animals: Iterable[Animal]) -> list[RelatedPair]:
    """Audit every unordered pair, in input order."""
    related: list[RelatedPair] = []
    for first, second in combinations(list(animals), 2):
        if first.id == second.id:
            continue
        kind = relationship_kind(first, second)
        if kind is not None:
            related.append(RelatedPair(animal1=first.name, animal2=second.name, relationship=kind))
    return related
