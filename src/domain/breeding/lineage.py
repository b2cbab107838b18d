from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence
from uuid import UUID

from src.domain.models.animal import Animal


@dataclass(slots=True)
class LineageNode:
    animal: Animal
    level: int
    children: list[LineageNode] = field(default_factory=list)


def _known_parent_ids(animal: Animal, known: set[UUID]) -> list[UUID]:
    return [p for p in (animal.sire_id, animal.dam_id) if p is not None and p in known]


def build_lineage_forest(animals: Sequence[Animal]) -> list[LineageNode]:
    """Build parent -> offspring trees from sire/dam references.

    Roots are animals with no parent present in ``animals``; dangling references
    count as unknown parents. An offspring is listed under every parent that
    names it. A child is skipped only when it is already an ancestor on the
    current path, so cycles in the recorded parentage cannot recurse forever.
    Animals only reachable through a cycle are appended as extra roots.
    """
    known = {a.id for a in animals}
    children_of: dict[UUID, list[Animal]] = {a.id: [] for a in animals}
    for animal in animals:
        for parent_id in dict.fromkeys(_known_parent_ids(animal, known)):
            children_of[parent_id].append(animal)

    placed: set[UUID] = set()

    def build(root: Animal) -> LineageNode:
        node = LineageNode(animal=root, level=0)
        placed.add(root.id)
        stack: list[tuple[LineageNode, frozenset[UUID]]] = [(node, frozenset({root.id}))]
        while stack:
            current, ancestors = stack.pop()
            for child in children_of[current.animal.id]:
                if child.id in ancestors:
                    continue
                placed.add(child.id)
                child_node = LineageNode(animal=child, level=current.level + 1)
                current.children.append(child_node)
                stack.append((child_node, ancestors | {child.id}))
        return node

    forest = [build(a) for a in animals if not _known_parent_ids(a, known)]
    for animal in animals:
        if animal.id not in placed:
            forest.append(build(animal))
    return forest
