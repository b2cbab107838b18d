from __future__ import annotations

from uuid import uuid4

from src.domain.breeding.lineage import build_lineage_forest
from src.domain.value_objects.sex import Sex


def _names(nodes):
    return [n.animal.name for n in nodes]


def test_unrelated_animals_are_separate_roots(make_animal):
    roster = [make_animal("A", Sex.MALE), make_animal("B", Sex.FEMALE)]

    forest = build_lineage_forest(roster)

    assert _names(forest) == ["A", "B"]
    assert all(n.level == 0 and n.children == [] for n in forest)


def test_offspring_nest_under_each_known_parent(make_animal):
    sire = make_animal("Duke", Sex.MALE)
    dam = make_animal("Bella", Sex.FEMALE)
    calf = make_animal("Junior", Sex.MALE, sire_id=sire.id, dam_id=dam.id)
    grandcalf = make_animal("Tiny", Sex.FEMALE, sire_id=calf.id)

    forest = build_lineage_forest([sire, dam, calf, grandcalf])

    assert _names(forest) == ["Duke", "Bella"]
    duke = forest[0]
    assert _names(duke.children) == ["Junior"]
    assert duke.children[0].level == 1
    assert _names(duke.children[0].children) == ["Tiny"]
    assert duke.children[0].children[0].level == 2
    bella = forest[1]
    assert _names(bella.children) == ["Junior"]
    assert bella.children[0].level == 1
    assert _names(bella.children[0].children) == ["Tiny"]


def test_dangling_parent_reference_makes_a_root(make_animal):
    orphan = make_animal("Orphan", Sex.FEMALE, sire_id=uuid4())

    forest = build_lineage_forest([orphan])

    assert _names(forest) == ["Orphan"]


def test_cycle_only_reachable_animals_become_an_extra_root(make_animal):
    a = make_animal("A", Sex.MALE)
    b = make_animal("B", Sex.FEMALE, sire_id=a.id)
    a.dam_id = b.id

    forest = build_lineage_forest([a, b])

    assert _names(forest) == ["A"]
    assert _names(forest[0].children) == ["B"]
    assert forest[0].children[0].children == []


def test_empty_roster_builds_empty_forest():
    assert build_lineage_forest([]) == []


def test_full_siblings_appear_under_both_parents(make_animal):
    sire = make_animal("Duke", Sex.MALE)
    dam = make_animal("Bella", Sex.FEMALE)
    first = make_animal("Junior", Sex.MALE, sire_id=sire.id, dam_id=dam.id)
    second = make_animal("Daisy", Sex.FEMALE, sire_id=sire.id, dam_id=dam.id)

    forest = build_lineage_forest([sire, dam, first, second])

    assert [_names(root.children) for root in forest] == [
        ["Junior", "Daisy"],
        ["Junior", "Daisy"],
    ]


def test_cycle_inside_a_subtree_stops_at_the_repeated_ancestor(make_animal):
    root = make_animal("Root", Sex.MALE)
    a = make_animal("A", Sex.MALE, sire_id=root.id)
    b = make_animal("B", Sex.FEMALE, sire_id=a.id)
    a.dam_id = b.id

    forest = build_lineage_forest([root, a, b])

    assert _names(forest) == ["Root"]
    node_a = forest[0].children[0]
    assert _names(node_a.children) == ["B"]
    assert node_a.children[0].children == []
