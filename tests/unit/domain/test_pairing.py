from __future__ import annotations

from uuid import uuid4

from src.domain.breeding.pairing import (
    MAX_PAIR_RECOMMENDATIONS,
    build_herd_candidate,
    enumerate_pairs,
    rank_pairs,
    select_pairs,
    split_by_sex,
)
from src.domain.models.recommendation import CandidatePair
from src.domain.value_objects.sex import Sex


def test_split_by_sex_keeps_roster_order(make_animal):
    roster = [
        make_animal("F1", Sex.FEMALE),
        make_animal("M1", Sex.MALE),
        make_animal("F2", Sex.FEMALE),
    ]

    males, females = split_by_sex(roster)

    assert [a.name for a in males] == ["M1"]
    assert [a.name for a in females] == ["F1", "F2"]


def test_enumerate_pairs_is_male_major(make_animal):
    roster = [
        make_animal("M1", Sex.MALE),
        make_animal("F1", Sex.FEMALE),
        make_animal("M2", Sex.MALE),
        make_animal("F2", Sex.FEMALE),
    ]

    pairs = enumerate_pairs(roster)

    assert [(p.sire.name, p.dam.name) for p in pairs] == [
        ("M1", "F1"),
        ("M1", "F2"),
        ("M2", "F1"),
        ("M2", "F2"),
    ]
    assert all(p.sire.is_male and p.dam.is_female for p in pairs)


def test_enumerate_pairs_empty_without_both_sexes(make_animal):
    assert enumerate_pairs([make_animal("M1", Sex.MALE), make_animal("M2", Sex.MALE)]) == []
    assert enumerate_pairs([make_animal("F1", Sex.FEMALE)]) == []
    assert enumerate_pairs([]) == []


def test_rank_pairs_excludes_related_and_sorts_descending(make_animal):
    sire = make_animal("Duke", Sex.MALE)
    daughter = make_animal("Daisy", Sex.FEMALE, sire_id=sire.id)
    other = make_animal("Bella", Sex.FEMALE)
    candidates = [
        CandidatePair(sire=sire, dam=daughter, compatibility_score=99.0),
        CandidatePair(sire=sire, dam=other, compatibility_score=60.0),
    ]

    ranked = rank_pairs(candidates)

    assert [(p.sire.name, p.dam.name) for p in ranked] == [("Duke", "Bella")]


def test_rank_pairs_is_stable_for_ties(make_animal):
    m = make_animal("M1", Sex.MALE)
    females = [make_animal(f"F{i}", Sex.FEMALE) for i in range(3)]
    candidates = [
        CandidatePair(sire=m, dam=females[0], compatibility_score=70.0),
        CandidatePair(sire=m, dam=females[1], compatibility_score=80.0),
        CandidatePair(sire=m, dam=females[2], compatibility_score=70.0),
    ]

    ranked = rank_pairs(candidates)

    assert [p.dam.name for p in ranked] == ["F1", "F0", "F2"]


def test_rank_pairs_never_exceeds_maximum(make_animal):
    m = make_animal("M1", Sex.MALE)
    candidates = [
        CandidatePair(sire=m, dam=make_animal(f"F{i}", Sex.FEMALE), compatibility_score=float(i))
        for i in range(8)
    ]

    assert len(rank_pairs(candidates, limit=50)) == MAX_PAIR_RECOMMENDATIONS
    assert len(rank_pairs(candidates, limit=2)) == 2
    assert rank_pairs(candidates, limit=-1) == []


def test_select_pairs_three_males_two_females_returns_top_five(make_animal):
    roster = [
        make_animal("M1", Sex.MALE, horn_size=10.0),
        make_animal("M2", Sex.MALE, horn_size=20.0),
        make_animal("M3", Sex.MALE, horn_size=14.0),
        make_animal("F1", Sex.FEMALE, horn_size=10.0),
        make_animal("F2", Sex.FEMALE, horn_size=19.0),
    ]

    selected = select_pairs(roster)

    assert len(selected) == 5
    scores = [p.compatibility_score for p in selected]
    assert scores == sorted(scores, reverse=True)
    assert (selected[0].sire.name, selected[0].dam.name) in {("M1", "F1"), ("M2", "F2")}


def test_select_pairs_all_related_yields_nothing(make_animal):
    sire_id = uuid4()
    roster = [
        make_animal("M1", Sex.MALE, sire_id=sire_id),
        make_animal("F1", Sex.FEMALE, sire_id=sire_id),
    ]

    assert select_pairs(roster) == []


def test_herd_candidate_requires_both_sexes(make_animal):
    females = [make_animal("F1", Sex.FEMALE), make_animal("F2", Sex.FEMALE)]
    assert build_herd_candidate(females) is None
    assert build_herd_candidate([make_animal("M1", Sex.MALE)]) is None


def test_herd_candidate_audits_relatedness(make_animal):
    sire = make_animal("Duke", Sex.MALE, horn_size=12.0)
    daughter = make_animal("Daisy", Sex.FEMALE, sire_id=sire.id, horn_size=8.0)
    other = make_animal("Bella", Sex.FEMALE)

    candidate = build_herd_candidate([sire, daughter, other])

    assert candidate is not None
    assert candidate.has_related_animals
    assert [(p.animal1, p.animal2) for p in candidate.related_pairs] == [("Duke", "Daisy")]
    assert len(candidate.males) == 1
    assert len(candidate.females) == 2
    assert 0.0 <= candidate.herd_score <= 100.0
