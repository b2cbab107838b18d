from __future__ import annotations

from typing import Sequence

from src.domain.breeding.relatedness import are_related, find_related_pairs
from src.domain.breeding.scoring import (
    DEFAULT_HERD_WEIGHTS,
    DEFAULT_WEIGHTS,
    HerdScoringWeights,
    ScoringWeights,
    compatibility_score,
    herd_score,
)
from src.domain.models.animal import Animal
from src.domain.models.recommendation import CandidateHerd, CandidatePair

MAX_PAIR_RECOMMENDATIONS = 5
MIN_HERD_SIZE = 2


def split_by_sex(animals: Sequence[Animal]) -> tuple[list[Animal], list[Animal]]:
    males = [a for a in animals if a.is_male]
    females = [a for a in animals if a.is_female]
    return males, females


def enumerate_pairs(
    animals: Sequence[Animal], weights: ScoringWeights = DEFAULT_WEIGHTS
) -> list[CandidatePair]:
    """Score every male x female combination, male-major in roster order."""
    males, females = split_by_sex(animals)
    if not males or not females:
        return []
    return [
        CandidatePair(
            sire=male,
            dam=female,
            compatibility_score=compatibility_score(male, female, weights),
        )
        for male in males
        for female in females
    ]


def rank_pairs(
    candidates: Sequence[CandidatePair], limit: int = MAX_PAIR_RECOMMENDATIONS
) -> list[CandidatePair]:
    """Drop related pairs, sort by score (stable) and keep the top ``limit``."""
    limit = max(0, min(limit, MAX_PAIR_RECOMMENDATIONS))
    eligible = [c for c in candidates if not are_related(c.sire, c.dam)]
    eligible.sort(key=lambda c: c.compatibility_score, reverse=True)
    return eligible[:limit]


def select_pairs(
    animals: Sequence[Animal],
    *,
    limit: int = MAX_PAIR_RECOMMENDATIONS,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> list[CandidatePair]:
    return rank_pairs(enumerate_pairs(animals, weights), limit)


def build_herd_candidate(
    animals: Sequence[Animal], weights: HerdScoringWeights = DEFAULT_HERD_WEIGHTS
) -> CandidateHerd | None:
    """Treat the selection as one candidate; None when it cannot breed."""
    if len(animals) < MIN_HERD_SIZE:
        return None
    males, females = split_by_sex(animals)
    if not males or not females:
        return None
    members = list(animals)
    return CandidateHerd(
        animals=members,
        herd_score=herd_score(members, weights),
        related_pairs=find_related_pairs(members),
    )
