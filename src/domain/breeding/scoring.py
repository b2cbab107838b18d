"""Heuristic compatibility scoring.

Scores are ranking signals on a 0-100 scale, not probabilities.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from src.domain.models.animal import Animal

MIN_SCORE = 0.0
MAX_SCORE = 100.0


@dataclass(slots=True, frozen=True)
class ScoringWeights:
    baseline: float = 50.0
    exact_species_bonus: float = 20.0
    loose_species_bonus: float = 10.0
    horn_similarity_cap: float = 30.0
    horn_difference_factor: float = 2.0
    # (max average age in years, bonus); first matching band wins
    age_bands: tuple[tuple[float, float], ...] = ((6, 10.0), (10, 5.0))
    age_fallback_bonus: float = 0.0


@dataclass(slots=True, frozen=True)
class HerdScoringWeights:
    baseline: float = 50.0
    single_species_bonus: float = 15.0
    horn_bonus_cap: float = 15.0
    sex_balance_bonus: float = 15.0


DEFAULT_WEIGHTS = ScoringWeights()
DEFAULT_HERD_WEIGHTS = HerdScoringWeights()


def clamp(value: float, low: float = MIN_SCORE, high: float = MAX_SCORE) -> float:
    return min(high, max(low, value))


def _normalize_label(label: str | None) -> str:
    return " ".join((label or "").split()).casefold()


def species_bonus(a: Animal, b: Animal, weights: ScoringWeights = DEFAULT_WEIGHTS) -> float:
    if a.species == b.species:
        return weights.exact_species_bonus
    if _normalize_label(a.species) and _normalize_label(a.species) == _normalize_label(b.species):
        return weights.loose_species_bonus
    return 0.0


def horn_similarity_bonus(a: Animal, b: Animal, weights: ScoringWeights = DEFAULT_WEIGHTS) -> float:
    # Bonus only: large differences floor at zero instead of penalising
    if a.horn_size is None or b.horn_size is None:
        return 0.0
    difference = abs(a.horn_size - b.horn_size)
    return max(0.0, weights.horn_similarity_cap - difference * weights.horn_difference_factor)


def age_bonus(a: Animal, b: Animal, weights: ScoringWeights = DEFAULT_WEIGHTS) -> float:
    if a.age is None or b.age is None:
        return 0.0
    average_age = (a.age + b.age) / 2
    for upper_bound, bonus in weights.age_bands:
        if average_age <= upper_bound:
            return bonus
    return weights.age_fallback_bonus


def compatibility_score(a: Animal, b: Animal, weights: ScoringWeights = DEFAULT_WEIGHTS) -> float:
    """Score a prospective pair; always within [0, 100]."""
    score = weights.baseline
    score += species_bonus(a, b, weights)
    score += horn_similarity_bonus(a, b, weights)
    score += age_bonus(a, b, weights)
    return clamp(score)


def average_horn_size(animals: Sequence[Animal]) -> float | None:
    sizes = [a.horn_size for a in animals if a.horn_size is not None]
    if not sizes:
        return None
    return sum(sizes) / len(sizes)


def herd_score(
    animals: Sequence[Animal], weights: HerdScoringWeights = DEFAULT_HERD_WEIGHTS
) -> float:
    """Aggregate score for a whole herd; always within [0, 100]."""
    if not animals:
        return MIN_SCORE
    score = weights.baseline
    if len({a.species for a in animals}) == 1:
        score += weights.single_species_bonus
    avg_horn = average_horn_size(animals)
    if avg_horn is not None:
        score += min(weights.horn_bonus_cap, max(0.0, avg_horn))
    males = sum(1 for a in animals if a.is_male)
    females = sum(1 for a in animals if a.is_female)
    if males and females:
        score += weights.sex_balance_bonus * min(males, females) / max(males, females)
    return clamp(score)
