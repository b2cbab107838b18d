"""Deterministic predictions built from local attributes only.

Used whenever the external advisor is unavailable or returns unusable data.
Nothing here may raise for a well-formed candidate.
"""

from __future__ import annotations

from src.domain.breeding.scoring import average_horn_size
from src.domain.models.recommendation import (
    CandidateHerd,
    CandidatePair,
    HerdAnalysis,
    HerdOutcomes,
    OffspringPrediction,
    PredictedTraits,
    PredictionSource,
    RelatedPair,
)

DEFAULT_FALLBACK_CONFIDENCE = 0.7


def related_pairs_warning(related_pairs: list[RelatedPair]) -> str | None:
    if not related_pairs:
        return None
    listed = ", ".join(f"{p.animal1} & {p.animal2} ({p.relationship})" for p in related_pairs)
    return (
        f"Related animals detected: {listed}. "
        "Avoid breeding these pairs to prevent inbreeding."
    )


def fallback_pair_prediction(
    candidate: CandidatePair, confidence: float = DEFAULT_FALLBACK_CONFIDENCE
) -> OffspringPrediction:
    sire, dam = candidate.sire, candidate.dam
    same_species = sire.species == dam.species
    estimated_horn = average_horn_size([sire, dam])

    parts = [
        f"{sire.name} and {dam.name} have a compatibility score of "
        f"{candidate.compatibility_score:.1f}."
    ]
    if same_species:
        parts.append(f"Both are {sire.species}, which supports consistent offspring traits.")
    else:
        parts.append(
            f"Crossing {sire.species} with {dam.species} may produce more variable offspring."
        )
    if estimated_horn is not None:
        parts.append(f"Expected offspring horn size is around {estimated_horn:.1f} inches.")
    if sire.health_notes or dam.health_notes:
        parts.append("Review the recorded health notes before breeding.")

    return OffspringPrediction(
        predicted_traits=PredictedTraits(
            trait_strength="Strong" if same_species else "Moderate",
            estimated_horn_size=estimated_horn,
        ),
        confidence=confidence,
        explanation=" ".join(parts),
        source=PredictionSource.FALLBACK,
    )


def fallback_herd_analysis(
    candidate: CandidateHerd, confidence: float = DEFAULT_FALLBACK_CONFIDENCE
) -> HerdAnalysis:
    animals = candidate.animals
    males, females = len(candidate.males), len(candidate.females)
    estimated_offspring = min(males, females)
    avg_horn = average_horn_size(animals)
    species_count = len({a.species for a in animals})
    genetic_diversity = "Good" if species_count > 1 else "Limited"
    has_related = candidate.has_related_animals

    explanation = (
        f"This herd of {len(animals)} animals ({males} males, {females} females) shows "
        f"{genetic_diversity.lower()} genetic diversity with {species_count} species represented."
    )
    if avg_horn is not None:
        explanation += (
            f" The average horn size is {avg_horn:.1f} inches, "
            "which should produce strong offspring traits."
        )
    if has_related:
        explanation += (
            " WARNING: This herd contains related animals - see breeding strategy for guidance."
        )

    strategy = (
        f"With {males} males and {females} females, focus on rotating breeding pairs to "
        "maximize genetic diversity while maintaining strong traits. "
        f"Expected offspring: approximately {estimated_offspring} per season."
    )
    if has_related:
        strategy += (
            " IMPORTANT: Separate related animals to avoid inbreeding - do not breed "
            "parent-child pairs or half-siblings together."
        )

    return HerdAnalysis(
        predicted_outcomes=HerdOutcomes(
            estimated_offspring_count=estimated_offspring,
            trait_strength="Good",
            genetic_diversity=genetic_diversity,
            average_horn_size=avg_horn,
        ),
        confidence=confidence,
        explanation=explanation,
        breeding_strategy=strategy,
        has_related_animals=has_related,
        related_animals_warning=related_pairs_warning(candidate.related_pairs),
        related_pairs=list(candidate.related_pairs),
        source=PredictionSource.FALLBACK,
    )
