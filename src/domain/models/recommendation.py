from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from src.domain.models.animal import Animal


class PredictionSource(str, Enum):
    LLM = "llm"
    FALLBACK = "fallback"


@dataclass(slots=True, frozen=True)
class RelatedPair:
    animal1: str
    animal2: str
    relationship: str  # parent-child | half-siblings | full-siblings


@dataclass(slots=True, frozen=True)
class CandidatePair:
    sire: Animal
    dam: Animal
    compatibility_score: float


@dataclass(slots=True, frozen=True)
class CandidateHerd:
    animals: list[Animal]
    herd_score: float
    related_pairs: list[RelatedPair] = field(default_factory=list)

    @property
    def males(self) -> list[Animal]:
        return [a for a in self.animals if a.is_male]

    @property
    def females(self) -> list[Animal]:
        return [a for a in self.animals if a.is_female]

    @property
    def has_related_animals(self) -> bool:
        return bool(self.related_pairs)


@dataclass(slots=True)
class PredictedTraits:
    trait_strength: str
    estimated_horn_size: float | None = None


@dataclass(slots=True)
class OffspringPrediction:
    predicted_traits: PredictedTraits
    confidence: float  # 0.0 - 1.0
    explanation: str
    source: PredictionSource = PredictionSource.LLM


@dataclass(slots=True)
class HerdOutcomes:
    estimated_offspring_count: int
    trait_strength: str
    genetic_diversity: str
    average_horn_size: float | None = None


@dataclass(slots=True)
class HerdAnalysis:
    predicted_outcomes: HerdOutcomes
    confidence: float  # 0.0 - 1.0
    explanation: str
    breeding_strategy: str
    has_related_animals: bool = False
    related_animals_warning: str | None = None
    related_pairs: list[RelatedPair] = field(default_factory=list)
    source: PredictionSource = PredictionSource.LLM


@dataclass(slots=True)
class PairRecommendation:
    parent1: Animal
    parent2: Animal
    compatibility_score: float
    prediction: OffspringPrediction


@dataclass(slots=True)
class HerdRecommendation:
    herd_animals: list[Animal]
    herd_score: float
    analysis: HerdAnalysis
