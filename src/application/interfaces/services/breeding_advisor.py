from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Protocol

from src.domain.models.animal import Animal
from src.domain.models.recommendation import RelatedPair


@dataclass(slots=True, frozen=True)
class AnimalProfile:
    name: str
    species: str
    sex: str
    horn_size: float | None = None
    age: int | None = None
    health_notes: str | None = None

    @classmethod
    def from_animal(cls, animal: Animal) -> AnimalProfile:
        return cls(
            name=animal.name,
            species=animal.species,
            sex=animal.sex.value,
            horn_size=animal.horn_size,
            age=animal.age,
            health_notes=animal.health_notes,
        )


@dataclass(slots=True, frozen=True)
class PairPredictionRequest:
    sire: AnimalProfile
    dam: AnimalProfile
    compatibility_score: float


@dataclass(slots=True, frozen=True)
class HerdAnalysisRequest:
    animals: list[AnimalProfile]
    related_pairs: list[RelatedPair] = field(default_factory=list)

    @property
    def male_count(self) -> int:
        return sum(1 for a in self.animals if a.sex == "Male")

    @property
    def female_count(self) -> int:
        return sum(1 for a in self.animals if a.sex == "Female")


class BreedingAdvisor(Protocol):
    """External text-generation capability.

    Implementations return the parsed JSON object produced by the model, or raise.
    Responses are untrusted: callers validate them before use.
    """

    async def predict_offspring(self, request: PairPredictionRequest) -> Mapping[str, Any]: ...

    async def analyze_herd(self, request: HerdAnalysisRequest) -> Mapping[str, Any]: ...
