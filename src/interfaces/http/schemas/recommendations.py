from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from src.domain.models.recommendation import PredictionSource
from src.interfaces.http.schemas.animals import AnimalResponse


class HerdRecommendationRequest(BaseModel):
    animal_ids: list[UUID] = Field(min_length=2)


class PredictedTraitsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    estimated_horn_size: float | None
    trait_strength: str


class OffspringPredictionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    predicted_traits: PredictedTraitsResponse
    confidence: float = Field(ge=0.0, le=1.0)
    explanation: str
    source: PredictionSource


class PairRecommendationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    parent1: AnimalResponse
    parent2: AnimalResponse
    compatibility_score: float = Field(ge=0.0, le=100.0)
    prediction: OffspringPredictionResponse


class RelatedPairResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    animal1: str
    animal2: str
    relationship: str


class HerdOutcomesResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    estimated_offspring_count: int
    average_horn_size: float | None
    trait_strength: str
    genetic_diversity: str


class HerdAnalysisResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    predicted_outcomes: HerdOutcomesResponse
    confidence: float = Field(ge=0.0, le=1.0)
    explanation: str
    breeding_strategy: str
    has_related_animals: bool
    related_animals_warning: str | None
    related_pairs: list[RelatedPairResponse]
    source: PredictionSource


class HerdRecommendationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    herd_animals: list[AnimalResponse]
    herd_score: float = Field(ge=0.0, le=100.0)
    analysis: HerdAnalysisResponse
