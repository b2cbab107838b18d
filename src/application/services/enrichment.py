from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Mapping, Sequence, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from tenacity import AsyncRetrying, before_sleep_log, stop_after_attempt, wait_exponential

from src.application.errors import EnrichmentError
from src.application.interfaces.services.breeding_advisor import (
    AnimalProfile,
    BreedingAdvisor,
    HerdAnalysisRequest,
    PairPredictionRequest,
)
from src.config.settings import Settings
from src.domain.breeding.fallback import (
    DEFAULT_FALLBACK_CONFIDENCE,
    fallback_herd_analysis,
    fallback_pair_prediction,
    related_pairs_warning,
)
from src.domain.models.recommendation import (
    CandidateHerd,
    CandidatePair,
    HerdAnalysis,
    HerdOutcomes,
    OffspringPrediction,
    PredictedTraits,
    PredictionSource,
)

logger = logging.getLogger(__name__)

RequestT = TypeVar("RequestT")


def clamp_confidence(value: float) -> float:
    return min(1.0, max(0.0, value))


class _Payload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class PredictedTraitsPayload(_Payload):
    trait_strength: str = Field(alias="traitStrength", min_length=1)
    estimated_horn_size: float | None = Field(
        default=None, alias="estimatedHornSize", allow_inf_nan=False
    )


class PairPredictionPayload(_Payload):
    predicted_traits: PredictedTraitsPayload = Field(alias="predictedTraits")
    confidence: float = Field(allow_inf_nan=False)
    explanation: str = Field(min_length=1)

    def to_domain(self) -> OffspringPrediction:
        return OffspringPrediction(
            predicted_traits=PredictedTraits(
                trait_strength=self.predicted_traits.trait_strength,
                estimated_horn_size=self.predicted_traits.estimated_horn_size,
            ),
            confidence=clamp_confidence(self.confidence),
            explanation=self.explanation,
            source=PredictionSource.LLM,
        )


class HerdOutcomesPayload(_Payload):
    estimated_offspring_count: int = Field(alias="estimatedOffspringCount", ge=0)
    trait_strength: str = Field(alias="traitStrength", min_length=1)
    genetic_diversity: str = Field(alias="geneticDiversity", min_length=1)
    average_horn_size: float | None = Field(
        default=None, alias="averageHornSize", allow_inf_nan=False
    )


class HerdAnalysisPayload(_Payload):
    predicted_outcomes: HerdOutcomesPayload = Field(alias="predictedOutcomes")
    confidence: float = Field(allow_inf_nan=False)
    explanation: str = Field(min_length=1)
    breeding_strategy: str = Field(alias="breedingStrategy", min_length=1)


class EnrichmentGateway:
    """Annotates ranked candidates with advisor predictions.

    Never propagates advisor failures: exceptions, timeouts, empty or
    schema-violating responses are logged and replaced by a local prediction.
    """

    def __init__(
        self,
        advisor: BreedingAdvisor | None,
        *,
        timeout_seconds: float = 20.0,
        max_concurrency: int = 5,
        max_retries: int = 0,
        retry_backoff_seconds: float = 0.5,
        fallback_confidence: float = DEFAULT_FALLBACK_CONFIDENCE,
    ) -> None:
        self._advisor = advisor
        self._timeout_seconds = timeout_seconds
        self._max_concurrency = max(1, max_concurrency)
        self._max_retries = max(0, max_retries)
        self._retry_backoff_seconds = retry_backoff_seconds
        self._fallback_confidence = clamp_confidence(fallback_confidence)

    @classmethod
    def from_settings(
        cls, settings: Settings, advisor: BreedingAdvisor | None
    ) -> EnrichmentGateway:
        return cls(
            advisor,
            timeout_seconds=settings.enrichment_timeout_seconds,
            max_concurrency=settings.enrichment_max_concurrency,
            max_retries=settings.enrichment_max_retries,
            retry_backoff_seconds=settings.enrichment_retry_backoff_seconds,
            fallback_confidence=settings.fallback_confidence,
        )

    @property
    def fallback_confidence(self) -> float:
        return self._fallback_confidence

    async def predict_pair(self, candidate: CandidatePair) -> OffspringPrediction:
        if self._advisor is None:
            return fallback_pair_prediction(candidate, self._fallback_confidence)
        request = PairPredictionRequest(
            sire=AnimalProfile.from_animal(candidate.sire),
            dam=AnimalProfile.from_animal(candidate.dam),
            compatibility_score=candidate.compatibility_score,
        )
        try:
            raw = await self._call(self._advisor.predict_offspring, request)
            payload = PairPredictionPayload.model_validate(raw)
        except Exception as exc:
            logger.warning(
                "Offspring prediction failed for %s x %s, using local fallback: %s",
                candidate.sire.name,
                candidate.dam.name,
                exc,
            )
            return fallback_pair_prediction(candidate, self._fallback_confidence)
        return payload.to_domain()

    async def predict_pairs(self, candidates: Sequence[CandidatePair]) -> list[OffspringPrediction]:
        """Predict concurrently; results follow the order of ``candidates``."""
        semaphore = asyncio.Semaphore(self._max_concurrency)

        async def run(candidate: CandidatePair) -> OffspringPrediction:
            async with semaphore:
                return await self.predict_pair(candidate)

        return list(await asyncio.gather(*(run(c) for c in candidates)))

    async def analyze_herd(self, candidate: CandidateHerd) -> HerdAnalysis:
        if self._advisor is None:
            return fallback_herd_analysis(candidate, self._fallback_confidence)
        request = HerdAnalysisRequest(
            animals=[AnimalProfile.from_animal(a) for a in candidate.animals],
            related_pairs=list(candidate.related_pairs),
        )
        try:
            raw = await self._call(self._advisor.analyze_herd, request)
            payload = HerdAnalysisPayload.model_validate(raw)
        except Exception as exc:
            logger.warning(
                "Herd analysis failed for %d animals, using local fallback: %s",
                len(candidate.animals),
                exc,
            )
            return fallback_herd_analysis(candidate, self._fallback_confidence)

        outcomes = payload.predicted_outcomes
        # Relatedness is always computed locally, never taken from the advisor
        return HerdAnalysis(
            predicted_outcomes=HerdOutcomes(
                estimated_offspring_count=outcomes.estimated_offspring_count,
                trait_strength=outcomes.trait_strength,
                genetic_diversity=outcomes.genetic_diversity,
                average_horn_size=outcomes.average_horn_size,
            ),
            confidence=clamp_confidence(payload.confidence),
            explanation=payload.explanation,
            breeding_strategy=payload.breeding_strategy,
            has_related_animals=candidate.has_related_animals,
            related_animals_warning=related_pairs_warning(candidate.related_pairs),
            related_pairs=list(candidate.related_pairs),
            source=PredictionSource.LLM,
        )

    async def _call(
        self,
        method: Callable[[RequestT], Awaitable[Mapping[str, Any]]],
        request: RequestT,
    ) -> Mapping[str, Any]:
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self._max_retries + 1),
            wait=wait_exponential(multiplier=self._retry_backoff_seconds),
            before_sleep=before_sleep_log(logger, logging.INFO),
            reraise=True,
        )
        async for attempt in retrying:
            with attempt:
                raw = await asyncio.wait_for(method(request), timeout=self._timeout_seconds)
                if not raw:
                    raise EnrichmentError("Empty response from breeding advisor")
                if not isinstance(raw, Mapping):
                    raise EnrichmentError(
                        f"Unexpected response type from breeding advisor: {type(raw).__name__}"
                    )
        return raw
