from __future__ import annotations

import asyncio
import logging

import pytest
from conftest import HERD_RESPONSE, PAIR_RESPONSE, StubAdvisor

from src.application.services.enrichment import EnrichmentGateway
from src.domain.breeding.pairing import build_herd_candidate
from src.domain.models.recommendation import CandidatePair, PredictionSource
from src.domain.value_objects.sex import Sex


@pytest.fixture()
def pair(make_animal) -> CandidatePair:
    return CandidatePair(
        sire=make_animal("Duke", Sex.MALE, horn_size=10.0),
        dam=make_animal("Bella", Sex.FEMALE, horn_size=12.0),
        compatibility_score=96.0,
    )


class SlowAdvisor(StubAdvisor):
    async def predict_offspring(self, request):
        await asyncio.sleep(1)
        return await super().predict_offspring(request)


class FlakyAdvisor(StubAdvisor):
    """Fails ``failures`` times before answering."""

    def __init__(self, failures: int) -> None:
        super().__init__()
        self.failures = failures

    async def predict_offspring(self, request):
        self.pair_calls.append(request)
        if len(self.pair_calls) <= self.failures:
            raise RuntimeError("rate limited")
        return self.pair_response


class PerNameAdvisor(StubAdvisor):
    """Fails only for requests whose dam is named ``bad_dam``."""

    def __init__(self, bad_dam: str) -> None:
        super().__init__()
        self.bad_dam = bad_dam

    async def predict_offspring(self, request):
        self.pair_calls.append(request)
        if request.dam.name == self.bad_dam:
            raise RuntimeError("boom")
        return {**self.pair_response, "explanation": f"advisor on {request.dam.name}"}


@pytest.mark.asyncio
async def test_valid_response_is_used(pair):
    advisor = StubAdvisor()
    gateway = EnrichmentGateway(advisor)

    prediction = await gateway.predict_pair(pair)

    assert prediction.source is PredictionSource.LLM
    assert prediction.confidence == pytest.approx(PAIR_RESPONSE["confidence"])
    assert prediction.predicted_traits.trait_strength == "Excellent"
    assert prediction.predicted_traits.estimated_horn_size == pytest.approx(12.5)
    assert advisor.pair_calls[0].sire.name == "Duke"
    assert advisor.pair_calls[0].compatibility_score == pytest.approx(96.0)


@pytest.mark.asyncio
async def test_advisor_exception_falls_back(pair, caplog):
    gateway = EnrichmentGateway(StubAdvisor(error=RuntimeError("provider down")))

    with caplog.at_level(logging.WARNING):
        prediction = await gateway.predict_pair(pair)

    assert prediction.source is PredictionSource.FALLBACK
    assert prediction.confidence == pytest.approx(0.7)
    assert prediction.explanation
    assert "provider down" in caplog.text


@pytest.mark.asyncio
async def test_missing_advisor_falls_back_without_calls(pair):
    gateway = EnrichmentGateway(None, fallback_confidence=0.55)

    prediction = await gateway.predict_pair(pair)

    assert prediction.source is PredictionSource.FALLBACK
    assert prediction.confidence == pytest.approx(0.55)


@pytest.mark.asyncio
async def test_timeout_falls_back(pair):
    gateway = EnrichmentGateway(SlowAdvisor(), timeout_seconds=0.01)

    prediction = await gateway.predict_pair(pair)

    assert prediction.source is PredictionSource.FALLBACK


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        {},
        {"confidence": 0.9, "explanation": "no traits"},
        {**PAIR_RESPONSE, "explanation": ""},
        {**PAIR_RESPONSE, "confidence": "very"},
        {**PAIR_RESPONSE, "confidence": float("nan")},
        ["not", "an", "object"],
    ],
)
async def test_malformed_response_falls_back(pair, response):
    gateway = EnrichmentGateway(StubAdvisor(pair_response=response))

    prediction = await gateway.predict_pair(pair)

    assert prediction.source is PredictionSource.FALLBACK
    assert prediction.confidence == pytest.approx(0.7)


@pytest.mark.asyncio
@pytest.mark.parametrize(("raw", "expected"), [(1.7, 1.0), (-0.2, 0.0), (0.42, 0.42)])
async def test_confidence_is_clamped(pair, raw, expected):
    advisor = StubAdvisor(pair_response={**PAIR_RESPONSE, "confidence": raw})

    prediction = await EnrichmentGateway(advisor).predict_pair(pair)

    assert prediction.source is PredictionSource.LLM
    assert prediction.confidence == pytest.approx(expected)


@pytest.mark.asyncio
async def test_predict_pairs_preserves_order_and_isolates_failures(make_animal):
    sire = make_animal("Duke", Sex.MALE)
    candidates = [
        CandidatePair(sire=sire, dam=make_animal(f"F{i}", Sex.FEMALE), compatibility_score=90.0 - i)
        for i in range(4)
    ]
    gateway = EnrichmentGateway(PerNameAdvisor(bad_dam="F2"), max_concurrency=2)

    predictions = await gateway.predict_pairs(candidates)

    assert [p.source for p in predictions] == [
        PredictionSource.LLM,
        PredictionSource.LLM,
        PredictionSource.FALLBACK,
        PredictionSource.LLM,
    ]
    assert predictions[0].explanation == "advisor on F0"
    assert predictions[3].explanation == "advisor on F3"
    assert "F2" in predictions[2].explanation


@pytest.mark.asyncio
async def test_retry_recovers_from_transient_failure(pair):
    advisor = FlakyAdvisor(failures=1)
    gateway = EnrichmentGateway(advisor, max_retries=2, retry_backoff_seconds=0)

    prediction = await gateway.predict_pair(pair)

    assert prediction.source is PredictionSource.LLM
    assert len(advisor.pair_calls) == 2


@pytest.mark.asyncio
async def test_retries_exhausted_falls_back(pair):
    advisor = FlakyAdvisor(failures=5)
    gateway = EnrichmentGateway(advisor, max_retries=1, retry_backoff_seconds=0)

    prediction = await gateway.predict_pair(pair)

    assert prediction.source is PredictionSource.FALLBACK
    assert len(advisor.pair_calls) == 2


@pytest.mark.asyncio
async def test_herd_analysis_keeps_local_relatedness(make_animal):
    sire = make_animal("Duke", Sex.MALE)
    daughter = make_animal("Daisy", Sex.FEMALE, sire_id=sire.id)
    candidate = build_herd_candidate([sire, daughter, make_animal("Bella", Sex.FEMALE)])
    advisor = StubAdvisor(
        herd_response={**HERD_RESPONSE, "hasRelatedAnimals": False, "relatedPairs": []}
    )

    analysis = await EnrichmentGateway(advisor).analyze_herd(candidate)

    assert analysis.source is PredictionSource.LLM
    assert analysis.breeding_strategy == HERD_RESPONSE["breedingStrategy"]
    assert analysis.predicted_outcomes.estimated_offspring_count == 3
    assert analysis.has_related_animals
    assert [p.relationship for p in analysis.related_pairs] == ["parent-child"]
    assert analysis.related_animals_warning
    assert advisor.herd_calls[0].related_pairs == candidate.related_pairs


@pytest.mark.asyncio
async def test_herd_analysis_falls_back_on_bad_payload(make_animal):
    candidate = build_herd_candidate(
        [make_animal("M1", Sex.MALE), make_animal("F1", Sex.FEMALE)]
    )
    advisor = StubAdvisor(herd_response={"predictedOutcomes": {}, "confidence": 0.9})

    analysis = await EnrichmentGateway(advisor).analyze_herd(candidate)

    assert analysis.source is PredictionSource.FALLBACK
    assert analysis.confidence == pytest.approx(0.7)
    assert analysis.breeding_strategy
