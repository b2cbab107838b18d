from __future__ import annotations

import logging
from typing import Sequence

from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.services.enrichment import EnrichmentGateway
from src.domain.breeding.pairing import MAX_PAIR_RECOMMENDATIONS, enumerate_pairs, rank_pairs
from src.domain.models.animal import Animal
from src.domain.models.recommendation import PairRecommendation

logger = logging.getLogger(__name__)


async def recommend(
    animals: Sequence[Animal],
    gateway: EnrichmentGateway,
    *,
    limit: int = MAX_PAIR_RECOMMENDATIONS,
) -> list[PairRecommendation]:
    """Rank male x female pairs and attach one prediction to each survivor."""
    if len(animals) < 2:
        return []
    candidates = enumerate_pairs(animals)
    if not candidates:
        # Missing a sex: nothing to enrich
        return []
    ranked = rank_pairs(candidates, limit)
    logger.debug(
        "Ranked %d of %d candidate pairs for %d animals",
        len(ranked),
        len(candidates),
        len(animals),
    )
    predictions = await gateway.predict_pairs(ranked)
    return [
        PairRecommendation(
            parent1=candidate.sire,
            parent2=candidate.dam,
            compatibility_score=candidate.compatibility_score,
            prediction=prediction,
        )
        for candidate, prediction in zip(ranked, predictions)
    ]


async def execute(uow: UnitOfWork, gateway: EnrichmentGateway) -> list[PairRecommendation]:
    animals = await uow.animals.list()
    return await recommend(animals, gateway)
