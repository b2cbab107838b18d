from __future__ import annotations

import logging
from typing import Sequence
from uuid import UUID

from src.application.errors import ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.services.enrichment import EnrichmentGateway
from src.domain.breeding.pairing import MIN_HERD_SIZE, build_herd_candidate
from src.domain.models.animal import Animal
from src.domain.models.recommendation import HerdRecommendation

logger = logging.getLogger(__name__)


async def recommend(
    animals: Sequence[Animal], gateway: EnrichmentGateway
) -> list[HerdRecommendation]:
    """Analyze the selection as one herd.

    Related animals are reported in the analysis but stay in the herd.
    """
    candidate = build_herd_candidate(animals)
    if candidate is None:
        return []
    if candidate.has_related_animals:
        logger.info(
            "Herd selection contains %d related pair(s)", len(candidate.related_pairs)
        )
    analysis = await gateway.analyze_herd(candidate)
    return [
        HerdRecommendation(
            herd_animals=list(candidate.animals),
            herd_score=candidate.herd_score,
            analysis=analysis,
        )
    ]


async def execute(
    uow: UnitOfWork, gateway: EnrichmentGateway, animal_ids: list[UUID]
) -> list[HerdRecommendation]:
    if len(set(animal_ids)) < MIN_HERD_SIZE:
        raise ValidationError(f"At least {MIN_HERD_SIZE} animals required for breeding analysis")
    # Unknown or deleted ids are skipped; too few survivors yields no recommendation
    animals = await uow.animals.get_many(animal_ids)
    return await recommend(animals, gateway)
