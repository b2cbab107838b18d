from __future__ import annotations

from fastapi import APIRouter, Depends

from src.application.services.enrichment import EnrichmentGateway
from src.application.use_cases.breeding import recommend_herd, recommend_pairs
from src.interfaces.http.deps import get_enrichment_gateway, get_uow
from src.interfaces.http.schemas.recommendations import (
    HerdRecommendationRequest,
    HerdRecommendationResponse,
    PairRecommendationResponse,
)

router = APIRouter(prefix="/recommendations", tags=["recommendations"])


@router.post("/pairs", response_model=list[PairRecommendationResponse])
async def recommend_pairs_endpoint(
    uow=Depends(get_uow),
    gateway: EnrichmentGateway = Depends(get_enrichment_gateway),
) -> list[PairRecommendationResponse]:
    """Top breeding pairs across all recorded animals; empty when no pair is possible."""
    recommendations = await recommend_pairs.execute(uow, gateway)
    return [PairRecommendationResponse.model_validate(r) for r in recommendations]


@router.post("/herd", response_model=list[HerdRecommendationResponse])
async def recommend_herd_endpoint(
    payload: HerdRecommendationRequest,
    uow=Depends(get_uow),
    gateway: EnrichmentGateway = Depends(get_enrichment_gateway),
) -> list[HerdRecommendationResponse]:
    """Analyze the selected animals as one breeding herd."""
    recommendations = await recommend_herd.execute(uow, gateway, payload.animal_ids)
    return [HerdRecommendationResponse.model_validate(r) for r in recommendations]
