from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from src.application.use_cases.animals import list_animals
from src.application.use_cases.herds import (
    create_herd,
    delete_herd,
    get_herd,
    list_herds,
    update_herd,
)
from src.interfaces.http.deps import get_uow
from src.interfaces.http.schemas.animals import AnimalResponse
from src.interfaces.http.schemas.herds import HerdCreate, HerdResponse, HerdUpdate

router = APIRouter(prefix="/herds", tags=["herds"])


@router.get("/", response_model=list[HerdResponse])
async def list_herds_endpoint(uow=Depends(get_uow)) -> list[HerdResponse]:
    herds = await list_herds.execute(uow)
    return [HerdResponse.model_validate(x) for x in herds]


@router.post("/", response_model=HerdResponse, status_code=status.HTTP_201_CREATED)
async def create_herd_endpoint(payload: HerdCreate, uow=Depends(get_uow)) -> HerdResponse:
    created = await create_herd.execute(
        uow, create_herd.CreateHerdInput(name=payload.name, description=payload.description)
    )
    return HerdResponse.model_validate(created)


@router.get("/{herd_id}", response_model=HerdResponse)
async def get_herd_endpoint(herd_id: UUID, uow=Depends(get_uow)) -> HerdResponse:
    herd = await get_herd.execute(uow, herd_id)
    return HerdResponse.model_validate(herd)


@router.get("/{herd_id}/animals", response_model=list[AnimalResponse])
async def list_herd_animals_endpoint(herd_id: UUID, uow=Depends(get_uow)) -> list[AnimalResponse]:
    await get_herd.execute(uow, herd_id)
    animals = await list_animals.execute(uow, herd_id=herd_id)
    return [AnimalResponse.model_validate(a) for a in animals]


@router.put("/{herd_id}", response_model=HerdResponse)
async def update_herd_endpoint(
    herd_id: UUID,
    payload: HerdUpdate,
    uow=Depends(get_uow),
) -> HerdResponse:
    updated = await update_herd.execute(
        uow,
        herd_id,
        update_herd.UpdateHerdInput(name=payload.name, description=payload.description),
    )
    return HerdResponse.model_validate(updated)


@router.delete("/{herd_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_herd_endpoint(herd_id: UUID, uow=Depends(get_uow)) -> Response:
    await delete_herd.execute(uow, herd_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
