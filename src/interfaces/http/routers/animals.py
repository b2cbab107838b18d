from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from src.application.use_cases.animals import (
    create_animal,
    delete_animal,
    get_animal,
    get_lineage,
    list_animals,
    update_animal,
)
from src.domain.value_objects.sex import Sex
from src.interfaces.http.deps import get_uow
from src.interfaces.http.schemas.animals import (
    AnimalCreate,
    AnimalResponse,
    AnimalUpdate,
    LineageNodeResponse,
)

router = APIRouter(prefix="/animals", tags=["animals"])


@router.get("/", response_model=list[AnimalResponse])
async def list_animals_endpoint(
    herd_id: UUID | None = Query(None),
    species: str | None = Query(None, description="Case-insensitive species filter"),
    sex: Sex | None = Query(None),
    uow=Depends(get_uow),
) -> list[AnimalResponse]:
    items = await list_animals.execute(
        uow,
        herd_id=herd_id,
        species=species,
        sex=sex.value if sex else None,
    )
    return [AnimalResponse.model_validate(item) for item in items]


@router.get("/lineage", response_model=list[LineageNodeResponse])
async def get_lineage_endpoint(
    herd_id: UUID | None = Query(None),
    uow=Depends(get_uow),
) -> list[LineageNodeResponse]:
    forest = await get_lineage.execute(uow, herd_id=herd_id)
    return [LineageNodeResponse.from_node(node) for node in forest]


@router.post("/", response_model=AnimalResponse, status_code=status.HTTP_201_CREATED)
async def create_animal_endpoint(
    payload: AnimalCreate,
    uow=Depends(get_uow),
) -> AnimalResponse:
    result = await create_animal.execute(
        uow,
        create_animal.CreateAnimalInput(
            name=payload.name,
            species=payload.species,
            sex=payload.sex,
            horn_size=payload.horn_size,
            age=payload.age,
            health_notes=payload.health_notes,
            herd_id=payload.herd_id,
            # Genealogy fields
            sire_id=payload.sire_id,
            dam_id=payload.dam_id,
        ),
    )
    return AnimalResponse.model_validate(result)


@router.get("/{animal_id}", response_model=AnimalResponse)
async def get_animal_endpoint(
    animal_id: UUID,
    uow=Depends(get_uow),
) -> AnimalResponse:
    result = await get_animal.execute(uow, animal_id)
    return AnimalResponse.model_validate(result)


@router.put("/{animal_id}", response_model=AnimalResponse)
async def update_animal_endpoint(
    animal_id: UUID,
    payload: AnimalUpdate,
    uow=Depends(get_uow),
) -> AnimalResponse:
    result = await update_animal.execute(
        uow,
        animal_id,
        update_animal.UpdateAnimalInput(version=payload.version, changes=payload.changes()),
    )
    return AnimalResponse.model_validate(result)


@router.delete("/{animal_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_animal_endpoint(
    animal_id: UUID,
    uow=Depends(get_uow),
) -> Response:
    await delete_animal.execute(uow, animal_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
