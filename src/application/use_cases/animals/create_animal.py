from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from src.application.errors import NotFound, ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.animal import Animal
from src.domain.value_objects.sex import Sex


@dataclass(slots=True)
class CreateAnimalInput:
    name: str
    species: str
    sex: Sex
    horn_size: float | None = None
    age: int | None = None
    health_notes: str | None = None
    herd_id: UUID | None = None
    # Genealogy fields
    sire_id: UUID | None = None
    dam_id: UUID | None = None


async def ensure_herd_exists(uow: UnitOfWork, herd_id: UUID | None) -> None:
    if herd_id is not None and not await uow.herds.get(herd_id):
        raise NotFound("Herd not found")


async def execute(uow: UnitOfWork, payload: CreateAnimalInput) -> Animal:
    if not payload.name.strip():
        raise ValidationError("Animal name is required")
    if not payload.species.strip():
        raise ValidationError("Animal species is required")
    if payload.sire_id is not None and payload.sire_id == payload.dam_id:
        raise ValidationError("Sire and dam must be different animals")
    await ensure_herd_exists(uow, payload.herd_id)
    animal = Animal.create(
        name=payload.name.strip(),
        species=payload.species.strip(),
        sex=payload.sex,
        horn_size=payload.horn_size,
        age=payload.age,
        health_notes=payload.health_notes,
        herd_id=payload.herd_id,
        sire_id=payload.sire_id,
        dam_id=payload.dam_id,
    )
    created = await uow.animals.add(animal)
    await uow.commit()
    return created
