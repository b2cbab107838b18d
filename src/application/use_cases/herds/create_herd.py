from __future__ import annotations

from dataclasses import dataclass

from src.application.errors import ConflictError, ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.herd import Herd


@dataclass(slots=True)
class CreateHerdInput:
    name: str
    description: str | None = None


async def execute(uow: UnitOfWork, payload: CreateHerdInput) -> Herd:
    name = payload.name.strip()
    if not name:
        raise ValidationError("Herd name is required")
    # Enforce unique name (case-insensitive)
    if await uow.herds.find_by_name(name):
        raise ConflictError("Herd name already exists")
    created = await uow.herds.add(Herd.create(name, description=payload.description))
    await uow.commit()
    return created
