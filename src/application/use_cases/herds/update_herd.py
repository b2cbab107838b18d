from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from src.application.errors import ConflictError, NotFound, ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.herd import Herd


@dataclass(slots=True)
class UpdateHerdInput:
    name: str | None = None
    description: str | None = None


async def execute(uow: UnitOfWork, herd_id: UUID, payload: UpdateHerdInput) -> Herd:
    existing = await uow.herds.get(herd_id)
    if not existing:
        raise NotFound("Herd not found")
    updates: dict = {}
    if payload.name is not None:
        name = payload.name.strip()
        if not name:
            raise ValidationError("Herd name cannot be empty")
        clash = await uow.herds.find_by_name(name)
        if clash and clash.id != herd_id:
            raise ConflictError("Herd name already exists")
        updates["name"] = name
    if payload.description is not None:
        updates["description"] = payload.description
    if not updates:
        return existing
    updated = await uow.herds.update(herd_id, updates)
    if not updated:
        raise NotFound("Herd not found")
    await uow.commit()
    return updated
