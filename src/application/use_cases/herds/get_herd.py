from __future__ import annotations

from uuid import UUID

from src.application.errors import NotFound
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.herd import Herd


async def execute(uow: UnitOfWork, herd_id: UUID) -> Herd:
    herd = await uow.herds.get(herd_id)
    if not herd:
        raise NotFound("Herd not found")
    return herd
