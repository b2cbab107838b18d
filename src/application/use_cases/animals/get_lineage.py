from __future__ import annotations

from uuid import UUID

from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.breeding.lineage import LineageNode, build_lineage_forest


async def execute(uow: UnitOfWork, *, herd_id: UUID | None = None) -> list[LineageNode]:
    animals = await uow.animals.list(herd_id=herd_id)
    return build_lineage_forest(animals)
