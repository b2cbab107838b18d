from __future__ import annotations

from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.herd import Herd


async def execute(uow: UnitOfWork) -> list[Herd]:
    return await uow.herds.list()
