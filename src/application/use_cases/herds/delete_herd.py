from __future__ import annotations

import logging
from uuid import UUID

from src.application.errors import NotFound
from src.application.interfaces.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


async def execute(uow: UnitOfWork, herd_id: UUID) -> None:
    """Delete a herd; its animals are detached, never deleted."""
    if not await uow.herds.get(herd_id):
        raise NotFound("Herd not found")
    detached = await uow.animals.detach_from_herd(herd_id)
    await uow.herds.delete(herd_id)
    await uow.commit()
    logger.info("Deleted herd %s, detached %d animals", herd_id, detached)
