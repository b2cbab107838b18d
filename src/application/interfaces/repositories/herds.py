from __future__ import annotations

from typing import Protocol
from uuid import UUID

from src.domain.models.herd import Herd


class HerdRepository(Protocol):
    async def add(self, herd: Herd) -> Herd: ...

    async def get(self, herd_id: UUID) -> Herd | None: ...

    async def find_by_name(self, name: str) -> Herd | None: ...

    async def list(self) -> list[Herd]: ...

    async def update(self, herd_id: UUID, data: dict) -> Herd | None: ...

    async def delete(self, herd_id: UUID) -> bool: ...
