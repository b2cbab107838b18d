from __future__ import annotations

from typing import Protocol
from uuid import UUID

from src.domain.models.animal import Animal


class AnimalRepository(Protocol):
    async def add(self, animal: Animal) -> Animal: ...

    async def get(self, animal_id: UUID) -> Animal | None: ...

    async def get_many(self, animal_ids: list[UUID]) -> list[Animal]:
        """Return existing animals in the order of ``animal_ids``; unknown ids are skipped."""
        ...

    async def list(
        self,
        *,
        herd_id: UUID | None = None,
        species: str | None = None,
        sex: str | None = None,
    ) -> list[Animal]: ...

    async def update(
        self,
        animal_id: UUID,
        data: dict,
        expected_version: int,
    ) -> Animal | None: ...

    async def delete(self, animal_id: UUID) -> bool: ...

    async def detach_from_herd(self, herd_id: UUID) -> int: ...
