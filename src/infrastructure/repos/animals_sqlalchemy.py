from __future__ import annotations

from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import func

from src.application.errors import ConflictError, InfrastructureError
from src.application.interfaces.repositories.animals import AnimalRepository
from src.domain.models.animal import Animal
from src.domain.value_objects.sex import Sex
from src.infrastructure.db.orm.animal import AnimalORM


class AnimalsSQLAlchemyRepository(AnimalRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: AnimalORM) -> Animal:
        return Animal(
            id=orm.id,
            name=orm.name,
            species=orm.species,
            sex=Sex(orm.sex),
            horn_size=orm.horn_size,
            age=orm.age,
            health_notes=orm.health_notes,
            herd_id=orm.herd_id,
            sire_id=orm.sire_id,
            dam_id=orm.dam_id,
            deleted_at=orm.deleted_at,
            created_at=orm.created_at,
            updated_at=orm.updated_at,
            version=orm.version,
        )

    async def add(self, animal: Animal) -> Animal:
        orm = AnimalORM(
            id=animal.id,
            name=animal.name,
            species=animal.species,
            sex=animal.sex.value,
            horn_size=animal.horn_size,
            age=animal.age,
            health_notes=animal.health_notes,
            herd_id=animal.herd_id,
            sire_id=animal.sire_id,
            dam_id=animal.dam_id,
            deleted_at=animal.deleted_at,
            created_at=animal.created_at,
            updated_at=animal.updated_at,
            version=animal.version,
        )
        self.session.add(orm)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError("Failed to create animal due to constraint violation") from exc
        return self._to_domain(orm)

    async def get(self, animal_id: UUID) -> Animal | None:
        stmt = (
            select(AnimalORM)
            .where(AnimalORM.id == animal_id)
            .where(AnimalORM.deleted_at.is_(None))
        )
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def get_many(self, animal_ids: list[UUID]) -> list[Animal]:
        wanted = list(dict.fromkeys(animal_ids))
        if not wanted:
            return []
        stmt = (
            select(AnimalORM)
            .where(AnimalORM.id.in_(wanted))
            .where(AnimalORM.deleted_at.is_(None))
        )
        result = await self.session.execute(stmt)
        by_id = {row.id: self._to_domain(row) for row in result.scalars().all()}
        # Keep the caller's selection order
        return [by_id[animal_id] for animal_id in wanted if animal_id in by_id]

    async def list(
        self,
        *,
        herd_id: UUID | None = None,
        species: str | None = None,
        sex: str | None = None,
    ) -> list[Animal]:
        stmt = select(AnimalORM).where(AnimalORM.deleted_at.is_(None))
        if herd_id is not None:
            stmt = stmt.where(AnimalORM.herd_id == herd_id)
        if species:
            stmt = stmt.where(func.lower(AnimalORM.species) == species.strip().lower())
        if sex:
            stmt = stmt.where(AnimalORM.sex == sex)
        stmt = stmt.order_by(AnimalORM.created_at, AnimalORM.id)
        result = await self.session.execute(stmt)
        return [self._to_domain(item) for item in result.scalars().all()]

    async def update(
        self,
        animal_id: UUID,
        data: dict,
        expected_version: int,
    ) -> Animal | None:
        values = {**data, "version": expected_version + 1}
        if isinstance(values.get("sex"), Sex):
            values["sex"] = values["sex"].value
        stmt = (
            update(AnimalORM)
            .where(AnimalORM.id == animal_id)
            .where(AnimalORM.version == expected_version)
            .where(AnimalORM.deleted_at.is_(None))
            .values(**values)
            .returning(AnimalORM)
            .execution_options(populate_existing=True)
        )
        try:
            result = await self.session.execute(stmt)
        except IntegrityError as exc:
            raise ConflictError("Failed to update animal due to constraint violation") from exc
        orm = result.scalar_one_or_none()
        if not orm:
            return None
        return self._to_domain(orm)

    async def delete(self, animal_id: UUID) -> bool:
        stmt = (
            update(AnimalORM)
            .where(AnimalORM.id == animal_id)
            .where(AnimalORM.deleted_at.is_(None))
            .values(deleted_at=func.now(), version=AnimalORM.version + 1)
            .returning(AnimalORM.id)
        )
        try:
            result = await self.session.execute(stmt)
        except IntegrityError as exc:
            raise InfrastructureError("Failed to delete animal") from exc
        return result.scalar_one_or_none() is not None

    async def detach_from_herd(self, herd_id: UUID) -> int:
        stmt = (
            update(AnimalORM)
            .where(AnimalORM.herd_id == herd_id)
            .values(herd_id=None)
            .returning(AnimalORM.id)
        )
        try:
            result = await self.session.execute(stmt)
        except IntegrityError as exc:
            raise InfrastructureError("Failed to detach animals from herd") from exc
        return len(result.scalars().all())
