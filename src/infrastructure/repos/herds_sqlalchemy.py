from __future__ import annotations

from uuid import UUID

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.errors import ConflictError, InfrastructureError
from src.application.interfaces.repositories.herds import HerdRepository
from src.domain.models.herd import Herd
from src.infrastructure.db.orm.herd import HerdORM


class HerdsSQLAlchemyRepository(HerdRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: HerdORM) -> Herd:
        return Herd(
            id=orm.id,
            name=orm.name,
            description=orm.description,
            created_at=orm.created_at,
        )

    async def add(self, herd: Herd) -> Herd:
        orm = HerdORM(
            id=herd.id,
            name=herd.name,
            description=herd.description,
            created_at=herd.created_at,
        )
        self.session.add(orm)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError("Herd name already exists") from exc
        return self._to_domain(orm)

    async def get(self, herd_id: UUID) -> Herd | None:
        res = await self.session.execute(select(HerdORM).where(HerdORM.id == herd_id))
        orm = res.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def find_by_name(self, name: str) -> Herd | None:
        stmt = select(HerdORM).where(func.lower(HerdORM.name) == name.strip().lower())
        res = await self.session.execute(stmt)
        orm = res.scalars().first()
        return self._to_domain(orm) if orm else None

    async def list(self) -> list[Herd]:
        res = await self.session.execute(select(HerdORM).order_by(HerdORM.name))
        return [self._to_domain(x) for x in res.scalars().all()]

    async def update(self, herd_id: UUID, data: dict) -> Herd | None:
        stmt = (
            update(HerdORM)
            .where(HerdORM.id == herd_id)
            .values(**data)
            .returning(HerdORM)
            .execution_options(populate_existing=True)
        )
        try:
            res = await self.session.execute(stmt)
        except IntegrityError as exc:
            raise ConflictError("Herd name already exists") from exc
        orm = res.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def delete(self, herd_id: UUID) -> bool:
        stmt = delete(HerdORM).where(HerdORM.id == herd_id).returning(HerdORM.id)
        try:
            res = await self.session.execute(stmt)
        except IntegrityError as exc:
            raise InfrastructureError("Failed to delete herd") from exc
        return res.scalar_one_or_none() is not None
