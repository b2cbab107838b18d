from __future__ import annotations

from uuid import UUID

from src.application.errors import ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.animal import Animal
from src.domain.value_objects.sex import Sex


async def execute(
    uow: UnitOfWork,
    *,
    herd_id: UUID | None = None,
    species: str | None = None,
    sex: str | None = None,
) -> list[Animal]:
    if sex is not None:
        try:
            sex = Sex(sex).value
        except ValueError as exc:
            raise ValidationError("sex must be Male or Female") from exc
    return await uow.animals.list(herd_id=herd_id, species=species, sex=sex)
