from __future__ import annotations

from dataclasses import dataclass, field
from uuid import UUID

from src.application.errors import ConflictError, NotFound, ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.animals.create_animal import ensure_herd_exists
from src.domain.models.animal import Animal
from src.domain.value_objects.sex import Sex

UPDATABLE_FIELDS = (
    "name",
    "species",
    "sex",
    "horn_size",
    "age",
    "health_notes",
    "herd_id",
    # Genealogy fields
    "sire_id",
    "dam_id",
)
REQUIRED_FIELDS = ("name", "species", "sex")


@dataclass(slots=True)
class UpdateAnimalInput:
    version: int
    # Only keys present are changed; an explicit None clears an optional field
    changes: dict = field(default_factory=dict)


async def execute(
    uow: UnitOfWork,
    animal_id: UUID,
    payload: UpdateAnimalInput,
) -> Animal:
    if payload.version < 1:
        raise ValidationError("Invalid version value")
    existing = await uow.animals.get(animal_id)
    if not existing:
        raise NotFound("Animal not found")

    data: dict = {}
    for field_name in UPDATABLE_FIELDS:
        if field_name not in payload.changes:
            continue
        value = payload.changes[field_name]
        if field_name in REQUIRED_FIELDS and value is None:
            raise ValidationError(f"{field_name} cannot be empty")
        if isinstance(value, str) and field_name in ("name", "species"):
            value = value.strip()
            if not value:
                raise ValidationError(f"{field_name} cannot be empty")
        if field_name == "sex":
            try:
                value = Sex(value)
            except ValueError as exc:
                raise ValidationError("sex must be Male or Female") from exc
        data[field_name] = value
    if not data:
        return existing

    if animal_id in (data.get("sire_id"), data.get("dam_id")):
        raise ValidationError("An animal cannot be its own parent")
    sire_id = data.get("sire_id", existing.sire_id)
    dam_id = data.get("dam_id", existing.dam_id)
    if sire_id is not None and sire_id == dam_id:
        raise ValidationError("Sire and dam must be different animals")
    if "herd_id" in data:
        await ensure_herd_exists(uow, data["herd_id"])

    updated = await uow.animals.update(
        animal_id,
        data=data,
        expected_version=payload.version,
    )
    if not updated:
        raise ConflictError("Version mismatch while updating animal")
    await uow.commit()
    return updated
