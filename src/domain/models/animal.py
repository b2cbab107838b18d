from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID, uuid4

from src.domain.value_objects.sex import Sex


@dataclass(slots=True)
class Animal:
    id: UUID
    name: str
    species: str
    sex: Sex
    horn_size: float | None = None
    age: int | None = None
    health_notes: str | None = None
    herd_id: UUID | None = None

    # Genealogy fields; weak references that may point to deleted animals
    sire_id: UUID | None = None
    dam_id: UUID | None = None

    deleted_at: datetime | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    version: int = 1

    @classmethod
    def create(
        cls,
        name: str,
        species: str,
        sex: Sex | str,
        horn_size: float | None = None,
        age: int | None = None,
        health_notes: str | None = None,
        herd_id: UUID | None = None,
        sire_id: UUID | None = None,
        dam_id: UUID | None = None,
    ) -> Animal:
        now = datetime.now(timezone.utc)
        return cls(
            id=uuid4(),
            name=name,
            species=species,
            sex=Sex(sex),
            horn_size=horn_size,
            age=age,
            health_notes=health_notes,
            herd_id=herd_id,
            sire_id=sire_id,
            dam_id=dam_id,
            created_at=now,
            updated_at=now,
            version=1,
        )

    @property
    def is_male(self) -> bool:
        return self.sex is Sex.MALE

    @property
    def is_female(self) -> bool:
        return self.sex is Sex.FEMALE

    def bump_version(self) -> None:
        self.version += 1
        self.updated_at = datetime.now(timezone.utc)
