from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from src.domain.value_objects.sex import Sex


class AnimalBase(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    species: str = Field(min_length=1, max_length=255)
    sex: Sex
    horn_size: float | None = Field(default=None, ge=0)
    age: int | None = Field(default=None, ge=0, le=30)
    health_notes: str | None = None
    herd_id: UUID | None = None

    # Genealogy fields
    sire_id: UUID | None = None
    dam_id: UUID | None = None

    @field_validator("name", "species")
    @classmethod
    def strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v


class AnimalCreate(AnimalBase):
    @model_validator(mode="after")
    def check_parents(self) -> AnimalCreate:
        if self.sire_id is not None and self.sire_id == self.dam_id:
            raise ValueError("sire_id and dam_id must be different animals")
        return self


class AnimalUpdate(BaseModel):
    version: int = Field(ge=1)
    name: str | None = Field(default=None, min_length=1, max_length=255)
    species: str | None = Field(default=None, min_length=1, max_length=255)
    sex: Sex | None = None
    horn_size: float | None = Field(default=None, ge=0)
    age: int | None = Field(default=None, ge=0, le=30)
    health_notes: str | None = None
    herd_id: UUID | None = None

    # Genealogy fields
    sire_id: UUID | None = None
    dam_id: UUID | None = None

    def changes(self) -> dict:
        """Fields explicitly sent by the client, excluding the version."""
        return self.model_dump(exclude_unset=True, exclude={"version"})


class AnimalResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    species: str
    sex: Sex
    horn_size: float | None
    age: int | None
    health_notes: str | None
    herd_id: UUID | None

    # Genealogy fields
    sire_id: UUID | None
    dam_id: UUID | None

    created_at: datetime
    updated_at: datetime
    version: int


class LineageNodeResponse(BaseModel):
    animal: AnimalResponse
    level: int
    children: list[LineageNodeResponse] = Field(default_factory=list)

    @classmethod
    def from_node(cls, node) -> LineageNodeResponse:
        # Iterative to keep deep pedigrees off the Python call stack
        root = cls(animal=AnimalResponse.model_validate(node.animal), level=node.level)
        stack = [(node, root)]
        while stack:
            current, response = stack.pop()
            for child in current.children:
                child_response = cls(
                    animal=AnimalResponse.model_validate(child.animal), level=child.level
                )
                response.children.append(child_response)
                stack.append((child, child_response))
        return root


LineageNodeResponse.model_rebuild()
