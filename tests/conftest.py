from __future__ import annotations

import os
import sys
from collections.abc import AsyncIterator
from pathlib import Path
from typing import Any
from uuid import UUID

import pytest
from httpx import ASGITransport, AsyncClient

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///default.db")

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(PROJECT_ROOT))

# ruff: noqa: E402
from src.config.settings import Settings
from src.domain.models.animal import Animal
from src.domain.value_objects.sex import Sex
from src.infrastructure.db.base import Base
from src.infrastructure.db.orm import animal, herd  # noqa: F401
from src.interfaces.http.main import create_app

PAIR_RESPONSE: dict[str, Any] = {
    "predictedTraits": {"estimatedHornSize": 12.5, "traitStrength": "Excellent"},
    "confidence": 0.92,
    "explanation": "Both parents carry strong horn genetics.",
}

HERD_RESPONSE: dict[str, Any] = {
    "predictedOutcomes": {
        "estimatedOffspringCount": 3,
        "averageHornSize": 11.0,
        "traitStrength": "Strong",
        "geneticDiversity": "Fair",
    },
    "confidence": 0.85,
    "explanation": "A compact, healthy herd.",
    "breedingStrategy": "Rotate sires each season.",
}


class StubAdvisor:
    """Records requests and answers with canned JSON, or raises ``error``."""

    def __init__(
        self,
        *,
        pair_response: Any = None,
        herd_response: Any = None,
        error: Exception | None = None,
    ) -> None:
        self.pair_response = PAIR_RESPONSE if pair_response is None else pair_response
        self.herd_response = HERD_RESPONSE if herd_response is None else herd_response
        self.error = error
        self.pair_calls: list = []
        self.herd_calls: list = []

    async def predict_offspring(self, request):
        self.pair_calls.append(request)
        if self.error is not None:
            raise self.error
        return self.pair_response

    async def analyze_herd(self, request):
        self.herd_calls.append(request)
        if self.error is not None:
            raise self.error
        return self.herd_response


@pytest.fixture()
def make_animal():
    def factory(
        name: str,
        sex: Sex | str = Sex.MALE,
        *,
        species: str = "Cattle",
        horn_size: float | None = None,
        age: int | None = None,
        sire_id: UUID | None = None,
        dam_id: UUID | None = None,
        health_notes: str | None = None,
    ) -> Animal:
        return Animal.create(
            name=name,
            species=species,
            sex=sex,
            horn_size=horn_size,
            age=age,
            sire_id=sire_id,
            dam_id=dam_id,
            health_notes=health_notes,
        )

    return factory


@pytest.fixture()
def stub_advisor() -> StubAdvisor:
    return StubAdvisor()


@pytest.fixture()
def test_settings(tmp_path) -> Settings:
    db_path = tmp_path / "test.db"
    return Settings.model_validate(
        {
            "database_url": f"sqlite+aiosqlite:///{db_path}",
            "log_level": "INFO",
            "environment": "test",
            "enrichment_timeout_seconds": 2.0,
        }
    )


@pytest.fixture()
def app(test_settings: Settings, stub_advisor: StubAdvisor):
    return create_app(settings=test_settings, advisor=stub_advisor)


@pytest.fixture()
async def client(app) -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        engine = app.state.engine
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
            await conn.run_sync(Base.metadata.create_all)
        yield client
    await app.state.engine.dispose()
