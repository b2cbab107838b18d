#!/usr/bin/env python3
"""
Script to seed a small demo herd with recorded parentage.

This script:
1. Creates a herd (or reuses one with the same name)
2. Adds founder animals and a generation of offspring with sire/dam links
3. Prints the resulting pair recommendations using the local fallback predictions

Usage:
  python scripts/seed_demo_herd.py [--herd-name "Demo Herd"]
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.application.services.enrichment import EnrichmentGateway
from src.application.use_cases.animals import create_animal
from src.application.use_cases.breeding import recommend_pairs
from src.application.use_cases.herds import create_herd
from src.config.settings import get_settings
from src.domain.value_objects.sex import Sex
from src.infrastructure.db.session import (
    SQLAlchemyUnitOfWork,
    create_engine,
    create_session_factory,
)


async def seed(herd_name: str) -> None:
    settings = get_settings()
    engine = create_engine(settings.database_url)
    session_factory = create_session_factory(engine)

    try:
        uow = SQLAlchemyUnitOfWork(session_factory)
        async with uow:
            herd = await uow.herds.find_by_name(herd_name)
            if herd:
                print(f"ℹ️  Herd '{herd_name}' already exists (ID: {herd.id})")
            else:
                herd = await create_herd.execute(uow, create_herd.CreateHerdInput(name=herd_name))
                print(f"✅ Created herd '{herd.name}' (ID: {herd.id})")

            def animal(name, sex, horn, age, **parents):
                return create_animal.CreateAnimalInput(
                    name=name,
                    species="Cattle",
                    sex=sex,
                    horn_size=horn,
                    age=age,
                    herd_id=herd.id,
                    **parents,
                )

            duke = await create_animal.execute(uow, animal("Duke", Sex.MALE, 12.0, 6))
            bella = await create_animal.execute(uow, animal("Bella", Sex.FEMALE, 11.5, 5))
            await create_animal.execute(uow, animal("Rex", Sex.MALE, 13.0, 4))
            await create_animal.execute(uow, animal("Daisy", Sex.FEMALE, 10.0, 7))
            await create_animal.execute(
                uow, animal("Junior", Sex.MALE, 9.0, 2, sire_id=duke.id, dam_id=bella.id)
            )
            await create_animal.execute(
                uow, animal("Clover", Sex.FEMALE, 8.5, 2, sire_id=duke.id)
            )
            print("✅ Seeded 6 animals")

            gateway = EnrichmentGateway.from_settings(settings, advisor=None)
            recommendations = await recommend_pairs.execute(uow, gateway)
            print("\nTop breeding pairs:")
            for rec in recommendations:
                traits = rec.prediction.predicted_traits
                print(
                    f"  {rec.parent1.name} x {rec.parent2.name}: "
                    f"{rec.compatibility_score:.1f} ({traits.trait_strength})"
                )
    finally:
        await engine.dispose()


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed a demo herd")
    parser.add_argument("--herd-name", default="Demo Herd", help="Name of the herd to create")
    args = parser.parse_args()
    asyncio.run(seed(args.herd_name))


if __name__ == "__main__":
    main()
