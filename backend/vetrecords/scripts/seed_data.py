"""Module: seed_data.

Populate a database with fake pets and medical records for dashboard demos:
    python -m vetrecords.scripts.seed_data --pets 40 --reset
"""

import argparse
import random
from datetime import UTC, datetime, timedelta

from faker import Faker
from sqlalchemy import delete

from vetrecords.core.config import settings
from vetrecords.db.init_db import init_db
from vetrecords.db.models.medical_record import MedicalRecord
from vetrecords.db.models.pet import Pet
from vetrecords.db.session import build_engine, build_session_factory

fake = Faker()

ANIMAL_TYPES = ["Dog", "Cat", "Bird", "Rabbit", "Hamster", "Fish", "Other"]

DOG_VAX = ["DHPP", "Rabies", "Bordetella", "Leptospirosis"]
CAT_VAX = ["FVRCP", "Rabies", "FeLV"]
OTHER_VAX = ["Rabies"]

ALLERGENS = [
    ("Peanuts", "Hives"),
    ("Pollen", None),
    ("Chicken", "Itching"),
    ("Beef", "Vomiting"),
    ("Penicillin", "Swelling"),
    ("Flea saliva", "Hair loss"),
    ("Dust mites", "Sneezing"),
]


def reset_db(session) -> None:
    # Records first so the delete also works without FK cascades.
    session.execute(delete(MedicalRecord))
    session.execute(delete(Pet))
    session.commit()


def seed_pets(session, n: int = 40) -> list[Pet]:
    pets: list[Pet] = []

    for _ in range(n):
        pets.append(Pet(
            name=fake.first_name(),
            animal_type=random.choice(ANIMAL_TYPES),
            owner_name=fake.name(),
            date_of_birth=fake.date_between(start_date="-15y", end_date="today"),
        ))

    session.add_all(pets)
    session.commit()
    return pets


def _vaccines_for(animal_type: str) -> list[str]:
    if animal_type == "Dog":
        return DOG_VAX
    if animal_type == "Cat":
        return CAT_VAX
    return OTHER_VAX


def seed_records(session, pets: list[Pet]) -> tuple[int, int]:
    # Due dates straddle today so the dashboard shows overdue, upcoming and
    # far-off vaccines. Names are sampled without replacement per pet.
    today = datetime.now(UTC).date()
    records: list[MedicalRecord] = []
    vaccine_n = allergy_n = 0

    for p in pets:
        pool = _vaccines_for(p.animal_type)
        for vaccine_name in random.sample(pool, k=random.randint(0, len(pool))):
            administered = fake.date_between(start_date="-2y", end_date="today")
            due = today + timedelta(days=random.randint(-30, 180)) if random.random() < 0.8 else None
            records.append(MedicalRecord(
                pet_id=p.id,
                record_type="vaccine",
                name=vaccine_name,
                date_administered=administered,
                next_due_date=due,
            ))
            vaccine_n += 1

        if random.random() < 0.4:
            for allergen, reactions in random.sample(ALLERGENS, k=random.randint(1, 2)):
                records.append(MedicalRecord(
                    pet_id=p.id,
                    record_type="allergy",
                    name=allergen,
                    reactions=reactions,
                    severity=random.choice(["mild", "severe"]),
                ))
                allergy_n += 1

    session.add_all(records)
    session.commit()
    return (vaccine_n, allergy_n)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Seed the vet records database with fake data")
    parser.add_argument("--pets", type=int, default=40, help="number of pets to create")
    parser.add_argument("--reset", action="store_true", help="delete existing pets and records first")
    parser.add_argument("--database-url", default=settings.database_url)
    args = parser.parse_args(argv)

    engine = build_engine(args.database_url)
    init_db(engine)
    session = build_session_factory(engine)()
    try:
        if args.reset:
            print("Clearing pets and medical records...")
            reset_db(session)

        print(f"Seeding pets ({args.pets})...")
        pets = seed_pets(session, args.pets)

        print("Seeding vaccines + allergies...")
        vaccine_n, allergy_n = seed_records(session, pets)

        print(f"Done. pets={len(pets)}, vaccines={vaccine_n}, allergies={allergy_n}")
    finally:
        session.close()
        engine.dispose()


if __name__ == "__main__":
    main()
