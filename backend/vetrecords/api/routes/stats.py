"""Module: stats."""

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta

from fastapi import APIRouter, Depends, Request
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from vetrecords.api.routes.deps import get_db
from vetrecords.api.routes.serializers import record_to_dict
from vetrecords.db.models.medical_record import MedicalRecord
from vetrecords.db.models.pet import Pet

router = APIRouter()


def today() -> date:
    return datetime.now(UTC).date()


def group_severe_allergies(rows) -> list[dict]:
    """Fold (pet_id, pet_name, allergy_name, reactions) rows into one entry per pet.

    Pets keep the order in which they first appear in ``rows``.
    """
    by_pet: dict[int, dict] = {}
    for r in rows:
        entry = by_pet.get(r["pet_id"])
        if entry is None:
            entry = {"pet_id": r["pet_id"], "pet_name": r["pet_name"], "allergies": []}
            by_pet[r["pet_id"]] = entry
        entry["allergies"].append({"name": r["allergy_name"], "reactions": r["reactions"]})
    return list(by_pet.values())


def _count_records(db: Session, record_type: str) -> int:
    return db.execute(
        select(func.count(MedicalRecord.id)).where(MedicalRecord.record_type == record_type)
    ).scalar_one()


# Endpoint: dashboard aggregates.
@router.get("", summary="Dashboard statistics")
def dashboard_stats(request: Request, db: Session = Depends(get_db)):
    settings = request.app.state.settings

    total_pets = db.execute(select(func.count(Pet.id))).scalar_one()

    pets_by_type = db.execute(
        select(Pet.animal_type.label("animal_type"), func.count(Pet.id).label("count"))
        .group_by(Pet.animal_type)
    ).mappings().all()

    # Window has no lower bound: overdue vaccines are listed first.
    cutoff = today() + timedelta(days=settings.upcoming_vaccine_window_days)
    upcoming_rows = db.execute(
        select(MedicalRecord, Pet.name.label("pet_name"))
        .select_from(MedicalRecord)
        .join(Pet, Pet.id == MedicalRecord.pet_id)
        .where(
            MedicalRecord.record_type == "vaccine",
            MedicalRecord.next_due_date.is_not(None),
            MedicalRecord.next_due_date <= cutoff,
        )
        .order_by(MedicalRecord.next_due_date, MedicalRecord.id)
        .limit(settings.upcoming_vaccine_limit)
    ).all()

    upcoming_vaccines = []
    for record, pet_name in upcoming_rows:
        d = record_to_dict(record)
        d["pet_name"] = pet_name
        upcoming_vaccines.append(d)

    severe_rows = db.execute(
        select(
            Pet.id.label("pet_id"),
            Pet.name.label("pet_name"),
            MedicalRecord.name.label("allergy_name"),
            MedicalRecord.reactions.label("reactions"),
        )
        .select_from(MedicalRecord)
        .join(Pet, Pet.id == MedicalRecord.pet_id)
        .where(
            MedicalRecord.record_type == "allergy",
            MedicalRecord.severity == "severe",
        )
        .order_by(Pet.name, MedicalRecord.name)
    ).mappings().all()

    return {
        "totalPets": total_pets,
        "petsByType": [dict(r) for r in pets_by_type],
        "totalVaccines": _count_records(db, "vaccine"),
        "totalAllergies": _count_records(db, "allergy"),
        "upcomingVaccines": upcoming_vaccines,
        "severeAllergies": group_severe_allergies(severe_rows),
    }
