"""Module: pets."""

from __future__ import annotations

import logging
import re

from fastapi import APIRouter, Depends, Query, Response
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy import desc, select
from sqlalchemy.orm import Session

from vetrecords.api.routes.deps import get_db
from vetrecords.api.routes.serializers import (
    normalize_optional,
    parse_date,
    pet_to_dict,
    record_to_dict,
)
from vetrecords.core.errors import NotFoundError, ValidationError
from vetrecords.db.models.medical_record import MedicalRecord
from vetrecords.db.models.pet import Pet

logger = logging.getLogger(__name__)

router = APIRouter()

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9._-]")


class PetPayload(BaseModel):
    name: str | None = None
    animal_type: str | None = None
    owner_name: str | None = None
    date_of_birth: str | None = None


# -------------------------
# Helpers
# -------------------------
def _get_pet_or_404(db: Session, pet_id: int) -> Pet:
    pet = db.get(Pet, pet_id)
    if not pet:
        raise NotFoundError("Pet not found")
    return pet


def _validated_fields(payload: PetPayload) -> dict:
    # All four fields are mandatory; a future date_of_birth is accepted.
    name = normalize_optional(payload.name)
    animal_type = normalize_optional(payload.animal_type)
    owner_name = normalize_optional(payload.owner_name)
    dob = normalize_optional(payload.date_of_birth)
    if not name or not animal_type or not owner_name or not dob:
        raise ValidationError("All fields are required")

    return {
        "name": name,
        "animal_type": animal_type,
        "owner_name": owner_name,
        "date_of_birth": parse_date(dob, "date_of_birth"),
    }


def export_filename(pet_name: str) -> str:
    safe = _UNSAFE_FILENAME_CHARS.sub("_", pet_name) or "pet"
    return f"{safe}_medical_records.json"


# -------------------------
# Endpoints
# -------------------------

@router.get("", summary="List pets (search by name, filter by type)")
def list_pets(
    search: str | None = Query(default=None),
    animal_type: str | None = Query(default=None),
    db: Session = Depends(get_db),
):
    stmt = select(Pet)

    if search:
        stmt = stmt.where(Pet.name.like(f"%{search}%"))
    if animal_type:
        stmt = stmt.where(Pet.animal_type == animal_type)

    stmt = stmt.order_by(desc(Pet.created_at), desc(Pet.id))

    pets = db.execute(stmt).scalars().all()
    return [pet_to_dict(p) for p in pets]


@router.get("/{pet_id}", summary="Get pet detail with medical records")
def get_pet(pet_id: int, db: Session = Depends(get_db)):
    pet = _get_pet_or_404(db, pet_id)

    records = db.execute(
        select(MedicalRecord)
        .where(MedicalRecord.pet_id == pet_id)
        .order_by(desc(MedicalRecord.created_at), desc(MedicalRecord.id))
    ).scalars().all()

    out = pet_to_dict(pet)
    out["records"] = [record_to_dict(r) for r in records]
    return out


@router.post("", status_code=201, summary="Create pet")
def create_pet(payload: PetPayload, db: Session = Depends(get_db)):
    pet = Pet(**_validated_fields(payload))
    db.add(pet)
    db.commit()
    db.refresh(pet)

    logger.info("Created pet %s (%s)", pet.id, pet.name)
    return pet_to_dict(pet)


@router.put("/{pet_id}", summary="Update pet details")
def update_pet(pet_id: int, payload: PetPayload, db: Session = Depends(get_db)):
    fields = _validated_fields(payload)
    pet = _get_pet_or_404(db, pet_id)

    for key, value in fields.items():
        setattr(pet, key, value)

    db.commit()
    db.refresh(pet)

    logger.info("Updated pet %s", pet.id)
    return pet_to_dict(pet)


@router.delete("/{pet_id}", status_code=204, summary="Delete pet and its records")
def delete_pet(pet_id: int, db: Session = Depends(get_db)):
    pet = _get_pet_or_404(db, pet_id)

    # Records go with the pet through the ON DELETE CASCADE foreign key.
    db.delete(pet)
    db.commit()

    logger.info("Deleted pet %s", pet_id)
    return Response(status_code=204)


@router.get("/{pet_id}/export", summary="Download pet with all medical records")
def export_pet(pet_id: int, db: Session = Depends(get_db)):
    pet = _get_pet_or_404(db, pet_id)

    records = db.execute(
        select(MedicalRecord)
        .where(MedicalRecord.pet_id == pet_id)
        .order_by(MedicalRecord.id)
    ).scalars().all()

    body = {"pet": pet_to_dict(pet), "records": [record_to_dict(r) for r in records]}
    return JSONResponse(
        content=jsonable_encoder(body),
        headers={"Content-Disposition": f'attachment; filename="{export_filename(pet.name)}"'},
    )
