"""Module: records."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query, Response
from pydantic import BaseModel
from sqlalchemy import desc, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from vetrecords.api.routes.deps import get_db
from vetrecords.api.routes.serializers import normalize_optional, parse_date, record_to_dict
from vetrecords.core.errors import DuplicateError, NotFoundError, ValidationError
from vetrecords.db.models.medical_record import (
    RECORD_TYPES,
    SEVERITIES,
    UNIQUE_RECORD_INDEX,
    MedicalRecord,
)
from vetrecords.db.models.pet import Pet

logger = logging.getLogger(__name__)

router = APIRouter()


class RecordPayload(BaseModel):
    record_type: str | None = None
    name: str | None = None
    date_administered: str | None = None
    next_due_date: str | None = None
    reactions: str | None = None
    severity: str | None = None


# -------------------------
# Helpers
# -------------------------
def _validated_fields(payload: RecordPayload) -> dict:
    record_type = normalize_optional(payload.record_type)
    name = normalize_optional(payload.name)
    if not record_type or not name:
        raise ValidationError("Record type and name are required")
    if record_type not in RECORD_TYPES:
        raise ValidationError("Record type must be vaccine or allergy")

    date_administered = parse_date(payload.date_administered, "date_administered")
    next_due_date = parse_date(payload.next_due_date, "next_due_date")
    severity = normalize_optional(payload.severity)

    if record_type == "vaccine" and not date_administered and not next_due_date:
        raise ValidationError("Vaccines require either a date administered or a due date")
    if record_type == "allergy" and not severity:
        raise ValidationError("Severity is required for allergies")
    if severity is not None and severity not in SEVERITIES:
        raise ValidationError("Severity must be mild or severe")

    return {
        "record_type": record_type,
        "name": name,
        "date_administered": date_administered,
        "next_due_date": next_due_date,
        "reactions": normalize_optional(payload.reactions),
        "severity": severity,
    }


def _duplicate_message(record_type: str, name: str) -> str:
    return f'This pet already has a {record_type} record for "{name}"'


def _ensure_not_duplicate(
    db: Session,
    pet_id: int,
    record_type: str,
    name: str,
    exclude_id: int | None = None,
) -> None:
    stmt = select(MedicalRecord.id).where(
        MedicalRecord.pet_id == pet_id,
        MedicalRecord.record_type == record_type,
        MedicalRecord.name == name,
    )
    if exclude_id is not None:
        stmt = stmt.where(MedicalRecord.id != exclude_id)

    if db.execute(stmt.limit(1)).scalar_one_or_none() is not None:
        logger.info("Rejected duplicate %s %r for pet %s", record_type, name, pet_id)
        raise DuplicateError(_duplicate_message(record_type, name))


def _is_duplicate_violation(exc: IntegrityError) -> bool:
    # PostgreSQL names the index; SQLite lists the indexed columns.
    message = str(exc.orig)
    return UNIQUE_RECORD_INDEX in message or (
        "UNIQUE constraint failed" in message and "medical_records.record_type" in message
    )


def _ensure_pet_exists(db: Session, pet_id: int) -> None:
    if db.get(Pet, pet_id) is None:
        raise NotFoundError("Pet not found")


def _commit_record(db: Session, record: MedicalRecord, record_type: str, name: str) -> None:
    # The unique index catches a concurrent insert that slipped past the check.
    # Any other integrity failure is a store error.
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        if not _is_duplicate_violation(exc):
            raise
        raise DuplicateError(_duplicate_message(record_type, name))
    db.refresh(record)


def _get_record_or_404(db: Session, record_id: int) -> MedicalRecord:
    record = db.get(MedicalRecord, record_id)
    if not record:
        raise NotFoundError("Record not found")
    return record


# -------------------------
# Endpoints
# -------------------------

@router.get("/pets/{pet_id}/records", summary="List medical records for a pet")
def list_pet_records(
    pet_id: int,
    record_type: str | None = Query(default=None),
    db: Session = Depends(get_db),
):
    stmt = select(MedicalRecord).where(MedicalRecord.pet_id == pet_id)
    if record_type:
        stmt = stmt.where(MedicalRecord.record_type == record_type)

    stmt = stmt.order_by(desc(MedicalRecord.created_at), desc(MedicalRecord.id))

    records = db.execute(stmt).scalars().all()
    return [record_to_dict(r) for r in records]


@router.post("/pets/{pet_id}/records", status_code=201, summary="Add a vaccine or allergy record")
def create_pet_record(pet_id: int, payload: RecordPayload, db: Session = Depends(get_db)):
    fields = _validated_fields(payload)

    _ensure_pet_exists(db, pet_id)

    _ensure_not_duplicate(db, pet_id, fields["record_type"], fields["name"])

    record = MedicalRecord(pet_id=pet_id, **fields)
    db.add(record)
    _commit_record(db, record, fields["record_type"], fields["name"])

    logger.info("Created %s record %s for pet %s", record.record_type, record.id, pet_id)
    return record_to_dict(record)


@router.put("/records/{record_id}", summary="Update a medical record")
def update_record(record_id: int, payload: RecordPayload, db: Session = Depends(get_db)):
    fields = _validated_fields(payload)
    record = _get_record_or_404(db, record_id)

    _ensure_not_duplicate(
        db,
        record.pet_id,
        fields["record_type"],
        fields["name"],
        exclude_id=record.id,
    )

    for key, value in fields.items():
        setattr(record, key, value)
    _commit_record(db, record, fields["record_type"], fields["name"])

    logger.info("Updated record %s", record.id)
    return record_to_dict(record)


@router.delete("/records/{record_id}", status_code=204, summary="Delete a medical record")
def delete_record(record_id: int, db: Session = Depends(get_db)):
    record = _get_record_or_404(db, record_id)

    db.delete(record)
    db.commit()

    logger.info("Deleted record %s", record_id)
    return Response(status_code=204)
