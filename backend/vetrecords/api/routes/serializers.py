"""Module: serializers.

Row to JSON shaping shared by the pet, record and stats routes. Dates leave
as ``YYYY-MM-DD`` and timestamps as ISO-8601 via FastAPI's encoder.
"""

from datetime import date, datetime

from vetrecords.core.errors import ValidationError
from vetrecords.db.models.medical_record import MedicalRecord
from vetrecords.db.models.pet import Pet

PET_FIELDS = ("id", "name", "animal_type", "owner_name", "date_of_birth", "created_at")
RECORD_FIELDS = (
    "id",
    "pet_id",
    "record_type",
    "name",
    "date_administered",
    "next_due_date",
    "reactions",
    "severity",
    "created_at",
)


def pet_to_dict(pet: Pet) -> dict:
    return {field: getattr(pet, field) for field in PET_FIELDS}


def record_to_dict(record: MedicalRecord) -> dict:
    return {field: getattr(record, field) for field in RECORD_FIELDS}


def normalize_optional(value: str | None) -> str | None:
    if value is None:
        return None
    cleaned = value.strip()
    return cleaned if cleaned else None


def parse_date(value: str | None, field_name: str) -> date | None:
    """Parse an optional ISO ``YYYY-MM-DD`` string."""
    cleaned = normalize_optional(value)
    if cleaned is None:
        return None
    try:
        return datetime.strptime(cleaned, "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"Invalid {field_name} (expected YYYY-MM-DD)")
