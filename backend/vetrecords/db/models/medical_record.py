"""Module: medical_record."""

from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING

from sqlalchemy import Date, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vetrecords.db.base import Base
from vetrecords.db.models.pet import utcnow

if TYPE_CHECKING:
    from vetrecords.db.models.pet import Pet

RECORD_TYPES = ("vaccine", "allergy")
SEVERITIES = ("mild", "severe")

UNIQUE_RECORD_INDEX = "uq_medical_records_pet_type_name"


# A vaccine or allergy entry. Vaccines use the two date columns,
# allergies use reactions/severity.
class MedicalRecord(Base):
    __tablename__ = "medical_records"
    __table_args__ = (
        Index(UNIQUE_RECORD_INDEX, "pet_id", "record_type", "name", unique=True),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    pet_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("pets.id", ondelete="CASCADE"),
        nullable=False,
    )

    record_type: Mapped[str] = mapped_column(String, nullable=False)
    name: Mapped[str] = mapped_column(String, nullable=False)

    # Vaccine
    date_administered: Mapped[date | None] = mapped_column(Date, nullable=True)
    next_due_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    # Allergy
    reactions: Mapped[str | None] = mapped_column(String, nullable=True)
    severity: Mapped[str | None] = mapped_column(String, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)

    pet: Mapped[Pet] = relationship(back_populates="records")
