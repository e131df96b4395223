"""Module: pet."""

from __future__ import annotations

from datetime import UTC, date, datetime
from typing import TYPE_CHECKING

from sqlalchemy import Date, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vetrecords.db.base import Base

if TYPE_CHECKING:
    from vetrecords.db.models.medical_record import MedicalRecord


def utcnow() -> datetime:
    return datetime.now(UTC).replace(tzinfo=None)


# A tracked animal; owns its medical records outright.
class Pet(Base):
    __tablename__ = "pets"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(String, nullable=False)
    animal_type: Mapped[str] = mapped_column(String, nullable=False)
    owner_name: Mapped[str] = mapped_column(String, nullable=False)
    date_of_birth: Mapped[date] = mapped_column(Date, nullable=False)

    # Audit
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)

    records: Mapped[list[MedicalRecord]] = relationship(
        back_populates="pet",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
