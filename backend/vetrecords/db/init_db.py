"""Module: init_db."""

import logging

from sqlalchemy import inspect, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError

from vetrecords.db.base import Base

# IMPORTANT: import models so they register with Base.metadata
from vetrecords.db.models.pet import Pet  # noqa: F401
from vetrecords.db.models.medical_record import UNIQUE_RECORD_INDEX, MedicalRecord  # noqa: F401

logger = logging.getLogger(__name__)


def init_db(engine: Engine) -> bool:
    """Create missing tables and patch databases from older releases.

    Returns True when the ``next_due_date`` column had to be added.
    """
    Base.metadata.create_all(bind=engine)

    columns = {c["name"] for c in inspect(engine).get_columns("medical_records")}
    added_due_date = "next_due_date" not in columns
    if added_due_date:
        with engine.begin() as conn:
            conn.execute(text("ALTER TABLE medical_records ADD COLUMN next_due_date DATE"))
        logger.info("Added missing medical_records.next_due_date column")

    try:
        with engine.begin() as conn:
            conn.execute(
                text(
                    f"""
                    CREATE UNIQUE INDEX IF NOT EXISTS {UNIQUE_RECORD_INDEX}
                    ON medical_records (pet_id, record_type, name);
                    """
                )
            )
    except IntegrityError:
        logger.warning(
            "Existing duplicate medical records prevent %s; duplicates are only checked by the API",
            UNIQUE_RECORD_INDEX,
        )

    logger.info("Schema ready on %s", engine.url.render_as_string(hide_password=True))
    return added_due_date
