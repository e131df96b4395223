# backend/vetrecords/db/models/__init__.py

from vetrecords.db.models.pet import Pet
from vetrecords.db.models.medical_record import MedicalRecord
