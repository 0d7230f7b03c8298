"""
Medical record CRUD service.

Writes check the birthdate against the same clock the alert queries use, so a
record accepted here never fails a later age computation.
"""

from datetime import date
from typing import Callable

import structlog

from safetynet.db.store import RecordStore
from safetynet.errors import InvalidDateError, NotFoundError
from safetynet.schemas.medical_record import MedicalRecord

logger = structlog.get_logger(__name__)


class MedicalRecordService:
    def __init__(self, store: RecordStore, clock: Callable[[], date] = date.today):
        self.records = store.medical_records
        self.clock = clock

    def get_all(self) -> list[MedicalRecord]:
        return self.records.all()

    def get(self, first_name: str, last_name: str) -> MedicalRecord:
        record = self.records.get((first_name, last_name))
        if record is None:
            logger.info("medical_record_not_found", first_name=first_name, last_name=last_name)
            raise NotFoundError("Medical record", f"{first_name} {last_name}")
        return record

    def add(self, record: MedicalRecord) -> MedicalRecord:
        self._check_birthdate(record)
        self.records.add(record)
        logger.info("medical_record_added", first_name=record.first_name, last_name=record.last_name)
        return self.get(record.first_name, record.last_name)

    def update(self, record: MedicalRecord) -> MedicalRecord:
        self._check_birthdate(record)
        self.records.update(record)
        logger.info("medical_record_updated", first_name=record.first_name, last_name=record.last_name)
        return self.get(record.first_name, record.last_name)

    def delete(self, first_name: str, last_name: str) -> MedicalRecord:
        removed = self.records.delete((first_name, last_name))
        logger.info("medical_record_deleted", first_name=first_name, last_name=last_name)
        return removed

    def _check_birthdate(self, record: MedicalRecord) -> None:
        today = self.clock()
        if record.birthdate >= today:
            logger.info(
                "medical_record_rejected",
                first_name=record.first_name,
                last_name=record.last_name,
                birthdate=str(record.birthdate),
            )
            raise InvalidDateError(record.birthdate, today)
