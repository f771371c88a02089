from datetime import datetime

from sqlalchemy import DateTime
from sqlmodel import SQLModel

from eldercare.repositories import db, db_models, repository


def _datetime_columns():
    for table in SQLModel.metadata.sorted_tables:
        for column in table.columns:
            try:
                python_type = column.type.python_type
            except NotImplementedError:
                continue
            if python_type is datetime:
                yield column


def test_datetime_columns_store_naive_values():
    columns = list(_datetime_columns())

    assert db_models.MedicationLog.__table__.c.scheduled_time in columns
    for column in columns:
        assert isinstance(column.type, DateTime), column
        assert column.type.timezone is False, column


def test_naive_utc_round_trip(database):
    guardian_id = repository.create_guardian(full_name="Ravi Sharma")
    senior_id = repository.create_senior(name="Kamla Devi", family_pin="4321")
    medication_id = repository.create_medication(senior_id=senior_id, name="Metformin", dosage="500mg", times=["10:00"])
    scheduled = datetime(2026, 3, 2, 4, 30)

    log_id = repository.create_medication_log(
        medication_id=medication_id, senior_id=senior_id, scheduled_time=scheduled
    )
    repository.update_medication_log(log_id, "taken", taken_at=datetime(2026, 3, 2, 4, 41))

    log = repository.get_medication_log(log_id)
    assert log.scheduled_time == scheduled
    assert log.taken_at == datetime(2026, 3, 2, 4, 41)
    assert log.taken_at.tzinfo is None
    assert repository.get_guardian(guardian_id).created_at.tzinfo is None


def test_engine_follows_configured_url(database):
    assert str(db.get_engine().url).endswith("test.db")
