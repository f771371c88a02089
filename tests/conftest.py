from datetime import datetime
from typing import Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from eldercare.core.config import settings
from eldercare.repositories import db, repository
from eldercare.services import clock


@pytest.fixture
def database(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "database_url", f"sqlite:///{tmp_path / 'test.db'}")
    monkeypatch.setattr(db, "_ENGINE", None)
    db.init_db()
    yield
    db.dispose_engine()


@pytest.fixture
def session_file(tmp_path, monkeypatch):
    path = tmp_path / "session.json"
    monkeypatch.setattr(settings, "session_file", str(path))
    return path


@pytest.fixture
def client(database, session_file):
    from eldercare.main import app

    with TestClient(app) as c:
        yield c


@pytest.fixture
def frozen_clock(monkeypatch):
    """Returns a setter: freeze(local_dt) pins clock.utc_now and returns the UTC value."""

    def freeze(local_dt: datetime) -> datetime:
        now = clock.to_utc(local_dt)
        monkeypatch.setattr(clock, "utc_now", lambda: now)
        return now

    return freeze


def seed_family(
    *,
    senior_name: str = "Kamla Devi",
    pin: str = "4321",
    guardian_phone: Optional[str] = "9876543210",
    medications: Optional[List[Dict]] = None,
) -> Dict[str, object]:
    guardian_id = repository.create_guardian(full_name="Ravi Sharma", phone=guardian_phone)
    senior_id = repository.create_senior(name=senior_name, preferred_name="Amma", family_pin=pin)
    repository.link_guardian_senior(
        guardian_id=guardian_id, senior_id=senior_id, relationship="son", is_primary=True
    )
    medication_ids = [
        repository.create_medication(senior_id=senior_id, **med) for med in (medications or [])
    ]
    return {"guardian_id": guardian_id, "senior_id": senior_id, "medication_ids": medication_ids}


@pytest.fixture
def family(database):
    return seed_family(medications=[{"name": "Metformin", "dosage": "500mg", "times": ["10:00"]}])


@pytest.fixture
def make_family(database):
    return seed_family
