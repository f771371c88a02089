from datetime import datetime

from eldercare.repositories import repository
from eldercare.services import clock


def _onboard(client, guardian_id, name="Kamla Devi", pin="4321"):
    resp = client.post(
        "/seniors",
        json={
            "guardian_id": guardian_id,
            "name": name,
            "preferred_name": "Amma",
            "family_pin": pin,
            "chronic_conditions": ["diabetes", " ", "hypertension"],
            "emergency_contacts": [{"name": "Ravi", "phone": "9876543210", "relationship": "son"}],
        },
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


def _guardian(client, phone="9876543210"):
    resp = client.post("/guardians", json={"full_name": "Ravi Sharma", "phone": phone})
    assert resp.status_code == 201, resp.text
    return resp.json()["id"]


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_onboarding_links_senior_and_seeds_preferences(client):
    guardian_id = _guardian(client)

    first = _onboard(client, guardian_id)
    second = _onboard(client, guardian_id, name="Mohan Lal", pin="8642")

    assert first["chronic_conditions"] == ["diabetes", "hypertension"]
    assert "family_pin" not in first

    linked = client.get(f"/guardians/{guardian_id}/seniors").json()
    assert [(s["name"], s["is_primary"]) for s in linked] == [("Kamla Devi", True), ("Mohan Lal", False)]

    prefs = client.get(f"/seniors/{second['id']}/joy-preferences")
    assert prefs.status_code == 200
    assert prefs.json()["ai_suggestions_enabled"] is True


def test_onboarding_unknown_guardian(client):
    resp = client.post("/seniors", json={"guardian_id": "nope", "name": "X", "family_pin": "1234"})
    assert resp.status_code == 404


def test_onboarding_rejects_bad_pin(client):
    guardian_id = _guardian(client)
    resp = client.post("/seniors", json={"guardian_id": guardian_id, "name": "X", "family_pin": "12"})
    assert resp.status_code == 422


def test_update_senior_and_joy_preferences(client):
    senior = _onboard(client, _guardian(client))

    resp = client.put(f"/seniors/{senior['id']}", json={"language": "hindi", "nudge_frequency": "daily"})
    assert resp.status_code == 200
    assert client.get(f"/seniors/{senior['id']}").json()["language"] == "hindi"

    resp = client.put(
        f"/seniors/{senior['id']}/joy-preferences",
        json={"ai_suggestions_enabled": False, "suno_config": {"genres": ["bhajan"]}},
    )
    assert resp.status_code == 200
    prefs = client.get(f"/seniors/{senior['id']}/joy-preferences").json()
    assert prefs["ai_suggestions_enabled"] is False
    assert prefs["suno_config"] == {"genres": ["bhajan"]}


def test_medication_crud(client):
    senior = _onboard(client, _guardian(client))

    resp = client.post(
        "/medications",
        json={"senior_id": senior["id"], "name": "Metformin", "dosage": "500mg", "times": ["21:00", "09:00", "09:00"]},
    )
    assert resp.status_code == 201, resp.text
    med = resp.json()
    assert med["times"] == ["09:00", "21:00"]
    assert med["is_active"] is True

    resp = client.put(f"/medications/{med['id']}", json={"dosage": "1000mg"})
    assert resp.status_code == 200
    assert client.get(f"/medications/{med['id']}").json()["dosage"] == "1000mg"

    resp = client.delete(f"/medications/{med['id']}")
    assert resp.json() == {"status": "inactive"}
    assert client.get("/medications", params={"senior_id": senior["id"]}).json() == []
    everything = client.get("/medications", params={"senior_id": senior["id"], "include_inactive": True}).json()
    assert [m["is_active"] for m in everything] == [False]


def test_medication_rejects_bad_time(client):
    senior = _onboard(client, _guardian(client))

    resp = client.post(
        "/medications",
        json={"senior_id": senior["id"], "name": "Metformin", "dosage": "500mg", "times": ["9am"]},
    )

    assert resp.status_code == 422


def test_medication_for_unknown_senior(client):
    resp = client.post("/medications", json={"senior_id": "ghost", "name": "A", "dosage": "1"})
    assert resp.status_code == 404


def test_todays_logs(client, family, frozen_clock):
    frozen_clock(datetime(2026, 3, 2, 10, 10))
    client.post("/medication-reminders")
    repository.create_medication_log(
        medication_id=family["medication_ids"][0],
        senior_id=family["senior_id"],
        scheduled_time=clock.to_utc(datetime(2026, 3, 1, 10, 0)),
        status="missed",
    )

    resp = client.get("/medication-logs", params={"senior_id": family["senior_id"]})

    assert resp.status_code == 200
    logs = resp.json()
    assert len(logs) == 1
    assert logs[0]["medication_name"] == "Metformin"
    assert logs[0]["status"] == "pending"


def test_delete_senior_cascades(client, family, frozen_clock):
    frozen_clock(datetime(2026, 3, 2, 10, 10))
    client.post("/medication-reminders")
    repository.add_activity_log(senior_id=family["senior_id"], activity_type="mood_checkin")

    resp = client.delete(f"/seniors/{family['senior_id']}")

    assert resp.json() == {"status": "deleted"}
    assert client.get(f"/seniors/{family['senior_id']}").status_code == 404
    assert repository.list_medications(family["senior_id"], active_only=False) == []
    assert repository.list_activity_logs(family["senior_id"]) == []
    assert repository.list_notifications(senior_id=family["senior_id"]) == []
    assert client.get(f"/guardians/{family['guardian_id']}/seniors").json() == []
    assert client.delete(f"/seniors/{family['senior_id']}").status_code == 404


def test_auth_session_flow(client, family, session_file):
    resp = client.post("/auth/pin", json={"pin": "4321"})
    data = resp.json()
    assert data["success"] is True
    assert data["session"]["mode"] == "senior"
    assert data["session"]["guardian_signed_in"] is False
    assert data["session"]["senior"]["senior_name"] == "Kamla Devi"
    assert session_file.exists()

    resp = client.post("/auth/role", json={"role": "guardian"})
    assert resp.json()["session"]["senior"]["role"] == "guardian"

    assert client.post("/auth/logout").json() == {"status": "ok"}
    assert client.get("/auth/session").json()["success"] is False
    assert not session_file.exists()


def test_auth_errors_come_back_as_payload(client, family):
    resp = client.post("/auth/pin", json={"pin": "12"})
    assert resp.status_code == 200
    assert resp.json() == {"success": False, "error": "PIN must be 4 digits", "session": None}

    resp = client.post("/auth/dual-key", json={"phone": "98765-43210", "pin": "4321"})
    assert resp.json()["success"] is True


def test_exit_after_pin_only_does_not_grant_guardian(client, family, session_file):
    client.post("/auth/pin", json={"pin": "4321"})

    resp = client.post("/auth/exit-senior-mode")

    session = resp.json()["session"]
    assert session["mode"] is None
    assert session["guardian_id"] is None
    assert session["senior"] is None
    assert client.get("/auth/session").json()["success"] is False
    assert not session_file.exists()


def test_senior_mode_from_guardian_session(client, family):
    assert client.post(f"/auth/guardian/{family['guardian_id']}").json()["session"]["mode"] == "guardian"

    resp = client.post("/auth/senior-mode", json={"guardian_id": family["guardian_id"], "pin": "4321"})

    assert resp.json()["success"] is True
    assert resp.json()["session"]["senior"]["senior_id"] == family["senior_id"]

    session = client.post("/auth/exit-senior-mode").json()["session"]
    assert session["mode"] == "guardian"
    assert session["guardian_id"] == family["guardian_id"]
    assert session["senior"] is None


def test_role_switch_requires_senior_session(client):
    resp = client.post("/auth/role", json={"role": "guardian"})
    assert resp.status_code == 409


def test_notifications_mark_read(client, family, frozen_clock):
    frozen_clock(datetime(2026, 3, 2, 10, 10))
    client.post("/medication-reminders")

    notes = client.get("/notifications", params={"guardian_id": family["guardian_id"], "unread_only": True}).json()
    assert len(notes) == 1

    resp = client.patch(f"/notifications/{notes[0]['id']}/read")
    assert resp.status_code == 200
    assert client.get("/notifications", params={"guardian_id": family["guardian_id"], "unread_only": True}).json() == []
    assert client.patch("/notifications/missing/read").status_code == 404


def test_vitals(client, family):
    resp = client.post(
        "/vitals",
        json={"senior_id": family["senior_id"], "vital_type": "blood_sugar", "value": 132, "unit": "mg/dL"},
    )
    assert resp.status_code == 201, resp.text

    readings = client.get("/vitals", params={"senior_id": family["senior_id"]}).json()
    assert [r["value"] for r in readings] == [132.0]


def test_activity_after_taken(client, family):
    log_id = repository.create_medication_log(
        medication_id=family["medication_ids"][0],
        senior_id=family["senior_id"],
        scheduled_time=datetime(2026, 3, 2, 4, 30),
    )
    client.post("/log-medication", json={"action": "taken", "medication_log_id": log_id})

    activity = client.get("/activity", params={"senior_id": family["senior_id"]}).json()
    assert [a["activity_type"] for a in activity] == ["medication_taken"]
