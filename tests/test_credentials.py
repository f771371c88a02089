import pytest
from sqlalchemy.exc import OperationalError

from eldercare.repositories import repository
from eldercare.schemas import SessionRole
from eldercare.services import credentials
from eldercare.services.session_cache import SessionCache


def _no_lookup(*args, **kwargs):
    raise AssertionError("lookup must not run for malformed input")


def _storage_down(*args, **kwargs):
    raise OperationalError("SELECT", {}, Exception("connection refused"))


@pytest.mark.parametrize("pin", ["", "123", "12345", "12a4", " 1234", "1234\n", "١٢٣٤"])
def test_malformed_pin_is_rejected_before_lookup(pin, monkeypatch):
    monkeypatch.setattr(repository, "validate_family_pin", _no_lookup)

    result = credentials.validate_pin(pin)

    assert result.success is False
    assert result.error == "PIN must be 4 digits"


def test_pin_match_returns_session(family, tmp_path):
    cache = SessionCache(str(tmp_path / "session.json"))

    result = credentials.validate_pin("4321", cache=cache)

    assert result.success is True
    assert result.session.senior_id == family["senior_id"]
    assert result.session.senior_name == "Kamla Devi"
    assert result.session.preferred_name == "Amma"
    assert result.session.guardian_id == family["guardian_id"]
    assert cache.mode == SessionRole.senior
    assert cache.senior.senior_id == family["senior_id"]
    assert cache.state.guardian_signed_in is False


def test_wrong_pin(family):
    result = credentials.validate_pin("0000")

    assert result.success is False
    assert result.error == "Invalid PIN. Please try again."


def test_pin_storage_error(monkeypatch):
    monkeypatch.setattr(repository, "validate_family_pin", _storage_down)

    result = credentials.validate_pin("1234")

    assert result.success is False
    assert result.error == "Unable to validate PIN"


@pytest.mark.parametrize("phone", ["", "12345", "98765-4321", "phone"])
def test_short_phone_is_rejected_first(phone, monkeypatch):
    monkeypatch.setattr(repository, "validate_family_pin_with_phone", _no_lookup)

    result = credentials.validate_dual_key(phone, "12")

    assert result.error == "Please enter a valid phone number"


def test_dual_key_checks_pin_format_after_phone(monkeypatch):
    monkeypatch.setattr(repository, "validate_family_pin_with_phone", _no_lookup)

    result = credentials.validate_dual_key("9876543210", "12")

    assert result.error == "PIN must be 4 digits"


def test_dual_key_retries_once_with_digits(monkeypatch):
    calls = []

    def lookup(phone, pin):
        calls.append(phone)
        return []

    monkeypatch.setattr(repository, "validate_family_pin_with_phone", lookup)

    result = credentials.validate_dual_key("98765-43210", "1234")

    assert calls == ["98765-43210", "9876543210"]
    assert result.success is False
    assert result.error == "Invalid phone number or PIN"


def test_dual_key_digits_only_phone_is_looked_up_once(monkeypatch):
    calls = []

    def lookup(phone, pin):
        calls.append(phone)
        return []

    monkeypatch.setattr(repository, "validate_family_pin_with_phone", lookup)

    credentials.validate_dual_key("9876543210", "1234")

    assert calls == ["9876543210"]


def test_dual_key_matches_after_normalizing_phone(family):
    result = credentials.validate_dual_key("98765 43210", "4321")

    assert result.success is True
    assert result.session.senior_id == family["senior_id"]
    assert result.session.guardian_id == family["guardian_id"]


def test_dual_key_matches_phone_as_stored(make_family):
    fam = make_family(guardian_phone="+91 98765 43210", pin="2468")

    result = credentials.validate_dual_key("+91 98765 43210", "2468")

    assert result.success is True
    assert result.session.senior_id == fam["senior_id"]


def test_dual_key_wrong_pin(family):
    result = credentials.validate_dual_key("9876543210", "1111")

    assert result.error == "Invalid phone number or PIN"


def test_dual_key_storage_error(monkeypatch):
    monkeypatch.setattr(repository, "validate_family_pin_with_phone", _storage_down)

    result = credentials.validate_dual_key("9876543210", "1234")

    assert result.success is False
    assert result.error == "Unable to validate credentials"


def test_enter_senior_mode_uses_primary_senior(family, tmp_path):
    cache = SessionCache(str(tmp_path / "session.json"))

    result = credentials.enter_senior_mode(family["guardian_id"], "4321", cache=cache)

    assert result.success is True
    assert result.session.senior_id == family["senior_id"]
    assert cache.state.guardian_id == family["guardian_id"]
    assert cache.state.guardian_signed_in is True


def test_enter_senior_mode_wrong_pin(family):
    result = credentials.enter_senior_mode(family["guardian_id"], "9999")

    assert result.error == "Invalid PIN. Please try again."


def test_enter_senior_mode_without_linked_senior(database):
    guardian_id = repository.create_guardian(full_name="Nobody Yet")

    result = credentials.enter_senior_mode(guardian_id, "4321")

    assert result.error == "No senior linked to this account"
