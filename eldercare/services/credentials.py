"""
Family PIN validation for the senior-facing entry points.

Format checks run locally before any lookup. A wrong code and an unknown
profile produce the same message.
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError

from ..repositories import repository
from ..schemas.auth import SeniorSession, SessionRole
from .session_cache import SessionCache

logger = logging.getLogger(__name__)

PIN_PATTERN = re.compile(r"[0-9]{4}")
MIN_PHONE_DIGITS = 10

PIN_FORMAT_ERROR = "PIN must be 4 digits"
PHONE_FORMAT_ERROR = "Please enter a valid phone number"
INVALID_PIN = "Invalid PIN. Please try again."
INVALID_DUAL_KEY = "Invalid phone number or PIN"


@dataclass
class PinValidationResult:
    success: bool
    error: Optional[str] = None
    session: Optional[SeniorSession] = None


def is_valid_pin(pin: Optional[str]) -> bool:
    return bool(pin) and PIN_PATTERN.fullmatch(pin) is not None


def phone_digits(phone: Optional[str]) -> str:
    return re.sub(r"\D", "", phone or "")


def _session_from_row(row: Dict[str, Any]) -> SeniorSession:
    return SeniorSession(
        senior_id=row["senior_id"],
        senior_name=row["senior_name"],
        preferred_name=row.get("preferred_name"),
        photo_url=row.get("photo_url"),
        language=row.get("senior_language"),
        guardian_id=row.get("guardian_id"),
        role=SessionRole.senior,
    )


def _remember(cache: Optional[SessionCache], session: SeniorSession, guardian_signed_in: bool = False) -> None:
    if cache is not None:
        cache.start_senior(session, guardian_signed_in=guardian_signed_in)


def validate_pin(pin: str, cache: Optional[SessionCache] = None) -> PinValidationResult:
    if not is_valid_pin(pin):
        return PinValidationResult(success=False, error=PIN_FORMAT_ERROR)
    try:
        rows = repository.validate_family_pin(pin)
    except SQLAlchemyError:
        logger.exception("PIN validation error")
        return PinValidationResult(success=False, error="Unable to validate PIN")
    if not rows:
        return PinValidationResult(success=False, error=INVALID_PIN)

    session = _session_from_row(rows[0])
    _remember(cache, session)
    return PinValidationResult(success=True, session=session)


def _lookup_with_phone(phone: str, pin: str) -> List[Dict[str, Any]]:
    raw = phone.strip()
    rows = repository.validate_family_pin_with_phone(raw, pin)
    if rows:
        return rows
    digits = phone_digits(raw)
    if digits == raw:
        return rows
    # Guardian phones are stored however they were typed at sign-up
    logger.info("Retrying dual-key lookup with digits-only phone")
    return repository.validate_family_pin_with_phone(digits, pin)


def validate_dual_key(phone: str, pin: str, cache: Optional[SessionCache] = None) -> PinValidationResult:
    if len(phone_digits(phone)) < MIN_PHONE_DIGITS:
        return PinValidationResult(success=False, error=PHONE_FORMAT_ERROR)
    if not is_valid_pin(pin):
        return PinValidationResult(success=False, error=PIN_FORMAT_ERROR)
    try:
        rows = _lookup_with_phone(phone, pin)
    except SQLAlchemyError:
        logger.exception("Dual-key validation error")
        return PinValidationResult(success=False, error="Unable to validate credentials")
    if not rows:
        return PinValidationResult(success=False, error=INVALID_DUAL_KEY)

    session = _session_from_row(rows[0])
    _remember(cache, session)
    return PinValidationResult(success=True, session=session)


def enter_senior_mode(
    guardian_id: str,
    pin: str,
    senior_id: Optional[str] = None,
    cache: Optional[SessionCache] = None,
) -> PinValidationResult:
    """Lets a signed-in guardian hand the device to one of their seniors."""
    if not is_valid_pin(pin):
        return PinValidationResult(success=False, error=PIN_FORMAT_ERROR)
    try:
        linked = repository.list_guardian_seniors(guardian_id)
    except SQLAlchemyError:
        logger.exception("Linked senior lookup failed for guardian %s", guardian_id)
        return PinValidationResult(success=False, error="Unable to validate PIN")

    if senior_id:
        target = next((pair for pair in linked if pair[0].id == senior_id), None)
    else:
        target = next((pair for pair in linked if pair[1].is_primary), None) or (linked[0] if linked else None)
    if target is None:
        return PinValidationResult(success=False, error="No senior linked to this account")

    senior = target[0]
    if senior.family_pin != pin:
        return PinValidationResult(success=False, error=INVALID_PIN)

    session = SeniorSession(
        senior_id=senior.id,
        senior_name=senior.name,
        preferred_name=senior.preferred_name,
        photo_url=senior.photo_url,
        language=senior.language,
        guardian_id=guardian_id,
        role=SessionRole.senior,
    )
    _remember(cache, session, guardian_signed_in=True)
    return PinValidationResult(success=True, session=session)
