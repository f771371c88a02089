"""
Repository helpers over the hosted tables: guardians, seniors, medications,
medication logs, activity, notifications, vitals and joy preferences.

The two PIN lookups mirror the remote procedures the client used to call;
they return zero or more plain rows and never raise on a miss.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple
from uuid import uuid4

from sqlalchemy import delete
from sqlmodel import Session, select

from . import db, db_models

logger = logging.getLogger(__name__)


MEDICATION_LOG_STATUSES = {"pending", "taken", "snoozed", "missed"}


def init_db() -> None:
    db.init_db()


def _now() -> datetime:
    return datetime.utcnow()


def _session() -> Session:
    return Session(db.get_engine(), expire_on_commit=False)


# Guardians ----------------------------------------------------------------
def create_guardian(*, full_name: str, phone: Optional[str] = None, email: Optional[str] = None) -> str:
    guardian = db_models.Guardian(
        id=str(uuid4()),
        full_name=full_name,
        phone=phone,
        email=email,
        created_at=_now(),
        updated_at=_now(),
    )
    with _session() as session:
        session.add(guardian)
        session.commit()
    return guardian.id


def get_guardian(guardian_id: str) -> Optional[db_models.Guardian]:
    with _session() as session:
        return session.get(db_models.Guardian, guardian_id)


# Seniors ------------------------------------------------------------------
def create_senior(
    *,
    name: str,
    preferred_name: Optional[str] = None,
    photo_url: Optional[str] = None,
    language: Optional[str] = "hinglish",
    chronic_conditions: Optional[list] = None,
    emergency_contacts: Optional[list] = None,
    nudge_frequency: Optional[str] = None,
    family_pin: Optional[str] = None,
    guardian_email: Optional[str] = None,
) -> str:
    senior = db_models.Senior(
        id=str(uuid4()),
        name=name,
        preferred_name=preferred_name,
        photo_url=photo_url,
        language=language,
        chronic_conditions=chronic_conditions or [],
        emergency_contacts=emergency_contacts or [],
        nudge_frequency=nudge_frequency,
        family_pin=family_pin,
        guardian_email=guardian_email,
        created_at=_now(),
        updated_at=_now(),
    )
    with _session() as session:
        session.add(senior)
        session.commit()
    logger.info("Senior created: %s", senior.id)
    return senior.id


def get_senior(senior_id: str) -> Optional[db_models.Senior]:
    with _session() as session:
        return session.get(db_models.Senior, senior_id)


def update_senior(
    senior_id: str,
    name: Optional[str] = None,
    preferred_name: Optional[str] = None,
    photo_url: Optional[str] = None,
    language: Optional[str] = None,
    chronic_conditions: Optional[list] = None,
    emergency_contacts: Optional[list] = None,
    nudge_frequency: Optional[str] = None,
    family_pin: Optional[str] = None,
) -> bool:
    with _session() as session:
        senior = session.get(db_models.Senior, senior_id)
        if not senior:
            return False
        if name is not None:
            senior.name = name
        if preferred_name is not None:
            senior.preferred_name = preferred_name
        if photo_url is not None:
            senior.photo_url = photo_url
        if language is not None:
            senior.language = language
        if chronic_conditions is not None:
            senior.chronic_conditions = chronic_conditions
        if emergency_contacts is not None:
            senior.emergency_contacts = emergency_contacts
        if nudge_frequency is not None:
            senior.nudge_frequency = nudge_frequency
        if family_pin is not None:
            senior.family_pin = family_pin
        senior.updated_at = _now()
        session.add(senior)
        session.commit()
        return True


def link_guardian_senior(
    *, guardian_id: str, senior_id: str, relationship: Optional[str] = None, is_primary: bool = False
) -> str:
    link = db_models.GuardianSeniorLink(
        id=str(uuid4()),
        guardian_id=guardian_id,
        senior_id=senior_id,
        relationship=relationship,
        is_primary=is_primary,
        created_at=_now(),
    )
    with _session() as session:
        session.add(link)
        session.commit()
    return link.id


def list_guardian_seniors(guardian_id: str) -> List[Tuple[db_models.Senior, db_models.GuardianSeniorLink]]:
    with _session() as session:
        stmt = (
            select(db_models.Senior, db_models.GuardianSeniorLink)
            .join(db_models.GuardianSeniorLink, db_models.GuardianSeniorLink.senior_id == db_models.Senior.id)
            .where(db_models.GuardianSeniorLink.guardian_id == guardian_id)
            .order_by(db_models.GuardianSeniorLink.created_at)
        )
        return list(session.exec(stmt))


def _primary_guardian_id(session: Session, senior_id: str) -> Optional[str]:
    stmt = (
        select(db_models.GuardianSeniorLink)
        .where(db_models.GuardianSeniorLink.senior_id == senior_id)
        .order_by(db_models.GuardianSeniorLink.is_primary.desc(), db_models.GuardianSeniorLink.created_at)
        .limit(1)
    )
    link = session.exec(stmt).first()
    return link.guardian_id if link else None


def get_primary_guardian_id(senior_id: str) -> Optional[str]:
    with _session() as session:
        return _primary_guardian_id(session, senior_id)


def _pin_row(senior: db_models.Senior, guardian_id: Optional[str]) -> Dict[str, Any]:
    return {
        "senior_id": senior.id,
        "senior_name": senior.name,
        "preferred_name": senior.preferred_name,
        "photo_url": senior.photo_url,
        "senior_language": senior.language,
        "guardian_id": guardian_id,
    }


def validate_family_pin(pin: str) -> List[Dict[str, Any]]:
    with _session() as session:
        stmt = select(db_models.Senior).where(db_models.Senior.family_pin == pin)
        return [_pin_row(s, _primary_guardian_id(session, s.id)) for s in session.exec(stmt)]


def validate_family_pin_with_phone(phone: str, pin: str) -> List[Dict[str, Any]]:
    with _session() as session:
        stmt = (
            select(db_models.Senior, db_models.GuardianSeniorLink)
            .join(db_models.GuardianSeniorLink, db_models.GuardianSeniorLink.senior_id == db_models.Senior.id)
            .join(db_models.Guardian, db_models.Guardian.id == db_models.GuardianSeniorLink.guardian_id)
            .where(db_models.Guardian.phone == phone)
            .where(db_models.Senior.family_pin == pin)
            .limit(1)
        )
        return [_pin_row(senior, link.guardian_id) for senior, link in session.exec(stmt)]


def delete_senior_cascade(senior_id: str) -> bool:
    """
    Removes a senior and everything that references it, one table at a time.
    Each delete commits on its own; a failure part-way leaves earlier tables
    already cleaned.
    """
    if not get_senior(senior_id):
        return False
    ordered = [
        db_models.MedicationLog,
        db_models.Medication,
        db_models.ActivityLog,
        db_models.HealthVital,
        db_models.Notification,
        db_models.JoyPreference,
        db_models.GuardianSeniorLink,
    ]
    for model in ordered:
        with _session() as session:
            session.execute(delete(model).where(model.senior_id == senior_id))
            session.commit()
        logger.info("Deleted %s rows for senior %s", model.__tablename__, senior_id)
    with _session() as session:
        session.execute(delete(db_models.Senior).where(db_models.Senior.id == senior_id))
        session.commit()
    return True


# Medications --------------------------------------------------------------
def create_medication(
    *,
    senior_id: str,
    name: str,
    dosage: str,
    times: List[str],
    frequency: str = "daily",
    color: Optional[str] = None,
    instructions: Optional[str] = None,
) -> str:
    medication = db_models.Medication(
        id=str(uuid4()),
        senior_id=senior_id,
        name=name,
        dosage=dosage,
        frequency=frequency,
        times=list(times),
        color=color,
        instructions=instructions,
        is_active=True,
        created_at=_now(),
        updated_at=_now(),
    )
    with _session() as session:
        session.add(medication)
        session.commit()
    return medication.id


def get_medication(medication_id: str) -> Optional[db_models.Medication]:
    with _session() as session:
        return session.get(db_models.Medication, medication_id)


def list_medications(senior_id: str, active_only: bool = True) -> List[db_models.Medication]:
    with _session() as session:
        stmt = select(db_models.Medication).where(db_models.Medication.senior_id == senior_id)
        if active_only:
            stmt = stmt.where(db_models.Medication.is_active == True)  # noqa: E712
        stmt = stmt.order_by(db_models.Medication.created_at)
        return list(session.exec(stmt))


def list_active_medications() -> List[Tuple[db_models.Medication, db_models.Senior]]:
    with _session() as session:
        stmt = (
            select(db_models.Medication, db_models.Senior)
            .join(db_models.Senior, db_models.Senior.id == db_models.Medication.senior_id)
            .where(db_models.Medication.is_active == True)  # noqa: E712
        )
        return list(session.exec(stmt))


def update_medication_fields(
    medication_id: str,
    name: Optional[str] = None,
    dosage: Optional[str] = None,
    frequency: Optional[str] = None,
    times: Optional[List[str]] = None,
    color: Optional[str] = None,
    instructions: Optional[str] = None,
) -> bool:
    with _session() as session:
        medication = session.get(db_models.Medication, medication_id)
        if not medication:
            return False
        if name is not None:
            medication.name = name
        if dosage is not None:
            medication.dosage = dosage
        if frequency is not None:
            medication.frequency = frequency
        if times is not None:
            medication.times = list(times)
        if color is not None:
            medication.color = color
        if instructions is not None:
            medication.instructions = instructions
        medication.updated_at = _now()
        session.add(medication)
        session.commit()
        return True


def deactivate_medication(medication_id: str) -> bool:
    with _session() as session:
        medication = session.get(db_models.Medication, medication_id)
        if not medication:
            return False
        medication.is_active = False
        medication.updated_at = _now()
        session.add(medication)
        session.commit()
        return True


# Medication logs ----------------------------------------------------------
def create_medication_log(
    *,
    medication_id: str,
    senior_id: str,
    scheduled_time: datetime,
    status: str = "pending",
) -> str:
    if status not in MEDICATION_LOG_STATUSES:
        raise ValueError(f"Invalid medication log status: {status}")
    log = db_models.MedicationLog(
        id=str(uuid4()),
        medication_id=medication_id,
        senior_id=senior_id,
        scheduled_time=scheduled_time,
        status=status,
        created_at=_now(),
    )
    with _session() as session:
        session.add(log)
        session.commit()
    return log.id


def get_medication_log(log_id: str) -> Optional[db_models.MedicationLog]:
    with _session() as session:
        return session.get(db_models.MedicationLog, log_id)


def update_medication_log(
    log_id: str,
    status: str,
    taken_at: Optional[datetime] = None,
    snoozed_until: Optional[datetime] = None,
) -> bool:
    if status not in MEDICATION_LOG_STATUSES:
        raise ValueError(f"Invalid medication log status: {status}")
    with _session() as session:
        log = session.get(db_models.MedicationLog, log_id)
        if not log:
            return False
        log.status = status
        if taken_at is not None:
            log.taken_at = taken_at
        if snoozed_until is not None:
            log.snoozed_until = snoozed_until
        session.add(log)
        session.commit()
        return True


def get_log_for_slot(
    *,
    medication_id: str,
    senior_id: str,
    scheduled_time: datetime,
    day_start: datetime,
    day_end: datetime,
) -> Optional[db_models.MedicationLog]:
    with _session() as session:
        stmt = (
            select(db_models.MedicationLog)
            .where(db_models.MedicationLog.medication_id == medication_id)
            .where(db_models.MedicationLog.senior_id == senior_id)
            .where(db_models.MedicationLog.scheduled_time >= day_start)
            .where(db_models.MedicationLog.scheduled_time <= day_end)
            .where(db_models.MedicationLog.scheduled_time == scheduled_time)
            .limit(1)
        )
        return session.exec(stmt).first()


def list_stale_pending_logs(
    cutoff: datetime,
) -> List[Tuple[db_models.MedicationLog, db_models.Medication, db_models.Senior]]:
    with _session() as session:
        stmt = (
            select(db_models.MedicationLog, db_models.Medication, db_models.Senior)
            .join(db_models.Medication, db_models.Medication.id == db_models.MedicationLog.medication_id)
            .join(db_models.Senior, db_models.Senior.id == db_models.MedicationLog.senior_id)
            .where(db_models.MedicationLog.status == "pending")
            .where(db_models.MedicationLog.scheduled_time < cutoff)
            .order_by(db_models.MedicationLog.scheduled_time)
        )
        return list(session.exec(stmt))


def list_medication_logs(
    senior_id: str, start: datetime, end: datetime
) -> List[Tuple[db_models.MedicationLog, db_models.Medication]]:
    with _session() as session:
        stmt = (
            select(db_models.MedicationLog, db_models.Medication)
            .join(db_models.Medication, db_models.Medication.id == db_models.MedicationLog.medication_id)
            .where(db_models.MedicationLog.senior_id == senior_id)
            .where(db_models.MedicationLog.scheduled_time >= start)
            .where(db_models.MedicationLog.scheduled_time < end)
            .order_by(db_models.MedicationLog.scheduled_time)
        )
        return list(session.exec(stmt))


# Activity -----------------------------------------------------------------
def add_activity_log(*, senior_id: str, activity_type: str, activity_data: Optional[Dict[str, Any]] = None) -> str:
    entry = db_models.ActivityLog(
        id=str(uuid4()),
        senior_id=senior_id,
        activity_type=activity_type,
        activity_data=activity_data,
        logged_at=_now(),
    )
    with _session() as session:
        session.add(entry)
        session.commit()
    return entry.id


def list_activity_logs(senior_id: str, limit: int = 20) -> List[db_models.ActivityLog]:
    with _session() as session:
        stmt = select(db_models.ActivityLog).where(db_models.ActivityLog.senior_id == senior_id)
        stmt = stmt.order_by(db_models.ActivityLog.logged_at.desc()).limit(limit)
        return list(session.exec(stmt))


# Notifications ------------------------------------------------------------
def create_notification(
    *,
    type: str,
    title: str,
    message: str,
    senior_id: Optional[str] = None,
    guardian_id: Optional[str] = None,
    urgency_level: int = 2,
) -> str:
    notification = db_models.Notification(
        id=str(uuid4()),
        type=type,
        title=title,
        message=message,
        senior_id=senior_id,
        guardian_id=guardian_id,
        urgency_level=urgency_level,
        is_read=False,
        created_at=_now(),
    )
    with _session() as session:
        session.add(notification)
        session.commit()
    return notification.id


def list_notifications(
    senior_id: Optional[str] = None,
    guardian_id: Optional[str] = None,
    unread_only: bool = False,
    limit: int = 50,
) -> List[db_models.Notification]:
    with _session() as session:
        stmt = select(db_models.Notification)
        if senior_id:
            stmt = stmt.where(db_models.Notification.senior_id == senior_id)
        if guardian_id:
            stmt = stmt.where(db_models.Notification.guardian_id == guardian_id)
        if unread_only:
            stmt = stmt.where(db_models.Notification.is_read == False)  # noqa: E712
        stmt = stmt.order_by(db_models.Notification.created_at.desc()).limit(limit)
        return list(session.exec(stmt))


def mark_notification_read(notification_id: str) -> bool:
    with _session() as session:
        notification = session.get(db_models.Notification, notification_id)
        if not notification:
            return False
        notification.is_read = True
        session.add(notification)
        session.commit()
        return True


# Health vitals ------------------------------------------------------------
def record_vital(
    *,
    senior_id: str,
    vital_type: str,
    value: float,
    unit: str,
    notes: Optional[str] = None,
    recorded_at: Optional[datetime] = None,
) -> str:
    vital = db_models.HealthVital(
        id=str(uuid4()),
        senior_id=senior_id,
        vital_type=vital_type,
        value=value,
        unit=unit,
        notes=notes,
        recorded_at=recorded_at or _now(),
    )
    with _session() as session:
        session.add(vital)
        session.commit()
    return vital.id


def get_vital(vital_id: str) -> Optional[db_models.HealthVital]:
    with _session() as session:
        return session.get(db_models.HealthVital, vital_id)


def list_vitals(senior_id: str, vital_type: Optional[str] = None, limit: int = 5) -> List[db_models.HealthVital]:
    with _session() as session:
        stmt = select(db_models.HealthVital).where(db_models.HealthVital.senior_id == senior_id)
        if vital_type:
            stmt = stmt.where(db_models.HealthVital.vital_type == vital_type)
        stmt = stmt.order_by(db_models.HealthVital.recorded_at.desc()).limit(limit)
        return list(session.exec(stmt))


# Joy preferences ----------------------------------------------------------
def create_joy_preferences(*, senior_id: str, ai_suggestions_enabled: bool = True) -> str:
    prefs = db_models.JoyPreference(
        id=str(uuid4()),
        senior_id=senior_id,
        ai_suggestions_enabled=ai_suggestions_enabled,
        created_at=_now(),
        updated_at=_now(),
    )
    with _session() as session:
        session.add(prefs)
        session.commit()
    return prefs.id


def get_joy_preferences(senior_id: str) -> Optional[db_models.JoyPreference]:
    with _session() as session:
        stmt = select(db_models.JoyPreference).where(db_models.JoyPreference.senior_id == senior_id)
        return session.exec(stmt).first()


def update_joy_preferences(
    senior_id: str,
    ai_suggestions_enabled: Optional[bool] = None,
    suno_config: Optional[Any] = None,
    dekho_config: Optional[Any] = None,
    khel_config: Optional[Any] = None,
    yaadein_config: Optional[Any] = None,
) -> bool:
    with _session() as session:
        stmt = select(db_models.JoyPreference).where(db_models.JoyPreference.senior_id == senior_id)
        prefs = session.exec(stmt).first()
        if not prefs:
            return False
        if ai_suggestions_enabled is not None:
            prefs.ai_suggestions_enabled = ai_suggestions_enabled
        if suno_config is not None:
            prefs.suno_config = suno_config
        if dekho_config is not None:
            prefs.dekho_config = dekho_config
        if khel_config is not None:
            prefs.khel_config = khel_config
        if yaadein_config is not None:
            prefs.yaadein_config = yaadein_config
        prefs.updated_at = _now()
        session.add(prefs)
        session.commit()
        return True
