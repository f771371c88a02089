"""
Periodic medication reminder scan.

Each run converts configured medication times that fall inside the due
window into pending medication logs (plus a guardian notification), then
flips pending logs past the missed threshold to "missed".

Runs are stateless and unlocked: two overlapping runs can both pass the
"already logged today" check and insert the same slot twice.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterable, List, Optional, Sequence, Tuple

from sqlalchemy.exc import SQLAlchemyError

from ..core.config import settings
from ..repositories import db_models, repository
from . import clock

logger = logging.getLogger(__name__)

REMINDER_NOTIFICATION = "medication_reminder"
MISSED_NOTIFICATION = "medication_missed"
URGENCY_HIGH = 1
URGENCY_NORMAL = 2


@dataclass
class DueMedication:
    medication_id: str
    medication_name: str
    dosage: str
    senior_id: str
    senior_name: str
    scheduled_time: str
    hour: int
    minute: int


@dataclass
class ScanSummary:
    medications_due: int
    created: int
    missed_updated: int
    checked_at: str


def is_due(current_minutes: int, medication_minutes: int, window: Optional[int] = None) -> bool:
    window = settings.due_window_minutes if window is None else window
    return abs(current_minutes - medication_minutes) <= window


def find_due_medications(
    rows: Iterable[Tuple[db_models.Medication, db_models.Senior]],
    current_minutes: int,
    window: Optional[int] = None,
) -> List[DueMedication]:
    due: List[DueMedication] = []
    for med, senior in rows:
        times = med.times if isinstance(med.times, list) else []
        for value in times:
            try:
                hour, minute = clock.parse_hhmm(str(value))
            except ValueError:
                logger.warning("Skipping malformed time %r on medication %s", value, med.id)
                continue
            if not is_due(current_minutes, clock.minutes_of_day(hour, minute), window):
                continue
            due.append(
                DueMedication(
                    medication_id=med.id,
                    medication_name=med.name,
                    dosage=med.dosage,
                    senior_id=med.senior_id,
                    senior_name=(senior.name if senior else None) or "Senior",
                    scheduled_time=f"{hour:02d}:{minute:02d}",
                    hour=hour,
                    minute=minute,
                )
            )
    return due


def _create_reminder(med: DueMedication, now: datetime) -> bool:
    slot = clock.local_slot(now, med.hour, med.minute)
    day_start, day_end = clock.local_day_bounds(now)
    existing = repository.get_log_for_slot(
        medication_id=med.medication_id,
        senior_id=med.senior_id,
        scheduled_time=slot,
        day_start=day_start,
        day_end=day_end,
    )
    if existing:
        return False

    repository.create_medication_log(
        medication_id=med.medication_id,
        senior_id=med.senior_id,
        scheduled_time=slot,
        status="pending",
    )
    repository.create_notification(
        type=REMINDER_NOTIFICATION,
        title=f"💊 Medicine Time for {med.senior_name}",
        message=f"{med.medication_name} ({med.dosage}) is due at {med.scheduled_time}",
        senior_id=med.senior_id,
        guardian_id=repository.get_primary_guardian_id(med.senior_id),
        urgency_level=URGENCY_NORMAL,
    )
    logger.info("Created reminder for %s for %s", med.medication_name, med.senior_name)
    return True


def create_due_reminders(due: Sequence[DueMedication], now: datetime) -> int:
    created = 0
    for med in due:
        try:
            if _create_reminder(med, now):
                created += 1
        except SQLAlchemyError:
            logger.exception("Error creating reminder for medication %s", med.medication_id)
    return created


def mark_missed(now: datetime, threshold_minutes: Optional[int] = None) -> int:
    threshold = settings.missed_threshold_minutes if threshold_minutes is None else threshold_minutes
    cutoff = now - timedelta(minutes=threshold)
    stale = repository.list_stale_pending_logs(cutoff)
    for log, med, senior in stale:
        try:
            repository.update_medication_log(log.id, "missed")
            local_time = clock.to_facility(log.scheduled_time).strftime("%H:%M")
            repository.create_notification(
                type=MISSED_NOTIFICATION,
                title="⚠️ Missed Medicine Alert",
                message=f"{senior.name} missed {med.name} ({med.dosage}) scheduled at {local_time}",
                senior_id=log.senior_id,
                guardian_id=repository.get_primary_guardian_id(log.senior_id),
                urgency_level=URGENCY_HIGH,
            )
            logger.info("Marked medication as missed: %s for %s", med.name, senior.name)
        except SQLAlchemyError:
            logger.exception("Error marking medication log %s as missed", log.id)
    return len(stale)


def scan(now: Optional[datetime] = None) -> ScanSummary:
    now = now or clock.utc_now()
    local_now = clock.to_facility(now)
    current_minutes = clock.minutes_of_day(local_now.hour, local_now.minute)
    logger.info("Checking medications at %s facility time", local_now.strftime("%H:%M"))

    due = find_due_medications(repository.list_active_medications(), current_minutes)
    logger.info("Found %d medications due", len(due))
    created = create_due_reminders(due, now)
    missed = mark_missed(now)

    return ScanSummary(
        medications_due=len(due),
        created=created,
        missed_updated=missed,
        checked_at=clock.isoformat_local(now),
    )
