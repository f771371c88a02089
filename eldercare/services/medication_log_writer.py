"""
Applies a caller-supplied action to a medication log.

Transitions are unconditional writes: the prior status is not checked, so
"taken" can overwrite a "missed" log.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from ..core.config import settings
from ..core.errors import ServiceError
from ..repositories import repository
from . import clock

logger = logging.getLogger(__name__)

ACTIONS = {"taken", "snooze", "create_pending"}


@dataclass
class ActionResult:
    message: str
    medication_log_id: Optional[str] = None
    snoozed_until: Optional[datetime] = None


def _require(value: Optional[str], field: str) -> str:
    if not value:
        raise ServiceError(http_code=400, message=f"{field} is required")
    return value


def mark_taken(medication_log_id: Optional[str], senior_id: Optional[str] = None) -> ActionResult:
    log_id = _require(medication_log_id, "medication_log_id")
    log = repository.get_medication_log(log_id)
    if not log:
        raise ServiceError(http_code=404, message="Medication log not found")

    repository.update_medication_log(log_id, "taken", taken_at=clock.utc_now())
    repository.add_activity_log(
        senior_id=senior_id or log.senior_id,
        activity_type="medication_taken",
        activity_data={"medication_log_id": log_id},
    )
    return ActionResult(message="Medication marked as taken", medication_log_id=log_id)


def snooze(medication_log_id: Optional[str], snooze_minutes: Optional[int] = None) -> ActionResult:
    log_id = _require(medication_log_id, "medication_log_id")
    minutes = snooze_minutes or settings.default_snooze_minutes
    snoozed_until = clock.utc_now() + timedelta(minutes=minutes)
    if not repository.update_medication_log(log_id, "snoozed", snoozed_until=snoozed_until):
        raise ServiceError(http_code=404, message="Medication log not found")
    return ActionResult(
        message=f"Snoozed for {minutes} minutes",
        medication_log_id=log_id,
        snoozed_until=snoozed_until,
    )


def create_pending(medication_id: Optional[str], senior_id: Optional[str]) -> ActionResult:
    med_id = _require(medication_id, "medication_id")
    sen_id = _require(senior_id, "senior_id")
    log_id = repository.create_medication_log(
        medication_id=med_id,
        senior_id=sen_id,
        scheduled_time=clock.utc_now(),
        status="pending",
    )
    return ActionResult(message="Pending log created", medication_log_id=log_id)


def apply_action(
    action: Optional[str],
    medication_log_id: Optional[str] = None,
    medication_id: Optional[str] = None,
    senior_id: Optional[str] = None,
    snooze_minutes: Optional[int] = None,
) -> ActionResult:
    if action not in ACTIONS:
        raise ServiceError(http_code=400, message="Invalid action")
    logger.info("Medication log action=%s log=%s", action, medication_log_id or "-")
    if action == "taken":
        return mark_taken(medication_log_id, senior_id)
    if action == "snooze":
        return snooze(medication_log_id, snooze_minutes)
    return create_pending(medication_id, senior_id)
