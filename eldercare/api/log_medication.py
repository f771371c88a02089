import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter

from ..core.errors import ServiceError
from ..schemas import LogMedicationRequest, LogMedicationResponse
from ..services import medication_log_writer

router = APIRouter()
log = logging.getLogger(__name__)


def _iso_utc(dt: Optional[datetime]) -> Optional[str]:
    if dt is None:
        return None
    # Stored timestamps are naive UTC
    return dt.isoformat() + "Z"


@router.post("/log-medication", response_model=LogMedicationResponse)
def log_medication(req: LogMedicationRequest):
    """
    Applies one action to a medication log.

    - taken: marks the log taken and appends a medication_taken activity
    - snooze: snoozes for snooze_minutes (default 10)
    - create_pending: inserts an ad hoc pending log scheduled now

    Errors come back as {"success": false, "error": "..."} with 400, 404 or 500.
    """
    try:
        result = medication_log_writer.apply_action(
            req.action,
            medication_log_id=req.medication_log_id,
            medication_id=req.medication_id,
            senior_id=req.senior_id,
            snooze_minutes=req.snooze_minutes,
        )
    except ServiceError:
        raise
    except Exception as exc:
        log.exception("Log medication error")
        raise ServiceError(http_code=500, message=str(exc))

    return LogMedicationResponse(
        success=True,
        message=result.message,
        medication_log_id=result.medication_log_id,
        snoozed_until=_iso_utc(result.snoozed_until),
    )
