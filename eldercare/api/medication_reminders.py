import logging

from fastapi import APIRouter

from ..core.errors import ServiceError
from ..schemas import ReminderScanResponse
from ..services import reminder_scanner

router = APIRouter()
log = logging.getLogger(__name__)


@router.post("/medication-reminders", response_model=ReminderScanResponse)
def medication_reminders():
    """
    Runs one reminder scan. Meant to be hit by an external scheduler; no body.
    """
    try:
        summary = reminder_scanner.scan()
    except Exception as exc:
        log.exception("Medication reminder error")
        raise ServiceError(http_code=500, message=str(exc))
    return ReminderScanResponse(
        success=True,
        medications_due=summary.medications_due,
        created=summary.created,
        missed_updated=summary.missed_updated,
        checked_at=summary.checked_at,
    )
