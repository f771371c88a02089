import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException

from ..repositories import repository
from ..schemas import NotificationRecord

router = APIRouter()
log = logging.getLogger(__name__)


@router.get("/notifications", response_model=List[NotificationRecord])
def list_notifications(
    senior_id: Optional[str] = None,
    guardian_id: Optional[str] = None,
    unread_only: bool = False,
    limit: int = 50,
):
    try:
        limit = max(1, min(limit, 200))
        return repository.list_notifications(
            senior_id=senior_id, guardian_id=guardian_id, unread_only=unread_only, limit=limit
        )
    except Exception as exc:
        log.exception("Error listing notifications")
        raise HTTPException(status_code=500, detail=str(exc))


@router.patch("/notifications/{notification_id}/read")
def mark_read(notification_id: str):
    ok = repository.mark_notification_read(notification_id)
    if not ok:
        raise HTTPException(status_code=404, detail="Notification not found")
    return {"status": "ok"}
