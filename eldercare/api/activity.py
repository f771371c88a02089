import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query, status

from ..repositories import repository
from ..schemas import ActivityRecord, HealthVitalCreate, HealthVitalRecord

router = APIRouter()
log = logging.getLogger(__name__)


@router.get("/activity", response_model=List[ActivityRecord])
def list_activity(senior_id: str, limit: int = 20):
    try:
        limit = max(1, min(limit, 200))
        return repository.list_activity_logs(senior_id=senior_id, limit=limit)
    except Exception as exc:
        log.exception("Error fetching activity")
        raise HTTPException(status_code=500, detail=str(exc))


@router.post("/vitals", response_model=HealthVitalRecord, status_code=status.HTTP_201_CREATED)
def record_vital(payload: HealthVitalCreate):
    if not repository.get_senior(payload.senior_id):
        raise HTTPException(status_code=404, detail="Senior not found")
    vital_id = repository.record_vital(
        senior_id=payload.senior_id,
        vital_type=payload.vital_type,
        value=payload.value,
        unit=payload.unit,
        notes=payload.notes,
        recorded_at=payload.recorded_at,
    )
    return repository.get_vital(vital_id)


@router.get("/vitals", response_model=List[HealthVitalRecord])
def list_vitals(
    senior_id: str = Query(..., description="Senior owning the readings"),
    vital_type: Optional[str] = Query(default=None, description="Filter by vital type"),
    limit: int = Query(default=5, ge=1, le=500),
):
    if not repository.get_senior(senior_id):
        raise HTTPException(status_code=404, detail="Senior not found")
    return repository.list_vitals(senior_id=senior_id, vital_type=vital_type, limit=limit)
