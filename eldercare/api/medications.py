import logging
from datetime import timedelta
from typing import List

from fastapi import APIRouter, HTTPException, status

from ..repositories import repository
from ..schemas import MedicationCreate, MedicationLogRecord, MedicationRecord, MedicationUpdate
from ..services import clock

router = APIRouter()
log = logging.getLogger(__name__)


@router.post("/medications", response_model=MedicationRecord, status_code=status.HTTP_201_CREATED)
def create_medication(payload: MedicationCreate):
    if not repository.get_senior(payload.senior_id):
        raise HTTPException(status_code=404, detail="Senior not found")
    try:
        medication_id = repository.create_medication(
            senior_id=payload.senior_id,
            name=payload.name,
            dosage=payload.dosage,
            frequency=payload.frequency,
            times=payload.times,
            color=payload.color,
            instructions=payload.instructions,
        )
    except Exception as exc:
        log.exception("Error creating medication")
        raise HTTPException(status_code=500, detail=str(exc))
    return repository.get_medication(medication_id)


@router.get("/medications", response_model=List[MedicationRecord])
def list_medications(senior_id: str, include_inactive: bool = False):
    return repository.list_medications(senior_id, active_only=not include_inactive)


@router.get("/medications/{medication_id}", response_model=MedicationRecord)
def get_medication(medication_id: str):
    medication = repository.get_medication(medication_id)
    if not medication:
        raise HTTPException(status_code=404, detail="Medication not found")
    return medication


@router.put("/medications/{medication_id}")
def update_medication(medication_id: str, payload: MedicationUpdate):
    ok = repository.update_medication_fields(
        medication_id=medication_id,
        name=payload.name,
        dosage=payload.dosage,
        frequency=payload.frequency,
        times=payload.times,
        color=payload.color,
        instructions=payload.instructions,
    )
    if not ok:
        raise HTTPException(status_code=404, detail="Medication not found")
    return {"status": "ok"}


@router.delete("/medications/{medication_id}")
def delete_medication(medication_id: str):
    # Soft delete: the scanner only reads active medications
    ok = repository.deactivate_medication(medication_id)
    if not ok:
        raise HTTPException(status_code=404, detail="Medication not found")
    return {"status": "inactive"}


@router.get("/medication-logs", response_model=List[MedicationLogRecord])
def list_today_logs(senior_id: str):
    """Today's medication logs for a senior, facility-local day."""
    try:
        start, _ = clock.local_day_bounds(clock.utc_now())
        rows = repository.list_medication_logs(senior_id, start, start + timedelta(days=1))
    except Exception as exc:
        log.exception("Error listing medication logs")
        raise HTTPException(status_code=500, detail=str(exc))
    return [
        MedicationLogRecord(
            id=entry.id,
            medication_id=entry.medication_id,
            medication_name=med.name,
            dosage=med.dosage,
            senior_id=entry.senior_id,
            scheduled_time=entry.scheduled_time,
            status=entry.status,
            taken_at=entry.taken_at,
            snoozed_until=entry.snoozed_until,
        )
        for entry, med in rows
    ]
