import logging

from fastapi import APIRouter, HTTPException, status

from ..repositories import repository
from ..schemas import JoyPreferences, JoyPreferencesUpdate, SeniorCreate, SeniorProfile, SeniorUpdate

router = APIRouter()
log = logging.getLogger(__name__)


@router.post("/seniors", response_model=SeniorProfile, status_code=status.HTTP_201_CREATED)
def onboard_senior(payload: SeniorCreate):
    """
    Guardian onboarding.

    1. Creates the senior with the family PIN
    2. Links the guardian (primary when it is their first senior)
    3. Seeds default joy preferences

    Steps are separate writes; a failure after step 1 leaves the senior in place.
    """
    guardian = repository.get_guardian(payload.guardian_id)
    if not guardian:
        raise HTTPException(status_code=404, detail="Guardian not found")
    try:
        already_linked = repository.list_guardian_seniors(payload.guardian_id)
        senior_id = repository.create_senior(
            name=payload.name,
            preferred_name=payload.preferred_name,
            photo_url=payload.photo_url,
            language=payload.language,
            chronic_conditions=[c.strip() for c in payload.chronic_conditions if c.strip()],
            emergency_contacts=[c.model_dump() for c in payload.emergency_contacts if c.name and c.phone],
            nudge_frequency=payload.nudge_frequency,
            family_pin=payload.family_pin,
            guardian_email=guardian.email,
        )
        repository.link_guardian_senior(
            guardian_id=payload.guardian_id,
            senior_id=senior_id,
            relationship=payload.relationship,
            is_primary=not already_linked,
        )
        repository.create_joy_preferences(senior_id=senior_id, ai_suggestions_enabled=True)
    except Exception as exc:
        log.exception("Onboarding error")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))
    log.info("Senior onboarded: senior_id=%s guardian_id=%s", senior_id, payload.guardian_id)
    return repository.get_senior(senior_id)


@router.get("/seniors/{senior_id}", response_model=SeniorProfile)
def get_senior(senior_id: str):
    senior = repository.get_senior(senior_id)
    if not senior:
        raise HTTPException(status_code=404, detail="Senior not found")
    return senior


@router.put("/seniors/{senior_id}")
def update_senior(senior_id: str, payload: SeniorUpdate):
    contacts = None
    if payload.emergency_contacts is not None:
        contacts = [c.model_dump() for c in payload.emergency_contacts]
    ok = repository.update_senior(
        senior_id=senior_id,
        name=payload.name,
        preferred_name=payload.preferred_name,
        photo_url=payload.photo_url,
        language=payload.language,
        chronic_conditions=payload.chronic_conditions,
        emergency_contacts=contacts,
        nudge_frequency=payload.nudge_frequency,
        family_pin=payload.family_pin,
    )
    if not ok:
        raise HTTPException(status_code=404, detail="Senior not found")
    return {"status": "ok"}


@router.delete("/seniors/{senior_id}")
def delete_senior(senior_id: str):
    try:
        ok = repository.delete_senior_cascade(senior_id)
    except Exception as exc:
        log.exception("Error deleting senior %s", senior_id)
        raise HTTPException(status_code=500, detail=str(exc))
    if not ok:
        raise HTTPException(status_code=404, detail="Senior not found")
    return {"status": "deleted"}


@router.get("/seniors/{senior_id}/joy-preferences", response_model=JoyPreferences)
def get_joy_preferences(senior_id: str):
    prefs = repository.get_joy_preferences(senior_id)
    if not prefs:
        raise HTTPException(status_code=404, detail="Joy preferences not found")
    return prefs


@router.put("/seniors/{senior_id}/joy-preferences")
def update_joy_preferences(senior_id: str, payload: JoyPreferencesUpdate):
    ok = repository.update_joy_preferences(
        senior_id,
        ai_suggestions_enabled=payload.ai_suggestions_enabled,
        suno_config=payload.suno_config,
        dekho_config=payload.dekho_config,
        khel_config=payload.khel_config,
        yaadein_config=payload.yaadein_config,
    )
    if not ok:
        raise HTTPException(status_code=404, detail="Joy preferences not found")
    return {"status": "ok"}
