import logging
from typing import List

from fastapi import APIRouter, HTTPException, status

from ..repositories import repository
from ..schemas import GuardianCreate, GuardianProfile, LinkedSenior

router = APIRouter()
log = logging.getLogger(__name__)


@router.post("/guardians", response_model=GuardianProfile, status_code=status.HTTP_201_CREATED)
def create_guardian(payload: GuardianCreate):
    guardian_id = repository.create_guardian(
        full_name=payload.full_name,
        phone=payload.phone,
        email=payload.email,
    )
    log.info("Guardian registered: %s", guardian_id)
    return repository.get_guardian(guardian_id)


@router.get("/guardians/{guardian_id}", response_model=GuardianProfile)
def get_guardian(guardian_id: str):
    guardian = repository.get_guardian(guardian_id)
    if not guardian:
        raise HTTPException(status_code=404, detail="Guardian not found")
    return guardian


@router.get("/guardians/{guardian_id}/seniors", response_model=List[LinkedSenior])
def list_linked_seniors(guardian_id: str):
    if not repository.get_guardian(guardian_id):
        raise HTTPException(status_code=404, detail="Guardian not found")
    return [
        LinkedSenior(
            id=senior.id,
            name=senior.name,
            preferred_name=senior.preferred_name,
            photo_url=senior.photo_url,
            language=senior.language,
            is_primary=bool(link.is_primary),
        )
        for senior, link in repository.list_guardian_seniors(guardian_id)
    ]
