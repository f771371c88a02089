import logging

from fastapi import APIRouter, Depends, HTTPException

from ..repositories import repository
from ..schemas import AuthResponse, DualKeyRequest, PinRequest, RoleUpdate, SeniorModeRequest
from ..services import credentials
from ..services.session_cache import SessionCache
from .deps import get_session_cache

router = APIRouter()
log = logging.getLogger(__name__)


def _reply(result: credentials.PinValidationResult, cache: SessionCache) -> AuthResponse:
    if not result.success:
        return AuthResponse(success=False, error=result.error)
    return AuthResponse(success=True, session=cache.state)


@router.post("/auth/pin", response_model=AuthResponse)
def validate_pin(payload: PinRequest, cache: SessionCache = Depends(get_session_cache)):
    return _reply(credentials.validate_pin(payload.pin, cache=cache), cache)


@router.post("/auth/dual-key", response_model=AuthResponse)
def validate_dual_key(payload: DualKeyRequest, cache: SessionCache = Depends(get_session_cache)):
    return _reply(credentials.validate_dual_key(payload.phone, payload.pin, cache=cache), cache)


@router.post("/auth/senior-mode", response_model=AuthResponse)
def enter_senior_mode(payload: SeniorModeRequest, cache: SessionCache = Depends(get_session_cache)):
    if not repository.get_guardian(payload.guardian_id):
        raise HTTPException(status_code=404, detail="Guardian not found")
    result = credentials.enter_senior_mode(
        payload.guardian_id, payload.pin, senior_id=payload.senior_id, cache=cache
    )
    return _reply(result, cache)


@router.post("/auth/guardian/{guardian_id}", response_model=AuthResponse)
def start_guardian_session(guardian_id: str, cache: SessionCache = Depends(get_session_cache)):
    if not repository.get_guardian(guardian_id):
        raise HTTPException(status_code=404, detail="Guardian not found")
    return AuthResponse(success=True, session=cache.start_guardian(guardian_id))


@router.get("/auth/session", response_model=AuthResponse)
def get_session(cache: SessionCache = Depends(get_session_cache)):
    return AuthResponse(success=cache.mode is not None, session=cache.state)


@router.post("/auth/role", response_model=AuthResponse)
def set_role(payload: RoleUpdate, cache: SessionCache = Depends(get_session_cache)):
    if cache.senior is None:
        raise HTTPException(status_code=409, detail="No active senior session")
    return AuthResponse(success=True, session=cache.set_role(payload.role))


@router.post("/auth/exit-senior-mode", response_model=AuthResponse)
def exit_senior_mode(cache: SessionCache = Depends(get_session_cache)):
    return AuthResponse(success=True, session=cache.exit_senior_mode())


@router.post("/auth/logout")
def logout(cache: SessionCache = Depends(get_session_cache)):
    cache.clear()
    log.info("Session cleared")
    return {"status": "ok"}
