from fastapi import HTTPException, Request

from ..services.session_cache import SessionCache


def get_session_cache(request: Request) -> SessionCache:
    cache = getattr(request.app.state, "session_cache", None)
    if cache is None:
        raise HTTPException(status_code=503, detail="Session cache not initialized")
    return cache
