import logging
import sys

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from .api import activity, auth, guardians, log_medication, medication_reminders, medications, notifications, seniors
from .core.config import settings
from .core.errors import ServiceError, service_error_handler, validation_error_handler
from .repositories import repository
from .services.session_cache import SessionCache

logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")
log = logging.getLogger(__name__)

if hasattr(sys.stdout, "reconfigure"):
    sys.stdout.reconfigure(encoding="utf-8")
if hasattr(sys.stderr, "reconfigure"):
    sys.stderr.reconfigure(encoding="utf-8")

app = FastAPI(title=settings.app_name, version=settings.app_version)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_methods=["*"],
    allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
)
app.add_exception_handler(ServiceError, service_error_handler)
app.add_exception_handler(RequestValidationError, validation_error_handler)


@app.on_event("startup")
def _startup() -> None:
    try:
        repository.init_db()
        cache = SessionCache(settings.session_file)
        cache.load()
        app.state.session_cache = cache
    except Exception:  # pragma: no cover
        log.exception("Startup error")
        raise


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


app.include_router(log_medication.router)
app.include_router(medication_reminders.router)
app.include_router(auth.router)
app.include_router(guardians.router)
app.include_router(seniors.router)
app.include_router(medications.router)
app.include_router(activity.router)
app.include_router(notifications.router)
