from fastapi import Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

# Endpoints that always answer {"success": ..., ...}
SERVICE_PATHS = {"/log-medication", "/medication-reminders"}


class ServiceError(Exception):
    """Error raised by the service layer and rendered as {success: false, error}."""

    def __init__(self, http_code: int = 400, message: str = ""):
        super().__init__(message)
        self.http_code = http_code
        self.message = message


def _failure(http_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=http_code, content={"success": False, "error": message})


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    return _failure(exc.http_code, exc.message)


def _describe(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    field = ".".join(part for part in first.get("loc", ()) if isinstance(part, str) and part != "body")
    message = first.get("msg", "Invalid value")
    return f"{field}: {message}" if field else message


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """400 {success: false, error} on the service endpoints, FastAPI's 422 elsewhere."""
    if request.url.path in SERVICE_PATHS:
        return _failure(400, _describe(exc))
    return await request_validation_exception_handler(request, exc)
