"""Error Handlers — global exception handlers for the PixelVerse API.

Invariants:
    - PvsError → its http_status with {"error": message} (+ "message" when a detail exists)
    - RequestValidationError → 400 {"errors": [{field, message, type}]}
    - Exception (catch-all) → 500 {"error": str(exc)}, generic text when empty

Design Decisions:
    - Three-layer handler: domain (PvsError), validation (Pydantic), catch-all (Exception)
    - Extracted from main.py (ADR: import fan-out < 10)
    - Field paths drop the body/query/path prefix: clients see "title", not "body.title"
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from pvs_api.core.errors import PvsError

logger = logging.getLogger(__name__)

_LOCATION_PREFIXES = ("body", "query", "path", "header")
GENERIC_ERROR = "An unexpected error occurred."


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_pvs_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_pvs_error_handler(app: FastAPI) -> None:

    @app.exception_handler(PvsError)
    async def pvs_error_handler(request: Request, exc: PvsError):
        """Handle all PixelVerse domain/infrastructure errors."""
        log = logger.warning if exc.http_status < 500 else logger.error
        log(
            f"PvsError: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=build_validation_error_response(exc.errors()),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": str(exc) or GENERIC_ERROR},
        )


def _field_path(loc) -> str:
    parts = list(loc)
    if parts and parts[0] in _LOCATION_PREFIXES:
        parts = parts[1:]
    return ".".join(str(p) for p in parts)


def build_validation_error_response(errors: list[dict]) -> dict:
    return {
        "errors": [
            {
                "field": _field_path(e["loc"]),
                "message": e["msg"],
                "type": e["type"],
            }
            for e in errors
        ],
    }
