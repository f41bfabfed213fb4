"""Exception handlers mapping failures onto the `{error, details?}` envelope."""

from __future__ import annotations

import structlog
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from postgrest.exceptions import APIError
from starlette.exceptions import HTTPException as StarletteHTTPException

from akwaaba_shared.errors import AkwaabaError

from akwaaba_api.responses import error_response

logger = structlog.get_logger(__name__)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    detail = exc.detail
    if isinstance(detail, dict) and "error" in detail:
        content = detail
    else:
        content = error_response(str(detail))
    return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Pydantic error contexts can hold exception instances; encode defensively.
    issues = jsonable_encoder(exc.errors(), custom_encoder={Exception: str})
    return JSONResponse(
        status_code=400,
        content=error_response("Validation failed", details=issues),
    )


async def domain_exception_handler(request: Request, exc: AkwaabaError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("domain_error", path=request.url.path, error=exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content=error_response(exc.message, details=exc.details),
    )


async def database_exception_handler(request: Request, exc: APIError) -> JSONResponse:
    logger.error(
        "database_error",
        path=request.url.path,
        code=getattr(exc, "code", None),
        error=getattr(exc, "message", None) or str(exc),
    )
    return JSONResponse(
        status_code=500,
        content=error_response(
            "Database operation failed",
            details=getattr(exc, "message", None) or str(exc),
        ),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error", path=request.url.path, error=str(exc))
    return JSONResponse(status_code=500, content=error_response("Internal server error"))


def install_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(AkwaabaError, domain_exception_handler)
    app.add_exception_handler(APIError, database_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
