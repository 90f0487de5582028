"""Exception handlers rendering every failure as JSON with an ``error`` key."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..core.errors import InvalidPayloadError, StorageError

logger = logging.getLogger(__name__)


async def invalid_payload_handler(request: Request, exc: InvalidPayloadError) -> JSONResponse:
    logger.warning("Rejected payload on %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=400, content={"error": "Invalid data", "details": str(exc)}
    )


async def storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
    logger.error("Storage failure on %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=500, content={"error": "Server error", "details": str(exc)}
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # Routes match on method and path, so a wrong method is an unknown route.
    if exc.status_code in (404, 405):
        return JSONResponse(
            status_code=404,
            content={
                "error": "Not Found",
                "path": request.url.path,
                "message": "This endpoint does not exist",
            },
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s", request.url.path)
    return JSONResponse(
        status_code=500,
        content={"error": "Internal Server Error", "details": str(exc)},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(InvalidPayloadError, invalid_payload_handler)
    app.add_exception_handler(StorageError, storage_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)


__all__ = ["register_exception_handlers"]
