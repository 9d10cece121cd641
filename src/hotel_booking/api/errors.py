"""Mapping of service errors to HTTP responses."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from hotel_booking.domain.errors import (
    ConcurrentUpdateError,
    HotelNotFoundError,
    HotelServiceError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    """Install handlers that turn service errors into JSON responses."""

    @app.exception_handler(HotelNotFoundError)
    async def not_found_handler(
        request: Request, exc: HotelNotFoundError
    ) -> JSONResponse:
        return JSONResponse(status_code=404, content={"message": "Hotel not found"})

    @app.exception_handler(ValidationError)
    async def validation_handler(
        request: Request, exc: ValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={
                "message": [
                    {"field": problem.field, "message": problem.message}
                    for problem in exc.problems
                ]
            },
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={
                "message": [
                    {"field": _field_name(error["loc"]), "message": error["msg"]}
                    for error in exc.errors()
                ]
            },
        )

    @app.exception_handler(ConcurrentUpdateError)
    async def conflict_handler(
        request: Request, exc: ConcurrentUpdateError
    ) -> JSONResponse:
        logger.warning(
            "Update gave up after version conflicts",
            extra={"record_id": exc.record_id, "attempts": exc.attempts},
        )
        return JSONResponse(
            status_code=409, content={"message": "Hotel was modified concurrently"}
        )

    @app.exception_handler(HotelServiceError)
    async def internal_handler(
        request: Request, exc: HotelServiceError
    ) -> JSONResponse:
        logger.error(
            "Request failed",
            exc_info=exc,
            extra={"path": request.url.path},
        )
        return JSONResponse(status_code=500, content={"message": "Something went wrong"})


def _field_name(loc: tuple[object, ...]) -> str:
    # Drop the leading "body"/"query" segment FastAPI adds.
    parts = [str(part) for part in loc[1:]] or [str(part) for part in loc]
    return ".".join(parts)
