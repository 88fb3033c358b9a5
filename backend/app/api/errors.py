"""
Exception handlers mapping every failure onto the response envelope.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.exceptions import TeamServiceError
from app.schemas.response import ErrorResponse

logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str, error=None, headers=None) -> JSONResponse:
    body = ErrorResponse(message=message, error=error)
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(body, exclude_none=True),
        headers=headers,
    )


async def team_service_error_handler(request: Request, exc: TeamServiceError) -> JSONResponse:
    logger.info(f"{request.method} {request.url.path} rejected: {exc.code} ({exc.message})")
    return error_response(exc.status_code, exc.message, exc.to_error())


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(
        exc.status_code,
        str(exc.detail),
        {"code": f"HTTP{exc.status_code}"},
        headers=getattr(exc, "headers", None),
    )


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = [
        {"field": ".".join(str(p) for p in err["loc"] if p != "body"), "message": err["msg"]}
        for err in exc.errors()
    ]
    if any(err["type"] == "missing" for err in exc.errors()):
        message = "Please provide all required fields"
    else:
        message = f"Invalid request: {details[0]['message']}" if details else "Invalid request"
    return error_response(
        status.HTTP_400_BAD_REQUEST,
        message,
        {"code": "ValidationError", "details": details},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TeamServiceError, team_service_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
