from __future__ import annotations

from typing import Any, cast

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from cuebook.api.middleware.request_id import get_request_id
from cuebook.application.errors import (
    AccountAlreadyExistsError,
    AccountNotFoundError,
    AuthenticationError,
    BookingValidationError,
    ForbiddenError,
    InvalidTransitionError,
    ReservationNotFoundError,
    ResourceUnavailableError,
)


def _error_response(
    *,
    status_code: int,
    code: str,
    message: str,
    details: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "code": code,
                "message": message,
                "details": jsonable_encoder(details or {}),
            },
            "requestId": get_request_id(),
        },
        headers=headers,
    )


def _exception_handler(
    status_code: int,
    code: str,
    headers: dict[str, str] | None = None,
):
    async def handler(_: Request, exc: Exception) -> JSONResponse:
        details = getattr(exc, "details", None)
        return _error_response(
            status_code=status_code,
            code=code,
            message=str(exc),
            details=details if isinstance(details, dict) else None,
            headers=headers,
        )

    return handler


async def _http_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    http_exc = cast(StarletteHTTPException, exc)
    message = str(http_exc.detail) if http_exc.detail else "request failed"
    code = "HTTP_ERROR"
    if http_exc.status_code == 404:
        code = "NOT_FOUND"
    elif http_exc.status_code == 400:
        code = "BAD_REQUEST"
    elif http_exc.status_code == 405:
        code = "METHOD_NOT_ALLOWED"
    elif http_exc.status_code == 409:
        code = "CONFLICT"
    return _error_response(
        status_code=http_exc.status_code,
        code=code,
        message=message,
    )


# Raw inputs are not echoed back; they may hold values JSON cannot encode.
def _describe_error(error: dict[str, Any]) -> dict[str, Any]:
    return {"loc": list(error.get("loc", ())), "msg": error.get("msg"), "type": error.get("type")}


async def _validation_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    validation_exc = cast(RequestValidationError, exc)
    return _error_response(
        status_code=400,
        code="INVALID_REQUEST",
        message="request validation failed",
        details={"errors": [_describe_error(error) for error in validation_exc.errors()]},
    )


def register_exception_handlers(app: FastAPI) -> None:
    mappings: list[tuple[type[Exception], int, str]] = [
        (BookingValidationError, 400, "VALIDATION_ERROR"),
        (ResourceUnavailableError, 409, "RESOURCE_UNAVAILABLE"),
        (ReservationNotFoundError, 404, "RESERVATION_NOT_FOUND"),
        (AccountNotFoundError, 404, "ACCOUNT_NOT_FOUND"),
        (ForbiddenError, 403, "FORBIDDEN"),
        (InvalidTransitionError, 409, "INVALID_RESERVATION_TRANSITION"),
        (AccountAlreadyExistsError, 409, "ACCOUNT_EXISTS"),
    ]

    for exc_cls, status_code, code in mappings:
        app.add_exception_handler(exc_cls, _exception_handler(status_code, code))

    app.add_exception_handler(
        AuthenticationError,
        _exception_handler(401, "UNAUTHORIZED", headers={"WWW-Authenticate": "Bearer"}),
    )
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
