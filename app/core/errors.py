from fastapi import Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette import status
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging

from app.services.errors import (
    ConversionError,
    InvalidAmountError,
    OfflineError,
    ServiceError,
)

logger = logging.getLogger("app.errors")

_CONVERSION_STATUS = {
    InvalidAmountError: status.HTTP_400_BAD_REQUEST,
    OfflineError: status.HTTP_503_SERVICE_UNAVAILABLE,
    ServiceError: status.HTTP_502_BAD_GATEWAY,
}


def http_error_handler(request: Request, exc: StarletteHTTPException):  # type: ignore
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        detail = exc.detail
        if detail == "Not Found":
            detail = f"No route for {request.method} {request.url.path}"
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"error": "not_found", "detail": detail},
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": "http_error", "detail": exc.detail},
        headers=getattr(exc, "headers", None),
    )


def validation_error_handler(request: Request, exc: RequestValidationError):  # type: ignore
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "validation_error",
            "detail": jsonable_errors(exc),
        },
    )


def conversion_error_handler(request: Request, exc: ConversionError):  # type: ignore
    code = _CONVERSION_STATUS.get(type(exc), status.HTTP_400_BAD_REQUEST)
    return JSONResponse(
        status_code=code,
        content={"error": exc.code, "detail": exc.detail},
    )


def server_error_handler(request: Request, exc: Exception):  # type: ignore
    logger.error("unhandled exception", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "internal_error",
            "detail": "An unexpected error occurred.",
        },
    )


def jsonable_errors(exc: RequestValidationError):
    # ctx may hold the raw ValueError raised by a validator
    out = []
    for err in exc.errors():
        err = dict(err)
        if "ctx" in err:
            err["ctx"] = {k: str(v) for k, v in err["ctx"].items()}
        out.append(err)
    return out
