"""
Standard response envelope and exception handlers.

Successful calls return ``{"code": "00", "msg": "success", "data": ...}``.
Failures return ``{"code": <code>, "msg": "fail", "data": {"status":
<tag>, "msg": <message>}}`` with the HTTP status of the error.
"""

import logging
from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .exceptions import ApiException, ErrorStatus

logger = logging.getLogger(__name__)

SUCCESS_CODE = "00"


def success(data: Any = None) -> Dict[str, Any]:
    """Wrap ``data`` in the success envelope."""
    return {"code": SUCCESS_CODE, "msg": "success", "data": data}


def error_body(error_status: ErrorStatus, message: str) -> Dict[str, Any]:
    return {
        "code": error_status.code,
        "msg": "fail",
        "data": {"status": error_status.name, "msg": message},
    }


def error_response(error_status: ErrorStatus, message: str) -> JSONResponse:
    return JSONResponse(status_code=error_status.http_status, content=error_body(error_status, message))


def _classify_validation_error(error: Dict[str, Any]) -> ErrorStatus:
    """Map one pydantic error onto the client-facing status tag."""
    error_type = error.get("type", "")
    location = error.get("loc") or ("body",)
    if error_type == "json_invalid":
        return ErrorStatus.INVALID_JSON
    if location[0] in ("path", "query", "header"):
        if error_type == "missing":
            return ErrorStatus.NEED_MORE_PARAMETER
        return ErrorStatus.INVALID_PARAMETER
    return ErrorStatus.VALIDATION_EXCEPTION


def _validation_message(error: Dict[str, Any]) -> str:
    message = str(error.get("msg", "Validation failed"))
    # pydantic prefixes messages raised from validators
    if message.startswith("Value error, "):
        message = message[len("Value error, "):]
    field_path = [str(part) for part in (error.get("loc") or ())[1:]]
    if field_path:
        return f"{'.'.join(field_path)}: {message}"
    return message


async def api_exception_handler(request: Request, exc: ApiException) -> JSONResponse:
    logger.info("%s %s failed with %s", request.method, request.url.path, exc)
    return error_response(exc.error_status, exc.message)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = jsonable_encoder(exc.errors())
    first = errors[0] if errors else {}
    return error_response(_classify_validation_error(first), _validation_message(first))


# Errors raised by routing itself rather than by a service.
_HTTP_STATUS_TAGS = {
    404: ErrorStatus.RESOURCE_NOT_FOUND,
    405: ErrorStatus.METHOD_NOT_ALLOWED,
}


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    error_status = _HTTP_STATUS_TAGS.get(exc.status_code)
    if error_status is None:
        error_status = ErrorStatus.INTERNAL_SERVER_ERROR if exc.status_code >= 500 else ErrorStatus.INVALID_PARAMETER
    message = exc.detail if isinstance(exc.detail, str) else error_status.default_message
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(error_status, message),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(ErrorStatus.INTERNAL_SERVER_ERROR, ErrorStatus.INTERNAL_SERVER_ERROR.default_message)


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the envelope-producing handlers to ``app``."""
    app.add_exception_handler(ApiException, api_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
