"""Domain errors and the FastAPI handlers that render them.

Every handler produces the same JSON body::

    {"success": false, "error": "<message>"}

Status codes:
- 400 ValidationError, GatewayError raised for a rejected transaction
- 404 NotFoundError
- 500 NotificationError, PersistenceError, unreachable payment gateway

Usage:
    from wknd.exceptions import register_exception_handlers
    register_exception_handlers(app)
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_404_NOT_FOUND,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

logger = logging.getLogger(__name__)


class WkndError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ValidationError(WkndError):
    """Missing or malformed input."""

    status_code = HTTP_400_BAD_REQUEST
    default_message = "Missing required fields"


class NotFoundError(WkndError):
    """Unknown id or reference."""

    status_code = HTTP_404_NOT_FOUND
    default_message = "Not found"


class GatewayError(WkndError):
    """Payment provider rejected the request or could not be reached."""

    status_code = HTTP_400_BAD_REQUEST
    default_message = "Payment gateway error"


class NotificationError(WkndError):
    """Email transport or authentication failure."""

    default_message = "Failed to send email"


class PersistenceError(WkndError):
    """Store unreachable or write failure."""

    default_message = "Internal server error"


def error_body(message: str) -> dict:
    return {"success": False, "error": message}


async def wknd_error_handler(request: Request, exc: WkndError) -> JSONResponse:
    if exc.status_code >= HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.message))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render body/path validation failures as 400 with the failing fields."""
    fields = [".".join(str(part) for part in err.get("loc", ()) if part != "body") for err in exc.errors()]
    body = error_body("Invalid request")
    body["fields"] = [field for field in fields if field]
    return JSONResponse(status_code=HTTP_400_BAD_REQUEST, content=body)


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception: %s", exc)
    return JSONResponse(
        status_code=HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("Internal server error"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(WkndError, wknd_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
