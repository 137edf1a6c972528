import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

VALUE_ERROR_PREFIX = "Value error, "


def error_response(status_code: int, message: str, headers: dict = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


def validation_message(errors: list) -> str:
    """Join every failing field's message, the way the frontend shows them."""
    messages = []
    for err in errors:
        msg = err.get("msg", "Invalid value")
        if msg.startswith(VALUE_ERROR_PREFIX):
            # Custom validators already carry a readable sentence
            messages.append(msg[len(VALUE_ERROR_PREFIX):])
            continue
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        messages.append(f"{loc[-1]}: {msg}" if loc else msg)
    return ", ".join(messages) or "Invalid request"


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return error_response(400, validation_message(exc.errors()))


async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("Database error on %s %s", request.method, request.url.path)
    return error_response(500, "Database error")


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(500, "Internal server error")


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, database_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
