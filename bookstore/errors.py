from __future__ import annotations
import logging
from typing import List

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from bookstore.schemas import validation_messages

logger = logging.getLogger("bookstore.errors")


class BookstoreError(Exception):
    """Application error that knows which HTTP status it maps to."""

    status = 500

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.message = message
        if status is not None:
            self.status = status


class NotFoundError(BookstoreError):
    status = 404


class ConflictError(BookstoreError):
    # duplicates are reported as bad requests, not 409
    status = 400


def error_body(message: str | List[str], status: int) -> dict:
    return {"error": {"message": message, "status": status}}


async def _bookstore_error(request: Request, exc: BookstoreError) -> JSONResponse:
    message = exc.message
    if isinstance(exc, ConflictError):
        # same shape as validation failures
        message = [exc.message]
    return JSONResponse(error_body(message, exc.status), status_code=exc.status)


async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    messages = validation_messages(exc.errors())
    logger.info("request.invalid path=%s errors=%d", request.url.path, len(messages))
    return JSONResponse(error_body(messages, 400), status_code=400)


async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        error_body(exc.detail, exc.status_code),
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


async def _storage_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error("storage.failed path=%s", request.url.path, exc_info=exc)
    return JSONResponse(error_body("Internal Server Error", 500), status_code=500)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BookstoreError, _bookstore_error)
    app.add_exception_handler(RequestValidationError, _validation_error)
    app.add_exception_handler(StarletteHTTPException, _http_error)
    app.add_exception_handler(SQLAlchemyError, _storage_error)
