"""
Exception handlers rendering every failure in the {success, error} envelope
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.exceptions import DuplicateOrder, InvalidTransition, MenuItemNotFound, OrderNotFound, StoreError

logger = logging.getLogger(__name__)


def error_response(status_code: int, error: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": error})


async def store_error_handler(request: Request, exc: StoreError):
    logger.error("Store error on %s %s: %s", request.method, request.url.path, exc, exc_info=exc.__cause__)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))


async def not_found_handler(request: Request, exc: Exception):
    return error_response(status.HTTP_404_NOT_FOUND, str(exc))


async def conflict_handler(request: Request, exc: Exception):
    return error_response(status.HTTP_409_CONFLICT, str(exc))


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    where = ".".join(str(part) for part in first.get("loc", ()))
    message = f"{where}: {first.get('msg', 'invalid request')}" if where else "Invalid request"
    return JSONResponse(
        status_code=422,
        content={"success": False, "error": message},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StoreError, store_error_handler)
    app.add_exception_handler(OrderNotFound, not_found_handler)
    app.add_exception_handler(MenuItemNotFound, not_found_handler)
    app.add_exception_handler(InvalidTransition, conflict_handler)
    app.add_exception_handler(DuplicateOrder, conflict_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
