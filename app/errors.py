import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AppError(Exception):
    status_code = 500
    message = "Server error"

    def __init__(self, detail: str | None = None):
        # detail остаётся только в логах сервера, клиенту уходит message
        super().__init__(detail or self.message)
        self.detail = detail or self.message


class ValidationError(AppError):
    status_code = 400
    message = "Missing required fields"


class AuthorizationError(AppError):
    status_code = 401
    message = "Unauthorized"


class StorageError(AppError):
    status_code = 500
    message = "Server error"


def _error_response(exc_class: type[AppError]) -> JSONResponse:
    return JSONResponse(status_code=exc_class.status_code, content={"error": exc_class.message})


async def app_error_handler(request: Request, exc: AppError):
    if isinstance(exc, StorageError):
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.detail,
                     exc_info=exc.__cause__ or exc)
    else:
        logger.warning("%s %s rejected: %s", request.method, request.url.path, exc.detail)
    return _error_response(type(exc))


async def request_validation_handler(request: Request, exc: RequestValidationError):
    logger.warning("%s %s invalid payload: %s", request.method, request.url.path, exc.errors())
    return _error_response(ValidationError)


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return _error_response(StorageError)


def register_exception_handlers(app: FastAPI):
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
