"""
Error types and handlers for the price compare API.

Every error response body has the shape ``{"error": "<message>"}``.
"""
import logging
from contextlib import contextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base exception for errors that map to an HTTP response."""

    def __init__(self, message: str, status_code: int = 500):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class NotFoundError(AppError):
    """A referenced product, store or price does not exist."""

    def __init__(self, message: str):
        super().__init__(message, status_code=status.HTTP_404_NOT_FOUND)


class InvalidImageError(AppError):
    """Uploaded file could not be read as an image."""

    def __init__(self, message: str = "La imagen no es válida"):
        super().__init__(message, status_code=status.HTTP_400_BAD_REQUEST)


class ImageUploadError(AppError):
    """The hosted image service is unreachable or rejected the upload."""

    def __init__(self, reason: str | None = None):
        self.reason = reason
        super().__init__("Error al subir la imagen", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


@contextmanager
def operation_error(message: str):
    """Turn unexpected failures inside a request into a 500 with ``message``."""
    try:
        yield
    except (AppError, StarletteHTTPException, ValidationError):
        raise
    except Exception:
        logger.error(message, exc_info=True)
        raise AppError(message)


def _validation_response(errors: list) -> JSONResponse:
    details = []
    for error in errors:
        field = " -> ".join(str(x) for x in error["loc"])
        details.append(f"{field}: {error['msg']}")

    logger.warning(f"Validation error: {details}")

    return JSONResponse(
        status_code=422,
        content=jsonable_encoder({"error": "Datos inválidos", "details": details}),
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register error handlers with the FastAPI app."""

    @app.exception_handler(AppError)
    async def app_error(request: Request, exc: AppError):
        if isinstance(exc, ImageUploadError):
            logger.error(f"Image upload failed: {exc.reason}")
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_error(request: Request, exc: RequestValidationError):
        return _validation_response(exc.errors())

    @app.exception_handler(ValidationError)
    async def body_validation_error(request: Request, exc: ValidationError):
        return _validation_response(exc.errors())

    @app.exception_handler(Exception)
    async def internal_server_error(request: Request, exc: Exception):
        logger.error(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Error interno del servidor"},
        )
