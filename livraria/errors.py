"""
Error taxonomy and the exception handlers that shape error responses.

Each error carries the HTTP status and the body key it is rendered under.
Routes keep the body shape observed by clients: gate, not-found and store
failures answer with ``{"error": ...}``, conflicts and login failures with
``{"message": ...}``. Validation failures add a ``details`` list of field
violations.
"""

from typing import Dict, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from livraria.logger import get_logger

logger = get_logger(__name__)


class AppError(Exception):
    """Base exception for request failures."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    body_key = "error"

    def __init__(self, message: str, body_key: Optional[str] = None):
        self.message = message
        if body_key is not None:
            self.body_key = body_key
        super().__init__(message)

    def to_body(self) -> Dict:
        return {self.body_key: self.message}


class ValidationError(AppError):
    """Inbound payload does not match its declared shape."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, violations: List[Dict[str, str]], message: str = "Dados inválidos"):
        self.violations = violations
        super().__init__(message)

    def to_body(self) -> Dict:
        return {self.body_key: self.message, "details": self.violations}


class AuthenticationError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT
    body_key = "message"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND


class StoreError(AppError):
    """Persistence failure. The message is generic; details only go to the log."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(exc: AppError) -> JSONResponse:
    headers = None
    if isinstance(exc, AuthenticationError) and exc.body_key == "error":
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(status_code=exc.status_code, content=exc.to_body(), headers=headers)


def setup_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers with the FastAPI app."""
    from livraria.validation import violations_from

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if exc.status_code >= 500:
            logger.error("Request failed", path=request.url.path, error=exc.message)
        return error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        violations = violations_from(exc.errors())
        logger.info("Request validation failed", path=request.url.path, violations=violations)
        return error_response(ValidationError(violations))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error(
            "Unhandled exception",
            path=request.url.path,
            method=request.method,
            error_type=type(exc).__name__,
            exc_info=exc,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Erro interno do servidor"},
        )
