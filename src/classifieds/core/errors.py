"""Domain error taxonomy and its mapping onto HTTP responses."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ClassifiedsError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, errors: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.errors = errors

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON body describing this error."""
        payload: dict[str, Any] = {"error": self.message}
        if self.errors is not None:
            payload["errors"] = jsonable_encoder(self.errors)
        return payload


class ValidationError(ClassifiedsError):
    """Missing or malformed fields, or a uniqueness violation on write."""

    status_code = status.HTTP_400_BAD_REQUEST


class AuthError(ClassifiedsError):
    """Bad credentials or a missing/unknown access token."""

    status_code = status.HTTP_401_UNAUTHORIZED


class NotFoundError(ClassifiedsError):
    """A referenced entity does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class ServiceUnavailable(ClassifiedsError):
    """The persistence layer is not ready to serve requests."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


async def _handle_domain_error(request: Request, exc: ClassifiedsError) -> JSONResponse:
    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.warning("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


async def _handle_request_validation(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    error = ValidationError("Invalid request", errors=exc.errors())
    return JSONResponse(status_code=error.status_code, content=error.to_payload())


def register_exception_handlers(app: FastAPI) -> None:
    """Install handlers translating domain errors into JSON responses."""
    app.add_exception_handler(ClassifiedsError, _handle_domain_error)
    app.add_exception_handler(RequestValidationError, _handle_request_validation)
