"""API error type and the exception handlers that render ``{code, message, details}``."""

from __future__ import annotations

import logging
from typing import Any

import anthropic
import openai
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from google.api_core import exceptions as google_exceptions

from video_insights.providers.base import UnsupportedOperationError

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """An error with an HTTP status and a machine-readable code."""

    def __init__(self, status: int, code: str, message: str, details: Any = None) -> None:
        super().__init__(message)
        self.status = status
        self.code = code
        self.message = message
        self.details = details


def error_body(code: str, message: str, details: Any = None) -> dict[str, Any]:
    return {"code": code, "message": message, "details": details}


def _respond(status: int, code: str, message: str, details: Any = None) -> JSONResponse:
    return JSONResponse(status_code=status, content=jsonable_encoder(error_body(code, message, details)))


async def _api_error(_: Request, exc: Exception) -> JSONResponse:
    assert isinstance(exc, ApiError)
    return _respond(exc.status, exc.code, exc.message, exc.details)


async def _validation_error(_: Request, exc: Exception) -> JSONResponse:
    assert isinstance(exc, RequestValidationError)
    return _respond(400, "validation_error", "Invalid request payload", exc.errors())


async def _unsupported(_: Request, exc: Exception) -> JSONResponse:
    assert isinstance(exc, UnsupportedOperationError)
    return _respond(
        501,
        "unsupported_operation",
        str(exc),
        {"operation": exc.operation.value, "provider": exc.provider},
    )


async def _provider_unavailable(_: Request, exc: Exception) -> JSONResponse:
    # Upstream LLM failures become a proper JSON 503 so CORS headers survive.
    logger.warning("AI provider request failed: %s", exc)
    return _respond(503, "provider_unavailable", f"AI provider unavailable: {exc}")


async def _unexpected(_: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error", exc_info=exc)
    return _respond(500, "internal_error", "Unexpected error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, _api_error)
    app.add_exception_handler(RequestValidationError, _validation_error)
    app.add_exception_handler(UnsupportedOperationError, _unsupported)
    app.add_exception_handler(anthropic.APIStatusError, _provider_unavailable)
    app.add_exception_handler(openai.APIError, _provider_unavailable)
    app.add_exception_handler(google_exceptions.GoogleAPIError, _provider_unavailable)
    app.add_exception_handler(Exception, _unexpected)
