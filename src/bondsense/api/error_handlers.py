"""
FastAPI exception handlers for structured error responses.

Maps domain exceptions to HTTP status codes and caller-facing messages.
Every error body is {"error": <message>, "timestamp": <iso>}.
"""

from datetime import datetime, timezone
from typing import Any

import structlog
from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from bondsense.analysis.exceptions import AnalysisError
from bondsense.llm.exceptions import (
    LLMAuthenticationError,
    LLMClientError,
    LLMConnectionError,
    LLMModelNotAvailableError,
    LLMRateLimitError,
    LLMServiceUnavailableError,
)
from bondsense.retry.classification import AUTH_MARKERS, NOT_FOUND_MARKERS
from bondsense.retry.exceptions import RetryExhausted


logger = structlog.get_logger(__name__)

INVALID_KEY_MESSAGE = (
    "Invalid Gemini API key or insufficient permissions. "
    "Please check your API key and ensure it has access to Gemini models."
)
MODEL_NOT_FOUND_MESSAGE = (
    "Gemini model not found. Please ensure your API key has access to the configured model."
)
RATE_LIMIT_MESSAGE = "API rate limit exceeded. Please wait a moment and try again."
UNAVAILABLE_MESSAGE = (
    "Gemini API is temporarily unavailable. This is usually a temporary issue. "
    "Please try again in a few moments."
)
GENERIC_MESSAGE = "Analysis failed. Please try again."


def describe_error(exc: BaseException) -> tuple[int, str]:
    """
    Status code and caller-facing message for an invocation failure.

    RetryExhausted is described by the error of its final attempt.
    """
    error = exc.last_error if isinstance(exc, RetryExhausted) else exc
    text = str(error)

    if isinstance(error, LLMAuthenticationError) or any(m in text for m in AUTH_MARKERS):
        return status.HTTP_401_UNAUTHORIZED, INVALID_KEY_MESSAGE
    if isinstance(error, LLMModelNotAvailableError) or any(m in text for m in NOT_FOUND_MARKERS):
        return status.HTTP_404_NOT_FOUND, MODEL_NOT_FOUND_MESSAGE
    if isinstance(error, LLMRateLimitError):
        return status.HTTP_429_TOO_MANY_REQUESTS, RATE_LIMIT_MESSAGE
    if isinstance(error, (LLMServiceUnavailableError, LLMConnectionError)):
        return status.HTTP_503_SERVICE_UNAVAILABLE, UNAVAILABLE_MESSAGE

    message = getattr(error, "message", None) or text or GENERIC_MESSAGE
    return status.HTTP_500_INTERNAL_SERVER_ERROR, message


def error_content(message: str, **extra: Any) -> dict[str, Any]:
    return {
        "error": message,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        **extra,
    }


async def retry_exhausted_handler(request: Request, exc: RetryExhausted) -> JSONResponse:
    """
    Handle retry exhaustion.

    Status follows the final attempt's error (429, 503, ...).
    """
    status_code, message = describe_error(exc)
    logger.error(
        "Retry exhausted",
        total_attempts=exc.retry_metadata.total_attempts,
        total_latency_ms=exc.retry_metadata.total_latency_ms,
        attempts=[
            {
                "ordinal": a.ordinal,
                "classification": a.classification.value if a.classification else None,
                "delay_ms": a.delay_ms,
            }
            for a in exc.retry_metadata.attempts
        ],
        last_error_type=type(exc.last_error).__name__,
        status_code=status_code,
    )
    return JSONResponse(status_code=status_code, content=error_content(message))


async def llm_error_handler(request: Request, exc: LLMClientError) -> JSONResponse:
    """
    Handle LLM client errors that reached the route without retry exhaustion
    (fatal errors, or the unretried key check).
    """
    status_code, message = describe_error(exc)
    logger.error(
        "LLM error",
        error_type=type(exc).__name__,
        details=exc.details,
        status_code=status_code,
    )
    return JSONResponse(status_code=status_code, content=error_content(message))


async def analysis_error_handler(request: Request, exc: AnalysisError) -> JSONResponse:
    """Handle input the pipeline cannot analyze. Maps to 400."""
    logger.warning("Unanalyzable input", error=exc.message, details=exc.details)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_content(exc.message),
    )


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Handle invalid request bodies.

    Maps to 400 Bad Request. Only error locations and messages are logged;
    raw inputs may contain the caller's key.
    """
    errors = [{"loc": list(e.get("loc", ())), "msg": e.get("msg")} for e in exc.errors()]
    logger.warning("Invalid request format", errors=errors)

    missing_key = any("apiKey" in e["loc"] or "api_key" in e["loc"] for e in errors)
    message = "Gemini API key is required" if missing_key else "Invalid request data"
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_content(message),
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle unexpected errors.

    Maps to 500 Internal Server Error.
    """
    logger.exception("Unexpected error", error_type=type(exc).__name__)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_content("An unexpected error occurred"),
    )


# Exception handler mapping for FastAPI app.add_exception_handler()
EXCEPTION_HANDLERS = {
    RetryExhausted: retry_exhausted_handler,
    LLMClientError: llm_error_handler,
    AnalysisError: analysis_error_handler,
    RequestValidationError: request_validation_error_handler,
    Exception: generic_error_handler,
}
