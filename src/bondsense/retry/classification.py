"""
Error classification for the retry engine.

An error is fatal when retrying with the same credential and model cannot
succeed: rejected keys, missing permissions, unknown models. Everything else
(availability, rate limits, network, malformed upstream replies) is transient.

Typed exceptions from the LLM layer are classified by type; anything else
falls back to message markers, since upstream errors often arrive as plain
text.
"""

from bondsense.llm.exceptions import LLMAuthenticationError, LLMModelNotAvailableError
from bondsense.models.enums import ErrorClass


AUTH_MARKERS = ("API_KEY_INVALID", "PERMISSION_DENIED")
NOT_FOUND_MARKERS = ("NOT_FOUND", "not found", "404")

FATAL_ERROR_TYPES = (LLMAuthenticationError, LLMModelNotAvailableError)


def classify_error(error: BaseException) -> ErrorClass:
    """
    Classify a failed attempt as fatal or transient.

    Examples:
        >>> classify_error(Exception("403 PERMISSION_DENIED"))
        <ErrorClass.FATAL: 'fatal'>
        >>> classify_error(Exception("503 Service Unavailable"))
        <ErrorClass.TRANSIENT: 'transient'>
    """
    if isinstance(error, FATAL_ERROR_TYPES):
        return ErrorClass.FATAL

    message = str(error)
    if any(marker in message for marker in AUTH_MARKERS + NOT_FOUND_MARKERS):
        return ErrorClass.FATAL

    return ErrorClass.TRANSIENT


def is_fatal(error: BaseException) -> bool:
    return classify_error(error) == ErrorClass.FATAL
