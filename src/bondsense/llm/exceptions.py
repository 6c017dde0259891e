"""
Custom exceptions for the LLM client layer.

These exceptions let the retry engine tell fatal failures (bad credential,
missing model) from transient ones (availability, rate limits, network),
and let the API layer map each to a caller-facing message.
"""


class LLMClientError(Exception):
    """
    Base exception for all LLM client errors.

    All LLM-specific exceptions inherit from this to allow catching
    any LLM-related error with a single except clause.
    """
    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class LLMAuthenticationError(LLMClientError):
    """
    Raised when the caller's API key is invalid or lacks permission.

    Fatal: retrying with the same key cannot succeed.
    """
    pass


class LLMConnectionError(LLMClientError):
    """
    Raised when unable to connect to the generation endpoint.

    Includes DNS failures, refused connections and dropped sockets.
    """
    pass


class LLMTimeoutError(LLMConnectionError):
    """Raised when a single request exceeds the client timeout."""
    pass


class LLMGenerationError(LLMClientError):
    """
    Raised when the endpoint answers but produces no usable generation.

    Examples:
    - Unexpected 4xx status
    - Candidate blocked by safety filters
    - Response body that is not JSON
    """
    pass


class LLMModelNotAvailableError(LLMGenerationError):
    """
    Raised when the requested model does not exist or is not enabled for
    this key. Fatal: not retried.
    """
    pass


class LLMRateLimitError(LLMClientError):
    """Raised on 429 / quota exhaustion. Retried with backoff."""
    pass


class LLMServiceUnavailableError(LLMClientError):
    """Raised on 5xx responses (overloaded or unavailable service)."""
    pass
