"""
Recovery-stage exceptions.

These never leave the recovery package: ResponseRecoverer catches them to
move from strict decoding to repair, and from repair to the fallback.
"""

from typing import Any


class RecoveryError(Exception):
    """
    Base exception for decoding failures inside the recoverer.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class JSONParseError(RecoveryError):
    """
    Text could not be decoded into a JSON object.
    """

    def __init__(self, message: str, raw_content: str | None = None, parse_error: str | None = None):
        """
        Initialize JSON parse error.

        Args:
            message: Error description
            raw_content: Offending text (only the first 500 chars are kept)
            parse_error: Original json.JSONDecodeError message
        """
        details = {}
        if raw_content:
            details["content_snippet"] = raw_content[:500]
        if parse_error:
            details["parse_error"] = parse_error
        super().__init__(message, details)


class MissingFieldsError(RecoveryError):
    """
    Decoded object lacks required fields (absent or null).
    """

    def __init__(self, missing_fields: list[str]):
        self.missing_fields = missing_fields
        super().__init__(
            f"Missing required fields: {', '.join(missing_fields)}",
            {"missing_fields": missing_fields},
        )
