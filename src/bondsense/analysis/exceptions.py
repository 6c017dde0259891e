"""
Analysis-layer exceptions.

Raised for input the pipeline cannot analyze at all. Mapped to 400 by the
API layer.
"""

from typing import Any


class AnalysisError(Exception):
    """Base exception for analysis input errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class EmptyConversationError(AnalysisError):
    """A conversation (or a whole upload) contains no messages."""
    pass
