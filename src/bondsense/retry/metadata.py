"""
Retry metadata tracking.

This module defines the attempt history the retry engine records for every
invocation. The history is append-only; records are immutable once created.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from bondsense.models.enums import AttemptOutcome, ErrorClass


@dataclass(frozen=True)
class InvocationAttempt:
    """
    One try at calling the generation endpoint.

    Attributes:
        ordinal: 0-based attempt number
        timestamp: When the attempt started (UTC)
        outcome: success or failure
        classification: transient/fatal for failures, None for success
        error_message: Message of the error that failed the attempt
        delay_ms: Backoff applied after this attempt (0 if none)
    """

    ordinal: int
    timestamp: datetime
    outcome: AttemptOutcome
    classification: Optional[ErrorClass] = None
    error_message: Optional[str] = None
    delay_ms: int = 0

    def __post_init__(self) -> None:
        if self.ordinal < 0:
            raise ValueError("ordinal must be >= 0")
        if self.delay_ms < 0:
            raise ValueError("delay_ms must be >= 0")
        if self.outcome == AttemptOutcome.FAILURE and self.classification is None:
            raise ValueError("failed attempts must carry a classification")


@dataclass
class RetryMetadata:
    """
    Attempt history for one invocation.

    Attributes:
        attempts: Attempts in the order they ran
        total_latency_ms: Wall time from first attempt to final result (ms),
            including backoff sleeps
    """

    attempts: list[InvocationAttempt] = field(default_factory=list)
    total_latency_ms: int = 0

    def record(self, attempt: InvocationAttempt) -> None:
        if attempt.ordinal != len(self.attempts):
            raise ValueError(
                f"attempt ordinal {attempt.ordinal} out of sequence (expected {len(self.attempts)})"
            )
        self.attempts.append(attempt)

    @property
    def total_attempts(self) -> int:
        return len(self.attempts)

    @property
    def total_delay_ms(self) -> int:
        return sum(a.delay_ms for a in self.attempts)

    @property
    def succeeded(self) -> bool:
        return bool(self.attempts) and self.attempts[-1].outcome == AttemptOutcome.SUCCESS

    @property
    def last_attempt(self) -> Optional[InvocationAttempt]:
        return self.attempts[-1] if self.attempts else None
