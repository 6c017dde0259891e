"""
Retry policy.

A single immutable policy governs every invocation: how many retries follow
the first attempt and how the backoff delay grows.
"""

from dataclasses import dataclass

from bondsense.config import Settings


@dataclass(frozen=True)
class RetryPolicy:
    """
    Backoff parameters for the retry engine.

    Attributes:
        max_retries: Retries after the first attempt (total attempts = max_retries + 1)
        base_delay_ms: Delay after the first failed attempt, doubled each time
        jitter_max_ms: Upper bound of the uniform random jitter added to each delay
    """

    max_retries: int = 3
    base_delay_ms: int = 2000
    jitter_max_ms: int = 1000

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        if self.base_delay_ms < 0:
            raise ValueError("base_delay_ms must be >= 0")
        if self.jitter_max_ms < 0:
            raise ValueError("jitter_max_ms must be >= 0")

    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1

    def backoff_ms(self, attempt: int) -> int:
        """Deterministic part of the delay after a failed 0-based attempt."""
        return self.base_delay_ms * (2 ** attempt)

    @classmethod
    def from_settings(cls, settings: Settings) -> "RetryPolicy":
        return cls(
            max_retries=settings.MAX_RETRIES,
            base_delay_ms=settings.RETRY_BASE_DELAY_MS,
            jitter_max_ms=settings.RETRY_JITTER_MAX_MS,
        )
