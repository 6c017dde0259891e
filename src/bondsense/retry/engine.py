"""
Retry engine with exponential backoff.

This module implements the RetryEngine that wraps a single call to the
generation endpoint with bounded retries. It provides one entry point for
executing a request with automatic retry of transient failures.

Retry Policy:
    - Attempts run for attempt = 0 .. max_retries (inclusive)
    - Fatal errors (bad key, missing permission, unknown model) are raised
      immediately, without delay
    - Transient errors sleep base_delay_ms * 2**attempt + jitter, then retry
    - When the final attempt fails, RetryExhausted is raised from the last error

Usage:
    engine = RetryEngine(RetryPolicy.from_settings(settings))
    response = await engine.invoke(lambda: client.generate(request))
"""

import asyncio
import random
import time
from datetime import datetime, timezone
from typing import Awaitable, Callable, Optional, TypeVar

import structlog

from bondsense.models.enums import AttemptOutcome, ErrorClass
from bondsense.monitoring.metrics import invocation_attempts_total, retry_exhausted_total
from bondsense.retry.classification import classify_error
from bondsense.retry.exceptions import RetryExhausted
from bondsense.retry.metadata import InvocationAttempt, RetryMetadata
from bondsense.retry.policy import RetryPolicy


logger = structlog.get_logger(__name__)

T = TypeVar("T")

SleepFn = Callable[[float], Awaitable[None]]
JitterFn = Callable[[int], float]


def uniform_jitter(jitter_max_ms: int) -> float:
    return random.uniform(0, jitter_max_ms)


class RetryEngine:
    """
    Retry engine for invocations of the generation endpoint.

    The engine is request-agnostic: it calls a zero-argument coroutine
    function and classifies whatever that function raises.

    Attributes:
        policy: Retry policy (attempt budget and backoff)
        sleep: Coroutine function taking seconds (asyncio.sleep by default)
        jitter: Returns jitter in ms given the policy's jitter ceiling
    """

    def __init__(
        self,
        policy: Optional[RetryPolicy] = None,
        sleep: Optional[SleepFn] = None,
        jitter: Optional[JitterFn] = None,
    ):
        """
        Initialize retry engine.

        Args:
            policy: Retry policy (defaults to RetryPolicy())
            sleep: Injectable sleep, tests pass a recorder
            jitter: Injectable jitter source, tests pass a constant
        """
        self.policy = policy or RetryPolicy()
        self.sleep = sleep or asyncio.sleep
        self.jitter = jitter or uniform_jitter

        logger.info(
            "RetryEngine initialized",
            max_retries=self.policy.max_retries,
            base_delay_ms=self.policy.base_delay_ms,
            jitter_max_ms=self.policy.jitter_max_ms,
        )

    def compute_delay_ms(self, attempt: int) -> int:
        """Backoff after failed 0-based `attempt`, jitter included."""
        jitter = self.jitter(self.policy.jitter_max_ms) if self.policy.jitter_max_ms else 0
        return int(self.policy.backoff_ms(attempt) + jitter)

    async def execute_with_retry(
        self, request_fn: Callable[[], Awaitable[T]]
    ) -> tuple[T, RetryMetadata]:
        """
        Execute request_fn with the retry policy.

        Args:
            request_fn: Zero-argument coroutine function performing one attempt

        Returns:
            Tuple of (result of the first successful attempt, retry metadata)

        Raises:
            Exception: The original error, unchanged, when it is fatal
            RetryExhausted: Every attempt failed with a transient error
        """
        metadata = RetryMetadata()
        start_time = time.time()
        last_error: Optional[BaseException] = None

        for attempt in range(self.policy.max_attempts):
            attempt_started = datetime.now(timezone.utc)
            try:
                result = await request_fn()
            except Exception as e:
                last_error = e
                classification = classify_error(e)
                is_final = attempt == self.policy.max_retries
                delay_ms = 0
                if classification == ErrorClass.TRANSIENT and not is_final:
                    delay_ms = self.compute_delay_ms(attempt)

                metadata.record(
                    InvocationAttempt(
                        ordinal=attempt,
                        timestamp=attempt_started,
                        outcome=AttemptOutcome.FAILURE,
                        classification=classification,
                        error_message=str(e),
                        delay_ms=delay_ms,
                    )
                )
                invocation_attempts_total.labels(
                    outcome=AttemptOutcome.FAILURE.value,
                    classification=classification.value,
                ).inc()

                if classification == ErrorClass.FATAL:
                    metadata.total_latency_ms = int((time.time() - start_time) * 1000)
                    logger.error(
                        "Fatal error, not retrying",
                        attempt=attempt,
                        error_type=type(e).__name__,
                        error=str(e),
                    )
                    raise

                if is_final:
                    break

                logger.warning(
                    f"Attempt {attempt + 1} failed, retrying",
                    attempt=attempt,
                    max_retries=self.policy.max_retries,
                    delay_ms=delay_ms,
                    error_type=type(e).__name__,
                    error=str(e),
                )
                await self.sleep(delay_ms / 1000.0)
                continue

            metadata.record(
                InvocationAttempt(
                    ordinal=attempt,
                    timestamp=attempt_started,
                    outcome=AttemptOutcome.SUCCESS,
                )
            )
            metadata.total_latency_ms = int((time.time() - start_time) * 1000)
            invocation_attempts_total.labels(
                outcome=AttemptOutcome.SUCCESS.value, classification="none"
            ).inc()

            if attempt > 0:
                logger.info(
                    "Retry engine succeeded after retries",
                    total_attempts=metadata.total_attempts,
                    total_delay_ms=metadata.total_delay_ms,
                )
            return result, metadata

        metadata.total_latency_ms = int((time.time() - start_time) * 1000)
        error_type = type(last_error).__name__
        retry_exhausted_total.labels(error_type=error_type).inc()
        logger.error(
            "All retries exhausted",
            total_attempts=metadata.total_attempts,
            total_latency_ms=metadata.total_latency_ms,
            final_error_type=error_type,
            final_error=str(last_error),
        )
        raise RetryExhausted(retry_metadata=metadata, last_error=last_error) from last_error

    async def invoke(self, request_fn: Callable[[], Awaitable[T]]) -> T:
        """Execute request_fn with retries and return only its result."""
        result, _ = await self.execute_with_retry(request_fn)
        return result
