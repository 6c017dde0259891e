"""
Resilient invocation of the generation endpoint.

Wraps a single call with bounded retries, exponential backoff plus jitter,
and fatal/transient error classification.

Main Components:
    - RetryEngine: Runs the attempt loop
    - RetryPolicy: Attempt budget and backoff parameters
    - classify_error: Fatal vs transient classification
    - RetryMetadata / InvocationAttempt: Append-only attempt history
    - RetryExhausted: Raised when every attempt failed transiently

Usage:
    >>> from bondsense.retry import RetryEngine, RetryPolicy
    >>> engine = RetryEngine(RetryPolicy(max_retries=3))
    >>> response = await engine.invoke(lambda: client.generate(request))
"""

from bondsense.retry.classification import classify_error, is_fatal
from bondsense.retry.engine import RetryEngine
from bondsense.retry.exceptions import RetryExhausted
from bondsense.retry.metadata import InvocationAttempt, RetryMetadata
from bondsense.retry.policy import RetryPolicy

__all__ = [
    "RetryEngine",
    "RetryExhausted",
    "RetryMetadata",
    "RetryPolicy",
    "InvocationAttempt",
    "classify_error",
    "is_fatal",
]
