"""Monitoring and metrics instrumentation for BondSense.

Exports custom Prometheus metrics for operational monitoring and alerting.
"""

from bondsense.monitoring.metrics import (
    analysis_duration_seconds,
    analysis_requests_total,
    invocation_attempts_total,
    llm_latency_seconds,
    llm_tokens_total,
    response_recovery_total,
    retry_exhausted_total,
)

__all__ = [
    "invocation_attempts_total",
    "retry_exhausted_total",
    "response_recovery_total",
    "llm_latency_seconds",
    "llm_tokens_total",
    "analysis_requests_total",
    "analysis_duration_seconds",
]
