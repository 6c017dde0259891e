"""Custom Prometheus metrics for BondSense.

These metrics are exposed at /metrics endpoint and should be scraped by Prometheus.
Alert rules worth configuring:
- invocation_attempts_total{classification="fatal"} (bad keys reaching the service)
- retry_exhausted_total (upstream availability problems)
- response_recovery_total{path="fallback"} (model output drifting from the prompt schema)
"""

from prometheus_client import Counter, Histogram

# === Retry Metrics ===

invocation_attempts_total = Counter(
    "invocation_attempts_total",
    "Invocation attempts by outcome and error classification",
    ["outcome", "classification"],
)
"""
Attempts made by the retry engine.

Labels:
- outcome: success, failure
- classification: none (success), transient, fatal
"""

retry_exhausted_total = Counter(
    "retry_exhausted_total",
    "Invocations that failed after every retry",
    ["error_type"],
)
"""
Retry exhaustion counter.

Labels:
- error_type: class name of the last error (LLMServiceUnavailableError, ...)
"""

# === Recovery Metrics ===

response_recovery_total = Counter(
    "response_recovery_total",
    "Shaped Results produced, by variant and recovery path",
    ["variant", "path"],
)
"""
Recovery path counter.

Labels:
- variant: chat, overall
- path: strict (decoded as-is), repaired (decoded after text repair), fallback (synthesized)

Alert thresholds:
- WARN: fallback rate > 20% of results
"""

# === LLM Performance Metrics ===

llm_latency_seconds = Histogram(
    "llm_latency_seconds",
    "LLM generation latency in seconds",
    ["model", "success"],
    buckets=[0.5, 1.0, 2.0, 5.0, 10.0, 30.0, 60.0, 120.0],
)

llm_tokens_total = Counter(
    "llm_tokens_total",
    "Total tokens consumed by model and type",
    ["model", "token_type"],
)
"""
Token consumption counter.

Labels:
- model: Model name
- token_type: prompt, completion

Tokens are billed to the caller's own key; tracked for capacity planning only.
"""

# === API Metrics ===

analysis_requests_total = Counter(
    "analysis_requests_total",
    "Analysis API requests by endpoint and status",
    ["endpoint", "status"],
)

analysis_duration_seconds = Histogram(
    "analysis_duration_seconds",
    "Analysis request duration in seconds",
    ["endpoint"],
    buckets=[1.0, 5.0, 10.0, 30.0, 60.0, 120.0, 300.0],
)
