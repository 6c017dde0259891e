"""
Gemini client implementation for LLM inference.

Communicates with the Google Generative Language REST API using httpx
AsyncClient. Supports:
- Per-request API keys (never stored on the client)
- Sampling configuration (temperature, topK, topP, maxOutputTokens)
- Connection pooling
- Translation of HTTP failures into classified LLM exceptions
"""

import time
from typing import Any, Dict, Optional

import httpx
import structlog

from bondsense.llm.base_client import BaseLLMClient
from bondsense.llm.exceptions import (
    LLMAuthenticationError,
    LLMClientError,
    LLMConnectionError,
    LLMGenerationError,
    LLMModelNotAvailableError,
    LLMRateLimitError,
    LLMServiceUnavailableError,
    LLMTimeoutError,
)
from bondsense.models.llm_models import LLMGenerationRequest, LLMGenerationResponse
from bondsense.monitoring.metrics import llm_latency_seconds, llm_tokens_total


logger = structlog.get_logger(__name__)

AUTH_FAILURE_MARKERS = ("API_KEY_INVALID", "PERMISSION_DENIED", "UNAUTHENTICATED")


class GeminiClient(BaseLLMClient):
    """
    Gemini-specific LLM client using httpx for async HTTP communication.

    API Endpoints:
    - POST /v1beta/models/{model}:generateContent

    The client performs exactly one HTTP request per generate() call.
    Retry policy belongs to RetryEngine.
    """

    def __init__(
        self,
        base_url: str = "https://generativelanguage.googleapis.com",
        timeout: int = 120,
        connection_limits: Optional[httpx.Limits] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        **kwargs
    ):
        """
        Initialize Gemini client.

        Args:
            base_url: Generative Language API root
            timeout: Request timeout in seconds
            connection_limits: httpx connection pool limits
            transport: Optional httpx transport (tests use httpx.MockTransport)
            **kwargs: Additional config
        """
        super().__init__(base_url, timeout, **kwargs)

        if connection_limits is None:
            connection_limits = httpx.Limits(
                max_keepalive_connections=5,
                max_connections=10,
                keepalive_expiry=30.0
            )

        self._client: Optional[httpx.AsyncClient] = None
        self._connection_limits = connection_limits
        self._transport = transport

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the async HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.timeout),
                limits=self._connection_limits,
                transport=self._transport,
            )
            logger.debug("Created new httpx AsyncClient")
        return self._client

    @staticmethod
    def build_payload(request: LLMGenerationRequest) -> Dict[str, Any]:
        """
        Build the generateContent body.

        {
            "contents": [{"role": "user", "parts": [{"text": "..."}]}],
            "generationConfig": {
                "temperature": 0.7,
                "topK": 40,
                "topP": 0.95,
                "maxOutputTokens": 8192
            }
        }
        """
        generation_config: Dict[str, Any] = {
            "temperature": request.temperature,
            "maxOutputTokens": request.max_output_tokens,
        }
        if request.top_k is not None:
            generation_config["topK"] = request.top_k
        if request.top_p is not None:
            generation_config["topP"] = request.top_p

        return {
            "contents": [{"role": "user", "parts": [{"text": request.prompt}]}],
            "generationConfig": generation_config,
        }

    async def generate(self, request: LLMGenerationRequest) -> LLMGenerationResponse:
        """
        Generate a completion with a single generateContent call.

        Response:
        {
            "candidates": [{
                "content": {"parts": [{"text": "..."}], "role": "model"},
                "finishReason": "STOP"
            }],
            "usageMetadata": {
                "promptTokenCount": 1200,
                "candidatesTokenCount": 900,
                "totalTokenCount": 2100
            },
            "modelVersion": "gemini-1.5-flash-002"
        }
        """
        start_time = time.time()

        logger.info(
            "Sending generation request to Gemini",
            model=request.model,
            prompt_length=len(request.prompt),
            temperature=request.temperature,
            max_output_tokens=request.max_output_tokens,
        )

        client = await self._get_client()
        try:
            response = await client.post(
                f"/v1beta/models/{request.model}:generateContent",
                json=self.build_payload(request),
                headers={"x-goog-api-key": request.api_key.get_secret_value()},
            )
        except httpx.TimeoutException as e:
            self._observe_failure(request.model, start_time)
            logger.warning("Gemini request timeout", timeout=self.timeout, error=str(e))
            raise LLMTimeoutError(
                f"Request timeout after {self.timeout}s",
                details={"timeout": self.timeout},
            ) from e
        except httpx.TransportError as e:
            self._observe_failure(request.model, start_time)
            logger.warning("Gemini network error", error=str(e), error_type=type(e).__name__)
            raise LLMConnectionError(
                f"Network error: {str(e)}",
                details={"error_type": type(e).__name__},
            ) from e

        if response.is_error:
            self._observe_failure(request.model, start_time)
            raise self._error_from_response(response, request.model)

        try:
            response_data = response.json()
        except ValueError as e:
            self._observe_failure(request.model, start_time)
            logger.error("Failed to parse Gemini response JSON", error=str(e))
            raise LLMGenerationError(
                "Invalid JSON response from Gemini",
                details={"parse_error": str(e)},
            ) from e

        latency_ms = int((time.time() - start_time) * 1000)
        content, finish_reason = self._extract_text(response_data)

        usage = response_data.get("usageMetadata") or {}
        prompt_tokens = usage.get("promptTokenCount")
        completion_tokens = usage.get("candidatesTokenCount")
        model_version = response_data.get("modelVersion") or request.model

        logger.info(
            "Gemini generation successful",
            model=model_version,
            latency_ms=latency_ms,
            prompt_tokens=prompt_tokens,
            completion_tokens=completion_tokens,
            finish_reason=finish_reason,
        )

        llm_latency_seconds.labels(
            model=request.model, success="true"
        ).observe(latency_ms / 1000.0)
        if prompt_tokens:
            llm_tokens_total.labels(model=request.model, token_type="prompt").inc(prompt_tokens)
        if completion_tokens:
            llm_tokens_total.labels(model=request.model, token_type="completion").inc(completion_tokens)

        return LLMGenerationResponse(
            content=content,
            model_version=model_version,
            finish_reason=finish_reason,
            usage_tokens=usage.get("totalTokenCount"),
            prompt_tokens=prompt_tokens,
            completion_tokens=completion_tokens,
            latency_ms=latency_ms,
            raw_metadata={"prompt_feedback": response_data.get("promptFeedback")},
        )

    @staticmethod
    def _extract_text(response_data: Dict[str, Any]) -> tuple[str, str]:
        """Join the text parts of the first candidate."""
        candidates = response_data.get("candidates") or []
        if not candidates:
            block_reason = (response_data.get("promptFeedback") or {}).get("blockReason")
            raise LLMGenerationError(
                f"Empty response from Gemini (block reason: {block_reason or 'none'})",
                details={"block_reason": block_reason},
            )

        candidate = candidates[0]
        finish_reason = candidate.get("finishReason") or "UNKNOWN"
        parts = (candidate.get("content") or {}).get("parts") or []
        text = "".join(part.get("text", "") for part in parts)
        if not text:
            raise LLMGenerationError(
                f"Gemini candidate has no text (finish reason: {finish_reason})",
                details={"finish_reason": finish_reason},
            )
        return text, finish_reason

    @staticmethod
    def _error_from_response(response: httpx.Response, model: str) -> LLMClientError:
        """
        Translate an error response into a classified exception.

        Gemini error bodies look like:
        {"error": {"code": 400, "message": "API key not valid...",
                   "status": "INVALID_ARGUMENT",
                   "details": [{"reason": "API_KEY_INVALID", ...}]}}

        The resulting message keeps the status code, the Google status and the
        detail reasons so message-based classification sees the markers.
        """
        status_code = response.status_code
        google_status = ""
        error_message = response.text
        reasons: list[str] = []
        try:
            error_body = response.json().get("error") or {}
            google_status = error_body.get("status") or ""
            error_message = error_body.get("message") or error_message
            reasons = [
                d["reason"] for d in error_body.get("details") or []
                if isinstance(d, dict) and d.get("reason")
            ]
        except (ValueError, AttributeError):
            pass

        message = f"[{status_code} {response.reason_phrase}]"
        if google_status:
            message += f" {google_status}:"
        message += f" {error_message}"
        if reasons:
            message += f" ({', '.join(reasons)})"

        details = {"status": status_code, "google_status": google_status, "reasons": reasons}

        logger.error(
            "Gemini HTTP error",
            status_code=status_code,
            google_status=google_status,
            reasons=reasons,
        )

        if status_code in (401, 403) or any(marker in message for marker in AUTH_FAILURE_MARKERS):
            return LLMAuthenticationError(message, details=details)
        if status_code == 404:
            return LLMModelNotAvailableError(
                f"Model not found: {model}. {message}", details={**details, "model": model}
            )
        if status_code == 429:
            return LLMRateLimitError(message, details=details)
        if status_code >= 500:
            return LLMServiceUnavailableError(message, details=details)
        return LLMGenerationError(message, details=details)

    @staticmethod
    def _observe_failure(model: str, start_time: float) -> None:
        llm_latency_seconds.labels(model=model, success="false").observe(time.time() - start_time)

    async def close(self):
        """Close the HTTP client connection."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            logger.debug("Closed Gemini client connection")

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
