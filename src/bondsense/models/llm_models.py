"""
LLM-specific data models for the request/response cycle.

These models are internal to the LLM layer and describe the raw exchange with
the generation endpoint. They are separate from the Shaped Results returned
to callers.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, SecretStr


class LLMGenerationRequest(BaseModel):
    """
    Invocation request sent to an LLM client.

    Immutable once built. The caller-supplied API key is held as a SecretStr
    so it never shows up in reprs or log output.
    """
    model_config = ConfigDict(frozen=True)

    prompt: str = Field(..., description="Complete rendered prompt")
    api_key: SecretStr = Field(..., description="Caller-supplied credential for this call only")
    model: str = Field(..., description="Model identifier (e.g., 'gemini-1.5-flash')")
    temperature: float = Field(default=0.7, ge=0.0, le=2.0, description="Sampling temperature")
    top_k: Optional[int] = Field(default=None, ge=1, description="Top-k sampling")
    top_p: Optional[float] = Field(default=None, ge=0.0, le=1.0, description="Nucleus sampling parameter")
    max_output_tokens: int = Field(default=8192, ge=1, description="Maximum tokens to generate")


class LLMGenerationResponse(BaseModel):
    """
    Raw response from a successful generation.

    Decoding `content` into a Shaped Result is the recovery layer's job.
    """
    model_config = ConfigDict(frozen=True)

    content: str = Field(..., description="Generated text")
    model_version: str = Field(..., description="Model version reported by the server")
    finish_reason: str = Field(..., description="Why generation stopped: 'STOP', 'MAX_TOKENS', ...")
    usage_tokens: Optional[int] = Field(default=None, description="Total tokens used")
    prompt_tokens: Optional[int] = Field(default=None)
    completion_tokens: Optional[int] = Field(default=None)
    latency_ms: int = Field(..., ge=0, description="Generation latency in milliseconds")
    raw_metadata: Dict[str, Any] = Field(default_factory=dict)
