"""
LLM client abstraction and implementations.

Components:
- BaseLLMClient: Abstract base class for LLM clients
- GeminiClient: Implementation for the Gemini generateContent REST API
- PromptBuilder: Constructs prompts and requests per analysis variant
- text_utils: Transcript formatting and truncation
- exceptions: LLM-specific exceptions
"""

from bondsense.llm.base_client import BaseLLMClient
from bondsense.llm.gemini_client import GeminiClient
from bondsense.llm.prompt_builder import PromptBuilder
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

__all__ = [
    "BaseLLMClient",
    "GeminiClient",
    "PromptBuilder",
    "LLMAuthenticationError",
    "LLMClientError",
    "LLMConnectionError",
    "LLMGenerationError",
    "LLMModelNotAvailableError",
    "LLMRateLimitError",
    "LLMServiceUnavailableError",
    "LLMTimeoutError",
]
