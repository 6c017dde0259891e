"""
FastAPI dependency injection for BondSense.

Provides singleton instances of expensive resources (Gemini client with its
connection pool, prompt builder with loaded templates, retry engine) and
per-request factories for the services built on them.

Cached getters take no parameters and read settings through get_settings(),
so tests can swap any of them with app.dependency_overrides.
"""

from functools import lru_cache

from fastapi import Depends

from bondsense.analysis.batch import BatchAnalyzer
from bondsense.analysis.service import AnalysisService
from bondsense.config import Settings, settings
from bondsense.llm.base_client import BaseLLMClient
from bondsense.llm.gemini_client import GeminiClient
from bondsense.llm.prompt_builder import PromptBuilder
from bondsense.recovery.recoverer import ResponseRecoverer
from bondsense.retry.engine import RetryEngine
from bondsense.retry.policy import RetryPolicy


@lru_cache()
def get_settings() -> Settings:
    """
    Get settings singleton.

    Returns:
        Settings instance
    """
    return settings


@lru_cache()
def get_llm_client() -> BaseLLMClient:
    """
    Get singleton Gemini client with connection pooling.

    The client holds no credentials; each request carries the caller's key.
    It performs no retries of its own (RetryEngine owns the retry policy).

    Returns:
        GeminiClient instance
    """
    current = get_settings()
    return GeminiClient(
        base_url=current.GEMINI_BASE_URL,
        timeout=current.GEMINI_TIMEOUT,
    )


@lru_cache()
def get_prompt_builder() -> PromptBuilder:
    """
    Get singleton prompt builder.

    Loads Jinja2 templates once and reuses them across requests.
    """
    return PromptBuilder.from_settings(get_settings())


@lru_cache()
def get_retry_engine() -> RetryEngine:
    """Get singleton retry engine; it keeps no per-invocation state."""
    return RetryEngine(RetryPolicy.from_settings(get_settings()))


@lru_cache()
def get_response_recoverer() -> ResponseRecoverer:
    return ResponseRecoverer()


def get_analysis_service(
    llm_client: BaseLLMClient = Depends(get_llm_client),
    prompt_builder: PromptBuilder = Depends(get_prompt_builder),
    retry_engine: RetryEngine = Depends(get_retry_engine),
    recoverer: ResponseRecoverer = Depends(get_response_recoverer),
) -> AnalysisService:
    """
    Create analysis service with injected dependencies.

    Note: not cached; it is a thin wrapper around the singletons.
    """
    return AnalysisService(
        llm_client=llm_client,
        prompt_builder=prompt_builder,
        retry_engine=retry_engine,
        recoverer=recoverer,
    )


def get_batch_analyzer(
    service: AnalysisService = Depends(get_analysis_service),
) -> BatchAnalyzer:
    return BatchAnalyzer(service)
