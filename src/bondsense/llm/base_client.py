"""
Abstract base client for LLM inference.

Defines the interface every generation backend implements, so the analysis
service and retry engine never depend on a specific provider.
"""

from abc import ABC, abstractmethod

import structlog

from bondsense.models.llm_models import LLMGenerationRequest, LLMGenerationResponse


logger = structlog.get_logger(__name__)


class BaseLLMClient(ABC):
    """
    Abstract base class for LLM clients.

    Responsibilities:
    - Send one generation request per call
    - Parse the provider response into LLMGenerationResponse
    - Translate transport and HTTP failures into LLMClientError subclasses

    Does NOT handle:
    - Prompt construction (PromptBuilder)
    - Retries of any kind (RetryEngine)
    - Decoding the generated text (ResponseRecoverer)
    """

    def __init__(self, base_url: str, timeout: int = 120, **kwargs):
        """
        Initialize base client.

        Args:
            base_url: Base URL of the generation API
            timeout: Request timeout in seconds
            **kwargs: Additional provider-specific config
        """
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.extra_config = kwargs

        logger.info(
            "Initialized LLM client",
            client_class=self.__class__.__name__,
            base_url=self.base_url,
            timeout=timeout,
        )

    @abstractmethod
    async def generate(self, request: LLMGenerationRequest) -> LLMGenerationResponse:
        """
        Generate a completion.

        Args:
            request: Invocation request, including the caller's credential

        Returns:
            LLMGenerationResponse with generated text and metadata

        Raises:
            LLMAuthenticationError: Invalid key or permission denied
            LLMModelNotAvailableError: Model not found
            LLMRateLimitError: Quota or rate limit hit
            LLMServiceUnavailableError: Server-side failure
            LLMConnectionError: Network/timeout errors
            LLMGenerationError: Any other unusable response
        """
        pass

    async def close(self):
        """Release pooled connections. Default implementation does nothing."""
        logger.debug("Closing LLM client", client_class=self.__class__.__name__)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"base_url={self.base_url}, "
            f"timeout={self.timeout}s)"
        )
