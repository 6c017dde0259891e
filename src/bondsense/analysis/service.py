"""
Analysis service.

One analysis = local stats, prompt, one resilient invocation, recovery of
the model output, and augmentation with the local stats. Each call is
independent; nothing is kept between calls.

Usage:
    service = AnalysisService(client, prompt_builder, retry_engine, recoverer)
    result = await service.analyze_chat(messages, api_key, file_name="message_1.json")
"""

import time
from typing import Any, Optional, Sequence

import structlog
from pydantic import SecretStr

from bondsense.analysis.exceptions import EmptyConversationError
from bondsense.analysis.stats import (
    compute_conversation_stats,
    compute_overall_stats,
    message_stats,
    total_stats,
)
from bondsense.llm.base_client import BaseLLMClient
from bondsense.llm.prompt_builder import PromptBuilder
from bondsense.models.chat_models import ChatFile, ChatMessage
from bondsense.models.enums import AnalysisVariant
from bondsense.models.output_models import CHAT_REQUIRED_FIELDS, OVERALL_REQUIRED_FIELDS
from bondsense.recovery.fallbacks import build_chat_fallback, build_overall_fallback
from bondsense.recovery.recoverer import ResponseRecoverer
from bondsense.retry.engine import RetryEngine


logger = structlog.get_logger(__name__)

KEY_CHECK_MARKER = "working"


class AnalysisService:
    """
    Orchestrates per-conversation and aggregate analyses.

    Attributes:
        llm_client: Generation backend
        prompt_builder: Renders prompts and builds requests
        retry_engine: Resilient invoker wrapping every analysis call
        recoverer: Turns raw output into a Shaped Result
    """

    def __init__(
        self,
        llm_client: BaseLLMClient,
        prompt_builder: PromptBuilder,
        retry_engine: RetryEngine,
        recoverer: Optional[ResponseRecoverer] = None,
    ):
        self.llm_client = llm_client
        self.prompt_builder = prompt_builder
        self.retry_engine = retry_engine
        self.recoverer = recoverer or ResponseRecoverer()

    async def analyze_chat(
        self,
        messages: Sequence[ChatMessage],
        api_key: SecretStr,
        file_name: Optional[str] = None,
    ) -> dict[str, Any]:
        """
        Analyze one conversation.

        Args:
            messages: Conversation messages in file order
            api_key: Caller's Gemini key
            file_name: Source file name (logging only)

        Returns:
            Chat Shaped Result plus `participants` and `message_stats`

        Raises:
            EmptyConversationError: No messages
            LLMClientError: Fatal upstream error (bad key, unknown model)
            RetryExhausted: Transient upstream errors on every attempt
        """
        if not messages:
            raise EmptyConversationError(
                "Conversation has no messages", details={"file_name": file_name}
            )

        start_time = time.time()
        stats = compute_conversation_stats(messages)
        prompt, prompt_metadata = self.prompt_builder.build_chat_prompt(messages, stats)
        request = self.prompt_builder.build_request(prompt, AnalysisVariant.CHAT, api_key)

        logger.info(
            "Analyzing conversation",
            file_name=file_name,
            total_messages=stats.total_messages,
            participants_count=len(stats.participants),
            truncation_applied=prompt_metadata["truncation_applied"],
        )

        response = await self.retry_engine.invoke(lambda: self.llm_client.generate(request))
        shaped = self.recoverer.recover(
            response.content,
            CHAT_REQUIRED_FIELDS,
            lambda: build_chat_fallback(stats),
            variant=AnalysisVariant.CHAT,
        )

        logger.info(
            "Conversation analyzed",
            file_name=file_name,
            duration_ms=int((time.time() - start_time) * 1000),
        )
        return {
            **shaped,
            "participants": stats.participants,
            "message_stats": message_stats(stats).model_dump(),
        }

    async def analyze_overall(
        self,
        chats: Sequence[ChatFile],
        api_key: SecretStr,
        individual_analyses: Optional[Sequence[dict[str, Any]]] = None,
    ) -> dict[str, Any]:
        """
        Analyze the relationship across every conversation.

        `individual_analyses` is accepted for the caller's convenience; the
        prompt is built from the raw conversations only.

        Returns:
            Overall Shaped Result plus `total_stats`
        """
        stats = compute_overall_stats(chats)
        if stats.total_messages == 0:
            raise EmptyConversationError(
                "No messages across uploaded conversations", details={"chat_count": len(chats)}
            )

        start_time = time.time()
        prompt, prompt_metadata = self.prompt_builder.build_overall_prompt(chats, stats)
        request = self.prompt_builder.build_request(prompt, AnalysisVariant.OVERALL, api_key)

        logger.info(
            "Analyzing relationship across conversations",
            chat_count=stats.chat_count,
            total_messages=stats.total_messages,
            participants_count=len(stats.participants),
            individual_analyses_count=len(individual_analyses or []),
            truncation_applied=prompt_metadata["truncation_applied"],
        )

        response = await self.retry_engine.invoke(lambda: self.llm_client.generate(request))
        shaped = self.recoverer.recover(
            response.content,
            OVERALL_REQUIRED_FIELDS,
            lambda: build_overall_fallback(stats),
            variant=AnalysisVariant.OVERALL,
        )

        logger.info(
            "Overall analysis complete",
            duration_ms=int((time.time() - start_time) * 1000),
        )
        return {**shaped, "total_stats": total_stats(stats).model_dump()}

    async def check_api_key(self, api_key: SecretStr) -> bool:
        """
        Probe the key with one small, unretried generation.

        Returns:
            True when the reply confirms the key works

        Raises:
            LLMClientError: The call itself failed (callers map it to a status)
        """
        request = self.prompt_builder.build_key_check_request(api_key)
        response = await self.llm_client.generate(request)
        valid = KEY_CHECK_MARKER in response.content.lower()
        logger.info("API key check finished", valid=valid)
        return valid
