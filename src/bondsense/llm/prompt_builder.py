"""
Prompt builder for LLM requests.

Responsible for:
- Loading and rendering Jinja2 templates (chat, overall, key check)
- Formatting and truncating chat transcripts
- Constructing LLMGenerationRequest with per-variant sampling parameters
"""

from pathlib import Path
from typing import Sequence

import structlog
from jinja2 import Environment, FileSystemLoader, StrictUndefined
from pydantic import SecretStr

from bondsense.config import Settings
from bondsense.llm.text_utils import (
    CONTINUATION_MARKER,
    count_tokens_approximate,
    format_transcript,
    truncate_transcript,
)
from bondsense.models.chat_models import ChatFile, ChatMessage
from bondsense.models.enums import AnalysisVariant
from bondsense.models.llm_models import LLMGenerationRequest
from bondsense.models.output_models import ConversationStats, OverallStats, pad_participants


logger = structlog.get_logger(__name__)

CHAT_TEMPLATE = "chat_analysis.txt"
OVERALL_TEMPLATE = "overall_analysis.txt"
KEY_CHECK_TEMPLATE = "api_key_check.txt"


class PromptBuilder:
    """
    Build generation requests for each analysis variant.

    Handles:
    - Template rendering (Jinja2)
    - Transcript truncation
    - Sampling parameters per variant
    """

    def __init__(
        self,
        templates_dir: Path,
        model: str = "gemini-1.5-flash",
        chat_temperature: float = 0.7,
        overall_temperature: float = 0.8,
        top_k: int = 40,
        top_p: float = 0.95,
        max_output_tokens: int = 8192,
        key_check_temperature: float = 0.1,
        key_check_max_output_tokens: int = 100,
        chat_text_limit: int = 30000,
        overall_text_limit: int = 50000,
    ):
        """
        Initialize prompt builder.

        Args:
            templates_dir: Directory containing prompt templates
            model: Model name used for every request
            chat_temperature: Temperature for per-conversation analysis
            overall_temperature: Temperature for aggregate analysis
            top_k: Top-k sampling for analysis requests
            top_p: Nucleus sampling for analysis requests
            max_output_tokens: Output budget for analysis requests
            key_check_temperature: Temperature for the API key probe
            key_check_max_output_tokens: Output budget for the API key probe
            chat_text_limit: Max transcript characters (chat)
            overall_text_limit: Max transcript characters (overall)
        """
        self.templates_dir = Path(templates_dir)
        self.model = model
        self.chat_temperature = chat_temperature
        self.overall_temperature = overall_temperature
        self.top_k = top_k
        self.top_p = top_p
        self.max_output_tokens = max_output_tokens
        self.key_check_temperature = key_check_temperature
        self.key_check_max_output_tokens = key_check_max_output_tokens
        self.chat_text_limit = chat_text_limit
        self.overall_text_limit = overall_text_limit

        self.jinja_env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            trim_blocks=True,
            lstrip_blocks=True,
            autoescape=False,  # We're generating prompts, not HTML
            undefined=StrictUndefined,
        )

        try:
            self.chat_template = self.jinja_env.get_template(CHAT_TEMPLATE)
            self.overall_template = self.jinja_env.get_template(OVERALL_TEMPLATE)
            self.key_check_template = self.jinja_env.get_template(KEY_CHECK_TEMPLATE)
            logger.info("Loaded prompt templates", templates_dir=str(self.templates_dir))
        except Exception as e:
            logger.error("Failed to load prompt templates", error=str(e))
            raise

    @classmethod
    def from_settings(cls, settings: Settings) -> "PromptBuilder":
        return cls(
            templates_dir=Path(settings.PROMPT_TEMPLATES_DIR),
            model=settings.GEMINI_MODEL,
            chat_temperature=settings.CHAT_TEMPERATURE,
            overall_temperature=settings.OVERALL_TEMPERATURE,
            top_k=settings.LLM_TOP_K,
            top_p=settings.LLM_TOP_P,
            max_output_tokens=settings.LLM_MAX_OUTPUT_TOKENS,
            key_check_temperature=settings.KEY_CHECK_TEMPERATURE,
            key_check_max_output_tokens=settings.KEY_CHECK_MAX_OUTPUT_TOKENS,
            chat_text_limit=settings.CHAT_TEXT_LIMIT,
            overall_text_limit=settings.OVERALL_TEXT_LIMIT,
        )

    def build_chat_prompt(
        self,
        messages: Sequence[ChatMessage],
        stats: ConversationStats,
    ) -> tuple[str, dict]:
        """
        Render the per-conversation analysis prompt.

        Args:
            messages: Conversation messages in file order
            stats: Precomputed conversation statistics

        Returns:
            Tuple of (rendered_prompt, metadata_dict)
        """
        first, second = pad_participants(stats.participants)

        transcript = format_transcript(messages)
        truncated = truncate_transcript(transcript, self.chat_text_limit, CONTINUATION_MARKER)

        prompt = self.chat_template.render(
            participants=stats.participants or [first, second],
            first=first,
            second=second,
            first_count=stats.for_participant(first).message_count,
            second_count=stats.for_participant(second).message_count,
            transcript=truncated,
        ).strip()

        metadata = {
            "variant": AnalysisVariant.CHAT.value,
            "transcript_length": len(transcript),
            "truncation_applied": len(transcript) > self.chat_text_limit,
            "approx_tokens": count_tokens_approximate(prompt),
        }
        logger.debug("Built chat prompt", **metadata)
        return prompt, metadata

    def build_overall_prompt(
        self,
        chats: Sequence[ChatFile],
        stats: OverallStats,
    ) -> tuple[str, dict]:
        """
        Render the aggregate relationship prompt over every conversation.

        Returns:
            Tuple of (rendered_prompt, metadata_dict)
        """
        all_messages = [m for chat in chats for m in chat.data]
        transcript = format_transcript(all_messages)
        truncated = truncate_transcript(transcript, self.overall_text_limit)

        featured = list(pad_participants(stats.participants))

        prompt = self.overall_template.render(
            participants=stats.participants or featured,
            featured=featured,
            total_messages=stats.total_messages,
            chat_count=stats.chat_count,
            transcript=truncated,
        ).strip()

        metadata = {
            "variant": AnalysisVariant.OVERALL.value,
            "transcript_length": len(transcript),
            "truncation_applied": len(transcript) > self.overall_text_limit,
            "approx_tokens": count_tokens_approximate(prompt),
        }
        logger.debug("Built overall prompt", **metadata)
        return prompt, metadata

    def build_key_check_prompt(self) -> str:
        return self.key_check_template.render().strip()

    def build_request(
        self,
        prompt: str,
        variant: AnalysisVariant,
        api_key: SecretStr,
    ) -> LLMGenerationRequest:
        """Wrap a rendered analysis prompt with the variant's sampling parameters."""
        temperature = (
            self.chat_temperature if variant == AnalysisVariant.CHAT else self.overall_temperature
        )
        return LLMGenerationRequest(
            prompt=prompt,
            api_key=api_key,
            model=self.model,
            temperature=temperature,
            top_k=self.top_k,
            top_p=self.top_p,
            max_output_tokens=self.max_output_tokens,
        )

    def build_key_check_request(self, api_key: SecretStr) -> LLMGenerationRequest:
        return LLMGenerationRequest(
            prompt=self.build_key_check_prompt(),
            api_key=api_key,
            model=self.model,
            temperature=self.key_check_temperature,
            max_output_tokens=self.key_check_max_output_tokens,
        )
