"""
Pydantic data models for BondSense.

Includes:
- Chat export models (ChatMessage, ChatFile)
- LLM models (LLMGenerationRequest, LLMGenerationResponse)
- Output models (statistics, required-field contracts, batch progress)
- Enums (labels, variants, retry and recovery outcomes)
"""

from bondsense.models.chat_models import ChatFile, ChatMessage
from bondsense.models.enums import (
    AnalysisVariant,
    AttemptOutcome,
    ErrorClass,
    FrequencyLabel,
    LevelLabel,
    ProgressStatus,
    RecoveryPath,
    SentimentLabel,
)
from bondsense.models.llm_models import LLMGenerationRequest, LLMGenerationResponse
from bondsense.models.output_models import (
    CHAT_REQUIRED_FIELDS,
    OVERALL_REQUIRED_FIELDS,
    PLACEHOLDER_PARTICIPANTS,
    AnalysisProgress,
    BatchAnalysisResult,
    ConversationStats,
    MessageStats,
    OverallStats,
    ParticipantStats,
    TotalStats,
    pad_participants,
)

__all__ = [
    # Chat exports
    "ChatMessage",
    "ChatFile",
    # Enums
    "AnalysisVariant",
    "AttemptOutcome",
    "ErrorClass",
    "FrequencyLabel",
    "LevelLabel",
    "ProgressStatus",
    "RecoveryPath",
    "SentimentLabel",
    # LLM models
    "LLMGenerationRequest",
    "LLMGenerationResponse",
    # Output models
    "CHAT_REQUIRED_FIELDS",
    "OVERALL_REQUIRED_FIELDS",
    "PLACEHOLDER_PARTICIPANTS",
    "AnalysisProgress",
    "BatchAnalysisResult",
    "ConversationStats",
    "MessageStats",
    "OverallStats",
    "ParticipantStats",
    "TotalStats",
    "pad_participants",
]
