"""
Enumerations for BondSense data models.

Label enums are the closed option sets the prompts ask the model to choose
from; the fallback synthesizer only ever emits these values.
"""

from enum import Enum


class AnalysisVariant(str, Enum):
    """Shaped Result schema variant."""

    CHAT = "chat"
    OVERALL = "overall"


class SentimentLabel(str, Enum):
    """Per-participant sentiment."""

    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"
    MIXED = "mixed"


class LevelLabel(str, Enum):
    """Three-step scale used by most per-participant scores."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class FrequencyLabel(str, Enum):
    """How often a behaviour shows up (sarcasm usage)."""

    NONE = "None"
    OCCASIONAL = "Occasional"
    FREQUENT = "Frequent"


class ErrorClass(str, Enum):
    """Retry classification of a failed invocation attempt."""

    TRANSIENT = "transient"
    FATAL = "fatal"


class AttemptOutcome(str, Enum):
    """Outcome of a single invocation attempt."""

    SUCCESS = "success"
    FAILURE = "failure"


class RecoveryPath(str, Enum):
    """Which recovery step produced the Shaped Result."""

    STRICT = "strict"
    REPAIRED = "repaired"
    FALLBACK = "fallback"


class ProgressStatus(str, Enum):
    """Batch analysis progress status."""

    ANALYZING = "analyzing"
    COMPLETED = "completed"
    ERROR = "error"
