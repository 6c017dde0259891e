"""
Structured response recovery.

Components:
- ResponseRecoverer: strict decode, textual repair, fallback
- repair_json_text: the deterministic repair sequence
- build_chat_fallback / build_overall_fallback: records built from local stats
"""

from bondsense.recovery.fallbacks import build_chat_fallback, build_overall_fallback
from bondsense.recovery.json_repair import repair_json_text
from bondsense.recovery.recoverer import ResponseRecoverer

__all__ = [
    "ResponseRecoverer",
    "repair_json_text",
    "build_chat_fallback",
    "build_overall_fallback",
]
