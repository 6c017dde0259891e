"""
Fallback Shaped Results.

Built only from statistics computed locally from the request's input, never
from the model output that failed to decode. The heuristics are deliberately
crude: they compare message counts and average lengths between the first two
participants and otherwise emit fixed, plausible defaults.

Neither builder raises, for any stats, including conversations with fewer
than two participants (a missing participant counts as zero messages).
"""

import copy
from typing import Any

from bondsense.models.enums import FrequencyLabel, LevelLabel, SentimentLabel
from bondsense.models.output_models import ConversationStats, OverallStats, pad_participants
from bondsense.recovery import placeholders


def build_chat_fallback(stats: ConversationStats) -> dict[str, Any]:
    """
    Build the per-conversation fallback record.

    Args:
        stats: Local statistics for the conversation

    Returns:
        Dict carrying every chat field, including `participants` and `sentiments`
    """
    a, b = pad_participants(stats.participants)
    a_stats, b_stats = stats.for_participant(a), stats.for_participant(b)
    count_a, count_b = a_stats.message_count, b_stats.message_count
    length_a, length_b = a_stats.avg_length, b_stats.avg_length

    return {
        "participants": list(stats.participants),
        "sentiments": {
            a: (SentimentLabel.POSITIVE if length_a > length_b else SentimentLabel.NEUTRAL).value,
            b: (SentimentLabel.POSITIVE if length_b > length_a else SentimentLabel.MIXED).value,
        },
        "tones": {
            a: ["engaging", "expressive", "supportive"] if count_a > count_b
            else ["casual", "friendly", "responsive"],
            b: ["thoughtful", "detailed", "caring"] if count_b > count_a
            else ["concise", "direct", "warm"],
        },
        "emotions_detected": {
            a: ["curiosity", "engagement", "warmth"],
            b: ["trust", "openness", "appreciation"],
        },
        "intents": {
            a: ["connecting", "sharing", "supporting"],
            b: ["responding", "engaging", "bonding"],
        },
        "toxicity_index": {a: LevelLabel.LOW.value, b: LevelLabel.LOW.value},
        "openness_score": {
            a: (LevelLabel.HIGH if count_a > count_b else LevelLabel.MEDIUM).value,
            b: (LevelLabel.HIGH if count_b > count_a else LevelLabel.MEDIUM).value,
        },
        "trust_score": {a: LevelLabel.MEDIUM.value, b: LevelLabel.HIGH.value},
        "love_index": {a: LevelLabel.MEDIUM.value, b: LevelLabel.MEDIUM.value},
        "sarcasm_usage": {a: FrequencyLabel.OCCASIONAL.value, b: FrequencyLabel.NONE.value},
        "curiosity_level": {a: LevelLabel.HIGH.value, b: LevelLabel.MEDIUM.value},
        "communication_style": {
            a: "expressive" if length_a > length_b else "casual",
            b: "thoughtful" if length_b > length_a else "supportive",
        },
        "emotional_expressiveness": {a: "expressive", b: "moderate"},
        "conflict_approach": {a: "diplomatic", b: "direct"},
        "humor_style": {a: "playful", b: "witty"},
        "responsiveness": {
            "user1_response_rate": LevelLabel.HIGH.value,
            "user2_response_rate": LevelLabel.MEDIUM.value,
            "most_engaged": a,
        },
        "message_balance": {
            "user1_msg_count": count_a,
            "user2_msg_count": count_b,
        },
        "emotional_shift": placeholders.CHAT_EMOTIONAL_SHIFT,
        "relationship_summary": placeholders.CHAT_RELATIONSHIP_SUMMARY,
    }


def build_overall_fallback(stats: OverallStats) -> dict[str, Any]:
    """
    Build the aggregate fallback record.

    `individual_analysis` is keyed by the first two participants.
    """
    a, b = pad_participants(stats.participants)
    first_profile, second_profile = copy.deepcopy(placeholders.INDIVIDUAL_PROFILES)

    return {
        "relationship_type": "friendship",
        "relationship_stage": "established",
        "compatibility_score": 75,
        "communication_health": "good",
        "overall_sentiment": "positive",
        "dominant_emotions": ["trust", "support", "humor", "curiosity", "affection"],
        "relationship_trajectory": placeholders.OVERALL_RELATIONSHIP_TRAJECTORY,
        "relationship_compatibility": placeholders.OVERALL_RELATIONSHIP_COMPATIBILITY,
        "future_predictions": placeholders.OVERALL_FUTURE_PREDICTIONS,
        "communication_analysis": placeholders.OVERALL_COMMUNICATION_ANALYSIS,
        "emotional_dynamics": placeholders.OVERALL_EMOTIONAL_DYNAMICS,
        "key_strengths": list(placeholders.OVERALL_KEY_STRENGTHS),
        "areas_for_improvement": list(placeholders.OVERALL_AREAS_FOR_IMPROVEMENT),
        "conversation_patterns": {
            "most_active_periods": ["daily conversations", "evening check-ins"],
            "communication_frequency": "high",
            "response_patterns": "quick",
        },
        "emotional_intelligence": {
            "empathy_level": "high",
            "conflict_resolution": "good",
            "emotional_support": "strong",
        },
        "trust_and_intimacy": {
            "trust_level": "high",
            "intimacy_level": "moderate",
            "vulnerability_sharing": "open",
        },
        "future_outlook": placeholders.OVERALL_FUTURE_OUTLOOK,
        "detailed_summary": placeholders.OVERALL_DETAILED_SUMMARY,
        "individual_analysis": {a: first_profile, b: second_profile},
        "compatibility_factors": placeholders.OVERALL_COMPATIBILITY_FACTORS,
        "timeline_analysis": [
            {"period": "Early Phase", "sentiment": 70, "engagement": 75, "trust": 60},
            {"period": "Development", "sentiment": 80, "engagement": 85, "trust": 75},
            {"period": "Current", "sentiment": 85, "engagement": 90, "trust": 85},
        ],
    }
