"""
Caller credential checks.

Gemini API keys are 39 characters and start with "AIza". The format check is
a cheap pre-flight; only a live call proves the key works. Keys are never
logged or stored.
"""

GEMINI_KEY_PREFIX = "AIza"
GEMINI_KEY_LENGTH = 39


def validate_api_key_format(api_key: str) -> bool:
    """
    Examples:
        >>> validate_api_key_format("AIza" + "x" * 35)
        True
        >>> validate_api_key_format("sk-123")
        False
    """
    key = (api_key or "").strip()
    return key.startswith(GEMINI_KEY_PREFIX) and len(key) == GEMINI_KEY_LENGTH
