"""
BondSense: relationship insights from exported chat logs.

Turns uploaded chat-export JSON into structured relationship analysis:
- Per-conversation sentiment, tone and engagement profiles
- Aggregate relationship assessment across all conversations
- Locally computed message statistics

Architecture: FastAPI routes + Gemini generation + retry engine + JSON recovery
"""

__version__ = "0.1.0"
