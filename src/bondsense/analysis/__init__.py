"""
Chat analysis orchestration.

Components:
- AnalysisService: one conversation or the aggregate, end to end
- BatchAnalyzer: sequential upload processing with explicit progress
- stats: locally computed statistics
- credentials: API key format check
"""

from bondsense.analysis.batch import BatchAnalyzer, sort_chat_files
from bondsense.analysis.credentials import validate_api_key_format
from bondsense.analysis.exceptions import AnalysisError, EmptyConversationError
from bondsense.analysis.service import AnalysisService

__all__ = [
    "AnalysisService",
    "BatchAnalyzer",
    "sort_chat_files",
    "validate_api_key_format",
    "AnalysisError",
    "EmptyConversationError",
]
