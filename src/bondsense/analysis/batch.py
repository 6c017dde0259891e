"""
Batch analysis of an upload.

Files are analyzed one at a time in filename order, then the aggregate
analysis runs over all of them. Progress is explicit state: every snapshot
goes to the caller's callback and into the returned result.

Failure policy:
- A per-file failure aborts the batch (after an error snapshot)
- An aggregate failure is logged; the batch still returns the per-file results
"""

import re
from typing import Callable, Optional, Sequence

import structlog
from pydantic import SecretStr

from bondsense.analysis.service import AnalysisService
from bondsense.llm.exceptions import LLMClientError
from bondsense.models.chat_models import ChatFile
from bondsense.models.enums import ProgressStatus
from bondsense.models.output_models import AnalysisProgress, BatchAnalysisResult
from bondsense.retry.exceptions import RetryExhausted


logger = structlog.get_logger(__name__)

ProgressCallback = Callable[[AnalysisProgress], None]

_FIRST_NUMBER = re.compile(r"\d+")

OVERALL_STEP_LABEL = "Generating overall analysis..."
COMPLETED_LABEL = "Analysis completed!"


def file_order_key(name: str) -> int:
    """
    First integer in a file name, 0 if there is none.

    Examples:
        >>> file_order_key("message_12.json"), file_order_key("export.json")
        (12, 0)
    """
    match = _FIRST_NUMBER.search(name)
    return int(match.group()) if match else 0


def sort_chat_files(files: Sequence[ChatFile]) -> list[ChatFile]:
    """Sort by the first number in each name; ties keep upload order."""
    return sorted(files, key=lambda f: file_order_key(f.name))


class BatchAnalyzer:
    """
    Sequential analysis of several chat exports.

    There is no retry loop here: each invocation already goes through the
    service's retry engine.
    """

    def __init__(self, service: AnalysisService):
        self.service = service

    async def analyze_all(
        self,
        files: Sequence[ChatFile],
        api_key: SecretStr,
        on_progress: Optional[ProgressCallback] = None,
    ) -> BatchAnalysisResult:
        """
        Analyze every file, then the relationship overall.

        Args:
            files: Uploaded chat exports, any order
            api_key: Caller's Gemini key
            on_progress: Called with each progress snapshot

        Returns:
            BatchAnalysisResult with per-file results (tagged with `file_name`)
            in sorted order, the overall result or the reason it is missing,
            and every progress snapshot

        Raises:
            ValueError: No files
            Exception: Whatever failed a per-file analysis
        """
        if not files:
            raise ValueError("No chat files to analyze")

        ordered = sort_chat_files(files)
        total = len(ordered)
        result = BatchAnalysisResult()

        def report(current_file: int, name: str, status: ProgressStatus) -> None:
            snapshot = AnalysisProgress(
                current_file=current_file,
                total_files=total,
                current_file_name=name,
                status=status,
            )
            result.progress.append(snapshot)
            if on_progress is not None:
                on_progress(snapshot)

        logger.info("Starting batch analysis", total_files=total)
        report(0, "", ProgressStatus.ANALYZING)

        for index, chat in enumerate(ordered, start=1):
            report(index, chat.name, ProgressStatus.ANALYZING)
            try:
                analysis = await self.service.analyze_chat(chat.data, api_key, file_name=chat.name)
            except Exception as e:
                logger.error(
                    "Batch aborted",
                    file_name=chat.name,
                    error_type=type(e).__name__,
                    error=str(e),
                )
                report(0, f"Error: {e}", ProgressStatus.ERROR)
                raise
            result.results.append({**analysis, "file_name": chat.name})

        report(total, OVERALL_STEP_LABEL, ProgressStatus.ANALYZING)
        try:
            result.overall = await self.service.analyze_overall(
                ordered, api_key, individual_analyses=result.results
            )
        except (LLMClientError, RetryExhausted) as e:
            result.overall_error = str(e)
            logger.warning(
                "Overall analysis failed, keeping per-file results",
                error_type=type(e).__name__,
                error=str(e),
            )

        report(total, COMPLETED_LABEL, ProgressStatus.COMPLETED)
        logger.info(
            "Batch analysis complete",
            total_files=total,
            overall_available=result.overall is not None,
        )
        return result
