"""
Analysis API routes.

- POST /api/analyze-chat: one conversation
- POST /api/analyze-overall: relationship across every conversation
- POST /api/analyze-batch: every file in order, then the aggregate
- POST /api/test-api-key: one unretried probe of the caller's key
- GET /health: service health
"""

import time
from pathlib import Path

import structlog
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from bondsense.analysis.batch import BatchAnalyzer
from bondsense.analysis.credentials import validate_api_key_format
from bondsense.analysis.service import AnalysisService
from bondsense.api.dependencies import (
    get_analysis_service,
    get_batch_analyzer,
    get_settings,
)
from bondsense.api.error_handlers import describe_error, error_content
from bondsense.api.models import (
    AnalyzeBatchRequest,
    AnalyzeChatRequest,
    AnalyzeOverallRequest,
    ApiKeyTestRequest,
    ApiKeyTestResponse,
    ErrorResponse,
    HealthResponse,
)
from bondsense.config import Settings
from bondsense.llm.exceptions import LLMClientError
from bondsense.models.output_models import BatchAnalysisResult
from bondsense.monitoring.metrics import analysis_duration_seconds, analysis_requests_total


logger = structlog.get_logger(__name__)

router = APIRouter()

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid request data or missing API key"},
    401: {"model": ErrorResponse, "description": "Invalid API key or insufficient permissions"},
    404: {"model": ErrorResponse, "description": "Model not available for this key"},
    429: {"model": ErrorResponse, "description": "Rate limit exceeded after retries"},
    503: {"model": ErrorResponse, "description": "Gemini unavailable after retries"},
}


@router.post(
    "/analyze-chat",
    summary="Analyze one conversation",
    description="""
    Analyze a single chat export with the caller's Gemini key.

    Returns the model's analysis (repaired or synthesized when the output is
    not valid JSON) plus locally computed `participants` and `message_stats`.
    """,
    responses=ERROR_RESPONSES,
)
async def analyze_chat(
    request: AnalyzeChatRequest,
    service: AnalysisService = Depends(get_analysis_service),
) -> dict:
    start_time = time.time()
    try:
        result = await service.analyze_chat(
            request.messages, request.api_key, file_name=request.file_name
        )
    except Exception as exc:
        analysis_requests_total.labels(endpoint="analyze_chat", status="error").inc()
        logger.error(
            "Chat analysis failed",
            file_name=request.file_name,
            error_type=type(exc).__name__,
        )
        raise

    analysis_requests_total.labels(endpoint="analyze_chat", status="success").inc()
    analysis_duration_seconds.labels(endpoint="analyze_chat").observe(time.time() - start_time)
    return result


@router.post(
    "/analyze-overall",
    summary="Analyze the relationship across conversations",
    description="""
    Aggregate analysis over every uploaded conversation.

    Returns the model's analysis plus locally computed `total_stats`.
    """,
    responses=ERROR_RESPONSES,
)
async def analyze_overall(
    request: AnalyzeOverallRequest,
    service: AnalysisService = Depends(get_analysis_service),
) -> dict:
    start_time = time.time()
    try:
        result = await service.analyze_overall(
            request.all_chats,
            request.api_key,
            individual_analyses=request.individual_analyses,
        )
    except Exception as exc:
        analysis_requests_total.labels(endpoint="analyze_overall", status="error").inc()
        logger.error(
            "Overall analysis failed",
            chat_count=len(request.all_chats),
            error_type=type(exc).__name__,
        )
        raise

    analysis_requests_total.labels(endpoint="analyze_overall", status="success").inc()
    analysis_duration_seconds.labels(endpoint="analyze_overall").observe(time.time() - start_time)
    return result


@router.post(
    "/analyze-batch",
    response_model=BatchAnalysisResult,
    summary="Analyze a whole upload",
    description="""
    Analyze every file in filename order (message_1.json, message_2.json, ...),
    then the relationship overall.

    A failed file aborts the batch with that file's error status. A failed
    overall analysis does not: the response carries `overall_error` instead.
    """,
    responses=ERROR_RESPONSES,
)
async def analyze_batch(
    request: AnalyzeBatchRequest,
    analyzer: BatchAnalyzer = Depends(get_batch_analyzer),
):
    if not validate_api_key_format(request.api_key.get_secret_value()):
        analysis_requests_total.labels(endpoint="analyze_batch", status="error").inc()
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_content(
                "Invalid API key format. Gemini API keys start with 'AIza' and are 39 characters long."
            ),
        )

    start_time = time.time()
    try:
        result = await analyzer.analyze_all(request.files, request.api_key)
    except Exception as exc:
        analysis_requests_total.labels(endpoint="analyze_batch", status="error").inc()
        logger.error(
            "Batch analysis failed",
            total_files=len(request.files),
            error_type=type(exc).__name__,
        )
        raise

    analysis_requests_total.labels(endpoint="analyze_batch", status="success").inc()
    analysis_duration_seconds.labels(endpoint="analyze_batch").observe(time.time() - start_time)
    return result


@router.post(
    "/test-api-key",
    response_model=ApiKeyTestResponse,
    summary="Check that an API key works",
    responses={
        400: {"description": "Missing key or unexpected reply"},
        401: {"description": "Invalid API key"},
    },
)
async def test_api_key(
    request: ApiKeyTestRequest,
    service: AnalysisService = Depends(get_analysis_service),
):
    try:
        valid = await service.check_api_key(request.api_key)
    except LLMClientError as exc:
        status_code, message = describe_error(exc)
        analysis_requests_total.labels(endpoint="test_api_key", status="error").inc()
        logger.warning(
            "API key check failed",
            error_type=type(exc).__name__,
            status_code=status_code,
        )
        return JSONResponse(
            status_code=status_code,
            content=error_content(message, success=False),
        )

    if not valid:
        analysis_requests_total.labels(endpoint="test_api_key", status="error").inc()
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_content(
                "API key test failed - unexpected response from Gemini", success=False
            ),
        )

    analysis_requests_total.labels(endpoint="test_api_key", status="success").inc()
    return ApiKeyTestResponse(message="API key is valid and working correctly!", success=True)


health_router = APIRouter()


@health_router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    description="""
    Local readiness only. Gemini is not probed: every call needs the
    caller's own key.
    """,
)
async def health_check(
    settings: Settings = Depends(get_settings),
) -> HealthResponse:
    checks = {}
    templates_dir = Path(settings.PROMPT_TEMPLATES_DIR)
    checks["prompt_templates"] = "ok" if templates_dir.is_dir() else "missing"

    health_status = "healthy" if all(v == "ok" for v in checks.values()) else "degraded"
    logger.info("Health check", status=health_status, checks=checks)

    return HealthResponse(
        status=health_status,
        version=settings.APP_VERSION,
        model=settings.GEMINI_MODEL,
        checks=checks,
    )
