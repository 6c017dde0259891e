"""
FastAPI application entry point for BondSense.
"""

from pathlib import Path

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator

from bondsense.api.dependencies import get_llm_client
from bondsense.api.error_handlers import EXCEPTION_HANDLERS
from bondsense.api.middleware import RequestTracingMiddleware
from bondsense.api.routes import health_router, router as analysis_router
from bondsense.config import settings
from bondsense.logging_config import configure_logging

# Configure structured logging before any other imports
configure_logging(settings.LOG_LEVEL, settings.ENVIRONMENT)
logger = structlog.get_logger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    description="Chat relationship analysis with resilient Gemini calls and best-effort JSON recovery",
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Request tracing middleware (must be first for request_id in all logs)
app.add_middleware(RequestTracingMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

for exc_class, handler in EXCEPTION_HANDLERS.items():
    app.add_exception_handler(exc_class, handler)

app.include_router(analysis_router, prefix="/api", tags=["analysis"])
app.include_router(health_router, tags=["health"])


@app.on_event("startup")
async def startup():
    """Application startup - verify local resources."""
    logger.info(
        "Application startup",
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
        gemini_base_url=settings.GEMINI_BASE_URL,
        model=settings.GEMINI_MODEL,
        max_retries=settings.MAX_RETRIES,
    )

    templates_dir = Path(settings.PROMPT_TEMPLATES_DIR)
    if templates_dir.exists():
        logger.info("Prompt templates directory found", path=str(templates_dir))
    else:
        logger.error("Prompt templates directory not found", path=str(templates_dir))

    logger.info("Application startup complete")


@app.on_event("shutdown")
async def shutdown():
    """Application shutdown - close pooled connections."""
    logger.info("Application shutdown")
    if get_llm_client.cache_info().currsize:
        await get_llm_client().close()
    logger.info("Application shutdown complete")


if settings.PROMETHEUS_ENABLED:
    Instrumentator().instrument(app).expose(app)


@app.get("/")
async def root():
    """Root endpoint with API documentation links."""
    return {
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": "/docs",
        "health": "/health",
        "metrics": "/metrics" if settings.PROMETHEUS_ENABLED else None,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "bondsense.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
    )
