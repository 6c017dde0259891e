"""
FastAPI API routes and endpoints.

- routes.py: analysis endpoints (/api/...) and GET /health
- dependencies.py: Dependency injection for the Gemini client, services, etc.
- models.py: API-specific request/response models
- error_handlers.py: Exception handlers for structured error responses
- middleware.py: Request tracing
"""

from bondsense.api import dependencies, error_handlers, models
from bondsense.api.routes import health_router, router

__all__ = [
    "router",
    "health_router",
    "dependencies",
    "error_handlers",
    "models",
]
