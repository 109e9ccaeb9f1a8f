"""
FastAPI routes and wiring.

- routes.py: POST /analyze, GET /health, GET /schema, GET /version
- dependencies.py: Dependency injection for client, builder, extractor, service
- models.py: API-specific request/response models
- error_handlers.py: Exception handlers for structured error responses
- middleware.py: Request id tracing
"""

from risk_analyzer.api import dependencies, error_handlers, models
from risk_analyzer.api.routes import router

__all__ = [
    "router",
    "dependencies",
    "error_handlers",
    "models",
]
