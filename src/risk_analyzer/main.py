"""
FastAPI application entry point for the Email Risk Analyzer.
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator

from risk_analyzer.api.dependencies import get_analysis_client, get_prompt_builder
from risk_analyzer.api.error_handlers import EXCEPTION_HANDLERS
from risk_analyzer.api.middleware import RequestTracingMiddleware
from risk_analyzer.api.routes import router
from risk_analyzer.config import settings
from risk_analyzer.logging_config import configure_logging
from risk_analyzer.validation.stage3_schema_audit import load_result_schema

configure_logging(settings.LOG_LEVEL, settings.ENVIRONMENT)
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load templates and schema eagerly; close the analyzer client on shutdown."""
    logger.info(
        "Application startup",
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
        analyzer_base_url=settings.ANALYZER_BASE_URL,
        model=settings.ANALYZER_MODEL,
    )
    if not settings.ANALYZER_API_KEY:
        logger.warning("ANALYZER_API_KEY is not set; analyzer calls will be rejected")

    # Template and schema are package data; load both before serving
    get_prompt_builder()
    load_result_schema()

    logger.info("Application startup complete")
    yield

    logger.info("Application shutdown")
    await get_analysis_client().close()
    logger.info("Application shutdown complete")


app = FastAPI(
    title=settings.APP_NAME,
    description="Fraud and phishing risk assessment for raw email text",
    version=settings.APP_VERSION,
    lifespan=lifespan,
)

# Request tracing middleware (must be first for request_id in all logs)
app.add_middleware(RequestTracingMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

for exc_class, handler in EXCEPTION_HANDLERS.items():
    app.add_exception_handler(exc_class, handler)

app.include_router(router, tags=["analysis"])

if settings.PROMETHEUS_ENABLED:
    Instrumentator().instrument(app).expose(app)


@app.get("/")
async def root():
    """Root endpoint with API documentation links."""
    return {
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "running",
        "docs": "/docs",
        "health": "/health",
        "schema": "/schema",
        "metrics": "/metrics" if settings.PROMETHEUS_ENABLED else None,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "risk_analyzer.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
    )
