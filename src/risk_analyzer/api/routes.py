"""
API routes: the transport between the presentation layer and the pipeline.

POST /analyze always answers 200 with a complete AnalysisResult once the
request body is valid; analyzer failures show up as status="failed" with the
canonical failure result, never as an HTTP error.
"""

from datetime import datetime, timezone

import structlog
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from risk_analyzer.analysis.service import EmailAnalysisService
from risk_analyzer.api.dependencies import (
    get_analysis_client,
    get_analysis_service,
    get_settings,
)
from risk_analyzer.api.models import (
    AnalyzeEmailRequest,
    AnalyzeEmailResponse,
    ErrorResponse,
    HealthResponse,
    VersionResponse,
)
from risk_analyzer.config import Settings
from risk_analyzer.llm.base_client import BaseAnalysisClient
from risk_analyzer.validation.stage3_schema_audit import load_result_schema

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.post(
    "/analyze",
    response_model=AnalyzeEmailResponse,
    response_model_by_alias=True,
    status_code=status.HTTP_200_OK,
    summary="Analyze an email for fraud and phishing",
    responses={
        200: {"description": "Analysis finished (check status for success/failed)"},
        422: {"model": ErrorResponse, "description": "Missing or blank emailText"},
    },
)
async def analyze_email(
    request: AnalyzeEmailRequest,
    service: EmailAnalysisService = Depends(get_analysis_service),
) -> AnalyzeEmailResponse:
    """
    Run one analysis.

    Args:
        request: Body with the raw email text
        service: Analysis service (injected)

    Returns:
        AnalyzeEmailResponse wrapping a complete AnalysisResult
    """
    logger.info("Analysis request received", email_text_length=len(request.email_text))

    outcome = await service.run(request.email_text)

    return AnalyzeEmailResponse(
        status="success" if outcome.succeeded else "failed",
        result=outcome.result,
        error_kind=outcome.error_kind,
        latency_ms=outcome.latency_ms,
        warnings=outcome.warnings,
    )


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    responses={
        200: {"description": "Analyzer reachable"},
        503: {"description": "Analyzer unreachable"},
    },
)
async def health_check(
    client: BaseAnalysisClient = Depends(get_analysis_client),
    settings: Settings = Depends(get_settings),
):
    """Report whether the analyzer service is reachable."""
    analyzer_ok = await client.health_check()
    services = {"analyzer": "ok" if analyzer_ok else "unreachable"}

    health_status = "healthy" if analyzer_ok else "unhealthy"
    status_code = status.HTTP_200_OK if analyzer_ok else status.HTTP_503_SERVICE_UNAVAILABLE

    logger.info("Health check", status=health_status, services=services)

    response = HealthResponse(
        status=health_status,
        version=settings.APP_VERSION,
        services=services,
        timestamp=datetime.now(timezone.utc),
    )
    return JSONResponse(
        status_code=status_code,
        content=response.model_dump(mode="json"),
    )


@router.get(
    "/schema",
    summary="JSON Schema of the analysis result",
    responses={200: {"content": {"application/json": {}}}},
)
async def get_schema():
    """Return the JSON Schema the analyzer's reply is audited against."""
    return load_result_schema()


@router.get(
    "/version",
    response_model=VersionResponse,
    summary="Analyzer configuration",
)
async def get_version(
    settings: Settings = Depends(get_settings),
) -> VersionResponse:
    """Return version and analyzer configuration."""
    return VersionResponse(
        app_version=settings.APP_VERSION,
        analyzer_model=settings.ANALYZER_MODEL,
        max_tokens=settings.ANALYZER_MAX_TOKENS,
        schema_id=load_result_schema().get("$id", ""),
        retry_enabled=settings.ANALYZER_MAX_RETRIES > 0,
    )
