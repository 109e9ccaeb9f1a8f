"""
API-specific request and response models for FastAPI endpoints.

These wrap the domain models with transport metadata. JSON keys are
camelCase to match the AnalysisResult wire format.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from risk_analyzer.models.analysis_models import AnalysisResult


class _ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AnalyzeEmailRequest(_ApiModel):
    """Body of POST /analyze."""
    
    email_text: str = Field(
        description="Raw email text, including sender, subject and body",
        examples=["From: security@paypa1.com\nSubject: Account suspended\n\nVerify now..."],
    )

    @field_validator("email_text")
    @classmethod
    def email_text_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("emailText must not be empty or whitespace-only")
        return v


class AnalyzeEmailResponse(_ApiModel):
    """Response for POST /analyze. `result` is always a complete AnalysisResult."""
    
    status: str = Field(
        description="success, or failed when result is the canonical failure result",
        examples=["success", "failed"]
    )
    result: AnalysisResult
    error_kind: Optional[str] = Field(
        default=None,
        description="Why the analysis failed (only when status=failed)"
    )
    latency_ms: int = Field(ge=0)
    warnings: list[str] = Field(
        default_factory=list,
        description="Schema deviations and corrections applied to the analyzer reply"
    )


class HealthResponse(BaseModel):
    """Response for health check endpoint."""
    
    status: str = Field(examples=["healthy", "unhealthy"])
    version: str
    services: dict[str, str] = Field(
        description="Status of dependent services",
        examples=[{"analyzer": "ok"}]
    )
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class VersionResponse(BaseModel):
    """Response for version information endpoint."""
    
    app_version: str
    analyzer_model: str
    max_tokens: int
    schema_id: str
    retry_enabled: bool


class ErrorResponse(BaseModel):
    """Standard error response format."""
    
    error: str = Field(examples=["invalid_request", "internal_error"])
    message: str
    details: Optional[list | dict] = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
