"""
Output data models for the risk analysis.

These models are the contract handed to the presentation layer. They are
only ever constructed from normalized data (see validation.stage4_normalize)
or by the failure fallback, so every field is always present and every
enum field holds a known value.

JSON form uses camelCase names (riskLevel, scamType, ...); Python code
uses the snake_case attribute names.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from risk_analyzer.models.enums import Confidence, RiskLevel, Severity


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )


class Indicator(_CamelModel):
    """A single fraud/phishing indicator found in the email."""
    
    issue: str = Field(default="", description="Brief issue description")
    severity: Severity = Field(default=Severity.MEDIUM, description="Indicator severity")
    explanation: str = Field(default="", description="Why this matters")


class SenderAnalysis(_CamelModel):
    """Assessment of the sender address and domain."""
    
    email_address: Optional[str] = Field(
        default=None,
        description="Sender address extracted by the analyzer, if any"
    )
    domain_issues: list[str] = Field(
        default_factory=list,
        description="Domain-related problems (look-alike domains, free mail, ...)"
    )
    verdict: str = Field(default="", description="Assessment of sender legitimacy")


class ContentAnalysis(_CamelModel):
    """Manipulation techniques found in the message body."""
    
    urgency_tactics: list[str] = Field(default_factory=list)
    generic_elements: list[str] = Field(default_factory=list)
    requests_for_info: list[str] = Field(default_factory=list)


class AnalysisResult(_CamelModel):
    """
    Complete, normalized risk assessment.
    
    Either the normalized analyzer output or the canonical failure result.
    Never a partially parsed payload.
    """
    
    risk_level: RiskLevel = Field(..., description="Overall risk verdict")
    scam_type: str = Field(default="", description="Brief description of the scam type")
    confidence: Confidence = Field(..., description="Analyzer confidence")
    primary_indicators: list[Indicator] = Field(
        default_factory=list,
        description="Indicators in the order the analyzer reported them"
    )
    sender_analysis: SenderAnalysis = Field(default_factory=SenderAnalysis)
    content_analysis: ContentAnalysis = Field(default_factory=ContentAnalysis)
    recommended_action: str = Field(default="", description="Specific action recommendation")
    explanation: str = Field(default="", description="Brief connecting analysis")

    def to_wire(self) -> dict:
        """Serialize with camelCase keys and plain enum values."""
        return self.model_dump(mode="json", by_alias=True)


class AnalysisOutcome(BaseModel):
    """
    Result of one pipeline run plus how it was reached.
    
    `result` is always well-formed. When the run failed, `result` is the
    canonical failure result and `error_kind`/`error_stage` say why.
    """
    
    model_config = ConfigDict(frozen=True)
    
    result: AnalysisResult
    succeeded: bool
    error_kind: Optional[str] = Field(
        default=None,
        description="network_failure, service_error, empty_response, no_json_found, malformed_json"
    )
    error_stage: Optional[str] = Field(default=None, description="client or validation")
    latency_ms: int = Field(default=0, ge=0)
    warnings: list[str] = Field(
        default_factory=list,
        description="Schema deviations and normalization corrections (non-blocking)"
    )
