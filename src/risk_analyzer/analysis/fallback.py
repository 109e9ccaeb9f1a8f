"""
Canonical failure result.

Substituted for any client or validation error so the presentation layer
always receives a well-formed AnalysisResult. The result is the same for
every error kind; the kind itself is only reported in logs, metrics and
the AnalysisOutcome envelope.
"""

from risk_analyzer.models.analysis_models import (
    AnalysisResult,
    ContentAnalysis,
    Indicator,
    SenderAnalysis,
)
from risk_analyzer.models.enums import Confidence, RiskLevel, Severity

DEFAULT_FAILURE_CAUSE = "Could not complete analysis. Please try again."


def build_failure_result(cause: str = DEFAULT_FAILURE_CAUSE) -> AnalysisResult:
    """
    Build the canonical failure result.
    
    Args:
        cause: Explanation shown on the single "Analysis failed" indicator
    """
    return AnalysisResult(
        risk_level=RiskLevel.UNKNOWN,
        scam_type="Analysis Error",
        confidence=Confidence.LOW,
        primary_indicators=[
            Indicator(
                issue="Analysis failed",
                severity=Severity.HIGH,
                explanation=cause,
            )
        ],
        sender_analysis=SenderAnalysis(verdict="Unknown"),
        content_analysis=ContentAnalysis(),
        recommended_action="Manual review required",
        explanation="Technical error occurred during analysis.",
    )
