"""
Pydantic data models for the Email Risk Analyzer.

Includes:
- Enums (RiskLevel, Confidence, Severity)
- Result models (Indicator, SenderAnalysis, ContentAnalysis, AnalysisResult)
- Request models (AnalysisRequest, AnalysisPayload, AnalyzerReply)
"""

from risk_analyzer.models.enums import Confidence, RiskLevel, Severity
from risk_analyzer.models.analysis_models import (
    AnalysisOutcome,
    AnalysisResult,
    ContentAnalysis,
    Indicator,
    SenderAnalysis,
)
from risk_analyzer.models.request_models import (
    AnalysisPayload,
    AnalysisRequest,
    AnalyzerReply,
    EmptyEmailError,
    Message,
)

__all__ = [
    # Enums
    "RiskLevel",
    "Confidence",
    "Severity",
    # Result models
    "Indicator",
    "SenderAnalysis",
    "ContentAnalysis",
    "AnalysisResult",
    "AnalysisOutcome",
    # Request models
    "AnalysisRequest",
    "AnalysisPayload",
    "AnalyzerReply",
    "Message",
    "EmptyEmailError",
]
