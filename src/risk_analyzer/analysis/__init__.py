"""
Analysis pipeline boundary.

- service.py: EmailAnalysisService.analyze_email, the single public operation
- fallback.py: Canonical failure result substituted for any pipeline error
"""

from risk_analyzer.analysis.fallback import (
    DEFAULT_FAILURE_CAUSE,
    build_failure_result,
)
from risk_analyzer.analysis.service import EmailAnalysisService

__all__ = [
    "EmailAnalysisService",
    "build_failure_result",
    "DEFAULT_FAILURE_CAUSE",
]
