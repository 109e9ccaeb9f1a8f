"""
Analyzer client abstraction and implementations.

Components:
- BaseAnalysisClient: Abstract interface the pipeline depends on
- AnthropicClient: Implementation for the Anthropic Messages API
- PromptBuilder: Renders the schema-constrained analysis prompt
- exceptions: Client failure taxonomy
"""

from risk_analyzer.llm.base_client import BaseAnalysisClient
from risk_analyzer.llm.anthropic_client import AnthropicClient
from risk_analyzer.llm.prompt_builder import PromptBuilder
from risk_analyzer.llm.exceptions import (
    AnalyzerClientError,
    AnalyzerEmptyResponseError,
    AnalyzerNetworkError,
    AnalyzerServiceError,
)

__all__ = [
    "BaseAnalysisClient",
    "AnthropicClient",
    "PromptBuilder",
    "AnalyzerClientError",
    "AnalyzerNetworkError",
    "AnalyzerServiceError",
    "AnalyzerEmptyResponseError",
]
