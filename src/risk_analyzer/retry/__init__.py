"""
Caller-supplied retry policy for the analyzer client.

Usage:
    >>> from risk_analyzer.retry import RetryingAnalysisClient
    >>> client = RetryingAnalysisClient(AnthropicClient(...), max_retries=2)
"""

from risk_analyzer.retry.client import RetryingAnalysisClient, is_retryable

__all__ = [
    "RetryingAnalysisClient",
    "is_retryable",
]
