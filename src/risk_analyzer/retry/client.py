"""
Opt-in retry wrapper for analyzer clients.

The analyzer client itself never retries. Callers that want retries wrap
any BaseAnalysisClient in RetryingAnalysisClient: the wrapper has the same
contract, so the pipeline cannot tell the difference.

Retry policy:
    - AnalyzerNetworkError: retried
    - AnalyzerServiceError with status 429 or >= 500: retried
    - Anything else (4xx, empty response): raised immediately
    - Backoff between attempts: backoff_base ** attempt seconds
"""

import asyncio
import structlog

from risk_analyzer.llm.base_client import BaseAnalysisClient
from risk_analyzer.llm.exceptions import (
    AnalyzerClientError,
    AnalyzerNetworkError,
    AnalyzerServiceError,
)
from risk_analyzer.models.request_models import AnalysisPayload, AnalyzerReply

logger = structlog.get_logger(__name__)


def is_retryable(error: AnalyzerClientError) -> bool:
    """Whether a later attempt could plausibly succeed."""
    if isinstance(error, AnalyzerNetworkError):
        return True
    if isinstance(error, AnalyzerServiceError):
        return error.is_transient
    return False


class RetryingAnalysisClient(BaseAnalysisClient):
    """
    Decorates an analyzer client with exponential backoff retries.
    
    Attributes:
        inner: Wrapped client
        max_retries: Extra attempts after the first one (0 = no retry)
        backoff_base: Base of the exponential backoff, in seconds
    """

    def __init__(
        self,
        inner: BaseAnalysisClient,
        max_retries: int = 2,
        backoff_base: float = 2.0,
    ):
        if max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        self.inner = inner
        self.max_retries = max_retries
        self.backoff_base = backoff_base

    async def analyze(self, payload: AnalysisPayload) -> AnalyzerReply:
        """
        Call the wrapped client, retrying transient failures.
        
        Raises:
            AnalyzerClientError: The last error once attempts are exhausted,
                or the first non-retryable one
        """
        total_attempts = self.max_retries + 1
        for attempt in range(1, total_attempts + 1):
            try:
                return await self.inner.analyze(payload)
            except AnalyzerClientError as e:
                if not is_retryable(e) or attempt == total_attempts:
                    if attempt > 1:
                        logger.warning(
                            "Analyzer retries exhausted",
                            attempts=attempt,
                            error_kind=e.kind,
                        )
                    raise
                backoff_seconds = self.backoff_base ** attempt
                logger.info(
                    "Retrying analyzer call",
                    attempt=attempt,
                    max_attempts=total_attempts,
                    error_kind=e.kind,
                    backoff_seconds=backoff_seconds,
                )
                await asyncio.sleep(backoff_seconds)
        # Should not reach here: the last attempt always returns or raises
        raise AnalyzerNetworkError("Analyzer call failed after all retries")

    async def health_check(self) -> bool:
        return await self.inner.health_check()

    async def close(self):
        await self.inner.close()

    def __repr__(self) -> str:
        return f"RetryingAnalysisClient({self.inner!r}, max_retries={self.max_retries})"
