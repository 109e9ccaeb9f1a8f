"""
Email analysis service: the single entry point for the presentation layer.

Flow:
    email text -> PromptBuilder -> analyzer client -> ResponseExtractor -> AnalysisResult

Every client or validation error is converted to the canonical failure
result here. Only the empty-input guard and unexpected programming errors
propagate as exceptions.

Usage:
    service = EmailAnalysisService(client, prompt_builder, extractor)
    result = await service.analyze_email(email_text)
"""

import asyncio
import time
from typing import Optional

import structlog

from risk_analyzer.analysis.fallback import build_failure_result
from risk_analyzer.llm.base_client import BaseAnalysisClient
from risk_analyzer.llm.exceptions import AnalyzerClientError, AnalyzerNetworkError
from risk_analyzer.llm.prompt_builder import PromptBuilder
from risk_analyzer.models.analysis_models import AnalysisOutcome, AnalysisResult
from risk_analyzer.models.request_models import (
    AnalysisPayload,
    AnalysisRequest,
    AnalyzerReply,
    EmptyEmailError,
)
from risk_analyzer.monitoring.metrics import (
    analysis_failures_total,
    analysis_requests_total,
    risk_level_total,
)
from risk_analyzer.validation.exceptions import ValidationError
from risk_analyzer.validation.pipeline import ResponseExtractor

logger = structlog.get_logger(__name__)


class EmailAnalysisService:
    """
    Runs one analysis per call.

    Holds no per-request state, so one instance can serve any number of
    concurrent callers.

    Attributes:
        client: Analyzer client (any BaseAnalysisClient, possibly retrying)
        prompt_builder: Builds the analyzer payload
        extractor: Turns the raw reply into an AnalysisResult
        default_timeout: Whole-call timeout in seconds used when the caller
            passes none (None = rely on the client's own timeout)
    """

    def __init__(
        self,
        client: BaseAnalysisClient,
        prompt_builder: PromptBuilder,
        extractor: ResponseExtractor,
        default_timeout: Optional[float] = None,
    ):
        self.client = client
        self.prompt_builder = prompt_builder
        self.extractor = extractor
        self.default_timeout = default_timeout

    async def analyze_email(
        self,
        email_text: str,
        timeout: Optional[float] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> AnalysisResult:
        """
        Analyze raw email text.

        Args:
            email_text: Text pasted by the user
            timeout: Caller-side timeout for the analyzer call, in seconds
            cancel_event: Setting this event abandons the analyzer call

        Returns:
            Normalized AnalysisResult, or the canonical failure result

        Raises:
            EmptyEmailError: email_text is empty or whitespace-only
        """
        outcome = await self.run(email_text, timeout=timeout, cancel_event=cancel_event)
        return outcome.result

    async def run(
        self,
        email_text: str,
        timeout: Optional[float] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> AnalysisOutcome:
        """
        Analyze raw email text and report how the result was reached.

        Same contract as analyze_email, with the error kind, latency and
        validation warnings attached.
        """
        if not email_text or not email_text.strip():
            raise EmptyEmailError()
        request = AnalysisRequest(email_text=email_text)

        start_time = time.perf_counter()
        payload = self.prompt_builder.build(request.email_text)

        try:
            reply = await self._call_analyzer(
                payload,
                timeout if timeout is not None else self.default_timeout,
                cancel_event,
            )
        except AnalyzerClientError as e:
            # Service unreachable or not answering with text
            logger.warning(
                "Analyzer call failed",
                stage="client",
                error_kind=e.kind,
                error=e.message,
                details=e.details,
            )
            return self._failed(e.kind, "client", start_time)

        try:
            report = self.extractor.extract_with_report(reply.text)
        except ValidationError as e:
            # Service answered, but not with a usable JSON object
            logger.warning(
                "Analyzer reply rejected",
                stage="validation",
                error_kind=e.kind,
                error=e.message,
                stop_reason=reply.stop_reason,
                reply_length=len(reply.text),
            )
            return self._failed(e.kind, "validation", start_time)

        latency_ms = int((time.perf_counter() - start_time) * 1000)
        analysis_requests_total.labels(outcome="success").inc()
        risk_level_total.labels(risk_level=report.result.risk_level.value).inc()

        logger.info(
            "Email analysis completed",
            risk_level=report.result.risk_level.value,
            confidence=report.result.confidence.value,
            latency_ms=latency_ms,
            warning_count=len(report.warnings),
        )
        return AnalysisOutcome(
            result=report.result,
            succeeded=True,
            latency_ms=latency_ms,
            warnings=report.warnings,
        )

    async def _call_analyzer(
        self,
        payload: AnalysisPayload,
        timeout: Optional[float],
        cancel_event: Optional[asyncio.Event],
    ) -> AnalyzerReply:
        """
        Await the analyzer, bounded by timeout and cancel_event.

        Both the timeout and the cancel event resolve to AnalyzerNetworkError.
        """
        analyze_task = asyncio.ensure_future(self.client.analyze(payload))
        waiters = {analyze_task}
        cancel_task = None
        if cancel_event is not None:
            cancel_task = asyncio.ensure_future(cancel_event.wait())
            waiters.add(cancel_task)

        try:
            done, _ = await asyncio.wait(
                waiters, timeout=timeout, return_when=asyncio.FIRST_COMPLETED
            )
        finally:
            leftover = [task for task in waiters if not task.done()]
            for task in leftover:
                task.cancel()
            if leftover:
                await asyncio.gather(*leftover, return_exceptions=True)

        if analyze_task in done:
            return analyze_task.result()
        if cancel_task is not None and cancel_task in done:
            raise AnalyzerNetworkError(
                "Analysis cancelled by caller",
                details={"cancelled": True}
            )
        raise AnalyzerNetworkError(
            f"Analysis timed out after {timeout}s",
            details={"timeout": timeout}
        )

    def _failed(self, error_kind: str, stage: str, start_time: float) -> AnalysisOutcome:
        latency_ms = int((time.perf_counter() - start_time) * 1000)
        analysis_requests_total.labels(outcome="failed").inc()
        analysis_failures_total.labels(stage=stage, error_kind=error_kind).inc()
        risk_level_total.labels(risk_level="Unknown").inc()
        return AnalysisOutcome(
            result=build_failure_result(),
            succeeded=False,
            error_kind=error_kind,
            error_stage=stage,
            latency_ms=latency_ms,
        )
