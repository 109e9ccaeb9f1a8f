"""
Anthropic Messages API client for the external analyzer.

Communicates with the API using httpx AsyncClient:
- One POST /v1/messages per analyze() call, no internal retry
- Bounded timeout on every request
- Failure taxonomy: network failure, service error, empty response
"""

import json
import time
from typing import Any, Dict, Optional
import httpx
import structlog

from risk_analyzer.llm.base_client import BaseAnalysisClient
from risk_analyzer.llm.exceptions import (
    AnalyzerEmptyResponseError,
    AnalyzerNetworkError,
    AnalyzerServiceError,
)
from risk_analyzer.models.request_models import AnalysisPayload, AnalyzerReply
from risk_analyzer.monitoring.metrics import analyzer_latency_seconds, analyzer_tokens_total


logger = structlog.get_logger(__name__)


def extract_reply_text(response_data: Any) -> str:
    """
    Return the text of the first content item of type "text".

    Raises:
        AnalyzerEmptyResponseError: No such item, or its text is blank
    """
    if not isinstance(response_data, dict):
        raise AnalyzerEmptyResponseError(
            "Analyzer reply is not a JSON object",
            details={"reply_type": type(response_data).__name__}
        )

    content = response_data.get("content")
    if not isinstance(content, list):
        raise AnalyzerEmptyResponseError(
            "Analyzer reply has no content list",
            details={"keys": sorted(response_data.keys())}
        )

    for item in content:
        if isinstance(item, dict) and item.get("type") == "text":
            text = item.get("text")
            if not isinstance(text, str) or not text.strip():
                raise AnalyzerEmptyResponseError(
                    "Analyzer text content is empty",
                    details={"content_items": len(content)}
                )
            return text

    raise AnalyzerEmptyResponseError(
        "Analyzer reply contains no text content",
        details={
            "content_types": [
                item.get("type") for item in content if isinstance(item, dict)
            ]
        }
    )


def _token_count(value: Any) -> Optional[int]:
    if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
        return value
    return None


class AnthropicClient(BaseAnalysisClient):
    """
    Analyzer client for the Anthropic Messages API.

    API Endpoints:
    - POST /v1/messages: Generate a reply for the analysis prompt
    - GET /v1/models: Lightweight reachability check

    Request:
    {
        "model": "claude-sonnet-4-20250514",
        "max_tokens": 1000,
        "messages": [{"role": "user", "content": "..."}]
    }

    Response:
    {
        "model": "...",
        "content": [{"type": "text", "text": "..."}],
        "stop_reason": "end_turn",
        "usage": {"input_tokens": 512, "output_tokens": 300}
    }
    """

    def __init__(
        self,
        base_url: str = "https://api.anthropic.com",
        api_key: str = "",
        api_version: str = "2023-06-01",
        timeout: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize Anthropic client.

        Args:
            base_url: API base URL
            api_key: API key sent as x-api-key
            api_version: Value of the anthropic-version header
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self.base_url = base_url.rstrip('/')
        self.api_key = api_key
        self.api_version = api_version
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

        logger.info(
            "Anthropic client initialized",
            base_url=self.base_url,
            api_version=api_version,
            timeout=timeout,
            has_api_key=bool(api_key),
        )

    def _headers(self) -> Dict[str, str]:
        return {
            "x-api-key": self.api_key,
            "anthropic-version": self.api_version,
            "content-type": "application/json",
        }

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the async HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.timeout),
                headers=self._headers(),
                transport=self._transport,
            )
            logger.debug("Created new httpx AsyncClient")
        return self._client

    async def analyze(self, payload: AnalysisPayload) -> AnalyzerReply:
        """Send the analysis prompt and return the first text content item."""
        start_time = time.perf_counter()

        logger.info(
            "Sending analysis request",
            model=payload.model,
            max_tokens=payload.max_tokens,
            prompt_length=len(payload.prompt),
        )

        try:
            client = await self._get_client()
            response = await client.post("/v1/messages", json=payload.to_request_body())
        except httpx.TimeoutException as e:
            self._observe_failure(payload.model, start_time)
            logger.warning("Analyzer request timeout", timeout=self.timeout, error=str(e))
            raise AnalyzerNetworkError(
                f"Request timeout after {self.timeout}s",
                details={"timeout": self.timeout, "error_type": type(e).__name__}
            ) from e
        except httpx.RequestError as e:
            self._observe_failure(payload.model, start_time)
            logger.warning(
                "Analyzer network error",
                error=str(e),
                error_type=type(e).__name__,
            )
            raise AnalyzerNetworkError(
                f"Network error: {e}",
                details={"error_type": type(e).__name__}
            ) from e

        latency_ms = int((time.perf_counter() - start_time) * 1000)

        if response.status_code >= 400:
            self._observe_failure(payload.model, start_time)
            error_text = response.text[:500]
            logger.error(
                "Analyzer HTTP error",
                status_code=response.status_code,
                error_text=error_text,
            )
            raise AnalyzerServiceError(
                f"Analyzer returned status {response.status_code}",
                status_code=response.status_code,
                details={"error": error_text}
            )

        try:
            response_data = response.json()
        except json.JSONDecodeError as e:
            self._observe_failure(payload.model, start_time)
            logger.error("Analyzer reply is not valid JSON", error=str(e))
            raise AnalyzerEmptyResponseError(
                "Analyzer reply body is not JSON",
                details={"parse_error": str(e)}
            ) from e

        if isinstance(response_data, dict) and response_data.get("type") == "error":
            self._observe_failure(payload.model, start_time)
            error = response_data.get("error") or {}
            if not isinstance(error, dict):
                error = {"message": str(error)}
            logger.error("Analyzer reported an error", error=error)
            raise AnalyzerServiceError(
                f"Analyzer error: {error.get('type', 'unknown')}",
                status_code=None,
                details={"error": error}
            )

        try:
            text = extract_reply_text(response_data)
        except AnalyzerEmptyResponseError:
            self._observe_failure(payload.model, start_time)
            logger.warning("Analyzer reply has no text content")
            raise

        model_version = str(response_data.get("model") or payload.model)
        usage = response_data.get("usage")
        if not isinstance(usage, dict):
            usage = {}
        input_tokens = _token_count(usage.get("input_tokens"))
        output_tokens = _token_count(usage.get("output_tokens"))

        logger.info(
            "Analyzer call successful",
            model=model_version,
            latency_ms=latency_ms,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            stop_reason=response_data.get("stop_reason"),
        )

        analyzer_latency_seconds.labels(
            model=model_version, success="true"
        ).observe(latency_ms / 1000.0)
        if input_tokens:
            analyzer_tokens_total.labels(model=model_version, token_type="input").inc(input_tokens)
        if output_tokens:
            analyzer_tokens_total.labels(model=model_version, token_type="output").inc(output_tokens)

        return AnalyzerReply(
            text=text,
            model=model_version,
            stop_reason=response_data.get("stop_reason"),
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            latency_ms=latency_ms,
        )

    @staticmethod
    def _observe_failure(model: str, start_time: float) -> None:
        analyzer_latency_seconds.labels(model=model, success="false").observe(
            time.perf_counter() - start_time
        )

    async def health_check(self) -> bool:
        """Check reachability via GET /v1/models. Returns False on any error."""
        try:
            client = await self._get_client()
            response = await client.get("/v1/models", timeout=5.0)
            response.raise_for_status()
            logger.debug("Analyzer health check passed")
            return True
        except httpx.HTTPError as e:
            logger.warning("Analyzer health check failed", error=str(e))
            return False

    async def close(self):
        """Close the HTTP client connection."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            logger.debug("Closed Anthropic client connection")

    def __repr__(self) -> str:
        return f"AnthropicClient(base_url={self.base_url}, timeout={self.timeout}s)"
