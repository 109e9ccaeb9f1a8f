"""
FastAPI dependency injection for the Email Risk Analyzer.

Provides singleton instances of expensive resources (HTTP client, Jinja2
environment, compiled JSON Schema) and a cheap per-request service.
"""

from functools import lru_cache

from fastapi import Depends

from risk_analyzer.analysis.service import EmailAnalysisService
from risk_analyzer.config import Settings, settings
from risk_analyzer.llm.anthropic_client import AnthropicClient
from risk_analyzer.llm.base_client import BaseAnalysisClient
from risk_analyzer.llm.prompt_builder import PromptBuilder
from risk_analyzer.retry.client import RetryingAnalysisClient
from risk_analyzer.validation.pipeline import ResponseExtractor


@lru_cache()
def get_settings() -> Settings:
    """Get settings singleton."""
    return settings


@lru_cache()
def get_analysis_client() -> BaseAnalysisClient:
    """
    Get singleton analyzer client with connection pooling.
    
    Wrapped in RetryingAnalysisClient only when ANALYZER_MAX_RETRIES > 0.
    """
    config = get_settings()
    client: BaseAnalysisClient = AnthropicClient(
        base_url=config.ANALYZER_BASE_URL,
        api_key=config.ANALYZER_API_KEY,
        api_version=config.ANALYZER_API_VERSION,
        timeout=config.ANALYZER_TIMEOUT,
    )
    if config.ANALYZER_MAX_RETRIES > 0:
        client = RetryingAnalysisClient(
            client,
            max_retries=config.ANALYZER_MAX_RETRIES,
            backoff_base=config.RETRY_BACKOFF_BASE,
        )
    return client


@lru_cache()
def get_prompt_builder() -> PromptBuilder:
    """Get singleton prompt builder (template loaded once)."""
    config = get_settings()
    return PromptBuilder(
        default_model=config.ANALYZER_MODEL,
        default_max_tokens=config.ANALYZER_MAX_TOKENS,
    )


@lru_cache()
def get_response_extractor() -> ResponseExtractor:
    """Get singleton response extractor (schema compiled once)."""
    return ResponseExtractor()


def get_analysis_service(
    client: BaseAnalysisClient = Depends(get_analysis_client),
    prompt_builder: PromptBuilder = Depends(get_prompt_builder),
    extractor: ResponseExtractor = Depends(get_response_extractor),
    settings: Settings = Depends(get_settings),
) -> EmailAnalysisService:
    """
    Create the analysis service with injected dependencies.
    
    Not cached: the service is stateless and all heavy resources are singletons.
    """
    return EmailAnalysisService(
        client=client,
        prompt_builder=prompt_builder,
        extractor=extractor,
        default_timeout=settings.ANALYSIS_TIMEOUT,
    )
