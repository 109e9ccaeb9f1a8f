"""Unit test fixtures (mocks and stubs).

Provides mock objects for testing without external dependencies.
"""

import pytest
from unittest.mock import AsyncMock

from risk_analyzer.llm.base_client import BaseAnalysisClient
from risk_analyzer.llm.prompt_builder import PromptBuilder
from risk_analyzer.validation.pipeline import ResponseExtractor


@pytest.fixture
def mock_analysis_client(create_reply, valid_reply_text):
    """Mock analyzer client answering with a schema-conformant reply."""
    mock = AsyncMock(spec=BaseAnalysisClient)
    
    mock.analyze = AsyncMock(return_value=create_reply(valid_reply_text))
    mock.health_check = AsyncMock(return_value=True)
    mock.close = AsyncMock(return_value=None)
    
    return mock


@pytest.fixture
def prompt_builder() -> PromptBuilder:
    """Real prompt builder (pure, no I/O)."""
    return PromptBuilder()


@pytest.fixture
def response_extractor() -> ResponseExtractor:
    """Real response extractor with the packaged schema."""
    return ResponseExtractor()
