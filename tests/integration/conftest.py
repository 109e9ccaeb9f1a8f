"""Integration test fixtures (application wiring).

The FastAPI app is exercised end to end through TestClient; only the
analyzer client is replaced, via dependency overrides, so no network
access is needed.
"""

import pytest
from unittest.mock import AsyncMock
from fastapi.testclient import TestClient

from risk_analyzer.api.dependencies import get_analysis_client
from risk_analyzer.llm.base_client import BaseAnalysisClient
from risk_analyzer.main import app


@pytest.fixture
def analyzer_client(create_reply, valid_reply_text):
    """Stand-in analyzer client injected into the app."""
    mock = AsyncMock(spec=BaseAnalysisClient)
    mock.analyze = AsyncMock(return_value=create_reply(valid_reply_text))
    mock.health_check = AsyncMock(return_value=True)
    mock.close = AsyncMock(return_value=None)
    return mock


@pytest.fixture
def client(analyzer_client):
    """TestClient with the analyzer client overridden."""
    app.dependency_overrides[get_analysis_client] = lambda: analyzer_client
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
