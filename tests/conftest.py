"""Shared test fixtures and configuration for all tests.

This conftest.py provides common fixtures used across unit and integration tests.
"""

import json
import pytest
from typing import Any, Dict

from risk_analyzer.config import Settings
from risk_analyzer.models.request_models import AnalyzerReply


PHISHING_EMAIL = """From: PayPal Security <security@paypa1-support.com>
Subject: Your account has been suspended

Dear Customer,

We detected unusual activity on your account. Your access will be
permanently limited within 24 hours unless you verify your identity.

Click here to confirm your card number and password:
http://paypa1-support.com/verify

PayPal Security Team"""


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with safe defaults for local testing.
    
    Override specific settings in individual tests as needed:
        def test_something(test_settings):
            test_settings.ANALYZER_MAX_RETRIES = 2
    """
    return Settings(
        # === Application ===
        APP_NAME="Email Risk Analyzer (Test)",
        APP_VERSION="0.1.0",
        DEBUG=True,
        LOG_LEVEL="DEBUG",
        ENVIRONMENT="development",
        
        # === Analyzer ===
        ANALYZER_BASE_URL="https://analyzer.test",
        ANALYZER_API_KEY="test-key",
        ANALYZER_MODEL="claude-sonnet-4-20250514",
        ANALYZER_MAX_TOKENS=1000,
        ANALYZER_TIMEOUT=5.0,
        
        # === Retry ===
        ANALYZER_MAX_RETRIES=0,
        
        PROMETHEUS_ENABLED=False,  # Disable metrics in tests unless explicitly needed
    )


@pytest.fixture
def phishing_email() -> str:
    """Raw text of a typical credential phishing email."""
    return PHISHING_EMAIL


@pytest.fixture
def valid_result_data() -> Dict[str, Any]:
    """Analyzer result that fully conforms to the result schema."""
    return {
        "riskLevel": "Critical",
        "scamType": "Credential phishing",
        "confidence": "High",
        "primaryIndicators": [
            {
                "issue": "Look-alike sender domain",
                "severity": "Critical",
                "explanation": "paypa1-support.com imitates paypal.com",
            },
            {
                "issue": "Artificial deadline",
                "severity": "High",
                "explanation": "Threatens account limitation within 24 hours",
            },
        ],
        "senderAnalysis": {
            "emailAddress": "security@paypa1-support.com",
            "domainIssues": ["Digit 1 substituted for letter l"],
            "verdict": "Impersonation of PayPal",
        },
        "contentAnalysis": {
            "urgencyTactics": ["24 hour deadline"],
            "genericElements": ["Dear Customer"],
            "requestsForInfo": ["Card number", "Password"],
        },
        "recommendedAction": "Do not click the link; report the email as phishing",
        "explanation": "Spoofed domain combined with credential requests and urgency.",
    }


@pytest.fixture
def valid_reply_text(valid_result_data: Dict[str, Any]) -> str:
    """Analyzer reply text that is exactly the JSON object."""
    return json.dumps(valid_result_data)


@pytest.fixture
def create_reply():
    """Factory fixture to create AnalyzerReply with custom text.
    
    Usage:
        def test_something(create_reply):
            reply = create_reply('Sure! {"riskLevel": "High"}')
    """
    def _create(
        text: str,
        model: str = "claude-sonnet-4-20250514",
        stop_reason: str = "end_turn",
    ) -> AnalyzerReply:
        return AnalyzerReply(
            text=text,
            model=model,
            stop_reason=stop_reason,
            input_tokens=512,
            output_tokens=300,
            latency_ms=1200,
        )
    
    return _create
