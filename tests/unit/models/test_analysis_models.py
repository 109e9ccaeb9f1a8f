"""
Unit tests for result and request models.
"""

import pytest
from pydantic import ValidationError

from risk_analyzer.models.analysis_models import (
    AnalysisOutcome,
    AnalysisResult,
    ContentAnalysis,
    Indicator,
    SenderAnalysis,
)
from risk_analyzer.models.enums import Confidence, RiskLevel, Severity
from risk_analyzer.models.request_models import (
    AnalysisPayload,
    AnalysisRequest,
    Message,
)


class TestAnalysisResult:
    """Test the result contract and its wire format."""
    
    def test_defaults_are_complete(self):
        """Only the enum verdicts are required; everything else defaults."""
        result = AnalysisResult(risk_level=RiskLevel.LOW, confidence=Confidence.HIGH)
        
        assert result.scam_type == ""
        assert result.primary_indicators == []
        assert result.sender_analysis == SenderAnalysis()
        assert result.content_analysis.urgency_tactics == []
        assert result.recommended_action == ""
    
    def test_to_wire_uses_camel_case(self):
        result = AnalysisResult(
            risk_level=RiskLevel.LIKELY_LEGITIMATE,
            confidence=Confidence.MEDIUM,
            primary_indicators=[Indicator(issue="x", severity=Severity.LOW)],
            sender_analysis=SenderAnalysis(email_address="a@b.com"),
        )
        
        wire = result.to_wire()
        
        assert wire["riskLevel"] == "Likely Legitimate"
        assert wire["confidence"] == "Medium"
        assert wire["primaryIndicators"][0]["severity"] == "Low"
        assert wire["senderAnalysis"]["emailAddress"] == "a@b.com"
        assert wire["contentAnalysis"] == {
            "urgencyTactics": [],
            "genericElements": [],
            "requestsForInfo": [],
        }
    
    def test_accepts_alias_input(self, valid_result_data):
        result = AnalysisResult.model_validate(valid_result_data)
        
        assert result.risk_level is RiskLevel.CRITICAL
        assert result.sender_analysis.domain_issues == ["Digit 1 substituted for letter l"]
        assert result.to_wire() == valid_result_data
    
    def test_rejects_unknown_fields(self):
        with pytest.raises(ValidationError):
            AnalysisResult(
                risk_level=RiskLevel.LOW,
                confidence=Confidence.LOW,
                extra_field="nope",
            )
    
    def test_rejects_value_outside_domain(self):
        with pytest.raises(ValidationError):
            Indicator(severity="Bogus")


class TestAnalysisOutcome:
    """Test the internal run envelope."""
    
    def test_success_has_no_error(self):
        outcome = AnalysisOutcome(
            result=AnalysisResult(risk_level=RiskLevel.LOW, confidence=Confidence.LOW),
            succeeded=True,
        )
        
        assert outcome.error_kind is None
        assert outcome.error_stage is None
        assert outcome.warnings == []


class TestAnalysisRequest:
    """Test the input guard model."""
    
    def test_text_is_stored_trimmed(self):
        request = AnalysisRequest(email_text="  \n Hello there \n")
        
        assert request.email_text == "Hello there"
    
    @pytest.mark.parametrize("text", ["", "   ", "\n\t "])
    def test_blank_text_rejected(self, text):
        with pytest.raises(ValidationError) as exc_info:
            AnalysisRequest(email_text=text)
        
        assert "must not be empty" in str(exc_info.value)
    
    def test_frozen(self):
        request = AnalysisRequest(email_text="Hello")
        
        with pytest.raises(ValidationError):
            request.email_text = "Changed"


class TestAnalysisPayload:
    """Test the outbound request body."""
    
    def test_request_body_shape(self):
        payload = AnalysisPayload(
            model="claude-sonnet-4-20250514",
            max_tokens=1000,
            messages=(Message(role="user", content="Analyze this"),),
        )
        
        assert payload.prompt == "Analyze this"
        assert payload.to_request_body() == {
            "model": "claude-sonnet-4-20250514",
            "max_tokens": 1000,
            "messages": [{"role": "user", "content": "Analyze this"}],
        }
    
    def test_temperature_included_when_set(self):
        payload = AnalysisPayload(
            model="m",
            messages=(Message(content="x"),),
            temperature=0.2,
        )
        
        assert payload.to_request_body()["temperature"] == 0.2
    
    def test_requires_a_message(self):
        with pytest.raises(ValidationError):
            AnalysisPayload(model="m", messages=())
