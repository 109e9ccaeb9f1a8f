"""
Integration tests for FastAPI application.

These tests use TestClient to test the full API without requiring
running services (mocked analyzer client).
"""

import pytest

from risk_analyzer.llm.exceptions import AnalyzerNetworkError, AnalyzerServiceError


def test_root_endpoint(client):
    """Test root endpoint returns service info."""
    response = client.get("/")
    
    assert response.status_code == 200
    data = response.json()
    assert data["service"] == "Email Risk Analyzer"
    assert data["version"] == "0.1.0"
    assert data["status"] == "running"
    assert "docs" in data
    assert "health" in data


def test_analyze_success(client, analyzer_client, phishing_email, valid_result_data):
    """Test a successful analysis returns the normalized result."""
    response = client.post("/analyze", json={"emailText": phishing_email})
    
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "success"
    assert data["errorKind"] is None
    assert data["warnings"] == []
    assert isinstance(data["latencyMs"], int)
    assert data["result"] == valid_result_data
    analyzer_client.analyze.assert_awaited_once()


def test_analyze_prose_wrapped_reply(client, analyzer_client, create_reply):
    analyzer_client.analyze.return_value = create_reply(
        'Sure! {"riskLevel":"High","scamType":"Invoice fraud","confidence":"Medium",'
        '"primaryIndicators":[],"senderAnalysis":{"verdict":"suspicious"},'
        '"contentAnalysis":{},"recommendedAction":"Do not reply","explanation":"x"}'
    )
    
    response = client.post("/analyze", json={"emailText": "Invoice attached, pay today."})
    
    result = response.json()["result"]
    assert result["riskLevel"] == "High"
    assert result["primaryIndicators"] == []
    assert result["contentAnalysis"]["urgencyTactics"] == []
    assert result["senderAnalysis"]["emailAddress"] is None


def test_analyze_normalization_warnings(client, analyzer_client, create_reply):
    analyzer_client.analyze.return_value = create_reply('{"riskLevel": "Bogus", "confidence": "High"}')
    
    response = client.post("/analyze", json={"emailText": "Hello"})
    
    data = response.json()
    assert data["status"] == "success"
    assert data["result"]["riskLevel"] == "Unknown"
    assert any(w.startswith("riskLevel:") for w in data["warnings"])


@pytest.mark.parametrize("error, error_kind", [
    (AnalyzerNetworkError("Connection refused"), "network_failure"),
    (AnalyzerServiceError("Analyzer returned status 500", status_code=500), "service_error"),
])
def test_analyze_client_failure(client, analyzer_client, error, error_kind):
    """Test analyzer failures come back as the canonical failure result, not an HTTP error."""
    analyzer_client.analyze.side_effect = error
    
    response = client.post("/analyze", json={"emailText": "Hello"})
    
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "failed"
    assert data["errorKind"] == error_kind
    assert data["result"]["riskLevel"] == "Unknown"
    assert data["result"]["scamType"] == "Analysis Error"
    assert data["result"]["recommendedAction"] == "Manual review required"


def test_analyze_unparseable_reply(client, analyzer_client, create_reply):
    analyzer_client.analyze.return_value = create_reply("I can't help with that.")
    
    response = client.post("/analyze", json={"emailText": "Hello"})
    
    data = response.json()
    assert data["status"] == "failed"
    assert data["errorKind"] == "no_json_found"


@pytest.mark.parametrize("body", [
    {"emailText": ""},
    {"emailText": "   \n"},
    {},
    {"emailText": None},
])
def test_analyze_invalid_request(client, analyzer_client, body):
    """Test blank or missing email text is rejected before the analyzer."""
    response = client.post("/analyze", json=body)
    
    assert response.status_code == 422
    data = response.json()
    assert data["error"] == "invalid_request"
    assert "timestamp" in data
    assert data["details"]
    analyzer_client.analyze.assert_not_called()


def test_schema_endpoint(client):
    """Test schema endpoint returns JSON Schema."""
    response = client.get("/schema")
    
    assert response.status_code == 200
    schema = response.json()
    assert schema["$id"] == "analysis_result_v1"
    assert "riskLevel" in schema["required"]
    assert "Likely Legitimate" in schema["properties"]["riskLevel"]["enum"]


def test_version_endpoint(client):
    """Test version endpoint returns analyzer configuration."""
    response = client.get("/version")
    
    assert response.status_code == 200
    data = response.json()
    assert data["app_version"] == "0.1.0"
    assert data["analyzer_model"]
    assert data["max_tokens"] > 0
    assert data["schema_id"] == "analysis_result_v1"
    assert "retry_enabled" in data


def test_health_endpoint_healthy(client):
    response = client.get("/health")
    
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["services"] == {"analyzer": "ok"}
    assert "timestamp" in data


def test_health_endpoint_unhealthy(client, analyzer_client):
    analyzer_client.health_check.return_value = False
    
    response = client.get("/health")
    
    assert response.status_code == 503
    data = response.json()
    assert data["status"] == "unhealthy"
    assert data["services"] == {"analyzer": "unreachable"}


def test_request_id_propagated(client):
    """Test the tracing middleware echoes the caller's request id."""
    response = client.get("/", headers={"X-Request-ID": "req-123"})
    
    assert response.headers["X-Request-ID"] == "req-123"


def test_request_id_generated(client):
    response = client.get("/")
    
    assert response.headers["X-Request-ID"]
