"""Custom Prometheus metrics for the Email Risk Analyzer.

Exposed at /metrics alongside the HTTP metrics from the instrumentator.
Alert rules worth configuring:
- analysis_failures_total{stage="client"} (analyzer unreachable or erroring)
- analysis_failures_total{stage="validation"} (analyzer answering off-schema)
- normalization_corrections_total (prompt drift: analyzer ignoring enum domains)
"""

from prometheus_client import Counter, Histogram

# === Pipeline Metrics ===

analysis_requests_total = Counter(
    "analysis_requests_total",
    "Total analysis pipeline runs by outcome",
    ["outcome"],
)
"""
Labels:
- outcome: success, failed
"""

analysis_failures_total = Counter(
    "analysis_failures_total",
    "Pipeline failures replaced by the canonical failure result",
    ["stage", "error_kind"],
)
"""
Labels:
- stage: client (call did not yield text), validation (text had no usable JSON)
- error_kind: network_failure, service_error, empty_response, no_json_found, malformed_json
"""

risk_level_total = Counter(
    "risk_level_total",
    "Risk verdicts returned to callers",
    ["risk_level"],
)

# === Validation Metrics ===

normalization_corrections_total = Counter(
    "normalization_corrections_total",
    "Fields corrected in place during reply normalization",
    ["field"],
)
"""
Labels:
- field: riskLevel, confidence, severity, scamType, ... (top-level or nested name)
"""

# === Analyzer Performance Metrics ===

analyzer_latency_seconds = Histogram(
    "analyzer_latency_seconds",
    "Analyzer call latency in seconds",
    ["model", "success"],
    buckets=[0.5, 1.0, 2.0, 5.0, 10.0, 20.0, 30.0, 60.0],
)

analyzer_tokens_total = Counter(
    "analyzer_tokens_total",
    "Tokens consumed by model and type",
    ["model", "token_type"],
)
"""
Labels:
- token_type: input, output
"""
