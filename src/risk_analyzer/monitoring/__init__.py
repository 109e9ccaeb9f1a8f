"""Prometheus metrics for the Email Risk Analyzer."""

from risk_analyzer.monitoring.metrics import (
    analysis_failures_total,
    analysis_requests_total,
    analyzer_latency_seconds,
    analyzer_tokens_total,
    normalization_corrections_total,
    risk_level_total,
)

__all__ = [
    "analysis_requests_total",
    "analysis_failures_total",
    "risk_level_total",
    "normalization_corrections_total",
    "analyzer_latency_seconds",
    "analyzer_tokens_total",
]
