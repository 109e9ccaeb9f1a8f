"""
Email Risk Analyzer.

Turns raw email text into a structured fraud/phishing risk assessment:
- Schema-constrained prompt construction
- External analyzer call with a bounded timeout
- Tolerant JSON extraction and normalization of the reply
- Canonical failure result when anything goes wrong

Architecture: FastAPI transport + Anthropic Messages API analyzer + staged validation
"""

__version__ = "0.1.0"
