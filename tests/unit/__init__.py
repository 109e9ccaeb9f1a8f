"""
Unit tests for the Email Risk Analyzer.

Test individual components in isolation:
- Data models (serialization, validation, enum domains)
- Prompt builder (verbatim insertion, schema text)
- Analyzer client (httpx MockTransport, failure mapping)
- Extraction stages (each stage with positive/negative cases)
- Analysis service (fallback, timeout, cancellation)
- Retry wrapper
"""
