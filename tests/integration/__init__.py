"""
Integration tests for the Email Risk Analyzer.

Test components together through the HTTP surface:
- API endpoints (FastAPI TestClient with the analyzer client overridden)
- Full pipeline (email -> prompt -> mock analyzer -> extraction -> result)
"""
