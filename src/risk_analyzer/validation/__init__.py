"""
Reply extraction and validation (4 stages).

- pipeline.py: ResponseExtractor orchestrating all stages
- stage1_extract.py: Locate the balanced {...} object (hard fail)
- stage2_json_parse.py: JSON parsing (hard fail)
- stage3_schema_audit.py: JSON Schema audit (warnings only)
- stage4_normalize.py: Defaults and enum fallbacks (corrections only)
"""

from .exceptions import (
    ValidationError,
    JSONNotFoundError,
    JSONParseError,
)
from .pipeline import ExtractionReport, ResponseExtractor
from .stage3_schema_audit import load_result_schema

__all__ = [
    # Main pipeline
    "ResponseExtractor",
    "ExtractionReport",
    "load_result_schema",
    # Exceptions (for the analysis service)
    "ValidationError",
    "JSONNotFoundError",
    "JSONParseError",
]
