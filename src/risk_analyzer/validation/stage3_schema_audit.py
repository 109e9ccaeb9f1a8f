"""
Stage 3: JSON Schema audit.

Check the parsed reply against the packaged analysis_result schema. Unlike
a strict validator this stage never fails: the analyzer's answer is more
useful degraded than discarded, so deviations are reported as warnings and
stage 4 repairs them.
"""

import json
from functools import lru_cache
from importlib import resources

import structlog
from jsonschema import Draft7Validator

logger = structlog.get_logger(__name__)

SCHEMA_RESOURCE = "analysis_result.schema.json"


@lru_cache()
def load_result_schema() -> dict:
    """Load the packaged result JSON Schema (cached)."""
    schema_file = resources.files("risk_analyzer") / "schema" / SCHEMA_RESOURCE
    with schema_file.open("r", encoding="utf-8") as f:
        schema = json.load(f)
    Draft7Validator.check_schema(schema)
    return schema


class Stage3SchemaAudit:
    """
    Stage 3: report schema deviations as warnings.
    """
    
    def __init__(self, schema: dict | None = None, max_reported: int = 10):
        """
        Args:
            schema: Schema to audit against (defaults to the packaged one)
            max_reported: Cap on the number of warnings returned
        """
        self.schema = schema if schema is not None else load_result_schema()
        self.max_reported = max_reported
        self._validator = Draft7Validator(self.schema)
    
    def validate(self, data: dict) -> list[str]:
        """
        Audit parsed reply data.
        
        Args:
            data: Parsed JSON object from stage 2
        
        Returns:
            Human-readable deviations ("path: message"), possibly empty
        """
        errors = sorted(self._validator.iter_errors(data), key=lambda e: [str(p) for p in e.path])
        
        warnings = []
        for error in errors[:self.max_reported]:
            path = ".".join(str(p) for p in error.path) if error.path else "root"
            warnings.append(f"{path}: {error.message}")
        
        if errors:
            logger.info(
                "Stage 3: Reply deviates from result schema",
                deviation_count=len(errors),
                first_deviations=warnings[:3],
            )
        else:
            logger.debug("Stage 3: Reply conforms to result schema")
        return warnings
