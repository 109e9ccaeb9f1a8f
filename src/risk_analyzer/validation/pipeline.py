"""
Response extraction pipeline: raw analyzer text -> AnalysisResult.

Stages:
- Stage 1: Locate JSON object in free text (hard fail: JSONNotFoundError)
- Stage 2: Parse JSON (hard fail: JSONParseError)
- Stage 3: JSON Schema audit (warnings only)
- Stage 4: Normalization (corrections, never fails)

Stages 1-2 raise; the analysis service turns those into the canonical
failure result. Stages 3-4 accumulate warnings.
"""

from dataclasses import dataclass, field

import structlog

from risk_analyzer.models.analysis_models import AnalysisResult
from .stage1_extract import Stage1JSONExtract
from .stage2_json_parse import Stage2JSONParse
from .stage3_schema_audit import Stage3SchemaAudit
from .stage4_normalize import Stage4Normalize

logger = structlog.get_logger(__name__)


@dataclass
class ExtractionReport:
    """Normalized result plus what had to be tolerated to get it."""
    result: AnalysisResult
    schema_warnings: list[str] = field(default_factory=list)
    corrections: list[str] = field(default_factory=list)

    @property
    def warnings(self) -> list[str]:
        return self.schema_warnings + self.corrections


class ResponseExtractor:
    """
    Extract and validate the analysis result embedded in an analyzer reply.
    
    Stateless after construction; safe to share between concurrent callers.
    """
    
    def __init__(self, schema_audit: Stage3SchemaAudit | None = None):
        self.stage1 = Stage1JSONExtract()
        self.stage2 = Stage2JSONParse()
        self.stage3 = schema_audit or Stage3SchemaAudit()
        self.stage4 = Stage4Normalize()
    
    def extract_with_report(self, raw_text: str) -> ExtractionReport:
        """
        Run all stages and return the result with its warnings.
        
        Raises:
            JSONNotFoundError: No JSON object in the reply
            JSONParseError: The located object is malformed
        """
        candidate = self.stage1.validate(raw_text)
        parsed = self.stage2.validate(candidate)
        schema_warnings = self.stage3.validate(parsed)
        result, corrections = self.stage4.validate(parsed)
        
        logger.info(
            "Analyzer reply extracted",
            risk_level=result.risk_level.value,
            indicator_count=len(result.primary_indicators),
            schema_warning_count=len(schema_warnings),
            correction_count=len(corrections),
        )
        return ExtractionReport(
            result=result,
            schema_warnings=schema_warnings,
            corrections=corrections,
        )
    
    def extract(self, raw_text: str) -> AnalysisResult:
        """
        Extract the normalized AnalysisResult from raw reply text.
        
        Raises:
            JSONNotFoundError: No JSON object in the reply
            JSONParseError: The located object is malformed
        """
        return self.extract_with_report(raw_text).result
