"""
Stage 4: Normalization.

Coerce a parsed reply into a fully-formed AnalysisResult. The analyzer's
prose fields are advisory, its enum fields drive rendering, so:

- String fields: missing or non-string -> "" (numbers are stringified)
- Enum fields: exact or loose match, else a fixed fallback
  (riskLevel -> Unknown, confidence -> Low, severity -> Medium)
- Array fields: absent or not an array -> []
- Nested objects: absent or not an object -> all-default object

Never fails. Every change is recorded so it can be logged and counted.
"""

from typing import Any, Optional

import structlog

from risk_analyzer.models.analysis_models import (
    AnalysisResult,
    ContentAnalysis,
    Indicator,
    SenderAnalysis,
)
from risk_analyzer.models.enums import Confidence, RiskLevel, Severity, LenientEnum
from risk_analyzer.monitoring.metrics import normalization_corrections_total

logger = structlog.get_logger(__name__)

RISK_LEVEL_FALLBACK = RiskLevel.UNKNOWN
CONFIDENCE_FALLBACK = Confidence.LOW
SEVERITY_FALLBACK = Severity.MEDIUM

_MISSING = object()


def _is_scalar(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class _Corrections:
    """Collects in-place corrections as "path: description" strings."""

    def __init__(self):
        self.items: list[str] = []

    def add(self, path: str, description: str) -> None:
        self.items.append(f"{path}: {description}")
        normalization_corrections_total.labels(field=path.rsplit(".", 1)[-1].split("[")[0]).inc()


class Stage4Normalize:
    """
    Stage 4: build the AnalysisResult from parsed reply data.

    Enum values are accepted beyond an exact match: a value that differs
    from an allowed one only in case or whitespace ("high",
    "likely  legitimate") resolves to that member and is recorded as a
    correction. Only values matching no member take the fallback.
    """

    def validate(self, data: dict) -> tuple[AnalysisResult, list[str]]:
        """
        Normalize parsed reply data.

        Args:
            data: Parsed JSON object from stage 2

        Returns:
            Tuple of (AnalysisResult, corrections applied)
        """
        fixes = _Corrections()

        result = AnalysisResult(
            risk_level=self._enum(data.get("riskLevel", _MISSING), RiskLevel, RISK_LEVEL_FALLBACK, "riskLevel", fixes),
            scam_type=self._string(data.get("scamType", _MISSING), "scamType", fixes),
            confidence=self._enum(data.get("confidence", _MISSING), Confidence, CONFIDENCE_FALLBACK, "confidence", fixes),
            primary_indicators=self._indicators(data.get("primaryIndicators", _MISSING), fixes),
            sender_analysis=self._sender(data.get("senderAnalysis", _MISSING), fixes),
            content_analysis=self._content(data.get("contentAnalysis", _MISSING), fixes),
            recommended_action=self._string(data.get("recommendedAction", _MISSING), "recommendedAction", fixes),
            explanation=self._string(data.get("explanation", _MISSING), "explanation", fixes),
        )

        if fixes.items:
            logger.info(
                "Stage 4: Reply normalized with corrections",
                correction_count=len(fixes.items),
                corrections=fixes.items[:5],
            )
        else:
            logger.debug("Stage 4: Reply normalized without corrections")
        return result, fixes.items

    # --- field helpers ---------------------------------------------------

    @staticmethod
    def _string(value: Any, path: str, fixes: _Corrections) -> str:
        if isinstance(value, str):
            return value
        if _is_scalar(value):
            fixes.add(path, f"converted {type(value).__name__} to string")
            return str(value)
        fixes.add(path, "missing" if value is _MISSING else f"invalid {type(value).__name__}, using empty string")
        return ""

    @staticmethod
    def _enum(
        value: Any,
        enum_cls: type[LenientEnum],
        fallback: LenientEnum,
        path: str,
        fixes: _Corrections,
    ) -> LenientEnum:
        member = enum_cls.match(value)
        if member is None:
            shown = "missing" if value is _MISSING else repr(value)
            fixes.add(path, f"unrecognized value {shown}, using {fallback.value!r}")
            return fallback
        if member.value != value:
            fixes.add(path, f"matched {value!r} to {member.value!r}")
        return member

    @staticmethod
    def _string_list(value: Any, path: str, fixes: _Corrections) -> list[str]:
        if value is _MISSING or value is None:
            return []
        if not isinstance(value, list):
            fixes.add(path, f"expected array, got {type(value).__name__}")
            return []
        items = []
        for index, item in enumerate(value):
            if isinstance(item, str):
                items.append(item)
            elif _is_scalar(item):
                items.append(str(item))
            else:
                fixes.add(f"{path}[{index}]", f"dropped {type(item).__name__} item")
        return items

    def _indicators(self, value: Any, fixes: _Corrections) -> list[Indicator]:
        if value is _MISSING or value is None:
            return []
        if not isinstance(value, list):
            fixes.add("primaryIndicators", f"expected array, got {type(value).__name__}")
            return []
        indicators = []
        for index, item in enumerate(value):
            path = f"primaryIndicators[{index}]"
            if not isinstance(item, dict):
                fixes.add(path, f"dropped {type(item).__name__} item")
                continue
            indicators.append(Indicator(
                issue=self._string(item.get("issue", _MISSING), f"{path}.issue", fixes),
                severity=self._enum(item.get("severity", _MISSING), Severity, SEVERITY_FALLBACK, f"{path}.severity", fixes),
                explanation=self._string(item.get("explanation", _MISSING), f"{path}.explanation", fixes),
            ))
        return indicators

    def _sender(self, value: Any, fixes: _Corrections) -> SenderAnalysis:
        if not isinstance(value, dict):
            if value is not _MISSING:
                fixes.add("senderAnalysis", f"expected object, got {type(value).__name__}")
            value = {}
        return SenderAnalysis(
            email_address=self._optional_string(value.get("emailAddress")),
            domain_issues=self._string_list(value.get("domainIssues", _MISSING), "senderAnalysis.domainIssues", fixes),
            verdict=self._string(value.get("verdict", _MISSING), "senderAnalysis.verdict", fixes),
        )

    def _content(self, value: Any, fixes: _Corrections) -> ContentAnalysis:
        if not isinstance(value, dict):
            if value is not _MISSING:
                fixes.add("contentAnalysis", f"expected object, got {type(value).__name__}")
            value = {}
        return ContentAnalysis(
            urgency_tactics=self._string_list(value.get("urgencyTactics", _MISSING), "contentAnalysis.urgencyTactics", fixes),
            generic_elements=self._string_list(value.get("genericElements", _MISSING), "contentAnalysis.genericElements", fixes),
            requests_for_info=self._string_list(value.get("requestsForInfo", _MISSING), "contentAnalysis.requestsForInfo", fixes),
        )

    @staticmethod
    def _optional_string(value: Any) -> Optional[str]:
        # emailAddress is optional: anything but a non-blank string means "not extracted"
        if isinstance(value, str) and value.strip():
            return value
        return None
