"""
Enumerations for the analysis result data model.

Values are the exact strings exchanged with the analyzer. The rendering
layer keys its styling on these values, so the sets are closed.
"""

from enum import Enum
from typing import Optional


class LenientEnum(str, Enum):
    """Closed enum that can also resolve loosely formatted analyzer values."""

    @classmethod
    def match(cls, value: object) -> Optional["LenientEnum"]:
        """
        Resolve a raw value to a member.
        
        Exact value match first, then a case- and whitespace-insensitive
        match ("likely  legitimate" -> LIKELY_LEGITIMATE). Returns None when
        nothing matches.
        """
        if not isinstance(value, str):
            return None
        try:
            return cls(value)
        except ValueError:
            pass
        folded = " ".join(value.split()).casefold()
        for member in cls:
            if member.value.casefold() == folded:
                return member
        return None

    @classmethod
    def values(cls) -> list[str]:
        return [member.value for member in cls]


class RiskLevel(LenientEnum):
    """
    Overall risk verdict for an email.
    
    UNKNOWN is reserved for the failure fallback and for analyzer values
    that cannot be mapped; it is never offered to the analyzer.
    """
    
    CRITICAL = "Critical"
    HIGH = "High"
    MODERATE = "Moderate"
    LOW = "Low"
    LIKELY_LEGITIMATE = "Likely Legitimate"
    UNKNOWN = "Unknown"

    @classmethod
    def assessable(cls) -> list["RiskLevel"]:
        """Levels a successful analysis may report (everything but UNKNOWN)."""
        return [level for level in cls if level is not cls.UNKNOWN]


class Confidence(LenientEnum):
    """Analyzer's confidence in its own verdict."""
    
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class Severity(LenientEnum):
    """Severity of a single fraud indicator."""
    
    CRITICAL = "Critical"
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"
