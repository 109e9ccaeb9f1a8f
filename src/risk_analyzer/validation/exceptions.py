"""
Validation-specific exceptions for the reply extraction pipeline.

Only two failures are fatal for a reply: no JSON object in it, or a JSON
object that does not parse. Everything else is corrected in place by
normalization. The service converts both into the canonical failure result.
"""

from typing import Any


class ValidationError(Exception):
    """
    Base exception for all fatal reply validation errors.
    
    `kind` is a stable machine-readable label used in logs and metrics.
    """
    kind = "validation_error"
    
    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """
        Initialize validation error.
        
        Args:
            message: Human-readable error description
            details: Structured error data for logging/metrics
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
    
    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


def _snippet(raw_content: str | None) -> dict[str, Any]:
    # First 500 chars only, replies can be long
    if raw_content:
        return {"content_snippet": raw_content[:500]}
    return {}


class JSONNotFoundError(ValidationError):
    """
    Stage 1: no balanced {...} object anywhere in the reply.
    """
    kind = "no_json_found"
    
    def __init__(self, message: str, raw_content: str | None = None):
        super().__init__(message, _snippet(raw_content))


class JSONParseError(ValidationError):
    """
    Stage 2: the located object is not valid JSON.
    """
    kind = "malformed_json"
    
    def __init__(self, message: str, raw_content: str | None = None, parse_error: str | None = None):
        """
        Initialize JSON parse error.
        
        Args:
            message: Error description
            raw_content: Candidate substring that failed to parse
            parse_error: Original json.JSONDecodeError message
        """
        details = _snippet(raw_content)
        if parse_error:
            details["parse_error"] = parse_error
        
        super().__init__(message, details)
