"""
Custom exceptions for the analyzer client layer.

Every failure of the outbound call is mapped to exactly one of three kinds
so the pipeline can log, count and explain it. None of them escape the
pipeline boundary: the service converts them to the canonical failure
result.
"""


class AnalyzerClientError(Exception):
    """
    Base exception for all analyzer client errors.
    
    `kind` is a stable machine-readable label used in logs and metrics.
    """
    kind = "client_error"

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class AnalyzerNetworkError(AnalyzerClientError):
    """
    The call could not complete.
    
    Connection refused, DNS failure, read/connect timeout, caller-side
    timeout or caller cancellation.
    """
    kind = "network_failure"


class AnalyzerServiceError(AnalyzerClientError):
    """
    The call completed but the service reported a non-success status.
    
    `status_code` is None when the service signalled the error in a 2xx body.
    """
    kind = "service_error"

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.status_code = status_code

    @property
    def is_transient(self) -> bool:
        """Rate limiting and server-side errors may succeed on a later attempt."""
        return self.status_code is not None and (
            self.status_code == 429 or self.status_code >= 500
        )


class AnalyzerEmptyResponseError(AnalyzerClientError):
    """The call succeeded but the reply held no extractable text content."""
    kind = "empty_response"
