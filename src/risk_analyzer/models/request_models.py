"""
Request-side models: the user's input, the analyzer payload and its raw reply.

AnalysisPayload and AnalyzerReply are internal to the analyzer boundary and
are kept separate from the result models so the transport can change
without touching validation.
"""

from typing import Any, Dict, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class EmptyEmailError(ValueError):
    """Raised when analysis is requested for empty or whitespace-only text."""

    def __init__(self, message: str = "Email text must not be empty"):
        super().__init__(message)
        self.message = message


class AnalysisRequest(BaseModel):
    """A single user-initiated analysis. Text is stored trimmed."""
    
    model_config = ConfigDict(frozen=True)
    
    email_text: str = Field(..., description="Raw email text (headers and body as pasted)")

    @field_validator("email_text")
    @classmethod
    def email_text_not_blank(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise EmptyEmailError()
        return stripped


class Message(BaseModel):
    """One chat message in the analyzer request."""
    
    model_config = ConfigDict(frozen=True)
    
    role: Literal["user", "assistant"] = "user"
    content: str


class AnalysisPayload(BaseModel):
    """
    Request body sent to the analyzer.
    
    Mirrors the Messages API shape: a model identifier, a token budget and
    a single user message carrying the rendered prompt.
    """
    model_config = ConfigDict(frozen=True)
    
    model: str = Field(..., description="Model identifier")
    max_tokens: int = Field(default=1000, ge=1, description="Token budget for the reply")
    messages: tuple[Message, ...] = Field(..., min_length=1)
    temperature: Optional[float] = Field(default=None, ge=0.0, le=1.0)

    @property
    def prompt(self) -> str:
        """Content of the first (and only) user message."""
        return self.messages[0].content

    def to_request_body(self) -> Dict[str, Any]:
        """JSON body for the HTTP call; unset optional fields are omitted."""
        return self.model_dump(mode="json", exclude_none=True)


class AnalyzerReply(BaseModel):
    """
    Raw reply from the analyzer.
    
    `text` is the first text content item, unparsed. Metadata is kept for
    logging and metrics only.
    """
    model_config = ConfigDict(frozen=True)
    
    text: str = Field(..., description="Free-text reply, expected to embed a JSON object")
    model: str = Field(..., description="Model that produced the reply")
    stop_reason: Optional[str] = Field(default=None, description="end_turn, max_tokens, ...")
    input_tokens: Optional[int] = Field(default=None, ge=0)
    output_tokens: Optional[int] = Field(default=None, ge=0)
    latency_ms: int = Field(default=0, ge=0, description="Round-trip latency in milliseconds")
