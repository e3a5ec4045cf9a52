"""Pydantic data models: the shared objects of the scoring pipeline.

The chat completion request/response shapes mirror the subset of the OpenAI
wire format the evaluator sends and reads. Everything else is per-invocation
state of a single pipeline run.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, Field

Score = Union[int, float]


class ScoreTier(str, Enum):
    """Display tier for a score."""

    CELEBRATION = "celebration"
    THUMBS_UP = "thumbs-up"
    THINKING = "thinking"
    THUMBS_DOWN = "thumbs-down"

    @property
    def marker(self) -> str:
        return TIER_MARKERS[self]


TIER_MARKERS: dict[ScoreTier, str] = {
    ScoreTier.CELEBRATION: "\U0001f389",
    ScoreTier.THUMBS_UP: "\U0001f44d",
    ScoreTier.THINKING: "\U0001f914",
    ScoreTier.THUMBS_DOWN: "\U0001f44e",
}


class PipelineState(str, Enum):
    """States a single evaluation passes through."""

    IDLE = "idle"
    CREDENTIAL_CHECK = "credential_check"
    REQUESTING = "requesting"
    PARSING = "parsing"
    DISPLAYING = "displaying"
    DISPLAYED = "displayed"
    FAILED = "failed"


class FailureReason(str, Enum):
    """Why an evaluation ended in the failed state."""

    MISSING_CREDENTIAL = "missing_credential"
    AUTH_OR_TRANSPORT_FAILURE = "auth_or_transport_failure"
    EMPTY_REPLY = "empty_reply"
    MALFORMED_RESPONSE = "malformed_response"


class TextDocument(BaseModel):
    """Snapshot of a saved document."""

    text: str
    path: Optional[str] = None


class ChatMessage(BaseModel):
    role: str
    content: Optional[str] = None


class ChatCompletionRequest(BaseModel):
    """Body of a chat completion request."""

    model: str
    messages: list[ChatMessage]
    max_tokens: int
    temperature: float
    n: int = 1
    stop: Optional[Union[str, list[str]]] = None


class ChatChoice(BaseModel):
    index: int = 0
    message: ChatMessage
    finish_reason: Optional[str] = None


class ChatCompletionResponse(BaseModel):
    """The parts of a chat completion response the evaluator reads."""

    id: str = ""
    model: str = ""
    choices: list[ChatChoice] = Field(default_factory=list)

    @property
    def first_content(self) -> Optional[str]:
        if not self.choices:
            return None
        return self.choices[0].message.content


class EvaluationOutcome(BaseModel):
    """Terminal result of one pipeline run."""

    state: PipelineState = Field(description="Either 'displayed' or 'failed'")
    score: Optional[Score] = Field(None, description="Parsed score, unclamped")
    display_text: Optional[str] = Field(None, description="Text written to the status bar")
    failure: Optional[FailureReason] = None
    message: Optional[str] = Field(None, description="Message sent to the error sink")
    raw_reply: Optional[str] = None
    document_path: Optional[str] = None
    completed_at: datetime = Field(default_factory=datetime.utcnow)

    @property
    def displayed(self) -> bool:
        return self.state == PipelineState.DISPLAYED
