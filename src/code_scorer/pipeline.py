"""Score evaluation pipeline.

One run takes a credential and a document's text through
credential check -> request -> parse -> display. Every run ends in either a
status update or an error notification; nothing is raised to the caller and a
failed run leaves the previous status text in place.
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, Optional

from .core.clients import openai_chat
from .core.models import EvaluationOutcome, FailureReason, PipelineState
from .core.prompts import build_evaluation_prompt
from .core.scoring import format_status_text, parse_score
from .host import DisplaySink, ErrorSink

logger = logging.getLogger(__name__)

MISSING_CREDENTIAL_MESSAGE = "Please set your OpenAI API Key in the settings."
INVALID_RESPONSE_MESSAGE = "Error: Invalid response format from OpenAI."

Evaluator = Callable[[str, str], Awaitable[Optional[str]]]


def _trace(state: PipelineState, path: Optional[str]) -> None:
    logger.debug("%s: %s", path or "<document>", state.value)


class ScorePipeline:
    """Runs evaluations against a display sink and an error sink.

    ``evaluator`` is called as ``evaluator(api_key, prompt)`` and returns the
    raw reply or None. It defaults to the OpenAI chat completions client.
    """

    def __init__(self, display: DisplaySink, errors: ErrorSink, evaluator: Optional[Evaluator] = None):
        self.display = display
        self.errors = errors
        self.evaluator = evaluator or openai_chat.request_score

    def _fail(self, reason: FailureReason, message: str, path: Optional[str], raw_reply: Optional[str] = None) -> EvaluationOutcome:
        self.errors.show_error_message(message)
        logger.info("Evaluation of %s failed: %s", path or "<document>", reason.value)
        return EvaluationOutcome(
            state=PipelineState.FAILED,
            failure=reason,
            message=message,
            raw_reply=raw_reply,
            document_path=path,
        )

    async def run(self, api_key: Optional[str], text: str, path: Optional[str] = None) -> EvaluationOutcome:
        _trace(PipelineState.CREDENTIAL_CHECK, path)
        if not api_key:
            return self._fail(FailureReason.MISSING_CREDENTIAL, MISSING_CREDENTIAL_MESSAGE, path)

        _trace(PipelineState.REQUESTING, path)
        prompt = build_evaluation_prompt(text)
        try:
            raw_reply = await self.evaluator(api_key, prompt)
        except Exception as exc:
            return self._fail(FailureReason.AUTH_OR_TRANSPORT_FAILURE, f"Error: {exc}", path)

        # An empty reply is parsed like any other and reported as malformed.
        _trace(PipelineState.PARSING, path)
        score = parse_score(raw_reply)
        if score is None:
            reason = FailureReason.EMPTY_REPLY if not raw_reply else FailureReason.MALFORMED_RESPONSE
            return self._fail(reason, INVALID_RESPONSE_MESSAGE, path, raw_reply)

        _trace(PipelineState.DISPLAYING, path)
        display_text = format_status_text(score)
        self.display.set_text(display_text)

        return EvaluationOutcome(
            state=PipelineState.DISPLAYED,
            score=score,
            display_text=display_text,
            raw_reply=raw_reply,
            document_path=path,
        )
