"""OpenAI chat completions client.

API docs: https://platform.openai.com/docs/api-reference/chat/create
One request per call, no retries. The timeout matches the official OpenAI SDK
default: ten minutes to read, five seconds to connect.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

import httpx

from ..models import ChatCompletionRequest, ChatCompletionResponse, ChatMessage

logger = logging.getLogger(__name__)

API_BASE = "https://api.openai.com/v1"
DEFAULT_MODEL = "gpt-4o"

# Enough for a two or three digit number, not for prose.
MAX_TOKENS = 5

DEFAULT_TIMEOUT = httpx.Timeout(600.0, connect=5.0)


class OpenAIError(Exception):
    """Raised when the chat completion call fails for any reason."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def get_api_base() -> str:
    return os.environ.get("CODE_SCORER_API_BASE", API_BASE).rstrip("/")


def get_model() -> str:
    return os.environ.get("CODE_SCORER_MODEL", DEFAULT_MODEL)


def build_request(prompt: str, model: Optional[str] = None) -> ChatCompletionRequest:
    """The prompt is sent as a single system message with greedy decoding."""
    return ChatCompletionRequest(
        model=model or get_model(),
        messages=[ChatMessage(role="system", content=prompt)],
        max_tokens=MAX_TOKENS,
        temperature=0,
        n=1,
        stop=None,
    )


def _error_message(response: httpx.Response) -> str:
    """Pull ``error.message`` out of an OpenAI error body, if there is one."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
    return f"{response.status_code} {response.reason_phrase}".strip()


def _transport_message(exc: Exception) -> str:
    return str(exc) or type(exc).__name__


async def _post(client: httpx.AsyncClient, url: str, api_key: str, payload: dict) -> httpx.Response:
    try:
        return await client.post(
            url,
            json=payload,
            headers={"Authorization": f"Bearer {api_key}"},
        )
    except httpx.HTTPError as exc:
        raise OpenAIError(_transport_message(exc)) from exc


async def request_score(
    api_key: str,
    prompt: str,
    model: Optional[str] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> Optional[str]:
    """Send the evaluation prompt and return the first choice's content.

    Args:
        api_key: OpenAI API key.
        prompt: Complete evaluation prompt.
        model: Model override. Defaults to ``CODE_SCORER_MODEL`` or gpt-4o.
        client: Optional client to send through. Otherwise one is created with
            DEFAULT_TIMEOUT.

    Returns:
        The reply text, or None when the response carries no content.

    Raises:
        OpenAIError: On any transport failure, error status, or unreadable body.
    """
    request = build_request(prompt, model)
    url = f"{get_api_base()}/chat/completions"
    payload = request.model_dump()

    if client is None:
        async with httpx.AsyncClient(timeout=DEFAULT_TIMEOUT) as owned_client:
            response = await _post(owned_client, url, api_key, payload)
    else:
        response = await _post(client, url, api_key, payload)

    if response.is_error:
        message = _error_message(response)
        logger.warning("Chat completion failed with HTTP %d", response.status_code)
        raise OpenAIError(message, status_code=response.status_code)

    try:
        completion = ChatCompletionResponse.model_validate(response.json())
    except ValueError as exc:
        raise OpenAIError(f"Unreadable response from OpenAI: {exc}") from exc

    content = completion.first_content
    logger.debug("Chat completion %s returned %d choice(s)", completion.id, len(completion.choices))
    return content or None
