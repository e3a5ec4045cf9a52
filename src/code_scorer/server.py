"""Code Scorer MCP Server.

FastMCP server that scores code with OpenAI and keeps a live status line.
Run: code-scorer-mcp
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from .config import get_watch_paths
from .core.models import TextDocument
from .extension import CodeScorerExtension

logger = logging.getLogger(__name__)

SCORING = ToolAnnotations(readOnlyHint=True, destructiveHint=False, idempotentHint=False, openWorldHint=True)
LOCAL_READ = ToolAnnotations(readOnlyHint=True, destructiveHint=False, idempotentHint=True, openWorldHint=False)

extension = CodeScorerExtension()


@asynccontextmanager
async def lifespan(server: FastMCP) -> AsyncIterator[None]:
    """Activate the extension and start watching CODE_SCORER_WATCH_PATHS, if set."""
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    await extension.activate(get_watch_paths())
    try:
        yield
    finally:
        await extension.deactivate()


mcp = FastMCP(
    "Code Scorer",
    instructions="Scores source code 0-100 with OpenAI for best practices, performance, readability and correctness, and keeps the latest score as a status line.",
    lifespan=lifespan,
)


def _outcome_response(outcome) -> dict:
    result = outcome.model_dump(mode="json")
    result["status"] = extension.status_bar.text if extension.status_bar else None
    result["summary"] = outcome.display_text if outcome.displayed else outcome.message
    return result


# ─── Tool 1: Score Code ──────────────────────────────────────────────────────


@mcp.tool(annotations=SCORING)
async def score_code(code: str) -> dict:
    """Score a piece of source code from 0 to 100 and update the status line.

    Args:
        code: The full source text to evaluate.
    """
    outcome = await extension.evaluate(TextDocument(text=code))
    return _outcome_response(outcome)


# ─── Tool 2: Score File ──────────────────────────────────────────────────────


@mcp.tool(annotations=SCORING)
async def score_file(path: str) -> dict:
    """Score a file as if it had just been saved.

    Args:
        path: Path to the file. '~' is expanded.
    """
    file_path = Path(path).expanduser()
    if not file_path.is_file():
        raise ValueError(f"Not a file: {path}")
    text = file_path.read_text(encoding="utf-8", errors="replace")
    outcome = await extension.evaluate(TextDocument(path=str(file_path), text=text))
    return _outcome_response(outcome)


# ─── Tool 3: Status ──────────────────────────────────────────────────────────


@mcp.tool(annotations=LOCAL_READ)
async def code_score_status() -> dict:
    """Current status line, last successful score, and last error message."""
    status = extension.status()
    status["summary"] = status["text"] or "Code scorer is not active"
    return status


def main():
    """Entry point for the CLI command."""
    mcp.run()


if __name__ == "__main__":
    main()
