"""Extension lifecycle and save handling.

``activate`` creates the status bar item and subscribes to saves;
``deactivate`` unsubscribes and disposes it. Each save schedules its own
pipeline run. Runs are never cancelled or serialized, so when two overlap the
status shows whichever finished last.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Callable, Iterable, Optional

from . import config
from .core.models import EvaluationOutcome, Score, TextDocument
from .host import ErrorNotifier, StatusBarItem
from .pipeline import Evaluator, ScorePipeline
from .watcher import SaveWatcher

logger = logging.getLogger(__name__)


class CodeScorerExtension:
    """Scores documents on save and shows the result in a status bar item."""

    def __init__(
        self,
        evaluator: Optional[Evaluator] = None,
        api_key_source: Callable[[], Optional[str]] = config.get_api_key,
        notifier: Optional[ErrorNotifier] = None,
    ):
        self.evaluator = evaluator
        self.api_key_source = api_key_source
        self.notifier = notifier or ErrorNotifier()
        self.status_bar: Optional[StatusBarItem] = None
        self.last_score: Optional[Score] = None
        self._watcher: Optional[SaveWatcher] = None
        self._pending: set[asyncio.Task] = set()

    @property
    def active(self) -> bool:
        return self.status_bar is not None

    async def activate(self, watch_paths: Iterable[Path] = ()) -> None:
        if self.active:
            return
        self.status_bar = StatusBarItem()
        self.status_bar.show()

        paths = list(watch_paths)
        if paths:
            self._watcher = SaveWatcher(paths, self.on_did_save)
            await self._watcher.start()
        logger.info("Code scorer activated")

    async def deactivate(self) -> None:
        if self._watcher is not None:
            await self._watcher.stop()
            self._watcher = None
        if self.status_bar is not None:
            self.status_bar.dispose()
            self.status_bar = None
        logger.info("Code scorer deactivated")

    def on_did_save(self, document: TextDocument) -> Optional[asyncio.Task]:
        """Schedule one evaluation of the saved document. Must be called on the event loop."""
        if self.status_bar is None:
            logger.debug("Ignoring save of %s while inactive", document.path)
            return None
        task = asyncio.create_task(self.evaluate(document))
        self._pending.add(task)
        task.add_done_callback(self._on_task_done)
        return task

    async def evaluate(self, document: TextDocument) -> EvaluationOutcome:
        """Run the pipeline for one document. The credential is read fresh each time."""
        if self.status_bar is None:
            raise RuntimeError("Code scorer is not active")
        pipeline = ScorePipeline(self.status_bar, self.notifier, self.evaluator)
        outcome = await pipeline.run(self.api_key_source(), document.text, document.path)
        if outcome.displayed:
            self.last_score = outcome.score
        return outcome

    def _on_task_done(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Evaluation task crashed: %s", exc, exc_info=exc)

    def status(self) -> dict:
        return {
            "active": self.active,
            "text": self.status_bar.text if self.status_bar else None,
            "last_score": self.last_score,
            "pending_evaluations": len(self._pending),
            "last_error": self.notifier.last_message,
        }
