"""File save watcher.

Polls watched files and directories for modification-time changes and calls
the save handler once per detected write. Uses asyncio tasks, no external
file-watching dependency. Directory scans and file reads run in a worker
thread so the event loop stays free.
"""

from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path
from typing import Callable, Iterable, Iterator, Optional

from .config import get_poll_interval
from .core.models import TextDocument

logger = logging.getLogger(__name__)

SaveHandler = Callable[[TextDocument], None]


def _iter_files(root: Path) -> Iterator[Path]:
    """Yield files under root, skipping dot-directories such as .git."""
    if root.is_file():
        yield root
        return
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = [d for d in dirnames if not d.startswith(".")]
        for name in filenames:
            yield Path(dirpath) / name


class SaveWatcher:
    """Turns file writes under the watched paths into save events."""

    def __init__(self, paths: Iterable[Path], on_save: SaveHandler, interval_seconds: Optional[float] = None):
        self.paths = [Path(p) for p in paths]
        self.on_save = on_save
        self._interval_seconds = interval_seconds if interval_seconds is not None else get_poll_interval()
        self._mtimes: dict[Path, int] = {}
        self._task: asyncio.Task | None = None
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    async def start(self):
        """Record the current modification times as a baseline and begin polling."""
        if self._running:
            return
        self._mtimes = await asyncio.to_thread(self._snapshot)
        self._running = True
        self._task = asyncio.create_task(self._run_loop())
        logger.info(
            "Save watcher started on %d path(s), %d file(s) (interval: %.1fs)",
            len(self.paths), len(self._mtimes), self._interval_seconds,
        )

    async def stop(self):
        """Cancel the poll task and drop the baseline, so a restart rescans from scratch."""
        self._running = False
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        released = len(self._mtimes)
        self._mtimes = {}
        logger.info("Save watcher stopped, released baseline of %d file(s)", released)

    def _snapshot(self) -> dict[Path, int]:
        mtimes = {}
        for root in self.paths:
            if not root.exists():
                logger.warning("Watch path does not exist: %s", root)
                continue
            for path in _iter_files(root):
                try:
                    mtimes[path] = path.stat().st_mtime_ns
                except OSError:
                    # Removed between listing and stat.
                    continue
        return mtimes

    def _scan(self) -> list[TextDocument]:
        """Diff against the baseline and read every new or modified file. Blocking."""
        current = self._snapshot()
        saved = [p for p, mtime in current.items() if self._mtimes.get(p) != mtime]
        self._mtimes = current

        documents = []
        for path in sorted(saved):
            try:
                text = path.read_text(encoding="utf-8", errors="replace")
            except OSError as exc:
                logger.warning("Could not read saved file %s: %s", path, exc)
                continue
            documents.append(TextDocument(path=str(path), text=text))
        return documents

    async def poll(self) -> list[TextDocument]:
        """Scan once in a worker thread, then dispatch the save events on the loop."""
        documents = await asyncio.to_thread(self._scan)
        for document in documents:
            self.on_save(document)
        return documents

    async def _run_loop(self):
        while self._running:
            try:
                await asyncio.sleep(self._interval_seconds)
                if not self._running:
                    break
                await self.poll()
            except asyncio.CancelledError:
                break
            except Exception as exc:
                logger.error("Save watcher poll failed: %s", exc, exc_info=True)
