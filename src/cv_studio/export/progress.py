"""Per-format export state and the ticker that animates it."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from cv_studio.export.formats import ExportFormat

__all__ = [
    "INITIAL_PROGRESS",
    "ExportStatus",
    "FormatProgress",
    "ProgressCallback",
    "ProgressTicker",
]

logger = logging.getLogger(__name__)

INITIAL_PROGRESS = 10


class ExportStatus(StrEnum):
    IDLE = "idle"
    GENERATING = "generating"
    COMPLETE = "complete"
    ERROR = "error"


@dataclass(slots=True)
class FormatProgress:
    """Progress of one format within an export job.

    ``progress`` never decreases and a state reaches exactly one terminal
    status (``complete`` or ``error``).
    """

    format: ExportFormat
    progress: int = 0
    status: ExportStatus = ExportStatus.IDLE
    error: str | None = None

    @property
    def is_terminal(self) -> bool:
        return self.status in (ExportStatus.COMPLETE, ExportStatus.ERROR)

    def start(self) -> None:
        self._require_open()
        self.status = ExportStatus.GENERATING
        self.progress = max(self.progress, INITIAL_PROGRESS)

    def advance(self, value: int) -> bool:
        """Raise progress to *value*; returns ``False`` if nothing changed."""
        if self.is_terminal or value <= self.progress:
            return False
        self.progress = min(value, 100)
        return True

    def complete(self) -> None:
        self._require_open()
        self.status = ExportStatus.COMPLETE
        self.progress = 100

    def fail(self, error: str) -> None:
        self._require_open()
        self.status = ExportStatus.ERROR
        self.error = error

    def to_dict(self) -> dict[str, Any]:
        return {
            "format": self.format.value,
            "progress": self.progress,
            "status": self.status.value,
            "error": self.error,
        }

    def _require_open(self) -> None:
        if self.is_terminal:
            msg = f"{self.format.value} export already finished ({self.status.value})"
            raise RuntimeError(msg)


ProgressCallback = Callable[[FormatProgress], None]


class ProgressTicker:
    """Advance a :class:`FormatProgress` through *steps* on a fixed interval.

    Use as an async context manager around the generator call; the ticking
    task is cancelled and awaited on exit, so it never outlives the
    format's generation window.
    """

    def __init__(
        self,
        state: FormatProgress,
        steps: Sequence[int],
        interval: float,
        on_progress: ProgressCallback | None = None,
    ) -> None:
        self._state = state
        self._steps = tuple(steps)
        self._interval = interval
        self._on_progress = on_progress
        self._task: asyncio.Task[None] | None = None

    async def __aenter__(self) -> ProgressTicker:
        self._task = asyncio.create_task(self._run())
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None

    async def _run(self) -> None:
        for step in self._steps:
            await asyncio.sleep(self._interval)
            if self._state.advance(step) and self._on_progress is not None:
                self._on_progress(self._state)
