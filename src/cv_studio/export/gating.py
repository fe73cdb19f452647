"""Gates that stand between a generated artifact and the save step.

A gate receives the pending artifact and a ``proceed`` callback. It may show
a countdown, ask for confirmation or do nothing, but it must eventually call
``proceed`` for the artifact to be saved. ``proceed`` is wrapped so that only
its first call has any effect.
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cv_studio.export.formats import ExportArtifact

__all__ = ["Gate", "ImmediateGate", "InterstitialGate", "Proceed", "ProceedOnce"]

logger = logging.getLogger(__name__)

Proceed = Callable[[], Awaitable[None]]


class ProceedOnce:
    """Wrap a proceed callback so repeated calls are ignored."""

    __slots__ = ("_callback", "fired")

    def __init__(self, callback: Proceed) -> None:
        self._callback = callback
        self.fired = False

    async def __call__(self) -> None:
        if self.fired:
            logger.debug("Ignoring repeated proceed call")
            return
        self.fired = True
        await self._callback()


class Gate(ABC):
    @abstractmethod
    async def request(self, artifact: ExportArtifact, proceed: Proceed) -> None:
        """Decide when (or whether) *artifact* may be saved by awaiting *proceed*."""


class ImmediateGate(Gate):
    """Lets every artifact through at once."""

    async def request(self, artifact: ExportArtifact, proceed: Proceed) -> None:
        await proceed()


class InterstitialGate(Gate):
    """Holds each artifact for a fixed countdown before letting it through."""

    def __init__(self, delay: float = 5.0) -> None:
        self.delay = delay

    async def request(self, artifact: ExportArtifact, proceed: Proceed) -> None:
        logger.info("Holding %s for %.1fs before download", artifact.filename, self.delay)
        await asyncio.sleep(self.delay)
        await proceed()
