"""PDF generation as an ordered chain of strategies.

Each :class:`PdfStrategy` either produces PDF bytes or explains why it
could not. :class:`PdfFallbackChain` tries them in order and returns the
first payload; failures are logged and collected, and only exhaustion of
the whole chain raises :class:`PdfGenerationError`.

Default order on desktop: direct capture of the live preview, offscreen
capture of the selected template, then the declarative look renderer
(which works for any valid CV). Constrained devices put a low-scale
offscreen capture ahead of the other capture stages.
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass, replace
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar

from cv_studio.exceptions import CaptureError, PdfGenerationError
from cv_studio.export.capture import (
    CaptureEngine,
    CaptureOptions,
    DeviceClass,
    capture_options_for,
)
from cv_studio.export.offscreen import offscreen_container
from cv_studio.looks import render_look_pdf, resolve_look_id

if TYPE_CHECKING:
    from cv_studio.export.preview import PreviewSurface
    from cv_studio.models.content import CVData
    from cv_studio.templates.registry import TemplateRegistry

__all__ = [
    "ConstrainedCaptureStrategy",
    "DeclarativeLookStrategy",
    "DirectCaptureStrategy",
    "OffscreenCaptureStrategy",
    "PdfFallbackChain",
    "PdfStrategy",
    "StrategyResult",
    "build_pdf_chain",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class StrategyResult:
    """Outcome of one strategy: either a payload or a failure reason."""

    stage: str
    payload: bytes | None = None
    reason: str | None = None

    @property
    def ok(self) -> bool:
        return self.payload is not None

    @classmethod
    def success(cls, stage: str, payload: bytes) -> StrategyResult:
        return cls(stage=stage, payload=payload)

    @classmethod
    def failure(cls, stage: str, reason: str) -> StrategyResult:
        return cls(stage=stage, reason=reason)


class PdfStrategy(ABC):
    name: ClassVar[str]

    @abstractmethod
    async def attempt(self, cv: CVData, template_id: str | None) -> StrategyResult:
        """Try to produce a PDF for *cv*."""

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"


# ---------------------------------------------------------------------------
# Capture strategies
# ---------------------------------------------------------------------------


class DirectCaptureStrategy(PdfStrategy):
    """Capture the published preview of the CV and template being exported."""

    name = "direct"

    def __init__(
        self, preview: PreviewSurface, engine: CaptureEngine, options: CaptureOptions
    ) -> None:
        self.preview = preview
        self.engine = engine
        self.options = options

    async def attempt(self, cv: CVData, template_id: str | None) -> StrategyResult:
        wanted = template_id or cv.template
        page = self.preview.locate(cv, wanted)
        if page is None:
            return StrategyResult.failure(self.name, f"no preview published for {wanted!r}")
        try:
            payload = await self.engine.capture(page, self.options)
        except CaptureError as exc:
            return StrategyResult.failure(self.name, str(exc))
        return StrategyResult.success(self.name, payload)


class OffscreenCaptureStrategy(PdfStrategy):
    """Render the selected template into a scratch container and capture it."""

    name = "offscreen"

    def __init__(
        self,
        templates: TemplateRegistry,
        engine: CaptureEngine,
        options: CaptureOptions,
        scratch_dir: Path | None = None,
    ) -> None:
        self.templates = templates
        self.engine = engine
        self.options = options
        self.scratch_dir = scratch_dir

    async def attempt(self, cv: CVData, template_id: str | None) -> StrategyResult:
        session = self.templates.session()
        wanted = template_id or cv.template
        if not session.select(wanted):
            return StrategyResult.failure(self.name, f"unknown template {wanted!r}")
        body = session.render(cv)
        css = session.get_css()

        with offscreen_container(body, css, parent=self.scratch_dir) as page:
            await asyncio.sleep(self.options.settle_delay)
            try:
                payload = await self.engine.capture(page, self.options)
            except CaptureError as exc:
                return StrategyResult.failure(self.name, str(exc))
        return StrategyResult.success(self.name, payload)


class ConstrainedCaptureStrategy(OffscreenCaptureStrategy):
    """Offscreen capture with the reduced scale and longer timeout of small devices."""

    name = "constrained"


# ---------------------------------------------------------------------------
# Declarative fallback
# ---------------------------------------------------------------------------


class DeclarativeLookStrategy(PdfStrategy):
    """Lay the CV out with its mapped look and fpdf2; needs no browser."""

    name = "declarative"

    async def attempt(self, cv: CVData, template_id: str | None) -> StrategyResult:
        wanted = template_id or cv.template
        logger.debug("Rendering %r with look %r", wanted, resolve_look_id(wanted))
        payload = await asyncio.to_thread(render_look_pdf, cv, wanted)
        return StrategyResult.success(self.name, payload)


# ---------------------------------------------------------------------------
# Chain
# ---------------------------------------------------------------------------


class PdfFallbackChain:
    """Try each strategy in order until one produces a PDF."""

    def __init__(self, strategies: Sequence[PdfStrategy]) -> None:
        self.strategies = tuple(strategies)

    @property
    def stage_names(self) -> list[str]:
        return [strategy.name for strategy in self.strategies]

    async def generate(self, cv: CVData, template_id: str | None = None) -> bytes:
        """Return PDF bytes from the first strategy that succeeds.

        Raises:
            PdfGenerationError: If every strategy failed; carries each
                stage's reason in order.
        """
        failures: list[tuple[str, str]] = []
        for strategy in self.strategies:
            try:
                result = await strategy.attempt(cv, template_id)
            except Exception as exc:
                logger.warning("PDF stage %s raised: %s", strategy.name, exc, exc_info=True)
                failures.append((strategy.name, str(exc) or type(exc).__name__))
                continue
            if result.ok:
                if failures:
                    logger.info(
                        "PDF produced by %s after %d failed stage(s)", strategy.name, len(failures)
                    )
                return result.payload
            logger.warning("PDF stage %s failed: %s", strategy.name, result.reason)
            failures.append((strategy.name, result.reason or "unknown error"))
        raise PdfGenerationError(failures)


def build_pdf_chain(
    device: DeviceClass,
    *,
    templates: TemplateRegistry,
    preview: PreviewSurface,
    engine: CaptureEngine,
    capture_timeout: float | None = None,
    scratch_dir: Path | None = None,
) -> PdfFallbackChain:
    """Return the fallback chain appropriate for *device*."""
    desktop = capture_options_for(DeviceClass.DESKTOP)
    if capture_timeout is not None:
        desktop = replace(desktop, timeout=capture_timeout)
    strategies: list[PdfStrategy] = [
        DirectCaptureStrategy(preview, engine, desktop),
        OffscreenCaptureStrategy(templates, engine, desktop, scratch_dir),
        DeclarativeLookStrategy(),
    ]
    if device.is_constrained:
        constrained = capture_options_for(device)
        strategies.insert(
            0, ConstrainedCaptureStrategy(templates, engine, constrained, scratch_dir)
        )
    return PdfFallbackChain(strategies)
