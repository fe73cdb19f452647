"""Run multi-format export jobs for one CV.

Formats are generated one after another. Each format moves from ``idle``
through ``generating`` to exactly one of ``complete`` or ``error``; a
failure is recorded on that format only and never stops the formats after
it. Once every format is terminal the job is summarised as a
:class:`JobOutcome`.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import TYPE_CHECKING, Any

from cv_studio.config import ExportSettings
from cv_studio.exceptions import CVStudioError, GateError
from cv_studio.export.capture import ChromiumCaptureEngine, DeviceClass
from cv_studio.export.document_service import (
    DocumentService,
    HttpDocumentService,
    LocalDocumentService,
)
from cv_studio.export.docx_builder import DEFAULT_DOCX_STYLE
from cv_studio.export.formats import ExportArtifact, ExportFormat
from cv_studio.export.gating import Gate, ImmediateGate, ProceedOnce
from cv_studio.export.pdf_chain import PdfFallbackChain, build_pdf_chain
from cv_studio.export.plain_text import render_plain_text
from cv_studio.export.preview import PreviewSurface
from cv_studio.export.progress import FormatProgress, ProgressCallback, ProgressTicker
from cv_studio.export.saver import DirectorySaver, Saver
from cv_studio.models.content import require_exportable
from cv_studio.templates import create_default_registry
from cv_studio.utils.formatting import export_filename

if TYPE_CHECKING:
    from cv_studio.export.capture import CaptureEngine
    from cv_studio.models.content import CVData
    from cv_studio.templates.registry import TemplateRegistry

__all__ = ["ExportJobResult", "ExportOrchestrator", "JobOutcome", "normalize_formats"]

logger = logging.getLogger(__name__)


class JobOutcome(StrEnum):
    SUCCESS = "success"
    PARTIAL = "partial"
    FAILED = "failed"


@dataclass(slots=True)
class ExportJobResult:
    """Per-format states, artifacts and save locations of one export job."""

    states: dict[ExportFormat, FormatProgress]
    artifacts: dict[ExportFormat, ExportArtifact] = field(default_factory=dict)
    saved: dict[ExportFormat, Path | None] = field(default_factory=dict)

    @property
    def succeeded(self) -> int:
        return sum(1 for s in self.states.values() if s.status == "complete")

    @property
    def failed(self) -> int:
        return sum(1 for s in self.states.values() if s.status == "error")

    @property
    def outcome(self) -> JobOutcome:
        if self.failed == 0:
            return JobOutcome.SUCCESS
        if self.succeeded > 0:
            return JobOutcome.PARTIAL
        return JobOutcome.FAILED

    @property
    def message(self) -> str:
        match self.outcome:
            case JobOutcome.SUCCESS:
                return f"{self.succeeded} file(s) exported successfully."
            case JobOutcome.PARTIAL:
                return (
                    f"{self.succeeded} file(s) successful, {self.failed} file(s) failed."
                )
            case _:
                return "All files failed to export."

    def to_dict(self) -> dict[str, Any]:
        return {
            "outcome": self.outcome.value,
            "succeeded": self.succeeded,
            "failed": self.failed,
            "message": self.message,
            "formats": [state.to_dict() for state in self.states.values()],
        }


def normalize_formats(formats: Iterable[ExportFormat | str]) -> list[ExportFormat]:
    """Parse *formats*, dropping repeats but keeping first-seen order.

    Raises:
        ValueError: If no format is given or a name is unknown.
    """
    ordered = list(dict.fromkeys(ExportFormat.parse(fmt) for fmt in formats))
    if not ordered:
        raise ValueError("At least one export format is required")
    return ordered


class ExportOrchestrator:
    """Generate, gate and save the requested formats of a CV.

    Every collaborator can be injected; the defaults are built from
    :class:`ExportSettings`.
    """

    def __init__(
        self,
        settings: ExportSettings | None = None,
        *,
        templates: TemplateRegistry | None = None,
        engine: CaptureEngine | None = None,
        preview: PreviewSurface | None = None,
        pdf_chain: PdfFallbackChain | None = None,
        document_service: DocumentService | None = None,
        gate: Gate | None = None,
        saver: Saver | None = None,
    ) -> None:
        self.settings = settings or ExportSettings.from_env()
        self.templates = templates or create_default_registry()
        self.engine = engine or ChromiumCaptureEngine(self.settings.chrome_binary)
        self.preview = preview or PreviewSurface(self.settings.preview_dir)
        self._pdf_chain = pdf_chain
        self.document_service = document_service or self._default_document_service()
        self.gate = gate or ImmediateGate()
        self.saver = saver or DirectorySaver(self.settings.output_dir)
        self.gated_formats = self._parse_gated(self.settings.gated_formats)

    def _default_document_service(self) -> DocumentService:
        if self.settings.docx_service_url:
            return HttpDocumentService(self.settings.docx_service_url)
        return LocalDocumentService()

    @staticmethod
    def _parse_gated(names: Iterable[str]) -> frozenset[ExportFormat]:
        gated = set()
        for name in names:
            try:
                gated.add(ExportFormat.parse(name))
            except ValueError:
                logger.warning("Ignoring unknown gated format %r", name)
        return frozenset(gated)

    def pdf_chain_for(self, device: DeviceClass) -> PdfFallbackChain:
        if self._pdf_chain is not None:
            return self._pdf_chain
        return build_pdf_chain(
            device,
            templates=self.templates,
            preview=self.preview,
            engine=self.engine,
            capture_timeout=self.settings.capture_timeout,
        )

    # ------------------------------------------------------------------
    # Job
    # ------------------------------------------------------------------

    async def run(
        self,
        cv: CVData | None,
        formats: Iterable[ExportFormat | str],
        *,
        template_id: str | None = None,
        device: DeviceClass = DeviceClass.DESKTOP,
        on_progress: ProgressCallback | None = None,
    ) -> ExportJobResult:
        """Export *cv* in each of *formats*.

        Raises:
            MissingContentError: If *cv* is ``None``.
            ContentValidationError: If the name or email is missing.
            ValueError: If *formats* is empty or names an unknown format.
        """
        cv = require_exportable(cv)
        ordered = normalize_formats(formats)
        result = ExportJobResult(states={fmt: FormatProgress(fmt) for fmt in ordered})
        logger.info(
            "Exporting %r as %s", cv.personal.full_name, ", ".join(f.value for f in ordered)
        )

        for fmt in ordered:
            await self._export_format(fmt, cv, result, template_id, device, on_progress)

        logger.info("Export finished: %s", result.message)
        return result

    async def _export_format(
        self,
        fmt: ExportFormat,
        cv: CVData,
        result: ExportJobResult,
        template_id: str | None,
        device: DeviceClass,
        on_progress: ProgressCallback | None,
    ) -> None:
        state = result.states[fmt]
        state.start()
        _notify(on_progress, state)
        try:
            async with ProgressTicker(
                state, fmt.progress_steps, self.settings.progress_interval, on_progress
            ):
                payload = await self.generate(fmt, cv, template_id, device)
            artifact = ExportArtifact(
                format=fmt,
                payload=payload,
                filename=export_filename(cv.personal.full_name, fmt.extension),
            )
            result.artifacts[fmt] = artifact
            await self._finalise(artifact, result)
        except CVStudioError as exc:
            logger.error("%s export failed: %s", fmt.value.upper(), exc)
            state.fail(str(exc))
        except Exception as exc:
            logger.exception("%s export failed", fmt.value.upper())
            state.fail(f"{fmt.value.upper()} generation failed: {exc}")
        else:
            state.complete()
        _notify(on_progress, state)

    async def generate(
        self,
        fmt: ExportFormat,
        cv: CVData,
        template_id: str | None = None,
        device: DeviceClass = DeviceClass.DESKTOP,
    ) -> bytes:
        """Produce the payload of one format without gating or saving it."""
        match fmt:
            case ExportFormat.PDF:
                return await self.pdf_chain_for(device).generate(cv, template_id)
            case ExportFormat.DOCX:
                return await self.document_service.build(
                    cv, template_id or DEFAULT_DOCX_STYLE
                )
            case ExportFormat.TXT:
                return render_plain_text(cv).encode("utf-8")

    async def _finalise(self, artifact: ExportArtifact, result: ExportJobResult) -> None:
        async def save() -> None:
            location = await asyncio.to_thread(self.saver.save, artifact)
            result.saved[artifact.format] = location

        proceed = ProceedOnce(save)
        if artifact.format not in self.gated_formats:
            await proceed()
            return

        await self.gate.request(artifact, proceed)
        if not proceed.fired:
            raise GateError(f"Download of {artifact.filename} was not released")


def _notify(callback: ProgressCallback | None, state: FormatProgress) -> None:
    if callback is not None:
        callback(state)
