"""Multi-format CV export: PDF, DOCX and plain text."""

from __future__ import annotations

from cv_studio.export.capture import (
    CaptureEngine,
    CaptureOptions,
    ChromiumCaptureEngine,
    DeviceClass,
    capture_options_for,
    detect_device_class,
)
from cv_studio.export.document_service import (
    DocumentService,
    HttpDocumentService,
    LocalDocumentService,
)
from cv_studio.export.docx_builder import build_docx
from cv_studio.export.formats import ExportArtifact, ExportFormat
from cv_studio.export.gating import Gate, ImmediateGate, InterstitialGate
from cv_studio.export.orchestrator import (
    ExportJobResult,
    ExportOrchestrator,
    JobOutcome,
    normalize_formats,
)
from cv_studio.export.pdf_chain import PdfFallbackChain, build_pdf_chain
from cv_studio.export.plain_text import render_plain_text
from cv_studio.export.preview import PREVIEW_ANCHOR, PreviewSurface, preview_fingerprint
from cv_studio.export.progress import ExportStatus, FormatProgress
from cv_studio.export.saver import DialogSaver, DirectorySaver, MemorySaver, Saver

__all__ = [
    "PREVIEW_ANCHOR",
    "CaptureEngine",
    "CaptureOptions",
    "ChromiumCaptureEngine",
    "DeviceClass",
    "DialogSaver",
    "DirectorySaver",
    "DocumentService",
    "ExportArtifact",
    "ExportFormat",
    "ExportJobResult",
    "ExportOrchestrator",
    "ExportStatus",
    "FormatProgress",
    "Gate",
    "HttpDocumentService",
    "ImmediateGate",
    "InterstitialGate",
    "JobOutcome",
    "LocalDocumentService",
    "MemorySaver",
    "PdfFallbackChain",
    "PreviewSurface",
    "Saver",
    "build_docx",
    "build_pdf_chain",
    "capture_options_for",
    "detect_device_class",
    "normalize_formats",
    "preview_fingerprint",
    "render_plain_text",
]
