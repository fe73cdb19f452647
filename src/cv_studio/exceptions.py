"""Exception hierarchy shared by the rendering and export layers."""

from __future__ import annotations

__all__ = [
    "CVStudioError",
    "CaptureError",
    "ContentValidationError",
    "DocumentServiceError",
    "GateError",
    "MissingContentError",
    "NoTemplateSelectedError",
    "PdfGenerationError",
]


class CVStudioError(Exception):
    """Base class for every error raised by this package."""


# ---------------------------------------------------------------------------
# Precondition errors
# ---------------------------------------------------------------------------


class NoTemplateSelectedError(CVStudioError, RuntimeError):
    """Raised when render/validate/CSS is requested before selecting a template."""

    def __init__(self) -> None:
        super().__init__("No template selected")


class MissingContentError(CVStudioError, ValueError):
    """Raised when an operation needs a content model and none was given."""

    def __init__(self, message: str = "No CV data available") -> None:
        super().__init__(message)


class ContentValidationError(CVStudioError, ValueError):
    """Raised when the content model lacks the fields every export needs."""

    def __init__(self, problems: list[str]) -> None:
        self.problems = list(problems)
        super().__init__("; ".join(self.problems) or "Invalid CV data")


# ---------------------------------------------------------------------------
# Generation errors
# ---------------------------------------------------------------------------


class CaptureError(CVStudioError):
    """Raised when a capture engine cannot turn a page into a PDF."""


class PdfGenerationError(CVStudioError):
    """Raised when every stage of the PDF fallback chain has failed.

    Attributes:
        failures: ``(stage_name, reason)`` pairs in the order they were tried.
    """

    def __init__(self, failures: list[tuple[str, str]]) -> None:
        self.failures = list(failures)
        detail = ", ".join(f"{stage}: {reason}" for stage, reason in self.failures)
        super().__init__(f"PDF generation failed ({detail or 'no strategies configured'})")


class DocumentServiceError(CVStudioError):
    """Raised when the document-construction service returns an error."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class GateError(CVStudioError):
    """Raised when the gating collaborator fails before allowing a save."""
