from __future__ import annotations

from pathlib import Path

import pytest

from cv_studio.config import ExportSettings
from cv_studio.exceptions import CaptureError
from cv_studio.export.capture import CaptureEngine, CaptureOptions
from cv_studio.models.content import CVData
from cv_studio.templates import create_default_registry
from cv_studio.templates.health import sample_content
from cv_studio.templates.registry import TemplateRegistry


class FakeCaptureEngine(CaptureEngine):
    """Capture engine that records calls and either fails or returns a stub PDF."""

    def __init__(self, payload: bytes | None = None, error: str = "no browser") -> None:
        self.payload = payload
        self.error = error
        self.calls: list[tuple[Path, CaptureOptions]] = []
        self.seen_files: list[bool] = []

    async def capture(self, page: Path, options: CaptureOptions) -> bytes:
        self.calls.append((page, options))
        self.seen_files.append(page.is_file())
        if self.payload is None:
            raise CaptureError(self.error)
        return self.payload


@pytest.fixture
def jane_doe() -> CVData:
    """A CV with only a name and email."""
    return CVData.model_validate(
        {"personal": {"fullName": "Jane Doe", "email": "jane@x.com"}, "sections": []}
    )


@pytest.fixture
def full_cv() -> CVData:
    return sample_content()


@pytest.fixture
def registry() -> TemplateRegistry:
    return create_default_registry()


@pytest.fixture
def settings(tmp_path: Path) -> ExportSettings:
    """Settings that keep every file under the test's temp directory."""
    return ExportSettings(
        output_dir=tmp_path / "exports",
        preview_dir=tmp_path / "previews",
        progress_interval=0.001,
    )


@pytest.fixture
def failing_engine() -> FakeCaptureEngine:
    return FakeCaptureEngine()


@pytest.fixture
def working_engine() -> FakeCaptureEngine:
    return FakeCaptureEngine(payload=b"%PDF-1.4 captured")
