"""Tests for environment-driven settings."""

from __future__ import annotations

from pathlib import Path

import pytest

from cv_studio.config import (
    DEFAULT_GATED_FORMATS,
    ExportSettings,
    get_log_level,
    get_output_root,
)

_VARS = (
    "CV_STUDIO_OUTPUT_DIR",
    "CV_STUDIO_PREVIEW_DIR",
    "CV_STUDIO_CHROME_PATH",
    "CV_STUDIO_CAPTURE_TIMEOUT",
    "CV_STUDIO_DOCX_SERVICE_URL",
    "CV_STUDIO_GATED_FORMATS",
    "CV_STUDIO_PROGRESS_INTERVAL",
    "CV_STUDIO_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)


class TestExportSettings:
    def test_defaults(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        settings = ExportSettings.from_env()
        assert settings.output_dir == tmp_path / "exports"
        assert settings.chrome_binary is None
        assert settings.docx_service_url is None
        assert settings.capture_timeout == 15.0
        assert settings.gated_formats == DEFAULT_GATED_FORMATS == {"pdf", "docx"}

    def test_overrides(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CV_STUDIO_OUTPUT_DIR", str(tmp_path / "out"))
        monkeypatch.setenv("CV_STUDIO_CHROME_PATH", "/usr/bin/chromium")
        monkeypatch.setenv("CV_STUDIO_CAPTURE_TIMEOUT", "30")
        monkeypatch.setenv("CV_STUDIO_DOCX_SERVICE_URL", "http://docs:8000")
        monkeypatch.setenv("CV_STUDIO_GATED_FORMATS", " PDF, ,txt ")
        settings = ExportSettings.from_env()
        assert settings.output_dir == (tmp_path / "out").resolve()
        assert settings.chrome_binary == "/usr/bin/chromium"
        assert settings.capture_timeout == 30.0
        assert settings.docx_service_url == "http://docs:8000"
        assert settings.gated_formats == {"pdf", "txt"}

    def test_empty_gated_formats_disables_gating(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CV_STUDIO_GATED_FORMATS", "")
        assert ExportSettings.from_env().gated_formats == frozenset()

    def test_bad_number_falls_back(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CV_STUDIO_CAPTURE_TIMEOUT", "soon")
        assert ExportSettings.from_env().capture_timeout == 15.0


class TestHelpers:
    def test_log_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        assert get_log_level() == "INFO"
        monkeypatch.setenv("CV_STUDIO_LOG_LEVEL", "debug")
        assert get_log_level() == "DEBUG"

    def test_output_root_expands_user(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CV_STUDIO_OUTPUT_DIR", "~/cvs")
        assert get_output_root() == (Path.home() / "cvs").resolve()
