"""Tests for the command-line interface."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from cv_studio.cli import build_parser, main
from cv_studio.templates.health import sample_content


@pytest.fixture
def cv_file(tmp_path: Path) -> Path:
    path = tmp_path / "cv.json"
    path.write_text(
        json.dumps(sample_content().model_dump(mode="json", by_alias=True)), encoding="utf-8"
    )
    return path


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CV_STUDIO_OUTPUT_DIR", str(tmp_path / "exports"))
    monkeypatch.setenv("CV_STUDIO_PREVIEW_DIR", str(tmp_path / "previews"))
    monkeypatch.setenv("CV_STUDIO_PROGRESS_INTERVAL", "0.001")


class TestParser:
    def test_command_is_required(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_export_defaults(self, cv_file: Path) -> None:
        args = build_parser().parse_args(["export", str(cv_file)])
        assert args.formats is None
        assert args.device == "desktop"
        assert not args.ask

    def test_export_rejects_unknown_format(self, cv_file: Path) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args(["export", str(cv_file), "-f", "rtf"])


class TestTemplatesCommand:
    def test_lists_all(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["templates"]) == 0
        out = capsys.readouterr().out
        for template_id in ("classic", "modern", "harvard", "dublin-tech", "irish-finance"):
            assert template_id in out

    def test_category_filter(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["templates", "-c", "finance"]) == 0
        out = capsys.readouterr().out
        assert "irish-finance" in out
        assert "dublin-tech" not in out

    def test_empty_category(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["templates", "--category", "nope"]) == 1
        assert "No templates in category 'nope'" in capsys.readouterr().out


class TestValidateCommand:
    def test_sample_passes_classic(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["validate"]) == 0
        assert "No suggestions for the classic template" in capsys.readouterr().out

    def test_findings_grouped_by_section(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        path = tmp_path / "jane.json"
        path.write_text(
            json.dumps({"personal": {"fullName": "Jane Doe", "email": "jane@x.com"}}),
            encoding="utf-8",
        )
        assert main(["validate", str(path), "-t", "dublin-tech"]) == 0
        out = capsys.readouterr().out
        assert "[skills]" in out
        assert "Tech roles require at least 5 technical skills" in out

    def test_unknown_template(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["validate", "-t", "ghost"]) == 1
        assert "Unknown template 'ghost'" in capsys.readouterr().out

    def test_invalid_json(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        assert main(["validate", str(path)]) == 1
        assert "is not a valid CV" in capsys.readouterr().out

    def test_missing_file(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["validate", str(tmp_path / "missing.json")]) == 1
        assert "Could not read" in capsys.readouterr().out


class TestExportCommand:
    def test_text_export(
        self, cv_file: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        out_dir = tmp_path / "out"
        assert main(["export", str(cv_file), "-f", "txt", "-o", str(out_dir), "-v"]) == 0
        out = capsys.readouterr().out
        assert "TXT   100%  complete" in out
        assert "1 file(s) exported successfully." in out
        assert (out_dir / "John_Doe_CV.txt").read_text(encoding="utf-8").startswith("John Doe")

    def test_docx_export_uses_env_output_dir(self, cv_file: Path, tmp_path: Path) -> None:
        assert main(["export", str(cv_file), "-f", "docx"]) == 0
        assert (tmp_path / "exports" / "John_Doe_CV.docx").is_file()

    def test_cv_without_email_fails(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        path = tmp_path / "cv.json"
        path.write_text(json.dumps({"personal": {"fullName": "Jane"}}), encoding="utf-8")
        assert main(["export", str(path), "-f", "txt"]) == 1
        assert "Email is required" in capsys.readouterr().out


class TestHealthCommand:
    def test_reports_healthy(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["health"]) == 0
        assert "Overall Health: HEALTHY" in capsys.readouterr().out
