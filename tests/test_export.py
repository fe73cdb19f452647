"""Tests for the plain-text and DOCX exporters, formats and progress state."""

from __future__ import annotations

import asyncio
import io

import pytest
from docx import Document

from cv_studio.export.docx_builder import DEFAULT_DOCX_STYLE, build_docx, docx_font_for
from cv_studio.export.formats import ExportArtifact, ExportFormat
from cv_studio.export.plain_text import render_plain_text
from cv_studio.export.progress import (
    INITIAL_PROGRESS,
    ExportStatus,
    FormatProgress,
    ProgressTicker,
)
from cv_studio.models.content import (
    CVData,
    DesignSettings,
    ReferencesDisplay,
    Section,
    SectionType,
)
from cv_studio.models.sections import REFERENCES_ON_REQUEST


def _docx_paragraphs(data: bytes) -> list[str]:
    return [p.text for p in Document(io.BytesIO(data)).paragraphs]


# ======================================================================
# Formats
# ======================================================================


class TestExportFormat:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("pdf", ExportFormat.PDF),
            ("PDF", ExportFormat.PDF),
            (".docx", ExportFormat.DOCX),
            ("word", ExportFormat.DOCX),
            ("plain-text", ExportFormat.TXT),
            ("text", ExportFormat.TXT),
            (ExportFormat.TXT, ExportFormat.TXT),
        ],
    )
    def test_parse(self, raw: str, expected: ExportFormat) -> None:
        assert ExportFormat.parse(raw) is expected

    def test_parse_unknown(self) -> None:
        with pytest.raises(ValueError, match="Choose from: pdf, docx, txt"):
            ExportFormat.parse("rtf")

    def test_progress_cadence(self) -> None:
        assert ExportFormat.PDF.progress_steps == (20, 40, 60, 80, 95)
        assert ExportFormat.DOCX.progress_steps == (25, 50, 75, 90, 98)
        assert ExportFormat.TXT.progress_steps == (30, 60, 90, 99)

    def test_artifact_media_type(self) -> None:
        artifact = ExportArtifact(ExportFormat.PDF, b"%PDF", "Jane_Doe_CV.pdf")
        assert artifact.media_type == "application/pdf"
        assert artifact.size == 4


# ======================================================================
# Progress
# ======================================================================


class TestFormatProgress:
    def test_lifecycle(self) -> None:
        state = FormatProgress(ExportFormat.TXT)
        assert state.status is ExportStatus.IDLE
        state.start()
        assert state.progress == INITIAL_PROGRESS
        assert state.status is ExportStatus.GENERATING
        state.complete()
        assert state.progress == 100
        assert state.is_terminal

    def test_progress_never_decreases(self) -> None:
        state = FormatProgress(ExportFormat.PDF)
        state.start()
        assert state.advance(40)
        assert not state.advance(20)
        assert state.progress == 40

    def test_no_advance_after_terminal(self) -> None:
        state = FormatProgress(ExportFormat.PDF)
        state.start()
        state.fail("boom")
        assert not state.advance(90)
        assert state.progress == INITIAL_PROGRESS

    def test_terminal_state_is_final(self) -> None:
        state = FormatProgress(ExportFormat.DOCX)
        state.start()
        state.complete()
        with pytest.raises(RuntimeError, match="already finished"):
            state.fail("late error")

    def test_to_dict(self) -> None:
        state = FormatProgress(ExportFormat.DOCX)
        assert state.to_dict() == {
            "format": "docx",
            "progress": 0,
            "status": "idle",
            "error": None,
        }


class TestProgressTicker:
    def test_ticks_while_running_and_stops_on_exit(self) -> None:
        state = FormatProgress(ExportFormat.TXT)
        state.start()
        seen: list[int] = []

        async def scenario() -> None:
            async with ProgressTicker(
                state, ExportFormat.TXT.progress_steps, 0.001, lambda s: seen.append(s.progress)
            ):
                await asyncio.sleep(0.1)

        asyncio.run(scenario())
        assert seen == [30, 60, 90, 99]
        assert state.progress == 99

    def test_cancelled_before_first_tick(self) -> None:
        state = FormatProgress(ExportFormat.PDF)
        state.start()

        async def scenario() -> None:
            async with ProgressTicker(state, ExportFormat.PDF.progress_steps, 10.0):
                pass

        asyncio.run(scenario())
        assert state.progress == INITIAL_PROGRESS


# ======================================================================
# Plain text
# ======================================================================


class TestPlainText:
    def test_header_layout(self, jane_doe: CVData) -> None:
        cv = jane_doe.model_copy(deep=True)
        cv.personal.phone = "087 123 4567"
        cv.personal.address = "Dublin"
        lines = render_plain_text(cv).splitlines()
        assert lines[0] == "Jane Doe"
        assert lines[1] == "jane@x.com | 087 123 4567"
        assert lines[2] == "Dublin"
        assert lines[3] == ""

    def test_header_only_cv_ends_with_reference_sentence(self, jane_doe: CVData) -> None:
        text = render_plain_text(jane_doe)
        assert text == f"Jane Doe\njane@x.com\n\n{REFERENCES_ON_REQUEST}\n"

    def test_sections_follow_visible_order(self, full_cv: CVData) -> None:
        cv = full_cv.model_copy(
            update={
                "sections": [
                    Section(type=SectionType.EDUCATION, order=1),
                    Section(type=SectionType.SKILLS, order=2),
                    Section(type=SectionType.EXPERIENCE, order=3, visible=False),
                ]
            }
        )
        text = render_plain_text(cv)
        assert text.index("EDUCATION") < text.index("SKILLS")
        assert "WORK EXPERIENCE" not in text
        assert "Senior Developer" not in text

    def test_experience_lines(self, full_cv: CVData) -> None:
        text = render_plain_text(full_cv)
        assert "Senior Developer - Tech Corp" in text
        assert "Jan 2020 - Dec 2023 | Dublin" in text
        assert "• Improved performance by 50%" in text

    def test_dates_follow_design_locale(self, full_cv: CVData) -> None:
        cv = full_cv.model_copy(update={"design_settings": DesignSettings(locale="de")})
        assert "Jan 2020 - Dez 2023 | Dublin" in render_plain_text(cv)

    def test_on_request_block_replaces_trailing_sentence(self, full_cv: CVData) -> None:
        cv = full_cv.model_copy(update={"references_display": ReferencesDisplay.ON_REQUEST})
        text = render_plain_text(cv)
        assert "REFERENCES" in text
        assert text.count(REFERENCES_ON_REQUEST) == 1
        assert text.endswith(f"REFERENCES\n{REFERENCES_ON_REQUEST}\n")


# ======================================================================
# DOCX
# ======================================================================


class TestBuildDocx:
    def test_produces_readable_document(self, full_cv: CVData) -> None:
        paragraphs = _docx_paragraphs(build_docx(full_cv))
        assert paragraphs[0] == "John Doe"
        assert "WORK EXPERIENCE" in [p.upper() for p in paragraphs]
        assert any("Improved performance by 50%" in p for p in paragraphs)

    def test_a4_with_one_inch_margins(self, full_cv: CVData) -> None:
        document = Document(io.BytesIO(build_docx(full_cv)))
        section = document.sections[0]
        assert round(section.page_width.mm) == 210
        assert round(section.page_height.mm) == 297
        assert section.left_margin.inches == pytest.approx(1.0)

    def test_footer_sentence_when_no_references_block(self, full_cv: CVData) -> None:
        paragraphs = _docx_paragraphs(build_docx(full_cv))
        assert paragraphs[-1] == REFERENCES_ON_REQUEST
        assert paragraphs.count(REFERENCES_ON_REQUEST) == 1

    def test_detailed_references_have_no_sentence(self, full_cv: CVData) -> None:
        cv = CVData.model_validate(
            {**full_cv.model_dump(), "references": [{"name": "Dr. Smith", "company": "TCD"}]}
        )
        paragraphs = _docx_paragraphs(build_docx(cv))
        assert REFERENCES_ON_REQUEST not in paragraphs
        assert any("Dr. Smith" in p for p in paragraphs)

    def test_default_style_and_fonts(self) -> None:
        assert DEFAULT_DOCX_STYLE == "harvard"
        assert docx_font_for("Calibri") == "Calibri"
        assert docx_font_for("Comic Sans MS") == "Times New Roman"
        assert docx_font_for(None) == "Times New Roman"

    def test_ongoing_role_follows_design_locale(self, full_cv: CVData) -> None:
        current = full_cv.experience[0].model_copy(update={"current": True})
        cv = full_cv.model_copy(
            update={"experience": [current], "design_settings": DesignSettings(locale="fr")}
        )
        paragraphs = _docx_paragraphs(build_docx(cv))
        assert any("01/2020 - présent" in p for p in paragraphs)
