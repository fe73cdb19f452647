"""Tests for declarative document looks and the fpdf2 renderer."""

from __future__ import annotations

import io
from dataclasses import replace

import pytest
from pypdf import PdfReader

from cv_studio.looks import (
    DEFAULT_LOOK_ID,
    LOOKS,
    TEMPLATE_LOOK_MAP,
    build_look_document,
    get_look,
    render_look_pdf,
    render_pdf,
    resolve_look_id,
)
from cv_studio.looks.base import HEADER_SPACING, SECTION_SPACING, core_font_for
from cv_studio.looks.creative import SIDEBAR_FRACTION
from cv_studio.looks.document import A4, Columns, PageGeometry, ProficiencyBar
from cv_studio.models.content import (
    CVData,
    DesignSettings,
    HeaderSpacing,
    ReferencesDisplay,
    Section,
    SectionSpacing,
    SectionType,
    Skill,
    SkillLevel,
)
from cv_studio.models.sections import REFERENCES_ON_REQUEST


def _pdf_text(data: bytes) -> str:
    reader = PdfReader(io.BytesIO(data))
    return "\n".join(page.extract_text() or "" for page in reader.pages)


# ======================================================================
# Look resolution
# ======================================================================


class TestResolveLookId:
    def test_known_template_ids(self) -> None:
        assert resolve_look_id("dublin-tech") == "creative"
        assert resolve_look_id("irish-finance") == "harvard"
        assert resolve_look_id("modern") == "modern"

    def test_legacy_style_names(self) -> None:
        assert resolve_look_id("stockholm") == "modern"
        assert resolve_look_id("dublin-pharma") == "classic"

    @pytest.mark.parametrize("template_id", ["", None, "no-such-template"])
    def test_unknown_falls_back_to_default(self, template_id: str | None) -> None:
        assert resolve_look_id(template_id) == DEFAULT_LOOK_ID == "classic"

    def test_every_mapping_targets_a_look(self) -> None:
        assert set(TEMPLATE_LOOK_MAP.values()) <= set(LOOKS)

    def test_build_uses_cv_template_when_no_id(self, full_cv: CVData) -> None:
        cv = full_cv.model_copy(update={"template": "dublin-tech"})
        assert build_look_document(cv).look_id == "creative"


# ======================================================================
# Document structure
# ======================================================================


class TestLookDocument:
    @pytest.mark.parametrize("look_id", sorted(LOOKS))
    def test_single_a4_geometry(self, look_id: str, full_cv: CVData) -> None:
        document = LOOKS[look_id].build(full_cv)
        assert document.geometry == A4
        assert document.geometry.width == pytest.approx(595.28)
        assert document.geometry.height == pytest.approx(841.89)

    @pytest.mark.parametrize("look_id", sorted(LOOKS))
    def test_build_is_pure(self, look_id: str, full_cv: CVData) -> None:
        look = LOOKS[look_id]
        assert look.build(full_cv) == look.build(full_cv)

    def test_sections_follow_order(self, full_cv: CVData) -> None:
        cv = full_cv.model_copy(
            update={
                "sections": [
                    Section(type=SectionType.EDUCATION, order=2),
                    Section(type=SectionType.SKILLS, order=1),
                    Section(type=SectionType.SUMMARY, order=3, visible=False),
                ]
            }
        )
        document = get_look("classic").build(cv)
        assert document.section_names() == ["skills", "education"]

    def test_empty_sections_are_skipped(self, jane_doe: CVData) -> None:
        assert get_look("classic").build(jane_doe).section_names() == []

    def test_design_settings_are_applied(self, full_cv: CVData) -> None:
        design = DesignSettings(
            margins=1.0,
            section_spacing=SectionSpacing.SPACIOUS,
            header_spacing=HeaderSpacing.COMPACT,
            font_family="Georgia",
            font_size=11,
        )
        document = get_look("modern").build(full_cv, design)
        assert document.margins.left == pytest.approx(72.0)
        assert document.font_family == "Times"
        assert document.font_size == 11

    def test_dates_follow_design_locale(self, full_cv: CVData) -> None:
        cv = full_cv.model_copy(update={"design_settings": DesignSettings(locale="de")})
        text = _pdf_text(render_look_pdf(cv, "harvard"))
        assert "Jan 2020 - Dez 2023" in text

    def test_spacing_tables(self) -> None:
        assert [SECTION_SPACING[s] for s in SectionSpacing] == [8.0, 14.0, 20.0, 28.0]
        assert [HEADER_SPACING[h] for h in HeaderSpacing] == [8.0, 14.0, 22.0]

    @pytest.mark.parametrize(
        ("family", "expected"),
        [
            ("Times New Roman", "Times"),
            ("Merriweather", "Times"),
            ("Open Sans", "Helvetica"),
            ("JetBrains Mono", "Courier"),
            ("Inter", "Helvetica"),
        ],
    )
    def test_core_font_mapping(self, family: str, expected: str) -> None:
        assert core_font_for(family) == expected


class TestCreativeLook:
    def test_sidebar_holds_contact_skills_languages(self, full_cv: CVData) -> None:
        document = get_look("creative").build(full_cv)
        columns = [block for block in document.body if isinstance(block, Columns)]
        assert len(columns) == 1
        column = columns[0]
        assert column.sidebar_fraction == SIDEBAR_FRACTION == 0.32
        sidebar_names = [stack.name for stack in column.sidebar]
        assert sidebar_names == ["contact", "skills", "languages"]
        assert "experience" in [stack.name for stack in column.main]

    def test_skills_are_proficiency_bars(self, full_cv: CVData) -> None:
        document = get_look("creative").build(full_cv)
        skills = next(s for s in document.body[0].sidebar if s.name == "skills")
        bars = [b for b in skills.children if isinstance(b, ProficiencyBar)]
        assert [b.label for b in bars] == [s.name for s in full_cv.skills]
        assert bars[0].fraction == 1.0  # Expert


class TestReferencesExclusivity:
    @pytest.mark.parametrize("look_id", sorted(LOOKS))
    def test_footer_sentence_when_no_block(self, look_id: str, full_cv: CVData) -> None:
        texts = list(LOOKS[look_id].build(full_cv).iter_text())
        assert texts.count(REFERENCES_ON_REQUEST) == 1
        assert "references" not in LOOKS[look_id].build(full_cv).section_names()

    @pytest.mark.parametrize("look_id", sorted(LOOKS))
    def test_on_request_block_replaces_footer(self, look_id: str, full_cv: CVData) -> None:
        cv = full_cv.model_copy(update={"references_display": ReferencesDisplay.ON_REQUEST})
        document = LOOKS[look_id].build(cv)
        assert "references" in document.section_names()
        assert document.footer == ()
        assert list(document.iter_text()).count(REFERENCES_ON_REQUEST) == 1

    def test_detailed_records_have_no_sentence(self, full_cv: CVData) -> None:
        cv = CVData.model_validate(
            {**full_cv.model_dump(), "references": [{"name": "Dr. Smith", "company": "TCD"}]}
        )
        texts = list(get_look("harvard").build(cv).iter_text())
        assert REFERENCES_ON_REQUEST not in texts
        assert any("Dr. Smith" in t for t in texts)


# ======================================================================
# PDF rendering
# ======================================================================


class TestRenderPdf:
    @pytest.mark.parametrize("look_id", sorted(LOOKS))
    def test_renders_valid_pdf(self, look_id: str, full_cv: CVData) -> None:
        data = render_pdf(LOOKS[look_id].build(full_cv))
        assert data.startswith(b"%PDF")
        text = _pdf_text(data)
        assert "John Doe" in text
        assert "Senior Developer" in text

    def test_header_only_cv(self, jane_doe: CVData) -> None:
        data = render_look_pdf(jane_doe)
        reader = PdfReader(io.BytesIO(data))
        assert len(reader.pages) == 1
        assert "Jane Doe" in _pdf_text(data)

    def test_long_content_paginates(self, full_cv: CVData) -> None:
        experience = full_cv.experience[0]
        many = [
            experience.model_copy(update={"achievements": [f"Delivered item {i}"] * 5})
            for i in range(40)
        ]
        cv = full_cv.model_copy(update={"experience": many})
        data = render_look_pdf(cv, "classic")
        assert len(PdfReader(io.BytesIO(data)).pages) > 1

    def test_unknown_template_uses_default_look(self, full_cv: CVData) -> None:
        assert render_look_pdf(full_cv, "mystery").startswith(b"%PDF")

    def test_non_latin_text_does_not_fail(self, jane_doe: CVData) -> None:
        cv = jane_doe.model_copy(deep=True)
        cv.personal.summary = "Built “fast” tools – saved €5k • 日本語"
        assert render_look_pdf(cv).startswith(b"%PDF")

    def test_long_sidebar_continues_onto_next_page(self, full_cv: CVData) -> None:
        skills = [Skill(name=f"Skill{i:02d}", level=SkillLevel.EXPERT) for i in range(1, 41)]
        cv = full_cv.model_copy(update={"skills": skills})
        data = render_look_pdf(cv, "dublin-tech")
        text = _pdf_text(data)
        assert [s.name for s in skills if s.name not in text] == []
        assert len(PdfReader(io.BytesIO(data)).pages) > 1

    def test_main_column_resumes_on_sidebar_page(self, full_cv: CVData) -> None:
        skills = [Skill(name=f"Skill{i:02d}") for i in range(1, 41)]
        experience = full_cv.experience[0]
        many = [
            experience.model_copy(update={"company": f"Employer {i:02d}"}) for i in range(12)
        ]
        cv = full_cv.model_copy(update={"skills": skills, "experience": many})
        text = _pdf_text(render_look_pdf(cv, "dublin-tech"))
        for i in range(12):
            assert f"Employer {i:02d}" in text
        assert "Skill40" in text

    def test_page_size_follows_geometry(self, jane_doe: CVData) -> None:
        letter = PageGeometry(width=612.0, height=792.0)
        document = replace(build_look_document(jane_doe), geometry=letter)
        box = PdfReader(io.BytesIO(render_pdf(document))).pages[0].mediabox
        assert float(box.width) == pytest.approx(612.0, abs=0.5)
        assert float(box.height) == pytest.approx(792.0, abs=0.5)

    def test_default_page_is_a4(self, jane_doe: CVData) -> None:
        box = PdfReader(io.BytesIO(render_look_pdf(jane_doe))).pages[0].mediabox
        assert float(box.width) == pytest.approx(A4.width, abs=0.5)
        assert float(box.height) == pytest.approx(A4.height, abs=0.5)
