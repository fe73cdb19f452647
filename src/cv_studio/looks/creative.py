"""Creative look: two columns with a tinted sidebar.

The sidebar carries contact details, skills drawn as proficiency bars and
languages; every other section flows down the main column.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from cv_studio.looks.base import Look, LookMetrics
from cv_studio.looks.document import Block, Columns, ProficiencyBar, Spacer, Stack, Text
from cv_studio.models.content import SectionType, SkillLevel
from cv_studio.models.sections import resolve_sections
from cv_studio.utils.formatting import format_irish_phone, strip_protocol

if TYPE_CHECKING:
    from cv_studio.models.content import CVData

__all__ = ["SIDEBAR_FRACTION", "CreativeLook"]

SIDEBAR_FRACTION = 0.32
SIDEBAR_SECTIONS = frozenset({SectionType.SKILLS, SectionType.LANGUAGES})

_LEVEL_FRACTIONS: dict[SkillLevel, float] = {
    SkillLevel.BEGINNER: 0.25,
    SkillLevel.INTERMEDIATE: 0.5,
    SkillLevel.ADVANCED: 0.75,
    SkillLevel.EXPERT: 1.0,
}


class CreativeLook(Look):
    id = "creative"
    name = "Creative"

    name_size = 24.0
    heading_size = 12.0
    accent = (37, 99, 235)
    muted = (107, 114, 128)
    sidebar_fill = (239, 246, 255)

    def build_header(self, cv: CVData, m: LookMetrics) -> list[Block]:
        p = cv.personal
        blocks: list[Block] = [
            Text(p.full_name, self.style(m, size=self.name_size, bold=True, color=self.accent))
        ]
        if p.title:
            blocks.append(Text(p.title, self.style(m, size=self.title_size, color=self.muted)))
        blocks.append(Spacer(m.header_gap))
        return blocks

    def build_body(self, cv: CVData, m: LookMetrics) -> list[Block]:
        sidebar: list[Block] = [self.contact_stack(cv, m)]
        main: list[Block] = []
        for section in resolve_sections(cv):
            stack = self.section_stack(section, cv, m)
            if stack is None:
                continue
            if section.type in SIDEBAR_SECTIONS:
                sidebar.append(stack)
            else:
                main.append(stack)
        return [
            Columns(
                sidebar=tuple(sidebar),
                main=tuple(main),
                sidebar_fraction=SIDEBAR_FRACTION,
                sidebar_fill=self.sidebar_fill,
            )
        ]

    def contact_stack(self, cv: CVData, m: LookMetrics) -> Stack:
        p = cv.personal
        lines = [p.email, format_irish_phone(p.phone), p.address]
        lines.extend(strip_protocol(url) for url in (p.linkedin, p.github, p.website) if url)
        small = self.style(m, size=self.small_size)
        children: list[Block] = [*self.heading("Contact", m)]
        children.extend(Text(line, small, space_after=2) for line in lines if line)
        children.append(Spacer(m.section_gap))
        return Stack(children=tuple(children), name="contact")

    def section_skills(self, cv: CVData, m: LookMetrics) -> list[Block]:
        small = self.style(m, size=self.small_size)
        return [
            ProficiencyBar(
                label=skill.name,
                fraction=_LEVEL_FRACTIONS.get(skill.level, 0.5),
                style=small,
                bar_color=self.accent,
            )
            for skill in cv.skills
        ]
