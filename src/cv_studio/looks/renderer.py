"""Render a :class:`LookDocument` to PDF bytes with fpdf2.

Pagination is fixed-size: blocks flow down the page and break onto the
next page whenever the bottom margin is reached. Two-column blocks draw
the sidebar first, then return to the block's first page for the main
column; either column may run across any number of pages.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fpdf import FPDF
from fpdf.enums import XPos, YPos

from cv_studio.looks.document import (
    Bullets,
    Columns,
    ProficiencyBar,
    Row,
    Rule,
    Spacer,
    Stack,
    Text,
)
from cv_studio.utils.formatting import to_latin1

if TYPE_CHECKING:
    from collections.abc import Iterable

    from cv_studio.looks.document import RGB, Block, LookDocument, TextStyle

__all__ = ["render_pdf"]

logger = logging.getLogger(__name__)

_SIDEBAR_PADDING = 8.0


class _FlowingPDF(FPDF):
    """FPDF whose page breaks revisit pages that already exist.

    The main column of a two-column block restarts on the block's first
    page after the sidebar has been drawn, so a break there has to land on
    the next existing page instead of appending a new one.
    """

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.sidebar_band: tuple[float, float, RGB] | None = None

    @property
    def accept_page_break(self) -> bool:
        if self.auto_page_break and self.page < self.pages_count:
            x = self.x
            self.turn_to(self.page + 1)
            self.set_xy(x, self.t_margin)
            return False
        return self.auto_page_break

    def header(self) -> None:
        if self.sidebar_band is not None:
            self.paint_sidebar(self.t_margin)

    def turn_to(self, page: int) -> None:
        """Continue drawing on the existing *page*."""
        self.page = page
        # every page has its own content stream
        self.current_font_is_set_on_page = False

    def next_page(self) -> None:
        if self.page < self.pages_count:
            self.turn_to(self.page + 1)
            self.set_xy(self.l_margin, self.t_margin)
        else:
            self.add_page()

    def paint_sidebar(self, top: float) -> None:
        x, width, color = self.sidebar_band
        self.set_fill_color(*color)
        self.rect(x, top, width, self.h - self.b_margin - top, style="F")


class _PdfWriter:
    def __init__(self, document: LookDocument) -> None:
        self.doc = document
        geometry = document.geometry
        self.pdf = _FlowingPDF(
            orientation="P", unit="pt", format=(geometry.width, geometry.height)
        )
        self.pdf.set_creator("cv-studio")
        if document.title:
            self.pdf.set_title(to_latin1(document.title))
        m = document.margins
        self.pdf.set_margins(left=m.left, top=m.top, right=m.right)
        self.pdf.set_auto_page_break(auto=True, margin=m.bottom)

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------

    def render(self) -> bytes:
        self.pdf.add_page()
        self.draw_all(self.doc.header)
        self.draw_all(self.doc.body)
        self.draw_all(self.doc.footer)
        return bytes(self.pdf.output())

    def draw_all(self, blocks: Iterable[Block]) -> None:
        for block in blocks:
            self.draw(block)

    def draw(self, block: Block) -> None:
        match block:
            case Text():
                self.draw_text(block)
            case Row():
                self.draw_row(block)
            case Bullets():
                self.draw_bullets(block)
            case Rule():
                self.draw_rule(block)
            case Spacer(height=height):
                self.advance(height)
            case ProficiencyBar():
                self.draw_bar(block)
            case Stack(children=children):
                self.draw_all(children)
            case Columns():
                self.draw_columns(block)

    # ------------------------------------------------------------------
    # Primitives
    # ------------------------------------------------------------------

    def apply_style(self, style: TextStyle) -> float:
        """Set font and colour for *style* and return its line height."""
        font_style = ("B" if style.bold else "") + ("I" if style.italic else "")
        self.pdf.set_font(style.family or self.doc.font_family, style=font_style, size=style.size)
        self.pdf.set_text_color(*style.color)
        return style.size * self.doc.line_height

    def ensure_room(self, height: float) -> None:
        pdf = self.pdf
        if pdf.get_y() + height > pdf.page_break_trigger:
            pdf.next_page()

    def advance(self, height: float) -> None:
        pdf = self.pdf
        if pdf.get_y() + height > pdf.page_break_trigger:
            pdf.next_page()
            return
        pdf.set_y(pdf.get_y() + height)
        pdf.set_x(pdf.l_margin)

    @property
    def line_width(self) -> float:
        return self.pdf.w - self.pdf.l_margin - self.pdf.r_margin

    def draw_text(self, block: Text) -> None:
        if not block.content:
            return
        h = self.apply_style(block.style)
        self.ensure_room(h)
        self.pdf.set_x(self.pdf.l_margin)
        self.pdf.multi_cell(
            self.line_width,
            h,
            text=to_latin1(block.content),
            align=block.style.align,
            new_x=XPos.LMARGIN,
            new_y=YPos.NEXT,
        )
        if block.space_after:
            self.advance(block.space_after)

    def draw_row(self, block: Row) -> None:
        pdf = self.pdf
        right_style = block.right_style or block.style
        h = max(
            block.style.size * self.doc.line_height, right_style.size * self.doc.line_height
        )
        self.ensure_room(h)
        y = pdf.get_y()
        right_width = 0.0
        if block.right:
            self.apply_style(right_style)
            right_text = to_latin1(block.right)
            right_width = pdf.get_string_width(right_text) + 2
            pdf.set_xy(pdf.w - pdf.r_margin - right_width, y)
            pdf.cell(right_width, h, text=right_text, align="R")
        self.apply_style(block.style)
        pdf.set_xy(pdf.l_margin, y)
        pdf.multi_cell(
            max(self.line_width - right_width - 4, 20),
            h,
            text=to_latin1(block.left),
            new_x=XPos.LMARGIN,
            new_y=YPos.NEXT,
        )
        if block.space_after:
            self.advance(block.space_after)

    def draw_bullets(self, block: Bullets) -> None:
        pdf = self.pdf
        for item in block.items:
            if not item:
                continue
            h = self.apply_style(block.style)
            self.ensure_room(h)
            y = pdf.get_y()
            pdf.set_xy(pdf.l_margin + block.indent - 8, y)
            pdf.cell(8, h, text=to_latin1(block.marker))
            pdf.set_xy(pdf.l_margin + block.indent, y)
            pdf.multi_cell(
                self.line_width - block.indent,
                h,
                text=to_latin1(item),
                new_x=XPos.LMARGIN,
                new_y=YPos.NEXT,
            )
        if block.space_after:
            self.advance(block.space_after)

    def draw_rule(self, block: Rule) -> None:
        pdf = self.pdf
        self.advance(block.space_before)
        y = pdf.get_y()
        pdf.set_draw_color(*block.color)
        pdf.set_line_width(block.thickness)
        pdf.line(pdf.l_margin, y, pdf.w - pdf.r_margin, y)
        self.advance(block.space_after + block.thickness)

    def draw_bar(self, block: ProficiencyBar) -> None:
        pdf = self.pdf
        h = self.apply_style(block.style)
        self.ensure_room(h + block.height + block.space_after)
        pdf.set_x(pdf.l_margin)
        label = to_latin1(block.label)
        pdf.cell(self.line_width, h, text=label, new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        y = pdf.get_y()
        fraction = min(max(block.fraction, 0.0), 1.0)
        pdf.set_fill_color(*block.track_color)
        pdf.rect(pdf.l_margin, y, self.line_width, block.height, style="F")
        if fraction:
            pdf.set_fill_color(*block.bar_color)
            pdf.rect(pdf.l_margin, y, self.line_width * fraction, block.height, style="F")
        self.advance(block.height + block.space_after)

    # ------------------------------------------------------------------
    # Columns
    # ------------------------------------------------------------------

    def draw_columns(self, block: Columns) -> None:
        pdf = self.pdf
        left, right = pdf.l_margin, pdf.r_margin
        content_width = pdf.w - left - right
        sidebar_width = content_width * block.sidebar_fraction
        start_page, start_y = pdf.page, pdf.get_y()

        if block.sidebar_fill is not None:
            pdf.sidebar_band = (left, sidebar_width, block.sidebar_fill)
            pdf.paint_sidebar(start_y)
        pdf.set_left_margin(left + _SIDEBAR_PADDING)
        pdf.set_right_margin(pdf.w - left - sidebar_width + _SIDEBAR_PADDING)
        pdf.set_xy(pdf.l_margin, start_y + _SIDEBAR_PADDING)
        try:
            self.draw_all(block.sidebar)
        finally:
            pdf.sidebar_band = None
        sidebar_end = (pdf.page, pdf.get_y())
        if sidebar_end[0] > start_page:
            logger.debug("Sidebar continued onto page %d", sidebar_end[0])

        pdf.turn_to(start_page)
        pdf.set_left_margin(left + sidebar_width + block.gap)
        pdf.set_right_margin(right)
        pdf.set_xy(pdf.l_margin, start_y)
        self.draw_all(block.main)
        main_end = (pdf.page, pdf.get_y())

        end_page, end_y = max(sidebar_end, main_end)
        pdf.turn_to(end_page)
        pdf.set_left_margin(left)
        pdf.set_right_margin(right)
        pdf.set_xy(left, end_y)


def render_pdf(document: LookDocument) -> bytes:
    """Lay out *document* on pages of its geometry and return the PDF bytes."""
    data = _PdfWriter(document).render()
    logger.debug("Rendered %s look to %d bytes", document.look_id, len(data))
    return data
