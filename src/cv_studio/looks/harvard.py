"""Harvard look: Times, centred header, spelled-out month dates."""

from __future__ import annotations

from cv_studio.looks.base import Look

__all__ = ["HarvardLook"]


class HarvardLook(Look):
    id = "harvard"
    name = "Harvard"

    default_font = "Times"
    default_font_size = 10.5
    default_line_height = 1.25
    name_size = 18.0
    heading_size = 11.0
    muted = (68, 64, 60)
    header_align = "C"
    numeric_dates = False
