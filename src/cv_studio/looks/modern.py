"""Modern look: left-aligned header in slate blue, unruled headings."""

from __future__ import annotations

from cv_studio.looks.base import Look

__all__ = ["ModernLook"]


class ModernLook(Look):
    id = "modern"
    name = "Modern"

    name_size = 22.0
    title_size = 13.0
    heading_size = 14.0
    text_color = (52, 73, 94)
    accent = (44, 62, 80)
    muted = (127, 140, 141)
    heading_rule = False
