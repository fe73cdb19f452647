"""Classic look: centred header, uppercase ruled headings, Helvetica body."""

from __future__ import annotations

from cv_studio.looks.base import Look

__all__ = ["ClassicLook"]


class ClassicLook(Look):
    id = "classic"
    name = "Classic"

    name_size = 20.0
    heading_size = 12.0
    accent = (51, 51, 51)
    header_align = "C"
