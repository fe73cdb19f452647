"""Declarative document looks and the template-id mapping that selects them."""

from __future__ import annotations

from typing import TYPE_CHECKING

from cv_studio.looks.base import Look
from cv_studio.looks.classic import ClassicLook
from cv_studio.looks.creative import CreativeLook
from cv_studio.looks.document import LookDocument
from cv_studio.looks.harvard import HarvardLook
from cv_studio.looks.modern import ModernLook
from cv_studio.looks.renderer import render_pdf

if TYPE_CHECKING:
    from cv_studio.models.content import CVData, DesignSettings

__all__ = [
    "DEFAULT_LOOK_ID",
    "LOOKS",
    "TEMPLATE_LOOK_MAP",
    "Look",
    "LookDocument",
    "build_look_document",
    "get_look",
    "render_look_pdf",
    "render_pdf",
    "resolve_look_id",
]

DEFAULT_LOOK_ID = "classic"

LOOKS: dict[str, Look] = {
    look.id: look for look in (ClassicLook(), ModernLook(), CreativeLook(), HarvardLook())
}

# Template ids and legacy style names -> look id.
TEMPLATE_LOOK_MAP: dict[str, str] = {
    "classic": "classic",
    "modern": "modern",
    "creative": "creative",
    "harvard": "harvard",
    "dublin-tech": "creative",
    "irish-finance": "harvard",
    "dublin-professional": "classic",
    "dublin-pharma": "classic",
    "stockholm": "modern",
    "london": "modern",
}


def resolve_look_id(template_id: str | None) -> str:
    """Return the look id for *template_id*; unknown or empty ids get the default."""
    if not template_id:
        return DEFAULT_LOOK_ID
    look_id = TEMPLATE_LOOK_MAP.get(template_id, DEFAULT_LOOK_ID)
    return look_id if look_id in LOOKS else DEFAULT_LOOK_ID


def get_look(template_id: str | None) -> Look:
    return LOOKS[resolve_look_id(template_id)]


def build_look_document(
    cv: CVData, template_id: str | None = None, design: DesignSettings | None = None
) -> LookDocument:
    """Build the page description for *cv* using the look mapped to *template_id*.

    Without an explicit id the CV's own ``template`` field is used.
    """
    return get_look(template_id or cv.template).build(cv, design)


def render_look_pdf(cv: CVData, template_id: str | None = None) -> bytes:
    return render_pdf(build_look_document(cv, template_id))
