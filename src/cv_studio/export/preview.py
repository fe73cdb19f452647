"""The live-preview surface that direct capture reads from.

Each preview is published as a standalone HTML file whose name carries a
fingerprint of the CV content and the template it was rendered with.
Direct capture only finds a preview of exactly the document being
exported; anything else sends the fallback chain to the next stage.
"""

from __future__ import annotations

import hashlib
import logging
from pathlib import Path
from typing import TYPE_CHECKING

from cv_studio.export.capture import html_page

if TYPE_CHECKING:
    from cv_studio.models.content import CVData

__all__ = ["PREVIEW_ANCHOR", "PreviewSurface", "preview_fingerprint"]

logger = logging.getLogger(__name__)

PREVIEW_ANCHOR = "cv-preview"


def preview_fingerprint(cv: CVData, template_id: str) -> str:
    """Return a short digest identifying *cv* rendered with *template_id*."""
    digest = hashlib.sha256()
    digest.update(template_id.encode("utf-8"))
    digest.update(b"\0")
    digest.update(cv.model_dump_json().encode("utf-8"))
    return digest.hexdigest()[:16]


class PreviewSurface:
    """Directory-backed home of published previews."""

    def __init__(self, root: Path, anchor: str = PREVIEW_ANCHOR) -> None:
        self.root = Path(root)
        self.anchor = anchor

    def path_for(self, cv: CVData, template_id: str) -> Path:
        return self.root / f"{self.anchor}-{preview_fingerprint(cv, template_id)}.html"

    def publish(
        self, cv: CVData, template_id: str, body: str, css: str = "", title: str = "CV"
    ) -> Path:
        """Write *cv* rendered with *template_id* as a live preview."""
        path = self.path_for(cv, template_id)
        self.root.mkdir(parents=True, exist_ok=True)
        path.write_text(html_page(body, css, title), encoding="utf-8")
        logger.debug("Published %s preview to %s", template_id, path)
        return path

    def locate(self, cv: CVData, template_id: str) -> Path | None:
        """Return the preview of *cv* in *template_id*, or ``None`` if unpublished."""
        path = self.path_for(cv, template_id)
        return path if path.is_file() else None

    def withdraw(self, cv: CVData, template_id: str) -> None:
        self.path_for(cv, template_id).unlink(missing_ok=True)
