"""Scratch containers used to capture a template that is not on screen."""

from __future__ import annotations

import logging
import shutil
import tempfile
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from cv_studio.export.capture import A4_VIEWPORT_WIDTH, html_page

__all__ = ["CONTAINER_PREFIX", "offscreen_container"]

logger = logging.getLogger(__name__)

CONTAINER_PREFIX = "cv-capture-"

# Invisible on screen, restored for print so the capture is not blank.
_OFFSCREEN_CSS = f"""
.cv-offscreen {{ width: {A4_VIEWPORT_WIDTH}px; opacity: 0; pointer-events: none; }}
@media print {{ .cv-offscreen {{ opacity: 1; }} }}
"""


@contextmanager
def offscreen_container(
    body: str, css: str = "", *, parent: Path | None = None
) -> Iterator[Path]:
    """Yield the path of a uniquely named page holding *body*.

    The container directory is removed when the block exits, whether or not
    the capture inside it succeeded.
    """
    base = Path(parent) if parent is not None else Path(tempfile.gettempdir())
    container = base / f"{CONTAINER_PREFIX}{uuid.uuid4().hex}"
    container.mkdir(parents=True)
    page = container / "index.html"
    try:
        page.write_text(
            html_page(f'<div class="cv-offscreen">{body}</div>', css + _OFFSCREEN_CSS),
            encoding="utf-8",
        )
        yield page
    finally:
        shutil.rmtree(container, ignore_errors=True)
        logger.debug("Removed offscreen container %s", container.name)
