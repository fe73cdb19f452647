"""Turn rendered HTML pages into PDF bytes with a headless Chromium.

Capture is the first choice for PDF export because it reproduces the
on-screen template exactly. It depends on a browser binary being present,
so callers treat :class:`CaptureError` as "try the next strategy".
"""

from __future__ import annotations

import asyncio
import logging
import re
import shutil
import tempfile
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path

from cv_studio.exceptions import CaptureError

__all__ = [
    "A4_VIEWPORT_WIDTH",
    "CaptureEngine",
    "CaptureOptions",
    "ChromiumCaptureEngine",
    "DeviceClass",
    "capture_options_for",
    "detect_device_class",
    "find_browser",
    "html_page",
]

logger = logging.getLogger(__name__)

# A4 width in CSS pixels at 96 dpi.
A4_VIEWPORT_WIDTH = 794
A4_VIEWPORT_HEIGHT = 1123

_BROWSER_NAMES = ("chromium", "chromium-browser", "google-chrome", "google-chrome-stable")

_MOBILE_PATTERN = re.compile(
    r"Android|webOS|iPhone|iPad|iPod|BlackBerry|IEMobile|Opera Mini", re.IGNORECASE
)
_TABLET_PATTERN = re.compile(r"(iPad|tablet|playbook|silk)|(android(?!.*mobile))", re.IGNORECASE)


class DeviceClass(StrEnum):
    DESKTOP = "desktop"
    MOBILE = "mobile"
    TABLET = "tablet"

    @property
    def is_constrained(self) -> bool:
        return self is not DeviceClass.DESKTOP


def detect_device_class(user_agent: str | None) -> DeviceClass:
    """Classify the requesting device from its user-agent string.

    Tablets are checked first because most tablet agents also match the
    mobile pattern.
    """
    if not user_agent:
        return DeviceClass.DESKTOP
    if _TABLET_PATTERN.search(user_agent):
        return DeviceClass.TABLET
    if _MOBILE_PATTERN.search(user_agent):
        return DeviceClass.MOBILE
    return DeviceClass.DESKTOP


@dataclass(frozen=True, slots=True)
class CaptureOptions:
    """Knobs for one capture attempt.

    Attributes:
        scale: Device scale factor passed to the browser.
        viewport_width: Page width in CSS pixels.
        viewport_height: Page height in CSS pixels.
        timeout: Seconds before the browser process is killed.
        settle_delay: Seconds to wait for layout to settle before capturing.
    """

    scale: float = 2.0
    viewport_width: int = A4_VIEWPORT_WIDTH
    viewport_height: int = A4_VIEWPORT_HEIGHT
    timeout: float = 10.0
    settle_delay: float = 0.1


def capture_options_for(device: DeviceClass, pixel_ratio: float = 1.0) -> CaptureOptions:
    """Return capture options tuned for *device*.

    Constrained devices get a lower scale and a longer timeout, and never
    skip the settle delay.
    """
    match device:
        case DeviceClass.MOBILE:
            return CaptureOptions(
                scale=min(pixel_ratio * 1.5, 3.0),
                viewport_width=900,
                timeout=20.0,
                settle_delay=0.5,
            )
        case DeviceClass.TABLET:
            return CaptureOptions(
                scale=min(pixel_ratio * 1.75, 3.0), timeout=15.0, settle_delay=0.3
            )
        case _:
            return CaptureOptions()


def find_browser(explicit: str | None = None) -> str | None:
    """Return the browser executable to use, or ``None`` if none is installed."""
    if explicit:
        return explicit
    for name in _BROWSER_NAMES:
        path = shutil.which(name)
        if path:
            return path
    return None


def html_page(body: str, css: str = "", title: str = "CV") -> str:
    """Wrap a rendered template fragment in a printable HTML document."""
    return (
        "<!DOCTYPE html>\n"
        '<html lang="en"><head><meta charset="utf-8">'
        f"<title>{title}</title>"
        "<style>@page { size: A4; margin: 0; } body { margin: 0; background: #fff; }\n"
        f"{css}</style></head>"
        f"<body>{body}</body></html>"
    )


class CaptureEngine(ABC):
    @abstractmethod
    async def capture(self, page: Path, options: CaptureOptions) -> bytes:
        """Return PDF bytes for the HTML file at *page*.

        Raises:
            CaptureError: If the page cannot be captured.
        """


class ChromiumCaptureEngine(CaptureEngine):
    """Print pages to PDF with ``chromium --headless --print-to-pdf``."""

    def __init__(self, binary: str | None = None) -> None:
        self.binary = binary

    def _command(
        self, binary: str, page: Path, target: Path, options: CaptureOptions
    ) -> list[str]:
        return [
            binary,
            "--headless=new",
            "--disable-gpu",
            "--no-sandbox",
            "--no-pdf-header-footer",
            f"--force-device-scale-factor={options.scale:g}",
            f"--window-size={options.viewport_width},{options.viewport_height}",
            f"--virtual-time-budget={int(options.settle_delay * 1000)}",
            f"--print-to-pdf={target}",
            page.resolve().as_uri(),
        ]

    async def capture(self, page: Path, options: CaptureOptions) -> bytes:
        if not page.is_file():
            raise CaptureError(f"Page not found: {page}")
        binary = find_browser(self.binary)
        if binary is None:
            raise CaptureError("No headless browser available")

        with tempfile.TemporaryDirectory(prefix="cv-print-") as scratch:
            target = Path(scratch) / "capture.pdf"
            command = self._command(binary, page, target, options)
            logger.debug("Capturing %s with %s", page, binary)
            try:
                process = await asyncio.create_subprocess_exec(
                    *command,
                    stdout=asyncio.subprocess.DEVNULL,
                    stderr=asyncio.subprocess.PIPE,
                )
            except OSError as exc:
                raise CaptureError(f"Could not start browser: {exc}") from exc

            try:
                _, stderr = await asyncio.wait_for(process.communicate(), options.timeout)
            except TimeoutError as exc:
                process.kill()
                await process.wait()
                raise CaptureError(f"Capture timed out after {options.timeout}s") from exc

            if process.returncode != 0:
                detail = stderr.decode(errors="replace").strip().splitlines()
                reason = detail[-1] if detail else f"exit code {process.returncode}"
                raise CaptureError(f"Browser failed: {reason}")
            if not target.is_file() or target.stat().st_size == 0:
                raise CaptureError("Browser produced no PDF output")
            return target.read_bytes()
