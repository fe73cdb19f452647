"""Runtime configuration read from the environment.

Values come from ``CV_STUDIO_*`` environment variables (a ``.env`` file in
the working directory is honoured) and fall back to the defaults below.
"""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

__all__ = [
    "DEFAULT_GATED_FORMATS",
    "ExportSettings",
    "get_log_level",
    "get_output_root",
    "get_preview_root",
]

DEFAULT_GATED_FORMATS = frozenset({"pdf", "docx"})
DEFAULT_CAPTURE_TIMEOUT = 15.0
DEFAULT_PROGRESS_INTERVAL = 0.3


def get_output_root() -> Path:
    """Return the directory exported files are saved into."""
    env_root = os.getenv("CV_STUDIO_OUTPUT_DIR")
    if env_root:
        return Path(env_root).expanduser().resolve()
    return Path.cwd() / "exports"


def get_preview_root() -> Path:
    """Return the directory live previews are published into."""
    env_root = os.getenv("CV_STUDIO_PREVIEW_DIR")
    if env_root:
        return Path(env_root).expanduser().resolve()
    return Path(tempfile.gettempdir()) / "cv-studio-previews"


def get_log_level() -> str:
    """Return the configured log level name (``INFO`` by default)."""
    return os.getenv("CV_STUDIO_LOG_LEVEL", "INFO").upper()


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _formats_env(name: str, default: frozenset[str]) -> frozenset[str]:
    raw = os.getenv(name)
    if raw is None:
        return default
    return frozenset(part.strip().lower() for part in raw.split(",") if part.strip())


@dataclass(frozen=True, slots=True)
class ExportSettings:
    """Settings consumed by the export orchestrator and its collaborators.

    Attributes:
        output_dir: Where saved artifacts land.
        preview_dir: Where live previews are published for direct capture.
        chrome_binary: Explicit headless browser path; ``None`` searches ``PATH``.
        capture_timeout: Seconds a single capture attempt may take.
        docx_service_url: Base URL of a remote document-construction service;
            ``None`` builds DOCX files in-process.
        gated_formats: Format names routed through the gating collaborator.
        progress_interval: Seconds between synthetic progress ticks.
    """

    output_dir: Path
    preview_dir: Path
    chrome_binary: str | None = None
    capture_timeout: float = DEFAULT_CAPTURE_TIMEOUT
    docx_service_url: str | None = None
    gated_formats: frozenset[str] = DEFAULT_GATED_FORMATS
    progress_interval: float = DEFAULT_PROGRESS_INTERVAL

    @classmethod
    def from_env(cls) -> ExportSettings:
        """Build settings from ``CV_STUDIO_*`` environment variables."""
        return cls(
            output_dir=get_output_root(),
            preview_dir=get_preview_root(),
            chrome_binary=os.getenv("CV_STUDIO_CHROME_PATH") or None,
            capture_timeout=_float_env("CV_STUDIO_CAPTURE_TIMEOUT", DEFAULT_CAPTURE_TIMEOUT),
            docx_service_url=os.getenv("CV_STUDIO_DOCX_SERVICE_URL") or None,
            gated_formats=_formats_env("CV_STUDIO_GATED_FORMATS", DEFAULT_GATED_FORMATS),
            progress_interval=_float_env(
                "CV_STUDIO_PROGRESS_INTERVAL", DEFAULT_PROGRESS_INTERVAL
            ),
        )
