"""Destinations for finished export artifacts."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cv_studio.export.formats import ExportArtifact

__all__ = ["DialogSaver", "DirectorySaver", "MemorySaver", "Saver"]

logger = logging.getLogger(__name__)


class Saver(ABC):
    @abstractmethod
    def save(self, artifact: ExportArtifact) -> Path | None:
        """Persist *artifact*.

        Returns:
            The file written, or ``None`` if the artifact was kept elsewhere
            or the user declined to save it.
        """


class DirectorySaver(Saver):
    """Write artifacts into a fixed directory, replacing same-named files."""

    def __init__(self, directory: Path) -> None:
        self.directory = Path(directory)

    def save(self, artifact: ExportArtifact) -> Path:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self.directory / artifact.filename
        path.write_bytes(artifact.payload)
        logger.info("Saved %s (%d bytes)", path, artifact.size)
        return path


class MemorySaver(Saver):
    """Keep artifacts in memory, keyed by filename."""

    def __init__(self) -> None:
        self.artifacts: dict[str, ExportArtifact] = {}

    def save(self, artifact: ExportArtifact) -> None:
        self.artifacts[artifact.filename] = artifact


class DialogSaver(Saver):
    """Ask the user where to save each artifact with a native file dialog."""

    def __init__(self, title: str = "Export CV") -> None:
        self.title = title

    def prompt(self, artifact: ExportArtifact) -> Path | None:
        import easygui

        result = easygui.filesavebox(
            msg="Choose export location",
            title=self.title,
            default=artifact.filename,
            filetypes=[f"*.{artifact.format.extension}"],
        )
        return Path(result) if result else None

    def save(self, artifact: ExportArtifact) -> Path | None:
        target = self.prompt(artifact)
        if target is None:
            logger.info("Save of %s cancelled", artifact.filename)
            return None
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(artifact.payload)
        logger.info("Saved %s (%d bytes)", target, artifact.size)
        return target
