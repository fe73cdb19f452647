"""Export formats and the artifact each successful generation yields."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

__all__ = ["ExportArtifact", "ExportFormat"]

_ALIASES = {
    "text": "txt",
    "plain-text": "txt",
    "plain_text": "txt",
    "word": "docx",
}

_MEDIA_TYPES = {
    "pdf": "application/pdf",
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "txt": "text/plain; charset=utf-8",
}

# Synthetic progress cadence shown while each generator runs.
_PROGRESS_STEPS: dict[str, tuple[int, ...]] = {
    "pdf": (20, 40, 60, 80, 95),
    "docx": (25, 50, 75, 90, 98),
    "txt": (30, 60, 90, 99),
}


class ExportFormat(StrEnum):
    PDF = "pdf"
    DOCX = "docx"
    TXT = "txt"

    @classmethod
    def parse(cls, value: str | ExportFormat) -> ExportFormat:
        """Return the format named by *value*, accepting common aliases.

        Raises:
            ValueError: If *value* names no known format.
        """
        if isinstance(value, ExportFormat):
            return value
        normalized = value.strip().lower().lstrip(".")
        try:
            return cls(_ALIASES.get(normalized, normalized))
        except ValueError:
            choices = ", ".join(f.value for f in cls)
            msg = f"Unknown export format {value!r}. Choose from: {choices}"
            raise ValueError(msg) from None

    @property
    def extension(self) -> str:
        return self.value

    @property
    def media_type(self) -> str:
        return _MEDIA_TYPES[self.value]

    @property
    def progress_steps(self) -> tuple[int, ...]:
        return _PROGRESS_STEPS[self.value]


@dataclass(frozen=True, slots=True)
class ExportArtifact:
    format: ExportFormat
    payload: bytes
    filename: str

    @property
    def media_type(self) -> str:
        return self.format.media_type

    @property
    def size(self) -> int:
        return len(self.payload)
