"""Small text helpers: phone numbers, URLs and artifact filenames."""

from __future__ import annotations

import re

__all__ = [
    "export_filename",
    "format_irish_phone",
    "sanitize_filename",
    "strip_protocol",
    "to_latin1",
]

_WHITESPACE = re.compile(r"\s+")
_INVALID_FILENAME_CHARS = re.compile(r'[<>:"/\\|?*]')


def sanitize_filename(name: str, fallback: str = "CV") -> str:
    """Remove or replace characters that are invalid in filenames."""
    sanitized = _INVALID_FILENAME_CHARS.sub("_", name)
    sanitized = sanitized.strip(". ")
    return sanitized or fallback


def export_filename(full_name: str, extension: str) -> str:
    """Return ``{name_with_underscores}_CV.{extension}``.

    >>> export_filename("Jane  Doe", "pdf")
    'Jane_Doe_CV.pdf'
    """
    base = _WHITESPACE.sub("_", sanitize_filename(full_name.strip(), fallback="CV"))
    if base == "CV":
        return f"CV.{extension}"
    return f"{base}_CV.{extension}"


def format_irish_phone(phone: str) -> str:
    """Format an Irish number as ``+353 XX XXX XXXX``.

    Numbers already carrying the 353 country code or a leading trunk ``0``
    are normalised; anything else is returned unchanged.
    """
    if not phone:
        return ""
    digits = re.sub(r"\D", "", phone)
    if digits.startswith("353"):
        national = digits[3:]
    elif digits.startswith("0"):
        national = digits[1:]
    else:
        return phone.strip()
    return f"+353 {national[:2]} {national[2:5]} {national[5:]}".rstrip()


def strip_protocol(url: str) -> str:
    """Drop ``http(s)://`` and a leading ``www.`` for display."""
    return re.sub(r"^(https?://)?(www\.)?", "", url.strip()).rstrip("/")


def to_latin1(text: str) -> str:
    """Encode *text* for the PDF core fonts, replacing unsupported characters."""
    replacements = {
        "–": "-",
        "—": "-",
        "‘": "'",
        "’": "'",
        "“": '"',
        "”": '"',
        "•": "\xb7",
        "…": "...",
        "€": "EUR ",
    }
    for source, target in replacements.items():
        text = text.replace(source, target)
    return text.encode("latin-1", errors="replace").decode("latin-1")
