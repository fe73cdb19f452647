"""Date formatting helpers used by templates, looks and the text exporter.

Dates arrive as ISO-ish strings from the editor (``YYYY-MM`` or
``YYYY-MM-DD``); anything that does not start with a four-digit year is
treated as malformed and formats to an empty string.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from functools import partial

__all__ = ["format_date_range", "format_numeric_date", "format_short_date"]

_ISO_PREFIX = re.compile(r"^\s*(\d{4})(?:-(\d{1,2}))?")

_MONTHS: dict[str, tuple[str, ...]] = {
    "en": ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"),
    "de": ("Jan", "Feb", "Mär", "Apr", "Mai", "Jun", "Jul", "Aug", "Sep", "Okt", "Nov", "Dez"),
    "fr": (
        "janv", "févr", "mars", "avr", "mai", "juin",
        "juil", "août", "sept", "oct", "nov", "déc",
    ),
    "es": ("ene", "feb", "mar", "abr", "may", "jun", "jul", "ago", "sept", "oct", "nov", "dic"),
}

_PRESENT: dict[str, str] = {"en": "Present", "de": "heute", "fr": "présent", "es": "actualidad"}


def _language(locale: str) -> str:
    return locale.split("-")[0].lower()


def _parse(value: str | None) -> tuple[int, int | None] | None:
    if not value:
        return None
    match = _ISO_PREFIX.match(value)
    if match is None:
        return None
    year = int(match.group(1))
    month = int(match.group(2)) if match.group(2) else None
    if month is not None and not 1 <= month <= 12:
        return None
    return year, month


def format_short_date(value: str | None, locale: str = "en") -> str:
    """Return ``"Mon YYYY"`` for *value* in *locale* (``"Jan 2020"``).

    A year without a month formats to just the year. Empty or malformed
    input returns ``""``. Unknown locales fall back to English month names.
    """
    parsed = _parse(value)
    if parsed is None:
        return ""
    year, month = parsed
    if month is None:
        return str(year)
    months = _MONTHS.get(_language(locale), _MONTHS["en"])
    return f"{months[month - 1]} {year}"


def format_numeric_date(value: str | None) -> str:
    """Return ``"MM/YYYY"`` for *value*, the Irish numeric style."""
    parsed = _parse(value)
    if parsed is None:
        return ""
    year, month = parsed
    if month is None:
        return str(year)
    return f"{month:02d}/{year}"


def format_date_range(
    start: str | None,
    end: str | None,
    is_current: bool = False,
    *,
    locale: str = "en",
    formatter: Callable[[str | None], str] | None = None,
    separator: str = " - ",
) -> str:
    """Return a formatted date range like ``Jan 2020 - Present``.

    Endpoints go through *formatter* when given, otherwise through
    :func:`format_short_date` in *locale*. An ongoing range ends in the
    *locale* word for "present".
    """
    if formatter is None:
        formatter = partial(format_short_date, locale=locale)

    start_str = formatter(start)
    present = _PRESENT.get(_language(locale), _PRESENT["en"])
    end_str = present if is_current else formatter(end)

    if start_str and end_str:
        return f"{start_str}{separator}{end_str}"
    return start_str or end_str or ""
