"""Tests for date and text formatting helpers."""

from __future__ import annotations

from cv_studio.utils.dates import format_date_range, format_numeric_date, format_short_date
from cv_studio.utils.formatting import (
    export_filename,
    format_irish_phone,
    sanitize_filename,
    strip_protocol,
    to_latin1,
)


class TestFormatShortDate:
    def test_year_month(self) -> None:
        assert format_short_date("2020-01") == "Jan 2020"

    def test_full_iso_date(self) -> None:
        assert format_short_date("2023-12-31") == "Dec 2023"

    def test_year_only(self) -> None:
        assert format_short_date("2019") == "2019"

    def test_empty_and_none(self) -> None:
        assert format_short_date("") == ""
        assert format_short_date(None) == ""

    def test_malformed(self) -> None:
        assert format_short_date("last summer") == ""
        assert format_short_date("2020-13") == ""

    def test_locale(self) -> None:
        assert format_short_date("2021-03", locale="de") == "Mär 2021"
        assert format_short_date("2021-03", locale="de-IE") == "Mär 2021"

    def test_unknown_locale_falls_back_to_english(self) -> None:
        assert format_short_date("2021-03", locale="xx") == "Mar 2021"


class TestFormatNumericDate:
    def test_month_year(self) -> None:
        assert format_numeric_date("2021-05-14") == "05/2021"

    def test_malformed(self) -> None:
        assert format_numeric_date("soon") == ""


class TestFormatDateRange:
    def test_start_and_end(self) -> None:
        assert format_date_range("2020-01", "2023-12") == "Jan 2020 - Dec 2023"

    def test_current_role_in_locale(self) -> None:
        assert format_date_range("2020-01", None, True, locale="fr-FR") == "janv 2020 - présent"
        numeric = format_date_range(
            "2020-01", None, True, locale="de", formatter=format_numeric_date
        )
        assert numeric == "01/2020 - heute"

    def test_current_role(self) -> None:
        assert format_date_range("2020-01", "", is_current=True) == "Jan 2020 - Present"

    def test_only_start(self) -> None:
        assert format_date_range("2020-01", None) == "Jan 2020"

    def test_nothing(self) -> None:
        assert format_date_range("", "") == ""

    def test_custom_formatter(self) -> None:
        result = format_date_range("2020-01", "2021-02", formatter=format_numeric_date)
        assert result == "01/2020 - 02/2021"


class TestFilenames:
    def test_export_filename_replaces_whitespace(self) -> None:
        assert export_filename("Jane  Doe", "pdf") == "Jane_Doe_CV.pdf"

    def test_export_filename_blank_name(self) -> None:
        assert export_filename("   ", "txt") == "CV.txt"

    def test_sanitize_removes_invalid_characters(self) -> None:
        assert sanitize_filename('a<b>c:d"e') == "a_b_c_d_e"

    def test_sanitize_fallback(self) -> None:
        assert sanitize_filename("...") == "CV"


class TestIrishPhone:
    def test_national_number(self) -> None:
        assert format_irish_phone("087 123 4567") == "+353 87 123 4567"

    def test_international_number(self) -> None:
        assert format_irish_phone("+353871234567") == "+353 87 123 4567"

    def test_foreign_number_unchanged(self) -> None:
        assert format_irish_phone(" +44 20 7946 0000 ") == "+44 20 7946 0000"

    def test_empty(self) -> None:
        assert format_irish_phone("") == ""


class TestTextHelpers:
    def test_strip_protocol(self) -> None:
        assert strip_protocol("https://www.example.com/") == "example.com"
        assert strip_protocol("github.com/jane") == "github.com/jane"

    def test_to_latin1_replaces_typographic_characters(self) -> None:
        assert to_latin1("Led – “team” • €5k") == "Led - \"team\" \xb7 EUR 5k"

    def test_to_latin1_replaces_unencodable(self) -> None:
        assert to_latin1("日本") == "??"
