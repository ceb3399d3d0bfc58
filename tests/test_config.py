"""Tests for CalendarDefaults - injected defaults and their precedence."""

from __future__ import annotations

import pytest

from datekit.runtime import CalendarDefaults


class TestFromEnviron:
    """Reading DATEKIT_* variables."""

    def test_reads_all_variables(self) -> None:
        defaults = CalendarDefaults.from_environ(
            {
                "DATEKIT_LOCALE": "lv-LV",
                "DATEKIT_TIMEZONE": "Europe/Riga",
                "DATEKIT_CALENDAR": "gregorian",
            }
        )
        assert defaults == CalendarDefaults(
            calendar="gregorian", locale="lv-LV", timezone="Europe/Riga"
        )

    def test_empty_counts_as_unset(self) -> None:
        defaults = CalendarDefaults.from_environ({"DATEKIT_LOCALE": "", "DATEKIT_TIMEZONE": ""})
        assert defaults.locale is None
        assert defaults.timezone is None

    def test_missing_variables(self) -> None:
        assert CalendarDefaults.from_environ({}) == CalendarDefaults()

    def test_process_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DATEKIT_TIMEZONE", "Asia/Tokyo")
        assert CalendarDefaults.from_environ().timezone == "Asia/Tokyo"


class TestPrecedence:
    """call-site argument > defaults value > platform default."""

    def test_override_wins(self) -> None:
        defaults = CalendarDefaults(locale="lv-LV", timezone="Europe/Riga", calendar="gregorian")
        assert defaults.resolve_locale("de-DE") == "de-DE"
        assert defaults.resolve_timezone("UTC") == "UTC"
        assert defaults.resolve_calendar("gregorian") == "gregorian"

    def test_defaults_used_without_override(self) -> None:
        defaults = CalendarDefaults(locale="lv-LV", timezone="Europe/Riga")
        assert defaults.resolve_locale() == "lv-LV"
        assert defaults.resolve_timezone() == "Europe/Riga"

    def test_platform_locale(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("datekit.runtime.config.get_system_locale", lambda: "fr_FR")
        assert CalendarDefaults().resolve_locale() == "fr_FR"

    def test_platform_zone_is_deferred(self) -> None:
        assert CalendarDefaults().resolve_timezone() is None

    def test_platform_calendar(self) -> None:
        assert CalendarDefaults().resolve_calendar() == "gregorian"
