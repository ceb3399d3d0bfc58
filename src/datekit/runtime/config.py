"""Caller-supplied calendar defaults.

There is no process-wide mutable default. Callers that want defaults build
a CalendarDefaults (directly or from the environment) and pass it to
``CalendarContext.create``.

Precedence for each setting:
    call-site argument > CalendarDefaults value > platform default

Platform defaults:
    locale:   get_system_locale() (LC_ALL / LC_TIME / LANG, else en_US)
    timezone: get_system_timezone() (TZ, else the OS local zone)
    calendar: "gregorian"

Python 3.13+.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import tzinfo

from datekit.constants import DEFAULT_CALENDAR, ENV_CALENDAR, ENV_LOCALE, ENV_TIMEZONE
from datekit.locale_utils import get_system_locale

__all__ = ["CalendarDefaults"]


@dataclass(frozen=True, slots=True)
class CalendarDefaults:
    """Injected defaults for locale, time zone and calendar.

    Attributes:
        calendar: Calendar identifier (only "gregorian" is supported)
        locale: BCP-47 or POSIX locale code
        timezone: IANA zone name or tzinfo

    Example:
        >>> defaults = CalendarDefaults(locale="lv-LV", timezone="Europe/Riga")
        >>> defaults.resolve_locale()
        'lv-LV'
        >>> defaults.resolve_locale("de-DE")
        'de-DE'
    """

    calendar: str | None = None
    locale: str | None = None
    timezone: str | tzinfo | None = None

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] | None = None) -> "CalendarDefaults":
        """Read defaults from DATEKIT_LOCALE, DATEKIT_TIMEZONE, DATEKIT_CALENDAR.

        Empty variables count as unset.

        Args:
            environ: Mapping to read (default: os.environ)

        Returns:
            CalendarDefaults with the values found
        """
        source = os.environ if environ is None else environ
        return cls(
            calendar=source.get(ENV_CALENDAR) or None,
            locale=source.get(ENV_LOCALE) or None,
            timezone=source.get(ENV_TIMEZONE) or None,
        )

    def resolve_locale(self, override: str | None = None) -> str:
        """Locale code after applying precedence."""
        return override or self.locale or get_system_locale()

    def resolve_timezone(self, override: str | tzinfo | None = None) -> str | tzinfo | None:
        """Zone after applying precedence; None means "use the platform zone"."""
        return override or self.timezone

    def resolve_calendar(self, override: str | None = None) -> str:
        """Calendar identifier after applying precedence."""
        return override or self.calendar or DEFAULT_CALENDAR
