"""Locale and time zone resolution for calendar contexts.

Locales:
    BCP-47 ("en-US") is normalized to POSIX ("en_US") so CalendarContext
    cache keys agree and Babel accepts the code. The platform locale is read
    with date formatting in mind: the OS locale, then LC_ALL, LC_TIME and
    LANG in that order.

Time zones:
    IANA names resolve through ``zoneinfo``; "UTC", "Etc/UTC" and "Z" map to
    ``datetime.UTC``. The platform zone comes from TZ (a leading ":" is
    allowed) or, failing that, the fixed offset the OS reports.

Python 3.13+.
"""

from __future__ import annotations

import functools
import os
from datetime import UTC, datetime, tzinfo
from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from datekit.constants import DEFAULT_LOCALE

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "get_babel_locale",
    "get_system_locale",
    "get_system_timezone",
    "normalize_locale",
    "resolve_timezone",
]

_UTC_NAMES: frozenset[str] = frozenset({"UTC", "Etc/UTC", "Z"})


def normalize_locale(locale_code: str) -> str:
    """Convert BCP-47 locale code to POSIX format for Babel.

    Args:
        locale_code: BCP-47 locale code (e.g., "en-US", "pt-BR")

    Returns:
        POSIX-formatted locale code (e.g., "en_US", "pt_BR")

    Example:
        >>> normalize_locale("en-US")
        'en_US'
        >>> normalize_locale("en")  # Already normalized
        'en'
    """
    return locale_code.replace("-", "_")


@functools.lru_cache(maxsize=128)
def get_babel_locale(locale_code: str) -> Locale:
    """Get a Babel Locale object with caching.

    Thread-safe via lru_cache internal locking.

    Args:
        locale_code: Locale code (BCP-47 or POSIX format accepted)

    Returns:
        Babel Locale object

    Raises:
        babel.core.UnknownLocaleError: If locale is not recognized
        ValueError: If locale format is invalid

    Example:
        >>> get_babel_locale("en-US").first_week_day
        6
    """
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel import Locale  # noqa: PLC0415

    return Locale.parse(normalize_locale(locale_code))


def get_system_locale(*, raise_on_failure: bool = False) -> str:
    """Detect system locale from OS and environment variables.

    Detection order:
    1. Python locale.getlocale() (OS-level locale)
    2. LC_ALL environment variable (overrides all)
    3. LC_TIME environment variable (date and time formatting)
    4. LANG environment variable (default locale)

    "C" and "POSIX" pseudo-locales are ignored.

    Args:
        raise_on_failure: If True, raise RuntimeError when locale cannot be
            determined. If False (default), return "en_US" as fallback.

    Returns:
        Detected locale code in POSIX format

    Raises:
        RuntimeError: If raise_on_failure is True and locale cannot be determined.
    """
    import locale as locale_module  # noqa: PLC0415

    try:
        system_locale, _ = locale_module.getlocale()
        if system_locale and system_locale not in ("C", "POSIX"):
            return normalize_locale(system_locale.split(".")[0])
    except (ValueError, AttributeError):
        pass

    for var in ("LC_ALL", "LC_TIME", "LANG"):
        value = os.environ.get(var)
        if value and value not in ("C", "POSIX", ""):
            # Strip encoding suffix (e.g., ".UTF-8")
            return normalize_locale(value.split(".")[0])

    if raise_on_failure:
        msg = (
            "Could not determine system locale. "
            "Set LC_ALL, LC_TIME, or LANG environment variable."
        )
        raise RuntimeError(msg)

    return DEFAULT_LOCALE


def resolve_timezone(name: str) -> tzinfo:
    """Resolve an IANA zone name to a tzinfo.

    "UTC", "Etc/UTC" and "Z" map to ``datetime.UTC``.

    Args:
        name: IANA time zone name (e.g., "Europe/Riga")

    Returns:
        tzinfo for the zone

    Raises:
        ValueError: If the name is not a known zone

    Example:
        >>> resolve_timezone("Europe/Riga")
        zoneinfo.ZoneInfo(key='Europe/Riga')
    """
    if name in _UTC_NAMES:
        return UTC
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        msg = f"Unknown time zone '{name}': {e}"
        raise ValueError(msg) from None


def get_system_timezone() -> tzinfo:
    """Detect the platform time zone.

    Uses the TZ environment variable when it names an IANA zone, otherwise
    the local zone reported by the OS (a fixed-offset tzinfo).

    Returns:
        tzinfo for the platform zone
    """
    name = os.environ.get("TZ", "").lstrip(":")
    if name:
        try:
            return resolve_timezone(name)
        except ValueError:
            pass
    local = datetime.now().astimezone().tzinfo
    return local if local is not None else UTC
