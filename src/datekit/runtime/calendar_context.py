"""Calendar context for explicit, thread-safe calendar operations.

Bundles a locale, a time zone and a calendar system so that every date
operation states which rules it runs under, without global state.

Architecture:
    - CalendarContext: Immutable (locale, time zone, calendar) container
    - Week rules (first weekday, minimal days in the first week) come from
      Babel's CLDR locale data
    - Calendar arithmetic delegates to datekit.core.arithmetic
      (stdlib datetime + dateutil.relativedelta)
    - Formatting delegates to Babel (CLDR patterns)

Design Principles:
    - Explicit over implicit (locale, zone and calendar always visible)
    - Immutable by default (frozen dataclass)
    - Thread-safe (no shared mutable state outside the RLock-guarded cache)

Python 3.13+. Uses Babel for i18n.
"""

import logging
from collections import OrderedDict
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta, tzinfo
from threading import RLock
from typing import ClassVar, Literal

from babel import Locale, UnknownLocaleError
from babel import dates as babel_dates

from datekit.constants import (
    DEFAULT_CALENDAR,
    DEFAULT_LOCALE,
    MAX_CONTEXT_CACHE_SIZE,
    NANOSECONDS_PER_MICROSECOND,
    SUPPORTED_CALENDARS,
)
from datekit.core import arithmetic
from datekit.core.fields import COUNTABLE_FIELDS, MINIMAL_FIELDS, is_finer
from datekit.diagnostics import DateParseError, ErrorTemplate, FormattingError
from datekit.duration import ComponentMap, DateDifference, days, from_instants
from datekit.enums import FieldKind, Weekday
from datekit.locale_utils import (
    get_babel_locale,
    get_system_timezone,
    normalize_locale,
    resolve_timezone,
)
from datekit.parsing import parse_datetime
from datekit.syntax import DateFormat

from .collection import DatesCollection
from .config import CalendarDefaults
from .relative import RelativeDateFormat

__all__ = ["CalendarContext"]

logger = logging.getLogger(__name__)

type DateStyle = Literal["short", "medium", "long", "full"]

# Pattern used by name_of() per field. Nanosecond, timezone and calendar
# are handled separately.
_NAME_PATTERNS: dict[FieldKind, str] = {
    FieldKind.ERA: "GGGG",
    FieldKind.YEAR: "yyyy",
    FieldKind.QUARTER: "QQQQ",
    FieldKind.MONTH: "MMMM",
    FieldKind.WEEK_OF_YEAR: "w",
    FieldKind.WEEK_OF_MONTH: "W",
    FieldKind.DAY: "dd",
    FieldKind.WEEKDAY: "EEEE",
    FieldKind.WEEKDAY_ORDINAL: "EEEE",
    FieldKind.HOUR: "HH",
    FieldKind.MINUTE: "mm",
    FieldKind.SECOND: "ss",
    FieldKind.YEAR_FOR_WEEK_OF_YEAR: "Y",
    FieldKind.TIMEZONE: "zzzz",
}


def _zone_key(zone: tzinfo) -> str:
    """Stable cache key for a tzinfo (ZoneInfo key, or its str())."""
    return str(getattr(zone, "key", None) or zone)


@dataclass(frozen=True, slots=True)
class CalendarContext:
    """Immutable calendar configuration for date operations.

    Use CalendarContext.create() (lenient) or create_or_raise() (strict) to
    construct instances; both validate the locale, zone and calendar.

    Cache Management:
        Instances created by create() are cached (LRU) and shared:
        - CalendarContext.clear_cache(): Clear all cached instances
        - CalendarContext.cache_size(): Get current cache size
        - CalendarContext.cache_info(): Get detailed cache statistics

    Instants:
        Naive datetimes passed to any operation are interpreted as wall-clock
        time in the context's zone; aware datetimes are converted to it.
        Returned datetimes are always aware.

    Examples:
        >>> ctx = CalendarContext.create("en-US", "America/New_York")
        >>> ctx.first_weekday  # Sunday (0 = Monday)
        6
        >>> ctx.format(ctx.date(2024, 3, 5), "EEEE, MMMM d")
        'Tuesday, March 5'

        >>> ctx = CalendarContext.create("xx-INVALID", "UTC")
        >>> ctx.is_fallback  # Unknown locale fell back to en_US
        True
    """

    _cache: ClassVar[OrderedDict[tuple[str, str, str], "CalendarContext"]] = OrderedDict()
    _cache_lock: ClassVar[RLock] = RLock()

    locale_code: str
    timezone: tzinfo
    calendar: str
    _babel_locale: Locale
    is_fallback: bool = False

    # ------------------------------------------------------------------
    # Cache management
    # ------------------------------------------------------------------

    @classmethod
    def clear_cache(cls) -> None:
        """Clear the context cache. Thread-safe via RLock."""
        with cls._cache_lock:
            cls._cache.clear()

    @classmethod
    def cache_size(cls) -> int:
        """Get current number of cached CalendarContext instances."""
        with cls._cache_lock:
            return len(cls._cache)

    @classmethod
    def cache_info(cls) -> dict[str, int | tuple[tuple[str, str, str], ...]]:
        """Get detailed cache statistics.

        Returns:
            Dictionary with cache statistics:
            - size: Current number of cached instances
            - max_size: Maximum cache size
            - keys: Tuple of (locale, zone, calendar) keys (LRU order)
        """
        with cls._cache_lock:
            return {
                "size": len(cls._cache),
                "max_size": MAX_CONTEXT_CACHE_SIZE,
                "keys": tuple(cls._cache.keys()),
            }

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    @classmethod
    def create(
        cls,
        locale: str | None = None,
        timezone: str | tzinfo | None = None,
        calendar: str | None = None,
        *,
        defaults: CalendarDefaults | None = None,
    ) -> "CalendarContext":
        """Create CalendarContext with graceful fallback for invalid settings.

        Unknown locales fall back to en_US, unknown zones to UTC and
        unsupported calendars to gregorian; each fallback logs a warning and
        sets ``is_fallback``. This method always succeeds; use
        create_or_raise() for strict validation.

        Args:
            locale: BCP 47 locale identifier (e.g., 'en-US', 'lv-LV')
            timezone: IANA zone name or tzinfo
            calendar: Calendar identifier
            defaults: Injected defaults used for arguments left as None

        Returns:
            CalendarContext instance (cached per normalized settings)
        """
        settings = defaults or CalendarDefaults()
        locale_code = settings.resolve_locale(locale)
        zone_spec = settings.resolve_timezone(timezone)
        calendar_name = settings.resolve_calendar(calendar).lower()

        used_fallback = False
        if zone_spec is None:
            zone = get_system_timezone()
        elif isinstance(zone_spec, tzinfo):
            zone = zone_spec
        else:
            try:
                zone = resolve_timezone(zone_spec)
            except ValueError as e:
                logger.warning("%s. Falling back to UTC", e)
                zone = UTC
                used_fallback = True

        if calendar_name not in SUPPORTED_CALENDARS:
            logger.warning(
                "Unsupported calendar '%s'. Falling back to %s", calendar_name, DEFAULT_CALENDAR
            )
            calendar_name = DEFAULT_CALENDAR
            used_fallback = True

        # Normalized key so "en-US" and "en_US" share an entry
        cache_key = (normalize_locale(locale_code), _zone_key(zone), calendar_name)

        with cls._cache_lock:
            if cache_key in cls._cache:
                cls._cache.move_to_end(cache_key)
                return cls._cache[cache_key]

        try:
            babel_locale = get_babel_locale(locale_code)
        except UnknownLocaleError as e:
            logger.warning(
                "Unknown locale '%s': %s. Falling back to %s", locale_code, e, DEFAULT_LOCALE
            )
            babel_locale = get_babel_locale(DEFAULT_LOCALE)
            used_fallback = True
        except ValueError as e:
            logger.warning(
                "Invalid locale format '%s': %s. Falling back to %s", locale_code, e, DEFAULT_LOCALE
            )
            babel_locale = get_babel_locale(DEFAULT_LOCALE)
            used_fallback = True

        ctx = cls(
            locale_code=locale_code,
            timezone=zone,
            calendar=calendar_name,
            _babel_locale=babel_locale,
            is_fallback=used_fallback,
        )

        with cls._cache_lock:
            if cache_key in cls._cache:
                return cls._cache[cache_key]
            if len(cls._cache) >= MAX_CONTEXT_CACHE_SIZE:
                cls._cache.popitem(last=False)
            cls._cache[cache_key] = ctx
            return ctx

    @classmethod
    def create_or_raise(
        cls,
        locale: str | None = None,
        timezone: str | tzinfo | None = None,
        calendar: str | None = None,
        *,
        defaults: CalendarDefaults | None = None,
    ) -> "CalendarContext":
        """Create CalendarContext or raise on validation failure.

        Not cached. Use this in tests or when silent fallback is not
        acceptable.

        Raises:
            ValueError: If the locale, zone or calendar is invalid or unknown
        """
        settings = defaults or CalendarDefaults()
        locale_code = settings.resolve_locale(locale)
        zone_spec = settings.resolve_timezone(timezone)
        calendar_name = settings.resolve_calendar(calendar).lower()

        if calendar_name not in SUPPORTED_CALENDARS:
            raise ValueError(str(ErrorTemplate.calendar_unsupported(calendar_name)))

        if zone_spec is None:
            zone = get_system_timezone()
        elif isinstance(zone_spec, tzinfo):
            zone = zone_spec
        else:
            try:
                zone = resolve_timezone(zone_spec)
            except ValueError:
                raise ValueError(str(ErrorTemplate.timezone_unknown(zone_spec))) from None

        try:
            babel_locale = get_babel_locale(locale_code)
        except UnknownLocaleError as e:
            msg = f"{ErrorTemplate.locale_unknown(locale_code)}: {e}"
            raise ValueError(msg) from None
        except ValueError as e:
            msg = f"Invalid locale format '{locale_code}': {e}"
            raise ValueError(msg) from None

        return cls(
            locale_code=locale_code,
            timezone=zone,
            calendar=calendar_name,
            _babel_locale=babel_locale,
        )

    # ------------------------------------------------------------------
    # Locale data
    # ------------------------------------------------------------------

    @property
    def babel_locale(self) -> Locale:
        """Pre-validated Babel Locale for this context."""
        return self._babel_locale

    @property
    def first_weekday(self) -> int:
        """First day of the week per CLDR (0 = Monday ... 6 = Sunday)."""
        return int(self._babel_locale.first_week_day)

    @property
    def min_week_days(self) -> int:
        """Minimal days in the first week of a year per CLDR."""
        return int(self._babel_locale.min_week_days)

    def _week_rules(self) -> dict[str, int]:
        return {"first_weekday": self.first_weekday, "min_week_days": self.min_week_days}

    # ------------------------------------------------------------------
    # Instants
    # ------------------------------------------------------------------

    def localize(self, instant: datetime) -> datetime:
        """Attach (naive) or convert (aware) ``instant`` to the context zone."""
        if instant.tzinfo is None:
            return instant.replace(tzinfo=self.timezone)
        return instant.astimezone(self.timezone)

    def _normalize(self, instant: datetime) -> datetime:
        """Resolve wall-clock results that fall into a DST gap or overlap."""
        return instant.astimezone(UTC).astimezone(self.timezone)

    def now(self) -> datetime:
        """Current instant in the context zone."""
        return datetime.now(self.timezone)

    def today(self) -> datetime:
        """Start of the current day."""
        return self.start_of(self.now(), FieldKind.DAY)

    def yesterday(self) -> datetime:
        """Start of the previous day."""
        return self.add(self.today(), days(-1))

    def tomorrow(self) -> datetime:
        """Start of the next day."""
        return self.add(self.today(), days(1))

    def date(
        self,
        year: int,
        month: int = 1,
        day: int = 1,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
        nanosecond: int = 0,
    ) -> datetime:
        """Build an aware instant from wall-clock fields.

        Nanoseconds are truncated to microseconds.

        Raises:
            ValueError: If the fields do not name a valid Gregorian date/time
        """
        instant = datetime(
            year,
            month,
            day,
            hour,
            minute,
            second,
            nanosecond // NANOSECONDS_PER_MICROSECOND,
            tzinfo=self.timezone,
        )
        return self._normalize(instant)

    # ------------------------------------------------------------------
    # Components
    # ------------------------------------------------------------------

    def component(self, instant: datetime, kind: FieldKind) -> int:
        """Numeric value of one calendar field of ``instant``.

        Weekday is 1 = Sunday ... 7 = Saturday. Week fields follow the
        locale's week rules. Timezone is the UTC offset in seconds. Era is 1
        (Anno Domini; datetime cannot represent earlier years).

        Raises:
            ValueError: For FieldKind.CALENDAR, which has no numeric value
        """
        local = self.localize(instant)
        rules = self._week_rules()
        match FieldKind(kind):
            case FieldKind.ERA:
                return 1
            case FieldKind.YEAR:
                return local.year
            case FieldKind.QUARTER:
                return (local.month - 1) // 3 + 1
            case FieldKind.MONTH:
                return local.month
            case FieldKind.DAY:
                return local.day
            case FieldKind.WEEKDAY:
                return int(Weekday.from_python(local.weekday()))
            case FieldKind.WEEKDAY_ORDINAL:
                return (local.day - 1) // 7 + 1
            case FieldKind.HOUR:
                return local.hour
            case FieldKind.MINUTE:
                return local.minute
            case FieldKind.SECOND:
                return local.second
            case FieldKind.NANOSECOND:
                return local.microsecond * NANOSECONDS_PER_MICROSECOND
            case FieldKind.YEAR_FOR_WEEK_OF_YEAR:
                return arithmetic.week_year(local, **rules)
            case FieldKind.WEEK_OF_YEAR:
                first_week = arithmetic.week_year_start(
                    arithmetic.week_year(local, **rules), **rules
                )
                return (local.date() - first_week.date()).days // 7 + 1
            case FieldKind.WEEK_OF_MONTH:
                first_of_month = local.date().replace(day=1)
                offset = (first_of_month.weekday() - self.first_weekday) % 7
                first_week_counts = 7 - offset >= self.min_week_days
                return (local.day - 1 + offset) // 7 + (1 if first_week_counts else 0)
            case FieldKind.TIMEZONE:
                offset_delta = local.utcoffset() or timedelta(0)
                return int(offset_delta.total_seconds())
            case _:
                msg = f"'{kind}' has no numeric value"
                raise ValueError(msg)

    def components(
        self,
        instant: datetime,
        kinds: Iterable[FieldKind] = MINIMAL_FIELDS,
    ) -> dict[FieldKind, int]:
        """Values of several fields of ``instant``."""
        return {FieldKind(kind): self.component(instant, kind) for kind in kinds}

    def matches(
        self,
        instant: datetime,
        components: Mapping[FieldKind, int] | ComponentMap,
    ) -> bool:
        """True if every given field of ``instant`` has the given value.

        Example:
            >>> ctx.matches(ctx.date(2024, 12, 25), {FieldKind.MONTH: 12, FieldKind.DAY: 25})
            True
        """
        values = components.magnitudes if isinstance(components, ComponentMap) else components
        return all(self.component(instant, kind) == value for kind, value in values.items())

    # ------------------------------------------------------------------
    # Periods
    # ------------------------------------------------------------------

    def start_of(self, instant: datetime, kind: FieldKind) -> datetime:
        """First instant of the ``kind`` period containing ``instant``."""
        local = self.localize(instant)
        return self._normalize(arithmetic.start_of(local, kind, **self._week_rules()))

    def end_of(self, instant: datetime, kind: FieldKind) -> datetime:
        """Last microsecond of the ``kind`` period containing ``instant``."""
        local = self.localize(instant)
        return self._normalize(arithmetic.end_of(local, kind, **self._week_rules()))

    def is_in_same(self, kind: FieldKind, first: datetime, second: datetime) -> bool:
        """True if both instants fall into the same ``kind`` period."""
        return self.start_of(first, kind) == self.start_of(second, kind)

    def is_current(self, kind: FieldKind, instant: datetime) -> bool:
        """True if ``instant`` falls into the current ``kind`` period."""
        return self.is_in_same(kind, instant, self.now())

    def is_today(self, instant: datetime) -> bool:
        return self.is_in_same(FieldKind.DAY, instant, self.today())

    def is_yesterday(self, instant: datetime) -> bool:
        return self.is_in_same(FieldKind.DAY, instant, self.yesterday())

    def is_tomorrow(self, instant: datetime) -> bool:
        return self.is_in_same(FieldKind.DAY, instant, self.tomorrow())

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def add(self, instant: datetime, difference: DateDifference | timedelta) -> datetime:
        """Shift ``instant`` by ``difference``.

        Calendar fields move the wall clock in the context zone; clock
        fields and elapsed differences add absolute time.
        """
        local = self.localize(instant)
        return self._normalize(local + difference)

    def number_of(self, kind: FieldKind, start: datetime, end: datetime) -> int:
        """Number of ``kind`` boundaries between ``start`` and ``end``.

        Example:
            >>> ctx.number_of(FieldKind.DAY, ctx.date(2024, 1, 1, 23), ctx.date(2024, 1, 2, 1))
            1
        """
        return arithmetic.count_between(
            kind, self.localize(start), self.localize(end), **self._week_rules()
        )

    def difference(
        self,
        start: datetime,
        end: datetime,
        kinds: Iterable[FieldKind] = COUNTABLE_FIELDS,
    ) -> ComponentMap:
        """Boundary counts from ``start`` to ``end`` for each requested kind."""
        pair = from_instants(self.localize(start), self.localize(end))
        return pair.to_components(kinds, **self._week_rules())

    def ordinality(self, smaller: FieldKind, larger: FieldKind, instant: datetime) -> int:
        """1-based position of ``instant``'s ``smaller`` unit within ``larger``.

        Example:
            >>> ctx.ordinality(FieldKind.DAY, FieldKind.YEAR, ctx.date(2024, 2, 1))
            32

        Raises:
            ValueError: If ``smaller`` is not finer than ``larger``
        """
        if not is_finer(smaller, larger):
            msg = f"'{smaller}' is not a subdivision of '{larger}'"
            raise ValueError(msg)
        period_start = self.start_of(instant, larger)
        return self.number_of(smaller, period_start, instant) + 1

    def each(
        self,
        start: datetime,
        end: datetime,
        kind: FieldKind,
        step: int = 1,
        *,
        inclusive: bool = False,
    ) -> DatesCollection:
        """Instants from ``start`` toward ``end`` stepped by ``step`` ``kind`` units.

        ``end`` is excluded unless ``inclusive``. A negative ``step`` walks
        backwards and expects ``end`` before ``start``.

        Raises:
            ValueError: If ``step`` is zero or ``kind`` is not an amount of time
        """
        kind = FieldKind(kind)
        if kind not in COUNTABLE_FIELDS:
            msg = f"Cannot step by '{kind}'"
            raise ValueError(msg)
        if step == 0:
            msg = "step must be non-zero"
            raise ValueError(msg)
        first = self.localize(start)
        last = self.localize(end)

        def within(instant: datetime) -> bool:
            if step > 0:
                return instant <= last if inclusive else instant < last
            return instant >= last if inclusive else instant > last

        def element(position: int) -> datetime:
            return self.add(first, ComponentMap({kind: position * step}))

        # Boundary count is a close estimate; settle on the exact length
        count = max(0, abs(self.number_of(kind, first, last)) // abs(step))
        while count > 0 and not within(element(count - 1)):
            count -= 1
        while within(element(count)):
            count += 1
        return DatesCollection(first, count, kind, step, self)

    # ------------------------------------------------------------------
    # Formatting
    # ------------------------------------------------------------------

    def format(self, instant: datetime, pattern: DateFormat | str) -> str:
        """Format ``instant`` with a CLDR pattern.

        Raises:
            FormattingError: If Babel cannot render the pattern. The error
                carries the ISO 8601 form as fallback_value.
        """
        local = self.localize(instant)
        pattern_text = str(pattern)
        try:
            return str(
                babel_dates.format_datetime(
                    local,
                    format=pattern_text,
                    tzinfo=self.timezone,
                    locale=self._babel_locale,
                )
            )
        except (ValueError, OverflowError, AttributeError, KeyError, LookupError) as e:
            diagnostic = ErrorTemplate.formatting_failed(local.isoformat(), pattern_text, str(e))
            raise FormattingError(diagnostic, fallback_value=local.isoformat()) from e

    def format_style(
        self,
        instant: datetime,
        date_style: DateStyle | None = "medium",
        time_style: DateStyle | None = None,
    ) -> str:
        """Format ``instant`` with the locale's CLDR date and/or time style.

        Date and time are combined with the locale's dateTimeFormat pattern.

        Raises:
            FormattingError: If Babel cannot render the value
            ValueError: If both styles are None
        """
        if date_style is None and time_style is None:
            msg = "At least one of date_style and time_style is required"
            raise ValueError(msg)
        local = self.localize(instant)
        try:
            if time_style is None:
                return str(
                    babel_dates.format_date(local, format=date_style, locale=self._babel_locale)
                )
            time_str = babel_dates.format_time(
                local, format=time_style, tzinfo=self.timezone, locale=self._babel_locale
            )
            if date_style is None:
                return str(time_str)
            date_str = babel_dates.format_date(local, format=date_style, locale=self._babel_locale)
            # CLDR dateTimeFormat uses {0} for time and {1} for date
            datetime_pattern = (
                self._babel_locale.datetime_formats.get(date_style)
                or self._babel_locale.datetime_formats.get("medium")
                or "{1} {0}"
            )
            return str(datetime_pattern).format(time_str, date_str)
        except (ValueError, OverflowError, AttributeError, KeyError) as e:
            style = f"{date_style}/{time_style}"
            diagnostic = ErrorTemplate.formatting_failed(local.isoformat(), style, str(e))
            raise FormattingError(diagnostic, fallback_value=local.isoformat()) from e

    def name_of(self, instant: datetime, kind: FieldKind) -> str:
        """Localized display text of one field (e.g. "March", "Tuesday").

        Nanoseconds render as a plain number and the calendar as its
        identifier.
        """
        kind = FieldKind(kind)
        if kind is FieldKind.NANOSECOND:
            return str(self.component(instant, kind))
        if kind is FieldKind.CALENDAR:
            return self.calendar
        return self.format(instant, _NAME_PATTERNS[kind])

    def format_relative(
        self,
        instant: datetime,
        relative_format: RelativeDateFormat,
        relative_to: datetime | None = None,
    ) -> str:
        """Format ``instant`` with the rule of ``relative_format`` that matches
        its distance from ``relative_to`` (default: now)."""
        reference = self.now() if relative_to is None else relative_to
        return relative_format.format(instant, reference, self)

    # ------------------------------------------------------------------
    # Parsing
    # ------------------------------------------------------------------

    def parse(
        self,
        value: str,
        pattern: DateFormat | str,
    ) -> tuple[datetime | None, tuple[DateParseError, ...]]:
        """Parse ``value`` with ``pattern`` in the context zone.

        Never raises; see ``datekit.parsing.parse_datetime``. Parsed
        instants without an offset are placed in the context zone.
        """
        result, errors = parse_datetime(value, pattern, tzinfo=self.timezone)
        if result is not None:
            result = self.localize(result)
        return result, errors
