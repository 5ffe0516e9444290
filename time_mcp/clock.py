import logging
from datetime import datetime, timezone, tzinfo
from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError, available_timezones

from .errors import InvalidTimezoneError

__all__ = ["current_time", "format_local", "format_utc", "resolve_timezone"]

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def _canonical_keys() -> dict[str, str]:
    return {key.lower(): key for key in available_timezones()}


def _load_zone(name: str) -> ZoneInfo | None:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, OSError) as err:
        # ValueError: malformed keys such as absolute paths; OSError: directories like "America"
        logger.debug("Failed to load timezone %r: %s", name, err)
        return None


def resolve_timezone(name: str) -> tzinfo:
    """Look up an IANA timezone by name, ignoring case.

    Raises:
        InvalidTimezoneError: If the name is not a known zone.
    """
    zone = _load_zone(name)
    if zone is None:
        canonical = _canonical_keys().get(name.lower())
        if canonical is not None:
            zone = _load_zone(canonical)
    if zone is None:
        raise InvalidTimezoneError(name)
    return zone


def _millis(moment: datetime) -> int:
    return moment.microsecond // 1000


def format_utc(moment: datetime) -> str:
    """Render an instant as ``YYYY-MM-DDTHH:mm:ss.mmmZ``."""
    utc = moment.astimezone(timezone.utc)
    return f"{format_local(utc)}Z"


def format_local(moment: datetime) -> str:
    """Render wall-clock fields as ``YYYY-MM-DDTHH:mm:ss.mmm`` without an offset."""
    return (
        f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d}"
        f"T{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d}.{_millis(moment):03d}"
    )


def current_time(tz_name: str | None = None, now: datetime | None = None) -> str:
    """Return the current time as an ISO 8601 string.

    Without a timezone the result is UTC and ends with ``Z``. With a timezone
    the result is the wall-clock time in that zone and carries no offset.

    Parameters:
        tz_name: Optional IANA timezone identifier, e.g. ``Asia/Kolkata``
        now: Instant to render instead of the current time. Naive values are taken as UTC.

    Raises:
        InvalidTimezoneError: If ``tz_name`` is not a known zone.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    if not tz_name:
        return format_utc(now)

    zone = resolve_timezone(tz_name)
    return format_local(now.astimezone(zone))
