"""Timezone helpers for audit timestamps and push payload clocks."""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone, tzinfo
from functools import lru_cache
from typing import Final

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from app.config import get_settings

_DEFAULT_TIMEZONE: Final[str] = "UTC"
_OFFSET_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^(?:UTC|GMT)(?P<sign>[+-])(?P<hours>\d{1,2})(?::?(?P<minutes>\d{2}))?$",
    re.IGNORECASE,
)


@lru_cache(maxsize=1)
def get_app_timezone() -> tzinfo:
    """Return the timezone audit records are expressed in.

    ``APP_TIMEZONE`` accepts IANA names (``America/Lima``) and fixed offsets
    (``UTC-05:00``). Anything else resolves to UTC.
    """

    tz_name = (get_settings().app_timezone or "").strip() or _DEFAULT_TIMEZONE
    try:
        return ZoneInfo(tz_name)
    except ZoneInfoNotFoundError:
        return _offset_timezone(tz_name) or timezone.utc


def now_in_app_timezone() -> datetime:
    return datetime.now(tz=get_app_timezone())


def now_in_app_naive_datetime() -> datetime:
    """Column default for ``DATETIME`` fields, which store naive values."""

    return now_in_app_timezone().replace(tzinfo=None)


def epoch_millis(value: datetime | None = None) -> int:
    """Return ``value`` (or now) as milliseconds since the Unix epoch.

    Push payloads carry this value as their ``timestamp`` entry.
    """

    moment = ensure_app_timezone(value) if value is not None else now_in_app_timezone()
    return int(moment.timestamp() * 1000)


def ensure_app_timezone(value: datetime | None) -> datetime | None:
    """Attach or convert ``value`` to the app timezone.

    Naive values read back from the database are assumed to already be in
    the app timezone.
    """

    if value is None:
        return None
    tz = get_app_timezone()
    if value.tzinfo is None:
        return value.replace(tzinfo=tz)
    return value.astimezone(tz)


def ensure_app_naive_datetime(value: datetime | None) -> datetime | None:
    """Return ``value`` in the app timezone with ``tzinfo`` stripped for storage."""

    localized = ensure_app_timezone(value)
    return localized.replace(tzinfo=None) if localized is not None else None


def _offset_timezone(tz_name: str) -> tzinfo | None:
    match = _OFFSET_PATTERN.match(tz_name)
    if not match:
        return None
    offset = timedelta(
        hours=int(match.group("hours")), minutes=int(match.group("minutes") or 0)
    )
    return timezone(-offset if match.group("sign") == "-" else offset)
