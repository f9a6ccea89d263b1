from datetime import datetime, timezone
from typing import Protocol

import pytz


class Clock(Protocol):
    def now(self) -> datetime:
        ...


class SystemClock:
    """Wall clock returning tz-aware UTC datetimes."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


def as_utc(dt: datetime) -> datetime:
    """Return a tz-aware UTC datetime. Naive values are taken to be UTC already."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def parse_dt(value: datetime | str) -> datetime:
    """
    Parse various datetime formats and return a tz-aware UTC datetime.
    Accepted inputs:
    - datetime (naive or tz-aware). Naive assumed UTC.
    - ISO 8601 strings, with or without 'Z' or offsets, with 'T' or space separator.
    - SQL-like strings 'YYYY-MM-DD HH:MM[:SS][.ffffff]'.
    """
    if isinstance(value, datetime):
        dt = value
    else:
        s = value.strip()
        # normalize 'Z' to '+00:00' for fromisoformat
        s_norm = s.replace("Z", "+00:00")
        try:
            dt = datetime.fromisoformat(s_norm)
        except ValueError:
            try:
                s2 = s_norm.replace(" ", "T", 1)
                dt = datetime.fromisoformat(s2)
            except ValueError as e:
                raise ValueError(f"Unsupported datetime format: {value}") from e
    return as_utc(dt)


def to_db_datetime(dt: datetime) -> datetime:
    """Convert to the naive UTC datetime stored in SQL DATETIME columns."""
    return as_utc(dt).replace(tzinfo=None)


def get_timezone(name: str | None):
    """Resolve an IANA zone name (default UTC). Raises ValueError for unknown zones."""
    if not name:
        return pytz.utc
    try:
        return pytz.timezone(name)
    except pytz.UnknownTimeZoneError as e:
        raise ValueError(f"Unknown timezone: {name}") from e


def format_local_date(dt: datetime | None, tz_name: str | None = None) -> str | None:
    """Render a UTC instant as a medium-style calendar date in the given zone, e.g. 'Jan 8, 2024'."""
    if dt is None:
        return None
    local_dt = as_utc(dt).astimezone(get_timezone(tz_name))
    return f"{local_dt.strftime('%b')} {local_dt.day}, {local_dt.year}"
