"""Local wall-clock input → UTC timestamps the altitude backend accepts."""

import re
from datetime import datetime, timedelta

from pytz import UnknownTimeZoneError, timezone, utc
from pytz.exceptions import InvalidTimeError

LOCAL_FORMAT = "%Y-%m-%dT%H:%M:%S"

# datetime-local fields drop ":SS" when the seconds are zero
_LOCAL_RE = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}(:\d{2})?$")


class InvalidInput(Exception):
    """Form input rejected before any request is sent."""


class InvalidTimestamp(InvalidInput):
    """Local time string that is not a real calendar date/time."""


def _format_utc(dt: datetime) -> str:
    # isoformat keeps 4-digit years, strftime("%Y") does not on every platform
    return dt.astimezone(utc).replace(tzinfo=None).isoformat(timespec="seconds") + "Z"


def normalize_local_time(value: str, tz_name: str | None = None) -> str:
    """Convert a local time string to a UTC absolute timestamp.

    The same literal yields different instants depending on the zone: that is
    the point, the operator types wall-clock time and the backend wants an
    instant.

    Args:
        value: "YYYY-MM-DDTHH:MM:SS" (or "YYYY-MM-DDTHH:MM") in local time.
        tz_name: IANA zone name. None means the zone of this process.

    Returns:
        "YYYY-MM-DDTHH:MM:SSZ", whole seconds.

    Raises:
        InvalidTimestamp: Malformed string, impossible date, unknown zone, or a
            wall-clock time skipped or repeated by a DST transition.
    """
    text = value.strip() if isinstance(value, str) else ""
    match = _LOCAL_RE.match(text)
    if match is None:
        raise InvalidTimestamp(f"Invalid date/time format: {value!r}")
    fmt = LOCAL_FORMAT if match.group(1) else "%Y-%m-%dT%H:%M"
    try:
        dt = datetime.strptime(text, fmt)
    except ValueError as e:
        raise InvalidTimestamp(f"Invalid date/time: {value!r} ({e})") from e

    try:
        if tz_name is None:
            # naive astimezone() reads the process zone (TZ env / system setting)
            return _format_utc(dt.astimezone())
        local_tz = timezone(tz_name)
        return _format_utc(local_tz.localize(dt, is_dst=None))
    except UnknownTimeZoneError as e:
        raise InvalidTimestamp(f"Unknown time zone: {tz_name}") from e
    except InvalidTimeError as e:
        raise InvalidTimestamp(
            f"Local time {value!r} does not exist or is ambiguous in {tz_name}"
        ) from e
    except (OverflowError, ValueError, OSError) as e:
        # Local-zone conversion at the edges of datetime's range (year 1 / 9999)
        raise InvalidTimestamp(f"Date/time out of range: {value!r}") from e


def parse_absolute(value: str) -> datetime:
    """Parse an absolute ISO-8601 timestamp back to an aware UTC datetime.

    Naive input is taken as UTC.
    """
    dt = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=utc)
    return dt.astimezone(utc)


def default_window(
    now: datetime | None = None, hours: int = 6, tz_name: str | None = None
) -> tuple[str, str]:
    """Form defaults: the last `hours` hours ending now, as local time strings."""
    if now is None:
        now = datetime.now(timezone(tz_name)) if tz_name else datetime.now()
    end = now.replace(microsecond=0)
    start = end - timedelta(hours=hours)
    return start.strftime(LOCAL_FORMAT), end.strftime(LOCAL_FORMAT)
