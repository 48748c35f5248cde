"""Date coercion helpers.

Calendar endpoints want epoch milliseconds while agents naturally send ISO
8601 strings. These helpers accept either.
"""

from __future__ import annotations

import os
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

ZONEINFO_DIR = "zoneinfo" + os.sep


def parse_datetime(value: str) -> Optional[datetime]:
    """Parse an ISO 8601 date or datetime string. Returns None if it is not one.

    Naive values are taken as UTC. A trailing ``Z`` is accepted.
    """
    text = value.strip()
    if not text:
        return None
    if text.endswith("Z") or text.endswith("z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def to_millis(dt: datetime) -> int:
    return int(round(dt.timestamp() * 1000))


def convert_to_milliseconds(value: Optional[Union[str, int]]) -> Optional[str]:
    """Coerce a calendar event bound to an epoch-milliseconds string.

    Digits pass through unchanged; ISO strings are converted; anything else is
    returned as-is so the API can report it.
    """
    if value is None:
        return None
    if isinstance(value, int):
        return str(value)
    text = str(value).strip()
    if text.isdigit():
        return text
    parsed = parse_datetime(text)
    if parsed is None:
        return text
    return str(to_millis(parsed))


def convert_date_to_milliseconds(value: Optional[Union[str, int]]) -> int:
    """Coerce a free-slot bound to epoch milliseconds (int).

    Unparseable input falls back to the current time.
    """
    if isinstance(value, int):
        return value
    if value is not None:
        text = str(value).strip()
        if text.isdigit():
            return int(text)
        parsed = parse_datetime(text)
        if parsed is not None:
            return to_millis(parsed)
    return int(time.time() * 1000)


def iso_z(dt: datetime) -> str:
    """Format an aware datetime as UTC ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""
    dt = dt.astimezone(timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"


def utc_now_iso() -> str:
    return iso_z(datetime.now(timezone.utc))


def _is_zone(name: str) -> bool:
    try:
        ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, OSError):
        return False
    return True


def local_timezone_name(dt: datetime) -> str:
    """IANA name of the local time zone (e.g. "America/New_York").

    Looks at ``TZ``, then /etc/timezone, then the /etc/localtime symlink.
    Falls back to the zone abbreviation of ``dt`` when none names a zone.
    """
    candidates = [os.environ.get("TZ", "").lstrip(":")]
    try:
        candidates.append(Path("/etc/timezone").read_text().strip())
    except OSError:
        pass
    localtime = os.path.realpath("/etc/localtime")
    if ZONEINFO_DIR in localtime:
        candidates.append(localtime.split(ZONEINFO_DIR, 1)[1])

    for name in candidates:
        if name and _is_zone(name):
            return name
    return dt.tzname() or "UTC"
