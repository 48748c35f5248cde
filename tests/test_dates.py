"""Tests for date coercion helpers."""

import time
from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfoNotFoundError

from ghl_mcp import dates
from ghl_mcp.dates import (
    convert_date_to_milliseconds,
    convert_to_milliseconds,
    iso_z,
    local_timezone_name,
    parse_datetime,
)

# 2025-10-20T09:00:00Z
MILLIS = 1760950800000


class TestParseDatetime:
    def test_z_suffix(self):
        assert parse_datetime("2025-10-20T09:00:00Z") == datetime(2025, 10, 20, 9, tzinfo=timezone.utc)

    def test_naive_is_utc(self):
        assert parse_datetime("2025-10-20T09:00:00").tzinfo == timezone.utc

    def test_offset_is_kept(self):
        parsed = parse_datetime("2025-10-20T11:00:00+02:00")
        assert parsed.utcoffset() == timedelta(hours=2)

    def test_invalid(self):
        assert parse_datetime("next tuesday") is None
        assert parse_datetime("   ") is None


class TestConvertToMilliseconds:
    """Calendar event bounds become epoch-millisecond strings."""

    def test_digits_pass_through(self):
        assert convert_to_milliseconds("1760950800000") == "1760950800000"

    def test_int(self):
        assert convert_to_milliseconds(MILLIS) == str(MILLIS)

    def test_iso(self):
        assert convert_to_milliseconds("2025-10-20T09:00:00Z") == str(MILLIS)

    def test_unparseable_is_returned(self):
        assert convert_to_milliseconds("soon") == "soon"

    def test_none(self):
        assert convert_to_milliseconds(None) is None


class TestConvertDateToMilliseconds:
    """Free-slot bounds become epoch-millisecond ints."""

    def test_date_only(self):
        assert convert_date_to_milliseconds("2025-10-20") == 1760918400000

    def test_digits(self):
        assert convert_date_to_milliseconds("1760950800000") == MILLIS

    def test_fallback_is_now(self):
        before = int(time.time() * 1000)
        value = convert_date_to_milliseconds("garbage")
        assert before <= value <= int(time.time() * 1000)


class TestIsoZ:
    def test_converts_to_utc_with_millis(self):
        dt = datetime(2025, 10, 20, 11, 0, 0, 123456, tzinfo=timezone(timedelta(hours=2)))
        assert iso_z(dt) == "2025-10-20T09:00:00.123Z"


class TestLocalTimezoneName:
    """Tests for local_timezone_name."""

    def test_tz_variable(self, monkeypatch):
        monkeypatch.setenv("TZ", "America/New_York")
        monkeypatch.setattr(dates, "ZoneInfo", lambda name: None)

        assert local_timezone_name(datetime.now(timezone.utc)) == "America/New_York"

    def test_localtime_symlink(self, monkeypatch):
        monkeypatch.delenv("TZ", raising=False)
        monkeypatch.setattr(dates, "Path", lambda path: _Missing())
        monkeypatch.setattr(dates.os.path, "realpath", lambda path: "/usr/share/zoneinfo/Europe/Berlin")
        monkeypatch.setattr(dates, "ZoneInfo", lambda name: None)

        assert local_timezone_name(datetime.now(timezone.utc)) == "Europe/Berlin"

    def test_falls_back_to_abbreviation(self, monkeypatch):
        def unknown(name):
            raise ZoneInfoNotFoundError(name)

        monkeypatch.setenv("TZ", "Nowhere/Special")
        monkeypatch.setattr(dates, "Path", lambda path: _Missing())
        monkeypatch.setattr(dates.os.path, "realpath", lambda path: "/etc/localtime")
        monkeypatch.setattr(dates, "ZoneInfo", unknown)

        assert local_timezone_name(datetime(2025, 10, 20, tzinfo=timezone.utc)) == "UTC"


class _Missing:
    def read_text(self):
        raise FileNotFoundError("/etc/timezone")
