from datetime import date, datetime, timezone

from util.dates import from_unix, iter_days, noon_epoch, shift_year_back, to_iso


def test_to_iso_reads_ordinal_dates():
    assert to_iso("12th jan 2025") == "2025-01-12"
    assert to_iso("3 march 2026") == "2026-03-03"


def test_to_iso_unparseable():
    assert to_iso("") is None
    assert to_iso("whenever") is None


def test_shift_year_back_replaces_year_token():
    now = datetime(2026, 10, 17, tzinfo=timezone.utc)
    assert shift_year_back("12th jan 2027", now=now) == "12th jan 2025"


def test_shift_year_back_without_year_is_unchanged():
    assert shift_year_back("12th jan") == "12th jan"


def test_iter_days_inclusive_and_capped():
    days = list(iter_days(date(2025, 1, 1), date(2025, 1, 3)))
    assert days == [date(2025, 1, 1), date(2025, 1, 2), date(2025, 1, 3)]
    assert len(list(iter_days(date(2025, 1, 1), date(2025, 3, 1)))) == 14
    assert list(iter_days(date(2025, 1, 3), date(2025, 1, 1))) == []


def test_epoch_helpers():
    assert noon_epoch(date(1970, 1, 2)) == 86400 + 12 * 3600
    assert from_unix(0) == "1970-01-01T00:00:00+00:00"
    assert from_unix(None) is None
