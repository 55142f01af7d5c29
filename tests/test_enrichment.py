import threading
from datetime import datetime, timezone

from conftest import FakeGateway

from assistant.enrichment import enrich, gather_lookups, ready_lookups
from assistant.session import DateRange, TravelInfo


LAST_YEAR = str(datetime.now(timezone.utc).year - 1)


def test_no_destination_means_no_bundle_and_no_calls(gateway):
    info = TravelInfo(source="paris", dates=DateRange("1 jun 2026", "8 jun 2026"), budget=500)
    assert enrich(info, gateway) is None
    assert gateway.calls == []


def test_destination_only_fetches_weather_and_places(gateway):
    bundle = enrich(TravelInfo(destination="tokyo"), gateway)
    assert set(bundle) == {"current_weather", "places"}
    assert gateway.called() == {"detailed_weather", "places"}


def test_full_trip_fetches_everything(gateway):
    info = TravelInfo(destination="tokyo", source="paris", dates=DateRange("12th jan 2027", "20th jan 2027"))
    bundle = enrich(info, gateway)
    assert set(bundle) == {"current_weather", "historical_weather", "flights", "hotels", "places"}
    assert bundle["flights"]["args"] == ["paris", "tokyo", "12th jan 2027"]
    assert bundle["hotels"]["args"] == ["tokyo", "12th jan 2027", "20th jan 2027"]
    assert bundle["historical_weather"]["args"] == ["tokyo", f"12th jan {LAST_YEAR}", f"20th jan {LAST_YEAR}"]


def test_historical_dates_without_year_are_passed_through(gateway):
    info = TravelInfo(destination="rome", dates=DateRange("3 march", "9 march"))
    bundle = enrich(info, gateway)
    assert bundle["historical_weather"]["args"] == ["rome", "3 march", "9 march"]


def test_flights_need_source_and_start_date(gateway):
    info = TravelInfo(destination="rome", source="oslo")
    names = [name for name, _ in ready_lookups(info, gateway)]
    assert "flights" not in names
    assert "hotels" not in names


def test_one_failure_does_not_drop_other_results():
    gateway = FakeGateway(failing={"detailed_weather"})
    bundle = enrich(TravelInfo(destination="tokyo"), gateway)
    assert set(bundle) == {"places"}
    assert gateway.called() == {"detailed_weather", "places"}


def test_all_failures_mean_no_bundle():
    gateway = FakeGateway(failing={"detailed_weather", "places"})
    assert enrich(TravelInfo(destination="tokyo"), gateway) is None


def test_unexpected_errors_are_isolated_too():
    def boom():
        raise RuntimeError("bad payload")

    results = gather_lookups([("a", boom), ("b", lambda: 42)])
    assert results == {"b": 42}


def test_lookups_run_concurrently():
    # Each lookup waits for the other; a sequential runner would time out.
    barrier = threading.Barrier(2, timeout=5)

    def lookup():
        barrier.wait()
        return "ok"

    assert gather_lookups([("x", lookup), ("y", lookup)]) == {"x": "ok", "y": "ok"}
