"""
assistant/enrichment.py

Live travel data for the model context.

`ready_lookups(info, gateway)` lists the gateway calls whose inputs are known;
`gather_lookups` runs them in parallel with per-call failure isolation;
`enrich` ties the two together and returns a bundle dict or None.

Bundle keys: current_weather, historical_weather, flights, hotels, places.

Flights come from `gateway.flights` (priced Amadeus offers only). The unpriced
Aviationstack fallback in `gateway.search_flights` serves the /api/flights route.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable

from assistant.errors import EnrichmentFailure, ProviderLookupFailure
from assistant.session import TravelInfo
from util.dates import shift_year_back


logger = logging.getLogger(__name__)

Lookup = tuple[str, Callable[[], Any]]


def ready_lookups(info: TravelInfo, gateway) -> list[Lookup]:
    """Gateway calls that have every input they need, keyed by bundle field."""
    if not info.destination:
        return []
    dest = info.destination
    dates = info.dates
    lookups: list[Lookup] = [("current_weather", lambda: gateway.detailed_weather(dest))]
    if dates and dates.start and dates.end:
        # Same calendar window last year; a date without a year is passed through as-is.
        hist_start = shift_year_back(dates.start)
        hist_end = shift_year_back(dates.end)
        lookups.append(("historical_weather", lambda: gateway.historical_weather(dest, hist_start, hist_end)))
    if info.source and dates and dates.start:
        source = info.source
        lookups.append(("flights", lambda: gateway.flights(source, dest, dates.start)))
    if dates and dates.start and dates.end:
        lookups.append(("hotels", lambda: gateway.hotels(dest, dates.start, dates.end)))
    lookups.append(("places", lambda: gateway.places(dest)))
    return lookups


def gather_lookups(lookups: list[Lookup]) -> dict[str, Any]:
    """Run lookups concurrently. A failing lookup is logged and left out of the result.

    Raises EnrichmentFailure if there was at least one lookup and all of them failed.
    """
    if not lookups:
        return {}
    results: dict[str, Any] = {}
    failures: dict[str, Exception] = {}
    with ThreadPoolExecutor(max_workers=len(lookups), thread_name_prefix="enrich") as pool:
        futures = {name: pool.submit(fn) for name, fn in lookups}
        for name, future in futures.items():
            try:
                results[name] = future.result()
            except ProviderLookupFailure as exc:
                logger.warning("Lookup %s failed: %s", name, exc)
                failures[name] = exc
            except Exception as exc:
                logger.exception("Lookup %s raised unexpectedly", name)
                failures[name] = exc
    if not results:
        raise EnrichmentFailure(failures)
    return results


def enrich(info: TravelInfo, gateway) -> dict[str, Any] | None:
    """Bundle of live travel data for the known trip details, or None.

    None when no destination is known (no calls are made) or when every lookup failed.
    """
    lookups = ready_lookups(info, gateway)
    if not lookups:
        return None
    try:
        bundle = gather_lookups(lookups)
    except EnrichmentFailure as exc:
        logger.warning("Continuing without travel data: %s", exc)
        return None
    logger.info("Enriched turn with %s", ", ".join(bundle))
    return bundle
