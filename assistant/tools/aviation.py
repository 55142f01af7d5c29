"""
assistant.tools.aviation

Real-time aviation data from Aviationstack (AVIATION_STACK_API_KEY).

Functions:
- track_flight(flight_number, api_key): live status with gate/terminal/delay for both ends.
- fetch_route_flights(origin, destination, date, api_key): scheduled flights on a route (no prices).
- search_airports(query, api_key), fetch_airline(code, api_key), fetch_airport_schedule(code, direction, api_key).
"""

from dataclasses import dataclass, field

from dateutil import parser

from assistant.errors import ProviderLookupFailure
from assistant.tools.amadeus import FlightOption
from util.dates import to_iso
from util.http import get_json


PROVIDER = "aviationstack"
BASE_URL = "http://api.aviationstack.com/v1"
WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")


@dataclass
class FlightEndpoint:
    airport: str
    terminal: str
    gate: str
    scheduled_time: str | None
    actual_time: str | None = None
    delay: int | None = None


@dataclass
class FlightStatus:
    flight_number: str
    status: str
    departure: FlightEndpoint
    arrival: FlightEndpoint


@dataclass
class Airport:
    iata: str
    name: str
    city: str | None
    country: str | None
    timezone: str | None
    latitude: float | None
    longitude: float | None


@dataclass
class Airline:
    name: str
    iata: str
    country: str | None
    active: bool
    fleet_size: int | None = None


@dataclass
class ScheduleStop:
    airport: str
    scheduled_time: str | None
    terminal: str | None = None


@dataclass
class ScheduledFlight:
    airline: str
    flight_number: str
    departure: ScheduleStop
    arrival: ScheduleStop
    frequency: list[str] = field(default_factory=list)


def _query(resource, api_key, **params):
    if not api_key:
        raise ProviderLookupFailure(PROVIDER, "AVIATION_STACK_API_KEY is not configured")
    data = get_json(f"{BASE_URL}/{resource}", PROVIDER, params={"access_key": api_key, **params})
    if data.get("error"):
        raise ProviderLookupFailure(PROVIDER, str(data["error"].get("message", data["error"])))
    return data.get("data") or []


def _endpoint(raw):
    return FlightEndpoint(
        airport=raw.get("airport") or "",
        terminal=raw.get("terminal") or "N/A",
        gate=raw.get("gate") or "N/A",
        scheduled_time=raw.get("scheduled"),
        actual_time=raw.get("actual"),
        delay=raw.get("delay"),
    )


def flight_duration(departure, arrival):
    """Format the time between two ISO timestamps as 'Xh Ym'."""
    try:
        delta = parser.isoparse(arrival) - parser.isoparse(departure)
    except (TypeError, ValueError):
        return ""
    minutes = int(delta.total_seconds() // 60)
    return f"{minutes // 60}h {minutes % 60}m"


def parse_frequency(schedule):
    """Weekday names flagged true in a provider schedule object."""
    if not schedule:
        return []
    return [day for day in WEEKDAYS if schedule.get(day) is True]


def track_flight(flight_number, api_key) -> FlightStatus:
    rows = _query("flights", api_key, flight_iata=flight_number.upper())
    if not rows:
        raise ProviderLookupFailure(PROVIDER, f"flight not found: {flight_number}")
    flight = rows[0]
    return FlightStatus(
        flight_number=(flight.get("flight") or {}).get("iata") or flight_number.upper(),
        status=flight.get("flight_status") or "unknown",
        departure=_endpoint(flight.get("departure") or {}),
        arrival=_endpoint(flight.get("arrival") or {}),
    )


def fetch_route_flights(origin, destination, date, api_key) -> list[FlightOption]:
    params = {"dep_iata": origin.upper(), "arr_iata": destination.upper()}
    iso = to_iso(date)
    if iso:
        params["flight_date"] = iso
    rows = _query("flights", api_key, **params)
    if not rows:
        raise ProviderLookupFailure(PROVIDER, f"no flights {origin} -> {destination}")
    flights = []
    for row in rows:
        dep = (row.get("departure") or {}).get("scheduled")
        arr = (row.get("arrival") or {}).get("scheduled")
        flights.append(
            FlightOption(
                price=None,
                airline=(row.get("airline") or {}).get("name", ""),
                departure=dep or "",
                arrival=arr or "",
                duration=flight_duration(dep, arr),
            )
        )
    return flights


def search_airports(query, api_key) -> list[Airport]:
    rows = _query("airports", api_key, search=query)
    if not rows:
        raise ProviderLookupFailure(PROVIDER, f"no airports match {query!r}")
    return [
        Airport(
            iata=r.get("iata_code", ""),
            name=r.get("airport_name", ""),
            city=r.get("city_name"),
            country=r.get("country_name"),
            timezone=r.get("timezone"),
            latitude=_float(r.get("latitude")),
            longitude=_float(r.get("longitude")),
        )
        for r in rows
    ]


def fetch_airline(code, api_key) -> Airline:
    rows = _query("airlines", api_key, airline_code=code.upper())
    if not rows:
        raise ProviderLookupFailure(PROVIDER, f"airline not found: {code}")
    airline = rows[0]
    return Airline(
        name=airline.get("airline_name", ""),
        iata=airline.get("iata_code", code.upper()),
        country=airline.get("country_name"),
        active=airline.get("status") == "active",
        fleet_size=_int(airline.get("fleet_size")),
    )


def fetch_airport_schedule(code, direction, api_key) -> list[ScheduledFlight]:
    if direction not in ("departure", "arrival"):
        raise ValueError(f"direction must be 'departure' or 'arrival', got {direction!r}")
    key = "dep_iata" if direction == "departure" else "arr_iata"
    rows = _query("flights", api_key, **{key: code.upper()})
    if not rows:
        raise ProviderLookupFailure(PROVIDER, f"no {direction}s scheduled at {code}")
    schedule = []
    for row in rows:
        dep = row.get("departure") or {}
        arr = row.get("arrival") or {}
        flight = row.get("flight") or {}
        schedule.append(
            ScheduledFlight(
                airline=(row.get("airline") or {}).get("name", ""),
                flight_number=flight.get("iata", ""),
                departure=ScheduleStop(dep.get("airport", ""), dep.get("scheduled"), dep.get("terminal")),
                arrival=ScheduleStop(arr.get("airport", ""), arr.get("scheduled"), arr.get("terminal")),
                frequency=parse_frequency(flight.get("schedule")),
            )
        )
    return schedule


def _float(value):
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _int(value):
    try:
        return int(value)
    except (TypeError, ValueError):
        return None
