"""
assistant.tools.amadeus

Flight offers and hotel offers from the Amadeus self-service API.
AMADEUS_API_KEY is sent as a bearer token.
"""

from dataclasses import dataclass, field

from assistant.errors import ProviderLookupFailure
from util.dates import to_iso
from util.http import get_json


PROVIDER = "amadeus"
FLIGHT_OFFERS_URL = "https://test.api.amadeus.com/v2/shopping/flight-offers"
HOTEL_OFFERS_URL = "https://test.api.amadeus.com/v2/shopping/hotel-offers"


@dataclass
class FlightOption:
    price: float | None
    airline: str
    departure: str
    arrival: str
    duration: str


@dataclass
class HotelOption:
    name: str
    price: float | None
    rating: str | None
    location: str
    amenities: list[str] = field(default_factory=list)


def _headers(api_key):
    if not api_key:
        raise ProviderLookupFailure(PROVIDER, "AMADEUS_API_KEY is not configured")
    return {"Authorization": f"Bearer {api_key}", "Accept": "application/json"}


def _iso_or_fail(text):
    iso = to_iso(text)
    if not iso:
        raise ProviderLookupFailure(PROVIDER, f"cannot parse date {text!r}")
    return iso


def _price(value):
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def fetch_flights(origin, destination, date, api_key) -> list[FlightOption]:
    """One-adult flight offers from `origin` to `destination` on `date`."""
    headers = _headers(api_key)
    data = get_json(
        FLIGHT_OFFERS_URL,
        PROVIDER,
        params={
            "originLocationCode": origin.upper(),
            "destinationLocationCode": destination.upper(),
            "departureDate": _iso_or_fail(date),
            "adults": 1,
        },
        headers=headers,
    )
    offers = data.get("data") or []
    if not offers:
        raise ProviderLookupFailure(PROVIDER, f"no flights {origin} -> {destination} on {date}")
    flights = []
    for offer in offers:
        try:
            itinerary = offer["itineraries"][0]
            segments = itinerary["segments"]
            flights.append(
                FlightOption(
                    price=_price(offer["price"]["total"]),
                    airline=(offer.get("validatingAirlineCodes") or [""])[0],
                    departure=segments[0]["departure"]["at"],
                    arrival=segments[-1]["arrival"]["at"],
                    duration=itinerary.get("duration", ""),
                )
            )
        except (KeyError, IndexError, TypeError):
            continue
    if not flights:
        raise ProviderLookupFailure(PROVIDER, "flight offers could not be read")
    return flights


def fetch_hotels(city, check_in, check_out, api_key) -> list[HotelOption]:
    """Hotel offers in `city` between the two dates."""
    headers = _headers(api_key)
    data = get_json(
        HOTEL_OFFERS_URL,
        PROVIDER,
        params={
            "cityCode": city.upper(),
            "checkInDate": _iso_or_fail(check_in),
            "checkOutDate": _iso_or_fail(check_out),
        },
        headers=headers,
    )
    offers = data.get("data") or []
    if not offers:
        raise ProviderLookupFailure(PROVIDER, f"no hotels in {city}")
    hotels = []
    for entry in offers:
        hotel = entry.get("hotel") or {}
        first_offer = (entry.get("offers") or [{}])[0]
        hotels.append(
            HotelOption(
                name=hotel.get("name", ""),
                price=_price((first_offer.get("price") or {}).get("total")),
                rating=hotel.get("rating"),
                location=", ".join((hotel.get("address") or {}).get("lines") or []),
                amenities=hotel.get("amenities") or [],
            )
        )
    return hotels
