"""
assistant.tools.places

Points of interest from the Google Places text search (GOOGLE_PLACES_API_KEY).
"""

from dataclasses import dataclass, field

from assistant.errors import ProviderLookupFailure
from util.http import get_json


PROVIDER = "google_places"
TEXT_SEARCH_URL = "https://maps.googleapis.com/maps/api/place/textsearch/json"
PHOTO_URL = "https://maps.googleapis.com/maps/api/place/photo"


@dataclass
class Place:
    name: str
    rating: float | None
    address: str
    type: str | None
    photos: list[str] = field(default_factory=list)


def photo_url(reference, api_key, max_width=400):
    return f"{PHOTO_URL}?maxwidth={max_width}&photoreference={reference}&key={api_key}"


def fetch_places(city, api_key) -> list[Place]:
    """Top attractions for a city."""
    if not api_key:
        raise ProviderLookupFailure(PROVIDER, "GOOGLE_PLACES_API_KEY is not configured")
    data = get_json(TEXT_SEARCH_URL, PROVIDER, params={"query": f"attractions in {city}", "key": api_key})
    results = data.get("results") or []
    if not results:
        raise ProviderLookupFailure(PROVIDER, f"no places found for {city}")
    return [
        Place(
            name=r.get("name", ""),
            rating=r.get("rating"),
            address=r.get("formatted_address", ""),
            type=(r.get("types") or [None])[0],
            photos=[photo_url(p["photo_reference"], api_key) for p in r.get("photos") or [] if p.get("photo_reference")],
        )
        for r in results
    ]
