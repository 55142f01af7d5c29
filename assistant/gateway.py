"""
assistant/gateway.py

TravelGateway: one method per travel-data capability, with credentials taken
from Settings. Holds no state between calls. Every method returns normalized
dataclasses from assistant.tools or raises ProviderLookupFailure.
"""

import logging

from assistant.errors import ProviderLookupFailure
from assistant.tools import amadeus, aviation, exchange, places, weather
from util.config import Settings


logger = logging.getLogger(__name__)


class TravelGateway:
    def __init__(self, settings: Settings):
        self.settings = settings

    def detailed_weather(self, city):
        return weather.fetch_detailed_weather(city, self.settings.weather_api_key)

    def historical_weather(self, city, start, end):
        return weather.fetch_historical_weather(city, start, end, self.settings.weather_api_key)

    def flights(self, origin, destination, date):
        return amadeus.fetch_flights(origin, destination, date, self.settings.amadeus_api_key)

    def search_flights(self, origin, destination, date):
        """Amadeus offers, falling back to Aviationstack schedules (unpriced)."""
        try:
            return self.flights(origin, destination, date)
        except ProviderLookupFailure as exc:
            logger.info("Amadeus flight search failed (%s); falling back to Aviationstack", exc)
        return aviation.fetch_route_flights(origin, destination, date, self.settings.aviation_stack_api_key)

    def hotels(self, city, check_in, check_out):
        return amadeus.fetch_hotels(city, check_in, check_out, self.settings.amadeus_api_key)

    def places(self, city):
        return places.fetch_places(city, self.settings.google_places_api_key)

    def exchange_rate(self, base, target):
        return exchange.fetch_exchange_rate(base, target, self.settings.exchange_api_key)

    def track_flight(self, flight_number):
        return aviation.track_flight(flight_number, self.settings.aviation_stack_api_key)

    def search_airports(self, query):
        return aviation.search_airports(query, self.settings.aviation_stack_api_key)

    def airline_info(self, code):
        return aviation.fetch_airline(code, self.settings.aviation_stack_api_key)

    def airport_schedule(self, code, direction="departure"):
        return aviation.fetch_airport_schedule(code, direction, self.settings.aviation_stack_api_key)
