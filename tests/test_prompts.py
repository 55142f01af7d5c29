import json

from assistant.prompts import TRAVEL_DATA_PREFIX, serialize_bundle, travel_data_message
from assistant.tools.places import Place
from assistant.tools.weather import CurrentWeather, WeatherReport


def test_bundle_of_dataclasses_serializes_to_json():
    report = WeatherReport(city="Tokyo", current=CurrentWeather(18.0, 17.0, 60, "clear sky", 3.0, 4.0, 10000))
    bundle = {"current_weather": report, "places": [Place("Senso-ji", 4.6, "Asakusa", "temple")]}
    data = json.loads(serialize_bundle(bundle))
    assert data["current_weather"]["current"]["conditions"] == "clear sky"
    assert data["places"][0] == {"name": "Senso-ji", "rating": 4.6, "address": "Asakusa", "type": "temple", "photos": []}


def test_travel_data_message_prefix():
    assert travel_data_message({"places": []}) == TRAVEL_DATA_PREFIX + '{"places": []}'
