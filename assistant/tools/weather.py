"""
assistant.tools.weather

Weather and geocoding via OpenWeatherMap (WEATHER_API_KEY).

Functions:
- geocode_city(name, api_key): resolve a city name to coordinates.
- fetch_detailed_weather(city, api_key): current conditions, next 24 hours, daily outlook and alerts.
- fetch_historical_weather(city, start, end, api_key): one record per day for a past date range.
"""

from dataclasses import dataclass, field

from assistant.errors import ProviderLookupFailure
from util.dates import from_unix, iter_days, noon_epoch, to_date
from util.http import get_json


PROVIDER = "openweathermap"
GEOCODE_URL = "https://api.openweathermap.org/geo/1.0/direct"
ONECALL_URL = "https://api.openweathermap.org/data/3.0/onecall"
TIMEMACHINE_URL = "https://api.openweathermap.org/data/3.0/onecall/timemachine"


@dataclass
class Geo:
    name: str
    lat: float
    lon: float
    country: str | None = None


@dataclass
class CurrentWeather:
    temperature: float
    feels_like: float
    humidity: int
    conditions: str
    wind_speed: float
    uv_index: float
    visibility: int | None


@dataclass
class HourlyForecast:
    time: str
    temperature: float
    conditions: str
    precipitation_chance: float


@dataclass
class DailyForecast:
    date: str
    temperature_min: float
    temperature_max: float
    conditions: str
    sunrise: str | None
    sunset: str | None
    precipitation_chance: float
    uv_index: float


@dataclass
class WeatherAlert:
    event: str
    description: str
    start: str | None
    end: str | None


@dataclass
class WeatherReport:
    city: str
    current: CurrentWeather
    hourly: list[HourlyForecast] = field(default_factory=list)
    daily: list[DailyForecast] = field(default_factory=list)
    alerts: list[WeatherAlert] = field(default_factory=list)


@dataclass
class HistoricalDay:
    date: str
    temperature_average: float
    temperature_min: float | None
    temperature_max: float | None
    humidity: int | None
    conditions: str
    precipitation: float


def _require_key(api_key):
    if not api_key:
        raise ProviderLookupFailure(PROVIDER, "WEATHER_API_KEY is not configured")


def _describe(entry):
    weather = entry.get("weather") or [{}]
    return weather[0].get("description", "")


def geocode_city(name, api_key):
    """Return `Geo` for a city name. Raises ProviderLookupFailure when nothing matches."""
    _require_key(api_key)
    data = get_json(GEOCODE_URL, PROVIDER, params={"q": name, "limit": 1, "appid": api_key})
    if not data:
        raise ProviderLookupFailure(PROVIDER, f"location not found: {name}")
    top = data[0]
    return Geo(
        name=top.get("name", name),
        lat=float(top["lat"]),
        lon=float(top["lon"]),
        country=top.get("country"),
    )


def fetch_detailed_weather(city, api_key, geo: Geo | None = None) -> WeatherReport:
    """Fetch current, hourly (next 24h), daily and alert data for a city."""
    geo = geo or geocode_city(city, api_key)
    data = get_json(
        ONECALL_URL,
        PROVIDER,
        params={"lat": geo.lat, "lon": geo.lon, "exclude": "minutely", "appid": api_key, "units": "metric"},
    )
    cur = data.get("current")
    if not cur:
        raise ProviderLookupFailure(PROVIDER, f"no current weather for {city}")
    try:
        current = CurrentWeather(
            temperature=cur["temp"],
            feels_like=cur.get("feels_like"),
            humidity=cur.get("humidity"),
            conditions=_describe(cur),
            wind_speed=cur.get("wind_speed"),
            uv_index=cur.get("uvi"),
            visibility=cur.get("visibility"),
        )
        hourly = [
            HourlyForecast(
                time=from_unix(h["dt"]),
                temperature=h["temp"],
                conditions=_describe(h),
                precipitation_chance=round(h.get("pop", 0) * 100),
            )
            for h in (data.get("hourly") or [])[:24]
        ]
        daily = [
            DailyForecast(
                date=from_unix(d["dt"]),
                temperature_min=d["temp"]["min"],
                temperature_max=d["temp"]["max"],
                conditions=_describe(d),
                sunrise=from_unix(d.get("sunrise")),
                sunset=from_unix(d.get("sunset")),
                precipitation_chance=round(d.get("pop", 0) * 100),
                uv_index=d.get("uvi"),
            )
            for d in data.get("daily") or []
        ]
    except (KeyError, TypeError) as exc:
        raise ProviderLookupFailure(PROVIDER, f"unexpected forecast payload: {exc}") from exc
    alerts = [
        WeatherAlert(
            event=a.get("event", ""),
            description=a.get("description", ""),
            start=from_unix(a.get("start")),
            end=from_unix(a.get("end")),
        )
        for a in data.get("alerts") or []
    ]
    return WeatherReport(city=geo.name, current=current, hourly=hourly, daily=daily, alerts=alerts)


def fetch_historical_weather(city, start, end, api_key) -> list[HistoricalDay]:
    """Fetch one historical record per day between `start` and `end` (free-text dates)."""
    _require_key(api_key)
    start_day, end_day = to_date(start), to_date(end)
    if not start_day or not end_day:
        raise ProviderLookupFailure(PROVIDER, f"cannot parse date range {start!r}..{end!r}")
    geo = geocode_city(city, api_key)
    days = []
    for day in iter_days(start_day, end_day):
        data = get_json(
            TIMEMACHINE_URL,
            PROVIDER,
            params={"lat": geo.lat, "lon": geo.lon, "dt": noon_epoch(day), "appid": api_key, "units": "metric"},
        )
        rows = data.get("data") or []
        if not rows:
            continue
        row = rows[0]
        days.append(
            HistoricalDay(
                date=day.isoformat(),
                temperature_average=row.get("temp"),
                temperature_min=row.get("temp_min"),
                temperature_max=row.get("temp_max"),
                humidity=row.get("humidity"),
                conditions=_describe(row),
                precipitation=(row.get("rain") or {}).get("1h", 0),
            )
        )
    if not days:
        raise ProviderLookupFailure(PROVIDER, f"no historical weather for {city}")
    return days
