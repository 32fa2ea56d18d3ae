# ABOUTME: Pure mapping from lookup state and WMO weather codes to what the page shows.
# ABOUTME: Holds the code description table, the background theme ranges, and the view model.

from types import MappingProxyType
from typing import NamedTuple

from weathernow.models import AppState, ResolvedWeather


class WeatherDescription(NamedTuple):
    text: str
    icon: str


WEATHER_DESCRIPTIONS = MappingProxyType(
    {
        0: WeatherDescription("Clear sky", "☀️"),
        1: WeatherDescription("Mainly clear", "🌤️"),
        2: WeatherDescription("Partly cloudy", "⛅"),
        3: WeatherDescription("Overcast", "☁️"),
        45: WeatherDescription("Fog", "🌫️"),
        48: WeatherDescription("Depositing rime fog", "🌫️"),
        51: WeatherDescription("Light drizzle", "🌦️"),
        53: WeatherDescription("Moderate drizzle", "🌦️"),
        55: WeatherDescription("Dense drizzle", "🌧️"),
        61: WeatherDescription("Slight rain", "🌧️"),
        63: WeatherDescription("Moderate rain", "🌧️"),
        65: WeatherDescription("Heavy rain", "🌧️"),
        71: WeatherDescription("Slight snow fall", "🌨️"),
        73: WeatherDescription("Moderate snow fall", "❄️"),
        75: WeatherDescription("Heavy snow fall", "❄️"),
        95: WeatherDescription("Thunderstorm", "⛈️"),
    }
)

DEFAULT_THEME = "clear"

# Inclusive (low, high, theme); high=None means unbounded. 68-70 intentionally unmatched.
_THEME_RANGES = (
    (0, 3, "clear"),
    (45, 48, "fog"),
    (51, 67, "rain"),
    (71, 77, "snow"),
    (95, None, "storm"),
)


def describe(code: int | None) -> WeatherDescription | None:
    """Return the description and icon for a weather code, or None if unmapped."""
    if code is None:
        return None
    return WEATHER_DESCRIPTIONS.get(code)


def theme_for(code: int | None) -> str:
    """Pick the background theme for a weather code; no lookup yet means the default."""
    if code is None:
        return DEFAULT_THEME
    for low, high, theme in _THEME_RANGES:
        if code >= low and (high is None or code <= high):
            return theme
    return DEFAULT_THEME


def render_view(state: AppState) -> dict:
    """Build the JSON view model the page paints."""
    weather = state.weather
    return {
        "query": state.query,
        "suggestions": [
            {"id": s.id, "name": s.name, "label": _place_label(s.name, s.country)} for s in state.suggestions
        ],
        "loading": state.loading,
        "error": state.error,
        "theme": theme_for(weather.weather_code if weather else None),
        "weather": _render_weather(weather) if weather else None,
    }


def _render_weather(weather: ResolvedWeather) -> dict:
    description = describe(weather.weather_code)
    return {
        "heading": _place_label(weather.city_name, weather.country_name),
        "icon": description.icon if description else "",
        "description": description.text if description else "",
        "temperature": f"{weather.temperature:g}°C",
        "wind": f"{weather.windspeed_kmh:g} km/h ({weather.winddirection_deg}°)",
        "updated": weather.observed_at_iso,
    }


def _place_label(name: str, country: str | None) -> str:
    return f"{name}, {country}" if country else name
