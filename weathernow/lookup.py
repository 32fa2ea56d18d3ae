# ABOUTME: Two-stage lookup: geocode the city, then fetch its current weather.
# ABOUTME: Maps every failure onto one of the user-facing lookup error messages.

import logging

import httpx

from weathernow.models import ResolvedWeather
from weathernow.weather_service import get_current_weather, search_locations

logger = logging.getLogger(__name__)

EMPTY_INPUT_MESSAGE = "Please enter a city name."
FETCH_FAILED_MESSAGE = "Unable to fetch weather data. Please try again later."
CITY_NOT_FOUND_MESSAGE = "City not found. Try a different name."
WEATHER_UNAVAILABLE_MESSAGE = "Weather data not available for this location."


class WeatherLookupError(Exception):
    """A lookup ended in a user-visible error; `message` is shown as is."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


async def resolve_weather(client: httpx.AsyncClient, city_name: str) -> ResolvedWeather:
    """Resolve a city name to its current weather.

    The weather API takes coordinates only, so the geocoding call must finish
    first. Transport failures on either call are reported with the same
    generic message.

    Raises:
        WeatherLookupError: with one of the *_MESSAGE constants.
    """
    try:
        matches = await search_locations(client, city_name, 1)
    except (httpx.HTTPError, ValueError) as e:
        logger.warning("Geocoding failed for %r: %s", city_name, e)
        raise WeatherLookupError(FETCH_FAILED_MESSAGE) from e
    if not matches:
        raise WeatherLookupError(CITY_NOT_FOUND_MESSAGE)

    best = matches[0]
    try:
        current = await get_current_weather(client, best.latitude, best.longitude)
    except (httpx.HTTPError, ValueError) as e:
        logger.warning("Weather fetch failed for %s (%s, %s): %s", best.name, best.latitude, best.longitude, e)
        raise WeatherLookupError(FETCH_FAILED_MESSAGE) from e
    if current is None:
        raise WeatherLookupError(WEATHER_UNAVAILABLE_MESSAGE)

    return ResolvedWeather(
        temperature=current.temperature,
        windspeed_kmh=current.windspeed,
        winddirection_deg=current.winddirection,
        weather_code=current.weathercode,
        observed_at_iso=current.time,
        city_name=best.name,
        country_name=best.country,
    )
