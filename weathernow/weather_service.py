# ABOUTME: Async client functions for the Open-Meteo geocoding and forecast endpoints.
# ABOUTME: Turns place-name searches and current-conditions replies into typed models.

import httpx

from weathernow.models import CandidateLocation, CurrentWeather

GEOCODING_URL = "https://geocoding-api.open-meteo.com/v1/search"
FORECAST_URL = "https://api.open-meteo.com/v1/forecast"


async def search_locations(client: httpx.AsyncClient, name: str, count: int) -> list[CandidateLocation]:
    """Look up at most `count` places matching `name` using the Open-Meteo geocoding API."""
    resp = await client.get(
        GEOCODING_URL,
        params={"name": name, "count": count, "language": "en", "format": "json"},
    )
    resp.raise_for_status()
    data = resp.json()
    if not isinstance(data, dict):
        raise ValueError("Unexpected geocoding response shape")

    results = data.get("results")
    if results is None:
        return []
    if not isinstance(results, list):
        raise ValueError("Unexpected geocoding response shape")
    return [CandidateLocation.model_validate(r) for r in results[:count]]


async def get_current_weather(client: httpx.AsyncClient, latitude: float, longitude: float) -> CurrentWeather | None:
    """Fetch current conditions in the location's local time zone.

    Returns None when the response carries no current_weather object.
    """
    resp = await client.get(
        FORECAST_URL,
        params={
            "latitude": latitude,
            "longitude": longitude,
            "current_weather": "true",
            "timezone": "auto",
        },
    )
    resp.raise_for_status()
    data = resp.json()
    if not isinstance(data, dict):
        raise ValueError("Unexpected forecast response shape")

    raw = data.get("current_weather")
    if not raw:
        return None
    return CurrentWeather.model_validate(raw)
