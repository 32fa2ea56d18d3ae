# ABOUTME: Shared test fixtures for the WeatherNow test suite.
# ABOUTME: Provides canned Open-Meteo payloads for London.

import pytest


@pytest.fixture
def london_geocode() -> dict:
    return {
        "results": [
            {
                "id": 2643743,
                "name": "London",
                "latitude": 51.50853,
                "longitude": -0.12574,
                "country": "United Kingdom",
                "timezone": "Europe/London",
            }
        ]
    }


@pytest.fixture
def london_weather() -> dict:
    return {
        "latitude": 51.5,
        "longitude": -0.12,
        "timezone": "Europe/London",
        "current_weather": {
            "time": "2025-01-15T14:00",
            "interval": 900,
            "temperature": 7.4,
            "windspeed": 14.8,
            "winddirection": 250,
            "is_day": 1,
            "weathercode": 3,
        },
    }
