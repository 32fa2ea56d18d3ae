# ABOUTME: Typeahead suggestions for the city input.
# ABOUTME: Wraps geocoding search with a 5-result cap and never raises.

import logging

import httpx

from weathernow.models import CandidateLocation
from weathernow.weather_service import search_locations

logger = logging.getLogger(__name__)

MAX_SUGGESTIONS = 5


async def fetch_suggestions(client: httpx.AsyncClient, partial_name: str) -> list[CandidateLocation]:
    """Return up to five candidate places for a partial city name.

    Suggestions are a background convenience, so any failure degrades to an
    empty list and is only logged.
    """
    try:
        return await search_locations(client, partial_name, MAX_SUGGESTIONS)
    except (httpx.HTTPError, ValueError) as e:
        logger.warning("Suggestion lookup failed for %r: %s", partial_name, e)
        return []
