# ABOUTME: Input controller owning one session's UI state and its transitions.
# ABOUTME: Drives typeahead suggestions and submit lookups, discarding stale responses.

import asyncio
import logging

import httpx

from weathernow.lookup import EMPTY_INPUT_MESSAGE, FETCH_FAILED_MESSAGE, WeatherLookupError, resolve_weather
from weathernow.models import AppState, LookupState, LookupStatus
from weathernow.suggestions import fetch_suggestions

logger = logging.getLogger(__name__)

MIN_SUGGESTION_LENGTH = 3


class WeatherController:
    """Owns the query, suggestion list and lookup state for one user.

    State only changes through on_text_change, on_suggestion_pick and
    on_submit. Each suggestion request and each lookup is numbered; a response
    whose number is no longer the latest is dropped, so an out-of-order reply
    never overwrites a fresher one.
    """

    def __init__(self, http_client: httpx.AsyncClient):
        self.http_client = http_client
        self.state = AppState()
        self._suggestion_seq = 0
        self._lookup_seq = 0

    def on_text_change(self, new_text: str) -> asyncio.Task | None:
        """Store the text verbatim, clear error and suggestions, and maybe start a suggestion fetch.

        Returns the background task when one was started so callers can await it.
        """
        self.state.query = new_text
        self._clear_suggestions()
        if self.state.lookup.status is LookupStatus.ERROR:
            self.state.lookup = LookupState.idle()

        if len(new_text) < MIN_SUGGESTION_LENGTH:
            return None
        return asyncio.create_task(self._load_suggestions(new_text, self._suggestion_seq))

    def on_suggestion_pick(self, name: str) -> None:
        """Replace the query with the picked name. Does not submit."""
        self.state.query = name
        self._clear_suggestions()

    async def on_submit(self) -> LookupState:
        """Validate the query and run a lookup; returns the outcome of this attempt."""
        self._lookup_seq += 1
        seq = self._lookup_seq
        self._clear_suggestions()

        city = self.state.query.strip()
        if not city:
            self.state.lookup = LookupState.failed(EMPTY_INPUT_MESSAGE)
            return self.state.lookup
        return await self._run_lookup(city, seq)

    async def _run_lookup(self, city: str, seq: int) -> LookupState:
        self.state.lookup = LookupState.loading()
        outcome = LookupState.failed(FETCH_FAILED_MESSAGE)
        try:
            weather = await resolve_weather(self.http_client, city)
            outcome = LookupState.succeeded(weather)
        except WeatherLookupError as e:
            outcome = LookupState.failed(e.message)
        except Exception:
            logger.exception("Lookup for %r failed unexpectedly", city)
        finally:
            # Runs on cancellation too, so loading never sticks.
            if seq == self._lookup_seq:
                self.state.lookup = outcome
            else:
                logger.debug("Dropping superseded lookup result for %r", city)
        return outcome

    async def _load_suggestions(self, text: str, seq: int) -> None:
        suggestions = await fetch_suggestions(self.http_client, text)
        if seq != self._suggestion_seq:
            logger.debug("Dropping stale suggestions for %r", text)
            return
        self.state.suggestions = suggestions

    def _clear_suggestions(self) -> None:
        self._suggestion_seq += 1
        self.state.suggestions = []
