# ABOUTME: Tests for the two-stage lookup and the typeahead suggestion provider.
# ABOUTME: Covers every user-facing error path with mocked Open-Meteo responses.

import httpx
import pytest
from mock_http import make_response, mock_client

from weathernow.lookup import (
    CITY_NOT_FOUND_MESSAGE,
    FETCH_FAILED_MESSAGE,
    WEATHER_UNAVAILABLE_MESSAGE,
    WeatherLookupError,
    resolve_weather,
)
from weathernow.suggestions import MAX_SUGGESTIONS, fetch_suggestions


class TestResolveWeather:
    @pytest.mark.asyncio
    async def test_resolves_london(self, london_geocode, london_weather):
        """A successful geocode followed by a weather call yields a ResolvedWeather.

        Implementation: Mocks geocoding (one match) then the forecast API.
        Passing implies: City, country and current conditions are assembled from both calls.
        """
        client = mock_client(make_response(london_geocode), make_response(london_weather))
        result = await resolve_weather(client, "London")

        assert result.city_name == "London"
        assert result.country_name == "United Kingdom"
        assert result.temperature == 7.4
        assert result.windspeed_kmh == 14.8
        assert result.winddirection_deg == 250
        assert result.weather_code == 3
        assert result.observed_at_iso == "2025-01-15T14:00"

    @pytest.mark.asyncio
    async def test_geocodes_with_single_result_then_uses_its_coordinates(self, london_geocode, london_weather):
        client = mock_client(make_response(london_geocode), make_response(london_weather))
        await resolve_weather(client, "London")

        geo_call, weather_call = client.get.call_args_list
        assert geo_call.kwargs["params"]["count"] == 1
        assert geo_call.kwargs["params"]["name"] == "London"
        assert weather_call.kwargs["params"]["latitude"] == 51.50853
        assert weather_call.kwargs["params"]["longitude"] == -0.12574

    @pytest.mark.asyncio
    async def test_city_not_found_skips_weather_call(self):
        """Zero geocoding results end the lookup before any weather call.

        Implementation: Mocks an empty geocoding response for a nonsense name.
        Passing implies: The not-found message is raised and only one request is made.
        """
        client = mock_client(make_response({"results": []}))
        with pytest.raises(WeatherLookupError) as exc_info:
            await resolve_weather(client, "Zzzzzqx")

        assert exc_info.value.message == CITY_NOT_FOUND_MESSAGE
        assert client.get.call_count == 1

    @pytest.mark.asyncio
    async def test_geocoding_http_error_is_generic(self):
        client = mock_client(make_response({}, status_code=503))
        with pytest.raises(WeatherLookupError) as exc_info:
            await resolve_weather(client, "London")
        assert exc_info.value.message == FETCH_FAILED_MESSAGE
        assert isinstance(exc_info.value.__cause__, httpx.HTTPStatusError)

    @pytest.mark.asyncio
    async def test_geocoding_network_error_is_generic(self):
        client = mock_client(httpx.ConnectTimeout("timed out"))
        with pytest.raises(WeatherLookupError) as exc_info:
            await resolve_weather(client, "London")
        assert exc_info.value.message == FETCH_FAILED_MESSAGE

    @pytest.mark.asyncio
    async def test_weather_http_error_is_indistinguishable(self, london_geocode):
        """A failed weather call reports the same message as a failed geocode.

        Implementation: Geocoding succeeds, forecast returns 500.
        Passing implies: Users cannot tell which collaborator failed.
        """
        client = mock_client(make_response(london_geocode), make_response({}, status_code=500))
        with pytest.raises(WeatherLookupError) as exc_info:
            await resolve_weather(client, "London")
        assert exc_info.value.message == FETCH_FAILED_MESSAGE

    @pytest.mark.asyncio
    async def test_missing_current_weather(self, london_geocode):
        client = mock_client(make_response(london_geocode), make_response({"latitude": 51.5}))
        with pytest.raises(WeatherLookupError) as exc_info:
            await resolve_weather(client, "London")
        assert exc_info.value.message == WEATHER_UNAVAILABLE_MESSAGE

    @pytest.mark.asyncio
    async def test_malformed_weather_payload_is_generic(self, london_geocode):
        bad = {"current_weather": {"temperature": "warm"}}
        client = mock_client(make_response(london_geocode), make_response(bad))
        with pytest.raises(WeatherLookupError) as exc_info:
            await resolve_weather(client, "London")
        assert exc_info.value.message == FETCH_FAILED_MESSAGE


class TestFetchSuggestions:
    @pytest.mark.asyncio
    async def test_requests_five_matches(self, london_geocode):
        client = mock_client(make_response(london_geocode))
        result = await fetch_suggestions(client, "Lon")

        assert [s.name for s in result] == ["London"]
        assert client.get.call_args.kwargs["params"]["count"] == MAX_SUGGESTIONS == 5

    @pytest.mark.asyncio
    async def test_zero_matches_is_empty_list(self):
        client = mock_client(make_response({}))
        assert await fetch_suggestions(client, "Qqq") == []

    @pytest.mark.asyncio
    async def test_failures_degrade_to_empty_list(self, caplog):
        """Suggestion failures are logged, never raised.

        Implementation: Feeds a network error, an HTTP error, and a malformed body.
        Passing implies: The typeahead can never surface a user-visible error.
        """
        client = mock_client(
            httpx.ConnectError("down"),
            make_response({}, status_code=502),
            make_response({"results": [{"bogus": True}]}),
        )
        for _ in range(3):
            assert await fetch_suggestions(client, "Lon") == []
        assert "Suggestion lookup failed" in caplog.text


class TestMalformedGeocodingResults:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("results", [5, {"a": 1}])
    async def test_suggestions_stay_empty(self, results, caplog):
        """A non-list 'results' field degrades suggestions to an empty list.

        Implementation: Mocks a geocoding reply whose results is a number or an object.
        Passing implies: The typeahead logs the failure instead of raising.
        """
        client = mock_client(make_response({"results": results}))
        assert await fetch_suggestions(client, "Lon") == []
        assert "Suggestion lookup failed" in caplog.text

    @pytest.mark.asyncio
    async def test_lookup_reports_generic_message(self):
        client = mock_client(make_response({"results": 5}))
        with pytest.raises(WeatherLookupError) as exc_info:
            await resolve_weather(client, "London")
        assert exc_info.value.message == FETCH_FAILED_MESSAGE
        assert isinstance(exc_info.value.__cause__, ValueError)
        assert client.get.call_count == 1

    @pytest.mark.asyncio
    async def test_best_match_without_id_resolves(self, london_weather):
        """The submit lookup only needs coordinates, name and country from the match.

        Implementation: Geocoding returns a match with no 'id' field.
        Passing implies: The lookup succeeds instead of failing validation.
        """
        match = {"name": "London", "country": "United Kingdom", "latitude": 51.5, "longitude": -0.12}
        client = mock_client(make_response({"results": [match]}), make_response(london_weather))

        result = await resolve_weather(client, "London")

        assert result.city_name == "London"
        assert result.country_name == "United Kingdom"
