# ABOUTME: Pydantic BaseModels for Open-Meteo payloads and the lookup UI state.
# ABOUTME: Defines locations, current conditions, the resolved result, and the state record.

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class CandidateLocation(BaseModel):
    """One geocoding match offered as a suggestion or used as the best match."""

    id: int | None = None
    name: str
    country: str | None = None
    latitude: float
    longitude: float


class CurrentWeather(BaseModel):
    """The current_weather object from the Open-Meteo forecast endpoint."""

    temperature: float
    windspeed: float
    winddirection: int = Field(ge=0, le=360)
    weathercode: int
    time: str


class ResolvedWeather(BaseModel):
    """Result of one successful lookup: current conditions plus the matched place."""

    model_config = ConfigDict(frozen=True)

    temperature: float
    windspeed_kmh: float
    winddirection_deg: int = Field(ge=0, le=360)
    weather_code: int
    observed_at_iso: str
    city_name: str
    country_name: str | None = None


class LookupStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    ERROR = "error"
    SUCCESS = "success"


class LookupState(BaseModel):
    """Exactly one of idle, loading, error(message) or success(weather)."""

    model_config = ConfigDict(frozen=True)

    status: LookupStatus = LookupStatus.IDLE
    message: str | None = None
    weather: ResolvedWeather | None = None

    @model_validator(mode="after")
    def _check_payload_matches_status(self) -> "LookupState":
        if self.status is LookupStatus.ERROR:
            if not self.message or self.weather is not None:
                raise ValueError("error state needs a message and no weather")
        elif self.status is LookupStatus.SUCCESS:
            if self.weather is None or self.message is not None:
                raise ValueError("success state needs weather and no message")
        elif self.message is not None or self.weather is not None:
            raise ValueError(f"{self.status.value} state carries no message or weather")
        return self

    @classmethod
    def idle(cls) -> "LookupState":
        return cls(status=LookupStatus.IDLE)

    @classmethod
    def loading(cls) -> "LookupState":
        return cls(status=LookupStatus.LOADING)

    @classmethod
    def failed(cls, message: str) -> "LookupState":
        return cls(status=LookupStatus.ERROR, message=message)

    @classmethod
    def succeeded(cls, weather: ResolvedWeather) -> "LookupState":
        return cls(status=LookupStatus.SUCCESS, weather=weather)


class AppState(BaseModel):
    """The whole UI state for one session: query text, suggestions, lookup outcome."""

    query: str = ""
    suggestions: list[CandidateLocation] = []
    lookup: LookupState = LookupState()

    @property
    def loading(self) -> bool:
        return self.lookup.status is LookupStatus.LOADING

    @property
    def error(self) -> str | None:
        return self.lookup.message

    @property
    def weather(self) -> ResolvedWeather | None:
        return self.lookup.weather
