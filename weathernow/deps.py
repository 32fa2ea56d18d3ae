# ABOUTME: Dependency container for the lookup controllers using Pydantic BaseModel.
# ABOUTME: Holds the shared httpx.AsyncClient used to call the Open-Meteo APIs.

import httpx
from pydantic import BaseModel, ConfigDict

from weathernow.config import Settings

USER_AGENT = "weathernow/0.1"


class WeatherDeps(BaseModel):
    """Dependencies shared by every session's controller."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    http_client: httpx.AsyncClient
    settings: Settings = Settings()


def create_http_client(settings: Settings | None = None) -> httpx.AsyncClient:
    """Create an httpx client with the configured timeout.

    No retry transport: a failed lookup is terminal and the user resubmits.
    """
    settings = settings or Settings()
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout),
        headers={"User-Agent": USER_AGENT},
    )
