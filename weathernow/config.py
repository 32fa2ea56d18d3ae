# ABOUTME: Runtime settings for the WeatherNow server, read from the environment.
# ABOUTME: Loads a .env file if present; every setting has a working default.

import os

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()


class Settings(BaseModel):
    """Server and HTTP client settings."""

    http_timeout: float = 10.0
    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "INFO"
    max_sessions: int = 1000

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from WEATHERNOW_* environment variables, falling back to defaults."""
        defaults = cls()
        return cls(
            http_timeout=os.environ.get("WEATHERNOW_HTTP_TIMEOUT", defaults.http_timeout),
            host=os.environ.get("WEATHERNOW_HOST", defaults.host),
            port=os.environ.get("WEATHERNOW_PORT", defaults.port),
            log_level=os.environ.get("WEATHERNOW_LOG_LEVEL", defaults.log_level).upper(),
            max_sessions=os.environ.get("WEATHERNOW_MAX_SESSIONS", defaults.max_sessions),
        )
