"""
Application Configuration

Environment variables and constants for the formula API. main.py calls
load_dotenv() before anything reads these, so a local .env file works too.
"""

import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Tuple


DEFAULT_ALLOWED_ORIGINS = (
    # Production frontend
    "https://ber-calculator-client-6j70mopxl-naseems-projects-1f6111c0.vercel.app",
    # Local React dev server
    "http://localhost:3000",
)


def _split_origins(value: str) -> Tuple[str, ...]:
    return tuple(origin.strip() for origin in value.split(",") if origin.strip())


@dataclass(frozen=True)
class Settings:
    """Configuration for the API process."""

    # Server
    host: str = "0.0.0.0"
    port: int = 3001
    log_level: str = "INFO"

    # CORS: exact origins plus one preview-deployment pattern
    allowed_origins: Tuple[str, ...] = field(default=DEFAULT_ALLOWED_ORIGINS)
    preview_project: str = "ber-calculator-client"
    preview_scope: str = "naseems-projects-1f6111c0"
    preview_domain: str = "vercel.app"

    # Erlang-B required-channel search cap
    erlang_b_max_channels: int = 1000

    service_name: str = "telecom-formula-api"
    version: str = "1.0.0"

    @classmethod
    def from_env(cls) -> "Settings":
        """Create settings from environment variables."""
        origins = os.getenv("CORS_ALLOWED_ORIGINS")
        return cls(
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "3001")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            allowed_origins=(
                _split_origins(origins) if origins is not None else DEFAULT_ALLOWED_ORIGINS
            ),
            preview_project=os.getenv("CORS_PREVIEW_PROJECT", "ber-calculator-client"),
            preview_scope=os.getenv("CORS_PREVIEW_SCOPE", "naseems-projects-1f6111c0"),
            preview_domain=os.getenv("CORS_PREVIEW_DOMAIN", "vercel.app"),
            erlang_b_max_channels=int(os.getenv("ERLANG_B_MAX_CHANNELS", "1000")),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Settings for this process, read from the environment once."""
    return Settings.from_env()
