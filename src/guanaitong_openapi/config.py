"""Configuration management for the Guanaitong open platform client.

The SDK takes its settings as constructor arguments. The CLI builds the same
``Settings`` from environment variables, optionally loaded from a ``.env`` file.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Production endpoint
OPENAPI_PROD_URL = "https://openapi.guanaitong.com"

# Test endpoint
OPENAPI_TEST_URL = "https://openapi.guanaitong.tech"


class Settings(BaseModel):
    """Credentials and endpoint selection for one open platform application."""
    app_id: str = Field(description="Open platform application id")
    app_secret: str = Field(description="Open platform application secret")
    is_prod: bool = Field(default=False, description="Use the production endpoint instead of the test one")
    base_url_override: str = Field(default="", description="Explicit base URL, wins over is_prod")
    timeout: float | None = Field(default=None, description="HTTP timeout in seconds; None keeps the httpx default")

    @property
    def base_url(self) -> str:
        """Resolve the API base URL for this application."""
        if self.base_url_override:
            return self.base_url_override.rstrip("/")
        return OPENAPI_PROD_URL if self.is_prod else OPENAPI_TEST_URL


def _env(*keys: str, default: str = "") -> str:
    """Try multiple env var names, return the first one found."""
    for key in keys:
        val = os.environ.get(key, "")
        if val:
            return val.strip().strip('"')
    return default


def _truthy(value: str) -> bool:
    return value.lower() in ("true", "1", "yes")


def _load_settings() -> Settings:
    """Load settings from environment variables.

    Supports both GAT_OPENAPI_* and the camelCase ``appId``/``appSecret`` names.
    """
    timeout = _env("GAT_OPENAPI_TIMEOUT")
    return Settings(
        app_id=_env("GAT_OPENAPI_APP_ID", "appId"),
        app_secret=_env("GAT_OPENAPI_APP_SECRET", "appSecret"),
        is_prod=_truthy(_env("GAT_OPENAPI_PROD", default="false")),
        base_url_override=_env("GAT_OPENAPI_BASE_URL"),
        timeout=float(timeout) if timeout else None,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load and cache settings for CLI use."""
    env_path = Path.cwd() / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    settings = _load_settings()
    if not settings.app_id or not settings.app_secret:
        raise ValueError(
            "No application credentials configured. "
            "Set GAT_OPENAPI_APP_ID and GAT_OPENAPI_APP_SECRET (or add them to .env)."
        )
    return settings
