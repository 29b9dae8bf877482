"""Runtime settings and completion-client construction.

Settings are read from the environment (and an optional ``.env`` file)
through pydantic-settings. ``get_client()`` is the single place that
turns them into an ``AsyncOpenAI`` client.

Usage:
    from swarm_core.config import settings, get_client

    client = get_client()                 # uses OPENAI_API_KEY
    client = get_client(api_key="sk-...")  # explicit key wins
"""

import logging
from typing import Optional

from openai import AsyncOpenAI
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class ConfigurationError(RuntimeError):
    """Raised when the orchestrator cannot be configured (e.g. no API key)."""


class Settings(BaseSettings):
    OPENAI_API_KEY: Optional[str] = None
    OPENAI_BASE_URL: Optional[str] = None
    DEFAULT_MODEL: str = "gpt-4o"
    DEFAULT_MAX_TURNS: Optional[int] = None
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()


def get_client(
    api_key: Optional[str] = None,
    base_url: Optional[str] = None,
    config: Optional[Settings] = None,
) -> AsyncOpenAI:
    """Build the async completion client.

    Args:
        api_key: Explicit key; falls back to ``OPENAI_API_KEY``.
        base_url: Explicit endpoint; falls back to ``OPENAI_BASE_URL``.
        config: Settings to read from (defaults to the module settings).

    Returns:
        A configured ``AsyncOpenAI`` client.

    Raises:
        ConfigurationError: If no API key is available.
    """
    config = config or settings
    key = api_key or config.OPENAI_API_KEY
    if not key:
        raise ConfigurationError(
            "OpenAI API key not found. Pass api_key to Swarm() "
            "or set the OPENAI_API_KEY environment variable."
        )

    url = base_url or config.OPENAI_BASE_URL
    if url:
        return AsyncOpenAI(api_key=key, base_url=url)
    return AsyncOpenAI(api_key=key)


def configure_logging(level: Optional[str] = None) -> None:
    """Install a basic stream handler for scripts and examples."""
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.debug("Logging configured")
