import logging
import sys
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Discord
    DISCORD_TOKEN: str | None = None
    DISCORD_API_BASE_URL: str = "https://discord.com/api/v10"
    DISCORD_CDN_BASE_URL: str = "https://cdn.discordapp.com"

    # Avatar download
    AVATAR_FETCH_TIMEOUT: float = 10.0

    # App config
    DEBUG: bool = False

    @field_validator("DISCORD_API_BASE_URL", "DISCORD_CDN_BASE_URL")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        if not v.startswith(("https://", "http://")):
            raise ValueError("base URL must be a valid HTTP(S) URL")
        return v.rstrip("/")

    @field_validator("AVATAR_FETCH_TIMEOUT")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("AVATAR_FETCH_TIMEOUT must be positive")
        return v


def configure_logging(debug: bool = False) -> None:
    """Configure logging for the command line tool.

    Logs go to stderr so stdout only carries the update confirmation.
    """
    log_level = logging.DEBUG if debug else logging.WARNING
    log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=log_level,
        format=log_format,
        handlers=[logging.StreamHandler(sys.stderr)],
    )

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


@lru_cache
def get_settings() -> Settings:
    settings = Settings()
    configure_logging(settings.DEBUG)
    logger.info("Settings loaded successfully")
    logger.debug("Discord API URL: %s", settings.DISCORD_API_BASE_URL)
    logger.debug("Token present: %s", settings.DISCORD_TOKEN is not None)
    return settings
