"""Application configuration."""

import logging
import os

from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from flickr_tags.errors import ConfigurationError

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

_logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Flickr settings loaded from environment variables."""

    flickr_api_key: str
    flickr_api_secret: str
    flickr_base_url: str = "https://api.flickr.com/services/rest/"
    flickr_cache_dir: str | None = None
    flickr_log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def load_settings(overrides: dict[str, object] | None = None) -> Settings | None:
    """Load settings, logging instead of raising when credentials are missing.

    ``overrides`` typically comes from the host site's configuration, e.g. a
    ``flickr`` section with ``api_key`` and ``shared_secret``. Environment
    variables take precedence over it.
    """
    values: dict[str, object] = {}
    if overrides:
        if "api_key" in overrides:
            values["flickr_api_key"] = overrides["api_key"]
        if "shared_secret" in overrides:
            values["flickr_api_secret"] = overrides["shared_secret"]
        if "cache_dir" in overrides:
            values["flickr_cache_dir"] = overrides["cache_dir"]
        if "log_level" in overrides:
            values["flickr_log_level"] = overrides["log_level"]
    for field_name in list(values):
        if os.getenv(field_name.upper()):
            values.pop(field_name)
    try:
        return Settings(**values)
    except ValidationError as exc:
        missing = sorted(str(error["loc"][0]).upper() for error in exc.errors())
        _logger.error(
            "Flickr tags could not be configured, missing %s",
            ", ".join(missing),
        )
        return None


def missing_configuration() -> ConfigurationError:
    """Return the error raised when the API is used without credentials."""
    return ConfigurationError(
        "Flickr credentials are not configured; set FLICKR_API_KEY and "
        "FLICKR_API_SECRET"
    )
