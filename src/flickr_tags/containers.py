"""Dependency container wiring for the Flickr tags."""

from collections.abc import Callable
from dataclasses import dataclass, field

from flickr_tags.adapters.flickr_client import (
    FlickrClient,
    HttpxFlickrClient,
    UnconfiguredFlickrClient,
)
from flickr_tags.app_logging import configure_logging
from flickr_tags.config import Settings, load_settings
from flickr_tags.services.cache import Cache, FileCache, InMemoryCache
from flickr_tags.services.photos import FlickrPhotoService, MediaSource
from flickr_tags.services.rendering import DEFAULT_PLAYER, PlayerConfig


@dataclass
class AppContainer:
    """Holds the collaborators shared by all tag renders."""

    settings: Settings | None
    flickr_client: FlickrClient
    media_source: MediaSource
    cache: Cache
    close_resources: Callable[[], None]
    player: PlayerConfig = field(default=DEFAULT_PLAYER)


def build_container(
    settings: Settings | None = None, site_config: dict[str, object] | None = None
) -> AppContainer:
    """Create the default dependency container.

    Missing credentials do not fail here; the first Flickr call raises
    ConfigurationError instead.
    """
    resolved_settings = settings or load_settings(site_config)
    if resolved_settings is not None:
        configure_logging(resolved_settings.flickr_log_level)

    flickr_client: FlickrClient
    if resolved_settings is None:
        flickr_client = UnconfiguredFlickrClient()
    else:
        flickr_client = HttpxFlickrClient.create(
            api_key=resolved_settings.flickr_api_key,
            shared_secret=resolved_settings.flickr_api_secret,
            base_url=resolved_settings.flickr_base_url,
        )

    cache: Cache
    if resolved_settings is not None and resolved_settings.flickr_cache_dir:
        cache = FileCache(resolved_settings.flickr_cache_dir)
    else:
        cache = InMemoryCache()

    media_source = FlickrPhotoService(client=flickr_client, cache=cache)

    def close_resources() -> None:
        flickr_client.close()

    return AppContainer(
        settings=resolved_settings,
        flickr_client=flickr_client,
        media_source=media_source,
        cache=cache,
        close_resources=close_resources,
    )
