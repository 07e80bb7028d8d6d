"""Handlers for the flickr_image and flickr_set template tags."""

import logging
from dataclasses import dataclass

from flickr_tags.domain.media import RenderParams, Video
from flickr_tags.domain.sizes import is_known_size
from flickr_tags.errors import InvalidSizeCodeError, TagSyntaxError
from flickr_tags.markup import tokenize
from flickr_tags.services.cache import Cache
from flickr_tags.services.photos import MediaSource
from flickr_tags.services.rendering import (
    DEFAULT_PLAYER,
    PhotoFragment,
    PlayerConfig,
    VideoEmbedFragment,
    VideoPreviewFragment,
    render_set,
)

DEFAULT_TAG_SIZE = "m"
NO_DESCRIPTION = "nodesc"

_logger = logging.getLogger(__name__)


def _arg(args: list[str], index: int) -> str | None:
    """Return a positional argument, treating empty quotes as missing."""
    if index < len(args) and args[index]:
        return args[index]
    return None


@dataclass
class FlickrImageTag:
    """``{% flickr_image PHOTO_ID [SIZE] [CLASS] [DESCRIPTION] %}``.

    Renders a still photo as a captioned figure, or a video as an embedded
    player. The description defaults to the one on Flickr.
    """

    photo_id: str
    size: str
    css_class: str | None
    description: str | None
    media_source: MediaSource
    cache: Cache
    player: PlayerConfig = DEFAULT_PLAYER

    @classmethod
    def parse(
        cls,
        markup: str,
        media_source: MediaSource,
        cache: Cache,
        player: PlayerConfig = DEFAULT_PLAYER,
    ) -> "FlickrImageTag":
        """Build a tag from its markup, validating the size code."""
        args = tokenize(markup)
        photo_id = _arg(args, 0)
        if photo_id is None:
            raise TagSyntaxError("flickr_image requires a photo id")
        size = _arg(args, 1) or DEFAULT_TAG_SIZE
        if not is_known_size(size):
            raise InvalidSizeCodeError(f"did not recognize photo size: {size}")
        return cls(
            photo_id=photo_id,
            size=size,
            css_class=_arg(args, 2),
            description=_arg(args, 3),
            media_source=media_source,
            cache=cache,
            player=player,
        )

    @property
    def cache_key(self) -> tuple[str | None, ...]:
        return (
            "flickr_image",
            self.photo_id,
            self.size,
            self.css_class,
            self.description,
        )

    def render(self) -> str:
        """Return the HTML for the photo, memoized on the tag arguments."""
        cached = self.cache.get(self.cache_key)
        if isinstance(cached, str):
            _logger.debug("flickr_image cache hit: photo_id=%s", self.photo_id)
            return cached

        html = self._render_html()
        self.cache.set(self.cache_key, html)
        _logger.debug(
            "Rendered flickr_image: photo_id=%s size=%s", self.photo_id, self.size
        )
        return html

    def _render_html(self) -> str:
        info = self.media_source.get_info(self.photo_id)
        renditions = self.media_source.get_sizes(self.photo_id)
        if isinstance(info, Video):
            return VideoEmbedFragment(
                media_id=self.photo_id,
                secret=info.secret,
                size=self.size,
                orig_width=info.width,
                orig_height=info.height,
                renditions=renditions,
                player=self.player,
            ).render()

        params = RenderParams(
            media_id=self.photo_id,
            size=self.size,
            css_class=self.css_class,
            title=info.title,
            description=self.description or info.description,
            page_url=info.page_url,
            username=info.username,
            secret=info.secret,
        )
        return PhotoFragment(params, renditions).render()


@dataclass
class FlickrSetTag:
    """``{% flickr_set SET_ID [SIZE] [nodesc] %}``.

    Renders every photo and video of a set as a gallery, preceded by the
    set's description unless ``nodesc`` is given.
    """

    set_id: str
    size: str
    show_description: bool
    media_source: MediaSource
    cache: Cache
    player: PlayerConfig = DEFAULT_PLAYER

    @classmethod
    def parse(
        cls,
        markup: str,
        media_source: MediaSource,
        cache: Cache,
        player: PlayerConfig = DEFAULT_PLAYER,
    ) -> "FlickrSetTag":
        """Build a tag from its markup, validating the size code."""
        args = tokenize(markup)
        set_id = _arg(args, 0)
        if set_id is None:
            raise TagSyntaxError("flickr_set requires a set id")
        size = _arg(args, 1) or DEFAULT_TAG_SIZE
        if not is_known_size(size):
            raise InvalidSizeCodeError(
                f"did not recognize photo size for sets: {size}"
            )
        return cls(
            set_id=set_id,
            size=size,
            show_description=_arg(args, 2) != NO_DESCRIPTION,
            media_source=media_source,
            cache=cache,
            player=player,
        )

    @property
    def cache_key(self) -> tuple[str | bool, ...]:
        return ("flickr_set", self.set_id, self.size, self.show_description)

    def render(self) -> str:
        """Return the HTML for the whole set, memoized on the tag arguments."""
        cached = self.cache.get(self.cache_key)
        if isinstance(cached, str):
            _logger.debug("flickr_set cache hit: set_id=%s", self.set_id)
            return cached

        html = self._render_html()
        self.cache.set(self.cache_key, html)
        _logger.debug(
            "Rendered flickr_set: set_id=%s size=%s", self.set_id, self.size
        )
        return html

    def _render_html(self) -> str:
        description = None
        if self.show_description:
            description = self.media_source.get_set_info(self.set_id).description

        listing = self.media_source.get_set_photos(self.set_id, self.size)
        gallery_id = f"flickr-set-{self.set_id}"
        fragments: list[str] = []
        for member in listing.members:
            info = self.media_source.get_info(member.id)
            params = RenderParams(
                media_id=member.id,
                size=self.size,
                title=member.title,
                description=info.description,
                gallery_id=gallery_id,
                page_url=member.page_url,
                username=info.username,
                secret=member.secret,
                orig_width=member.orig_width,
                orig_height=member.orig_height,
            )
            renditions = self.media_source.get_sizes(member.id)
            if member.is_video:
                fragment = VideoPreviewFragment(params, renditions, player=self.player)
            else:
                fragment = PhotoFragment(params, renditions)
            fragments.append(fragment.render())

        return render_set(description, fragments)
