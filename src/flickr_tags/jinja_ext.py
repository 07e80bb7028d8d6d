"""Jinja2 extension registering the flickr_image and flickr_set tags.

Usage::

    env = Environment(extensions=[FlickrExtension])
    configure_flickr(env, build_container())
    env.from_string("{% flickr_image 12345 b left 'A caption' %}").render()

Tag markup is a single line of whitespace separated arguments with quoting
and backslash escapes (see ``flickr_tags.markup.tokenize``). Tags are
expanded before Jinja lexes the template, so the markup reaches the
tokenizer exactly as written and Flickr HTML is emitted as raw text.
"""

import logging
import re

from jinja2 import Environment
from jinja2.ext import Extension

from flickr_tags.app_logging import configure_logging
from flickr_tags.containers import AppContainer, build_container
from flickr_tags.services.tags import FlickrImageTag, FlickrSetTag

TAG_HANDLERS: dict[str, type[FlickrImageTag] | type[FlickrSetTag]] = {
    "flickr_image": FlickrImageTag,
    "flickr_set": FlickrSetTag,
}

_logger = logging.getLogger(__name__)


def _tag_pattern(environment: Environment) -> re.Pattern[str]:
    """Match Flickr tags, or a comment or raw block to pass through unchanged.

    Tag markup ends at the first unquoted block end string, so a quoted
    caption may contain ``%}``.
    """
    start = re.escape(environment.block_start_string)
    end = re.escape(environment.block_end_string)
    comment = (
        rf"{re.escape(environment.comment_start_string)}(?s:.*?)"
        rf"{re.escape(environment.comment_end_string)}"
    )
    raw = (
        rf"{start}-?\s*raw\s*-?{end}(?s:.*?)"
        rf"{start}-?\s*endraw\s*-?{end}"
    )
    names = "|".join(re.escape(name) for name in TAG_HANDLERS)
    quoted = r"'(?:[^'\\\n]|\\[^\n])*'|\"(?:[^\"\\\n]|\\[^\n])*\""
    plain = rf"\\[^\n]|(?!-?{end})[^\n'\"\\]"
    unterminated = rf"['\"](?:(?!-?{end})[^\n])*"
    return re.compile(
        rf"(?P<skip>{comment}|{raw})"
        rf"|{start}-?[ \t]*(?P<name>{names})\b"
        rf"(?P<markup>(?:{quoted}|{plain})*(?:{unterminated})?)"
        rf"-?{end}"
    )


def configure_flickr(environment: Environment, container: AppContainer) -> None:
    """Attach the collaborators used to expand Flickr tags."""
    environment.flickr_container = container  # type: ignore[attr-defined]


class FlickrExtension(Extension):
    """Expand Flickr tags into HTML fragments."""

    def __init__(self, environment: Environment) -> None:
        super().__init__(environment)
        configure_logging()
        environment.extend(flickr_container=None)
        self._pattern = _tag_pattern(environment)

    def preprocess(
        self, source: str, name: str | None, filename: str | None = None
    ) -> str:
        """Replace every Flickr tag in the template source with its HTML."""
        return self._pattern.sub(self._expand, source)

    def _container(self) -> AppContainer:
        container = self.environment.flickr_container  # type: ignore[attr-defined]
        if container is None:
            container = build_container()
            configure_flickr(self.environment, container)
        return container

    def _expand(self, match: re.Match[str]) -> str:
        if match.group("skip") is not None:
            return match.group("skip")
        container = self._container()
        tag_name = match.group("name")
        handler = TAG_HANDLERS[tag_name].parse(
            match.group("markup"),
            media_source=container.media_source,
            cache=container.cache,
            player=container.player,
        )
        _logger.debug("Expanding %s:%s", tag_name, match.group("markup"))
        html = handler.render()
        env = self.environment
        return (
            f"{env.block_start_string} raw {env.block_end_string}"
            f"{html}"
            f"{env.block_start_string} endraw {env.block_end_string}"
        )
