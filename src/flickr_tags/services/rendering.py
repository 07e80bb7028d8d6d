"""HTML fragments for Flickr photos and videos.

CAUTION: titles, usernames and descriptions come from Flickr as HTML and are
republished without sanitization. Anyone who controls that HTML on Flickr can
inject markup into the generated site. Flickr sanitizes its own inputs, so the
risk is accepted, but attribute values are still escaped here.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from urllib.parse import urlencode

from jinja2 import Environment
from markupsafe import Markup

from flickr_tags.domain.media import Rendition, RenderParams
from flickr_tags.domain.sizes import (
    MEDIUM_640,
    STREAM,
    calculate_dimensions,
    resolve_size_and_dimensions,
    zoom_size_for,
)

_jinja_env = Environment(autoescape=True)
Template = _jinja_env.from_string

DEFAULT_SIZE = "s"
UNTITLED = "Untitled photo"

# Below this width images get explicit pixel sizes. Many inline-blocks
# without explicit width and height sometimes collapse to zero size in
# WebKit, which shows up in large sets. Wider images only get a width so
# the stylesheet can scale them down without distortion.
FIXED_LAYOUT_MAX_WIDTH = 450


@dataclass(frozen=True)
class PlayerConfig:
    """Constants of the embedded Flickr video player."""

    content_type: str = "application/x-shockwave-flash"
    player_url: str = "http://www.flickr.com/apps/video/stewart.swf?v=109786"
    classid: str = "clsid:D27CDB6E-AE6D-11cf-96B8-444553540000"
    bgcolor: str = "#000000"
    allow_fullscreen: str = "true"
    language: str = "en-us"


DEFAULT_PLAYER = PlayerConfig()

PHOTO_TEMPLATE = Template(
    "<figure{{ figure_attrs|xmlattr }}>"
    "<a{{ anchor_attrs|xmlattr }}><img{{ img_attrs|xmlattr }}/>{{ icon }}</a>"
    '<figcaption id="{{ title_id }}">'
    "<h1><a{{ link_attrs|xmlattr }}>{{ title }}</a>"
    "{% if username %} by {{ username }}{% endif %}</h1>"
    '<div class="description">{{ description }}</div>'
    "</figcaption>"
    "</figure>"
)

VIDEO_PREVIEW_TEMPLATE = Template(
    "{{ figure }}"
    "<div style='display:none'><div id='{{ content_id }}'>{{ embed }}</div></div>"
)

VIDEO_EMBED_TEMPLATE = Template(
    "<object{{ object_attrs|xmlattr }}>"
    '<param name="flashvars" value="{{ flashvars }}"/>'
    '<param name="movie" value="{{ player.player_url }}"/>'
    '<param name="bgcolor" value="{{ player.bgcolor }}"/>'
    '<param name="allowFullScreen" value="{{ player.allow_fullscreen }}"/>'
    "<embed{{ embed_attrs|xmlattr }}/>"
    '<video controls="controls" preload="metadata"{{ video_attrs|xmlattr }}>'
    '<source src="{{ stream_url }}" type="video/mp4"/>'
    "</video>"
    "</object>"
)

VIDEO_ICON = Markup('<span class="video-icon">&#x25b6;</span>')


def css_style(properties: dict[str, str]) -> str | None:
    """Render CSS properties as an inline style, or None when empty."""
    if not properties:
        return None
    return " ".join(f"{name}: {value};" for name, value in properties.items())


def layout_styles(
    width: int | None, height: int | None
) -> tuple[dict[str, str], dict[str, str]]:
    """Return the image and figure CSS properties for a rendition size."""
    img_css: dict[str, str] = {}
    figure_css: dict[str, str] = {}
    if width is not None and width < FIXED_LAYOUT_MAX_WIDTH:
        img_css["width"] = figure_css["width"] = f"{width}px"
        if height is not None:
            img_css["height"] = f"{height}px"
    else:
        figure_css["display"] = "inline-block"
    return img_css, figure_css


@dataclass
class PhotoFragment:
    """Figure with a lightbox link and caption for a still photo."""

    params: RenderParams
    renditions: Sequence[Rendition]

    @property
    def size(self) -> str:
        return self.params.size or DEFAULT_SIZE

    @property
    def zoom_size(self) -> str:
        return zoom_size_for(self.size)

    @property
    def css_class(self) -> str | None:
        return self.params.css_class

    @property
    def title_id(self) -> str:
        return f"flickr-photo-{self.params.media_id}"

    def anchor_attrs(self) -> dict[str, str | None]:
        """Attributes of the lightbox link around the image."""
        zoom = resolve_size_and_dimensions(self.renditions, self.zoom_size)
        return {
            "href": zoom.source,
            "class": "fancybox",
            "data-title-id": self.title_id,
            "data-media": "photo",
        }

    def icon(self) -> Markup:
        return Markup("")

    def render(self) -> str:
        """Render the figure HTML."""
        image = resolve_size_and_dimensions(self.renditions, self.size)
        title = self.params.title or UNTITLED
        img_css, figure_css = layout_styles(image.width, image.height)

        figure_class = ["flickr-thumbnail"]
        if self.css_class:
            figure_class.append(self.css_class)

        anchor_attrs = self.anchor_attrs()
        if self.params.gallery_id:
            anchor_attrs["rel"] = self.params.gallery_id

        return PHOTO_TEMPLATE.render(
            figure_attrs={
                "class": " ".join(figure_class),
                "style": css_style(figure_css),
            },
            anchor_attrs=anchor_attrs,
            img_attrs={
                "src": image.source,
                "title": title,
                "style": css_style(img_css),
            },
            icon=self.icon(),
            title_id=self.title_id,
            link_attrs={"class": "flickr-link", "href": self.params.page_url},
            title=Markup(title),
            username=Markup(self.params.username or ""),
            description=Markup(self.params.description or ""),
        )


@dataclass
class VideoPreviewFragment(PhotoFragment):
    """Photo-style thumbnail that opens an embedded video player."""

    player: PlayerConfig = DEFAULT_PLAYER

    @property
    def zoom_size(self) -> str:
        return MEDIUM_640

    @property
    def css_class(self) -> str | None:
        return "video-preview"

    @property
    def content_id(self) -> str:
        return f"flickr-video-content-{self.params.media_id}"

    def anchor_attrs(self) -> dict[str, str | None]:
        return {
            "href": self.params.page_url,
            "class": "fancybox",
            "data-title-id": self.title_id,
            "data-media": "video",
            "data-content-id": f"#{self.content_id}",
        }

    def icon(self) -> Markup:
        return VIDEO_ICON

    def render(self) -> str:
        """Render the thumbnail followed by the hidden player."""
        embed = VideoEmbedFragment(
            media_id=self.params.media_id,
            secret=self.params.secret or "",
            size=self.zoom_size,
            orig_width=self.params.orig_width,
            orig_height=self.params.orig_height,
            renditions=self.renditions,
            player=self.player,
        )
        return VIDEO_PREVIEW_TEMPLATE.render(
            figure=Markup(super().render()),
            content_id=self.content_id,
            embed=Markup(embed.render()),
        )


@dataclass
class VideoEmbedFragment:
    """Embedded Flickr video player."""

    media_id: str
    secret: str
    size: str
    orig_width: int | None
    orig_height: int | None
    renditions: Sequence[Rendition]
    player: PlayerConfig = DEFAULT_PLAYER

    def flashvars(self) -> str:
        """Player parameters identifying the video."""
        return urlencode(
            {
                "intl_lang": self.player.language,
                "photo_secret": self.secret,
                "photo_id": self.media_id,
            }
        )

    def render(self) -> str:
        """Render the player HTML."""
        stream = resolve_size_and_dimensions(self.renditions, STREAM)
        poster = resolve_size_and_dimensions(self.renditions, self.size)
        # Without original dimensions the poster keeps the aspect ratio.
        width, height = calculate_dimensions(
            self.size,
            self.orig_width or poster.width or 0,
            self.orig_height or poster.height or 0,
        )
        flashvars = self.flashvars()
        return VIDEO_EMBED_TEMPLATE.render(
            object_attrs={
                "type": self.player.content_type,
                "width": width,
                "height": height,
                "data": self.player.player_url,
                "classid": self.player.classid,
            },
            embed_attrs={
                "type": self.player.content_type,
                "src": self.player.player_url,
                "bgcolor": self.player.bgcolor,
                "allowfullscreen": self.player.allow_fullscreen,
                "flashvars": flashvars,
                "width": width,
                "height": height,
            },
            video_attrs={
                "poster": poster.source,
                "width": width,
                "height": height,
            },
            flashvars=flashvars,
            player=self.player,
            stream_url=stream.source,
        )


SET_TEMPLATE = Template(
    "{% if description %}<p>{{ description }}</p>{% endif %}"
    '<section class="flickr-set">{% for fragment in fragments %}{{ fragment }}'
    "{% endfor %}</section>"
)


def render_set(description: str | None, fragments: Sequence[str]) -> str:
    """Wrap member fragments in a set section, after the set description."""
    return SET_TEMPLATE.render(
        description=Markup((description or "").replace("\n", "<br/>")),
        fragments=[Markup(fragment) for fragment in fragments],
    )
