"""Domain models for Flickr media metadata."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Rendition:
    """A sized variant of a photo or video as reported by Flickr."""

    label: str
    source: str
    width: int | None
    height: int | None


@dataclass(frozen=True)
class StillPhoto:
    """Metadata for a still photo."""

    id: str
    title: str
    description: str
    secret: str
    username: str | None
    page_url: str | None


@dataclass(frozen=True)
class Video:
    """Metadata for a video, including its native dimensions."""

    id: str
    title: str
    description: str
    secret: str
    username: str | None
    page_url: str | None
    width: int
    height: int


MediaInfo = StillPhoto | Video


@dataclass(frozen=True)
class PhotoSetInfo:
    """Metadata for a photo set."""

    id: str
    title: str
    description: str


@dataclass(frozen=True)
class SetMember:
    """A photo or video listed in a photo set."""

    id: str
    secret: str
    title: str
    media: str
    width: int | None
    height: int | None
    orig_width: int | None
    orig_height: int | None
    page_url: str

    @property
    def is_video(self) -> bool:
        return self.media == "video"


@dataclass(frozen=True)
class PhotoSetListing:
    """Members of a photo set in set order."""

    id: str
    owner: str
    members: list[SetMember]


@dataclass(frozen=True)
class RenderParams:
    """Inputs for rendering a single fragment."""

    media_id: str
    size: str | None = None
    css_class: str | None = None
    title: str | None = None
    description: str | None = None
    gallery_id: str | None = None
    page_url: str | None = None
    username: str | None = None
    secret: str | None = None
    orig_width: int | None = None
    orig_height: int | None = None
