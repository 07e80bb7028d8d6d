"""Pydantic models for Flickr REST payloads."""

from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field


def _blank_to_none(value: object) -> object:
    if value == "":
        return None
    return value


# Flickr reports missing video dimensions as empty strings.
Dimension = Annotated[int | None, BeforeValidator(_blank_to_none)]


class FlickrContent(BaseModel):
    """Text node wrapped in a ``_content`` key."""

    content: str = Field(default="", alias="_content")


class FlickrSize(BaseModel):
    """Entry of ``flickr.photos.getSizes``."""

    label: str
    source: str
    width: Dimension = None
    height: Dimension = None
    media: str | None = None


class FlickrSizes(BaseModel):
    """Container of ``flickr.photos.getSizes``."""

    size: list[FlickrSize] = Field(default_factory=list)


class FlickrOwner(BaseModel):
    """Owner block of ``flickr.photos.getInfo``."""

    nsid: str | None = None
    username: str | None = None
    path_alias: str | None = None


class FlickrVideo(BaseModel):
    """Video block of ``flickr.photos.getInfo``."""

    width: int
    height: int


class FlickrUrl(BaseModel):
    """URL entry of ``flickr.photos.getInfo``."""

    type: str
    content: str = Field(alias="_content")


class FlickrUrls(BaseModel):
    """URL list of ``flickr.photos.getInfo``."""

    url: list[FlickrUrl] = Field(default_factory=list)


class FlickrPhotoInfo(BaseModel):
    """Payload of ``flickr.photos.getInfo``."""

    id: str
    secret: str
    media: str = "photo"
    title: FlickrContent = Field(default_factory=FlickrContent)
    description: FlickrContent = Field(default_factory=FlickrContent)
    owner: FlickrOwner = Field(default_factory=FlickrOwner)
    video: FlickrVideo | None = None
    urls: FlickrUrls = Field(default_factory=FlickrUrls)

    def photo_page_url(self) -> str | None:
        """Return the photo page URL reported by Flickr, if any."""
        for url in self.urls.url:
            if url.type == "photopage":
                return url.content
        return None


class FlickrPhotosetInfo(BaseModel):
    """Payload of ``flickr.photosets.getInfo``."""

    id: str
    title: FlickrContent = Field(default_factory=FlickrContent)
    description: FlickrContent = Field(default_factory=FlickrContent)


class FlickrSetPhoto(BaseModel):
    """Photo entry of ``flickr.photosets.getPhotos``.

    Size-specific fields such as ``url_m`` or ``width_m`` depend on the
    requested extras and are kept as extra attributes.
    """

    model_config = ConfigDict(extra="allow")

    id: str
    secret: str
    title: str = ""
    media: str = "photo"
    pathalias: str | None = None

    def extra_int(self, name: str) -> int | None:
        """Return an integer extra such as ``width_o``, if present."""
        value = (self.model_extra or {}).get(name)
        if value in (None, ""):
            return None
        return int(value)


class FlickrPhotoset(BaseModel):
    """Payload of ``flickr.photosets.getPhotos``."""

    id: str
    owner: str
    page: int = 1
    pages: int = 1
    photo: list[FlickrSetPhoto] = Field(default_factory=list)
