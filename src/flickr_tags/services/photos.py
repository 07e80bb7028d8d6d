"""Flickr metadata lookups with caching."""

import logging
from dataclasses import dataclass
from typing import Protocol

from flickr_tags.adapters.flickr_client import FlickrClient
from flickr_tags.adapters.flickr_models import (
    FlickrPhotoInfo,
    FlickrPhotoset,
    FlickrPhotosetInfo,
    FlickrSetPhoto,
    FlickrSizes,
)
from flickr_tags.domain.media import (
    MediaInfo,
    PhotoSetInfo,
    PhotoSetListing,
    Rendition,
    SetMember,
    StillPhoto,
    Video,
)
from flickr_tags.services.cache import Cache

PHOTOSTREAM_URL = "https://www.flickr.com/photos/"

_logger = logging.getLogger(__name__)


class MediaSource(Protocol):
    """Read operations the tag handlers need from Flickr."""

    def get_sizes(self, photo_id: str) -> list[Rendition]:
        """Return the renditions available for a photo or video."""

    def get_info(self, photo_id: str) -> MediaInfo:
        """Return metadata for a photo or video."""

    def get_set_info(self, set_id: str) -> PhotoSetInfo:
        """Return metadata for a photo set."""

    def get_set_photos(self, set_id: str, size: str) -> PhotoSetListing:
        """Return the members of a photo set with dimensions for a size."""


@dataclass
class FlickrPhotoService(MediaSource):
    """Media source backed by the Flickr API, memoizing every call."""

    client: FlickrClient
    cache: Cache

    def get_sizes(self, photo_id: str) -> list[Rendition]:
        """Fetch the renditions of a photo, cached per photo id."""
        cache_key = ("photos.getSizes", photo_id)
        cached = self.cache.get(cache_key)
        if isinstance(cached, list):
            return cached

        payload = FlickrSizes.model_validate(self.client.get_sizes(photo_id))
        renditions = [
            Rendition(
                label=size.label,
                source=size.source,
                width=size.width,
                height=size.height,
            )
            for size in payload.size
        ]
        self.cache.set(cache_key, renditions)
        _logger.debug("Flickr sizes: photo_id=%s count=%s", photo_id, len(renditions))
        return renditions

    def get_info(self, photo_id: str) -> MediaInfo:
        """Fetch photo metadata, returning a Video when Flickr reports one."""
        cache_key = ("photos.getInfo", photo_id)
        cached = self.cache.get(cache_key)
        if isinstance(cached, StillPhoto | Video):
            return cached

        payload = FlickrPhotoInfo.model_validate(self.client.get_info(photo_id))
        info = _to_media_info(payload)
        self.cache.set(cache_key, info)
        _logger.debug("Flickr info: photo_id=%s media=%s", photo_id, payload.media)
        return info

    def get_set_info(self, set_id: str) -> PhotoSetInfo:
        """Fetch photo set metadata."""
        cache_key = ("photosets.getInfo", set_id)
        cached = self.cache.get(cache_key)
        if isinstance(cached, PhotoSetInfo):
            return cached

        payload = FlickrPhotosetInfo.model_validate(
            self.client.get_photoset_info(set_id)
        )
        info = PhotoSetInfo(
            id=payload.id,
            title=payload.title.content,
            description=payload.description.content,
        )
        self.cache.set(cache_key, info)
        return info

    def get_set_photos(self, set_id: str, size: str) -> PhotoSetListing:
        """Fetch every page of a photo set's members."""
        cache_key = ("photosets.getPhotos", set_id, size)
        cached = self.cache.get(cache_key)
        if isinstance(cached, PhotoSetListing):
            return cached

        # Flickr expects "path_alias" but answers with "pathalias".
        extras = [f"url_{size}", "url_o", "path_alias", "media"]
        page = 1
        members: list[SetMember] = []
        while True:
            payload = FlickrPhotoset.model_validate(
                self.client.get_photoset_photos(set_id, extras, page=page)
            )
            members.extend(
                _to_set_member(photo, payload.owner, size) for photo in payload.photo
            )
            if payload.page >= payload.pages:
                break
            page += 1

        listing = PhotoSetListing(id=payload.id, owner=payload.owner, members=members)
        self.cache.set(cache_key, listing)
        _logger.debug(
            "Flickr set photos: set_id=%s pages=%s members=%s",
            set_id,
            page,
            len(members),
        )
        return listing


def _to_media_info(payload: FlickrPhotoInfo) -> MediaInfo:
    """Convert a getInfo payload into a StillPhoto or Video."""
    common = {
        "id": payload.id,
        "title": payload.title.content,
        "description": payload.description.content,
        "secret": payload.secret,
        "username": payload.owner.username,
        "page_url": payload.photo_page_url() or _photo_page(payload),
    }
    if payload.video is not None:
        return Video(**common, width=payload.video.width, height=payload.video.height)
    return StillPhoto(**common)


def _photo_page(payload: FlickrPhotoInfo) -> str | None:
    """Build a photo page URL when Flickr did not report one."""
    owner = payload.owner.path_alias or payload.owner.nsid
    if not owner:
        return None
    return f"{PHOTOSTREAM_URL}{owner}/{payload.id}"


def _to_set_member(photo: FlickrSetPhoto, owner: str, size: str) -> SetMember:
    """Convert a getPhotos entry into a SetMember."""
    # The set owner is always present; pathalias only when the user chose one.
    stream = photo.pathalias or owner
    return SetMember(
        id=photo.id,
        secret=photo.secret,
        title=photo.title,
        media=photo.media,
        width=photo.extra_int(f"width_{size}"),
        height=photo.extra_int(f"height_{size}"),
        orig_width=photo.extra_int("width_o"),
        orig_height=photo.extra_int("height_o"),
        page_url=f"{PHOTOSTREAM_URL}{stream}/{photo.id}",
    )
