"""Shared test fixtures."""

from dataclasses import dataclass, field

import pytest

from flickr_tags.adapters.flickr_client import FlickrClient
from flickr_tags.config import Settings
from flickr_tags.domain.media import (
    MediaInfo,
    PhotoSetInfo,
    PhotoSetListing,
    Rendition,
    SetMember,
    StillPhoto,
)
from flickr_tags.services.photos import MediaSource


def make_renditions(photo_id: str = "12345") -> list[Rendition]:
    """Renditions of a 1024x768 photo, as getSizes reports them."""
    base = f"https://live.staticflickr.com/65535/{photo_id}_abc"
    return [
        Rendition("Square", f"{base}_s.jpg", 75, 75),
        Rendition("Large Square", f"{base}_q.jpg", 150, 150),
        Rendition("Thumbnail", f"{base}_t.jpg", 100, 75),
        Rendition("Small", f"{base}_m.jpg", 240, 180),
        Rendition("Small 320", f"{base}_n.jpg", 320, 240),
        Rendition("Medium", f"{base}.jpg", 500, 375),
        Rendition("Medium 640", f"{base}_z.jpg", 640, 480),
        Rendition("Large", f"{base}_b.jpg", 1024, 768),
    ]


def make_video_renditions(photo_id: str = "777") -> list[Rendition]:
    """Renditions of a video, including its stream variants."""
    base = f"https://live.staticflickr.com/31337/{photo_id}_vid"
    return [
        *make_renditions(photo_id),
        Rendition("Video Player", f"{base}_player.swf", 640, 360),
        Rendition("Site MP4", f"{base}_site.mp4", 640, 360),
        Rendition("Mobile MP4", f"{base}_mobile.mp4", 480, 270),
    ]


@dataclass
class FakeMediaSource(MediaSource):
    """In-memory media source that records every lookup."""

    infos: dict[str, MediaInfo] = field(default_factory=dict)
    sizes: dict[str, list[Rendition]] = field(default_factory=dict)
    set_infos: dict[str, PhotoSetInfo] = field(default_factory=dict)
    set_photos: dict[str, PhotoSetListing] = field(default_factory=dict)
    calls: list[tuple[str, str]] = field(default_factory=list)

    def get_sizes(self, photo_id: str) -> list[Rendition]:
        self.calls.append(("get_sizes", photo_id))
        return self.sizes[photo_id]

    def get_info(self, photo_id: str) -> MediaInfo:
        self.calls.append(("get_info", photo_id))
        return self.infos[photo_id]

    def get_set_info(self, set_id: str) -> PhotoSetInfo:
        self.calls.append(("get_set_info", set_id))
        return self.set_infos[set_id]

    def get_set_photos(self, set_id: str, size: str) -> PhotoSetListing:
        self.calls.append(("get_set_photos", set_id))
        return self.set_photos[set_id]

    def add_photo(self, info: MediaInfo, renditions: list[Rendition]) -> None:
        self.infos[info.id] = info
        self.sizes[info.id] = renditions

    def add_set(
        self, info: PhotoSetInfo, owner: str, members: list[SetMember]
    ) -> None:
        self.set_infos[info.id] = info
        self.set_photos[info.id] = PhotoSetListing(
            id=info.id, owner=owner, members=members
        )


@dataclass
class FakeFlickrClient(FlickrClient):
    """Fake Flickr client returning canned payloads."""

    sizes_payload: dict[str, object] = field(
        default_factory=lambda: {
            "canblog": 0,
            "size": [
                {
                    "label": "Small",
                    "width": 240,
                    "height": 180,
                    "source": "https://live.staticflickr.com/1/12345_abc_m.jpg",
                    "media": "photo",
                },
                {
                    "label": "Site MP4",
                    "width": "",
                    "height": "",
                    "source": "https://www.flickr.com/photos/x/12345/play/site/abc/",
                    "media": "video",
                },
            ],
        }
    )
    info_payload: dict[str, object] = field(
        default_factory=lambda: {
            "id": "12345",
            "secret": "abc",
            "media": "photo",
            "title": {"_content": "Sunset"},
            "description": {"_content": "Over the <b>bay</b>"},
            "owner": {"nsid": "1@N01", "username": "alice", "path_alias": "alice"},
            "urls": {
                "url": [
                    {
                        "type": "photopage",
                        "_content": "https://www.flickr.com/photos/alice/12345/",
                    }
                ]
            },
        }
    )
    set_info_payload: dict[str, object] = field(
        default_factory=lambda: {
            "id": "72157",
            "title": {"_content": "Holiday"},
            "description": {"_content": "Day one\nDay two"},
        }
    )
    set_pages: list[dict[str, object]] = field(
        default_factory=lambda: [
            {
                "id": "72157",
                "owner": "1@N01",
                "ownername": "alice",
                "page": 1,
                "pages": 1,
                "photo": [
                    {
                        "id": "12345",
                        "secret": "abc",
                        "title": "Sunset",
                        "media": "photo",
                        "pathalias": "alice",
                        "url_m": "https://live.staticflickr.com/1/12345_abc_m.jpg",
                        "width_m": 240,
                        "height_m": 180,
                        "width_o": "4000",
                        "height_o": "3000",
                    }
                ],
            }
        ]
    )
    calls: list[tuple[str, str]] = field(default_factory=list)

    def get_sizes(self, photo_id: str) -> dict[str, object]:
        self.calls.append(("get_sizes", photo_id))
        return self.sizes_payload

    def get_info(self, photo_id: str) -> dict[str, object]:
        self.calls.append(("get_info", photo_id))
        return self.info_payload

    def get_photoset_info(self, photoset_id: str) -> dict[str, object]:
        self.calls.append(("get_photoset_info", photoset_id))
        return self.set_info_payload

    def get_photoset_photos(
        self, photoset_id: str, extras: list[str], page: int = 1
    ) -> dict[str, object]:
        self.calls.append(("get_photoset_photos", f"{photoset_id}:{page}"))
        return self.set_pages[page - 1]

    def close(self) -> None:
        return None


@pytest.fixture
def settings() -> Settings:
    return Settings(flickr_api_key="test-key", flickr_api_secret="test-secret")


@pytest.fixture
def still_photo() -> StillPhoto:
    return StillPhoto(
        id="12345",
        title="Sunset",
        description="Over the <b>bay</b>",
        secret="abc",
        username="alice",
        page_url="https://www.flickr.com/photos/alice/12345/",
    )


@pytest.fixture
def media_source(still_photo: StillPhoto) -> FakeMediaSource:
    source = FakeMediaSource()
    source.add_photo(still_photo, make_renditions(still_photo.id))
    return source
