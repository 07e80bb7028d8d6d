"""Flickr REST API client."""

import hashlib
from dataclasses import dataclass
from typing import Protocol

import httpx

from flickr_tags.config import missing_configuration
from flickr_tags.errors import FlickrApiError


class FlickrClient(Protocol):
    """Interface for Flickr API interactions."""

    def get_sizes(self, photo_id: str) -> dict[str, object]:
        """Return raw ``flickr.photos.getSizes`` data."""

    def get_info(self, photo_id: str) -> dict[str, object]:
        """Return raw ``flickr.photos.getInfo`` data."""

    def get_photoset_info(self, photoset_id: str) -> dict[str, object]:
        """Return raw ``flickr.photosets.getInfo`` data."""

    def get_photoset_photos(
        self, photoset_id: str, extras: list[str], page: int = 1
    ) -> dict[str, object]:
        """Return raw ``flickr.photosets.getPhotos`` data."""

    def close(self) -> None:
        """Release any underlying resources."""


@dataclass
class HttpxFlickrClient(FlickrClient):
    """HTTPX-backed Flickr client."""

    api_key: str
    shared_secret: str | None
    base_url: str
    http_client: httpx.Client

    @classmethod
    def create(
        cls,
        api_key: str,
        shared_secret: str | None,
        base_url: str = "https://api.flickr.com/services/rest/",
    ) -> "HttpxFlickrClient":
        """Create a Flickr client with a managed httpx session."""
        return cls(
            api_key=api_key,
            shared_secret=shared_secret,
            base_url=base_url,
            http_client=httpx.Client(),
        )

    def get_sizes(self, photo_id: str) -> dict[str, object]:
        """Fetch the available sizes of a photo or video."""
        return self._call("flickr.photos.getSizes", photo_id=photo_id)["sizes"]

    def get_info(self, photo_id: str) -> dict[str, object]:
        """Fetch title, description, owner and media details of a photo."""
        return self._call("flickr.photos.getInfo", photo_id=photo_id)["photo"]

    def get_photoset_info(self, photoset_id: str) -> dict[str, object]:
        """Fetch title and description of a photo set."""
        payload = self._call("flickr.photosets.getInfo", photoset_id=photoset_id)
        return payload["photoset"]

    def get_photoset_photos(
        self, photoset_id: str, extras: list[str], page: int = 1
    ) -> dict[str, object]:
        """Fetch one page of photos in a photo set."""
        payload = self._call(
            "flickr.photosets.getPhotos",
            photoset_id=photoset_id,
            extras=",".join(extras),
            page=str(page),
        )
        return payload["photoset"]

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.http_client.close()

    def _call(self, method: str, **params: str) -> dict[str, object]:
        query = {
            "method": method,
            "api_key": self.api_key,
            "format": "json",
            "nojsoncallback": "1",
            **params,
        }
        if self.shared_secret:
            query["api_sig"] = sign_params(self.shared_secret, query)
        response = self.http_client.get(self.base_url, params=query, timeout=15)
        response.raise_for_status()
        payload = response.json()
        if payload.get("stat") != "ok":
            raise FlickrApiError(
                method, payload.get("code"), payload.get("message", "unknown error")
            )
        return payload


def sign_params(shared_secret: str, params: dict[str, str]) -> str:
    """Return the Flickr ``api_sig`` for a set of request parameters."""
    joined = "".join(f"{key}{params[key]}" for key in sorted(params))
    return hashlib.md5(f"{shared_secret}{joined}".encode()).hexdigest()  # noqa: S324


@dataclass
class UnconfiguredFlickrClient(FlickrClient):
    """Stand-in used when credentials are missing; fails on first use."""

    def get_sizes(self, photo_id: str) -> dict[str, object]:
        raise missing_configuration()

    def get_info(self, photo_id: str) -> dict[str, object]:
        raise missing_configuration()

    def get_photoset_info(self, photoset_id: str) -> dict[str, object]:
        raise missing_configuration()

    def get_photoset_photos(
        self, photoset_id: str, extras: list[str], page: int = 1
    ) -> dict[str, object]:
        raise missing_configuration()

    def close(self) -> None:
        return None
