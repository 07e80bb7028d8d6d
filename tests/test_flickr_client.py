"""Tests for the Flickr REST adapter."""

from collections.abc import Callable

import httpx
import pytest

from flickr_tags.adapters.flickr_client import (
    HttpxFlickrClient,
    UnconfiguredFlickrClient,
    sign_params,
)
from flickr_tags.errors import ConfigurationError, FlickrApiError


def _client(
    handler: Callable[[httpx.Request], httpx.Response],
    shared_secret: str | None = None,
) -> HttpxFlickrClient:
    transport = httpx.MockTransport(handler)
    return HttpxFlickrClient(
        api_key="key",
        shared_secret=shared_secret,
        base_url="https://api.flickr.test/services/rest/",
        http_client=httpx.Client(transport=transport),
    )


def test_get_sizes_sends_method_and_unwraps() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200, json={"stat": "ok", "sizes": {"size": [{"label": "Small"}]}}
        )

    client = _client(handler)

    payload = client.get_sizes("12345")

    assert payload == {"size": [{"label": "Small"}]}
    params = seen[0].url.params
    assert params["method"] == "flickr.photos.getSizes"
    assert params["photo_id"] == "12345"
    assert params["api_key"] == "key"
    assert params["format"] == "json"
    assert params["nojsoncallback"] == "1"
    assert "api_sig" not in params


def test_get_info_and_photoset_calls() -> None:
    methods: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        method = request.url.params["method"]
        methods.append(method)
        if method == "flickr.photos.getInfo":
            return httpx.Response(200, json={"stat": "ok", "photo": {"id": "1"}})
        return httpx.Response(200, json={"stat": "ok", "photoset": {"id": "2"}})

    client = _client(handler)

    assert client.get_info("1") == {"id": "1"}
    assert client.get_photoset_info("2") == {"id": "2"}
    assert client.get_photoset_photos("2", ["url_m", "media"], page=3) == {"id": "2"}
    assert methods == [
        "flickr.photos.getInfo",
        "flickr.photosets.getInfo",
        "flickr.photosets.getPhotos",
    ]


def test_get_photoset_photos_sends_extras_and_page() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"stat": "ok", "photoset": {}})

    client = _client(handler)

    client.get_photoset_photos("72157", ["url_m", "url_o", "path_alias"], page=2)

    params = seen[0].url.params
    assert params["photoset_id"] == "72157"
    assert params["extras"] == "url_m,url_o,path_alias"
    assert params["page"] == "2"


def test_signed_requests_carry_api_sig() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"stat": "ok", "photo": {}})

    client = _client(handler, shared_secret="secret")

    client.get_info("1")

    params = dict(seen[0].url.params)
    signature = params.pop("api_sig")
    assert signature == sign_params("secret", params)


def test_sign_params_is_order_independent() -> None:
    first = sign_params("s", {"b": "2", "a": "1"})
    second = sign_params("s", {"a": "1", "b": "2"})

    assert first == second
    assert len(first) == 32
    assert first != sign_params("t", {"a": "1", "b": "2"})


def test_failed_stat_raises_api_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200, json={"stat": "fail", "code": 1, "message": "Photo not found"}
        )

    client = _client(handler)

    with pytest.raises(FlickrApiError) as excinfo:
        client.get_info("404")

    assert excinfo.value.code == 1
    assert str(excinfo.value) == "flickr.photos.getInfo failed (1): Photo not found"


def test_http_error_status_raises() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500)

    client = _client(handler)

    with pytest.raises(httpx.HTTPStatusError):
        client.get_sizes("1")


def test_unconfigured_client_raises_on_use() -> None:
    client = UnconfiguredFlickrClient()

    with pytest.raises(ConfigurationError, match="FLICKR_API_KEY"):
        client.get_sizes("1")
    with pytest.raises(ConfigurationError):
        client.get_photoset_photos("2", [])

    client.close()
