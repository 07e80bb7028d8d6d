"""Flickr size catalog and rendition selection."""

from collections.abc import Sequence
from dataclasses import dataclass

from flickr_tags.domain.media import Rendition
from flickr_tags.errors import InvalidSizeCodeError, SizeResolutionError


@dataclass(frozen=True)
class SizeDescriptor:
    """A named Flickr size with an optional bound on its longest side."""

    code: str
    label: str
    max_dimension: int | None


# Declared order is the fallback order used by resolve_size_and_dimensions.
SIZE_CATALOG: tuple[SizeDescriptor, ...] = (
    SizeDescriptor("original_video", "Original Video", None),
    SizeDescriptor("mobile_mp4", "Mobile MP4", 480),
    SizeDescriptor("site_mp4", "Site MP4", 640),
    SizeDescriptor("video_player", "Video Player", 640),
    SizeDescriptor("o", "Original", None),
    SizeDescriptor("b", "Large", 1024),
    SizeDescriptor("z", "Medium 640", 640),
    SizeDescriptor("__NONE__", "Medium", 500),
    SizeDescriptor("n", "Small 320", 320),
    SizeDescriptor("m", "Small", 240),
    SizeDescriptor("t", "Thumbnail", 100),
    SizeDescriptor("q", "Large Square", 150),
    SizeDescriptor("s", "Square", 75),
)

_SIZES_BY_CODE = {size.code: size for size in SIZE_CATALOG}

ORIGINAL = "o"
LARGE = "b"
MEDIUM_640 = "z"
STREAM = "site_mp4"


def get_size_by_code(code: str) -> SizeDescriptor | None:
    """Return the catalog entry for a size code, if any."""
    return _SIZES_BY_CODE.get(code)


def is_known_size(code: str) -> bool:
    """Return True if the size code is in the catalog."""
    return code in _SIZES_BY_CODE


def zoom_size_for(code: str) -> str:
    """Return the size shown when a thumbnail of the given size is opened."""
    if code == ORIGINAL:
        return ORIGINAL
    if code in {MEDIUM_640, LARGE}:
        return LARGE
    return MEDIUM_640


def pick_size(available: Sequence[Rendition], code: str) -> Rendition | None:
    """Return the first rendition carrying the label of the given size code."""
    size = get_size_by_code(code)
    if size is None:
        raise InvalidSizeCodeError(f"unknown size code: {code}")
    for rendition in available:
        if rendition.label == size.label:
            return rendition
    return None


def resolve_size_and_dimensions(
    available: Sequence[Rendition], requested_code: str
) -> Rendition:
    """Pick the requested rendition, falling back through the catalog order."""
    for code in [requested_code, *(size.code for size in SIZE_CATALOG)]:
        rendition = pick_size(available, code)
        if rendition is not None:
            return rendition
    raise SizeResolutionError("no usable rendition")


def calculate_dimensions(
    code: str, width: int | str, height: int | str
) -> tuple[int, int]:
    """Scale width and height so the longest side matches the size bound.

    Sizes without a bound return the dimensions unchanged. Dimensions smaller
    than the bound are scaled up.
    """
    width = int(width)
    height = int(height)
    size = get_size_by_code(code)
    if size is None or size.max_dimension is None:
        return width, height
    longest = max(width, height)
    if longest == 0:
        return 0, 0
    factor = size.max_dimension / longest
    return int(width * factor), int(height * factor)
