"""Exceptions raised while expanding Flickr tags."""


class FlickrTagsError(Exception):
    """Base class for errors raised by this package."""


class ConfigurationError(FlickrTagsError):
    """Flickr credentials are missing or unreadable."""


class InvalidSizeCodeError(FlickrTagsError, ValueError):
    """A size code is not part of the size catalog."""


class SizeResolutionError(FlickrTagsError):
    """No rendition matched the requested size or any fallback size."""


class FlickrApiError(FlickrTagsError):
    """The Flickr API answered with a failure status."""

    def __init__(self, method: str, code: int | None, message: str) -> None:
        super().__init__(f"{method} failed ({code}): {message}")
        self.method = method
        self.code = code
        self.message = message


class TagSyntaxError(FlickrTagsError):
    """Tag markup is missing a required argument."""
