"""Exceptions raised by placequery."""


class PlaceQueryError(Exception):
    """Base class for placequery errors."""

    pass


class EncodingFailure(PlaceQueryError):
    """A parameter value could not be percent-encoded.

    Raised for character data the UTF-8 codec rejects (lone surrogates,
    for example). This is a programming or environment error and is never
    retried.
    """

    def __init__(self, key: str, value: str):
        self.key = key
        self.value = value
        super().__init__(f"Cannot URL-encode value for parameter '{key}'")


class ConfigError(PlaceQueryError):
    """Error loading placequery settings."""

    pass


__all__ = ["ConfigError", "EncodingFailure", "PlaceQueryError"]
