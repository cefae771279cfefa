"""Error types raised by the earthgif pipeline.

Every error carries the name of the step that failed plus the underlying
cause, so a fatal CLI message reads like ``catalog.list_frames: 503 ...``.
"""

from __future__ import annotations


class EarthGifError(Exception):
    """Base class: *operation* failed because of *cause*."""

    def __init__(self, operation: str, cause: object) -> None:
        super().__init__(f"{operation}: {cause}")
        self.operation = operation
        self.cause = cause


class ConfigurationError(EarthGifError):
    """Required configuration is missing or invalid."""


class ValidationError(EarthGifError):
    """User input (date flag, prompt answer, frame list) is unusable."""


class CatalogError(EarthGifError):
    """Anything that went wrong talking to the imagery API."""


class NetworkError(CatalogError):
    """Transport failure or non-2xx response."""


class DecodeError(CatalogError):
    """Malformed JSON metadata or an undecodable image payload."""


class FontLoadError(EarthGifError):
    """The caption font could not be loaded."""


class FilesystemError(EarthGifError):
    """Reading or writing an artifact failed."""
