"""Exceptions raised while resolving video info."""

from typing import Optional


class VidInfoError(Exception):
    """Base class for every error raised by vidinfo."""

    def __init__(self, message: str, original_error: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ParseError(VidInfoError):
    """An upstream payload (JSON, XML or playlist) could not be parsed."""


class PlayabilityError(VidInfoError):
    """The platform marks the video as unplayable; the message is its reason."""


class UnavailableError(VidInfoError):
    """Neither formats nor manifests exist for the video."""


class DecipherError(VidInfoError):
    """The player script could not be understood."""


class ValidationError(VidInfoError):
    """The supplied id or URL does not identify a video."""


class TransportError(VidInfoError):
    """An HTTP request failed."""

    def __init__(self, message: str, original_error: Optional[BaseException] = None,
                 status_code: Optional[int] = None):
        super().__init__(message, original_error)
        self.status_code = status_code
