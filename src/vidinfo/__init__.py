"""Fetch YouTube video metadata and stream formats without downloading."""

from .core import (
    InfoClient,
    InfoCache,
    InfoOptions,
    VideoInfo,
    VideoDetails,
    Transport,
    with_callback,
    get_basic_info,
    get_full_info,
    validate_id,
    validate_url,
    get_url_video_id,
    get_video_id,
    VidInfoError,
    ParseError,
    PlayabilityError,
    UnavailableError,
    DecipherError,
    ValidationError,
    TransportError,
)
from .version import __version__

__all__ = [
    "InfoClient",
    "InfoCache",
    "InfoOptions",
    "VideoInfo",
    "VideoDetails",
    "Transport",
    "with_callback",
    "get_basic_info",
    "get_full_info",
    "validate_id",
    "validate_url",
    "get_url_video_id",
    "get_video_id",
    "VidInfoError",
    "ParseError",
    "PlayabilityError",
    "UnavailableError",
    "DecipherError",
    "ValidationError",
    "TransportError",
    "__version__",
]
