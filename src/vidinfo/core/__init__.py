"""Core functionality for vidinfo."""

from .models import (
    InfoOptions,
    VideoDetails,
    VideoInfo,
)
from .errors import (
    VidInfoError,
    ParseError,
    PlayabilityError,
    UnavailableError,
    DecipherError,
    ValidationError,
    TransportError,
)
from .cache import InfoCache
from .transport import Transport
from .client import InfoClient, with_callback, get_basic_info, get_full_info
from .ids import validate_id, validate_url, get_url_video_id, get_video_id

__all__ = [
    "InfoOptions",
    "VideoDetails",
    "VideoInfo",
    "VidInfoError",
    "ParseError",
    "PlayabilityError",
    "UnavailableError",
    "DecipherError",
    "ValidationError",
    "TransportError",
    "InfoCache",
    "Transport",
    "InfoClient",
    "with_callback",
    "get_basic_info",
    "get_full_info",
    "validate_id",
    "validate_url",
    "get_url_video_id",
    "get_video_id",
]
