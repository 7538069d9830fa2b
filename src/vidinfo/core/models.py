"""Data models for video info records and request options."""

import logging
from dataclasses import dataclass, field, fields, asdict
from typing import List, Dict, Optional, Any

logger = logging.getLogger(__name__)


# Formats travel as plain dicts so platform fields pass through untouched.
# Every format carries an ``itag``; stubs from manifests carry only ``itag`` and ``url``.
Format = Dict[str, Any]


@dataclass
class InfoOptions:
    """Options recognised by the info operations."""
    lang: str = "en"
    request_options: Dict[str, Any] = field(default_factory=dict)
    config_body: Optional[str] = None  # Pre-supplied watch page body, skips the network
    debug: bool = False

    @classmethod
    def coerce(cls, value) -> "InfoOptions":
        """Accept None, an InfoOptions or a plain dict of option keys."""
        if value is None:
            return cls()
        if isinstance(value, cls):
            return value
        if isinstance(value, dict):
            aliases = {"requestOptions": "request_options", "configBody": "config_body"}
            known = {f.name for f in fields(cls)}
            kwargs = {}
            for key, val in value.items():
                name = aliases.get(key, key)
                if name in known:
                    kwargs[name] = val
                else:
                    logger.debug("Ignoring unknown option %r", key)
            return cls(**kwargs)
        raise TypeError(f"Unsupported options type: {type(value).__name__}")


@dataclass
class VideoDetails:
    """Metadata block of a video."""
    video_id: str
    title: str
    description: str
    author: Dict[str, Any]
    published: Optional[int]  # epoch milliseconds
    length_seconds: int
    video_url: str
    age_restricted: bool
    html5player: Optional[str]
    media: Dict[str, Any] = field(default_factory=dict)
    likes: Optional[int] = None
    dislikes: Optional[int] = None
    related_videos: List[Dict[str, Any]] = field(default_factory=list)


@dataclass
class VideoInfo:
    """Everything resolved for a single video."""
    details: VideoDetails
    player_response: Dict[str, Any]
    raw: Dict[str, Any]
    formats: List[Format]
    full: bool = False

    @property
    def video_id(self) -> str:
        return self.details.video_id

    @property
    def title(self) -> str:
        return self.details.title

    @property
    def html5player(self) -> Optional[str]:
        return self.details.html5player

    @property
    def streaming_data(self) -> Dict[str, Any]:
        return self.player_response.get("streamingData") or {}

    def to_dict(self, include_raw: bool = False) -> Dict[str, Any]:
        """JSON-serialisable view of the record."""
        data = asdict(self.details)
        data["formats"] = [dict(f) for f in self.formats]
        data["full"] = self.full
        if include_raw:
            data["player_response"] = self.player_response
            data["raw"] = self.raw
        return data
