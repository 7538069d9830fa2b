"""Resolution of basic and full video info from the watch page."""

import json
import logging
import math
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from typing import Any, Dict, List
from urllib.parse import urljoin, urlencode

from yt_dlp.utils import clean_html, int_or_none, traverse_obj, unified_timestamp

from . import extras, sig
from .errors import ParseError, PlayabilityError, UnavailableError, DecipherError
from .formats import add_format_meta, sorted_formats
from .manifests import get_dash_manifest, get_m3u8
from .merge import merge_formats
from .models import Format, InfoOptions, VideoDetails, VideoInfo

logger = logging.getLogger(__name__)

VIDEO_URL = 'https://www.youtube.com/watch?v='


def watch_url(video_id: str, lang: str) -> str:
    params = urlencode({'hl': lang or 'en', 'bpctr': math.ceil(time.time()), 'pbj': 1})
    return f'{VIDEO_URL}{video_id}&{params}'


def deep_merge(base: Dict[str, Any], other: Dict[str, Any]) -> Dict[str, Any]:
    """Merge ``other`` into ``base``; ``other`` wins on conflicting keys."""
    for key, value in other.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            deep_merge(base[key], value)
        else:
            base[key] = value
    return base


def parse_page(body: str) -> Dict[str, Any]:
    """Combine the JSON values of a watch page response into one dict."""
    try:
        parts = json.loads(body)
    except (TypeError, ValueError) as e:
        raise ParseError(f'Error parsing info: {e}', original_error=e)
    if isinstance(parts, dict):
        parts = [parts]
    if not isinstance(parts, list):
        raise ParseError(f'Error parsing info: unexpected {type(parts).__name__} payload')
    merged = {}
    for part in parts:
        if isinstance(part, dict):
            deep_merge(merged, part)
    return merged


def normalize_player_response(raw: Dict[str, Any]) -> Dict[str, Any]:
    """Return the player response as a dict, decoding it if it came as a string."""
    player_response = traverse_obj(raw, ('player', 'args', 'player_response')) or raw.get('playerResponse')
    if isinstance(player_response, dict):
        return player_response
    if not isinstance(player_response, str):
        raise ParseError('Error parsing `player_response`: not found in watch page')
    try:
        decoded = json.loads(player_response)
    except ValueError as e:
        raise ParseError(f'Error parsing `player_response`: {e}', original_error=e)
    if not isinstance(decoded, dict):
        raise ParseError('Error parsing `player_response`: not an object')
    return decoded


def check_playability(player_response: Dict[str, Any]):
    playability = player_response.get('playabilityStatus') or {}
    if playability.get('status') == 'UNPLAYABLE':
        raise PlayabilityError(clean_html(playability.get('reason') or '') or 'This video is unplayable')


def parse_formats(player_response: Dict[str, Any]) -> List[Format]:
    streaming_data = player_response.get('streamingData') or {}
    return list(streaming_data.get('formats') or []) + list(streaming_data.get('adaptiveFormats') or [])


def _published(microformat: Dict[str, Any]):
    timestamp = unified_timestamp(microformat.get('publishDate'))
    return timestamp * 1000 if timestamp is not None else None


def got_config(video_id: str, raw: Dict[str, Any], body: str) -> VideoInfo:
    """Turn a merged watch page payload into a basic record."""
    player_response = normalize_player_response(raw)
    check_playability(player_response)

    details = player_response.get('videoDetails') or {}
    microformat = traverse_obj(player_response, ('microformat', 'playerMicroformatRenderer')) or {}
    player = raw.get('player') or {}
    real_id = details.get('videoId') or video_id

    video_details = VideoDetails(
        video_id=real_id,
        title=details.get('title') or traverse_obj(microformat, ('title', 'simpleText')) or '',
        description=details.get('shortDescription') or '',
        author=extras.get_author(raw, player_response),
        published=_published(microformat),
        length_seconds=int_or_none(details.get('lengthSeconds')) or 0,
        video_url=VIDEO_URL + real_id,
        age_restricted=bool(traverse_obj(player, ('args', 'is_embed'))),
        html5player=traverse_obj(player, ('assets', 'js')),
        media=extras.get_media(raw, player_response),
        likes=extras.get_likes(body),
        dislikes=extras.get_dislikes(body),
        related_videos=extras.get_related_videos(raw),
    )
    return VideoInfo(
        details=video_details,
        player_response=player_response,
        raw=raw,
        formats=parse_formats(player_response),
        full=False,
    )


def get_basic_info(video_id: str, options: InfoOptions, transport) -> VideoInfo:
    """Gets info from a video without additional formats."""
    if options.config_body is None:
        body = transport.get_text(watch_url(video_id, options.lang), options.request_options)
    else:
        body = options.config_body
    info = got_config(video_id, parse_page(body), body)
    logger.debug("Basic info for %s: %d formats", video_id, len(info.formats))
    return info


def get_full_info(video_id: str, options: InfoOptions, transport) -> VideoInfo:
    """Gets info from a video with manifest formats and deciphered URLs."""
    info = get_basic_info(video_id, options, transport)
    streaming_data = info.streaming_data
    dash_url = streaming_data.get('dashManifestUrl')
    hls_url = streaming_data.get('hlsManifestUrl')

    if not info.formats and not dash_url and not hls_url:
        raise UnavailableError('This video is unavailable')

    if not info.html5player:
        raise DecipherError('Could not find html5player file')
    tokens = sig.get_tokens(urljoin(VIDEO_URL, info.html5player), options, transport)
    formats = sig.decipher_formats(info.formats, tokens, options.debug)

    with ThreadPoolExecutor(max_workers=2) as pool:
        dash_future = pool.submit(get_dash_manifest, dash_url, options, transport) if dash_url else None
        hls_future = pool.submit(get_m3u8, hls_url, options, transport) if hls_url else None
        # DASH is merged before HLS whichever finishes first
        dash_formats = dash_future.result() if dash_future else None
        hls_formats = hls_future.result() if hls_future else None

    formats = merge_formats(formats, dash_formats, hls_formats)
    formats = sorted_formats([add_format_meta(f) for f in formats])
    logger.debug("Full info for %s: %d formats", video_id, len(formats))
    return replace(info, formats=formats, full=True)
