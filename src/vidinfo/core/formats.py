"""Format metadata enrichment and ordering."""

import re
from functools import cmp_to_key
from typing import Dict, Any, List, Optional

from .models import Format

# Known itags. Manifest stubs carry only an itag and a url, so this is
# where their mimeType and quality come from.
FORMATS: Dict[int, Dict[str, Any]] = {
    5: {'mimeType': 'video/flv; codecs="Sorenson H.283, mp3"', 'qualityLabel': '240p', 'bitrate': 250000, 'audioBitrate': 64},
    6: {'mimeType': 'video/flv; codecs="Sorenson H.263, mp3"', 'qualityLabel': '270p', 'bitrate': 800000, 'audioBitrate': 64},
    13: {'mimeType': 'video/3gp; codecs="MPEG-4 Visual, aac"', 'qualityLabel': None, 'bitrate': 500000, 'audioBitrate': None},
    17: {'mimeType': 'video/3gp; codecs="MPEG-4 Visual, aac"', 'qualityLabel': '144p', 'bitrate': 50000, 'audioBitrate': 24},
    18: {'mimeType': 'video/mp4; codecs="H.264, aac"', 'qualityLabel': '360p', 'bitrate': 500000, 'audioBitrate': 96},
    22: {'mimeType': 'video/mp4; codecs="H.264, aac"', 'qualityLabel': '720p', 'bitrate': 2000000, 'audioBitrate': 192},
    34: {'mimeType': 'video/flv; codecs="H.264, aac"', 'qualityLabel': '360p', 'bitrate': 500000, 'audioBitrate': 128},
    35: {'mimeType': 'video/flv; codecs="H.264, aac"', 'qualityLabel': '480p', 'bitrate': 800000, 'audioBitrate': 128},
    36: {'mimeType': 'video/3gp; codecs="MPEG-4 Visual, aac"', 'qualityLabel': '240p', 'bitrate': 175000, 'audioBitrate': 32},
    37: {'mimeType': 'video/mp4; codecs="H.264, aac"', 'qualityLabel': '1080p', 'bitrate': 3000000, 'audioBitrate': 192},
    38: {'mimeType': 'video/mp4; codecs="H.264, aac"', 'qualityLabel': '3072p', 'bitrate': 3500000, 'audioBitrate': 192},
    43: {'mimeType': 'video/webm; codecs="VP8, vorbis"', 'qualityLabel': '360p', 'bitrate': 500000, 'audioBitrate': 128},
    44: {'mimeType': 'video/webm; codecs="VP8, vorbis"', 'qualityLabel': '480p', 'bitrate': 1000000, 'audioBitrate': 128},
    45: {'mimeType': 'video/webm; codecs="VP8, vorbis"', 'qualityLabel': '720p', 'bitrate': 2000000, 'audioBitrate': 192},
    46: {'mimeType': 'audio/webm; codecs="vp8, vorbis"', 'qualityLabel': '1080p', 'bitrate': None, 'audioBitrate': 192},
    82: {'mimeType': 'video/mp4; codecs="H.264, aac"', 'qualityLabel': '360p', 'bitrate': 500000, 'audioBitrate': 96},
    83: {'mimeType': 'video/mp4; codecs="H.264, aac"', 'qualityLabel': '240p', 'bitrate': 500000, 'audioBitrate': 96},
    84: {'mimeType': 'video/mp4; codecs="H.264, aac"', 'qualityLabel': '720p', 'bitrate': 2000000, 'audioBitrate': 192},
    85: {'mimeType': 'video/mp4; codecs="H.264, aac"', 'qualityLabel': '1080p', 'bitrate': 3000000, 'audioBitrate': 192},
    91: {'mimeType': 'video/ts; codecs="H.264, aac"', 'qualityLabel': '144p', 'bitrate': 100000, 'audioBitrate': 48},
    92: {'mimeType': 'video/ts; codecs="H.264, aac"', 'qualityLabel': '240p', 'bitrate': 150000, 'audioBitrate': 48},
    93: {'mimeType': 'video/ts; codecs="H.264, aac"', 'qualityLabel': '360p', 'bitrate': 500000, 'audioBitrate': 128},
    94: {'mimeType': 'video/ts; codecs="H.264, aac"', 'qualityLabel': '480p', 'bitrate': 800000, 'audioBitrate': 128},
    95: {'mimeType': 'video/ts; codecs="H.264, aac"', 'qualityLabel': '720p', 'bitrate': 1500000, 'audioBitrate': 256},
    96: {'mimeType': 'video/ts; codecs="H.264, aac"', 'qualityLabel': '1080p', 'bitrate': 2500000, 'audioBitrate': 256},
    133: {'mimeType': 'video/mp4; codecs="H.264"', 'qualityLabel': '240p', 'bitrate': 300000, 'audioBitrate': None},
    134: {'mimeType': 'video/mp4; codecs="H.264"', 'qualityLabel': '360p', 'bitrate': 400000, 'audioBitrate': None},
    135: {'mimeType': 'video/mp4; codecs="H.264"', 'qualityLabel': '480p', 'bitrate': 500000, 'audioBitrate': None},
    136: {'mimeType': 'video/mp4; codecs="H.264"', 'qualityLabel': '720p', 'bitrate': 1000000, 'audioBitrate': None},
    137: {'mimeType': 'video/mp4; codecs="H.264"', 'qualityLabel': '1080p', 'bitrate': 2500000, 'audioBitrate': None},
    138: {'mimeType': 'video/mp4; codecs="H.264"', 'qualityLabel': '4320p', 'bitrate': 13500000, 'audioBitrate': None},
    139: {'mimeType': 'audio/mp4; codecs="aac"', 'qualityLabel': None, 'bitrate': None, 'audioBitrate': 48},
    140: {'mimeType': 'audio/mp4; codecs="aac"', 'qualityLabel': None, 'bitrate': None, 'audioBitrate': 128},
    141: {'mimeType': 'audio/mp4; codecs="aac"', 'qualityLabel': None, 'bitrate': None, 'audioBitrate': 256},
    151: {'mimeType': 'video/ts; codecs="H.264, aac"', 'qualityLabel': '720p', 'bitrate': 50000, 'audioBitrate': 24},
    160: {'mimeType': 'video/mp4; codecs="H.264"', 'qualityLabel': '144p', 'bitrate': 100000, 'audioBitrate': None},
    171: {'mimeType': 'audio/webm; codecs="vorbis"', 'qualityLabel': None, 'bitrate': None, 'audioBitrate': 128},
    172: {'mimeType': 'audio/webm; codecs="vorbis"', 'qualityLabel': None, 'bitrate': None, 'audioBitrate': 192},
    242: {'mimeType': 'video/webm; codecs="VP9"', 'qualityLabel': '240p', 'bitrate': 100000, 'audioBitrate': None},
    243: {'mimeType': 'video/webm; codecs="VP9"', 'qualityLabel': '360p', 'bitrate': 250000, 'audioBitrate': None},
    244: {'mimeType': 'video/webm; codecs="VP9"', 'qualityLabel': '480p', 'bitrate': 500000, 'audioBitrate': None},
    247: {'mimeType': 'video/webm; codecs="VP9"', 'qualityLabel': '720p', 'bitrate': 700000, 'audioBitrate': None},
    248: {'mimeType': 'video/webm; codecs="VP9"', 'qualityLabel': '1080p', 'bitrate': 1500000, 'audioBitrate': None},
    249: {'mimeType': 'audio/webm; codecs="opus"', 'qualityLabel': None, 'bitrate': None, 'audioBitrate': 48},
    250: {'mimeType': 'audio/webm; codecs="opus"', 'qualityLabel': None, 'bitrate': None, 'audioBitrate': 64},
    251: {'mimeType': 'audio/webm; codecs="opus"', 'qualityLabel': None, 'bitrate': None, 'audioBitrate': 160},
    264: {'mimeType': 'video/mp4; codecs="H.264"', 'qualityLabel': '1440p', 'bitrate': 4000000, 'audioBitrate': None},
    266: {'mimeType': 'video/mp4; codecs="H.264"', 'qualityLabel': '2160p', 'bitrate': 12500000, 'audioBitrate': None},
    271: {'mimeType': 'video/webm; codecs="VP9"', 'qualityLabel': '1440p', 'bitrate': 9000000, 'audioBitrate': None},
    278: {'mimeType': 'video/webm; codecs="VP9"', 'qualityLabel': '144p', 'bitrate': 80000, 'audioBitrate': None},
    298: {'mimeType': 'video/mp4; codecs="H.264"', 'qualityLabel': '720p', 'bitrate': 3000000, 'audioBitrate': None},
    299: {'mimeType': 'video/mp4; codecs="H.264"', 'qualityLabel': '1080p', 'bitrate': 5500000, 'audioBitrate': None},
    302: {'mimeType': 'video/webm; codecs="VP9"', 'qualityLabel': '720p HFR', 'bitrate': 2500000, 'audioBitrate': None},
    303: {'mimeType': 'video/webm; codecs="VP9"', 'qualityLabel': '1080p HFR', 'bitrate': 5000000, 'audioBitrate': None},
    308: {'mimeType': 'video/webm; codecs="VP9"', 'qualityLabel': '1440p HFR', 'bitrate': 10000000, 'audioBitrate': None},
    313: {'mimeType': 'video/webm; codecs="VP9"', 'qualityLabel': '2160p', 'bitrate': 13000000, 'audioBitrate': None},
    315: {'mimeType': 'video/webm; codecs="VP9"', 'qualityLabel': '2160p HFR', 'bitrate': 20000000, 'audioBitrate': None},
}

AUDIO_ENCODING_RANKS = ['mp4a', 'mp3', 'vorbis', 'aac', 'opus', 'flac']
VIDEO_ENCODING_RANKS = ['mp4v', 'avc1', 'Sorenson H.283', 'MPEG-4 Visual', 'VP8', 'VP9', 'H.264']

_CODECS = re.compile(r'codecs="([^"]*)"')
_LIVE = re.compile(r'\bsource[/=]yt_live_broadcast\b')
_HLS = re.compile(r'/manifest/hls_(variant|playlist)/')
_DASH_MPD = re.compile(r'/manifest/dash/')


def _itag_int(itag) -> Optional[int]:
    try:
        return int(itag)
    except (TypeError, ValueError):
        return None


def add_format_meta(fmt: Format) -> Format:
    """Return a copy of the format with derived fields filled in."""
    result = dict(FORMATS.get(_itag_int(fmt.get('itag')), {}))
    result.update(fmt)

    mime_type = result.get('mimeType')
    url = result.get('url') or ''
    codecs_match = _CODECS.search(mime_type) if mime_type else None
    codecs = codecs_match.group(1) if codecs_match else None

    result['has_video'] = bool(result.get('qualityLabel'))
    result['has_audio'] = bool(result.get('audioBitrate') or result.get('audioQuality'))
    result['container'] = mime_type.split(';')[0].split('/')[-1] if mime_type else None
    result['codecs'] = codecs
    result['video_codec'] = codecs.split(', ')[0] if result['has_video'] and codecs else None
    result['audio_codec'] = codecs.split(', ')[-1] if result['has_audio'] and codecs else None
    result['is_live'] = bool(_LIVE.search(url))
    result['is_hls'] = bool(_HLS.search(url))
    result['is_dash_mpd'] = bool(_DASH_MPD.search(url))
    return result


def _resolution(fmt: Format) -> int:
    label = fmt.get('qualityLabel') or ''
    match = re.match(r'\d+', label)
    return int(match.group(0)) if match else 0


def _rank(codecs: Optional[str], ranks: List[str]) -> int:
    for i, enc in enumerate(ranks):
        if codecs and enc in codecs:
            return i
    return -1


_SORT_KEYS = (
    lambda f: int(bool(f.get('has_video') and f.get('has_audio'))),
    _resolution,
    lambda f: int(f.get('bitrate') or 0),
    lambda f: int(f.get('audioBitrate') or 0),
    lambda f: _rank(f.get('codecs'), VIDEO_ENCODING_RANKS),
    lambda f: _rank(f.get('codecs'), AUDIO_ENCODING_RANKS),
)


def sort_formats(a: Format, b: Format) -> int:
    """Comparator placing the best format first."""
    for key in _SORT_KEYS:
        res = key(b) - key(a)
        if res:
            return res
    return 0


def sorted_formats(formats: List[Format]) -> List[Format]:
    return sorted(formats, key=cmp_to_key(sort_formats))
