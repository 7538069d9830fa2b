"""Video id and URL validation."""

import re
from urllib.parse import urlparse, parse_qs

from .errors import ValidationError

ID_REGEX = re.compile(r'^[a-zA-Z0-9_-]{11}$')

VALID_QUERY_DOMAINS = {
    'youtube.com',
    'www.youtube.com',
    'm.youtube.com',
    'music.youtube.com',
    'gaming.youtube.com',
}

VALID_PATH_DOMAINS = re.compile(r'^https?://(youtu\.be/|(www\.)?youtube(-nocookie)?\.com/(embed|v|shorts)/)')


def validate_id(video_id: str) -> bool:
    """Whether the string looks like a video id."""
    return bool(ID_REGEX.match(video_id or ''))


def get_url_video_id(link: str) -> str:
    """Extract the video id from a watch, embed, shorts or short link."""
    if not isinstance(link, str):
        raise ValidationError(f"Expected a video id or URL string, got {type(link).__name__}")
    parsed = urlparse(link.strip())
    video_id = (parse_qs(parsed.query).get('v') or [None])[0]
    if VALID_PATH_DOMAINS.match(link.strip()) and not video_id:
        paths = parsed.path.split('/')
        video_id = paths[-1] if parsed.netloc == 'youtu.be' else paths[2] if len(paths) > 2 else None
    elif parsed.hostname and parsed.hostname not in VALID_QUERY_DOMAINS:
        raise ValidationError('Not a YouTube domain')
    if not video_id:
        raise ValidationError(f'No video id found: {link}')
    video_id = video_id[:11]
    if not validate_id(video_id):
        raise ValidationError(f'Video id ({video_id}) does not match expected format ({ID_REGEX.pattern})')
    return video_id


def validate_url(link: str) -> bool:
    """Whether the URL points at a video."""
    try:
        get_url_video_id(link)
        return True
    except ValidationError:
        return False


def get_video_id(value: str) -> str:
    """Accept either a bare id or a URL."""
    if not isinstance(value, str):
        raise ValidationError(f"Expected a video id or URL string, got {type(value).__name__}")
    if validate_id(value):
        return value
    return get_url_video_id(value)
