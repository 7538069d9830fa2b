"""Best-effort extraction of secondary page metadata.

Nothing here raises on missing data: absent sections yield empty values.
"""

import re
from typing import Any, Dict, List, Optional

from yt_dlp.utils import int_or_none, str_to_int, traverse_obj

BASE_URL = 'https://www.youtube.com'

_LIKES = re.compile(r'"label":\s*"([\d,.]+) likes"')
_DISLIKES = re.compile(r'"label":\s*"([\d,.]+) dislikes"')

_WATCH_CONTENTS = ('response', 'contents', 'twoColumnWatchNextResults', 'results', 'results', 'contents')
_RELATED = ('response', 'contents', 'twoColumnWatchNextResults', 'secondaryResults',
            'secondaryResults', 'results')


def _text(obj) -> Optional[str]:
    """Read a ``simpleText`` or ``runs`` text object."""
    if not isinstance(obj, dict):
        return None
    if 'simpleText' in obj:
        return obj['simpleText']
    runs = obj.get('runs')
    if runs:
        return ''.join(run.get('text', '') for run in runs)
    return None


def _absolute(path: Optional[str]) -> Optional[str]:
    if not path:
        return None
    return path if path.startswith('http') else BASE_URL + path


def get_author(raw: Dict[str, Any], player_response: Dict[str, Any]) -> Dict[str, Any]:
    """Channel of the uploader."""
    details = player_response.get('videoDetails') or {}
    microformat = traverse_obj(player_response, ('microformat', 'playerMicroformatRenderer')) or {}
    owner = traverse_obj(raw, (*_WATCH_CONTENTS, ..., 'videoSecondaryInfoRenderer', 'owner',
                               'videoOwnerRenderer'), get_all=False) or {}
    channel_id = details.get('channelId') or microformat.get('externalChannelId')
    if not channel_id and not details.get('author'):
        return {}
    return {
        'id': channel_id,
        'name': details.get('author') or microformat.get('ownerChannelName'),
        'user': (microformat.get('ownerProfileUrl') or '').rstrip('/').split('/')[-1] or None,
        'channel_url': f'{BASE_URL}/channel/{channel_id}' if channel_id else None,
        'user_url': _absolute(microformat.get('ownerProfileUrl')),
        'avatar': traverse_obj(owner, ('thumbnail', 'thumbnails', -1, 'url')),
        'subscriber_count': _text(owner.get('subscriberCountText')),
    }


def get_media(raw: Dict[str, Any], player_response: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Metadata rows under the description (song, artist, game...)."""
    media = {}
    rows = traverse_obj(raw, (*_WATCH_CONTENTS, ..., 'videoSecondaryInfoRenderer', 'metadataRowContainer',
                              'metadataRowContainerRenderer', 'rows', ..., 'metadataRowRenderer')) or []
    for row in rows:
        title = _text(row.get('title'))
        contents = row.get('contents') or []
        if not title or not contents:
            continue
        media[title.lower()] = _text(contents[0])
        url = traverse_obj(contents[0], ('runs', 0, 'navigationEndpoint', 'commandMetadata',
                                         'webCommandMetadata', 'url'))
        if url:
            media[f'{title.lower()}_url'] = _absolute(url)
    category = traverse_obj(player_response, ('microformat', 'playerMicroformatRenderer', 'category'))
    if category and 'category' not in media:
        media['category'] = category
    return media


def get_related_videos(raw: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Videos listed in the sidebar."""
    videos = []
    for renderer in traverse_obj(raw, (*_RELATED, ..., 'compactVideoRenderer')) or []:
        video_id = renderer.get('videoId')
        if not video_id:
            continue
        videos.append({
            'id': video_id,
            'title': _text(renderer.get('title')),
            'author': _text(renderer.get('shortBylineText')),
            'length_seconds': _length(_text(renderer.get('lengthText'))),
            'view_count': _count(_text(renderer.get('viewCountText'))),
            'thumbnail': traverse_obj(renderer, ('thumbnail', 'thumbnails', -1, 'url')),
        })
    return videos


def _count(text: Optional[str]) -> Optional[int]:
    # '1,234,567 views' -> 1234567
    if not text:
        return None
    return str_to_int(re.sub(r'[^\d,.]', '', text))


def _length(text: Optional[str]) -> Optional[int]:
    if not text:
        return None
    seconds = 0
    for part in text.split(':'):
        value = int_or_none(part)
        if value is None:
            return None
        seconds = seconds * 60 + value
    return seconds


def get_likes(body: str) -> Optional[int]:
    match = _LIKES.search(body or '')
    return str_to_int(match.group(1)) if match else None


def get_dislikes(body: str) -> Optional[int]:
    match = _DISLIKES.search(body or '')
    return str_to_int(match.group(1)) if match else None
