import json
from urllib.parse import urlencode

import pytest

from vidinfo.core import sig
from vidinfo.core.errors import TransportError

VIDEO_ID = "dQw4w9WgXcQ"
PLAYER_JS_PATH = "/s/player/abc123/player_ias.vflset/en_US/base.js"
DASH_URL = "https://manifest.googlevideo.com/api/manifest/dash/id/abc/source/youtube"
HLS_URL = "https://manifest.googlevideo.com/api/manifest/hls_variant/id/abc/source/youtube"

PLAYER_JS = (
    'var Xy={ab:function(a){a.reverse()},'
    'cd:function(a,b){a.splice(0,b)},'
    'ef:function(a,b){var c=a[0];a[0]=a[b%a.length];a[b%a.length]=c}};'
    'Zk=function(a){a=a.split("");Xy.ef(a,3);Xy.ab(a,7);Xy.cd(a,2);return a.join("")};'
)

DASH_MPD = """<?xml version="1.0" encoding="UTF-8"?>
<MPD xmlns="urn:mpeg:dash:schema:mpd:2011" type="static">
  <Period>
    <AdaptationSet mimeType="video/mp4">
      <Representation id="18" bandwidth="500000"><BaseURL>https://r1.googlevideo.com/18</BaseURL></Representation>
      <Representation id="137" bandwidth="2500000"><BaseURL>https://r1.googlevideo.com/137</BaseURL></Representation>
    </AdaptationSet>
  </Period>
</MPD>
"""

HLS_PLAYLIST = """#EXTM3U
#EXT-X-INDEPENDENT-SEGMENTS
#EXT-X-STREAM-INF:BANDWIDTH=1500000,CODECS="avc1.4d401f,mp4a.40.2",RESOLUTION=640x360
https://manifest.googlevideo.com/api/manifest/hls_playlist/id/abc/itag/93/source/yt/playlist/index.m3u8
#EXT-X-STREAM-INF:BANDWIDTH=4500000,CODECS="avc1.4d401f,mp4a.40.2",RESOLUTION=1920x1080
https://manifest.googlevideo.com/api/manifest/hls_playlist/id/abc/itag/137/source/yt/playlist/index.m3u8
"""


class FakeTransport:
    """Serves canned bodies by URL prefix and records every request."""

    def __init__(self, routes=None, chunk_size=64):
        self.routes = dict(routes or {})
        self.chunk_size = chunk_size
        self.requests = []

    def _lookup(self, url):
        self.requests.append(url)
        for prefix, body in self.routes.items():
            if url.startswith(prefix):
                if isinstance(body, Exception):
                    raise body
                return body
        raise TransportError(f"Status code: 404 for {url}", status_code=404)

    def get_text(self, url, request_options=None):
        return self._lookup(url)

    def iter_chunks(self, url, request_options=None):
        body = self._lookup(url).encode("utf-8")
        for i in range(0, len(body), self.chunk_size):
            yield body[i:i + self.chunk_size]

    def count(self, prefix):
        return sum(1 for url in self.requests if url.startswith(prefix))

    def close(self):
        pass


def cipher(url, s, sp="sig"):
    return urlencode({"s": s, "sp": sp, "url": url})


def make_player_response(formats=None, adaptive_formats=None, dash_url=None, hls_url=None,
                         status="OK", reason=None, streaming=True):
    player_response = {
        "playabilityStatus": {"status": status},
        "videoDetails": {
            "videoId": VIDEO_ID,
            "title": "Never Gonna Give You Up",
            "lengthSeconds": "212",
            "channelId": "UCuAXFkgsw1L7xaCfnd5JJOw",
            "shortDescription": "The official video",
            "author": "Rick Astley",
        },
        "microformat": {
            "playerMicroformatRenderer": {
                "publishDate": "2009-10-24",
                "ownerProfileUrl": "http://www.youtube.com/user/RickAstleyVEVO",
                "category": "Music",
            },
        },
    }
    if reason is not None:
        player_response["playabilityStatus"]["reason"] = reason
    if streaming:
        streaming_data = {}
        if formats is not None:
            streaming_data["formats"] = formats
        if adaptive_formats is not None:
            streaming_data["adaptiveFormats"] = adaptive_formats
        if dash_url:
            streaming_data["dashManifestUrl"] = dash_url
        if hls_url:
            streaming_data["hlsManifestUrl"] = hls_url
        player_response["streamingData"] = streaming_data
    return player_response


def make_page(player_response, as_string=False, is_embed=False, extra_parts=()):
    """Build a watch page body: a JSON array of partial configs."""
    value = json.dumps(player_response) if as_string else player_response
    parts = [
        {"page": "watch"},
        {"player": {"args": {"player_response": value}, "assets": {"js": PLAYER_JS_PATH}}},
    ]
    if is_embed:
        parts.append({"player": {"args": {"is_embed": "1"}}})
    parts.extend(extra_parts)
    return json.dumps(parts)


@pytest.fixture(autouse=True)
def clear_token_cache():
    sig.token_cache.clear()
    yield
    sig.token_cache.clear()


@pytest.fixture
def primary_formats():
    return [
        {
            "itag": 18,
            "mimeType": 'video/mp4; codecs="avc1.42001E, mp4a.40.2"',
            "qualityLabel": "360p",
            "bitrate": 500000,
            "audioQuality": "AUDIO_QUALITY_LOW",
            "signatureCipher": cipher("https://r1.googlevideo.com/videoplayback?itag=18", "abcdefghij"),
        },
    ]


@pytest.fixture
def adaptive_formats():
    return [
        {
            "itag": 140,
            "mimeType": 'audio/mp4; codecs="mp4a.40.2"',
            "bitrate": 130000,
            "audioQuality": "AUDIO_QUALITY_MEDIUM",
            "url": "https://r1.googlevideo.com/videoplayback?itag=140",
        },
    ]


@pytest.fixture
def watch_page(primary_formats, adaptive_formats):
    return make_page(make_player_response(primary_formats, adaptive_formats, DASH_URL, HLS_URL))


@pytest.fixture
def transport(watch_page):
    return FakeTransport({
        "https://www.youtube.com/watch": watch_page,
        "https://www.youtube.com" + PLAYER_JS_PATH: PLAYER_JS,
        DASH_URL: DASH_MPD,
        HLS_URL: HLS_PLAYLIST,
    })
