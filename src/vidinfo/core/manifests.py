"""Parsers for the auxiliary DASH and HLS manifests."""

import logging
import re
import xml.etree.ElementTree as ET
from contextlib import closing
from typing import Dict, Iterable, Union
from urllib.parse import urljoin

from .errors import ParseError
from .models import Format, InfoOptions

logger = logging.getLogger(__name__)

VIDEO_URL = 'https://www.youtube.com/watch?v='

_URL_LINE = re.compile(r'https?://')
_ITAG_SEGMENT = re.compile(r'/itag/(\d+)/')


def _local_name(tag: str) -> str:
    # '{urn:mpeg:dash:schema:mpd:2011}Representation' -> 'representation'
    return tag.rsplit('}', 1)[-1].lower()


def parse_dash_manifest(chunks: Iterable[Union[bytes, str]], url: str) -> Dict[str, Format]:
    """Incrementally parse a DASH manifest into ``itag -> {itag, url}``.

    Every ``Representation`` element contributes one stub keyed by its ``id``
    attribute. The recorded url is the manifest's own, not a per-stream one.
    """
    formats = {}
    parser = ET.XMLPullParser(events=('start',))

    def collect():
        for _, elem in parser.read_events():
            if _local_name(elem.tag) == 'representation':
                itag = elem.get('id')
                if itag:
                    formats[itag] = {'itag': itag, 'url': url}

    try:
        for chunk in chunks:
            parser.feed(chunk)
            collect()
        parser.close()
        collect()
    except ET.ParseError as e:
        raise ParseError(f"Error parsing DASH manifest: {e}", original_error=e)
    return formats


def parse_hls_playlist(body: str, url: str = None) -> Dict[str, Format]:
    """Parse an HLS playlist into ``itag -> {itag, url}``.

    Only absolute http(s) lines are considered; directives and comments are skipped.
    """
    formats = {}
    for line in body.split('\n'):
        line = line.strip()
        if not _URL_LINE.search(line):
            continue
        match = _ITAG_SEGMENT.search(line)
        if not match:
            raise ParseError(f"No itag found in playlist line: {line}")
        itag = match.group(1)
        formats[itag] = {'itag': itag, 'url': line}
    return formats


def get_dash_manifest(url: str, options: InfoOptions, transport) -> Dict[str, Format]:
    """Download and parse the DASH manifest."""
    url = urljoin(VIDEO_URL, url)
    # Closing the stream releases the response even when parsing fails
    with closing(transport.iter_chunks(url, options.request_options)) as chunks:
        formats = parse_dash_manifest(chunks, url)
    logger.debug("DASH manifest yielded %d formats", len(formats))
    return formats


def get_m3u8(url: str, options: InfoOptions, transport) -> Dict[str, Format]:
    """Download and parse the HLS playlist."""
    url = urljoin(VIDEO_URL, url)
    body = transport.get_text(url, options.request_options)
    formats = parse_hls_playlist(body, url)
    logger.debug("HLS playlist yielded %d formats", len(formats))
    return formats
