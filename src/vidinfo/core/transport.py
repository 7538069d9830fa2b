"""HTTP transport built on a retrying requests session."""

import logging
from typing import Optional, Dict, Any, Iterator

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .errors import TransportError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30
CHUNK_SIZE = 1024 * 64

# Keys of request_options forwarded to requests
_PASSTHROUGH = ("headers", "proxies", "cookies", "timeout", "params", "verify")


class Transport:
    """Issues GET requests, buffered or streamed."""

    def __init__(self, session: Optional[requests.Session] = None, retries: int = 3,
                 headers: Optional[Dict[str, str]] = None):
        if session is None:
            session = requests.Session()
            retry = Retry(total=retries, backoff_factor=1, status_forcelist=[500, 502, 503, 504])
            session.mount('https://', HTTPAdapter(max_retries=retry))
            session.mount('http://', HTTPAdapter(max_retries=retry))
        self.session = session
        if headers:
            self.session.headers.update(headers)

    def _request_kwargs(self, request_options: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        kwargs = {"timeout": DEFAULT_TIMEOUT}
        for key, value in (request_options or {}).items():
            if key in _PASSTHROUGH:
                kwargs[key] = value
        return kwargs

    def get_text(self, url: str, request_options: Optional[Dict[str, Any]] = None) -> str:
        """Fetch a URL and return its decoded body."""
        logger.debug("GET %s", url)
        try:
            resp = self.session.get(url, **self._request_kwargs(request_options))
            resp.raise_for_status()
        except requests.HTTPError as e:
            raise TransportError(f"Status code: {e.response.status_code}", original_error=e,
                                 status_code=e.response.status_code)
        except requests.RequestException as e:
            raise TransportError(f"Request to {url} failed: {e}", original_error=e)
        return resp.text

    def iter_chunks(self, url: str, request_options: Optional[Dict[str, Any]] = None) -> Iterator[bytes]:
        """Stream a URL body chunk by chunk."""
        logger.debug("GET (stream) %s", url)
        try:
            with self.session.get(url, stream=True, **self._request_kwargs(request_options)) as r:
                r.raise_for_status()
                for chunk in r.iter_content(chunk_size=CHUNK_SIZE):
                    if chunk:
                        yield chunk
        except requests.HTTPError as e:
            raise TransportError(f"Status code: {e.response.status_code}", original_error=e,
                                 status_code=e.response.status_code)
        except requests.RequestException as e:
            raise TransportError(f"Request to {url} failed: {e}", original_error=e)

    def close(self):
        self.session.close()
