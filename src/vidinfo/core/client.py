"""Cached entry points for fetching video info."""

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Optional, Union, Dict, Any

from . import info as info_ops
from .cache import InfoCache
from .errors import VidInfoError
from .ids import get_video_id
from .models import InfoOptions, VideoInfo
from .transport import Transport
from ..utils.logging import log_error

logger = logging.getLogger(__name__)

Callback = Callable[[Optional[BaseException], Optional[VideoInfo]], Any]
OptionsArg = Union[None, InfoOptions, Dict[str, Any], Callback]


def resolved(value) -> Future:
    """An already completed future."""
    future = Future()
    future.set_result(value)
    return future


def failed(exc: BaseException) -> Future:
    future = Future()
    future.set_exception(exc)
    return future


def with_callback(future: Future, callback: Callback) -> Future:
    """Deliver a future's outcome as ``callback(error, result)``."""
    def done(f: Future):
        exc = f.exception()
        if exc is not None:
            callback(exc, None)
        else:
            callback(None, f.result())

    future.add_done_callback(done)
    return future


class InfoClient:
    """Resolves video info, caching records per ``(operation, id, lang)``.

    The cache belongs to the client; share a client (or pass the same cache)
    to share entries. Concurrent requests for the same key are not coalesced.
    """

    def __init__(self, cache: Optional[InfoCache] = None, transport: Optional[Transport] = None,
                 max_workers: int = 4, error_log=None):
        self.cache = cache if cache is not None else InfoCache()
        self.transport = transport or Transport()
        self.error_log = error_log
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="vidinfo")

    @classmethod
    def from_config(cls, config, transport: Optional[Transport] = None) -> "InfoClient":
        """Build a client sized by a :class:`~vidinfo.utils.Config`."""
        return cls(cache=InfoCache(maxsize=config.cache_size), transport=transport,
                   max_workers=config.max_workers, error_log=config.error_log)

    def get_basic_info(self, link: str, options: OptionsArg = None,
                       callback: Optional[Callback] = None) -> Future:
        """Basic info without manifest formats or deciphering."""
        return self._call("get_basic_info", info_ops.get_basic_info, link, options, callback)

    def get_full_info(self, link: str, options: OptionsArg = None,
                      callback: Optional[Callback] = None) -> Future:
        """Info with deciphered URLs and DASH/HLS formats merged in."""
        return self._call("get_full_info", info_ops.get_full_info, link, options, callback)

    def _call(self, name: str, fn, link: str, options: OptionsArg, callback: Optional[Callback]) -> Future:
        if callable(options):
            callback, options = options, None
        future = self._memoized(name, fn, link, options)
        if callback is not None:
            with_callback(future, callback)
        return future

    def _memoized(self, name: str, fn, link: str, options: OptionsArg) -> Future:
        try:
            options = InfoOptions.coerce(options)
            video_id = get_video_id(link)
        except (VidInfoError, TypeError, ValueError) as e:
            return failed(e)

        key = (name, video_id, options.lang or "en")
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug("Cache hit for %s", key)
            return resolved(cached)

        def run():
            try:
                record = fn(video_id, options, self.transport)
            except Exception as e:
                logger.warning("%s(%s) failed: %s", name, video_id, e)
                if self.error_log:
                    log_error(f"{name}({video_id}) failed", e, self.error_log)
                raise
            self.cache.set(key, record)
            return record

        return self._executor.submit(run)

    def close(self):
        """Shut down the worker pool and the HTTP session."""
        self._executor.shutdown(wait=True)
        self.transport.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


def get_basic_info(link: str, options: OptionsArg = None, client: Optional[InfoClient] = None) -> VideoInfo:
    """Blocking helper around :meth:`InfoClient.get_basic_info`."""
    if client is not None:
        return client.get_basic_info(link, options).result()
    with InfoClient() as own:
        return own.get_basic_info(link, options).result()


def get_full_info(link: str, options: OptionsArg = None, client: Optional[InfoClient] = None) -> VideoInfo:
    """Blocking helper around :meth:`InfoClient.get_full_info`."""
    if client is not None:
        return client.get_full_info(link, options).result()
    with InfoClient() as own:
        return own.get_full_info(link, options).result()
