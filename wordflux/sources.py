#!/usr/bin/env python3
"""
Dictionary Sources
==================
Default wordlist sources per language and the fetch machinery that
retrieves them.

A fetch capability is any callable ``fetch(source, options)`` returning a
response object with an ``ok`` flag and a ``text()`` method. The default,
``default_fetch``, speaks HTTP(S) through http.client and reads
``file://`` URLs or plain paths from disk.

Fetches run in a thread pool with all-settle semantics: every source is
attempted, failures are isolated per source, and results are handed back
in source order only once every attempt has finished.

Usage:
    fetcher = SourceFetcher(default_fetch)
    for outcome in fetcher.fetch_all(["https://example.org/ru.txt"]):
        if outcome.ok:
            print(outcome.source, len(outcome.text))
"""

import http.client
import logging
import socket
import ssl
import time
from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Callable, Iterable, List, Mapping, Optional, Tuple
from urllib.parse import unquote, urljoin, urlsplit

from .errors import ConfigurationError, SourceFetchError
from .settings import get_setting, require_setting

logger = logging.getLogger(__name__)


# =============================================================================
# Default Sources
# =============================================================================

FREQUENCY_WORDS_BASE = "https://raw.githubusercontent.com/hermitdave/FrequencyWords/master/content/2016"

DEFAULT_SOURCES: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "ru": (f"{FREQUENCY_WORDS_BASE}/ru/ru_50k.txt",),
    "uk": (f"{FREQUENCY_WORDS_BASE}/uk/uk_50k.txt",),
})

SUPPORTED_LANGUAGES: Tuple[str, ...] = tuple(DEFAULT_SOURCES)

# Options passed with every fetch; the default fetch ignores ``cache``
FETCH_OPTIONS = MappingProxyType({"cache": "no-store"})

# socket.timeout is not a TimeoutError before Python 3.10
RETRYABLE_ERRORS = (ConnectionError, TimeoutError, socket.timeout)

REDIRECT_STATUSES = (301, 302, 303, 307, 308)
MAX_REDIRECTS = 5


def check_language(language: str) -> str:
    if language not in DEFAULT_SOURCES:
        supported = ', '.join(SUPPORTED_LANGUAGES)
        raise ConfigurationError(f'Unsupported language "{language}". Supported: {supported}')
    return language


def build_source_list(language: str,
                      extra_sources: Iterable[str] = (),
                      include_defaults: bool = True) -> List[str]:
    """
    Defaults for `language` followed by the extra sources, without duplicates.

    Raises:
        ConfigurationError: unsupported language, or no sources at all
    """
    check_language(language)
    candidates = list(DEFAULT_SOURCES[language]) if include_defaults else []
    candidates.extend(source for source in (extra_sources or ()) if source)
    sources = list(dict.fromkeys(candidates))
    if not sources:
        raise ConfigurationError(f"No dictionary sources provided for {language}.")
    return sources


# =============================================================================
# Default Fetch Capability
# =============================================================================

@dataclass
class HttpResponse:
    """Response returned by default_fetch."""
    source: str
    status: int
    body: bytes
    encoding: str = "utf-8"

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def text(self) -> str:
        """Decode the body; raises UnicodeDecodeError on bad bytes."""
        return self.body.decode(self.encoding)


def _is_local(source: str) -> bool:
    parts = urlsplit(source)
    # one-letter schemes are Windows drive letters
    return parts.scheme in ("", "file") or len(parts.scheme) == 1


def _read_local(source: str) -> HttpResponse:
    parts = urlsplit(source)
    path = Path(unquote(parts.path)) if parts.scheme == "file" else Path(source)
    return HttpResponse(source=source, status=200, body=path.expanduser().read_bytes())


def _read_http(source: str, timeout: float, user_agent: str) -> HttpResponse:
    url = source
    for _ in range(MAX_REDIRECTS + 1):
        parts = urlsplit(url)
        if parts.scheme == "https":
            conn = http.client.HTTPSConnection(
                parts.netloc,
                context=ssl.create_default_context(),
                timeout=timeout
            )
        elif parts.scheme == "http":
            conn = http.client.HTTPConnection(parts.netloc, timeout=timeout)
        else:
            raise ValueError(f"Unsupported URL scheme: {parts.scheme}")

        path = parts.path or "/"
        if parts.query:
            path = f"{path}?{parts.query}"

        try:
            conn.request("GET", path, headers={
                'User-Agent': user_agent,
                'Accept': 'text/plain, */*',
                'Cache-Control': 'no-store',
            })
            response = conn.getresponse()
            location = response.getheader('Location')
            if response.status in REDIRECT_STATUSES and location:
                url = urljoin(url, location)
                continue
            charset = response.headers.get_content_charset() or "utf-8"
            return HttpResponse(source=source, status=response.status,
                                body=response.read(), encoding=charset)
        finally:
            conn.close()

    raise ConnectionError(f"Too many redirects for {source}")


def default_fetch(source: str, options: Optional[Mapping[str, Any]] = None) -> HttpResponse:
    """
    Fetch a wordlist from a URL or a local path.

    Args:
        source: http(s) URL, file:// URL or filesystem path
        options: ``timeout`` and ``user_agent`` override app.yaml

    Returns:
        HttpResponse (check ``ok`` before reading ``text()``)
    """
    options = options or {}
    if _is_local(source):
        return _read_local(source)
    timeout = options.get("timeout") or require_setting("fetch.timeout_seconds")
    user_agent = options.get("user_agent") or require_setting("fetch.user_agent")
    return _read_http(source, timeout, user_agent)


def resolve_fetch(fetch: Optional[Callable] = None) -> Callable:
    """Return the fetch capability to use, failing early if it is unusable."""
    impl = default_fetch if fetch is None else fetch
    if not callable(impl):
        raise ConfigurationError("Fetch capability is not callable. Provide a fetch function.")
    return impl


# =============================================================================
# Retry Logic
# =============================================================================

class RetryHandler:
    """
    Handles retry logic with exponential backoff.

    Usage:
        retry = RetryHandler(max_retries=3, base_delay=1.0)

        result = retry.execute(
            func=fetch,
            args=(source, options),
            retryable_exceptions=(ConnectionError, TimeoutError)
        )
    """

    def __init__(self,
                 max_retries: Optional[int] = None,
                 base_delay: Optional[float] = None,
                 max_delay: Optional[float] = None,
                 exponential_base: Optional[float] = None):
        """
        Initialize retry handler.

        Args:
            max_retries: Maximum number of retry attempts
            base_delay: Initial delay between retries (seconds)
            max_delay: Maximum delay between retries (seconds)
            exponential_base: Base for exponential backoff
        """
        cfg = get_setting("fetch", {}) or {}
        if max_retries is None:
            max_retries = cfg.get("max_retries")
        if base_delay is None:
            base_delay = cfg.get("retry_base_delay")
        if max_delay is None:
            max_delay = cfg.get("retry_max_delay")
        if exponential_base is None:
            exponential_base = cfg.get("retry_exponential_base")
        if max_retries is None or base_delay is None or max_delay is None or exponential_base is None:
            raise ValueError("fetch retry settings must be set in app.yaml")

        self.max_retries = max_retries
        self.base_delay = base_delay
        self.max_delay = max_delay
        self.exponential_base = exponential_base

    def delay_for(self, attempt: int) -> float:
        return min(self.base_delay * (self.exponential_base ** attempt), self.max_delay)

    def execute(self,
                func: Callable,
                args: tuple = (),
                kwargs: dict = None,
                retryable_exceptions: tuple = RETRYABLE_ERRORS) -> Any:
        """
        Execute function with retry logic.

        Raises:
            Last exception if all retries fail
        """
        kwargs = kwargs or {}
        last_exception = None

        for attempt in range(self.max_retries + 1):
            try:
                return func(*args, **kwargs)
            except retryable_exceptions as e:
                last_exception = e

                if attempt < self.max_retries:
                    delay = self.delay_for(attempt)
                    logger.debug(f"Retry {attempt + 1}/{self.max_retries} after {delay:.2f}s: {e}")
                    time.sleep(delay)

        raise last_exception


# =============================================================================
# Parallel Fetching
# =============================================================================

@dataclass
class FetchOutcome:
    """Settled result of fetching one source."""
    source: str
    index: int
    text: Optional[str] = None
    error: Optional[SourceFetchError] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.text is not None


class SourceFetcher:
    """
    Fetches many sources concurrently, isolating failures per source.

    Usage:
        fetcher = SourceFetcher(fetch, max_workers=4)
        outcomes = fetcher.fetch_all(sources)
    """

    def __init__(self,
                 fetch: Optional[Callable] = None,
                 max_workers: Optional[int] = None,
                 retry_handler: RetryHandler = None,
                 options: Optional[Mapping[str, Any]] = None):
        """
        Initialize the fetcher.

        Args:
            fetch: Fetch capability (default: default_fetch)
            max_workers: Max concurrent fetches (default: fetch.max_workers)
            retry_handler: Retry policy for transient transport errors
            options: Extra options passed to every fetch call
        """
        self.fetch = resolve_fetch(fetch)
        if max_workers is None:
            max_workers = require_setting("fetch.max_workers")
        self.max_workers = max_workers
        self.retry_handler = retry_handler or RetryHandler()
        self.options = {**FETCH_OPTIONS, **(options or {})}

    def fetch_text(self, source: str) -> str:
        """
        Fetch one source and read its body.

        Raises:
            SourceFetchError: request failed, non-success status, or unreadable body
        """
        try:
            response = self.retry_handler.execute(self.fetch, args=(source, dict(self.options)))
        except Exception as e:
            raise SourceFetchError(source, f"request failed: {e}") from e

        if response is None or not callable(getattr(response, 'text', None)):
            raise SourceFetchError(source, "invalid response")
        if not getattr(response, 'ok', False):
            status = getattr(response, 'status', None)
            raise SourceFetchError(source, f"response not ok (status {status})")

        try:
            text = response.text()
        except Exception as e:
            raise SourceFetchError(source, f"failed reading body: {e}") from e
        if not isinstance(text, str):
            raise SourceFetchError(source, f"body is not text ({type(text).__name__})")
        return text

    def fetch_all(self, sources: List[str]) -> List[FetchOutcome]:
        """Fetch every source; returns one outcome per source, in input order."""
        if not sources:
            return []

        workers = max(1, min(self.max_workers, len(sources)))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [executor.submit(self.fetch_text, source) for source in sources]
            wait(futures)

        outcomes = []
        for index, (source, future) in enumerate(zip(sources, futures)):
            error = future.exception()
            if error is None:
                outcomes.append(FetchOutcome(source=source, index=index, text=future.result()))
            elif isinstance(error, SourceFetchError):
                outcomes.append(FetchOutcome(source=source, index=index, error=error))
            else:
                outcomes.append(FetchOutcome(
                    source=source, index=index,
                    error=SourceFetchError(source, f"unexpected error: {error}")
                ))
        return outcomes


__all__ = [
    'DEFAULT_SOURCES',
    'SUPPORTED_LANGUAGES',
    'FETCH_OPTIONS',
    'HttpResponse',
    'FetchOutcome',
    'RetryHandler',
    'SourceFetcher',
    'build_source_list',
    'check_language',
    'default_fetch',
    'resolve_fetch',
]
