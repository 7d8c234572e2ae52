"""
HTTP fetching for TTML lyric documents.

This module intentionally contains only network logic:
- requests
- retries
- backoff

No parsing. A failed fetch is reported as None, never raised.
"""

from typing import Optional

import requests  # type: ignore[import-untyped]

from ..config import AMLL_DB_SERVER, FETCH_MAX_RETRIES, FETCH_RETRY_DELAY, HTTP_TIMEOUT
from ..exceptions import FetchError
from ..utils.logging import get_logger
from ..utils.retry import retry_call

logger = get_logger(__name__)


def build_url(song_id: str, server: str = AMLL_DB_SERVER) -> str:
    return server.replace("%s", str(song_id))


def _get_text(url: str, session, timeout: float) -> Optional[str]:
    """One GET attempt. Transport errors raise FetchError so they can be retried."""
    try:
        resp = session.get(url, timeout=timeout)
    except requests.exceptions.RequestException as e:
        raise FetchError(f"Request to {url} failed: {e}") from e

    if not 200 <= resp.status_code < 300:
        logger.debug(f"No TTML at {url} (HTTP {resp.status_code})")
        return None
    resp.encoding = "utf-8"
    return resp.text


def fetch_ttml(
    song_id: str,
    *,
    server: str = AMLL_DB_SERVER,
    timeout: float = HTTP_TIMEOUT,
    max_retries: int = FETCH_MAX_RETRIES,
    retry_delay: float = FETCH_RETRY_DELAY,
    session: Optional[requests.Session] = None,
    sleep_fn=None,
) -> Optional[str]:
    """
    Fetch the TTML document for a song id.

    Returns None when the server has no document (non-2xx) or the request
    keeps failing after retries.
    """
    sess = session or requests
    url = build_url(song_id, server)
    extra = {"sleep_fn": sleep_fn} if sleep_fn is not None else {}

    try:
        return retry_call(
            _get_text,
            url,
            sess,
            timeout,
            max_retries=max_retries,
            base_delay=retry_delay,
            exceptions=(FetchError,),
            **extra,
        )
    except FetchError as e:
        logger.warning(f"TTML fetch failed for {song_id}: {e}")
        return None
