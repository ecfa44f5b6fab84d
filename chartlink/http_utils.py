"""Shared HTTP utilities for the downloaders."""

import time
from email.utils import parsedate_to_datetime

import requests

from chartlink.config import MAX_RETRIES, RATE_LIMIT, USER_AGENT


def create_session(user_agent=USER_AGENT):
    """Create a requests.Session with a User-Agent header."""
    s = requests.Session()
    s.headers["User-Agent"] = user_agent
    return s


def retry_after_seconds(value, default):
    """Seconds to wait for a Retry-After header value.

    The header is either delta-seconds or an HTTP date.  Missing or
    unparseable values give ``default``.
    """
    if not value:
        return default
    try:
        return max(0, int(value))
    except ValueError:
        pass
    try:
        when = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return default
    if when is None:
        return default
    return max(0, int(when.timestamp() - time.time()))


def get_text_with_retry(session, url, params=None, rate_limit=RATE_LIMIT,
                        max_retries=MAX_RETRIES):
    """GET a URL and return the response body, retrying on 429/5xx.

    Any other non-2xx status raises ``requests.HTTPError`` immediately.

    Args:
        session: requests.Session to use
        url: Request URL
        params: Optional query parameters
        rate_limit: Seconds to wait after a successful request
        max_retries: Number of retry attempts before a final raise
    """
    for attempt in range(max_retries):
        resp = session.get(url, params=params)
        if resp.status_code == 429 or resp.status_code >= 500:
            retry_after = retry_after_seconds(resp.headers.get("Retry-After"), 2 ** attempt)
            print(f"    HTTP {resp.status_code} from {url}, retrying in {retry_after}s "
                  f"(attempt {attempt + 1}/{max_retries})")
            time.sleep(retry_after)
            continue
        resp.raise_for_status()
        time.sleep(rate_limit)
        return resp.text
    # Final attempt; let it raise
    resp = session.get(url, params=params)
    resp.raise_for_status()
    time.sleep(rate_limit)
    return resp.text


def progress_line(done, total, elapsed):
    """Format a progress string like ``[done/total pct% elapsed_s eta eta_s]``."""
    pct = done * 100 // total if total else 0
    rate = done / elapsed if elapsed > 0 else 0
    eta = (total - done) / rate if rate > 0 else 0
    return f"[{done}/{total} {pct:>3}% {elapsed:.0f}s eta {eta:.0f}s]"
