"""
HTTP GET with retries and exponential backoff for external APIs.
Retries on timeouts, connection errors and retryable status codes (429, 5xx).
"""
import logging
import time
from typing import Optional, Tuple

import requests

logger = logging.getLogger(__name__)

DEFAULT_MAX_RETRIES = 3
DEFAULT_INITIAL_BACKOFF = 1.0
RETRYABLE_STATUS = frozenset({429, 500, 502, 503, 504})


def _redact(url: str) -> str:
    return url.split("?", 1)[0][:80]


def get_with_retries(
    url: str,
    params: Optional[dict] = None,
    timeout: int = 10,
    max_retries: int = DEFAULT_MAX_RETRIES,
    initial_backoff: float = DEFAULT_INITIAL_BACKOFF,
) -> Tuple[Optional[requests.Response], Optional[str]]:
    """
    Returns (response, None) once a non-retryable response arrives,
    (None, error_message) when every attempt failed.
    A retryable status on the last attempt is returned as a response.
    """
    params = params or {}
    last_error: Optional[str] = None
    for attempt in range(max_retries):
        try:
            resp = requests.get(url, params=params, timeout=timeout)
            if resp.status_code not in RETRYABLE_STATUS or attempt == max_retries - 1:
                return (resp, None)
            last_error = f"HTTP {resp.status_code}"
        except requests.Timeout as e:
            last_error = f"Read timed out: {e}"
        except requests.RequestException as e:
            last_error = f"{type(e).__name__}: {e}"
        logger.warning(
            "EXTERNAL_API retry attempt=%s/%s url=%s error=%s",
            attempt + 1, max_retries, _redact(url), last_error,
        )
        if attempt < max_retries - 1:
            delay = initial_backoff * (2 ** attempt)
            logger.info("EXTERNAL_API backoff %.1fs before retry", delay)
            time.sleep(delay)
    return (None, last_error)
