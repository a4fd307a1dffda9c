# sword_drill/utils/http_retry.py
"""
HTTP GET with retries, used to download verse sources for import.

    response = get_with_retry("https://example.org/kjv.json")
    data = response.json()

429 and 5xx responses and connection failures are retried with exponential
backoff (a 429's Retry-After wins when it is an integer). Timeouts and other
4xx responses fail at once. Every failure surfaces as RuntimeError.
"""

import logging
import time
from typing import Optional

import requests

logger = logging.getLogger(__name__)

MAX_BACKOFF = 30


def _backoff(attempt: int, retry_after: Optional[str] = None) -> int:
    if retry_after and retry_after.isdigit():
        return int(retry_after)
    return min(2 ** attempt, MAX_BACKOFF)


def _is_retryable(status_code: int) -> bool:
    return status_code == 429 or status_code >= 500


def get_with_retry(
    url: str,
    headers: Optional[dict] = None,
    timeout: int = 60,
    max_retries: int = 3,
) -> requests.Response:
    """
    GET `url`, retrying transient failures up to `max_retries` attempts.

    Raises:
        RuntimeError: On timeout, a non-retryable error status, or when
            every attempt failed
    """
    last_status = None

    for attempt in range(max_retries):
        is_last = attempt == max_retries - 1
        try:
            response = requests.get(url, headers=headers, timeout=timeout)
        except requests.Timeout:
            raise RuntimeError(f"Request to {url} timed out after {timeout}s")
        except requests.ConnectionError as e:
            if is_last:
                raise RuntimeError(f"Connection to {url} failed after {max_retries} attempts: {e}")
            wait = _backoff(attempt)
            logger.warning(f"Connection error to {url}, retrying in {wait}s: {e}")
            time.sleep(wait)
            continue

        if not _is_retryable(response.status_code):
            try:
                response.raise_for_status()
            except requests.HTTPError as e:
                raise RuntimeError(f"HTTP error from {url}: {e}")
            return response

        last_status = response.status_code
        if not is_last:
            wait = _backoff(attempt, response.headers.get("retry-after"))
            logger.warning(
                f"{url} returned {last_status}, retrying in {wait}s "
                f"(attempt {attempt + 1}/{max_retries})"
            )
            time.sleep(wait)

    raise RuntimeError(
        f"Request to {url} failed after {max_retries} attempts (last status: {last_status})"
    )
