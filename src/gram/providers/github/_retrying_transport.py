"""httpx async transport wrapper with retry, backoff, and rate-limit handling."""

from __future__ import annotations

import asyncio
import logging
import random
import time
from email.utils import parsedate_to_datetime

import httpx

_LOG = logging.getLogger(__name__)

# Status codes considered transient and eligible for automatic retry.
_RETRYABLE_STATUS_CODES = frozenset({500, 502, 503, 504})

# Longest pause honored for a single rate-limit window.
_MAX_RATE_LIMIT_PAUSE = 60.0


def is_rate_limited(response: httpx.Response) -> bool:
    """GitHub signals primary rate limits with 403 and secondary ones with 429."""
    if response.status_code == 429:
        return True
    return response.status_code == 403 and response.headers.get("X-RateLimit-Remaining") == "0"


def parse_retry_after(response: httpx.Response) -> float | None:
    """Seconds to wait before retrying, from ``Retry-After`` or ``X-RateLimit-Reset``.

    ``Retry-After`` may be delay-seconds or an HTTP-date. An unparsable value
    falls through to the reset epoch.
    """
    raw = response.headers.get("Retry-After")
    if raw is not None:
        try:
            return max(0.0, float(raw))
        except ValueError:
            pass
        try:
            return max(0.0, parsedate_to_datetime(raw).timestamp() - time.time())
        except (TypeError, ValueError):
            _LOG.debug("Ignoring unparsable Retry-After header %r", raw)
    reset = response.headers.get("X-RateLimit-Reset")
    if reset is not None:
        try:
            return max(0.0, float(reset) - time.time())
        except ValueError:
            return None
    return None


class RetryingTransport(httpx.AsyncBaseTransport):
    """Wraps an httpx async transport with automatic retry on transient failures.

    Features:
    - Retry with exponential backoff + jitter (up to *max_retries* attempts)
    - Rate-limit pause on HTTP 429 and exhausted-quota 403 (reads
      ``Retry-After`` / ``X-RateLimit-Reset``), skipped when the wait would
      exceed a minute so the caller sees the rate-limit response instead
    - Retry on 500 / 502 / 503 / 504 server errors
    - Retry on transport-level errors (connection reset, timeout, etc.)
    """

    def __init__(
        self,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        max_retries: int = 2,
    ) -> None:
        self._transport = transport or httpx.AsyncHTTPTransport()
        self._max_retries = max_retries

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        for attempt in range(self._max_retries + 1):
            try:
                response = await self._transport.handle_async_request(request)
            except httpx.TransportError:
                if attempt >= self._max_retries:
                    raise
                await self._sleep_backoff(attempt, request)
                continue

            if attempt >= self._max_retries:
                return response

            if is_rate_limited(response):
                retry_after = parse_retry_after(response)
                if retry_after is None:
                    retry_after = 1.0
                if retry_after > _MAX_RATE_LIMIT_PAUSE:
                    return response
                await response.aclose()
                await asyncio.sleep(retry_after)
                await self._sleep_backoff(attempt, request)
                continue

            if response.status_code in _RETRYABLE_STATUS_CODES:
                await response.aclose()
                await self._sleep_backoff(attempt, request)
                continue

            return response

        raise httpx.TransportError("Request failed after retries")  # pragma: no cover

    async def aclose(self) -> None:
        await self._transport.aclose()

    @staticmethod
    async def _sleep_backoff(attempt: int, request: httpx.Request) -> None:
        seconds = min(4.0, float(2**attempt)) + random.uniform(0.0, 0.25)
        _LOG.warning("Retrying GitHub request %s %s (attempt %d)", request.method, request.url.path, attempt + 1)
        await asyncio.sleep(seconds)
