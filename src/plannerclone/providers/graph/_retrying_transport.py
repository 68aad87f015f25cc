"""httpx async transport wrapper with retry, backoff, and throttling handling."""

from __future__ import annotations

import asyncio
import logging
import random

import httpx

_LOG = logging.getLogger(__name__)

# Status codes considered transient and eligible for automatic retry.
_RETRYABLE_STATUS_CODES = frozenset({429, 502, 503, 504})
# Replaying these may duplicate server-side effects, so they are only retried
# when the server clearly refused the request.
_NON_IDEMPOTENT_METHODS = frozenset({"POST", "PATCH"})
_REFUSED_STATUS_CODES = frozenset({429, 503})


class RetryingTransport(httpx.AsyncBaseTransport):
    """Wraps an httpx async transport with automatic retry on transient failures.

    - Throttling (429) and 502/503/504 wait for ``Retry-After`` (default 1s)
      plus exponential backoff with jitter, up to *max_retries* retries.
    - Connection failures are retried for every method; other transport
      errors (read timeouts, resets) only for idempotent methods, because a
      create or conditional update may already have been applied.
    """

    def __init__(
        self,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        max_retries: int = 3,
        max_backoff: float = 8.0,
    ) -> None:
        self._transport = transport or httpx.AsyncHTTPTransport()
        self._max_retries = max_retries
        self._max_backoff = max_backoff

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        replay_safe = request.method not in _NON_IDEMPOTENT_METHODS
        for attempt in range(self._max_retries + 1):
            last_attempt = attempt >= self._max_retries
            try:
                response = await self._transport.handle_async_request(request)
            except httpx.ConnectError:
                if last_attempt:
                    raise
                await self._sleep_backoff(attempt, request)
                continue
            except httpx.TransportError:
                if last_attempt or not replay_safe:
                    raise
                await self._sleep_backoff(attempt, request)
                continue

            status = response.status_code
            retryable = status in _RETRYABLE_STATUS_CODES and (replay_safe or status in _REFUSED_STATUS_CODES)
            if not retryable or last_attempt:
                return response

            await response.aclose()
            await asyncio.sleep(self._parse_retry_after(response))
            await self._sleep_backoff(attempt, request)

        raise httpx.TransportError("Request failed after retries")  # pragma: no cover

    async def aclose(self) -> None:
        await self._transport.aclose()

    @staticmethod
    def _parse_retry_after(response: httpx.Response) -> float:
        raw = response.headers.get("Retry-After")
        if raw is None:
            return 1.0
        try:
            return max(0.0, float(raw))
        except ValueError:
            return 1.0

    async def _sleep_backoff(self, attempt: int, request: httpx.Request) -> None:
        seconds = min(self._max_backoff, float(2**attempt)) + random.uniform(0.0, 0.25)
        _LOG.warning("Retrying Graph request %s %s (attempt %d)", request.method, request.url.path, attempt + 1)
        await asyncio.sleep(seconds)
