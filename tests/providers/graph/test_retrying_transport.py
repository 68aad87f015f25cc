"""Tests for RetryingTransport - retry, backoff, and throttling handling."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import httpx
import pytest

from plannerclone.providers.graph._retrying_transport import RetryingTransport

_BACKOFF = "plannerclone.providers.graph._retrying_transport.RetryingTransport._sleep_backoff"

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _make_response(status_code: int = 200, headers: dict[str, str] | None = None) -> httpx.Response:
    # Retry-After of zero keeps throttled retries instant.
    return httpx.Response(status_code=status_code, headers=headers or {"Retry-After": "0"})


def _make_request(method: str = "GET") -> httpx.Request:
    return httpx.Request(method, "https://graph.microsoft.com/v1.0/planner/plans/p1")


def _inner(*responses: object) -> AsyncMock:
    inner = AsyncMock(spec=httpx.AsyncBaseTransport)
    inner.handle_async_request.side_effect = list(responses)
    return inner


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


class TestConstruction:
    def test_defaults(self) -> None:
        transport = RetryingTransport()
        assert transport._max_retries == 3

    def test_custom_inner_transport(self) -> None:
        inner = AsyncMock(spec=httpx.AsyncBaseTransport)
        transport = RetryingTransport(transport=inner, max_retries=5)
        assert transport._transport is inner
        assert transport._max_retries == 5

    @pytest.mark.asyncio
    async def test_aclose_closes_inner_transport(self) -> None:
        inner = AsyncMock(spec=httpx.AsyncBaseTransport)
        await RetryingTransport(transport=inner).aclose()
        inner.aclose.assert_awaited_once()


# ---------------------------------------------------------------------------
# Successful requests
# ---------------------------------------------------------------------------


class TestSuccessfulRequests:
    @pytest.mark.asyncio
    async def test_returns_successful_response(self) -> None:
        inner = _inner(_make_response(200))

        response = await RetryingTransport(transport=inner).handle_async_request(_make_request())

        assert response.status_code == 200
        assert inner.handle_async_request.call_count == 1

    @pytest.mark.asyncio
    @patch(_BACKOFF, new_callable=AsyncMock)
    async def test_client_errors_are_not_retried(self, mock_backoff: AsyncMock) -> None:
        inner = _inner(_make_response(404))

        response = await RetryingTransport(transport=inner).handle_async_request(_make_request())

        assert response.status_code == 404
        assert inner.handle_async_request.call_count == 1
        mock_backoff.assert_not_awaited()


# ---------------------------------------------------------------------------
# Transport errors
# ---------------------------------------------------------------------------


class TestTransportErrors:
    @pytest.mark.asyncio
    @patch(_BACKOFF, new_callable=AsyncMock)
    async def test_retries_read_error_for_get_then_succeeds(self, mock_backoff: AsyncMock) -> None:
        inner = _inner(httpx.ReadError("connection reset"), _make_response(200))

        response = await RetryingTransport(transport=inner, max_retries=2).handle_async_request(_make_request())

        assert response.status_code == 200
        assert inner.handle_async_request.call_count == 2
        assert mock_backoff.await_count == 1
        assert mock_backoff.await_args.args[0] == 0

    @pytest.mark.asyncio
    @patch(_BACKOFF, new_callable=AsyncMock)
    async def test_raises_after_max_retries_exhausted(self, mock_backoff: AsyncMock) -> None:
        inner = AsyncMock(spec=httpx.AsyncBaseTransport)
        inner.handle_async_request.side_effect = httpx.ReadError("fail")

        with pytest.raises(httpx.TransportError, match="fail"):
            await RetryingTransport(transport=inner, max_retries=2).handle_async_request(_make_request())

        assert inner.handle_async_request.call_count == 3  # initial + 2 retries
        assert mock_backoff.await_count == 2

    @pytest.mark.asyncio
    @patch(_BACKOFF, new_callable=AsyncMock)
    async def test_read_error_on_post_is_not_replayed(self, mock_backoff: AsyncMock) -> None:
        inner = _inner(httpx.ReadError("reset after send"))

        with pytest.raises(httpx.ReadError):
            await RetryingTransport(transport=inner, max_retries=3).handle_async_request(_make_request("POST"))

        assert inner.handle_async_request.call_count == 1
        mock_backoff.assert_not_awaited()

    @pytest.mark.asyncio
    @patch(_BACKOFF, new_callable=AsyncMock)
    async def test_connect_error_on_post_is_retried(self, mock_backoff: AsyncMock) -> None:
        inner = _inner(httpx.ConnectError("refused"), _make_response(201))

        response = await RetryingTransport(transport=inner).handle_async_request(_make_request("POST"))

        assert response.status_code == 201
        assert inner.handle_async_request.call_count == 2


# ---------------------------------------------------------------------------
# Throttling (429) and server errors
# ---------------------------------------------------------------------------


class TestThrottling:
    @pytest.mark.asyncio
    @patch(_BACKOFF, new_callable=AsyncMock)
    async def test_429_retries_then_succeeds(self, mock_backoff: AsyncMock) -> None:
        inner = _inner(_make_response(429), _make_response(200))

        response = await RetryingTransport(transport=inner, max_retries=2).handle_async_request(_make_request())

        assert response.status_code == 200
        assert mock_backoff.await_count == 1

    @pytest.mark.asyncio
    @patch(_BACKOFF, new_callable=AsyncMock)
    async def test_429_returns_response_when_retries_exhausted(self, mock_backoff: AsyncMock) -> None:
        inner = AsyncMock(spec=httpx.AsyncBaseTransport)
        inner.handle_async_request.return_value = _make_response(429)

        response = await RetryingTransport(transport=inner, max_retries=1).handle_async_request(_make_request())

        assert response.status_code == 429
        assert inner.handle_async_request.call_count == 2  # initial + 1 retry

    @pytest.mark.asyncio
    @patch(_BACKOFF, new_callable=AsyncMock)
    async def test_429_on_post_is_retried(self, mock_backoff: AsyncMock) -> None:
        inner = _inner(_make_response(429), _make_response(201))

        response = await RetryingTransport(transport=inner).handle_async_request(_make_request("POST"))

        assert response.status_code == 201
        assert inner.handle_async_request.call_count == 2

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [502, 503, 504])
    @patch(_BACKOFF, new_callable=AsyncMock)
    async def test_server_errors_retry_for_get(self, mock_backoff: AsyncMock, status: int) -> None:
        inner = _inner(_make_response(status), _make_response(200))

        response = await RetryingTransport(transport=inner).handle_async_request(_make_request())

        assert response.status_code == 200
        assert inner.handle_async_request.call_count == 2

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [502, 504])
    @patch(_BACKOFF, new_callable=AsyncMock)
    async def test_ambiguous_server_errors_are_not_replayed_for_patch(
        self, mock_backoff: AsyncMock, status: int
    ) -> None:
        inner = _inner(_make_response(status))

        response = await RetryingTransport(transport=inner).handle_async_request(_make_request("PATCH"))

        assert response.status_code == status
        assert inner.handle_async_request.call_count == 1


# ---------------------------------------------------------------------------
# Retry-After parsing
# ---------------------------------------------------------------------------


class TestRetryAfter:
    @pytest.mark.parametrize(
        ("headers", "expected"),
        [
            ({}, 1.0),
            ({"Retry-After": "5"}, 5.0),
            ({"Retry-After": "0.5"}, 0.5),
            ({"Retry-After": "-3"}, 0.0),
            ({"Retry-After": "Wed, 21 Oct 2015 07:28:00 GMT"}, 1.0),
        ],
    )
    def test_parse_retry_after(self, headers: dict[str, str], expected: float) -> None:
        response = httpx.Response(429, headers=headers)
        assert RetryingTransport._parse_retry_after(response) == expected
