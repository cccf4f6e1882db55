"""Tests for RetryingTransport - retry, backoff, and rate-limit handling."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from gram.providers.github._retrying_transport import RetryingTransport, is_rate_limited, parse_retry_after

_BACKOFF = "gram.providers.github._retrying_transport.RetryingTransport._sleep_backoff"

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _make_response(status_code: int = 200, headers: dict[str, str] | None = None) -> httpx.Response:
    return httpx.Response(status_code=status_code, headers=headers or {})


def _make_request() -> httpx.Request:
    return httpx.Request("GET", "https://api.github.com/repos/octocat/hello-world")


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


class TestConstruction:
    def test_defaults(self) -> None:
        transport = RetryingTransport()
        assert transport._max_retries == 2

    def test_custom_inner_transport(self) -> None:
        inner = AsyncMock(spec=httpx.AsyncBaseTransport)
        transport = RetryingTransport(transport=inner, max_retries=5)
        assert transport._transport is inner
        assert transport._max_retries == 5


# ---------------------------------------------------------------------------
# Successful requests
# ---------------------------------------------------------------------------


class TestSuccessfulRequests:
    @pytest.mark.asyncio
    async def test_returns_successful_response(self) -> None:
        inner = AsyncMock(spec=httpx.AsyncBaseTransport)
        inner.handle_async_request.return_value = _make_response(200)

        transport = RetryingTransport(transport=inner)
        response = await transport.handle_async_request(_make_request())

        assert response.status_code == 200
        assert inner.handle_async_request.call_count == 1

    @pytest.mark.asyncio
    async def test_client_errors_are_not_retried(self) -> None:
        inner = AsyncMock(spec=httpx.AsyncBaseTransport)
        inner.handle_async_request.return_value = _make_response(404)

        transport = RetryingTransport(transport=inner, max_retries=3)
        response = await transport.handle_async_request(_make_request())

        assert response.status_code == 404
        assert inner.handle_async_request.call_count == 1


# ---------------------------------------------------------------------------
# Transport errors
# ---------------------------------------------------------------------------


class TestTransportErrors:
    @pytest.mark.asyncio
    @patch(_BACKOFF, new_callable=AsyncMock)
    async def test_retries_on_transport_error_then_succeeds(self, mock_backoff: AsyncMock) -> None:
        request = _make_request()
        inner = AsyncMock(spec=httpx.AsyncBaseTransport)
        inner.handle_async_request.side_effect = [
            httpx.TransportError("connection reset"),
            _make_response(200),
        ]

        transport = RetryingTransport(transport=inner, max_retries=2)
        response = await transport.handle_async_request(request)

        assert response.status_code == 200
        assert inner.handle_async_request.call_count == 2
        mock_backoff.assert_awaited_once_with(0, request)

    @pytest.mark.asyncio
    @patch(_BACKOFF, new_callable=AsyncMock)
    async def test_raises_after_max_retries_exhausted(self, mock_backoff: AsyncMock) -> None:
        inner = AsyncMock(spec=httpx.AsyncBaseTransport)
        inner.handle_async_request.side_effect = httpx.TransportError("fail")

        transport = RetryingTransport(transport=inner, max_retries=2)
        with pytest.raises(httpx.TransportError, match="fail"):
            await transport.handle_async_request(_make_request())

        assert inner.handle_async_request.call_count == 3  # initial + 2 retries
        assert mock_backoff.await_count == 2

    @pytest.mark.asyncio
    @patch(_BACKOFF, new_callable=AsyncMock)
    async def test_zero_retries_raises_immediately(self, mock_backoff: AsyncMock) -> None:
        inner = AsyncMock(spec=httpx.AsyncBaseTransport)
        inner.handle_async_request.side_effect = httpx.TransportError("fail")

        transport = RetryingTransport(transport=inner, max_retries=0)
        with pytest.raises(httpx.TransportError):
            await transport.handle_async_request(_make_request())

        assert inner.handle_async_request.call_count == 1
        mock_backoff.assert_not_awaited()


# ---------------------------------------------------------------------------
# Rate limits (429 and exhausted-quota 403)
# ---------------------------------------------------------------------------


class TestRateLimit:
    @pytest.mark.asyncio
    @patch("asyncio.sleep", new_callable=AsyncMock)
    @patch(_BACKOFF, new_callable=AsyncMock)
    async def test_429_pauses_then_retries(self, mock_backoff: AsyncMock, mock_sleep: AsyncMock) -> None:
        inner = AsyncMock(spec=httpx.AsyncBaseTransport)
        inner.handle_async_request.side_effect = [
            _make_response(429, {"Retry-After": "2"}),
            _make_response(200),
        ]

        transport = RetryingTransport(transport=inner, max_retries=2)
        response = await transport.handle_async_request(_make_request())

        assert response.status_code == 200
        mock_sleep.assert_awaited_once_with(2.0)
        mock_backoff.assert_awaited_once()

    @pytest.mark.asyncio
    @patch("asyncio.sleep", new_callable=AsyncMock)
    @patch(_BACKOFF, new_callable=AsyncMock)
    async def test_exhausted_quota_403_is_retried(self, mock_backoff: AsyncMock, mock_sleep: AsyncMock) -> None:
        inner = AsyncMock(spec=httpx.AsyncBaseTransport)
        inner.handle_async_request.side_effect = [
            _make_response(403, {"X-RateLimit-Remaining": "0", "Retry-After": "1"}),
            _make_response(200),
        ]

        transport = RetryingTransport(transport=inner, max_retries=1)
        response = await transport.handle_async_request(_make_request())

        assert response.status_code == 200
        assert inner.handle_async_request.call_count == 2

    @pytest.mark.asyncio
    @patch("asyncio.sleep", new_callable=AsyncMock)
    @patch(_BACKOFF, new_callable=AsyncMock)
    async def test_long_rate_limit_window_returns_response(
        self, mock_backoff: AsyncMock, mock_sleep: AsyncMock
    ) -> None:
        inner = AsyncMock(spec=httpx.AsyncBaseTransport)
        inner.handle_async_request.return_value = _make_response(429, {"Retry-After": "3600"})

        transport = RetryingTransport(transport=inner, max_retries=2)
        response = await transport.handle_async_request(_make_request())

        assert response.status_code == 429
        assert inner.handle_async_request.call_count == 1
        mock_sleep.assert_not_awaited()

    @pytest.mark.asyncio
    @patch("asyncio.sleep", new_callable=AsyncMock)
    @patch(_BACKOFF, new_callable=AsyncMock)
    async def test_429_returns_response_when_retries_exhausted(
        self, mock_backoff: AsyncMock, mock_sleep: AsyncMock
    ) -> None:
        inner = AsyncMock(spec=httpx.AsyncBaseTransport)
        inner.handle_async_request.side_effect = [_make_response(429), _make_response(429)]

        transport = RetryingTransport(transport=inner, max_retries=1)
        response = await transport.handle_async_request(_make_request())

        assert response.status_code == 429
        assert inner.handle_async_request.call_count == 2  # initial + 1 retry


# ---------------------------------------------------------------------------
# Server errors (500, 502, 503, 504)
# ---------------------------------------------------------------------------


class TestServerErrors:
    @pytest.mark.asyncio
    @patch(_BACKOFF, new_callable=AsyncMock)
    async def test_502_retries_then_succeeds(self, mock_backoff: AsyncMock) -> None:
        inner = AsyncMock(spec=httpx.AsyncBaseTransport)
        inner.handle_async_request.side_effect = [
            _make_response(502),
            _make_response(200),
        ]

        transport = RetryingTransport(transport=inner, max_retries=2)
        response = await transport.handle_async_request(_make_request())

        assert response.status_code == 200
        assert inner.handle_async_request.call_count == 2

    @pytest.mark.asyncio
    @patch(_BACKOFF, new_callable=AsyncMock)
    async def test_server_error_returns_last_response_when_retries_exhausted(self, mock_backoff: AsyncMock) -> None:
        inner = AsyncMock(spec=httpx.AsyncBaseTransport)
        inner.handle_async_request.side_effect = [_make_response(503), _make_response(503)]

        transport = RetryingTransport(transport=inner, max_retries=1)
        response = await transport.handle_async_request(_make_request())

        assert response.status_code == 503
        assert inner.handle_async_request.call_count == 2


# ---------------------------------------------------------------------------
# Rate-limit helpers
# ---------------------------------------------------------------------------


class TestIsRateLimited:
    @pytest.mark.parametrize(
        ("status_code", "headers", "expected"),
        [
            (429, {}, True),
            (403, {"X-RateLimit-Remaining": "0"}, True),
            (403, {"X-RateLimit-Remaining": "12"}, False),
            (403, {}, False),
            (500, {}, False),
        ],
    )
    def test_classification(self, status_code: int, headers: dict[str, str], expected: bool) -> None:
        assert is_rate_limited(_make_response(status_code, headers)) is expected


class TestParseRetryAfter:
    def test_returns_header_value_as_float(self) -> None:
        assert parse_retry_after(_make_response(429, {"Retry-After": "5"})) == 5.0

    def test_returns_none_when_headers_missing(self) -> None:
        assert parse_retry_after(_make_response(429)) is None

    def test_returns_none_for_non_numeric_header(self) -> None:
        assert parse_retry_after(_make_response(429, {"Retry-After": "not-a-number"})) is None

    def test_clamps_negative_values_to_zero(self) -> None:
        assert parse_retry_after(_make_response(429, {"Retry-After": "-5"})) == 0.0

    @patch("time.time", return_value=1000.0)
    def test_uses_rate_limit_reset_epoch(self, mock_time: MagicMock) -> None:
        response = _make_response(403, {"X-RateLimit-Remaining": "0", "X-RateLimit-Reset": "1010"})
        assert parse_retry_after(response) == 10.0

    @patch("time.time", return_value=1000.0)
    def test_unparsable_retry_after_falls_back_to_reset_epoch(self, mock_time: MagicMock) -> None:
        response = _make_response(429, {"Retry-After": "soon", "X-RateLimit-Reset": "1030"})
        assert parse_retry_after(response) == 30.0

    @patch("time.time", return_value=1000.0)
    def test_accepts_http_date_retry_after(self, mock_time: MagicMock) -> None:
        # 1970-01-01 00:17:00 UTC is epoch 1020.
        response = _make_response(429, {"Retry-After": "Thu, 01 Jan 1970 00:17:00 GMT"})
        assert parse_retry_after(response) == 20.0


# ---------------------------------------------------------------------------
# _sleep_backoff
# ---------------------------------------------------------------------------


class TestSleepBackoff:
    @pytest.mark.asyncio
    @patch("asyncio.sleep", new_callable=AsyncMock)
    @patch("random.uniform", return_value=0.1)
    async def test_backoff_increases_with_attempt(self, mock_uniform: AsyncMock, mock_sleep: AsyncMock) -> None:
        request = _make_request()

        await RetryingTransport._sleep_backoff(0, request)
        mock_sleep.assert_awaited_with(1.1)  # 2^0 + 0.1

        await RetryingTransport._sleep_backoff(1, request)
        mock_sleep.assert_awaited_with(2.1)  # 2^1 + 0.1

    @pytest.mark.asyncio
    @patch("asyncio.sleep", new_callable=AsyncMock)
    @patch("random.uniform", return_value=0.1)
    async def test_backoff_caps_at_4_seconds(self, mock_uniform: AsyncMock, mock_sleep: AsyncMock) -> None:
        await RetryingTransport._sleep_backoff(10, _make_request())
        mock_sleep.assert_awaited_with(4.1)  # min(4, 2^10) + 0.1


# ---------------------------------------------------------------------------
# aclose
# ---------------------------------------------------------------------------


class TestAclose:
    @pytest.mark.asyncio
    async def test_delegates_to_inner_transport(self) -> None:
        inner = AsyncMock(spec=httpx.AsyncBaseTransport)
        transport = RetryingTransport(transport=inner)

        await transport.aclose()
        inner.aclose.assert_awaited_once()
