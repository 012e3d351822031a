"""Tests for the eVatR httpx transport.

Covers:
- Successful GET returns the body text
- Timeout → TransportError with the httpx exception as cause
- HTTP 5xx → TransportError naming the status
- Connection failure → TransportError
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from evatr.client import EvatrClient
from evatr.errors import TransportError

_URL = "https://evatr.bff-online.de/evatrRPC?UstId_1=DE115235681&UstId_2=CZ00177041"

# ── Helpers ──────────────────────────────────────────────────────────


def _make_response(text: str, status_code: int = 200) -> MagicMock:
    """Build a mock httpx.Response."""
    resp = MagicMock()
    resp.status_code = status_code
    resp.text = text
    resp.raise_for_status = MagicMock()  # no-op for 200
    return resp


def _patch_http(mock_client_cls: MagicMock, get: AsyncMock) -> AsyncMock:
    mock_http = AsyncMock()
    mock_http.get = get
    mock_client_cls.return_value.__aenter__ = AsyncMock(return_value=mock_http)
    mock_client_cls.return_value.__aexit__ = AsyncMock(return_value=False)
    return mock_http


# ── Client tests ─────────────────────────────────────────────────────


class TestEvatrClientFetch:
    @pytest.mark.asyncio()
    async def test_fetch_returns_text(self):
        client = EvatrClient()

        with patch("httpx.AsyncClient") as mock_client_cls:
            mock_http = _patch_http(mock_client_cls, AsyncMock(return_value=_make_response("<params/>")))
            text = await client.fetch(_URL)

        assert text == "<params/>"
        mock_http.get.assert_awaited_once_with(_URL)

    @pytest.mark.asyncio()
    async def test_fetch_uses_configured_timeout(self):
        client = EvatrClient()

        with patch("httpx.AsyncClient") as mock_client_cls:
            _patch_http(mock_client_cls, AsyncMock(return_value=_make_response("<params/>")))
            await client.fetch(_URL)

        timeout = mock_client_cls.call_args.kwargs["timeout"]
        assert isinstance(timeout, httpx.Timeout)


class TestEvatrClientFailures:
    @pytest.mark.asyncio()
    async def test_timeout(self):
        """httpx.TimeoutException → TransportError, original exception chained."""
        client = EvatrClient()
        timeout = httpx.ReadTimeout("timeout")

        with patch("httpx.AsyncClient") as mock_client_cls:
            _patch_http(mock_client_cls, AsyncMock(side_effect=timeout))
            with pytest.raises(TransportError) as exc_info:
                await client.fetch(_URL)

        assert exc_info.value.cause is timeout
        assert exc_info.value.__cause__ is timeout

    @pytest.mark.asyncio()
    async def test_http_status_error(self):
        client = EvatrClient()
        response = _make_response("Service Unavailable", status_code=503)
        status_error = httpx.HTTPStatusError("503", request=MagicMock(), response=response)
        response.raise_for_status = MagicMock(side_effect=status_error)

        with patch("httpx.AsyncClient") as mock_client_cls:
            _patch_http(mock_client_cls, AsyncMock(return_value=response))
            with pytest.raises(TransportError, match="503") as exc_info:
                await client.fetch(_URL)

        assert exc_info.value.cause is status_error

    @pytest.mark.asyncio()
    async def test_connection_error(self):
        client = EvatrClient()

        with patch("httpx.AsyncClient") as mock_client_cls:
            _patch_http(mock_client_cls, AsyncMock(side_effect=httpx.ConnectError("refused")))
            with pytest.raises(TransportError):
                await client.fetch(_URL)
