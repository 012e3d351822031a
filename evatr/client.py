"""Async httpx transport for the BZSt eVatR XML-RPC endpoint."""

from __future__ import annotations

import logging

import httpx

from evatr.config import settings
from evatr.errors import TransportError

logger = logging.getLogger(__name__)


class EvatrClient:
    """Thin async wrapper that fetches the raw XML body of a request URL.

    Endpoint: GET {evatr_rpc_url}?UstId_1=...&UstId_2=...
    No auth, no retries. Timeouts come from settings; a timeout is reported
    like any other transport failure.
    """

    def __init__(self) -> None:
        self._timeout = httpx.Timeout(settings.evatr_timeout, connect=settings.evatr_connect_timeout)

    async def fetch(self, url: str) -> str:
        """GET ``url`` and return the response text.

        Raises:
            TransportError: Connection failure, timeout, or non-2xx status.
        """
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.get(url)
                response.raise_for_status()
                return response.text

        except httpx.TimeoutException as exc:
            logger.warning("eVatR request timed out")
            raise TransportError("eVatR request timed out", cause=exc) from exc

        except httpx.HTTPStatusError as exc:
            logger.warning("eVatR HTTP error %s", exc.response.status_code)
            raise TransportError(f"eVatR returned HTTP {exc.response.status_code}", cause=exc) from exc

        except httpx.HTTPError as exc:
            logger.warning("eVatR request failed: %s", exc)
            raise TransportError(f"eVatR request failed: {exc}", cause=exc) from exc


# Module-level singleton
evatr_client = EvatrClient()
