"""
Yahoo Finance chart endpoint client.

Builds chart requests and classifies transport failures; payload
interpretation is left to the normalizer.
"""

from __future__ import annotations

from typing import Any

from vendor_gateway.infrastructure.observability import get_adapter_logger
from vendor_gateway.ingestion.config.value_objects import YahooFinanceConfig
from vendor_gateway.ingestion.exceptions import HttpError, ParseError
from vendor_gateway.ingestion.ports.http import IHttpClient

log = get_adapter_logger("yahoo-client", vendor="yahoo_finance")


class YahooFinanceClient:
    """HTTP client for the v8 chart endpoint."""

    def __init__(self, http_client: IHttpClient, config: YahooFinanceConfig):
        self.http_client = http_client
        self.config = config

    def chart_url(self, symbol: str) -> str:
        return f"{self.config.base_url}{symbol}"

    @staticmethod
    def _error_description(body: Any) -> str | None:
        chart = body.get("chart") if isinstance(body, dict) else None
        error = chart.get("error") if isinstance(chart, dict) else None
        if isinstance(error, dict):
            return error.get("description")
        return None

    async def fetch_chart(
        self, symbol: str, interval: str, range_: str
    ) -> dict[str, Any]:
        """
        Fetch the raw chart envelope for ``symbol``.

        Args:
            symbol: Provider symbol
            interval: Bar interval (``1d``, ``1wk``, ...)
            range_: History range (``1d``, ``1mo``, ...)

        Returns:
            Decoded JSON envelope

        Raises:
            HttpError: On a non-success status
            ParseError: If the body is not a JSON object
        """
        url = self.chart_url(symbol)
        response = await self.http_client.get(
            url, params={"interval": interval, "range": range_}
        )

        if not response.ok:
            message = f"HTTP error! status: {response.status_code}"
            description = self._error_description(response.body)
            if description:
                message = f"{message} ({description})"
            log.warning(
                "chart_request_failed",
                symbol=symbol,
                interval=interval,
                status=response.status_code,
            )
            raise HttpError(message, response.status_code, response.url or url)

        if not isinstance(response.body, dict):
            raise ParseError(f"Unexpected chart body for {symbol}")
        return response.body
