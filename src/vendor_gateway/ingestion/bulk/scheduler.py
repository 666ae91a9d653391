"""
Bulk Fetch Scheduler
Downloads historical series for many symbols in rate-limited batches.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any, Protocol

from vendor_gateway.infrastructure.impls.system import AsyncioSleeper
from vendor_gateway.infrastructure.observability import get_scheduler_logger
from vendor_gateway.infrastructure.ports.system import ISleeper
from vendor_gateway.ingestion.config.value_objects import BulkDownloadConfig
from vendor_gateway.ingestion.models.results import AdapterResult
from vendor_gateway.shared.models.market_data import HistoricalSeries

log = get_scheduler_logger()


class HistoricalDataSource(Protocol):
    """Anything exposing the adapter's historical-data operation."""

    async def get_historical_data(
        self, symbol: str, interval: str = "1d", period: str = "1mo"
    ) -> AdapterResult[HistoricalSeries]: ...


@dataclass(frozen=True)
class BulkFailure:
    """A (symbol, interval) pair omitted from the result."""

    symbol: str
    interval: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"symbol": self.symbol, "interval": self.interval, "message": self.message}


class BulkDownloadResult(Mapping[str, dict[str, HistoricalSeries]]):
    """
    Mapping ``symbol -> interval -> HistoricalSeries`` of successful pairs.

    Symbols with no successful interval are absent. Omitted pairs are listed
    in ``failures`` for diagnostics.
    """

    def __init__(self) -> None:
        self._series: dict[str, dict[str, HistoricalSeries]] = {}
        self.failures: list[BulkFailure] = []
        self.batches = 0

    def add(self, symbol: str, interval: str, series: HistoricalSeries) -> None:
        self._series.setdefault(symbol, {})[interval] = series

    def add_failure(self, symbol: str, interval: str, message: str) -> None:
        self.failures.append(BulkFailure(symbol, interval, message))

    @property
    def complete(self) -> bool:
        return not self.failures

    def __getitem__(self, symbol: str) -> dict[str, HistoricalSeries]:
        return self._series[symbol]

    def __iter__(self) -> Iterator[str]:
        return iter(self._series)

    def __len__(self) -> int:
        return len(self._series)

    def to_json_dict(self) -> dict[str, Any]:
        return {
            symbol: {
                interval: series.to_json_dict() for interval, series in by_interval.items()
            }
            for symbol, by_interval in self._series.items()
        }

    def __repr__(self) -> str:
        return (
            f"BulkDownloadResult(symbols={len(self)}, batches={self.batches}, "
            f"failures={len(self.failures)})"
        )


class BulkFetchScheduler:
    """
    Batched, strictly sequential historical downloader.

    Responsibilities:
    - Partition symbols into consecutive batches
    - Fetch every (symbol, interval) pair of a batch one after another
    - Await a fixed cooldown between batches (never after the last one)
    - Tolerate per-pair failures without aborting the job
    """

    def __init__(
        self,
        source: HistoricalDataSource,
        sleeper: ISleeper | None = None,
        config: BulkDownloadConfig | None = None,
    ):
        """
        Args:
            source: Adapter providing ``get_historical_data``
            sleeper: Awaitable delay used for the inter-batch cooldown
            config: Default batch size, cooldown and period
        """
        self.source = source
        self.sleeper = sleeper or AsyncioSleeper()
        self.config = config or BulkDownloadConfig()

    @staticmethod
    def partition(symbols: list[str], batch_size: int) -> list[list[str]]:
        """Split ``symbols`` into consecutive batches of at most ``batch_size``."""
        if batch_size < 1:
            raise ValueError(f"batch_size must be >= 1, got {batch_size}")
        return [symbols[i : i + batch_size] for i in range(0, len(symbols), batch_size)]

    async def bulk_download(
        self,
        symbols: Iterable[str],
        intervals: Iterable[str] = ("1d",),
        period: str | None = None,
        batch_size: int | None = None,
    ) -> BulkDownloadResult:
        """Download every (symbol, interval) pair.

        Args:
            symbols: Symbols to fetch, in order
            intervals: Intervals to fetch for each symbol
            period: History range (defaults to config)
            batch_size: Symbols per batch (defaults to config)

        Returns:
            BulkDownloadResult holding successful pairs and failure diagnostics

        Raises:
            ValueError: If ``batch_size`` < 1
        """
        symbols = list(symbols)
        intervals = list(intervals)
        period = period or self.config.period
        batch_size = self.config.batch_size if batch_size is None else batch_size
        batches = self.partition(symbols, batch_size)

        result = BulkDownloadResult()
        log.info(
            "bulk_download_started",
            symbols=len(symbols),
            intervals=intervals,
            period=period,
            batches=len(batches),
        )

        for index, batch in enumerate(batches):
            log.debug("batch_started", batch=index + 1, size=len(batch))
            for symbol in batch:
                for interval in intervals:
                    await self._fetch_pair(result, symbol, interval, period)
            result.batches += 1

            if index < len(batches) - 1:
                log.debug("batch_cooldown", seconds=self.config.cooldown_seconds)
                await self.sleeper.sleep(self.config.cooldown_seconds)

        log.info(
            "bulk_download_completed",
            symbols=len(result),
            batches=result.batches,
            failures=len(result.failures),
        )
        return result

    async def _fetch_pair(
        self, result: BulkDownloadResult, symbol: str, interval: str, period: str
    ) -> None:
        try:
            outcome = await self.source.get_historical_data(symbol, interval, period)
        except Exception as e:
            message = str(e) or e.__class__.__name__
        else:
            if outcome.success:
                result.add(symbol, interval, outcome.data)
                return
            message = outcome.error.message if outcome.error else "unknown error"

        log.warning(
            "bulk_pair_failed", symbol=symbol, interval=interval, error=message
        )
        result.add_failure(symbol, interval, message)
