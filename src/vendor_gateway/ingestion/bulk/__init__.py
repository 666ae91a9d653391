from vendor_gateway.ingestion.bulk.scheduler import (
    BulkDownloadResult,
    BulkFailure,
    BulkFetchScheduler,
    HistoricalDataSource,
)

__all__ = [
    "BulkDownloadResult",
    "BulkFailure",
    "BulkFetchScheduler",
    "HistoricalDataSource",
]
