"""Response normalization: provider payloads to canonical records."""

from vendor_gateway.transformation.normalizers import (
    YahooChartNormalizer,
    compute_change,
)

__all__ = ["YahooChartNormalizer", "compute_change"]
