#!/usr/bin/env python3
"""
Fetch quotes, history and analytics through the vendor registry.
Prints canonical (camelCase) JSON to stdout.

Examples:
    python scripts/fetch_market_data.py quote AAPL --interval 1d
    python scripts/fetch_market_data.py history MSFT --interval 1wk --period 6mo
    python scripts/fetch_market_data.py bulk AAPL MSFT GOOG --intervals 1d 1wk
    python scripts/fetch_market_data.py vendors --capability analytics
"""

import argparse
import asyncio
import json
import sys
from typing import Any

from vendor_gateway.common.registry.vendor_registry import VendorRegistry
from vendor_gateway.config.state import get_config
from vendor_gateway.container import GatewayContainer
from vendor_gateway.infrastructure.observability import setup_logging
from vendor_gateway.ingestion.exceptions import MethodNotFoundError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Market data via vendor gateway")
    parser.add_argument("--vendor", default="yfinance", help="Registered vendor id")
    parser.add_argument("--config-dir", default=None, help="Config directory")
    parser.add_argument("--log-level", default="WARNING")
    sub = parser.add_subparsers(dest="command", required=True)

    quote = sub.add_parser("quote", help="Latest quote")
    quote.add_argument("symbol")
    quote.add_argument("--interval", default="1d")

    history = sub.add_parser("history", help="Historical series")
    history.add_argument("symbol")
    history.add_argument("--interval", default="1d")
    history.add_argument("--period", default="1mo")

    analytics = sub.add_parser("analytics", help="Volatility, trend, recommendation")
    analytics.add_argument("symbol")

    bulk = sub.add_parser("bulk", help="Batched historical download")
    bulk.add_argument("symbols", nargs="+")
    bulk.add_argument("--intervals", nargs="+", default=["1d"])
    bulk.add_argument("--period", default=None)
    bulk.add_argument("--batch-size", type=int, default=None)

    vendors = sub.add_parser("vendors", help="List registered vendors")
    vendors.add_argument("--capability", default=None)
    return parser


async def execute(registry: VendorRegistry, args: argparse.Namespace) -> dict[str, Any]:
    if args.command == "vendors":
        ids = (
            registry.ids()
            if args.capability is None
            else registry.ids_with_capability(args.capability)
        )
        return {"vendors": [{"id": i, **registry.describe(i)} for i in ids]}

    if args.command == "bulk":
        adapter = registry.get(args.vendor)
        if adapter is None or not hasattr(adapter, "bulk_download"):
            return {"success": False, "message": f"{args.vendor} has no bulk download"}
        result = await adapter.bulk_download(
            args.symbols, args.intervals, period=args.period, batch_size=args.batch_size
        )
        payload = result.to_dict()
        if result.success:
            payload["failures"] = [f.to_dict() for f in result.data.failures]
        return payload

    if args.command == "quote":
        operation, call_args = "get_market_data", (args.symbol, args.interval)
    elif args.command == "history":
        operation = "get_historical_data"
        call_args = (args.symbol, args.interval, args.period)
    else:
        operation, call_args = "get_analytics", (args.symbol,)

    try:
        result = await registry.dispatch(args.vendor, operation, *call_args)
    except MethodNotFoundError as e:
        return {"success": False, "message": str(e), "errorType": type(e).__name__}
    return result.to_dict()


async def run(args: argparse.Namespace) -> dict[str, Any]:
    config = get_config(args.config_dir)
    async with GatewayContainer(config) as container:
        return await execute(container.registry, args)


def main() -> None:
    args = build_parser().parse_args()
    setup_logging(args.log_level, json_logs=False)

    payload = asyncio.run(run(args))
    print(json.dumps(payload, indent=2))
    if payload.get("success") is False:
        sys.exit(1)


if __name__ == "__main__":
    main()
