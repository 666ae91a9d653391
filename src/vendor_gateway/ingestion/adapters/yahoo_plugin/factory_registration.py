"""
Yahoo Finance adapter factory registration.

This module provides factory functions for creating Yahoo Finance adapters.
Can be used with the factory pattern or dependency injection containers.
"""

from __future__ import annotations

from vendor_gateway.common.factories.adapter_factory import (
    AdapterBuildContext,
    AdapterFactory,
)
from vendor_gateway.ingestion.adapters.yahoo_plugin.adapter import (
    YahooFinanceAdapter,
)
from vendor_gateway.ingestion.adapters.yahoo_plugin.client import YahooFinanceClient

YAHOO_FINANCE_PROVIDER = "yahoo_finance"


def create_yahoo_finance_client(context: AdapterBuildContext) -> YahooFinanceClient:
    """Create chart client over the shared HTTP transport."""
    return YahooFinanceClient(context.http_client, context.yahoo_config)


def create_yahoo_finance_adapter(
    context: AdapterBuildContext, name: str | None = None
) -> YahooFinanceAdapter:
    """Create Yahoo Finance adapter with client, clock and sleeper."""
    return YahooFinanceAdapter(
        create_yahoo_finance_client(context),
        config=context.yahoo_config,
        name=name or "Yahoo Finance",
        clock=context.clock,
        sleeper=context.sleeper,
    )


def register_yahoo_finance_adapters(adapter_factory: AdapterFactory) -> None:
    """Register Yahoo Finance adapters with the factory."""
    adapter_factory.register(YAHOO_FINANCE_PROVIDER, create_yahoo_finance_adapter)
