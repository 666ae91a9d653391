"""
Vendor Gateway - capability-negotiated access to market-data providers.

Layers:
    infrastructure/   # Clock, sleeper, TTL cache, structured logging
    config/           # YAML + environment configuration state
    ingestion/        # Adapter contract, provider plugins, transport, bulk scheduler
    transformation/   # Provider payload normalizers
    analytics/        # Volatility, trend and recommendation scoring
    common/           # Vendor registry and adapter factory
"""

__version__ = "0.1.0"
