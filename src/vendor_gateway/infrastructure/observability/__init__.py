"""
Observability for the gateway: structured logging for every layer, from the
HTTP transport and cache up through adapters, dispatch, bulk scheduling and
analytics scoring. Each layer obtains a logger pre-bound with its layer and
component name so that a single request can be traced across vendor calls.
"""

from .logging import (
    get_adapter_logger,
    get_analytics_logger,
    get_api_logger,
    get_infrastructure_logger,
    # Base logger factory
    get_logger,
    get_processing_logger,
    get_registry_logger,
    get_scheduler_logger,
    # Setup
    setup_logging,
)

__all__ = [
    # Setup
    "setup_logging",
    # Base
    "get_logger",
    # Layer-specific
    "get_infrastructure_logger",
    "get_adapter_logger",
    "get_registry_logger",
    "get_processing_logger",
    "get_scheduler_logger",
    "get_analytics_logger",
    "get_api_logger",
]
