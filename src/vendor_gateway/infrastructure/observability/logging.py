"""
Structured logging infrastructure for vendor-gateway.
Provides consistent, machine-readable logs across all components.

Log Structure:
    {
        "app": "vendor-gateway",       # Application identifier
        "layer": "adapters",           # Architectural layer
        "component": "yahoo-finance",  # Specific component/service
        "module": "...",               # Python module (optional)
        "vendor": "yfinance",          # Domain context
        "event": "quote_fetched",      # What happened
        ...
    }

Architectural Layers:
    - infrastructure: Cross-cutting (cache, config, clock, http transport)
    - adapters: Vendor adapters (Yahoo Finance, custom providers)
    - registry: Vendor registration and dynamic dispatch
    - processing: Response normalization
    - scheduler: Bulk download batching and throttling
    - analytics: Derived volatility/trend/recommendation scoring
    - api: REST API surface
"""

import logging
import sys
from typing import Any, Literal

import structlog
from structlog.types import EventDict

# Define valid architectural layers
Layer = Literal[
    "infrastructure",
    "adapters",
    "registry",
    "processing",
    "scheduler",
    "analytics",
    "api",
]


def add_app_context(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """
    Add application-wide context to every log entry.

    Every log carries the base 'app' identifier so entries can be filtered
    when several applications ship logs to the same aggregator.
    """
    event_dict["app"] = "vendor-gateway"
    return event_dict


def add_severity_level(
    logger: Any, method_name: str, event_dict: EventDict
) -> EventDict:
    """
    Add severity level for cloud logging compatibility.
    Maps Python log levels to standard severity levels.
    """
    level = event_dict.get("level")
    if level:
        severity_map = {
            "debug": "DEBUG",
            "info": "INFO",
            "warning": "WARNING",
            "error": "ERROR",
            "critical": "CRITICAL",
        }
        event_dict["severity"] = severity_map.get(level, "INFO")
    return event_dict


def setup_logging(
    level: str = "INFO",
    json_logs: bool = True,
    include_timestamp: bool = True,
) -> None:
    """
    Configure structured logging for the application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: If True, output JSON. If False, use human-readable format (dev mode).
        include_timestamp: Whether to include ISO timestamps in logs

    Usage:
        >>> from vendor_gateway.infrastructure.observability import setup_logging
        >>> setup_logging(level="DEBUG", json_logs=True)
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )

    processors = [
        structlog.contextvars.merge_contextvars,
        add_app_context,
        structlog.stdlib.add_log_level,
        add_severity_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamp:
        processors.insert(0, structlog.processors.TimeStamper(fmt="iso"))

    if json_logs:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=True,
                exception_formatter=structlog.dev.plain_traceback,
            )
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(
    name: str | None = None,
    layer: Layer | None = None,
    component: str | None = None,
    **initial_context: Any,
) -> structlog.stdlib.BoundLogger:
    """
    Get a configured logger instance with architectural context.

    Args:
        name: Logger name (typically __name__ of the calling module)
        layer: Architectural layer (adapters, registry, scheduler, etc.)
        component: Specific component/service within the layer
        **initial_context: Additional context key-value pairs to bind to logger

    Returns:
        Configured structlog logger with bound context

    Usage:
        >>> log = get_logger(
        ...     __name__,
        ...     layer="adapters",
        ...     component="yahoo-finance",
        ...     vendor="yfinance"
        ... )
        >>> log.info("quote_fetched", symbol="AAPL")
    """
    logger = structlog.get_logger(name)

    context = {}

    if layer:
        context["layer"] = layer

    if component:
        context["component"] = component

    if name:
        context["module"] = name

    context.update(initial_context)

    if context:
        logger = logger.bind(**context)

    return logger


# ============================================================================
# Layer-Specific Logger Factories
# ============================================================================


def get_infrastructure_logger(
    component: str,
    **context: Any,
) -> structlog.stdlib.BoundLogger:
    """
    Get a logger for infrastructure layer (cache, config, http transport).

    Usage:
        >>> log = get_infrastructure_logger("ttl-cache")
        >>> log.debug("cache_miss", key="AAPL_1d")
    """
    return get_logger(
        "infrastructure",
        layer="infrastructure",
        component=component,
        **context,
    )


def get_adapter_logger(
    component: str,
    vendor: str | None = None,
    **context: Any,
) -> structlog.stdlib.BoundLogger:
    """
    Get a logger for the vendor adapter layer.

    Args:
        component: Component name (e.g., "yahoo-finance", "base-adapter")
        vendor: Vendor display name - optional
        **context: Additional context

    Usage:
        >>> log = get_adapter_logger("yahoo-finance", vendor="Yahoo Finance")
        >>> log.info("fetching_quote", symbol="AAPL", interval="1d")
    """
    ctx = {}
    if vendor:
        ctx["vendor"] = vendor
    ctx.update(context)

    return get_logger(
        "adapters",
        layer="adapters",
        component=component,
        **ctx,
    )


def get_registry_logger(
    component: str = "vendor-registry",
    **context: Any,
) -> structlog.stdlib.BoundLogger:
    """Get a logger for vendor registration and dispatch."""
    return get_logger(
        "registry",
        layer="registry",
        component=component,
        **context,
    )


def get_processing_logger(
    component: str,
    **context: Any,
) -> structlog.stdlib.BoundLogger:
    """
    Get a logger for processing layer (response normalization).

    Usage:
        >>> log = get_processing_logger("chart-normalizer")
        >>> log.debug("dropped_null_close", dropped=3)
    """
    return get_logger(
        "processing",
        layer="processing",
        component=component,
        **context,
    )


def get_scheduler_logger(
    component: str = "bulk-scheduler",
    **context: Any,
) -> structlog.stdlib.BoundLogger:
    """
    Get a logger for bulk download scheduling.

    Usage:
        >>> log = get_scheduler_logger(job="nightly")
        >>> log.info("batch_started", batch=1, size=10)
    """
    return get_logger(
        "scheduler",
        layer="scheduler",
        component=component,
        **context,
    )


def get_analytics_logger(
    component: str = "analytics-engine",
    **context: Any,
) -> structlog.stdlib.BoundLogger:
    """Get a logger for analytics scoring."""
    return get_logger(
        "analytics",
        layer="analytics",
        component=component,
        **context,
    )


def get_api_logger(
    component: str = "fastapi",
    **context: Any,
) -> structlog.stdlib.BoundLogger:
    """
    Get a logger for API layer (REST API services).

    Usage:
        >>> log = get_api_logger()
        >>> log.info("request_received", method="GET", path="/vendors")
    """
    return get_logger(
        "api",
        layer="api",
        component=component,
        **context,
    )
