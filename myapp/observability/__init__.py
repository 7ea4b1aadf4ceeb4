"""Observability for MyApp: structured logging and Prometheus metrics.

Components:
    - logging: structlog configuration and correlation IDs
    - metrics: HTTP request counters and latency histograms

Usage:
    from myapp.observability import get_logger, configure_logging

    configure_logging(level="info", format="json")
    logger = get_logger(__name__)
    logger.info("server_starting", port=8080)
"""

from myapp.observability.logging import (
    clear_correlation_id,
    configure_logging,
    get_correlation_id,
    get_logger,
    set_correlation_id,
)
from myapp.observability.metrics import (
    get_metrics_content_type,
    get_metrics_output,
    get_metrics_registry,
    record_request,
)

__all__ = [
    "get_logger",
    "configure_logging",
    "set_correlation_id",
    "clear_correlation_id",
    "get_correlation_id",
    "record_request",
    "get_metrics_registry",
    "get_metrics_output",
    "get_metrics_content_type",
]
