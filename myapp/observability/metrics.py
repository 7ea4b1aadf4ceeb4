"""Prometheus metrics for the MyApp HTTP service.

Metrics live on a private registry so the service only exports what it
defines itself. The request-logging middleware records every request:

    from myapp.observability.metrics import record_request

    record_request("GET", "/api/v1/ping", 200, 0.002)

The `/metrics` endpoint renders the registry with `get_metrics_output()`.
"""

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)


_registry = CollectorRegistry()

http_requests_total = Counter(
    "myapp_http_requests_total",
    "Total number of HTTP requests by method, route and status",
    ["method", "path", "status"],
    registry=_registry,
)

http_request_duration_seconds = Histogram(
    "myapp_http_request_duration_seconds",
    "Duration of HTTP request handling in seconds",
    ["method", "path"],
    registry=_registry,
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, float("inf")),
)


def record_request(method: str, path: str, status: int, duration: float) -> None:
    """Record one served request.

    Args:
        method: HTTP method
        path: Route template (e.g. "/api/v1/profile"), not the raw URL, to
            keep label cardinality bounded
        status: Response status code
        duration: Handling time in seconds
    """
    http_requests_total.labels(method=method, path=path, status=str(status)).inc()
    http_request_duration_seconds.labels(method=method, path=path).observe(duration)


def get_metrics_registry() -> CollectorRegistry:
    """Get the service metrics registry."""
    return _registry


def get_metrics_output() -> bytes:
    """Get Prometheus-formatted metrics output."""
    return generate_latest(_registry)


def get_metrics_content_type() -> str:
    """Get the content type for Prometheus metrics."""
    return CONTENT_TYPE_LATEST


__all__ = [
    "record_request",
    "get_metrics_registry",
    "get_metrics_output",
    "get_metrics_content_type",
    "http_requests_total",
    "http_request_duration_seconds",
]
