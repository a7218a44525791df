"""
Prometheus metrics for Financial Service.

Tracks HTTP traffic and financial store operations.
"""

from fastapi import Response
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

# Request metrics
http_requests_total = Counter(
    "financial_http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"]
)

http_request_duration_seconds = Histogram(
    "financial_http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.075, 0.1, 0.25, 0.5, 0.75, 1.0, 2.5, 5.0)
)

# Store metrics
financial_store_operations_total = Counter(
    "financial_store_operations_total",
    "Total financial store operations",
    ["operation", "status"]
)

financial_store_operation_duration_seconds = Histogram(
    "financial_store_operation_duration_seconds",
    "Financial store operation duration in seconds",
    ["operation"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0)
)

financial_documents_fetched = Histogram(
    "financial_documents_fetched",
    "Documents returned per collection query",
    ["collection"],
    buckets=(0, 1, 5, 10, 25, 50, 100, 250, 500, 1000, 5000)
)


def track_request_metrics(method: str, endpoint: str, status_code: int, duration: float):
    """Track HTTP request metrics."""
    http_requests_total.labels(method=method, endpoint=endpoint, status=status_code).inc()
    http_request_duration_seconds.labels(method=method, endpoint=endpoint).observe(duration)


def track_store_operation(operation: str, success: bool, duration: float):
    """Track financial store operation metrics."""
    status = "success" if success else "failure"
    financial_store_operations_total.labels(operation=operation, status=status).inc()
    financial_store_operation_duration_seconds.labels(operation=operation).observe(duration)


def track_documents_fetched(collection: str, count: int):
    """Track the size of a collection query result."""
    financial_documents_fetched.labels(collection=collection).observe(count)


async def metrics_endpoint():
    """
    Prometheus metrics endpoint.

    Returns:
        Response with Prometheus metrics in text format
    """
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
