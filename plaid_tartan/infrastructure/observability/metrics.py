"""Prometheus metrics for API call outcomes and latency"""

from prometheus_client import Counter, Histogram

request_counter = Counter(
    "plaid_requests_total",
    "Total requests sent to the Plaid API",
    ["product", "operation", "outcome"],  # mfa | authenticated | product_data | error
)

request_latency_histogram = Histogram(
    "plaid_request_latency_seconds",
    "Plaid API response time",
    ["product", "operation"],
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

request_failure_counter = Counter(
    "plaid_request_failures_total",
    "Failed Plaid API requests",
    ["reason"],  # transport | unsuccessful_response | invalid_response | unsupported_mfa
)


def record_request(product: str, operation: str, outcome: str, duration_seconds: float) -> None:
    """Record one finished request"""
    request_counter.labels(product=product, operation=operation, outcome=outcome).inc()
    request_latency_histogram.labels(product=product, operation=operation).observe(duration_seconds)


def record_failure(reason: str) -> None:
    request_failure_counter.labels(reason=reason).inc()
