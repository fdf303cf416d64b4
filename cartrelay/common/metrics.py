"""Prometheus metric definitions for the relay."""

from prometheus_client import Counter, Histogram, generate_latest
from starlette.responses import Response


http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["service", "route", "method", "status_code"],
)
http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration seconds",
    ["service", "route", "method"],
)
transaction_token_requests_total = Counter(
    "transaction_token_requests_total",
    "Transaction token requests sent to the payment gateway",
    ["service"],
)
transaction_token_failures_total = Counter(
    "transaction_token_failures_total",
    "Transaction requests that ended in an error response",
    ["service", "reason"],
)
transaction_token_latency_seconds = Histogram(
    "transaction_token_latency_seconds",
    "Payment gateway token call latency seconds",
    ["service"],
)
notifications_sent_total = Counter("notifications_sent_total", "Push notifications accepted", ["service"])
notification_failures_total = Counter("notification_failures_total", "Push notifications rejected", ["service"])


def metrics_response() -> Response:
    """Expose all registered Prometheus metrics in text format."""

    return Response(content=generate_latest(), media_type="text/plain")
