"""
Prometheus Metrics for the auth relay

Provides counters and histograms for relayed requests.
Host application should expose the prometheus_client registry.
"""

import logging
from prometheus_client import Counter, Histogram

logger = logging.getLogger("auth_relay.metrics")

# Relayed calls by method name and outcome (HTTP status or error code)
REQUEST_COUNT = Counter(
    "auth_relay_requests_total",
    "Total number of relayed requests",
    ["method", "outcome"],
)

# Network round-trip latency by method name
REQUEST_LATENCY = Histogram(
    "auth_relay_request_latency_seconds",
    "Relayed request latency in seconds",
    ["method"],
)


def metrics_request(method: str, outcome: str, latency: float) -> None:
    """
    Record metrics for a relayed request.

    Args:
        method: Relay method name (e.g., 'fetch', 'post')
        outcome: HTTP status code or error code (e.g., '200', 'NETWORK_ERROR')
        latency: Request duration in seconds
    """
    try:
        REQUEST_COUNT.labels(method=method, outcome=str(outcome)).inc()
        REQUEST_LATENCY.labels(method=method).observe(latency)
    except Exception as e:
        # Metrics failures must not affect delivery
        logger.debug("Failed to record metrics: %s", e)
