# ==== PROMETHEUS METRICS ==== #

"""
Prometheus metrics for the logistics back-office utilities.

Counts calculations per discount tier and tracks calls made to the peer
order and invoice services.
"""

from prometheus_client import (
    Counter,
    Histogram,
    generate_latest,
    REGISTRY
)


# ==== CALCULATION METRICS ==== #

calculations_total = Counter(
    "backoffice_calculations_total",
    "Total full business calculations by applied discount percentage",
    ["discount_percentage"]
)


# ==== INTEGRATION METRICS ==== #

integration_requests_total = Counter(
    "backoffice_integration_requests_total",
    "Total requests sent to peer services",
    ["service", "operation", "outcome"]
)

integration_request_duration_seconds = Histogram(
    "backoffice_integration_request_duration_seconds",
    "Peer service request latency in seconds",
    ["service", "operation"]
)


def render_metrics() -> bytes:
    """Return the Prometheus text exposition for the default registry."""
    return generate_latest(REGISTRY)
