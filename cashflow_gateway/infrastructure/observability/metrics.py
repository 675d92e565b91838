"""Prometheus metrics for monitoring projections and backend health"""

from prometheus_client import Counter, Histogram

# Projection metrics
projection_counter = Counter(
    "cashflow_projection_total",
    "Total cash flow projections computed",
    ["outcome"],  # projected | no_scenario
)

projection_horizon_histogram = Histogram(
    "cashflow_projection_horizon_months",
    "Requested projection horizons",
    buckets=[3, 6, 12, 24, 60, 120],
)

dashboard_counter = Counter(
    "cashflow_dashboard_total",
    "Total dashboard summaries computed",
)

# Backend API metrics
backend_fetch_failures_counter = Counter(
    "backend_fetch_failures_total",
    "Failed backend API calls",
    ["reason"],  # unavailable | not_found
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_projection(projected: bool, months: int) -> None:
    """Record projection outcome and the requested horizon"""
    outcome = "projected" if projected else "no_scenario"
    projection_counter.labels(outcome=outcome).inc()
    projection_horizon_histogram.observe(months)
