"""Prometheus metrics for query loads, exports and stub actions"""

from prometheus_client import Counter, Histogram

# Query client metrics
query_load_counter = Counter(
    "campus_query_loads_total",
    "Store loads performed by the query client",
    ["key"],  # students | stock | employees | investment | activity
)

query_load_error_counter = Counter(
    "campus_query_load_errors_total",
    "Store loads that raised",
    ["key"],
)

query_latency_histogram = Histogram(
    "campus_query_load_seconds",
    "Query load time including simulated latency",
    ["key"],
    buckets=[0.01, 0.05, 0.1, 0.2, 0.3, 0.5, 1.0],
)

# Export metrics
csv_export_counter = Counter(
    "campus_csv_exports_total",
    "CSV exports generated",
    ["dataset"],
)

# Acknowledged stub actions (registration, archive, salary change, ...)
action_counter = Counter(
    "campus_actions_total",
    "Stub actions by outcome",
    ["action", "outcome"],  # acknowledged | rejected
)

login_counter = Counter(
    "campus_logins_total",
    "Mock login attempts",
    ["outcome"],  # success | failure
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_action(action: str, acknowledged: bool) -> None:
    """Record a stub action outcome"""
    outcome = "acknowledged" if acknowledged else "rejected"
    action_counter.labels(action=action, outcome=outcome).inc()
