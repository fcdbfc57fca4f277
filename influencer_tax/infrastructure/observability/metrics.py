"""Prometheus metrics for registry mutations, dashboard queries and request latency"""

from prometheus_client import Counter, Histogram, Gauge

mutation_counter = Counter(
    "influencer_mutation_total",
    "Committed store mutations",
    ["action"],  # created_influencer | updated_influencer | deleted_influencer | ...
)

dashboard_query_counter = Counter(
    "dashboard_query_total",
    "Dashboard aggregations computed",
    ["metric"],
)

compliance_rate_gauge = Gauge(
    "influencer_compliance_rate",
    "Compliance rate from the most recent dashboard summary (percent)",
)

request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_mutation(action: str) -> None:
    mutation_counter.labels(action=action).inc()


def record_dashboard_query(metric: str, compliance_rate: int | None = None) -> None:
    """Count an aggregation and, for summaries, publish the compliance rate"""
    dashboard_query_counter.labels(metric=metric).inc()
    if compliance_rate is not None:
        compliance_rate_gauge.set(compliance_rate)
