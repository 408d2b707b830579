"""Prometheus metrics for ilert-api."""

from prometheus_client import Counter, Histogram

DEFAULT_BUCKETS_EXTERNAL_API = (0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0)

ilert_request = Counter(
    "ilert_api_requests_total",
    "Total number of iLert API client method calls",
    ["method", "verb"],
)

ilert_request_errors = Counter(
    "ilert_api_request_errors_total",
    "Total number of iLert API client method calls that raised",
    ["method", "verb"],
)

ilert_request_duration = Histogram(
    "ilert_api_request_duration_seconds",
    "iLert API request duration in seconds",
    ["method", "verb"],
    buckets=DEFAULT_BUCKETS_EXTERNAL_API,
)
