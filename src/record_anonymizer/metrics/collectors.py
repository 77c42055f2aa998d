"""Prometheus metrics collectors for record-anonymizer.

Defines all application metrics for monitoring and observability.
"""

from prometheus_client import Counter, Gauge, Histogram

# Request metrics
REQUEST_LATENCY = Histogram(
    "record_anonymizer_request_duration_seconds",
    "Request latency in seconds",
    ["method", "endpoint", "status"],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

REQUEST_COUNT = Counter(
    "record_anonymizer_requests_total",
    "Total request count",
    ["method", "endpoint", "status"],
)

ACTIVE_REQUESTS = Gauge(
    "record_anonymizer_active_requests",
    "Currently processing requests",
)

# Engine metrics
ANONYMIZATION_COUNT = Counter(
    "record_anonymizer_anonymizations_total",
    "Total anonymization calls",
    ["strategy", "outcome"],
)

FIELDS_PROCESSED = Counter(
    "record_anonymizer_fields_processed_total",
    "Total top-level fields anonymized",
    ["strategy"],
)

ANONYMIZATION_DURATION = Histogram(
    "record_anonymizer_anonymization_duration_seconds",
    "Anonymization processing latency",
    buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0],
)

PSEUDONYM_CACHE_SIZE = Gauge(
    "record_anonymizer_pseudonym_cache_size",
    "Number of cached pseudonyms",
)

# File processing
FILES_PROCESSED = Counter(
    "record_anonymizer_files_processed_total",
    "Total anonymized file uploads",
    ["format", "outcome"],
)
