"""Prometheus metrics module for record-anonymizer."""

from record_anonymizer.metrics.collectors import (
    ACTIVE_REQUESTS,
    ANONYMIZATION_COUNT,
    ANONYMIZATION_DURATION,
    FIELDS_PROCESSED,
    FILES_PROCESSED,
    PSEUDONYM_CACHE_SIZE,
    REQUEST_COUNT,
    REQUEST_LATENCY,
)

__all__ = [
    "REQUEST_LATENCY",
    "REQUEST_COUNT",
    "ACTIVE_REQUESTS",
    "ANONYMIZATION_COUNT",
    "ANONYMIZATION_DURATION",
    "FIELDS_PROCESSED",
    "FILES_PROCESSED",
    "PSEUDONYM_CACHE_SIZE",
]
