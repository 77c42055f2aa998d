"""
Record Anonymization Engine

Top-level entry point: validates the requested strategy, runs the record
traversal and reports the outcome as a result object. Failures never
escape anonymize_data(); they come back as failed results tagged as
client errors (bad strategy name) or server errors (anything else).

Example:
    >>> from record_anonymizer.core.anonymizer import AnonymizationRequest, RecordAnonymizer
    >>> anonymizer = RecordAnonymizer()
    >>> result = anonymizer.anonymize_data(
    ...     AnonymizationRequest(data={"ssn": "123-45-6789"}, strategy="REDACTION")
    ... )
    >>> result.anonymized_data
    {'ssn': '***REDACTED***'}
"""

import threading
import time
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from record_anonymizer.core.exceptions import UnknownStrategyError
from record_anonymizer.core.strategies import (
    PseudonymizationStrategy,
    StrategyType,
    get_pseudonymizer,
    get_strategy,
    list_strategies,
    resolve_strategy_type,
)
from record_anonymizer.core.traversal import Record, RecordTraverser
from record_anonymizer.logging.setup import get_logger
from record_anonymizer.metrics.collectors import (
    ANONYMIZATION_COUNT,
    ANONYMIZATION_DURATION,
    FIELDS_PROCESSED,
    PSEUDONYM_CACHE_SIZE,
)

logger = get_logger(__name__)


class ErrorKind(str, Enum):
    """Which side caused a failed anonymization."""

    CLIENT = "client"
    SERVER = "server"


@dataclass
class AnonymizationRequest:
    """A single anonymization call.

    Attributes:
        data: The record to anonymize.
        strategy: Strategy name, matched case-insensitively.
        preserve_format: Keep surface format of replaced values.
        seed: Optional seed for reproducible output.
    """

    data: Optional[Mapping[str, Any]]
    strategy: Optional[str]
    preserve_format: bool = True
    seed: Optional[int] = None


@dataclass
class AnonymizationResult:
    """Outcome of an anonymization call.

    Attributes:
        anonymized_data: The anonymized record, None on failure.
        strategy: Canonical strategy name on success; the requested name
            echoed back on failure.
        success: Whether anonymization succeeded.
        message: Human-readable, display-safe message.
        fields_processed: Number of top-level fields in the output.
        error_kind: CLIENT or SERVER for failures, None on success.
        timestamp: When the result was produced.
    """

    anonymized_data: Optional[Record]
    strategy: Optional[str]
    success: bool
    message: str
    fields_processed: int = 0
    error_kind: Optional[ErrorKind] = None
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def is_client_error(self) -> bool:
        return self.error_kind == ErrorKind.CLIENT


@dataclass
class BatchAnonymizationResult:
    """Outcome of anonymizing several named datasets.

    Failed datasets carry {"error": message} instead of data; siblings are
    still processed.
    """

    datasets: dict[str, Any]
    strategy: Optional[str]
    success: bool
    message: str
    total_fields_processed: int = 0
    failed: list[str] = field(default_factory=list)


class RecordAnonymizer:
    """Orchestrates record anonymization.

    Example:
        >>> anonymizer = RecordAnonymizer()
        >>> anonymizer.anonymize_map(
        ...     {"firstName": "John"}, "PSEUDONYMIZATION", preserve_format=True, seed=1
        ... )["firstName"][0].isupper()
        True
    """

    def anonymize_data(self, request: AnonymizationRequest) -> AnonymizationResult:
        """Anonymize a record, converting every failure into a failed result.

        Args:
            request: The record, strategy name and options.

        Returns:
            AnonymizationResult describing the outcome.
        """
        try:
            strategy_type = resolve_strategy_type(request.strategy)
        except UnknownStrategyError as e:
            logger.warning(
                "Rejected unknown anonymization strategy",
                extra={"event": "unknown_strategy", "strategy": request.strategy},
            )
            ANONYMIZATION_COUNT.labels(strategy="unknown", outcome="rejected").inc()
            return AnonymizationResult(
                anonymized_data=None,
                strategy=request.strategy,
                success=False,
                message=f"Anonymization failed: {e}",
                error_kind=ErrorKind.CLIENT,
            )

        start_time = time.perf_counter()
        try:
            anonymized = self.anonymize_map(
                request.data,
                strategy_type,
                request.preserve_format,
                request.seed,
            )
        except Exception as e:
            logger.exception(
                "Anonymization failed",
                extra={
                    "event": "anonymization_failed",
                    "strategy": strategy_type.value,
                    "error": str(e),
                },
            )
            ANONYMIZATION_COUNT.labels(strategy=strategy_type.value, outcome="error").inc()
            return AnonymizationResult(
                anonymized_data=None,
                strategy=request.strategy,
                success=False,
                message=f"Anonymization failed: {e}",
                error_kind=ErrorKind.SERVER,
            )
        finally:
            ANONYMIZATION_DURATION.observe(time.perf_counter() - start_time)

        fields_processed = len(anonymized)
        ANONYMIZATION_COUNT.labels(strategy=strategy_type.value, outcome="success").inc()
        FIELDS_PROCESSED.labels(strategy=strategy_type.value).inc(fields_processed)

        logger.debug(
            "Record anonymized",
            extra={
                "event": "record_anonymized",
                "strategy": strategy_type.value,
                "fields_processed": fields_processed,
                "preserve_format": request.preserve_format,
                "seeded": request.seed is not None,
            },
        )

        return AnonymizationResult(
            anonymized_data=anonymized,
            strategy=strategy_type.value,
            success=True,
            message=f"Data anonymized successfully using {strategy_type.description}",
            fields_processed=fields_processed,
        )

    def anonymize_map(
        self,
        data: Optional[Mapping[str, Any]],
        strategy: StrategyType | str,
        preserve_format: bool = True,
        seed: Optional[int] = None,
    ) -> Record:
        """Anonymize a record with the given strategy.

        Unlike anonymize_data(), errors propagate to the caller.

        Raises:
            UnknownStrategyError: If the strategy name is not known.
        """
        resolved = get_strategy(strategy)
        anonymized = RecordTraverser(resolved).anonymize_record(data, preserve_format, seed)

        if isinstance(resolved, PseudonymizationStrategy):
            PSEUDONYM_CACHE_SIZE.set(resolved.pseudonymizer.cache_size)

        return anonymized

    def anonymize_batch(
        self,
        datasets: Mapping[str, Any],
        strategy: Optional[str],
        preserve_format: bool = True,
        seed: Optional[int] = None,
    ) -> BatchAnonymizationResult:
        """Anonymize several named datasets independently.

        A failing dataset is reported in place without aborting the rest.
        """
        results: dict[str, Any] = {}
        failed: list[str] = []
        total_fields = 0

        for name, dataset in datasets.items():
            result = self.anonymize_data(
                AnonymizationRequest(
                    data=dataset,
                    strategy=strategy,
                    preserve_format=preserve_format,
                    seed=seed,
                )
            )
            if result.success:
                results[name] = result.anonymized_data
                total_fields += result.fields_processed
            else:
                results[name] = {"error": result.message}
                failed.append(name)

        success = not failed
        return BatchAnonymizationResult(
            datasets=results,
            strategy=strategy,
            success=success,
            message=(
                "Batch anonymization completed successfully"
                if success
                else "Batch anonymization completed with some errors"
            ),
            total_fields_processed=total_fields,
            failed=failed,
        )

    def available_strategies(self) -> list[StrategyType]:
        """Return all strategies that can be requested."""
        return list_strategies()

    def clear_cache(self) -> None:
        """Clear the shared pseudonym cache."""
        get_pseudonymizer().clear_cache()
        PSEUDONYM_CACHE_SIZE.set(0)

    @property
    def cache_size(self) -> int:
        return get_pseudonymizer().cache_size


# Global shared anonymizer
_anonymizer: Optional[RecordAnonymizer] = None
_anonymizer_lock = threading.Lock()


def get_anonymizer() -> RecordAnonymizer:
    """Get or create the shared RecordAnonymizer instance."""
    global _anonymizer

    if _anonymizer is None:
        with _anonymizer_lock:
            if _anonymizer is None:
                _anonymizer = RecordAnonymizer()

    return _anonymizer
