"""
Record traversal.

Walks a nested record and rebuilds it with every scalar leaf replaced by
the strategy's output. A value is exactly one of: None, a nested record
(dict), a sequence (list) or a scalar leaf; None and the record's shape
survive unchanged.

Example:
    >>> traverser = RecordTraverser(get_strategy("REDACTION"))
    >>> traverser.anonymize_record({"ssn": "123-45-6789", "tags": [None]}, False)
    {'ssn': '***REDACTED***', 'tags': [None]}
"""

from collections.abc import Mapping
from typing import Any, Optional

from record_anonymizer.core.strategies import AnonymizationStrategy

Record = dict[str, Any]


class RecordTraverser:
    """Apply a strategy to every scalar leaf of a record.

    List elements are classified with the name of the field that holds
    the list, since they have no key of their own.

    Attributes:
        strategy: The strategy applied to leaves.
    """

    def __init__(self, strategy: AnonymizationStrategy) -> None:
        self.strategy = strategy

    def anonymize_record(
        self,
        record: Optional[Mapping[str, Any]],
        preserve_format: bool,
        seed: Optional[int] = None,
    ) -> Record:
        """Return a new record with every scalar leaf anonymized.

        Args:
            record: Input record; None or empty yields an empty dict.
            preserve_format: Passed through to the strategy.
            seed: Passed through to the strategy.

        Returns:
            A structurally identical record. The input is not mutated.
        """
        if not record:
            return {}

        return {
            field_name: self._anonymize_value(value, field_name, preserve_format, seed)
            for field_name, value in record.items()
        }

    def _anonymize_value(
        self,
        value: Any,
        field_name: str,
        preserve_format: bool,
        seed: Optional[int],
    ) -> Any:
        if value is None:
            return None
        if isinstance(value, Mapping):
            return self.anonymize_record(value, preserve_format, seed)
        if isinstance(value, list):
            return [
                self._anonymize_value(item, field_name, preserve_format, seed)
                for item in value
            ]
        return self.strategy.anonymize_field(value, field_name, preserve_format, seed)
