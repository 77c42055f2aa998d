"""
record-anonymizer: format-preserving record anonymization

Replaces sensitive values in nested records with pseudonyms, synthetic
data or redaction markers, keeping the record's structure intact.
"""

__version__ = "1.0.0"

from record_anonymizer.core.anonymizer import (
    AnonymizationRequest,
    AnonymizationResult,
    RecordAnonymizer,
)
from record_anonymizer.core.classifier import SemanticType
from record_anonymizer.core.strategies import StrategyType

__all__ = [
    "AnonymizationRequest",
    "AnonymizationResult",
    "RecordAnonymizer",
    "SemanticType",
    "StrategyType",
]
