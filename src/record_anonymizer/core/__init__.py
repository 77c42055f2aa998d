"""Core modules for record anonymization."""

from record_anonymizer.core.anonymizer import (
    AnonymizationRequest,
    AnonymizationResult,
    BatchAnonymizationResult,
    ErrorKind,
    RecordAnonymizer,
    get_anonymizer,
)
from record_anonymizer.core.classifier import SemanticType, classify_field
from record_anonymizer.core.exceptions import (
    AnonymizationError,
    CodecError,
    DigestUnavailableError,
    UnknownStrategyError,
    UnsupportedFormatError,
)
from record_anonymizer.core.pseudonymizer import PseudonymCache, Pseudonymizer
from record_anonymizer.core.strategies import (
    AnonymizationStrategy,
    MaskingStrategy,
    PseudonymizationStrategy,
    RedactStrategy,
    StrategyType,
    get_strategy,
    list_strategies,
    register_strategy,
)
from record_anonymizer.core.traversal import RecordTraverser

__all__ = [
    "AnonymizationRequest",
    "AnonymizationResult",
    "BatchAnonymizationResult",
    "ErrorKind",
    "RecordAnonymizer",
    "get_anonymizer",
    "SemanticType",
    "classify_field",
    # Errors
    "AnonymizationError",
    "CodecError",
    "DigestUnavailableError",
    "UnknownStrategyError",
    "UnsupportedFormatError",
    # Pseudonymization
    "PseudonymCache",
    "Pseudonymizer",
    # Strategies
    "AnonymizationStrategy",
    "MaskingStrategy",
    "PseudonymizationStrategy",
    "RedactStrategy",
    "StrategyType",
    "get_strategy",
    "list_strategies",
    "register_strategy",
    "RecordTraverser",
]
