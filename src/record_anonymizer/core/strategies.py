"""
Anonymization strategies for record fields.

This module provides the strategies a record can be anonymized with:
- pseudonymization: deterministic SHA-256 derived substitutes
- masking: realistic fake data from the synthetic generator
- redaction: fixed placeholder markers
- format_preserving_encryption: alias of pseudonymization

Strategies are resolved by name through a registry table; every strategy
works on a single scalar value plus its semantic type.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Optional

from record_anonymizer.core.classifier import SemanticType, classify_field
from record_anonymizer.core.exceptions import UnknownStrategyError
from record_anonymizer.core.pseudonymizer import Pseudonymizer
from record_anonymizer.core.synthetic.generator import (
    SyntheticDataGenerator,
    get_synthetic_generator,
)


class StrategyType(str, Enum):
    """Supported anonymization strategy types."""

    PSEUDONYMIZATION = "PSEUDONYMIZATION"
    MASKING = "MASKING"
    REDACTION = "REDACTION"
    FORMAT_PRESERVING_ENCRYPTION = "FORMAT_PRESERVING_ENCRYPTION"

    @property
    def description(self) -> str:
        return _STRATEGY_DESCRIPTIONS[self]


_STRATEGY_DESCRIPTIONS: dict[StrategyType, str] = {
    StrategyType.PSEUDONYMIZATION: "Consistent, reversible anonymization using SHA-256 hashing",
    StrategyType.MASKING: "Realistic fake data using the Faker library",
    StrategyType.REDACTION: "Complete removal of sensitive information",
    StrategyType.FORMAT_PRESERVING_ENCRYPTION: "Maintains original data format",
}


class AnonymizationStrategy(ABC):
    """Base class for anonymization strategies."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Get the strategy name."""

    @abstractmethod
    def anonymize(
        self,
        value: Any,
        semantic_type: SemanticType,
        preserve_format: bool,
        seed: Optional[int] = None,
    ) -> Any:
        """Anonymize a scalar value using this strategy.

        Args:
            value: The original value. None must be returned unchanged.
            semantic_type: Semantic category of the field.
            preserve_format: Whether to keep the value's surface format.
            seed: Optional seed for reproducible output.

        Returns:
            The anonymized value.
        """

    def anonymize_field(
        self,
        value: Any,
        field_name: Optional[str],
        preserve_format: bool,
        seed: Optional[int] = None,
    ) -> Any:
        """Classify the field by name, then anonymize its value."""
        return self.anonymize(value, classify_field(field_name), preserve_format, seed)


class PseudonymizationStrategy(AnonymizationStrategy):
    """Replace values with deterministic, digest-derived pseudonyms.

    Example: "John" -> "Qmxr" (same output for the same value, type and seed)
    """

    def __init__(self, pseudonymizer: Optional[Pseudonymizer] = None) -> None:
        self.pseudonymizer = pseudonymizer or Pseudonymizer()

    @property
    def name(self) -> str:
        return StrategyType.PSEUDONYMIZATION.value

    def anonymize(
        self,
        value: Any,
        semantic_type: SemanticType,
        preserve_format: bool,
        seed: Optional[int] = None,
    ) -> Any:
        return self.pseudonymizer.pseudonymize(value, semantic_type, preserve_format, seed)


class MaskingStrategy(AnonymizationStrategy):
    """Replace values with realistic synthetic data.

    Example: "john@corp.com" -> "kellyjames@corp.com" (with preserve_format)
    """

    def __init__(self, generator: Optional[SyntheticDataGenerator] = None) -> None:
        self._generator = generator  # Lazy initialization

    @property
    def name(self) -> str:
        return StrategyType.MASKING.value

    def _get_generator(self) -> SyntheticDataGenerator:
        if self._generator is None:
            self._generator = get_synthetic_generator()
        return self._generator

    def anonymize(
        self,
        value: Any,
        semantic_type: SemanticType,
        preserve_format: bool,
        seed: Optional[int] = None,
    ) -> Any:
        return self._get_generator().generate(value, semantic_type, preserve_format, seed)


class RedactStrategy(AnonymizationStrategy):
    """Replace values with fixed markers.

    The output depends only on the semantic type (and, for text, on
    whether the original is longer than ten characters), so redacting a
    redacted value gives the same marker.

    Example: "123-45-6789" -> "***REDACTED***"
    """

    REDACTED = "***REDACTED***"
    ADDRESS_REDACTED = "*** ADDRESS REDACTED ***"
    TEXT_REDACTED = "*** TEXT REDACTED ***"
    SHORT_REDACTED = "***"
    ID_REDACTED = "***ID***"
    SHORT_TEXT_LENGTH = 10

    @property
    def name(self) -> str:
        return StrategyType.REDACTION.value

    def anonymize(
        self,
        value: Any,
        semantic_type: SemanticType,
        preserve_format: bool,
        seed: Optional[int] = None,
    ) -> Any:
        if value is None:
            return None

        if semantic_type in (
            SemanticType.NAME,
            SemanticType.EMAIL,
            SemanticType.PHONE,
            SemanticType.SSN,
            SemanticType.CREDIT_CARD,
        ):
            return self.REDACTED
        if semantic_type == SemanticType.ADDRESS:
            return self.ADDRESS_REDACTED
        if semantic_type == SemanticType.TEXT:
            if len(str(value)) > self.SHORT_TEXT_LENGTH:
                return self.TEXT_REDACTED
            return self.SHORT_REDACTED
        if semantic_type == SemanticType.NUMBER:
            return "000" if preserve_format else 0
        if semantic_type == SemanticType.ID:
            return self.ID_REDACTED
        return self.SHORT_REDACTED


# Strategy registry
_pseudonymization = PseudonymizationStrategy()

_STRATEGIES: dict[StrategyType, AnonymizationStrategy] = {
    StrategyType.PSEUDONYMIZATION: _pseudonymization,
    StrategyType.MASKING: MaskingStrategy(),
    StrategyType.REDACTION: RedactStrategy(),
    # No separate cipher: FPE shares the pseudonymization instance and cache
    StrategyType.FORMAT_PRESERVING_ENCRYPTION: _pseudonymization,
}


def resolve_strategy_type(strategy_type: StrategyType | str | None) -> StrategyType:
    """Resolve a strategy name (case-insensitive) to its StrategyType.

    Raises:
        UnknownStrategyError: If the name is None or not a known strategy.
    """
    if isinstance(strategy_type, StrategyType):
        return strategy_type
    if strategy_type is None:
        raise UnknownStrategyError(None)
    if not isinstance(strategy_type, str):
        raise UnknownStrategyError(str(strategy_type))

    try:
        return StrategyType(strategy_type.strip().upper())
    except ValueError:
        raise UnknownStrategyError(strategy_type) from None


def get_strategy(strategy_type: StrategyType | str | None) -> AnonymizationStrategy:
    """Get a strategy instance by type or name.

    Args:
        strategy_type: The strategy type, or its name in any case.

    Returns:
        The registered strategy instance.

    Raises:
        UnknownStrategyError: If the strategy is not known.
    """
    resolved = resolve_strategy_type(strategy_type)
    if resolved not in _STRATEGIES:
        raise UnknownStrategyError(resolved.value)
    return _STRATEGIES[resolved]


def register_strategy(strategy_type: StrategyType, strategy: AnonymizationStrategy) -> None:
    """Register a strategy instance for a strategy type.

    Args:
        strategy_type: The strategy type identifier.
        strategy: The strategy instance to register.
    """
    _STRATEGIES[strategy_type] = strategy


def list_strategies() -> list[StrategyType]:
    """Return every available strategy type."""
    return list(StrategyType)


def get_pseudonymizer() -> Pseudonymizer:
    """Get the pseudonymizer behind the registered pseudonymization strategy."""
    strategy = _STRATEGIES[StrategyType.PSEUDONYMIZATION]
    if not isinstance(strategy, PseudonymizationStrategy):
        raise TypeError(
            f"Registered pseudonymization strategy is {type(strategy).__name__}"
        )
    return strategy.pseudonymizer
