"""
Exception hierarchy for the anonymization engine.

Errors raised here are caught at the orchestrator boundary and turned
into failed results; only DigestUnavailableError is fatal, since it is
raised while the pseudonymizer is being built.
"""

from typing import Optional


class AnonymizationError(Exception):
    """Base class for anonymization errors."""


class UnknownStrategyError(AnonymizationError, ValueError):
    """Raised when a strategy name does not match any known strategy.

    Attributes:
        strategy: The strategy name that was requested.
    """

    def __init__(self, strategy: Optional[str]) -> None:
        self.strategy = strategy
        if strategy is None:
            message = "Strategy cannot be null"
        else:
            message = f"Unknown anonymization strategy: {strategy}"
        super().__init__(message)


class DigestUnavailableError(AnonymizationError, RuntimeError):
    """Raised when the SHA-256 digest is missing from the runtime."""

    def __init__(self, algorithm: str = "sha256") -> None:
        self.algorithm = algorithm
        super().__init__(f"{algorithm.upper()} algorithm not available")


class CodecError(AnonymizationError):
    """Raised when a file payload cannot be parsed into records."""


class UnsupportedFormatError(AnonymizationError, ValueError):
    """Raised when no codec handles a file extension."""

    def __init__(self, extension: str, supported: list[str]) -> None:
        self.extension = extension
        self.supported = supported
        super().__init__(
            f"Unsupported file type: {extension}. "
            f"Supported types: {', '.join(supported)}"
        )
